"""
Domain models held by the in-memory store
"""

from .user import User
from .video import Video, PATCHABLE_VIDEO_FIELDS
from .category import Category, ALL_CATEGORIES, DEFAULT_CATEGORIES
from .theme import ThemeSettings

__all__ = [
    "User",
    "Video",
    "PATCHABLE_VIDEO_FIELDS",
    "Category",
    "ALL_CATEGORIES",
    "DEFAULT_CATEGORIES",
    "ThemeSettings",
]
