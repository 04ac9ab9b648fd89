"""
Pydantic schemas for request/response models
"""

from .base import CamelModel, MessageResponse
from .auth import LoginRequest, SignupRequest, PasswordChangeRequest, UserSummary, MeResponse
from .category import CategoryCreate, CategoryResponse
from .theme import ThemeSettingsSchema
from .video import (
    VideoCreate,
    EmbedVideoCreate,
    VideoUpdate,
    VideoResponse,
    ViewsResponse,
    EmbedStreamResponse,
)
