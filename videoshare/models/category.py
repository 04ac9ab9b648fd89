"""
Category model for grouping videos
"""

from dataclasses import dataclass

# Sentinel meaning "no filter"; never matched against video.category
ALL_CATEGORIES = "All"

DEFAULT_CATEGORIES = [
    ALL_CATEGORIES,
    "Travel",
    "Sports",
    "Education",
    "Technology",
    "Entertainment",
    "Music",
]


@dataclass
class Category:
    id: int
    name: str
