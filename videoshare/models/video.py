"""
Video model covering uploaded and embedded videos
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Video:
    id: int
    title: str
    uploader_id: int
    upload_date: datetime
    description: Optional[str] = None

    # Uploaded content
    file_name: Optional[str] = None
    file_path: Optional[str] = None

    # Linked content
    embed_url: Optional[str] = None
    is_embedded: bool = False

    thumbnail_path: Optional[str] = None
    category: Optional[str] = None
    views: int = 0
    duration: Optional[int] = None

    @property
    def has_file(self) -> bool:
        return not self.is_embedded and bool(self.file_path)


# Fields a patch may touch; identity, ownership, views and upload date are fixed
PATCHABLE_VIDEO_FIELDS = frozenset({
    "title",
    "description",
    "file_name",
    "file_path",
    "embed_url",
    "thumbnail_path",
    "category",
    "duration",
})
