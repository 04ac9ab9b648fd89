"""
Video schemas for request/response models
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from videoshare.schemas.base import CamelModel

_http_url = TypeAdapter(HttpUrl)


def _require_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


def _require_absolute_url(value: str) -> str:
    # Validated as http(s) but stored exactly as supplied
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Please enter a valid URL")
    return value


class VideoBase(CamelModel):
    """Metadata shared by uploaded and embedded videos"""
    title: str = Field(..., max_length=300, description="Video title")
    description: Optional[str] = Field(None, description="Video description")
    category: Optional[str] = Field(None, max_length=50, description="Category name")
    thumbnail_path: Optional[str] = Field(None, max_length=500, description="Thumbnail path or URL")
    duration: Optional[int] = Field(None, ge=0, description="Duration in seconds")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _require_title(value)


class VideoCreate(VideoBase):
    """Schema for the videoData field sent alongside an uploaded file"""
    pass


class EmbedVideoCreate(VideoBase):
    """Schema for registering a video hosted elsewhere"""
    embed_url: str = Field(..., max_length=2000, description="Absolute URL of the hosted video")
    is_embedded: Optional[Literal[True]] = None

    @field_validator("embed_url")
    @classmethod
    def embed_url_is_absolute(cls, value: str) -> str:
        return _require_absolute_url(value)


class VideoUpdate(CamelModel):
    """Schema for patching a video; only supplied fields change"""
    title: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    thumbnail_path: Optional[str] = Field(None, max_length=500)
    duration: Optional[int] = Field(None, ge=0)
    embed_url: Optional[str] = Field(None, max_length=2000)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> str:
        # Only reached when the client sends the key; null is not a title
        if value is None:
            raise ValueError("Title is required")
        return _require_title(value)

    @field_validator("embed_url")
    @classmethod
    def embed_url_is_absolute(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Please enter a valid URL")
        return _require_absolute_url(value)


class VideoResponse(CamelModel):
    """Schema for video response"""
    id: int
    title: str
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    embed_url: Optional[str] = None
    is_embedded: bool = False
    thumbnail_path: Optional[str] = None
    category: Optional[str] = None
    uploader_id: int
    views: int
    upload_date: datetime
    duration: Optional[int] = None


class ViewsResponse(CamelModel):
    views: int


class EmbedStreamResponse(CamelModel):
    embed_url: str
    is_embedded: bool = True
