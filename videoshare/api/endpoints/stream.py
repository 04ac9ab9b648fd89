"""
Video streaming API Routes
Serves stored files with HTTP Range support; embedded videos return their link
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Header

from videoshare.core.config import Settings
from videoshare.core.deps import get_app_settings, get_store
from videoshare.core.exceptions import VideoNotFoundError
from videoshare.schemas import EmbedStreamResponse
from videoshare.services.streaming import build_stream_response
from videoshare.store import MemoryStore

router = APIRouter()


@router.get("/{video_id}", response_model=None)
async def stream_video(
    video_id: int,
    range_header: Optional[str] = Header(None, alias="Range"),
    store: MemoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    video = store.get_video(video_id)
    if video is None:
        raise VideoNotFoundError(video_id)

    if video.is_embedded:
        return EmbedStreamResponse(embed_url=video.embed_url or "").model_dump(by_alias=True)

    if not video.has_file:
        raise VideoNotFoundError(video_id)

    return await build_stream_response(
        Path(video.file_path),
        range_header,
        chunk_size=settings.STREAM_CHUNK_SIZE,
        content_type=settings.STREAM_CONTENT_TYPE
    )
