"""
Video API Routes
Listing, upload (file or embed link), metadata edits, deletion and view counts
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile, status
from starlette.concurrency import run_in_threadpool

from videoshare.core.deps import (
    ensure_owner_or_admin,
    get_current_user,
    get_store,
    get_upload_service,
)
from videoshare.core.exceptions import StorageError, ValidationFailedError, VideoNotFoundError
from videoshare.core.validation import validate_json, validate_payload
from videoshare.models import User, Video
from videoshare.schemas import (
    EmbedVideoCreate,
    MessageResponse,
    VideoCreate,
    VideoResponse,
    VideoUpdate,
    ViewsResponse,
)
from videoshare.services.file_upload import FileUploadService
from videoshare.store import MemoryStore

logger = structlog.get_logger()

router = APIRouter()


def _get_video_or_404(store: MemoryStore, video_id: int) -> Video:
    video = store.get_video(video_id)
    if video is None:
        raise VideoNotFoundError(video_id)
    return video


@router.get("", response_model=List[VideoResponse])
async def get_videos(
    category: Optional[str] = Query(None, description="Filter by category name; 'All' disables the filter"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or description"),
    store: MemoryStore = Depends(get_store)
):
    """
    Get videos, newest first

    A non-empty search takes precedence over the category filter.
    """
    if search:
        return store.search_videos(search)
    if category:
        return store.list_videos_by_category(category)
    return store.list_videos()


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, store: MemoryStore = Depends(get_store)):
    return _get_video_or_404(store, video_id)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def upload_video(
    file: Optional[UploadFile] = File(None, description="Video file (video/* only)"),
    video_data: Optional[str] = Form(None, alias="videoData", description="Video metadata as JSON"),
    current_user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
    upload_service: FileUploadService = Depends(get_upload_service)
):
    """
    Upload a video file with its metadata

    The file type is checked before anything is written. If the metadata
    turns out to be invalid the stored file is removed again.
    """
    stored = await upload_service.save_video(file)

    result = validate_json(VideoCreate, video_data, field_name="videoData")
    if not result.ok:
        await run_in_threadpool(upload_service.delete_file, stored.file_path)
        raise ValidationFailedError(result.error_dicts())
    metadata = result.value

    fields = metadata.model_dump()
    if fields["duration"] is None:
        fields["duration"] = stored.duration

    video = store.create_video(
        **fields,
        file_name=stored.original_filename,
        file_path=stored.file_path,
        is_embedded=False,
        uploader_id=current_user.id
    )

    logger.info(
        "Video created",
        video_id=video.id,
        user_id=current_user.id,
        file_path=stored.file_path,
        file_size=stored.file_size
    )
    return video


@router.post("/embed", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def embed_video(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store)
):
    """Register a video hosted elsewhere by its URL"""
    result = validate_payload(EmbedVideoCreate, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())

    fields = result.value.model_dump(exclude={"is_embedded"})
    video = store.create_video(**fields, is_embedded=True, uploader_id=current_user.id)

    logger.info("Embedded video created", video_id=video.id, user_id=current_user.id, embed_url=video.embed_url)
    return video


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store)
):
    """Update video metadata (uploader or admin)"""
    video = _get_video_or_404(store, video_id)
    ensure_owner_or_admin(current_user, video, "update")

    result = validate_payload(VideoUpdate, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())

    patch = result.value.model_dump(exclude_unset=True)
    if "embed_url" in patch and not video.is_embedded:
        raise ValidationFailedError(
            [{"field": "embedUrl", "message": "Uploaded videos cannot be given an embed URL"}]
        )

    updated = store.update_video(video_id, patch)
    if updated is None:
        raise VideoNotFoundError(video_id)

    logger.info("Video updated", video_id=video_id, user_id=current_user.id, fields=sorted(patch))
    return updated


@router.delete("/{video_id}", response_model=MessageResponse)
async def delete_video(
    video_id: int,
    current_user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
    upload_service: FileUploadService = Depends(get_upload_service)
):
    """
    Delete a video and its backing file (uploader or admin)

    The record goes first, then the file. A failure between the two leaves
    an orphaned file on disk which is logged but not cleaned up.
    """
    video = _get_video_or_404(store, video_id)
    ensure_owner_or_admin(current_user, video, "delete")

    if not store.delete_video(video_id):
        raise VideoNotFoundError(video_id)

    if video.has_file:
        try:
            await run_in_threadpool(upload_service.delete_file, video.file_path)
        except StorageError:
            logger.error(
                "Video record deleted but file removal failed; file orphaned",
                video_id=video_id,
                file_path=video.file_path
            )
            raise

    logger.info("Video deleted", video_id=video_id, user_id=current_user.id)
    return {"message": "Video deleted successfully"}


@router.post("/{video_id}/views", response_model=ViewsResponse)
async def increment_views(video_id: int, store: MemoryStore = Depends(get_store)):
    video = store.increment_views(video_id)
    if video is None:
        raise VideoNotFoundError(video_id)
    return {"views": video.views}
