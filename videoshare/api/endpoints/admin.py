"""
Admin API Routes
Read-only listings for the admin dashboard
"""

from typing import List

from fastapi import APIRouter, Depends

from videoshare.core.deps import get_current_admin_user, get_store
from videoshare.models import User
from videoshare.schemas import UserSummary, VideoResponse
from videoshare.store import MemoryStore

router = APIRouter()


@router.get("/videos", response_model=List[VideoResponse])
async def list_all_videos(
    current_user: User = Depends(get_current_admin_user),
    store: MemoryStore = Depends(get_store)
):
    return store.list_videos()


@router.get("/users", response_model=List[UserSummary])
async def list_all_users(
    current_user: User = Depends(get_current_admin_user),
    store: MemoryStore = Depends(get_store)
):
    """All accounts, without passwords"""
    return store.list_users()
