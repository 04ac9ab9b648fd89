"""
User API Routes
"""

from fastapi import APIRouter, Depends

from videoshare.core.deps import get_store
from videoshare.core.exceptions import UserNotFoundError
from videoshare.schemas import UserSummary
from videoshare.store import MemoryStore

router = APIRouter()


@router.get("/{user_id}", response_model=UserSummary)
async def get_user(user_id: int, store: MemoryStore = Depends(get_store)):
    """Public profile of a user (never includes credentials)"""
    user = store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user
