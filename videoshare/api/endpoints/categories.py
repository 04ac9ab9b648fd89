"""
Category API Routes
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Body, Depends, status

from videoshare.core.deps import get_current_admin_user, get_store
from videoshare.core.exceptions import ConflictError, ValidationFailedError
from videoshare.core.validation import validate_payload
from videoshare.models import User
from videoshare.schemas import CategoryCreate, CategoryResponse
from videoshare.store import MemoryStore

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def get_categories(store: MemoryStore = Depends(get_store)):
    """Get all categories, including the "All" sentinel"""
    return store.list_categories()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_admin_user),
    store: MemoryStore = Depends(get_store)
):
    """Create new category (Admin only)"""
    result = validate_payload(CategoryCreate, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())
    name = result.value.name

    if store.get_category_by_name(name) is not None:
        raise ConflictError("Category already exists", field="name")

    category = store.create_category(name)
    logger.info("Category created", category_id=category.id, name=name, user_id=current_user.id)
    return category
