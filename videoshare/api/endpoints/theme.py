"""
Theme customization API Routes
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Body, Depends

from videoshare.core.deps import get_current_admin_user, get_store
from videoshare.core.exceptions import ValidationFailedError
from videoshare.core.validation import validate_payload
from videoshare.models import ThemeSettings, User
from videoshare.schemas import ThemeSettingsSchema
from videoshare.store import MemoryStore

logger = structlog.get_logger()

router = APIRouter()


def _validated_theme(payload: Optional[Dict[str, Any]]) -> ThemeSettingsSchema:
    result = validate_payload(ThemeSettingsSchema, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())
    return result.value


@router.get("", response_model=ThemeSettingsSchema)
async def get_theme(store: MemoryStore = Depends(get_store)):
    return store.get_theme()


@router.put("", response_model=ThemeSettingsSchema)
async def update_theme(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_admin_user),
    store: MemoryStore = Depends(get_store)
):
    """Replace the site theme (Admin only)"""
    theme = _validated_theme(payload)
    saved = store.update_theme(ThemeSettings(**theme.model_dump()))
    logger.info("Theme saved", user_id=current_user.id)
    return saved


@router.post("/preview", response_model=ThemeSettingsSchema)
async def preview_theme(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_admin_user)
):
    """Validate a theme and echo it back without saving"""
    return _validated_theme(payload)
