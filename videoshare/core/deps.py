"""
Dependency functions for FastAPI endpoints
Session-backed authentication, authorization, and store access
"""

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from fastapi import Depends, Request

from videoshare.core.config import Settings
from videoshare.core.exceptions import AuthenticationError, PermissionDeniedError
from videoshare.models import User, Video
from videoshare.services.file_upload import FileUploadService
from videoshare.store import MemoryStore

SESSION_USER_KEY = "user_id"


def get_store(request: Request) -> MemoryStore:
    """Store constructed at startup and attached to the application"""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@dataclass
class RequestContext:
    """Per-request view of the session and the user attached to it"""
    store: MemoryStore
    session: MutableMapping[str, Any]
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def login(self, user: User) -> None:
        self.session.clear()
        self.session[SESSION_USER_KEY] = user.id
        self.user = user

    def logout(self) -> None:
        self.session.clear()
        self.user = None


def get_request_context(
    request: Request,
    store: MemoryStore = Depends(get_store)
) -> RequestContext:
    """
    Build the request context from the signed session cookie

    A session whose user id no longer resolves is treated as anonymous.
    """
    session = request.session
    user_id = session.get(SESSION_USER_KEY)
    user = store.get_user(user_id) if isinstance(user_id, int) else None
    return RequestContext(store=store, session=session, user=user)


async def get_current_user(
    context: RequestContext = Depends(get_request_context)
) -> User:
    """
    Get the user attached to the session

    Raises 401 if no user is logged in
    """
    if context.user is None:
        raise AuthenticationError()
    return context.user


async def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current user and verify they carry the admin flag

    Raises 403 if user is not an admin
    """
    if not current_user.is_admin:
        raise PermissionDeniedError()
    return current_user


def ensure_owner_or_admin(user: User, video: Video, operation: str) -> None:
    """Raise 403 unless the user uploaded the video or is an admin"""
    if not user.is_admin and video.uploader_id != user.id:
        raise PermissionDeniedError(f"Not authorized to {operation} this video")


def get_upload_service(request: Request) -> FileUploadService:
    return request.app.state.upload_service
