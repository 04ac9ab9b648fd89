"""
Authentication API Routes
Session cookie login, logout, signup and password change
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from videoshare.core.deps import RequestContext, get_current_user, get_request_context
from videoshare.core.exceptions import (
    AuthenticationError,
    ConflictError,
    UserNotFoundError,
    ValidationFailedError,
)
from videoshare.core.validation import validate_payload
from videoshare.models import User
from videoshare.schemas import (
    LoginRequest,
    MeResponse,
    MessageResponse,
    PasswordChangeRequest,
    SignupRequest,
    UserSummary,
)

logger = structlog.get_logger()

router = APIRouter()


@router.post("/login", response_model=UserSummary)
async def login(
    payload: Optional[Dict[str, Any]] = Body(None),
    context: RequestContext = Depends(get_request_context)
):
    """Authenticate with username and password and start a session"""
    result = validate_payload(LoginRequest, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())
    credentials = result.value

    user = context.store.get_user_by_username(credentials.username)
    if user is None or user.password != credentials.password:
        logger.warning("Failed login attempt", username=credentials.username)
        raise AuthenticationError("Invalid username or password")

    context.login(user)
    logger.info("User logged in", user_id=user.id, username=user.username)
    return user


@router.post("/signup", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: Optional[Dict[str, Any]] = Body(None),
    context: RequestContext = Depends(get_request_context)
):
    """Register a regular (non-admin) account and log it in"""
    result = validate_payload(SignupRequest, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())
    data = result.value

    if context.store.get_user_by_username(data.username) is not None:
        raise ConflictError("Username already taken", field="username")

    user = context.store.create_user(username=data.username, password=data.password)
    context.login(user)
    logger.info("User registered", user_id=user.id, username=user.username)
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context)
):
    context.logout()
    logger.info("User logged out", user_id=current_user.id)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(context: RequestContext = Depends(get_request_context)):
    """
    Report the session's user

    Anonymous callers get 401 with ``{"authenticated": false}`` so the
    client can tell "not logged in" apart from other failures.
    """
    if not context.is_authenticated:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False}
        )
    return MeResponse(authenticated=True, user=UserSummary.model_validate(context.user))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context)
):
    result = validate_payload(PasswordChangeRequest, payload)
    if not result.ok:
        raise ValidationFailedError(result.error_dicts())
    data = result.value

    if current_user.password != data.current_password:
        logger.warning("Password change rejected", user_id=current_user.id)
        raise ValidationFailedError(
            [{"field": "currentPassword", "message": "Current password is incorrect"}],
            message="Current password is incorrect"
        )

    # Only possible if the account disappears after the session was resolved
    if context.store.update_user_password(current_user.id, data.new_password) is None:
        raise UserNotFoundError(current_user.id)

    logger.info("Password changed", user_id=current_user.id)
    return {"message": "Password changed successfully"}
