"""
Authentication schemas for request/response models
"""

from pydantic import Field, ValidationInfo, field_validator
from typing import Optional

from videoshare.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Schema for login request"""
    username: str = Field(..., min_length=3, description="Username must be at least 3 characters")
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")


class SignupRequest(LoginRequest):
    """Schema for user registration"""
    username: str = Field(..., min_length=3, max_length=50, description="Username must be 3-50 characters")


class PasswordChangeRequest(CamelModel):
    """Schema for password change; new and confirmed passwords must match"""
    current_password: str = Field(..., min_length=1, description="Current password is required")
    new_password: str = Field(..., min_length=6, description="New password must be at least 6 characters")
    confirm_password: str = Field(..., min_length=6, description="Confirm password must be at least 6 characters")

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        new_password = info.data.get("new_password")
        if new_password is not None and value != new_password:
            raise ValueError("Passwords don't match")
        return value


class UserSummary(CamelModel):
    """Schema for user response (without credentials)"""
    id: int
    username: str
    is_admin: bool = False


class MeResponse(CamelModel):
    authenticated: bool
    user: Optional[UserSummary] = None
