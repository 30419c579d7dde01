"""
Pydantic schemas for User-related operations.
"""

from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from ..models.user import User, UserRole
from .common import ApiModel


class UserCreate(ApiModel):
    """Schema for user creation."""
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, max_length=255, description="Account password")
    role: UserRole = Field(..., description="User role")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        """Reject usernames made only of whitespace."""
        if not v.strip():
            raise ValueError('Username must not be blank')
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        """Reject passwords made only of whitespace."""
        if not v.strip():
            raise ValueError('Password must not be blank')
        return v


class UserResponse(ApiModel):
    """Schema for user responses. The password is never included."""
    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)
