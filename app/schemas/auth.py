"""
Authentication schemas.
"""

from datetime import datetime
from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseSchema):
    """Registration request schema."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Minimum 8 characters")
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class Token(BaseSchema):
    """Access token response."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseSchema):
    """User response schema (public data)."""

    id: int
    email: EmailStr
    first_name: str | None
    last_name: str | None
    full_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
