"""Authentication schemas."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from millops.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class RegisterRequest(BaseModel):
    """Self-service account creation."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: str = Field("Admin", min_length=1, max_length=100)
    profile_image_url: Optional[str] = None


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
