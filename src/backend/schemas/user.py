"""
User-related Pydantic schemas.
"""

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema with common fields."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")


class UserCreate(UserBase):
    """Schema for user registration."""

    password: str = Field(..., min_length=8, max_length=128)


class UserResponse(UserBase):
    """Schema for user responses (public-safe, never includes the password)."""

    id: int

    model_config = {"from_attributes": True}
