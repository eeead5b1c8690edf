"""User schemas."""

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Create a new user."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=100)


class UserUpdate(UserCreate):
    """Replace a user's name and email."""


class UserResponse(CamelModel):
    """User response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
