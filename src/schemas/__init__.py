"""Pydantic schemas for API requests and responses."""

from src.schemas.attribute import AttributeCreate, AttributeResponse, AttributeUpdate
from src.schemas.attribute_value import AttributeValueResponse
from src.schemas.base import MessageResponse
from src.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "AttributeCreate",
    "AttributeUpdate",
    "AttributeResponse",
    "AttributeValueResponse",
    "MessageResponse",
]
