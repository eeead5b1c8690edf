"""SQLAlchemy models."""

from src.models.attribute import AttributeDefinition
from src.models.user import User
from src.models.user_attribute_value import UserAttributeValue

__all__ = [
    "User",
    "AttributeDefinition",
    "UserAttributeValue",
]
