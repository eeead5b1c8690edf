"""FastAPI dependencies for database-backed services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.attribute_service import AttributeService
from src.services.attribute_sync import AttributeSyncService
from src.services.attribute_value_service import AttributeValueService
from src.services.user_service import UserService


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_attribute_service(
    db: Annotated[Session, Depends(get_db)],
) -> AttributeService:
    """Get attribute service with dependencies."""
    return AttributeService(db)


def get_attribute_value_service(
    db: Annotated[Session, Depends(get_db)],
) -> AttributeValueService:
    """Get attribute value service with dependencies."""
    return AttributeValueService(db)


def get_attribute_sync_service(
    db: Annotated[Session, Depends(get_db)],
) -> AttributeSyncService:
    """Get attribute sync service with dependencies."""
    return AttributeSyncService(db)
