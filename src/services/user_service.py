"""User service."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.user import User
from src.schemas.user import UserCreate, UserUpdate
from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import ConflictError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email address is already in use"


class UserService:
    """Service for user CRUD."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[User]:
        """Get all users, newest first."""
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def get(self, user_id: int) -> User:
        """Get a user by id."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found", entity_id=user_id)
        return user

    def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        """Check whether another user already has this email."""
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def create(self, data: UserCreate) -> User:
        """Create a user."""
        if self.email_exists(data.email):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user = User(name=data.name, email=data.email)
        self.db.add(user)
        self._commit_or_conflict()
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user_id: int, data: UserUpdate) -> User:
        """Replace a user's name and email."""
        user = self.get(user_id)
        if self.email_exists(data.email, exclude_id=user_id):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user.name = data.name
        user.email = data.email
        # Refreshed on every update, even when name and email are unchanged
        user.updated_at = func.now()
        self._commit_or_conflict()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user together with all of their attribute values."""
        user = self.get(user_id)

        try:
            removed = AttributeValueService(self.db).delete_all_for_user(user_id)
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Deleting user {user_id} failed: {e}")
            raise StorageError("Failed to delete user") from e
        logger.info(f"Deleted user {user_id} and {removed} attribute values")

    def _commit_or_conflict(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from None
