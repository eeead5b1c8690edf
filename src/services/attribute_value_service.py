"""Storage operations for the user attribute value table."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user_attribute_value import UserAttributeValue
from src.services.exceptions import ConflictError

logger = logging.getLogger(__name__)


class AttributeValueService:
    """Reads and writes UserAttributeValue rows.

    Write methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> list[UserAttributeValue]:
        """Get every stored value for a user."""
        return (
            self.db.query(UserAttributeValue)
            .filter(UserAttributeValue.user_id == user_id)
            .order_by(UserAttributeValue.attribute_id)
            .all()
        )

    def delete_all_for_user(self, user_id: int) -> int:
        """Delete every value row for a user. Returns the number removed."""
        deleted = (
            self.db.query(UserAttributeValue)
            .filter(UserAttributeValue.user_id == user_id)
            .delete(synchronize_session=False)
        )
        logger.debug(f"Deleted {deleted} attribute values for user {user_id}")
        return deleted

    def insert(self, user_id: int, attribute_id: int, value: str) -> UserAttributeValue:
        """Insert one value row and flush it.

        Raises ConflictError if the user already has a value for the attribute.
        The session is left for the caller to roll back.
        """
        existing = (
            self.db.query(UserAttributeValue.id)
            .filter(
                UserAttributeValue.user_id == user_id,
                UserAttributeValue.attribute_id == attribute_id,
            )
            .first()
        )
        if existing:
            raise ConflictError(
                f"User {user_id} already has a value for attribute {attribute_id}"
            )

        row = UserAttributeValue(user_id=user_id, attribute_id=attribute_id, value=value)
        self.db.add(row)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Could not store value for attribute {attribute_id}: constraint violated"
            ) from e
        return row

    def count_for_attribute(self, attribute_id: int) -> int:
        """Count value rows referencing an attribute."""
        count = (
            self.db.query(func.count(UserAttributeValue.id))
            .filter(UserAttributeValue.attribute_id == attribute_id)
            .scalar()
        )
        return count or 0
