"""Replace-on-save synchronization of a user's attribute values."""

import logging
from collections.abc import Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)


def is_blank(value: str | None) -> bool:
    """Check whether a submitted value should be pruned instead of stored."""
    return value is None or not value.strip()


class AttributeSyncService:
    """Atomically replaces the full set of attribute values for a user."""

    def __init__(self, db: Session, value_service: AttributeValueService | None = None):
        self.db = db
        self.value_service = value_service or AttributeValueService(db)

    def save(self, user_id: int, values: Mapping[int, str | None]) -> int:
        """
        Replace all of a user's attribute values with the submitted ones.

        Existing rows are deleted, then one row is inserted per non-blank
        value. Blank values (empty or whitespace only) are skipped, so the
        user ends up with no row for that attribute. The whole operation
        commits once or rolls back entirely.

        Returns:
            Number of value rows written.

        Raises:
            ConflictError: a constraint was violated (duplicate pair, or an
                unknown user or attribute id).
            StorageError: any other database failure.
        """
        written = 0
        pruned = 0
        try:
            deleted = self.value_service.delete_all_for_user(user_id)

            for attribute_id, raw_value in values.items():
                if is_blank(raw_value):
                    pruned += 1
                    continue
                self.value_service.insert(user_id, attribute_id, raw_value)
                written += 1

            self.db.commit()
        except ConflictError as e:
            self.db.rollback()
            logger.warning(f"Attribute save for user {user_id} rolled back: {e.message}")
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Attribute save for user {user_id} rolled back: {e.orig}")
            raise ConflictError(
                f"Attribute values for user {user_id} violate a database constraint"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Attribute save for user {user_id} failed: {e}")
            raise StorageError("Failed to save attribute values") from e

        logger.info(
            f"Saved attributes for user {user_id}: "
            f"{deleted} replaced, {written} written, {pruned} pruned"
        )
        return written
