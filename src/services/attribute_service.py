"""Attribute catalog service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.attribute import AttributeDefinition
from src.models.enums import DataType
from src.schemas.attribute import AttributeCreate, AttributeUpdate
from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

# Catalog a fresh install starts with
DEFAULT_ATTRIBUTES = [
    {"attribute_name": "Age", "data_type": DataType.NUMBER, "display_order": 1, "is_required": False},
    {"attribute_name": "Department", "data_type": DataType.TEXT, "display_order": 2, "is_required": True},
    {"attribute_name": "Position", "data_type": DataType.TEXT, "display_order": 3, "is_required": False},
    {"attribute_name": "Hire Date", "data_type": DataType.DATE, "display_order": 4, "is_required": True},
]


class AttributeService:
    """Service for attribute definition CRUD."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[AttributeDefinition]:
        """Get all attribute definitions in display order."""
        return (
            self.db.query(AttributeDefinition)
            .order_by(AttributeDefinition.display_order, AttributeDefinition.id)
            .all()
        )

    def get(self, attribute_id: int) -> AttributeDefinition:
        """Get an attribute definition by id."""
        attribute = (
            self.db.query(AttributeDefinition).filter(AttributeDefinition.id == attribute_id).first()
        )
        if not attribute:
            raise NotFoundError("Attribute not found", entity_id=attribute_id)
        return attribute

    def name_exists(self, attribute_name: str, exclude_id: int | None = None) -> bool:
        """Check whether another attribute already uses this name."""
        query = self.db.query(AttributeDefinition.id).filter(
            AttributeDefinition.attribute_name == attribute_name
        )
        if exclude_id is not None:
            query = query.filter(AttributeDefinition.id != exclude_id)
        return query.first() is not None

    def create(self, data: AttributeCreate) -> AttributeDefinition:
        """Create an attribute definition."""
        if self.name_exists(data.attribute_name):
            raise ConflictError("An attribute with the same name already exists")

        attribute = AttributeDefinition(
            attribute_name=data.attribute_name,
            data_type=DataType(data.data_type).value,
            display_order=data.display_order,
            is_required=data.is_required,
        )
        self.db.add(attribute)
        self._commit_or_conflict("An attribute with the same name already exists")
        self.db.refresh(attribute)
        logger.info(f"Created attribute {attribute.id} '{attribute.attribute_name}'")
        return attribute

    def update(self, attribute_id: int, data: AttributeUpdate) -> AttributeDefinition:
        """Replace an attribute definition's fields."""
        attribute = self.get(attribute_id)
        if self.name_exists(data.attribute_name, exclude_id=attribute_id):
            raise ConflictError("An attribute with the same name already exists")

        attribute.attribute_name = data.attribute_name
        attribute.data_type = DataType(data.data_type).value
        attribute.display_order = data.display_order
        attribute.is_required = data.is_required
        self._commit_or_conflict("An attribute with the same name already exists")
        self.db.refresh(attribute)
        return attribute

    def usage_count(self, attribute_id: int) -> int:
        """Count the user values that reference an attribute."""
        return AttributeValueService(self.db).count_for_attribute(attribute_id)

    def delete(self, attribute_id: int) -> None:
        """Delete an attribute definition. Refused while any user has a value for it."""
        attribute = self.get(attribute_id)

        usage_count = self.usage_count(attribute_id)
        if usage_count > 0:
            raise ConflictError(
                "This attribute is in use and cannot be deleted", usage_count=usage_count
            )

        self.db.delete(attribute)
        # A value written between the count and the commit trips the RESTRICT key
        self._commit_or_conflict("This attribute is in use and cannot be deleted")
        logger.info(f"Deleted attribute {attribute_id}")

    def seed_defaults(self) -> int:
        """Insert the default catalog if no attributes exist yet."""
        if self.db.query(AttributeDefinition.id).first() is not None:
            return 0
        for entry in DEFAULT_ATTRIBUTES:
            self.db.add(AttributeDefinition(**{**entry, "data_type": entry["data_type"].value}))
        self.db.commit()
        logger.info(f"Seeded {len(DEFAULT_ATTRIBUTES)} default attributes")
        return len(DEFAULT_ATTRIBUTES)

    def _commit_or_conflict(self, message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(message) from None
