"""Attribute definition schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from src.models.enums import DataType
from src.schemas.base import CamelModel


class AttributeCreate(CamelModel):
    """Create a new attribute definition."""

    attribute_name: str = Field(..., min_length=1, max_length=50)
    data_type: DataType = DataType.TEXT
    display_order: int = Field(1, ge=1, le=999)
    is_required: bool = False


class AttributeUpdate(AttributeCreate):
    """Replace an attribute definition."""


class AttributeResponse(CamelModel):
    """Attribute definition response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    attribute_name: str
    data_type: DataType
    display_order: int
    is_required: bool
    created_at: datetime
