"""User attribute value schemas."""

from datetime import datetime

from pydantic import ConfigDict

from src.schemas.base import CamelModel


class AttributeValueResponse(CamelModel):
    """A stored attribute value for a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    attribute_id: int
    value: str
    created_at: datetime
    updated_at: datetime
