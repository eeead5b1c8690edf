"""Attribute definition model."""

from sqlalchemy import Boolean, Column, Integer, String

from src.database import Base
from src.models.enums import DataType
from src.models.mixins import CreatedAtMixin


class AttributeDefinition(Base, CreatedAtMixin):
    """Administrator-defined attribute that users can hold a value for."""

    __tablename__ = "attributes"

    id = Column(Integer, primary_key=True, index=True)
    attribute_name = Column(String(50), unique=True, nullable=False)
    data_type = Column(String(20), nullable=False, default=DataType.TEXT.value)
    display_order = Column(Integer, nullable=False, default=1, index=True)
    is_required = Column(Boolean, nullable=False, default=False)
