"""User attribute value model (the EAV value table)."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from src.database import Base
from src.models.mixins import TimestampMixin


class UserAttributeValue(Base, TimestampMixin):
    """One user's value for one attribute.

    Rows go away with their user (cascade) but block deletion of the
    attribute they reference (restrict).
    """

    __tablename__ = "user_attribute_values"
    __table_args__ = (
        UniqueConstraint("user_id", "attribute_id", name="uq_user_attribute_values_user_attribute"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    attribute_id = Column(
        Integer, ForeignKey("attributes.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    value = Column(String(500), nullable=False)
