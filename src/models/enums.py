"""Enums for model fields."""

from enum import Enum


class DataType(str, Enum):
    """Declared type of an attribute's values.

    Informational only: stored values are always strings and are never
    checked against it.
    """

    TEXT = "Text"
    NUMBER = "Number"
    DATE = "Date"
