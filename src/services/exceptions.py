"""Errors raised by the service layer."""


class ServiceError(Exception):
    """Base class for errors with a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """An id did not resolve to a row."""

    def __init__(self, message: str, entity_id: int | None = None):
        super().__init__(message)
        self.entity_id = entity_id


class ConflictError(ServiceError):
    """A uniqueness or referential constraint would be violated."""

    def __init__(self, message: str, usage_count: int | None = None):
        super().__init__(message)
        self.usage_count = usage_count


class ValidationError(ServiceError):
    """Input was rejected before reaching the database."""


class StorageError(ServiceError):
    """The database failed for a reason other than a constraint."""
