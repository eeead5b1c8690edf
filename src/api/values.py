"""User attribute value API endpoints."""

import re
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_attribute_sync_service,
    get_attribute_value_service,
    get_user_service,
)
from src.schemas.attribute_value import AttributeValueResponse
from src.schemas.base import MessageResponse
from src.services.attribute_sync import AttributeSyncService
from src.services.attribute_value_service import AttributeValueService
from src.services.exceptions import ConflictError, NotFoundError, ValidationError
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/values", tags=["values"])

MAX_VALUE_LENGTH = 500

# Canonical decimal form only, so distinct keys never map to the same id
ATTRIBUTE_ID_PATTERN = re.compile(r"-?[1-9][0-9]*|0")


def parse_submitted_values(payload: dict[str, str | None]) -> dict[int, str | None]:
    """Convert string-encoded attribute ids to ints and check value lengths."""
    values: dict[int, str | None] = {}
    for key, value in payload.items():
        if not ATTRIBUTE_ID_PATTERN.fullmatch(key):
            raise ValidationError(f"Attribute id '{key}' is not an integer")
        attribute_id = int(key)
        if value is not None and len(value) > MAX_VALUE_LENGTH:
            raise ValidationError(
                f"Value for attribute {attribute_id} exceeds {MAX_VALUE_LENGTH} characters"
            )
        values[attribute_id] = value
    return values


@router.get("", response_model=list[AttributeValueResponse])
def get_values(
    user_id: Annotated[int, Query(alias="userId")],
    service: Annotated[AttributeValueService, Depends(get_attribute_value_service)],
):
    """Get all attribute values stored for a user."""
    return service.get_by_user(user_id)


@router.post(
    "",
    response_model=MessageResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": MessageResponse}},
)
def save_values(
    user_id: Annotated[int, Query(alias="userId")],
    payload: Annotated[dict[str, str | None], Body()],
    user_service: Annotated[UserService, Depends(get_user_service)],
    sync_service: Annotated[AttributeSyncService, Depends(get_attribute_sync_service)],
):
    """Replace all of a user's attribute values with the submitted map.

    Blank values are dropped rather than stored.
    """
    try:
        values = parse_submitted_values(payload)
        user_service.get(user_id)
        sync_service.save(user_id, values)
    except (ValidationError, NotFoundError, ConflictError) as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": e.message},
        )

    return MessageResponse(message="Attribute values saved")
