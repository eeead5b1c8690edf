"""Attribute definition API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_attribute_service
from src.schemas.attribute import AttributeCreate, AttributeResponse, AttributeUpdate
from src.services.attribute_service import AttributeService

router = APIRouter(prefix="/api/v1/attributes", tags=["attributes"])


@router.get("", response_model=list[AttributeResponse])
def get_attributes(
    service: Annotated[AttributeService, Depends(get_attribute_service)],
):
    """Get all attribute definitions ordered for display."""
    return service.list_all()


@router.get("/{attribute_id}", response_model=AttributeResponse)
def get_attribute(
    attribute_id: int,
    service: Annotated[AttributeService, Depends(get_attribute_service)],
):
    """Get a specific attribute definition."""
    return service.get(attribute_id)


@router.post("", response_model=AttributeResponse, status_code=status.HTTP_201_CREATED)
def create_attribute(
    attribute_data: AttributeCreate,
    service: Annotated[AttributeService, Depends(get_attribute_service)],
):
    """Create a new attribute definition."""
    return service.create(attribute_data)


@router.put("/{attribute_id}", response_model=AttributeResponse)
def update_attribute(
    attribute_id: int,
    attribute_data: AttributeUpdate,
    service: Annotated[AttributeService, Depends(get_attribute_service)],
):
    """Update an attribute definition."""
    return service.update(attribute_id, attribute_data)


@router.delete("/{attribute_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attribute(
    attribute_id: int,
    service: Annotated[AttributeService, Depends(get_attribute_service)],
):
    """Delete an attribute definition. Fails while any user has a value for it."""
    service.delete(attribute_id)
