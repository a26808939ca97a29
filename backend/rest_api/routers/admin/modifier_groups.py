"""
Modifier group management endpoints.

Thin router that delegates to ModifierGroupService.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    ModifierGroupOutput,
    ModifierGroupCreate,
    ModifierGroupUpdate,
    ModifierGroupBulkSave,
)
from shared.utils.schemas import ApiResponse, MessageResponse
from rest_api.routers._common import get_restaurant_id
from rest_api.services.domain import ModifierGroupService


router = APIRouter(tags=["admin-modifier-groups"])


def _get_service(db: Session) -> ModifierGroupService:
    """Get ModifierGroupService instance."""
    return ModifierGroupService(db)


@router.get("/modifier-groups", response_model=ApiResponse[list[ModifierGroupOutput]])
def list_modifier_groups(
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[ModifierGroupOutput]]:
    """List modifier groups with their options."""
    return ApiResponse(data=_get_service(db).list_groups(restaurant_id))


@router.post(
    "/modifier-groups",
    response_model=ApiResponse[ModifierGroupOutput],
    status_code=status.HTTP_201_CREATED,
)
def create_modifier_group(
    body: ModifierGroupCreate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[ModifierGroupOutput]:
    """Create a modifier group together with its options."""
    group = _get_service(db).create(body.model_dump(), restaurant_id)
    return ApiResponse(data=group, message="Modifier group created")


# Registered before /{group_id} so "bulk" is never parsed as an id
@router.post("/modifier-groups/bulk", response_model=ApiResponse[list[ModifierGroupOutput]])
def bulk_save_modifier_groups(
    body: ModifierGroupBulkSave,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[ModifierGroupOutput]]:
    """
    Save the complete list of modifier groups in one transaction.

    Groups left out of the list are deleted; entries without a persisted
    id are created. Nothing changes if any group to delete is still in use.
    """
    groups = _get_service(db).bulk_save(body.groups, restaurant_id)
    return ApiResponse(data=groups, message="Modifier groups saved")


@router.get("/modifier-groups/{group_id}", response_model=ApiResponse[ModifierGroupOutput])
def get_modifier_group(
    group_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[ModifierGroupOutput]:
    """Get a modifier group with its options."""
    return ApiResponse(data=_get_service(db).get_by_id(group_id, restaurant_id))


@router.put("/modifier-groups/{group_id}", response_model=ApiResponse[ModifierGroupOutput])
def update_modifier_group(
    group_id: int,
    body: ModifierGroupUpdate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[ModifierGroupOutput]:
    """Update a modifier group; a provided options list replaces all options."""
    group = _get_service(db).update(group_id, body.model_dump(exclude_unset=True), restaurant_id)
    return ApiResponse(data=group, message="Modifier group updated")


@router.delete("/modifier-groups/{group_id}", response_model=MessageResponse)
def delete_modifier_group(
    group_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> MessageResponse:
    """Soft delete a modifier group that is not attached to any item."""
    _get_service(db).delete(group_id, restaurant_id)
    return MessageResponse(message="Modifier group deleted")
