"""
Menu item management endpoints.

Thin router that delegates to MenuItemService; the item's modifier
attachments go through ModifierGroupService.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    MenuItemOutput,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemStatusUpdate,
    AttachedModifierGroupOutput,
    AttachModifierGroups,
)
from shared.utils.schemas import (
    ApiResponse,
    PaginatedResponse,
    MessageResponse,
    ItemStatusValue,
    SortOrderValue,
)
from rest_api.routers._common import Pagination, get_pagination, get_restaurant_id
from rest_api.services.domain import MenuItemService, ModifierGroupService


router = APIRouter(tags=["admin-items"])


def _get_service(db: Session) -> MenuItemService:
    """Get MenuItemService instance."""
    return MenuItemService(db)


@router.get("/items", response_model=PaginatedResponse[MenuItemOutput])
def list_items(
    search: str | None = Query(default=None, max_length=Limits.ITEM_NAME_MAX),
    category_id: int | None = None,
    status_filter: ItemStatusValue | None = Query(default=None, alias="status"),
    sort_by: str = "created_at",
    sort_order: SortOrderValue = "desc",
    include_deleted: bool = False,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> PaginatedResponse[MenuItemOutput]:
    """
    List menu items for the admin table.

    Supports name search, category and status filters, sorting and
    page/limit pagination.
    """
    items, total = _get_service(db).list_items(
        restaurant_id,
        page=pagination.page,
        limit=pagination.limit,
        search=search,
        category_id=category_id,
        status=status_filter,
        sort_by=sort_by,
        sort_order=sort_order,
        include_deleted=include_deleted,
    )
    return PaginatedResponse(data=items, pagination=pagination.meta(total))


@router.post(
    "/items",
    response_model=ApiResponse[MenuItemOutput],
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[MenuItemOutput]:
    """Create a new menu item in an existing category."""
    item = _get_service(db).create(body.model_dump(), restaurant_id)
    return ApiResponse(data=item, message="Menu item created")


@router.get("/items/{item_id}", response_model=ApiResponse[MenuItemOutput])
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[MenuItemOutput]:
    """Get a menu item with its photos."""
    return ApiResponse(data=_get_service(db).get_by_id(item_id, restaurant_id))


@router.put("/items/{item_id}", response_model=ApiResponse[MenuItemOutput])
@router.patch("/items/{item_id}", response_model=ApiResponse[MenuItemOutput])
def update_item(
    item_id: int,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[MenuItemOutput]:
    """Update the provided fields of a menu item."""
    item = _get_service(db).update(item_id, body.model_dump(exclude_unset=True), restaurant_id)
    return ApiResponse(data=item, message="Menu item updated")


@router.patch("/items/{item_id}/status", response_model=ApiResponse[MenuItemOutput])
def update_item_status(
    item_id: int,
    body: MenuItemStatusUpdate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[MenuItemOutput]:
    """Change only the item availability."""
    item = _get_service(db).update_status(item_id, body.status, restaurant_id)
    return ApiResponse(data=item, message="Menu item status updated")


@router.delete("/items/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> MessageResponse:
    """Soft delete a menu item. The row is kept for order history."""
    _get_service(db).delete(item_id, restaurant_id)
    return MessageResponse(message="Menu item deleted")


# =============================================================================
# Modifier attachments
# =============================================================================


@router.get(
    "/items/{item_id}/modifiers",
    response_model=ApiResponse[list[AttachedModifierGroupOutput]],
)
def get_item_modifiers(
    item_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[AttachedModifierGroupOutput]]:
    """Modifier groups attached to the item, in the item's order."""
    groups = ModifierGroupService(db).get_item_groups(item_id, restaurant_id)
    return ApiResponse(data=groups)


@router.post(
    "/items/{item_id}/modifiers",
    response_model=ApiResponse[list[AttachedModifierGroupOutput]],
)
def attach_item_modifiers(
    item_id: int,
    body: AttachModifierGroups,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[AttachedModifierGroupOutput]]:
    """
    Replace the item's modifier groups with exactly the given ids.

    An empty list detaches every group.
    """
    groups = ModifierGroupService(db).attach_to_item(
        item_id,
        body.modifier_group_ids,
        body.display_orders,
        restaurant_id,
    )
    return ApiResponse(data=groups, message="Modifier groups updated")
