"""
Menu category management endpoints.

Thin router that delegates to CategoryService.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    CategoryOutput,
    CategoryCreate,
    CategoryUpdate,
    CategoryStatusUpdate,
)
from shared.utils.schemas import (
    ApiResponse,
    MessageResponse,
    CategoryStatusValue,
    SortOrderValue,
)
from rest_api.routers._common import get_restaurant_id
from rest_api.services.domain import CategoryService


router = APIRouter(tags=["admin-categories"])


def _get_service(db: Session) -> CategoryService:
    """Get CategoryService instance."""
    return CategoryService(db)


@router.get("/categories", response_model=ApiResponse[list[CategoryOutput]])
def list_categories(
    status_filter: CategoryStatusValue | None = Query(default=None, alias="status"),
    sort_by: str = "display_order",
    sort_order: SortOrderValue = "asc",
    include_deleted: bool = False,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[CategoryOutput]]:
    """List categories with their item counts."""
    categories = _get_service(db).list_categories(
        restaurant_id,
        status=status_filter,
        sort_by=sort_by,
        sort_order=sort_order,
        include_deleted=include_deleted,
    )
    return ApiResponse(data=categories)


@router.post(
    "/categories",
    response_model=ApiResponse[CategoryOutput],
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[CategoryOutput]:
    """Create a new category."""
    category = _get_service(db).create(body.model_dump(), restaurant_id)
    return ApiResponse(data=category, message="Category created")


@router.get("/categories/{category_id}", response_model=ApiResponse[CategoryOutput])
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[CategoryOutput]:
    """Get a specific category."""
    return ApiResponse(data=_get_service(db).get_by_id(category_id, restaurant_id))


@router.put("/categories/{category_id}", response_model=ApiResponse[CategoryOutput])
@router.patch("/categories/{category_id}", response_model=ApiResponse[CategoryOutput])
def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[CategoryOutput]:
    """Update the provided fields of a category."""
    category = _get_service(db).update(
        category_id, body.model_dump(exclude_unset=True), restaurant_id
    )
    return ApiResponse(data=category, message="Category updated")


@router.patch("/categories/{category_id}/status", response_model=ApiResponse[CategoryOutput])
def update_category_status(
    category_id: int,
    body: CategoryStatusUpdate,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[CategoryOutput]:
    """Change only the category status."""
    category = _get_service(db).update_status(category_id, body.status, restaurant_id)
    return ApiResponse(data=category, message="Category status updated")


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_restaurant_id),
) -> MessageResponse:
    """Soft delete a category that no longer holds items."""
    _get_service(db).delete(category_id, restaurant_id)
    return MessageResponse(message="Category deleted")
