"""
Category Service - Clean Architecture Implementation.

Handles all category-related business logic.
Uses Repository for data access, not direct queries.

Usage:
    from rest_api.services.domain import CategoryService

    service = CategoryService(db)
    categories = service.list_categories(restaurant_id, sort_by="name")
    category = service.create(data, restaurant_id)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from rest_api.models import MenuCategory, MenuItem
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import CATEGORY_SORT_FIELDS, LifecycleState, SortOrder
from shared.utils.admin_schemas import CategoryOutput
from shared.utils.exceptions import EntityInUseError


class CategoryService(BaseCRUDService[MenuCategory, CategoryOutput]):
    """
    Service for menu category management.

    Business rules:
    - Names are unique per restaurant among non-deleted categories
    - Each output carries the number of non-deleted items
    - A category with non-deleted items cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuCategory,
            output_schema=CategoryOutput,
            entity_name="Category",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_categories(
        self,
        restaurant_id: str,
        *,
        status: str | None = None,
        sort_by: str = "display_order",
        sort_order: str = SortOrder.ASC,
        include_deleted: bool = False,
    ) -> list[CategoryOutput]:
        """List categories with item counts, filtered and sorted."""
        order_by = self._order_by(sort_by, sort_order, CATEGORY_SORT_FIELDS)

        if status is None:
            categories = self._repo.find_all(
                restaurant_id, include_deleted=include_deleted, order_by=order_by
            )
        else:
            criteria = [
                MenuCategory.restaurant_id == restaurant_id,
                MenuCategory.status == status,
            ]
            if not include_deleted:
                criteria.append(MenuCategory.lifecycle_state == LifecycleState.ACTIVE)
            categories = self._repo.find_where(*criteria, order_by=order_by)

        counts = self._item_counts([c.id for c in categories])
        return [self.to_output(c, item_count=counts.get(c.id, 0)) for c in categories]

    def count_items(self, category_id: int) -> int:
        """Number of non-deleted items in the category."""
        return self._item_counts([category_id]).get(category_id, 0)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: MenuCategory, item_count: int | None = None) -> CategoryOutput:
        output = CategoryOutput.model_validate(entity)
        output.item_count = self.count_items(entity.id) if item_count is None else item_count
        return output

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], restaurant_id: str) -> None:
        self._ensure_unique_name(restaurant_id, data["name"])

    def _validate_update(
        self, entity: MenuCategory, data: dict[str, Any], restaurant_id: str
    ) -> None:
        if "name" in data:
            self._ensure_unique_name(restaurant_id, data["name"], exclude_id=entity.id)

    def _validate_delete(self, entity: MenuCategory, restaurant_id: str) -> None:
        item_count = self.count_items(entity.id)
        if item_count > 0:
            raise EntityInUseError(
                "Category",
                f"Cannot delete category '{entity.name}': "
                f"it still contains {item_count} menu item(s)",
                category_id=entity.id,
                restaurant_id=restaurant_id,
            )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _item_counts(self, category_ids: Sequence[int]) -> dict[int, int]:
        """Non-deleted item counts for several categories in one query."""
        if not category_ids:
            return {}

        rows = self._db.execute(
            select(MenuItem.category_id, func.count(MenuItem.id))
            .where(
                MenuItem.category_id.in_(category_ids),
                MenuItem.lifecycle_state == LifecycleState.ACTIVE,
            )
            .group_by(MenuItem.category_id)
        ).all()
        return {category_id: count for category_id, count in rows}
