"""
Menu Item Service - Clean Architecture Implementation.

Handles menu item business logic: category references, name uniqueness,
filtered/paginated listing and display-ready outputs.

Usage:
    from rest_api.services.domain import MenuItemService

    service = MenuItemService(db)
    items, total = service.list_items(restaurant_id, page=1, limit=10, search="burger")
    item = service.create(data, restaurant_id)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from rest_api.models import MenuCategory, MenuItem
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.crud.repository import RestaurantRepository
from shared.config.constants import ITEM_SORT_FIELDS, LifecycleState, SortOrder
from shared.utils.admin_schemas import MenuItemOutput, PhotoOutput
from shared.utils.exceptions import ValidationError
from shared.utils.formatting import format_price
from shared.utils.validators import escape_like_pattern


class MenuItemService(BaseCRUDService[MenuItem, MenuItemOutput]):
    """
    Service for menu item management.

    Business rules:
    - An item must point to a non-deleted category of the same restaurant
    - Names are unique per restaurant among non-deleted items
    - Deleting is always allowed and always soft
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuItem,
            output_schema=MenuItemOutput,
            entity_name="Menu item",
            not_found_code="MENU_ITEM_NOT_FOUND",
        )
        self._categories = RestaurantRepository(MenuCategory, db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_items(
        self,
        restaurant_id: str,
        *,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        category_id: int | None = None,
        status: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = SortOrder.DESC,
        include_deleted: bool = False,
    ) -> tuple[list[MenuItemOutput], int]:
        """
        List items for the admin table.

        Returns:
            Tuple of (items for the requested page, total matching items).
        """
        order_by = self._order_by(sort_by, sort_order, ITEM_SORT_FIELDS)

        criteria: list[Any] = [MenuItem.restaurant_id == restaurant_id]
        if not include_deleted:
            criteria.append(MenuItem.lifecycle_state == LifecycleState.ACTIVE)
        if search:
            pattern = f"%{escape_like_pattern(search.strip())}%"
            criteria.append(MenuItem.name.ilike(pattern, escape="\\"))
        if category_id is not None:
            criteria.append(MenuItem.category_id == category_id)
        if status is not None:
            criteria.append(MenuItem.status == status)

        total = self._db.scalar(
            select(func.count()).select_from(MenuItem).where(*criteria)
        ) or 0

        items = self._db.scalars(
            select(MenuItem)
            .where(*criteria)
            .options(*self._load_options())
            .order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()

        return [self.to_output(item) for item in items], total

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: MenuItem) -> MenuItemOutput:
        """Build the admin view with category name, formatted price and photos."""
        primary = entity.primary_photo
        return MenuItemOutput(
            id=entity.id,
            restaurant_id=entity.restaurant_id,
            category_id=entity.category_id,
            category_name=entity.category.name if entity.category else None,
            name=entity.name,
            description=entity.description,
            price=float(entity.price),
            price_formatted=format_price(entity.price),
            prep_time_minutes=entity.prep_time_minutes,
            status=entity.status,
            is_chef_recommended=entity.is_chef_recommended,
            primary_photo_url=primary.url if primary else None,
            photos=[PhotoOutput.model_validate(p) for p in entity.photos],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _load_options(self) -> list[Any]:
        return [selectinload(MenuItem.category), selectinload(MenuItem.photos)]

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], restaurant_id: str) -> None:
        self._ensure_category(data["category_id"], restaurant_id)
        self._ensure_unique_name(restaurant_id, data["name"])

    def _validate_update(
        self, entity: MenuItem, data: dict[str, Any], restaurant_id: str
    ) -> None:
        category_id = data.get("category_id")
        if category_id is not None and category_id != entity.category_id:
            self._ensure_category(category_id, restaurant_id)
        if "name" in data:
            self._ensure_unique_name(restaurant_id, data["name"], exclude_id=entity.id)

    def _ensure_category(self, category_id: int, restaurant_id: str) -> None:
        """
        Raises:
            ValidationError: If the category is missing, deleted or foreign.
        """
        if not self._categories.exists(category_id, restaurant_id):
            raise ValidationError(
                f"Category with id {category_id} not found",
                code="CATEGORY_NOT_FOUND",
                field="category_id",
                restaurant_id=restaurant_id,
            )
