"""
Guest menu service.

Builds the public, read-only menu a diner sees:
- Only active, non-deleted categories
- Only available, non-deleted items of those categories
- Only active, non-deleted modifier groups on each item

Items are grouped under their categories and empty categories are left
out. All relations are eager-loaded, so the menu costs a fixed number of
queries regardless of its size.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import MenuCategory, MenuItem, MenuItemModifierGroup, ModifierGroup
from rest_api.services.crud import filter_active
from shared.config.constants import (
    GUEST_MENU_SORT_FIELDS,
    CategoryStatus,
    ItemStatus,
    LifecycleState,
    ModifierGroupStatus,
    SortOrder,
    UNCATEGORIZED_LABEL,
)
from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError
from shared.utils.formatting import format_price
from shared.utils.schemas import (
    GuestMenu,
    GuestMenuCategory,
    GuestMenuItem,
    GuestModifierGroup,
    GuestModifierOption,
)
from shared.utils.validators import escape_like_pattern

logger = get_logger(__name__)


class GuestMenuService:
    """Read-only menu assembly for guests."""

    def __init__(self, db: Session):
        self._db = db

    def get_menu(
        self,
        restaurant_id: str,
        restaurant_name: str,
        *,
        search: str | None = None,
        category_id: int | None = None,
        is_chef_recommended: bool = False,
        sort_by: str = "name",
        sort_order: str = SortOrder.ASC,
    ) -> GuestMenu:
        """
        Build the guest menu for a restaurant.

        is_chef_recommended only narrows when true; false shows every dish.

        Raises:
            ValidationError: If sort_by or sort_order is not allowed.
        """
        order_by = self._order_by(sort_by, sort_order)

        categories = self._db.scalars(
            filter_active(select(MenuCategory), MenuCategory)
            .where(
                MenuCategory.restaurant_id == restaurant_id,
                MenuCategory.status == CategoryStatus.ACTIVE,
            )
            .order_by(MenuCategory.display_order, MenuCategory.name, MenuCategory.id)
        ).all()
        if category_id is not None:
            categories = [c for c in categories if c.id == category_id]
        if not categories:
            return GuestMenu(restaurant_name=restaurant_name, categories=[])

        query = (
            filter_active(select(MenuItem), MenuItem)
            .join(MenuItem.category)
            .where(
                MenuItem.restaurant_id == restaurant_id,
                MenuItem.status == ItemStatus.AVAILABLE,
                MenuItem.category_id.in_([c.id for c in categories]),
            )
            .options(
                selectinload(MenuItem.category),
                selectinload(MenuItem.photos),
                selectinload(MenuItem.modifier_links)
                .selectinload(MenuItemModifierGroup.modifier_group)
                .selectinload(ModifierGroup.options),
            )
            .order_by(*order_by)
        )
        if search and search.strip():
            pattern = f"%{escape_like_pattern(search.strip())}%"
            query = query.where(MenuItem.name.ilike(pattern, escape="\\"))
        if is_chef_recommended:
            query = query.where(MenuItem.is_chef_recommended.is_(True))

        items_by_category: dict[int, list[GuestMenuItem]] = defaultdict(list)
        for item in self._db.scalars(query).all():
            items_by_category[item.category_id].append(self._item_view(item))

        menu = GuestMenu(
            restaurant_name=restaurant_name,
            categories=[
                GuestMenuCategory(
                    id=c.id,
                    name=c.name,
                    description=c.description,
                    display_order=c.display_order,
                    items=items_by_category[c.id],
                )
                for c in categories
                if items_by_category.get(c.id)
            ],
        )

        logger.debug(
            "Guest menu built",
            restaurant_id=restaurant_id,
            categories=len(menu.categories),
            items=sum(len(c.items) for c in menu.categories),
        )
        return menu

    @staticmethod
    def _order_by(sort_by: str, sort_order: str) -> list[Any]:
        if sort_by not in GUEST_MENU_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sorted(GUEST_MENU_SORT_FIELDS))}",
                field="sort_by",
            )
        if sort_order not in SortOrder.ALL:
            raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")

        descending = sort_order == SortOrder.DESC

        def direction(column):
            return column.desc() if descending else column.asc()

        if sort_by == "display_order":
            return [direction(MenuCategory.display_order), direction(MenuItem.name), MenuItem.id]
        if sort_by == "chef_recommended":
            # Recommended first regardless of sort_order
            return [MenuItem.is_chef_recommended.desc(), direction(MenuItem.name), MenuItem.id]
        return [direction(getattr(MenuItem, sort_by)), MenuItem.id]

    @staticmethod
    def _item_view(item: MenuItem) -> GuestMenuItem:
        primary = item.primary_photo
        groups = [
            link.modifier_group
            for link in item.modifier_links
            if link.modifier_group.lifecycle_state == LifecycleState.ACTIVE
            and link.modifier_group.status == ModifierGroupStatus.ACTIVE
        ]

        return GuestMenuItem(
            id=item.id,
            category_id=item.category_id,
            category_name=item.category.name if item.category else UNCATEGORIZED_LABEL,
            name=item.name,
            description=item.description,
            price=float(item.price),
            price_formatted=format_price(item.price),
            prep_time_minutes=item.prep_time_minutes,
            status=item.status,
            is_chef_recommended=item.is_chef_recommended,
            primary_photo_url=primary.url if primary else None,
            modifier_groups=[
                GuestModifierGroup(
                    id=group.id,
                    name=group.name,
                    description=group.description,
                    is_required=group.is_required,
                    min_selections=group.min_selections,
                    max_selections=group.max_selections,
                    selection_type=group.selection_type,
                    display_order=group.display_order,
                    options=[
                        GuestModifierOption(
                            id=option.id,
                            name=option.name,
                            price_adjustment=float(option.price_adjustment),
                            is_default=option.is_default,
                            display_order=option.display_order,
                        )
                        for option in group.options
                    ],
                )
                for group in groups
            ],
            created_at=item.created_at,
        )
