"""
Modifier Group Service - Clean Architecture Implementation.

Handles modifier groups and their options, attaching groups to menu items
and the all-or-nothing bulk save used by the admin editor.

Usage:
    from rest_api.services.domain import ModifierGroupService

    service = ModifierGroupService(db)
    group = service.create({"name": "Size", "options": [...]}, restaurant_id)
    service.attach_to_item(item_id, [group.id], None, restaurant_id)
    groups = service.bulk_save(entries, restaurant_id)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from rest_api.models import MenuItem, MenuItemModifierGroup, ModifierGroup, ModifierOption
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.crud.repository import RestaurantRepository
from rest_api.services.crud.soft_delete import soft_delete
from shared.config.constants import LifecycleState, SelectionType
from shared.config.logging import menu_logger as logger
from shared.infrastructure.db import unit_of_work
from shared.utils.admin_schemas import (
    AttachedModifierGroupOutput,
    ModifierGroupBulkEntry,
    ModifierGroupOutput,
    ModifierOptionOutput,
)
from shared.utils.exceptions import (
    BulkSaveError,
    EntityInUseError,
    InvalidSelectionError,
    MenuItemNotFoundError,
    NotFoundError,
    ValidationError,
)

GROUP_FIELDS = (
    "name",
    "description",
    "is_required",
    "min_selections",
    "max_selections",
    "selection_type",
    "display_order",
    "status",
)


def validate_selection_rules(selection_type: str, min_selections: int, max_selections: int) -> None:
    """
    Check a group's selection-count rules.

    Raises:
        InvalidSelectionError: If single selection allows more than one pick
            or the minimum exceeds the maximum.
    """
    if selection_type == SelectionType.SINGLE and max_selections > 1:
        raise InvalidSelectionError(
            "Single selection groups cannot allow more than 1 selection",
            field="max_selections",
        )
    if min_selections > max_selections:
        raise InvalidSelectionError(
            "min_selections cannot be greater than max_selections",
            field="min_selections",
        )


class ModifierGroupService(BaseCRUDService[ModifierGroup, ModifierGroupOutput]):
    """
    Service for modifier groups.

    Business rules:
    - Names are unique per restaurant among non-deleted groups
    - Options are replaced wholesale, never patched one by one
    - A group attached to a non-deleted item cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=ModifierGroup,
            output_schema=ModifierGroupOutput,
            entity_name="Modifier group",
        )
        self._items = RestaurantRepository(MenuItem, db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_groups(self, restaurant_id: str) -> list[ModifierGroupOutput]:
        """Groups ordered by display order then name, with sorted options."""
        return self.list_all(
            restaurant_id,
            order_by=[ModifierGroup.display_order, ModifierGroup.name, ModifierGroup.id],
        )

    def get_item_groups(self, item_id: int, restaurant_id: str) -> list[AttachedModifierGroupOutput]:
        """
        Groups attached to a menu item, ordered by the per-item display order.

        Raises:
            MenuItemNotFoundError: If the item is missing or deleted.
        """
        item = self._require_item(item_id, restaurant_id)

        links = self._db.scalars(
            select(MenuItemModifierGroup)
            .join(MenuItemModifierGroup.modifier_group)
            .where(
                MenuItemModifierGroup.menu_item_id == item.id,
                ModifierGroup.lifecycle_state == LifecycleState.ACTIVE,
            )
            .options(
                selectinload(MenuItemModifierGroup.modifier_group).selectinload(
                    ModifierGroup.options
                )
            )
            .order_by(MenuItemModifierGroup.display_order, MenuItemModifierGroup.id)
        ).all()

        return [
            AttachedModifierGroupOutput(
                **self.to_output(link.modifier_group).model_dump(),
                link_display_order=link.display_order,
            )
            for link in links
        ]

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: dict[str, Any], restaurant_id: str) -> ModifierGroupOutput:
        """
        Create a group and its options in one transaction.

        Raises:
            DuplicateEntityError: If the name is taken.
            InvalidSelectionError: If selection rules are inconsistent.
        """
        data = dict(data)
        options = data.pop("options", None) or []

        with unit_of_work(self._db):
            group = self._create_group(data, options, restaurant_id)

        self._db.refresh(group)
        logger.info("Modifier group created", group_id=group.id, options=len(options))
        return self.to_output(group)

    def update(
        self,
        entity_id: int,
        data: dict[str, Any],
        restaurant_id: str,
    ) -> ModifierGroupOutput:
        """
        Update a group. A provided ``options`` list replaces all options.

        Raises:
            NotFoundError: If the group is missing or deleted.
            DuplicateEntityError: If the new name is taken.
            InvalidSelectionError: If the merged rules are inconsistent.
        """
        group = self.require_entity(entity_id, restaurant_id)
        data = dict(data)
        options = data.pop("options", None)

        with unit_of_work(self._db):
            self._update_group(group, self._clean_update_data(data), options, restaurant_id)

        self._db.refresh(group)
        logger.info("Modifier group updated", group_id=group.id, options_replaced=options is not None)
        return self.to_output(group)

    def delete(self, entity_id: int, restaurant_id: str) -> None:
        super().delete(entity_id, restaurant_id)
        logger.info("Modifier group deleted", group_id=entity_id)

    def attach_to_item(
        self,
        item_id: int,
        group_ids: Sequence[int],
        display_orders: dict[int, int] | None,
        restaurant_id: str,
    ) -> list[AttachedModifierGroupOutput]:
        """
        Replace the item's attached groups with exactly ``group_ids``.

        An empty list detaches everything. Each link's display order comes
        from ``display_orders`` or, when absent, the id's list position.

        Raises:
            MenuItemNotFoundError: If the item is missing or deleted.
            ValidationError: If any group id is unknown to this restaurant.
        """
        item = self._require_item(item_id, restaurant_id)
        display_orders = display_orders or {}

        known = {g.id for g in self._repo.find_by_ids(list(group_ids), restaurant_id)}
        unknown = [gid for gid in group_ids if gid not in known]
        if unknown:
            raise ValidationError(
                "One or more modifier groups do not exist",
                code="INVALID_MODIFIER_GROUP",
                errors=[f"Modifier group with id {gid} not found" for gid in unknown],
            )

        try:
            with unit_of_work(self._db):
                self._db.execute(
                    delete(MenuItemModifierGroup).where(
                        MenuItemModifierGroup.menu_item_id == item.id
                    )
                )
                if group_ids:
                    self._db.add_all([
                        MenuItemModifierGroup(
                            menu_item_id=item.id,
                            modifier_group_id=group_id,
                            display_order=display_orders.get(group_id, position),
                        )
                        for position, group_id in enumerate(group_ids)
                    ])
        except IntegrityError as e:
            raise ValidationError(
                "One or more modifier groups do not exist",
                code="INVALID_MODIFIER_GROUP",
                item_id=item.id,
            ) from e

        logger.info("Modifier groups attached", item_id=item.id, group_ids=list(group_ids))
        return self.get_item_groups(item.id, restaurant_id)

    def bulk_save(
        self,
        entries: Sequence[ModifierGroupBulkEntry],
        restaurant_id: str,
    ) -> list[ModifierGroupOutput]:
        """
        Make the restaurant's groups match ``entries`` exactly.

        Existing groups missing from ``entries`` are soft-deleted, entries
        without a persisted id are created and the rest are updated. Every
        blocked delete is reported before anything is written, and any later
        failure rolls the whole batch back.

        Raises:
            BulkSaveError: If some groups to delete are still attached to items.
            NotFoundError: If an entry names an unknown group id.
            DuplicateEntityError / InvalidSelectionError: From create/update.
        """
        existing = {g.id: g for g in self._repo.find_all(restaurant_id)}

        incoming_ids = {entry.id for entry in entries if not entry.is_new}
        unknown_ids = sorted(incoming_ids - existing.keys())
        if unknown_ids:
            raise NotFoundError(self._entity_name, unknown_ids[0], restaurant_id=restaurant_id)

        ids_to_delete = sorted(existing.keys() - incoming_ids)
        blocked: list[str] = []
        for group_id in ids_to_delete:
            link_count = self._count_item_links(group_id)
            if link_count:
                blocked.append(
                    f'"{existing[group_id].name}": attached to {link_count} menu item(s)'
                )
        if blocked:
            raise BulkSaveError(blocked, restaurant_id=restaurant_id)

        with unit_of_work(self._db):
            for group_id in ids_to_delete:
                soft_delete(self._db, existing[group_id], commit=False)
            self._db.flush()

            for entry in entries:
                data = entry.model_dump(include=set(GROUP_FIELDS))
                options = [o.model_dump() for o in entry.options]
                if entry.is_new:
                    self._create_group(data, options, restaurant_id)
                else:
                    self._update_group(existing[entry.id], data, options, restaurant_id)

        logger.info(
            "Modifier groups bulk saved",
            restaurant_id=restaurant_id,
            deleted=len(ids_to_delete),
            saved=len(entries),
        )
        self._db.expire_all()
        return self.list_groups(restaurant_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModifierGroup) -> ModifierGroupOutput:
        return ModifierGroupOutput(
            id=entity.id,
            restaurant_id=entity.restaurant_id,
            name=entity.name,
            description=entity.description,
            is_required=entity.is_required,
            min_selections=entity.min_selections,
            max_selections=entity.max_selections,
            selection_type=entity.selection_type,
            display_order=entity.display_order,
            status=entity.status,
            options=[
                ModifierOptionOutput(
                    id=o.id,
                    name=o.name,
                    price_adjustment=float(o.price_adjustment),
                    is_default=o.is_default,
                    display_order=o.display_order,
                )
                for o in sorted(entity.options, key=lambda o: (o.display_order, o.id))
            ],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _load_options(self) -> list[Any]:
        return [selectinload(ModifierGroup.options)]

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_delete(self, entity: ModifierGroup, restaurant_id: str) -> None:
        link_count = self._count_item_links(entity.id)
        if link_count:
            raise EntityInUseError(
                "Modifier group",
                f"Cannot delete modifier group '{entity.name}': "
                f"it is attached to {link_count} menu item(s)",
                group_id=entity.id,
                restaurant_id=restaurant_id,
            )

    # =========================================================================
    # Internal Helpers (no commit; callers own the transaction)
    # =========================================================================

    def _create_group(
        self,
        data: dict[str, Any],
        options: Sequence[dict[str, Any]],
        restaurant_id: str,
    ) -> ModifierGroup:
        self._ensure_unique_name(restaurant_id, data["name"])
        validate_selection_rules(
            data.get("selection_type", SelectionType.SINGLE),
            data.get("min_selections", 0),
            data.get("max_selections", 1),
        )

        group = ModifierGroup(**data, restaurant_id=restaurant_id)
        group.options = self._build_options(options)
        self._db.add(group)
        self._db.flush()
        return group

    def _update_group(
        self,
        group: ModifierGroup,
        data: dict[str, Any],
        options: Sequence[dict[str, Any]] | None,
        restaurant_id: str,
    ) -> ModifierGroup:
        if "name" in data:
            self._ensure_unique_name(restaurant_id, data["name"], exclude_id=group.id)

        # Rules are checked against stored values merged with the incoming ones
        validate_selection_rules(
            data.get("selection_type", group.selection_type),
            data.get("min_selections", group.min_selections),
            data.get("max_selections", group.max_selections),
        )

        for field_name in GROUP_FIELDS:
            if field_name in data:
                setattr(group, field_name, data[field_name])
        if options is not None:
            group.options = self._build_options(options)

        self._db.flush()
        return group

    @staticmethod
    def _build_options(options: Sequence[dict[str, Any]]) -> list[ModifierOption]:
        return [
            ModifierOption(
                name=option["name"],
                price_adjustment=option.get("price_adjustment", 0),
                is_default=option.get("is_default", False),
                display_order=(
                    option["display_order"]
                    if option.get("display_order") is not None
                    else position
                ),
            )
            for position, option in enumerate(options)
        ]

    def _count_item_links(self, group_id: int) -> int:
        """Number of non-deleted menu items the group is attached to."""
        return self._db.scalar(
            select(func.count(MenuItemModifierGroup.id))
            .join(MenuItemModifierGroup.menu_item)
            .where(
                MenuItemModifierGroup.modifier_group_id == group_id,
                MenuItem.lifecycle_state == LifecycleState.ACTIVE,
            )
        ) or 0

    def _require_item(self, item_id: int, restaurant_id: str) -> MenuItem:
        item = self._items.find_by_id(item_id, restaurant_id)
        if item is None:
            raise MenuItemNotFoundError(item_id, restaurant_id=restaurant_id)
        return item
