"""
Tests for ModifierGroupService.

Tests cover:
- Selection rules (single vs multiple, min/max)
- Option replacement on update
- Attaching groups to menu items (replace semantics, ordering)
- Delete protection and the all-or-nothing bulk save
"""

from decimal import Decimal

import pytest

from rest_api.models import MenuItemModifierGroup, ModifierGroup, ModifierOption
from rest_api.services.domain import (
    MenuItemService,
    ModifierGroupService,
    validate_selection_rules,
)
from shared.config.constants import LifecycleState
from shared.utils.admin_schemas import ModifierGroupBulkEntry
from shared.utils.exceptions import (
    BulkSaveError,
    DuplicateEntityError,
    EntityInUseError,
    InvalidSelectionError,
    MenuItemNotFoundError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def group_service(db_session):
    """Get a ModifierGroupService instance."""
    return ModifierGroupService(db_session)


@pytest.fixture
def toppings(group_service, restaurant_id):
    """A multiple-choice group with three options."""
    return group_service.create(
        {
            "name": "Toppings",
            "selection_type": "multiple",
            "min_selections": 0,
            "max_selections": 3,
            "display_order": 2,
            "options": [
                {"name": "Egg", "price_adjustment": Decimal("8000")},
                {"name": "Shallots", "price_adjustment": Decimal("3000")},
                {"name": "Extra Beef", "price_adjustment": Decimal("20000")},
            ],
        },
        restaurant_id,
    )


class TestSelectionRules:
    """Tests for validate_selection_rules()"""

    def test_single_with_one_max_is_valid(self):
        """single/0..1 and single/1..1 are fine."""
        validate_selection_rules("single", 0, 1)
        validate_selection_rules("single", 1, 1)

    def test_single_with_many_rejected(self):
        """Single selection cannot allow more than one pick."""
        with pytest.raises(InvalidSelectionError):
            validate_selection_rules("single", 0, 2)

    def test_min_above_max_rejected(self):
        """The minimum may not exceed the maximum."""
        with pytest.raises(InvalidSelectionError):
            validate_selection_rules("multiple", 4, 3)


class TestModifierGroupCreate:
    """Tests for ModifierGroupService.create()"""

    def test_create_with_options(self, toppings):
        """Options get their list position as display order."""
        assert toppings.id is not None
        assert [o.name for o in toppings.options] == ["Egg", "Shallots", "Extra Beef"]
        assert [o.display_order for o in toppings.options] == [0, 1, 2]
        assert toppings.options[0].price_adjustment == 8000

    def test_explicit_option_order_kept(self, group_service, restaurant_id):
        """An explicit display_order wins over the position."""
        group = group_service.create(
            {
                "name": "Spice",
                "options": [
                    {"name": "Hot", "display_order": 5},
                    {"name": "Mild", "display_order": 1},
                ],
            },
            restaurant_id,
        )
        assert [o.name for o in group.options] == ["Mild", "Hot"]

    def test_invalid_rules_rejected(self, group_service, db_session, restaurant_id):
        """Nothing is written when the rules are inconsistent."""
        with pytest.raises(InvalidSelectionError):
            group_service.create(
                {"name": "Broken", "selection_type": "single", "max_selections": 3},
                restaurant_id,
            )
        assert db_session.query(ModifierGroup).count() == 0

    def test_duplicate_name_rejected(self, group_service, seed_modifier_group, restaurant_id):
        """Group names are unique per restaurant."""
        with pytest.raises(DuplicateEntityError):
            group_service.create({"name": "size"}, restaurant_id)


class TestModifierGroupUpdate:
    """Tests for ModifierGroupService.update()"""

    def test_options_replaced_wholesale(self, group_service, db_session, toppings, restaurant_id):
        """A provided options list replaces every existing option."""
        result = group_service.update(
            toppings.id,
            {"options": [{"name": "Chili Oil", "price_adjustment": Decimal("2000")}]},
            restaurant_id,
        )

        assert [o.name for o in result.options] == ["Chili Oil"]
        assert db_session.query(ModifierOption).filter_by(group_id=toppings.id).count() == 1

    def test_options_kept_when_omitted(self, group_service, toppings, restaurant_id):
        """Leaving options out keeps them."""
        result = group_service.update(toppings.id, {"description": "Add-ons"}, restaurant_id)

        assert result.description == "Add-ons"
        assert len(result.options) == 3

    def test_empty_options_list_clears(self, group_service, toppings, restaurant_id):
        """An empty list removes all options."""
        result = group_service.update(toppings.id, {"options": []}, restaurant_id)
        assert result.options == []

    def test_rules_checked_against_stored_values(self, group_service, toppings, restaurant_id):
        """Switching to single while max_selections is 3 is refused."""
        with pytest.raises(InvalidSelectionError):
            group_service.update(toppings.id, {"selection_type": "single"}, restaurant_id)

        unchanged = group_service.get_by_id(toppings.id, restaurant_id)
        assert unchanged.selection_type == "multiple"

    def test_switch_to_single_with_max_one(self, group_service, toppings, restaurant_id):
        """Changing type and max together is accepted."""
        result = group_service.update(
            toppings.id, {"selection_type": "single", "max_selections": 1}, restaurant_id
        )
        assert result.selection_type == "single"
        assert result.max_selections == 1


class TestAttachToItem:
    """Tests for ModifierGroupService.attach_to_item()"""

    def test_attach_in_given_order(
        self, group_service, seed_item, seed_modifier_group, toppings, restaurant_id
    ):
        """Groups come back in list order with link_display_order set."""
        result = group_service.attach_to_item(
            seed_item.id, [toppings.id, seed_modifier_group.id], None, restaurant_id
        )

        assert [g.id for g in result] == [toppings.id, seed_modifier_group.id]
        assert [g.link_display_order for g in result] == [0, 1]

    def test_explicit_display_orders(
        self, group_service, seed_item, seed_modifier_group, toppings, restaurant_id
    ):
        """display_orders overrides the positional order."""
        result = group_service.attach_to_item(
            seed_item.id,
            [toppings.id, seed_modifier_group.id],
            {toppings.id: 9, seed_modifier_group.id: 1},
            restaurant_id,
        )
        assert [g.id for g in result] == [seed_modifier_group.id, toppings.id]

    def test_attach_replaces_previous_set(
        self, group_service, db_session, seed_item, seed_modifier_group, toppings, restaurant_id
    ):
        """The item ends up with exactly the submitted groups."""
        group_service.attach_to_item(
            seed_item.id, [seed_modifier_group.id, toppings.id], None, restaurant_id
        )
        result = group_service.attach_to_item(seed_item.id, [toppings.id], None, restaurant_id)

        assert [g.id for g in result] == [toppings.id]
        assert db_session.query(MenuItemModifierGroup).count() == 1

    def test_empty_list_detaches_all(
        self, group_service, seed_item, seed_modifier_group, restaurant_id
    ):
        """An empty list removes every attachment."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

        assert group_service.attach_to_item(seed_item.id, [], None, restaurant_id) == []
        assert group_service.get_item_groups(seed_item.id, restaurant_id) == []

    def test_empty_list_twice_is_idempotent(
        self, group_service, db_session, seed_item, seed_modifier_group, restaurant_id
    ):
        """Detaching everything a second time leaves the same empty state."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

        first = group_service.attach_to_item(seed_item.id, [], None, restaurant_id)
        second = group_service.attach_to_item(seed_item.id, [], None, restaurant_id)

        assert first == second == []
        assert db_session.query(MenuItemModifierGroup).count() == 0

    def test_unknown_group_leaves_links_untouched(
        self, group_service, seed_item, seed_modifier_group, restaurant_id
    ):
        """A bad id fails the whole call and keeps the old attachments."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

        with pytest.raises(ValidationError) as exc_info:
            group_service.attach_to_item(
                seed_item.id, [seed_modifier_group.id, 8080], None, restaurant_id
            )

        assert exc_info.value.code == "INVALID_MODIFIER_GROUP"
        remaining = group_service.get_item_groups(seed_item.id, restaurant_id)
        assert [g.id for g in remaining] == [seed_modifier_group.id]

    def test_foreign_group_rejected(
        self, group_service, db_session, seed_item, other_restaurant_id, restaurant_id
    ):
        """Groups of another restaurant cannot be attached."""
        foreign = ModifierGroupService(db_session).create({"name": "Foreign"}, other_restaurant_id)

        with pytest.raises(ValidationError):
            group_service.attach_to_item(seed_item.id, [foreign.id], None, restaurant_id)

    def test_deleted_item_not_found(
        self, group_service, db_session, seed_item, seed_modifier_group, restaurant_id
    ):
        """Attaching to a deleted item is a 404."""
        MenuItemService(db_session).delete(seed_item.id, restaurant_id)

        with pytest.raises(MenuItemNotFoundError):
            group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

    def test_deleted_group_hidden_from_item(
        self, group_service, db_session, seed_item, seed_modifier_group, toppings, restaurant_id
    ):
        """A link to a deleted group is not reported for the item."""
        group_service.attach_to_item(
            seed_item.id, [seed_modifier_group.id, toppings.id], None, restaurant_id
        )
        db_session.get(ModifierGroup, toppings.id).soft_delete()
        db_session.commit()

        result = group_service.get_item_groups(seed_item.id, restaurant_id)
        assert [g.id for g in result] == [seed_modifier_group.id]


class TestModifierGroupDelete:
    """Tests for ModifierGroupService.delete()"""

    def test_delete_unattached_group(self, group_service, db_session, toppings, restaurant_id):
        """A free group is soft-deleted."""
        group_service.delete(toppings.id, restaurant_id)

        row = db_session.get(ModifierGroup, toppings.id)
        assert row.lifecycle_state == LifecycleState.DELETED
        assert group_service.list_groups(restaurant_id) == []

    def test_delete_attached_group_refused(
        self, group_service, seed_item, seed_modifier_group, restaurant_id
    ):
        """A group linked to a live item cannot be deleted."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

        with pytest.raises(EntityInUseError) as exc_info:
            group_service.delete(seed_modifier_group.id, restaurant_id)
        assert "1 menu item" in exc_info.value.detail

    def test_links_to_deleted_items_do_not_block(
        self, group_service, db_session, seed_item, seed_modifier_group, restaurant_id
    ):
        """Only non-deleted items count as users of the group."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)
        MenuItemService(db_session).delete(seed_item.id, restaurant_id)

        group_service.delete(seed_modifier_group.id, restaurant_id)
        with pytest.raises(NotFoundError):
            group_service.get_by_id(seed_modifier_group.id, restaurant_id)


class TestBulkSave:
    """Tests for ModifierGroupService.bulk_save()"""

    def _entry(self, **fields):
        return ModifierGroupBulkEntry(**fields)

    def test_create_update_and_delete_in_one_call(
        self, group_service, seed_modifier_group, toppings, restaurant_id
    ):
        """Missing groups are deleted, temp ids created, known ids updated."""
        result = group_service.bulk_save(
            [
                self._entry(
                    id=seed_modifier_group.id,
                    name="Portion",
                    is_required=True,
                    min_selections=1,
                    max_selections=1,
                    options=[{"name": "Small"}, {"name": "Big", "price_adjustment": "15000"}],
                ),
                self._entry(id="temp-1", name="Sauce", display_order=3, options=[{"name": "Hoisin"}]),
            ],
            restaurant_id,
        )

        names = [g.name for g in result]
        assert names == ["Portion", "Sauce"]
        portion = result[0]
        assert portion.id == seed_modifier_group.id
        assert [o.name for o in portion.options] == ["Small", "Big"]
        with pytest.raises(NotFoundError):
            group_service.get_by_id(toppings.id, restaurant_id)

    def test_blocked_delete_changes_nothing(
        self, group_service, seed_item, seed_modifier_group, toppings, restaurant_id
    ):
        """An attached group in the delete set aborts the whole batch."""
        group_service.attach_to_item(seed_item.id, [seed_modifier_group.id], None, restaurant_id)

        with pytest.raises(BulkSaveError) as exc_info:
            group_service.bulk_save(
                [
                    self._entry(id=toppings.id, name="Renamed Toppings", selection_type="multiple", max_selections=3),
                    self._entry(id="temp-9", name="Never Created"),
                ],
                restaurant_id,
            )

        assert exc_info.value.errors == ['"Size": attached to 1 menu item(s)']
        names = sorted(g.name for g in group_service.list_groups(restaurant_id))
        assert names == ["Size", "Toppings"]

    def test_failure_mid_batch_rolls_back(
        self, group_service, seed_modifier_group, toppings, restaurant_id
    ):
        """A rule violation in a later entry undoes earlier writes."""
        with pytest.raises(InvalidSelectionError):
            group_service.bulk_save(
                [
                    self._entry(id=seed_modifier_group.id, name="Size", description="changed"),
                    self._entry(name="Bad", selection_type="single", max_selections=2),
                ],
                restaurant_id,
            )

        groups = {g.name: g for g in group_service.list_groups(restaurant_id)}
        assert set(groups) == {"Size", "Toppings"}
        assert groups["Size"].description is None

    def test_unknown_existing_id_not_found(self, group_service, restaurant_id):
        """A numeric id that is not one of ours is a 404."""
        with pytest.raises(NotFoundError):
            group_service.bulk_save([self._entry(id=777, name="Ghost")], restaurant_id)

    def test_deleted_name_reusable_in_same_batch(
        self, group_service, seed_modifier_group, toppings, restaurant_id
    ):
        """Deleting a group frees its name for a new entry in the same batch."""
        result = group_service.bulk_save(
            [
                self._entry(id=seed_modifier_group.id, name="Size"),
                self._entry(id="temp-2", name="Toppings", selection_type="multiple", max_selections=2),
            ],
            restaurant_id,
        )

        new_toppings = next(g for g in result if g.name == "Toppings")
        assert new_toppings.id != toppings.id

    def test_empty_list_deletes_everything_free(self, group_service, toppings, restaurant_id):
        """Saving an empty list removes all unattached groups."""
        assert group_service.bulk_save([], restaurant_id) == []
