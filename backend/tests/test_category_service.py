"""
Tests for CategoryService - menu sections.

Tests cover:
- Create with per-restaurant unique names
- Listing with item counts, status filter and sorting
- Partial updates
- Delete protection while items remain
"""

import pytest

from rest_api.models import MenuCategory
from rest_api.services.domain import CategoryService, MenuItemService
from shared.config.constants import LifecycleState
from shared.utils.exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def category_service(db_session):
    """Get a CategoryService instance."""
    return CategoryService(db_session)


class TestCategoryServiceCreate:
    """Tests for CategoryService.create()"""

    def test_create_category(self, category_service, restaurant_id):
        """Can create a category with defaults filled in."""
        result = category_service.create({"name": "Drinks"}, restaurant_id)

        assert result.id is not None
        assert result.name == "Drinks"
        assert result.status == "active"
        assert result.display_order == 0
        assert result.item_count == 0
        assert result.restaurant_id == restaurant_id

    def test_duplicate_name_rejected(self, category_service, seed_category, restaurant_id):
        """A second active category with the same name is refused."""
        with pytest.raises(DuplicateEntityError) as exc_info:
            category_service.create({"name": "Noodles"}, restaurant_id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "DUPLICATE_NAME"

    def test_duplicate_name_is_case_insensitive(self, category_service, seed_category, restaurant_id):
        """Name comparison ignores case."""
        with pytest.raises(DuplicateEntityError):
            category_service.create({"name": "NOODLES"}, restaurant_id)

    def test_same_name_allowed_in_other_restaurant(
        self, category_service, seed_category, other_restaurant_id
    ):
        """Uniqueness is scoped to one restaurant."""
        result = category_service.create({"name": "Noodles"}, other_restaurant_id)
        assert result.restaurant_id == other_restaurant_id

    def test_name_of_deleted_category_can_be_reused(
        self, category_service, seed_category, restaurant_id
    ):
        """Soft-deleted categories do not block their name."""
        category_service.delete(seed_category.id, restaurant_id)

        result = category_service.create({"name": "Noodles"}, restaurant_id)
        assert result.id != seed_category.id


class TestCategoryServiceList:
    """Tests for CategoryService.list_categories()"""

    def test_item_counts_exclude_deleted_items(
        self, category_service, db_session, seed_category, item_factory, restaurant_id
    ):
        """Each category reports its number of non-deleted items."""
        item_factory("Spring Rolls")
        gone = item_factory("Fried Wontons")
        MenuItemService(db_session).delete(gone.id, restaurant_id)

        result = category_service.list_categories(restaurant_id)

        assert len(result) == 1
        assert result[0].item_count == 1

    def test_default_sort_is_display_order(self, category_service, restaurant_id):
        """Without sort params categories come back by display_order."""
        category_service.create({"name": "Desserts", "display_order": 3}, restaurant_id)
        category_service.create({"name": "Starters", "display_order": 1}, restaurant_id)
        category_service.create({"name": "Mains", "display_order": 2}, restaurant_id)

        names = [c.name for c in category_service.list_categories(restaurant_id)]
        assert names == ["Starters", "Mains", "Desserts"]

    def test_sort_by_name_desc(self, category_service, restaurant_id):
        """sort_by/sort_order are honoured."""
        for name in ("Bakery", "Coffee", "Appetizers"):
            category_service.create({"name": name}, restaurant_id)

        result = category_service.list_categories(
            restaurant_id, sort_by="name", sort_order="desc"
        )
        assert [c.name for c in result] == ["Coffee", "Bakery", "Appetizers"]

    def test_unknown_sort_field_rejected(self, category_service, restaurant_id):
        """Sorting is limited to an allow-list of columns."""
        with pytest.raises(ValidationError):
            category_service.list_categories(restaurant_id, sort_by="restaurant_id")

    def test_status_filter(self, category_service, seed_category, restaurant_id):
        """Only categories with the requested status are returned."""
        hidden = category_service.create({"name": "Seasonal"}, restaurant_id)
        category_service.update_status(hidden.id, "inactive", restaurant_id)

        active = category_service.list_categories(restaurant_id, status="active")
        inactive = category_service.list_categories(restaurant_id, status="inactive")

        assert [c.name for c in active] == ["Noodles"]
        assert [c.name for c in inactive] == ["Seasonal"]

    def test_deleted_hidden_unless_requested(self, category_service, seed_category, restaurant_id):
        """Deleted categories only show up with include_deleted."""
        category_service.delete(seed_category.id, restaurant_id)

        assert category_service.list_categories(restaurant_id) == []
        with_deleted = category_service.list_categories(restaurant_id, include_deleted=True)
        assert [c.id for c in with_deleted] == [seed_category.id]

    def test_other_restaurant_not_visible(self, category_service, seed_category, other_restaurant_id):
        """A restaurant never sees another restaurant's categories."""
        assert category_service.list_categories(other_restaurant_id) == []


class TestCategoryServiceUpdate:
    """Tests for CategoryService.update() and update_status()"""

    def test_partial_update_keeps_other_fields(self, category_service, seed_category, restaurant_id):
        """Only the provided fields change."""
        result = category_service.update(seed_category.id, {"display_order": 5}, restaurant_id)

        assert result.display_order == 5
        assert result.name == "Noodles"
        assert result.description == "Soups and stir-fries"

    def test_description_can_be_cleared(self, category_service, seed_category, restaurant_id):
        """Sending description=None clears it."""
        result = category_service.update(seed_category.id, {"description": None}, restaurant_id)
        assert result.description is None

    def test_null_name_is_ignored(self, category_service, seed_category, restaurant_id):
        """A null for a required column leaves it untouched."""
        result = category_service.update(seed_category.id, {"name": None}, restaurant_id)
        assert result.name == "Noodles"

    def test_rename_to_taken_name_rejected(self, category_service, seed_category, restaurant_id):
        """Renaming onto another active category's name fails."""
        other = category_service.create({"name": "Rice"}, restaurant_id)

        with pytest.raises(DuplicateEntityError):
            category_service.update(other.id, {"name": "noodles"}, restaurant_id)

    def test_rename_to_own_name_allowed(self, category_service, seed_category, restaurant_id):
        """A category does not conflict with itself."""
        result = category_service.update(seed_category.id, {"name": "Noodles"}, restaurant_id)
        assert result.name == "Noodles"

    def test_update_status(self, category_service, seed_category, restaurant_id):
        """Status can be changed on its own."""
        result = category_service.update_status(seed_category.id, "inactive", restaurant_id)
        assert result.status == "inactive"

    def test_update_other_restaurant_not_found(
        self, category_service, seed_category, other_restaurant_id
    ):
        """Cross-restaurant access looks like a missing category."""
        with pytest.raises(NotFoundError):
            category_service.update(seed_category.id, {"display_order": 2}, other_restaurant_id)


class TestCategoryServiceDelete:
    """Tests for CategoryService.delete()"""

    def test_delete_empty_category(self, category_service, db_session, seed_category, restaurant_id):
        """An empty category is soft-deleted, the row stays."""
        category_service.delete(seed_category.id, restaurant_id)

        row = db_session.get(MenuCategory, seed_category.id)
        assert row is not None
        assert row.lifecycle_state == LifecycleState.DELETED
        assert row.deleted_at is not None

        with pytest.raises(NotFoundError):
            category_service.get_by_id(seed_category.id, restaurant_id)

    def test_delete_with_items_refused(self, category_service, seed_item, seed_category, restaurant_id):
        """A category holding non-deleted items cannot be deleted."""
        with pytest.raises(EntityInUseError) as exc_info:
            category_service.delete(seed_category.id, restaurant_id)

        assert "1 menu item" in exc_info.value.detail
        assert category_service.get_by_id(seed_category.id, restaurant_id).id == seed_category.id

    def test_delete_after_items_deleted(
        self, category_service, db_session, seed_item, seed_category, restaurant_id
    ):
        """Deleted items no longer block the category."""
        MenuItemService(db_session).delete(seed_item.id, restaurant_id)

        category_service.delete(seed_category.id, restaurant_id)
        assert category_service.list_categories(restaurant_id) == []

    def test_delete_twice_not_found(self, category_service, seed_category, restaurant_id):
        """Deleting an already deleted category is a 404."""
        category_service.delete(seed_category.id, restaurant_id)

        with pytest.raises(NotFoundError):
            category_service.delete(seed_category.id, restaurant_id)
