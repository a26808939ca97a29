"""
Tests for GuestMenuService - the public menu.
"""

import pytest

from rest_api.models import MenuCategory, MenuItemPhoto
from rest_api.services.catalog import GuestMenuService
from rest_api.services.domain import CategoryService, MenuItemService, ModifierGroupService
from shared.utils.exceptions import ValidationError

RESTAURANT_NAME = "Test Bistro"


@pytest.fixture
def menu_service(db_session):
    """Get a GuestMenuService instance."""
    return GuestMenuService(db_session)


@pytest.fixture
def drinks(db_session, restaurant_id):
    """A second active category shown after Noodles."""
    category = MenuCategory(restaurant_id=restaurant_id, name="Drinks", display_order=2)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


class TestGuestMenuVisibility:
    """Which rows make it onto the guest menu."""

    def test_groups_items_by_category(self, menu_service, seed_item, drinks, item_factory, restaurant_id):
        """Items are grouped under their category in display order."""
        item_factory("Iced Coffee", category=drinks, price="29000")

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME)

        assert menu.restaurant_name == RESTAURANT_NAME
        assert [c.name for c in menu.categories] == ["Noodles", "Drinks"]
        assert [i.name for i in menu.categories[0].items] == ["Beef Pho"]
        coffee = menu.categories[1].items[0]
        assert coffee.category_name == "Drinks"
        assert coffee.price_formatted == "29.000đ"

    def test_empty_categories_omitted(self, menu_service, seed_item, drinks, restaurant_id):
        """A category without visible items is left out."""
        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME)
        assert [c.name for c in menu.categories] == ["Noodles"]

    def test_unavailable_items_hidden(self, menu_service, seed_item, item_factory, restaurant_id):
        """Only available items are shown."""
        item_factory("Sold Out Soup", status="sold_out")
        item_factory("Off Today", status="unavailable")

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME)
        assert [i.name for i in menu.categories[0].items] == ["Beef Pho"]

    def test_deleted_items_hidden(self, menu_service, db_session, seed_item, item_factory, restaurant_id):
        """Soft-deleted items are not shown."""
        gone = item_factory("Old Special")
        MenuItemService(db_session).delete(gone.id, restaurant_id)

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME)
        assert [i.name for i in menu.categories[0].items] == ["Beef Pho"]

    def test_inactive_category_hides_its_items(
        self, menu_service, db_session, seed_item, seed_category, restaurant_id
    ):
        """Items of an inactive category disappear with it."""
        CategoryService(db_session).update_status(seed_category.id, "inactive", restaurant_id)

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME)
        assert menu.categories == []

    def test_other_restaurant_sees_nothing(self, menu_service, seed_item, other_restaurant_id):
        """The menu is scoped to one restaurant."""
        menu = menu_service.get_menu(other_restaurant_id, RESTAURANT_NAME)
        assert menu.categories == []

    def test_modifier_groups_and_photo(
        self, menu_service, db_session, seed_item, seed_modifier_group, restaurant_id
    ):
        """Items carry their active modifier groups and primary photo URL."""
        groups = ModifierGroupService(db_session)
        hidden = groups.create({"name": "Secret Sauce", "status": "inactive"}, restaurant_id)
        groups.attach_to_item(seed_item.id, [seed_modifier_group.id, hidden.id], None, restaurant_id)
        db_session.add(
            MenuItemPhoto(
                menu_item_id=seed_item.id, url="http://x/pho.jpg", filename="pho.jpg", is_primary=True
            )
        )
        db_session.commit()

        item = menu_service.get_menu(restaurant_id, RESTAURANT_NAME).categories[0].items[0]

        assert item.primary_photo_url == "http://x/pho.jpg"
        assert [g.name for g in item.modifier_groups] == ["Size"]
        assert [o.name for o in item.modifier_groups[0].options] == ["Regular", "Large"]
        assert [o.is_default for o in item.modifier_groups[0].options] == [True, False]
        assert item.modifier_groups[0].options[1].price_adjustment == 10000


class TestGuestMenuFilters:
    """Search, filters and sorting."""

    def test_search(self, menu_service, seed_item, item_factory, restaurant_id):
        """Search narrows items by name, case-insensitively."""
        item_factory("Spring Rolls")

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, search="ROLL")
        assert [i.name for c in menu.categories for i in c.items] == ["Spring Rolls"]

    def test_search_without_match(self, menu_service, seed_item, restaurant_id):
        """No match gives an empty category list."""
        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, search="pizza")
        assert menu.categories == []

    def test_category_filter(self, menu_service, seed_item, drinks, item_factory, restaurant_id):
        """category_id restricts the menu to one category."""
        item_factory("Peach Tea", category=drinks)

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, category_id=drinks.id)
        assert [c.name for c in menu.categories] == ["Drinks"]

    def test_chef_recommended_filter(self, menu_service, seed_item, item_factory, restaurant_id):
        """is_chef_recommended=True keeps only recommended dishes."""
        item_factory("Signature Bun Cha", is_chef_recommended=True)

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, is_chef_recommended=True)
        assert [i.name for i in menu.categories[0].items] == ["Signature Bun Cha"]

    def test_chef_recommended_false_shows_everything(
        self, menu_service, seed_item, item_factory, restaurant_id
    ):
        """is_chef_recommended=False is no filter at all."""
        item_factory("Signature Bun Cha", is_chef_recommended=True)

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, is_chef_recommended=False)
        assert [i.name for i in menu.categories[0].items] == ["Beef Pho", "Signature Bun Cha"]

    def test_sort_by_price_desc(self, menu_service, seed_item, item_factory, restaurant_id):
        """Items inside a category follow the requested sort."""
        item_factory("Cheap Rolls", price="20000")
        item_factory("Wagyu Steak", price="129900")

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, sort_by="price", sort_order="desc")
        assert [i.name for i in menu.categories[0].items] == ["Wagyu Steak", "Beef Pho", "Cheap Rolls"]

    def test_chef_recommended_sort_puts_them_first(
        self, menu_service, seed_item, item_factory, restaurant_id
    ):
        """chef_recommended sort lists recommended dishes first, then by name."""
        item_factory("Zesty Salad", is_chef_recommended=True)
        item_factory("Apple Cake")

        menu = menu_service.get_menu(restaurant_id, RESTAURANT_NAME, sort_by="chef_recommended")
        assert [i.name for i in menu.categories[0].items] == ["Zesty Salad", "Apple Cake", "Beef Pho"]

    def test_invalid_sort_rejected(self, menu_service, restaurant_id):
        """Unknown sort fields are refused."""
        with pytest.raises(ValidationError):
            menu_service.get_menu(restaurant_id, RESTAURANT_NAME, sort_by="popularity")
