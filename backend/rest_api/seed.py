"""
Seed data for development and demos.
Creates a small menu (categories, items, modifier groups) for one restaurant
through the domain services, so every seeded row passes the same rules as
admin input.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import MenuCategory
from rest_api.services.domain import CategoryService, MenuItemService, ModifierGroupService
from shared.config.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Demo menu
# =============================================================================

DEMO_CATEGORIES = [
    {"name": "Appetizers", "description": "Small plates to share", "display_order": 1},
    {"name": "Main Courses", "description": "Rice, noodles and grills", "display_order": 2},
    {"name": "Drinks", "description": "Coffee, tea and juices", "display_order": 3},
]

DEMO_ITEMS = {
    "Appetizers": [
        {"name": "Fresh Spring Rolls", "price": Decimal("45000"), "prep_time_minutes": 10},
        {"name": "Crispy Fried Wontons", "price": Decimal("55000"), "prep_time_minutes": 12},
    ],
    "Main Courses": [
        {
            "name": "Beef Pho",
            "price": Decimal("65000"),
            "prep_time_minutes": 15,
            "is_chef_recommended": True,
            "description": "Slow-simmered broth, rice noodles, sliced beef",
        },
        {"name": "Grilled Pork Rice", "price": Decimal("59000"), "prep_time_minutes": 15},
        {"name": "Wagyu Steak", "price": Decimal("129900"), "prep_time_minutes": 25},
    ],
    "Drinks": [
        {"name": "Iced Milk Coffee", "price": Decimal("29000"), "prep_time_minutes": 5},
        {"name": "Peach Tea", "price": Decimal("35000"), "prep_time_minutes": 5},
    ],
}

DEMO_MODIFIER_GROUPS = [
    {
        "name": "Size",
        "is_required": True,
        "min_selections": 1,
        "max_selections": 1,
        "selection_type": "single",
        "display_order": 1,
        "options": [
            {"name": "Regular", "price_adjustment": Decimal("0"), "is_default": True},
            {"name": "Large", "price_adjustment": Decimal("10000")},
        ],
    },
    {
        "name": "Extra Toppings",
        "min_selections": 0,
        "max_selections": 3,
        "selection_type": "multiple",
        "display_order": 2,
        "options": [
            {"name": "Extra Beef", "price_adjustment": Decimal("20000")},
            {"name": "Poached Egg", "price_adjustment": Decimal("8000")},
            {"name": "Fried Shallots", "price_adjustment": Decimal("3000")},
        ],
    },
]

# Item name -> modifier group names attached to it
DEMO_ATTACHMENTS = {
    "Beef Pho": ["Size", "Extra Toppings"],
    "Iced Milk Coffee": ["Size"],
    "Peach Tea": ["Size"],
}


def has_menu(db: Session, restaurant_id: str) -> bool:
    """True when the restaurant already has at least one category."""
    return db.scalar(
        select(MenuCategory.id).where(MenuCategory.restaurant_id == restaurant_id).limit(1)
    ) is not None


def seed(db: Session, restaurant_id: str, *, force: bool = False) -> dict[str, int]:
    """
    Create the demo menu for a restaurant.

    Idempotent: does nothing when categories already exist, unless ``force``
    is set. Forcing adds whatever the existing menu is missing by name.

    Returns:
        Counts of created rows per entity.
    """
    created = {"categories": 0, "items": 0, "modifier_groups": 0}

    if has_menu(db, restaurant_id) and not force:
        logger.info("Menu already seeded, skipping", restaurant_id=restaurant_id)
        return created

    logger.info("Seeding demo menu", restaurant_id=restaurant_id)

    categories = CategoryService(db)
    items = MenuItemService(db)
    groups = ModifierGroupService(db)

    category_ids: dict[str, int] = {}
    for category_data in DEMO_CATEGORIES:
        if categories.repo.name_exists(restaurant_id, category_data["name"]):
            continue
        category = categories.create(dict(category_data), restaurant_id)
        category_ids[category.name] = category.id
        created["categories"] += 1

    item_ids: dict[str, int] = {}
    for category_name, category_items in DEMO_ITEMS.items():
        category_id = category_ids.get(category_name)
        if category_id is None:
            continue
        for item_data in category_items:
            if items.repo.name_exists(restaurant_id, item_data["name"]):
                continue
            item = items.create({**item_data, "category_id": category_id}, restaurant_id)
            item_ids[item.name] = item.id
            created["items"] += 1

    group_ids: dict[str, int] = {}
    for group_data in DEMO_MODIFIER_GROUPS:
        if groups.repo.name_exists(restaurant_id, group_data["name"]):
            continue
        group = groups.create(dict(group_data), restaurant_id)
        group_ids[group.name] = group.id
        created["modifier_groups"] += 1

    for item_name, group_names in DEMO_ATTACHMENTS.items():
        if item_name not in item_ids:
            continue
        attach_ids = [group_ids[name] for name in group_names if name in group_ids]
        if attach_ids:
            groups.attach_to_item(item_ids[item_name], attach_ids, None, restaurant_id)

    logger.info("Demo menu seeded", restaurant_id=restaurant_id, **created)
    return created
