"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, RestaurantMixin and AuditMixin (soft delete lifecycle)
- menu: MenuCategory, MenuItem, MenuItemPhoto
- modifier: ModifierGroup, ModifierOption, MenuItemModifierGroup
"""

# Base classes
from .base import Base, AuditMixin, RestaurantMixin

# Menu structure
from .menu import MenuCategory, MenuItem, MenuItemPhoto

# Modifiers
from .modifier import ModifierGroup, ModifierOption, MenuItemModifierGroup

__all__ = [
    "Base",
    "AuditMixin",
    "RestaurantMixin",
    "MenuCategory",
    "MenuItem",
    "MenuItemPhoto",
    "ModifierGroup",
    "ModifierOption",
    "MenuItemModifierGroup",
]
