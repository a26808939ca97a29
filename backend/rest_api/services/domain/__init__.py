"""
Domain Services - Clean Architecture Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import CategoryService

    # In router
    service = CategoryService(db)
    categories = service.list_categories(restaurant_id)
"""

from .category_service import CategoryService
from .menu_item_service import MenuItemService
from .photo_service import PhotoService, IncomingPhoto
from .modifier_group_service import ModifierGroupService, validate_selection_rules

__all__ = [
    "CategoryService",
    "MenuItemService",
    "PhotoService",
    "IncomingPhoto",
    "ModifierGroupService",
    "validate_selection_rules",
]
