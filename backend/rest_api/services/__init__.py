"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services for menu administration - USE THESE
- catalog/: Read-only guest menu assembly
- crud/: Repository pattern and soft delete helpers

Usage:
    from rest_api.services.domain import MenuItemService
    service = MenuItemService(db)
    items, total = service.list_items(restaurant_id, page=1, limit=10)
"""

# CRUD utilities
from .crud import (
    BaseRepository,
    RestaurantRepository,
    soft_delete,
    filter_active,
)

# Base service classes for creating new domain services
from .base_service import (
    BaseService,
    BaseCRUDService,
)

# CLEAN ARCHITECTURE: Domain Services (PREFERRED)
from .domain import (
    CategoryService,
    MenuItemService,
    PhotoService,
    IncomingPhoto,
    ModifierGroupService,
)

# Guest menu
from .catalog import GuestMenuService

__all__ = [
    # CRUD
    "BaseRepository",
    "RestaurantRepository",
    "soft_delete",
    "filter_active",
    # Base service classes
    "BaseService",
    "BaseCRUDService",
    # Domain Services
    "CategoryService",
    "MenuItemService",
    "PhotoService",
    "IncomingPhoto",
    "ModifierGroupService",
    # Catalog
    "GuestMenuService",
]
