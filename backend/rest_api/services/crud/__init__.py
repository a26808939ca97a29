"""
CRUD Services - Generic operations for entity management.

Provides:
- Repository Pattern: Type-safe data access with restaurant isolation
- soft_delete: Lifecycle transition that keeps rows
- filter_active: Query helper for ACTIVE rows
"""

from .repository import BaseRepository, RestaurantRepository
from .soft_delete import soft_delete, filter_active

__all__ = [
    # Repository Pattern
    "BaseRepository",
    "RestaurantRepository",
    # Soft delete
    "soft_delete",
    "filter_active",
]
