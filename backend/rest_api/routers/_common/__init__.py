"""
Common utilities shared across routers.

NOTE: Admin schemas live in shared/utils/admin_schemas.py
so services never import from routers.
"""

from .pagination import (
    Pagination,
    get_pagination,
    total_pages,
)
from .restaurant import (
    RESTAURANT_HEADER,
    get_restaurant_id,
    get_guest_restaurant_id,
)

__all__ = [
    # Pagination
    "Pagination",
    "get_pagination",
    "total_pages",
    # Restaurant scoping
    "RESTAURANT_HEADER",
    "get_restaurant_id",
    "get_guest_restaurant_id",
]
