"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import ItemStatus, SelectionType

    if item.status == ItemStatus.AVAILABLE:
        ...

    if group.selection_type == SelectionType.SINGLE:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# Entity Lifecycle
# =============================================================================


class LifecycleState(str, Enum):
    """
    Persistence lifecycle of a soft-deletable row.

    Rows are never physically removed; deletion moves them to DELETED.
    """

    ACTIVE = "active"
    DELETED = "deleted"


# =============================================================================
# Entity Status Constants
# =============================================================================


class CategoryStatus:
    """Menu category visibility status."""

    ACTIVE: Final[str] = "active"
    INACTIVE: Final[str] = "inactive"

    ALL: Final[list[str]] = [ACTIVE, INACTIVE]


class ItemStatus:
    """Menu item availability status."""

    AVAILABLE: Final[str] = "available"
    UNAVAILABLE: Final[str] = "unavailable"
    SOLD_OUT: Final[str] = "sold_out"

    ALL: Final[list[str]] = [AVAILABLE, UNAVAILABLE, SOLD_OUT]


class ModifierGroupStatus:
    """Modifier group visibility status."""

    ACTIVE: Final[str] = "active"
    INACTIVE: Final[str] = "inactive"

    ALL: Final[list[str]] = [ACTIVE, INACTIVE]


class SelectionType:
    """How many options a guest may pick from a modifier group."""

    SINGLE: Final[str] = "single"
    MULTIPLE: Final[str] = "multiple"

    ALL: Final[list[str]] = [SINGLE, MULTIPLE]


# =============================================================================
# Sorting
# =============================================================================


class SortOrder:
    ASC: Final[str] = "asc"
    DESC: Final[str] = "desc"

    ALL: Final[list[str]] = [ASC, DESC]


# Allow-lists of sortable columns per listing
CATEGORY_SORT_FIELDS: Final[frozenset[str]] = frozenset({"display_order", "name", "created_at"})
ITEM_SORT_FIELDS: Final[frozenset[str]] = frozenset({"created_at", "price", "name", "prep_time_minutes"})
GUEST_MENU_SORT_FIELDS: Final[frozenset[str]] = frozenset(
    {"name", "price", "created_at", "display_order", "chef_recommended"}
)


# =============================================================================
# Uploads
# =============================================================================


class PhotoUpload:
    """Accepted image uploads."""

    ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(
        {"image/jpeg", "image/jpg", "image/png", "image/webp"}
    )
    ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset({".jpg", ".jpeg", ".png", ".webp"})
    CHUNK_SIZE: Final[int] = 64 * 1024
    TEMP_PREFIX: Final[str] = ".tmp-"


# Client-side id prefix for modifier groups that do not exist yet
TEMP_ID_PREFIX: Final[str] = "temp-"


# =============================================================================
# Limits and Validation
# =============================================================================


class Limits:
    """Application limits and constraints."""

    # Pagination
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 1000

    # Categories
    CATEGORY_NAME_MIN: Final[int] = 2
    CATEGORY_NAME_MAX: Final[int] = 50
    CATEGORY_DESCRIPTION_MAX: Final[int] = 500

    # Menu items
    ITEM_NAME_MIN: Final[int] = 2
    ITEM_NAME_MAX: Final[int] = 80
    ITEM_DESCRIPTION_MAX: Final[int] = 1000
    MAX_PRICE: Final[int] = 999_999_999
    MAX_PREP_TIME_MINUTES: Final[int] = 240

    # Modifier groups
    GROUP_NAME_MIN: Final[int] = 2
    GROUP_NAME_MAX: Final[int] = 80
    GROUP_DESCRIPTION_MAX: Final[int] = 500
    OPTION_NAME_MAX: Final[int] = 80

    # Tenant header
    RESTAURANT_ID_MAX: Final[int] = 64


# Fallback label for items whose category could not be resolved
UNCATEGORIZED_LABEL: Final[str] = "Khác"
