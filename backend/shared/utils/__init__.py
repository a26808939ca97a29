"""
Utilities module: Exceptions, validators, formatting, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ValidationError,
    DuplicateEntityError,
    EntityInUseError,
    DatabaseError,
)
from shared.utils.validators import (
    escape_like_pattern,
    normalize_name,
    validate_restaurant_id,
)
from shared.utils.formatting import format_price
from shared.utils.schemas import ApiResponse, PaginatedResponse, ErrorResponse

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "ValidationError",
    "DuplicateEntityError",
    "EntityInUseError",
    "DatabaseError",
    # validators
    "escape_like_pattern",
    "normalize_name",
    "validate_restaurant_id",
    # formatting
    "format_price",
    # schemas
    "ApiResponse",
    "PaginatedResponse",
    "ErrorResponse",
]
