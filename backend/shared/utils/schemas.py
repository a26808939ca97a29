"""
Shared Pydantic schemas used across the application:
response envelopes, the request base model and the public guest menu.
"""

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


T = TypeVar("T")


# =============================================================================
# Common Types
# =============================================================================

CategoryStatusValue = Literal["active", "inactive"]
ItemStatusValue = Literal["available", "unavailable", "sold_out"]
ModifierGroupStatusValue = Literal["active", "inactive"]
SelectionTypeValue = Literal["single", "multiple"]
SortOrderValue = Literal["asc", "desc"]


class RequestModel(BaseModel):
    """
    Base for request bodies.

    Accepts snake_case field names as well as their camelCase aliases
    (``display_order`` or ``displayOrder``) and trims string input.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


# =============================================================================
# Response Envelopes
# =============================================================================


class ApiResponse(BaseModel, Generic[T]):
    """Successful response: ``{success, data, message?}``."""

    success: bool = True
    data: T
    message: str | None = None


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Successful paginated response: ``{success, data, pagination}``."""

    success: bool = True
    data: list[T]
    pagination: PaginationMeta


class MessageResponse(BaseModel):
    """Successful response without payload (deletes)."""

    success: bool = True
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error response: ``{success: false, message, code, errors}``."""

    success: bool = False
    message: str
    code: str | None = None
    errors: list[Any] | None = None


# =============================================================================
# Guest Menu Schemas (public)
# =============================================================================


class GuestModifierOption(BaseModel):
    id: int
    name: str
    price_adjustment: float
    is_default: bool
    display_order: int


class GuestModifierGroup(BaseModel):
    id: int
    name: str
    description: str | None = None
    is_required: bool
    min_selections: int
    max_selections: int
    selection_type: SelectionTypeValue
    display_order: int
    options: list[GuestModifierOption] = []


class GuestMenuItem(BaseModel):
    id: int
    category_id: int
    category_name: str
    name: str
    description: str | None = None
    price: float
    price_formatted: str
    prep_time_minutes: int
    status: ItemStatusValue
    is_chef_recommended: bool
    primary_photo_url: str | None = None
    modifier_groups: list[GuestModifierGroup] = []
    created_at: datetime | None = None


class GuestMenuCategory(BaseModel):
    id: int
    name: str
    description: str | None = None
    display_order: int
    items: list[GuestMenuItem] = []


class GuestMenu(BaseModel):
    restaurant_name: str
    categories: list[GuestMenuCategory] = []
