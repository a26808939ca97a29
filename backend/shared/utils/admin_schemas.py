"""
Pydantic schemas for admin menu endpoints.
Centralized to avoid circular imports between routers and services.

Request bodies extend RequestModel (snake_case or camelCase keys);
outputs are always snake_case.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from shared.config.constants import Limits, TEMP_ID_PREFIX
from shared.utils.schemas import (
    RequestModel,
    CategoryStatusValue,
    ItemStatusValue,
    ModifierGroupStatusValue,
    SelectionTypeValue,
)


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryOutput(BaseModel):
    id: int
    restaurant_id: str
    name: str
    description: str | None = None
    display_order: int
    status: CategoryStatusValue
    item_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CategoryCreate(RequestModel):
    name: str = Field(min_length=Limits.CATEGORY_NAME_MIN, max_length=Limits.CATEGORY_NAME_MAX)
    description: str | None = Field(default=None, max_length=Limits.CATEGORY_DESCRIPTION_MAX)
    display_order: int = Field(default=0, ge=0)
    status: CategoryStatusValue = "active"


class CategoryUpdate(RequestModel):
    name: str | None = Field(
        default=None, min_length=Limits.CATEGORY_NAME_MIN, max_length=Limits.CATEGORY_NAME_MAX
    )
    description: str | None = Field(default=None, max_length=Limits.CATEGORY_DESCRIPTION_MAX)
    display_order: int | None = Field(default=None, ge=0)
    status: CategoryStatusValue | None = None


class CategoryStatusUpdate(RequestModel):
    status: CategoryStatusValue


# =============================================================================
# Menu Item Schemas
# =============================================================================


class PhotoOutput(BaseModel):
    id: int
    url: str
    is_primary: bool
    display_order: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class MenuItemOutput(BaseModel):
    id: int
    restaurant_id: str
    category_id: int
    category_name: str | None = None
    name: str
    description: str | None = None
    price: float
    price_formatted: str
    prep_time_minutes: int
    status: ItemStatusValue
    is_chef_recommended: bool
    primary_photo_url: str | None = None
    photos: list[PhotoOutput] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MenuItemCreate(RequestModel):
    name: str = Field(min_length=Limits.ITEM_NAME_MIN, max_length=Limits.ITEM_NAME_MAX)
    category_id: int
    price: Decimal = Field(gt=0, le=Limits.MAX_PRICE, decimal_places=2)
    description: str | None = Field(default=None, max_length=Limits.ITEM_DESCRIPTION_MAX)
    prep_time_minutes: int = Field(default=0, ge=0, le=Limits.MAX_PREP_TIME_MINUTES)
    status: ItemStatusValue = "available"
    is_chef_recommended: bool = False


class MenuItemUpdate(RequestModel):
    name: str | None = Field(
        default=None, min_length=Limits.ITEM_NAME_MIN, max_length=Limits.ITEM_NAME_MAX
    )
    category_id: int | None = None
    price: Decimal | None = Field(default=None, gt=0, le=Limits.MAX_PRICE, decimal_places=2)
    description: str | None = Field(default=None, max_length=Limits.ITEM_DESCRIPTION_MAX)
    prep_time_minutes: int | None = Field(default=None, ge=0, le=Limits.MAX_PREP_TIME_MINUTES)
    status: ItemStatusValue | None = None
    is_chef_recommended: bool | None = None


class MenuItemStatusUpdate(RequestModel):
    status: ItemStatusValue


# =============================================================================
# Modifier Group Schemas
# =============================================================================


class ModifierOptionInput(RequestModel):
    name: str = Field(min_length=1, max_length=Limits.OPTION_NAME_MAX)
    price_adjustment: Decimal = Field(default=Decimal("0"), ge=0, le=Limits.MAX_PRICE, decimal_places=2)
    is_default: bool = False
    # Defaults to the option's position in the submitted list
    display_order: int | None = Field(default=None, ge=0)


class ModifierOptionOutput(BaseModel):
    id: int
    name: str
    price_adjustment: float
    is_default: bool
    display_order: int

    class Config:
        from_attributes = True


class ModifierGroupCreate(RequestModel):
    name: str = Field(min_length=Limits.GROUP_NAME_MIN, max_length=Limits.GROUP_NAME_MAX)
    description: str | None = Field(default=None, max_length=Limits.GROUP_DESCRIPTION_MAX)
    is_required: bool = False
    min_selections: int = Field(default=0, ge=0)
    max_selections: int = Field(default=1, ge=0)
    selection_type: SelectionTypeValue = "single"
    display_order: int = Field(default=0, ge=0)
    status: ModifierGroupStatusValue = "active"
    options: list[ModifierOptionInput] = []


class ModifierGroupUpdate(RequestModel):
    name: str | None = Field(
        default=None, min_length=Limits.GROUP_NAME_MIN, max_length=Limits.GROUP_NAME_MAX
    )
    description: str | None = Field(default=None, max_length=Limits.GROUP_DESCRIPTION_MAX)
    is_required: bool | None = None
    min_selections: int | None = Field(default=None, ge=0)
    max_selections: int | None = Field(default=None, ge=0)
    selection_type: SelectionTypeValue | None = None
    display_order: int | None = Field(default=None, ge=0)
    status: ModifierGroupStatusValue | None = None
    # None keeps the current options; a list (even empty) replaces them all
    options: list[ModifierOptionInput] | None = None


class ModifierGroupOutput(BaseModel):
    id: int
    restaurant_id: str
    name: str
    description: str | None = None
    is_required: bool
    min_selections: int
    max_selections: int
    selection_type: SelectionTypeValue
    display_order: int
    status: ModifierGroupStatusValue
    options: list[ModifierOptionOutput] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AttachedModifierGroupOutput(ModifierGroupOutput):
    """A group as attached to one menu item, with the per-item order."""

    link_display_order: int


class ModifierGroupBulkEntry(ModifierGroupCreate):
    """
    One group in a bulk save.

    ``id`` is the persisted id for existing groups, or a client-side
    placeholder starting with "temp-" (or nothing) for new ones.
    """

    id: int | str | None = None

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: int | str | None) -> int | str | None:
        if isinstance(value, str):
            if value.startswith(TEMP_ID_PREFIX):
                return value
            if value.isdigit():
                return int(value)
            raise ValueError(f"id must be an integer or start with '{TEMP_ID_PREFIX}'")
        return value

    @property
    def is_new(self) -> bool:
        return self.id is None or isinstance(self.id, str)


class ModifierGroupBulkSave(RequestModel):
    groups: list[ModifierGroupBulkEntry]


class AttachModifierGroups(RequestModel):
    modifier_group_ids: list[int]
    # Keyed by group id; groups without an entry use their list position
    display_orders: dict[int, int] | None = None

    @field_validator("modifier_group_ids")
    @classmethod
    def _no_duplicates(cls, value: list[int]) -> list[int]:
        if len(set(value)) != len(value):
            raise ValueError("modifier_group_ids must not contain duplicates")
        return value
