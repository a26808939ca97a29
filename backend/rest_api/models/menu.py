"""
Menu Models: MenuCategory, MenuItem, MenuItemPhoto.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import CategoryStatus, ItemStatus, Limits
from .base import AuditMixin, Base, BigIntPK, RestaurantMixin

if TYPE_CHECKING:
    from .modifier import MenuItemModifierGroup


class MenuCategory(RestaurantMixin, AuditMixin, Base):
    """
    Menu section (e.g. "Burgers").
    Inherits: restaurant_id, lifecycle_state, created_at, updated_at, deleted_at.
    """

    __tablename__ = "menu_category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(Limits.CATEGORY_NAME_MAX), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=CategoryStatus.ACTIVE, nullable=False
    )

    items: Mapped[list["MenuItem"]] = relationship(back_populates="category")

    __table_args__ = (
        Index("ix_menu_category_restaurant_state", "restaurant_id", "lifecycle_state"),
        CheckConstraint("display_order >= 0", name="ck_menu_category_display_order"),
    )


class MenuItem(RestaurantMixin, AuditMixin, Base):
    """
    Dish or drink offered on the menu.
    Soft-deleted items stay in the table so past orders keep their reference.
    """

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("menu_category.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(Limits.ITEM_NAME_MAX), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    prep_time_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=ItemStatus.AVAILABLE, nullable=False, index=True
    )
    is_chef_recommended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    category: Mapped["MenuCategory"] = relationship(back_populates="items")
    photos: Mapped[list["MenuItemPhoto"]] = relationship(
        back_populates="menu_item",
        order_by="MenuItemPhoto.display_order",
        cascade="all, delete-orphan",
    )
    modifier_links: Mapped[list["MenuItemModifierGroup"]] = relationship(
        back_populates="menu_item",
        order_by="MenuItemModifierGroup.display_order",
    )

    __table_args__ = (
        Index("ix_menu_item_restaurant_state", "restaurant_id", "lifecycle_state"),
        CheckConstraint("price > 0", name="ck_menu_item_price_positive"),
        CheckConstraint(
            f"prep_time_minutes >= 0 AND prep_time_minutes <= {Limits.MAX_PREP_TIME_MINUTES}",
            name="ck_menu_item_prep_time",
        ),
    )

    @property
    def primary_photo(self) -> Optional["MenuItemPhoto"]:
        """The flagged primary photo, else the first by display order."""
        if not self.photos:
            return None
        for photo in self.photos:
            if photo.is_primary:
                return photo
        return min(self.photos, key=lambda p: (p.display_order, p.id or 0))


class MenuItemPhoto(Base):
    """
    Image of a menu item stored under the upload directory.
    At most one photo per item is primary. Photos are hard-deleted.
    """

    __tablename__ = "menu_item_photo"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    menu_item_id: Mapped[int] = mapped_column(
        ForeignKey("menu_item.id"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    menu_item: Mapped["MenuItem"] = relationship(back_populates="photos")

    def __repr__(self) -> str:
        primary = ", primary" if self.is_primary else ""
        return f"<MenuItemPhoto(id={self.id}, item={self.menu_item_id}{primary})>"
