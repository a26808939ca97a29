"""
Modifier Models: ModifierGroup, ModifierOption, MenuItemModifierGroup.

A modifier group (e.g. "Size") holds selectable options and is attached to
menu items through MenuItemModifierGroup, which carries a per-item order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits, ModifierGroupStatus, SelectionType
from .base import AuditMixin, Base, BigIntPK, RestaurantMixin

if TYPE_CHECKING:
    from .menu import MenuItem


class ModifierGroup(RestaurantMixin, AuditMixin, Base):
    """
    Named set of add-ons or variants with selection-count rules.
    Invariants: single selection implies max_selections <= 1;
    min_selections <= max_selections.
    """

    __tablename__ = "modifier_group"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(Limits.GROUP_NAME_MAX), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    min_selections: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_selections: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    selection_type: Mapped[str] = mapped_column(
        String(20), default=SelectionType.SINGLE, nullable=False
    )
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=ModifierGroupStatus.ACTIVE, nullable=False
    )

    # Options are owned by the group; replacing the list deletes the old rows
    options: Mapped[list["ModifierOption"]] = relationship(
        back_populates="group",
        order_by="ModifierOption.display_order",
        cascade="all, delete-orphan",
    )
    item_links: Mapped[list["MenuItemModifierGroup"]] = relationship(
        back_populates="modifier_group"
    )

    __table_args__ = (
        Index("ix_modifier_group_restaurant_state", "restaurant_id", "lifecycle_state"),
        CheckConstraint(
            "min_selections >= 0 AND min_selections <= max_selections",
            name="ck_modifier_group_selection_range",
        ),
    )


class ModifierOption(Base):
    """Selectable choice inside a modifier group, with a non-negative surcharge."""

    __tablename__ = "modifier_option"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("modifier_group.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(Limits.OPTION_NAME_MAX), nullable=False)
    price_adjustment: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    group: Mapped["ModifierGroup"] = relationship(back_populates="options")

    __table_args__ = (
        CheckConstraint("price_adjustment >= 0", name="ck_modifier_option_price"),
    )

    def __repr__(self) -> str:
        return f"<ModifierOption(id={self.id}, group={self.group_id}, name={self.name!r})>"


class MenuItemModifierGroup(Base):
    """Attachment of a modifier group to a menu item."""

    __tablename__ = "menu_item_modifier_group"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    menu_item_id: Mapped[int] = mapped_column(
        ForeignKey("menu_item.id"), nullable=False, index=True
    )
    modifier_group_id: Mapped[int] = mapped_column(
        ForeignKey("modifier_group.id"), nullable=False, index=True
    )
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    menu_item: Mapped["MenuItem"] = relationship(back_populates="modifier_links")
    modifier_group: Mapped["ModifierGroup"] = relationship(back_populates="item_links")

    __table_args__ = (
        UniqueConstraint("menu_item_id", "modifier_group_id", name="uq_menu_item_modifier_group"),
    )

    def __repr__(self) -> str:
        return (
            f"<MenuItemModifierGroup(item={self.menu_item_id}, "
            f"group={self.modifier_group_id}, order={self.display_order})>"
        )
