"""
Base class and AuditMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shared.config.constants import LifecycleState, Limits

# BIGINT on PostgreSQL; plain INTEGER on SQLite so the primary key aliases
# ROWID and auto-increments.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class RestaurantMixin:
    """Rows owned by one restaurant (tenant)."""

    restaurant_id: Mapped[str] = mapped_column(
        String(Limits.RESTAURANT_ID_MAX), nullable=False, index=True
    )


class AuditMixin:
    """
    Mixin providing soft delete lifecycle and audit timestamps.

    Fields added:
    - lifecycle_state: ACTIVE or DELETED (rows are never physically removed)
    - created_at, updated_at, deleted_at: Audit timestamps

    Methods:
    - soft_delete(): Move the entity to DELETED
    """

    lifecycle_state: Mapped[LifecycleState] = mapped_column(
        Enum(
            LifecycleState,
            native_enum=False,
            length=16,
            values_callable=lambda states: [s.value for s in states],
        ),
        default=LifecycleState.ACTIVE,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def is_deleted(self) -> bool:
        if self.lifecycle_state == LifecycleState.ACTIVE:
            return False
        if self.lifecycle_state == LifecycleState.DELETED:
            return True
        raise ValueError(f"Unknown lifecycle state: {self.lifecycle_state!r}")

    def soft_delete(self) -> None:
        """Mark the entity as deleted, keeping the row for history."""
        self.lifecycle_state = LifecycleState.DELETED
        self.deleted_at = datetime.now(timezone.utc)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        state = self.lifecycle_state.value if self.lifecycle_state else "transient"
        return f"<{class_name}(id={id_val}, {state})>"
