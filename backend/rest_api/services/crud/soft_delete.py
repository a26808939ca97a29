"""
Soft delete helpers for consistent lifecycle transitions across entities.

This module provides functions to:
- Soft delete entities (move to DELETED, keep the row)
- Filter queries down to active rows
"""

from typing import TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import AuditMixin
from shared.config.constants import LifecycleState
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)

T = TypeVar("T", bound=AuditMixin)


def soft_delete(db: Session, entity: T, *, commit: bool = True) -> T:
    """
    Soft delete an entity.

    Args:
        db: Database session
        entity: Entity to soft delete
        commit: Commit immediately; pass False inside a unit_of_work block

    Returns:
        The soft-deleted entity
    """
    entity.soft_delete()
    if commit:
        safe_commit(db)
        db.refresh(entity)

    logger.info(
        "Entity soft-deleted",
        entity_type=entity.__class__.__name__,
        entity_id=getattr(entity, "id", None),
    )
    return entity


def filter_active(query: Select, model: type[AuditMixin]) -> Select:
    """Restrict a query to rows in the ACTIVE lifecycle state."""
    return query.where(model.lifecycle_state == LifecycleState.ACTIVE)
