"""
Base Service Classes for Clean Architecture.

Provides abstract base classes for application services that:
- Use Repository for data access (not direct queries in routers)
- Transform entities into output DTOs
- Handle business rules (uniqueness, references, lifecycle)
- Translate persistence failures into DatabaseError

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class CategoryService(BaseCRUDService[MenuCategory, CategoryOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=MenuCategory,
                output_schema=CategoryOutput,
                entity_name="Category",
            )
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.services.crud.repository import RestaurantRepository
from rest_api.services.crud.soft_delete import soft_delete
from shared.config.constants import SortOrder
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    DatabaseError,
    DuplicateEntityError,
    NotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service for domain operations.

    Subclasses implement specific business logic while this class
    provides common infrastructure (repository access, commits, sorting).
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self._db = db
        self._model = model
        self._repo = RestaurantRepository(model, db)

    @property
    def repo(self) -> RestaurantRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    def _commit(self, operation: str, **log_context: Any) -> None:
        """
        Commit the session, converting driver failures into DatabaseError.

        Raises:
            DatabaseError: If the commit fails (the session is rolled back).
        """
        try:
            safe_commit(self._db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {operation}", error=str(e), **log_context)
            raise DatabaseError(operation) from e

    def _order_by(
        self,
        sort_by: str,
        sort_order: str,
        allowed: frozenset[str],
    ) -> list[Any]:
        """
        Build ORDER BY clauses from an allow-listed column name.

        The primary key is appended so paging is stable across ties.

        Raises:
            ValidationError: If sort_by or sort_order is not allowed.
        """
        if sort_by not in allowed:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sorted(allowed))}",
                field="sort_by",
            )
        if sort_order not in SortOrder.ALL:
            raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")

        column = getattr(self._model, sort_by)
        if sort_order == SortOrder.DESC:
            return [column.desc(), self._model.id.desc()]
        return [column.asc(), self._model.id.asc()]


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for restaurant-owned entities with CRUD operations.

    Provides standard CRUD methods that can be overridden for
    custom business logic. Uses Repository for all data access.

    Responsibilities:
    - Data access via Repository (not direct queries)
    - DTO transformation via output schema
    - Name uniqueness among active rows
    - Soft delete instead of physical removal
    """

    # Fields a client may explicitly clear by sending null
    nullable_fields: frozenset[str] = frozenset({"description"})

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        not_found_code: str | None = None,
    ):
        super().__init__(db, model)
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._not_found_code = not_found_code

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_by_id(
        self,
        entity_id: int,
        restaurant_id: str,
        *,
        include_deleted: bool = False,
    ) -> OutputT:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found or soft-deleted.
        """
        entity = self.require_entity(
            entity_id, restaurant_id, include_deleted=include_deleted
        )
        return self.to_output(entity)

    def get_entity(
        self,
        entity_id: int,
        restaurant_id: str,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """Get raw entity (for internal use)."""
        return self._repo.find_by_id(
            entity_id,
            restaurant_id,
            options=options if options is not None else self._load_options(),
            include_deleted=include_deleted,
        )

    def require_entity(
        self,
        entity_id: int,
        restaurant_id: str,
        *,
        include_deleted: bool = False,
    ) -> ModelT:
        """
        Get raw entity or raise.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity(entity_id, restaurant_id, include_deleted=include_deleted)
        if entity is None:
            raise NotFoundError(
                self._entity_name,
                entity_id,
                code=self._not_found_code,
                restaurant_id=restaurant_id,
            )
        return entity

    def list_all(
        self,
        restaurant_id: str,
        *,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> list[OutputT]:
        """List all entities for the restaurant."""
        entities = self._repo.find_all(
            restaurant_id,
            options=self._load_options(),
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
            order_by=order_by,
        )
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], restaurant_id: str) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError: If data is invalid (duplicate name, bad reference).
            DatabaseError: If creation fails.
        """
        self._validate_create(data, restaurant_id)

        entity = self._model(**data, restaurant_id=restaurant_id)
        self._db.add(entity)
        self._commit(f"create {self._entity_name.lower()}", restaurant_id=restaurant_id)
        self._db.refresh(entity)

        logger.info(
            f"{self._entity_name} created",
            entity_id=entity.id,
            restaurant_id=restaurant_id,
        )
        return self.to_output(entity)

    def update(
        self,
        entity_id: int,
        data: dict[str, Any],
        restaurant_id: str,
    ) -> OutputT:
        """
        Update existing entity with the provided fields only.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            DatabaseError: If update fails.
        """
        entity = self.require_entity(entity_id, restaurant_id)
        data = self._clean_update_data(data)

        self._validate_update(entity, data, restaurant_id)

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        self._commit(
            f"update {self._entity_name.lower()}",
            entity_id=entity_id,
            restaurant_id=restaurant_id,
        )
        self._db.refresh(entity)

        logger.info(
            f"{self._entity_name} updated",
            entity_id=entity_id,
            fields=sorted(data.keys()),
        )
        return self.to_output(entity)

    def update_status(self, entity_id: int, status: str, restaurant_id: str) -> OutputT:
        """
        Fast path: change only the status column.

        Skips the full-entity validation done by update().
        """
        entity = self.require_entity(entity_id, restaurant_id)
        entity.status = status

        self._commit(
            f"update {self._entity_name.lower()} status",
            entity_id=entity_id,
            restaurant_id=restaurant_id,
        )
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} status changed", entity_id=entity_id, status=status)
        return self.to_output(entity)

    def delete(self, entity_id: int, restaurant_id: str) -> None:
        """
        Soft delete entity. The row stays in the table.

        Raises:
            NotFoundError: If entity not found (or already deleted).
            ValidationError: If other rows still depend on it.
        """
        entity = self.require_entity(entity_id, restaurant_id)

        self._validate_delete(entity, restaurant_id)

        soft_delete(self._db, entity, commit=False)
        self._commit(
            f"delete {self._entity_name.lower()}",
            entity_id=entity_id,
            restaurant_id=restaurant_id,
        )

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    def _load_options(self) -> list[Any] | None:
        """Eager-loading options applied to single and list reads."""
        return None

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], restaurant_id: str) -> None:
        """
        Validate data before create.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_update(
        self, entity: ModelT, data: dict[str, Any], restaurant_id: str
    ) -> None:
        """
        Validate data before update.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_delete(self, entity: ModelT, restaurant_id: str) -> None:
        """
        Validate before delete.

        Override to check for dependent entities.

        Raises:
            ValidationError: If deletion is not allowed.
        """
        pass

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _ensure_unique_name(
        self,
        restaurant_id: str,
        name: str,
        *,
        exclude_id: int | None = None,
    ) -> None:
        """
        Reject names already used by an active row (case-insensitive).

        Raises:
            DuplicateEntityError: If the name is taken.
        """
        if self._repo.name_exists(restaurant_id, name, exclude_id=exclude_id):
            raise DuplicateEntityError(
                self._entity_name,
                name,
                restaurant_id=restaurant_id,
            )

    def _clean_update_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Drop nulls for columns that cannot be cleared."""
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in self.nullable_fields
        }
