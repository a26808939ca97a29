"""
Repository Pattern for database access.

Provides a clean abstraction layer between business logic and data access,
with built-in restaurant isolation and soft-delete lifecycle filtering.

Usage:
    from rest_api.services.crud.repository import BaseRepository, RestaurantRepository

    item_repo = RestaurantRepository(MenuItem, db)

    items = item_repo.find_all(restaurant_id)
    item = item_repo.find_by_id(42, restaurant_id)
    deleted_too = item_repo.find_by_id(42, restaurant_id, include_deleted=True)
    taken = item_repo.name_exists(restaurant_id, "Classic Burger", exclude_id=42)

    # With eager loading
    item_repo.find_all(restaurant_id, options=[selectinload(MenuItem.photos)])
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select, func, exists as sql_exists
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import Base
from shared.config.constants import LifecycleState
from shared.utils.validators import normalize_name

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Used directly for rows without their own restaurant column
    (photos, options, item links). For restaurant-owned entities,
    use RestaurantRepository instead.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_lifecycle_filter(self, query: Select, include_deleted: bool) -> Select:
        """Keep only ACTIVE rows unless deleted rows were asked for."""
        if hasattr(self._model, "lifecycle_state") and not include_deleted:
            query = query.where(self._model.lifecycle_state == LifecycleState.ACTIVE)
        return query

    def _apply_options(
        self, query: Select, options: list[Any] | None
    ) -> Select:
        """Apply eager loading options."""
        if options:
            query = query.options(*options)
        return query

    def _apply_order(self, query: Select, order_by: Any | Sequence[Any] | None) -> Select:
        """Apply one order expression or a list of them."""
        if order_by is None:
            return query
        if isinstance(order_by, (list, tuple)):
            return query.order_by(*order_by)
        return query.order_by(order_by)

    def find_by_id(
        self,
        entity_id: int,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            options: SQLAlchemy loader options (selectinload, joinedload).
            include_deleted: Include soft-deleted entities.

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_lifecycle_filter(query, include_deleted)
        query = self._apply_options(query, options)
        return self._session.scalar(query)

    def find_where(
        self,
        *criteria: Any,
        options: list[Any] | None = None,
        order_by: Any | Sequence[Any] | None = None,
    ) -> Sequence[ModelT]:
        """Find entities matching arbitrary criteria."""
        query = self._base_query().where(*criteria)
        query = self._apply_options(query, options)
        query = self._apply_order(query, order_by)
        return self._session.scalars(query).all()

    def find_first(self, *criteria: Any, order_by: Any | Sequence[Any] | None = None) -> ModelT | None:
        """First entity matching criteria, or None."""
        query = self._apply_order(self._base_query().where(*criteria), order_by)
        return self._session.scalars(query.limit(1)).first()

    def delete(self, entity: ModelT) -> None:
        """Physically delete entity from session (not committed)."""
        self._session.delete(entity)


class RestaurantRepository(BaseRepository[ModelT]):
    """
    Repository with automatic restaurant isolation.

    All queries are filtered by restaurant_id to ensure data isolation.
    The model must have a `restaurant_id` column.

    Usage:
        repo = RestaurantRepository(MenuCategory, db)
        categories = repo.find_all(restaurant_id, order_by=MenuCategory.display_order)
    """

    def _restaurant_query(self, restaurant_id: str) -> Select:
        """Create restaurant-filtered base query."""
        if not hasattr(self._model, "restaurant_id"):
            raise AttributeError(
                f"Model {self._model.__name__} does not have restaurant_id column. "
                "Use BaseRepository instead."
            )
        return self._base_query().where(self._model.restaurant_id == restaurant_id)

    def find_by_id(
        self,
        entity_id: int,
        restaurant_id: str,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """
        Find entity by ID within restaurant scope.

        Args:
            entity_id: The primary key value.
            restaurant_id: The restaurant for isolation.
            options: SQLAlchemy loader options.
            include_deleted: Include soft-deleted entities (administrative path).

        Returns:
            Entity or None if not found, deleted, or owned by another restaurant.
        """
        query = self._restaurant_query(restaurant_id).where(self._model.id == entity_id)
        query = self._apply_lifecycle_filter(query, include_deleted)
        query = self._apply_options(query, options)
        return self._session.scalar(query)

    def find_all(
        self,
        restaurant_id: str,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | Sequence[Any] | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities within restaurant scope.

        Args:
            restaurant_id: The restaurant for isolation.
            options: SQLAlchemy loader options.
            include_deleted: Include soft-deleted entities.
            limit: Maximum results.
            offset: Skip count.
            order_by: Order expression or list of expressions.

        Returns:
            Sequence of entities.
        """
        query = self._restaurant_query(restaurant_id)
        query = self._apply_lifecycle_filter(query, include_deleted)
        query = self._apply_options(query, options)
        query = self._apply_order(query, order_by)

        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return self._session.scalars(query).all()

    def find_by_ids(
        self,
        entity_ids: Sequence[int],
        restaurant_id: str,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> Sequence[ModelT]:
        """
        Find multiple entities by IDs within restaurant scope.

        Returns:
            Sequence of found entities (may be less than requested).
        """
        if not entity_ids:
            return []

        query = self._restaurant_query(restaurant_id).where(self._model.id.in_(entity_ids))
        query = self._apply_lifecycle_filter(query, include_deleted)
        query = self._apply_options(query, options)
        return self._session.scalars(query).all()

    def exists(self, entity_id: int, restaurant_id: str) -> bool:
        """Check if an active entity exists within restaurant scope."""
        query = select(
            sql_exists().where(
                self._model.id == entity_id,
                self._model.restaurant_id == restaurant_id,
                self._model.lifecycle_state == LifecycleState.ACTIVE,
            )
        )
        return self._session.scalar(query) or False

    def name_exists(
        self,
        restaurant_id: str,
        name: str,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Case-insensitive name check among the restaurant's active rows.

        Args:
            restaurant_id: The restaurant for isolation.
            name: Candidate name (compared trimmed and lower-cased).
            exclude_id: Ignore this row (the entity being updated).
        """
        criteria = [
            self._model.restaurant_id == restaurant_id,
            self._model.lifecycle_state == LifecycleState.ACTIVE,
            func.lower(self._model.name) == normalize_name(name).lower(),
        ]
        if exclude_id is not None:
            criteria.append(self._model.id != exclude_id)

        return self._session.scalar(select(sql_exists().where(*criteria))) or False
