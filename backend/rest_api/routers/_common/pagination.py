"""
Standardized page/limit pagination for list endpoints.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/items")
    def list_items(
        pagination: Pagination = Depends(get_pagination),
        db: Session = Depends(get_db),
    ):
        items, total = service.list_items(restaurant_id, page=pagination.page, limit=pagination.limit)
        return PaginatedResponse(data=items, pagination=pagination.meta(total))
"""

from dataclasses import dataclass

from fastapi import Query

from shared.config.constants import Limits
from shared.utils.schemas import PaginationMeta


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` rows; 0 when there are none."""
    if total <= 0 or limit <= 0:
        return 0
    return (total + limit - 1) // limit


@dataclass
class Pagination:
    """
    Pagination parameters with validation.

    Attributes:
        page: 1-indexed page number
        limit: Items per page (1 to max_limit)
        max_limit: Maximum allowed limit
    """

    page: int
    limit: int
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        """Validate and normalize values."""
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), self.max_limit)

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PaginationMeta:
        """Pagination block for the response envelope."""
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=total,
            total_pages=total_pages(total, self.limit),
        )


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, limit=limit)
