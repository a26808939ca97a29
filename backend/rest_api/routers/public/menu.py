"""
Public guest menu endpoint (no authentication).
Rate limited per client IP.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import ApiResponse, GuestMenu, SortOrderValue
from rest_api.routers._common import get_guest_restaurant_id
from rest_api.services.catalog import GuestMenuService


router = APIRouter(prefix="/api", tags=["menu"])


@router.get("/menu", response_model=ApiResponse[GuestMenu])
@limiter.limit(settings.guest_menu_rate_limit)
def get_guest_menu(
    request: Request,
    search: str | None = Query(default=None, max_length=Limits.ITEM_NAME_MAX),
    category_id: int | None = None,
    is_chef_recommended: bool = False,
    sort_by: str = "name",
    sort_order: SortOrderValue = "asc",
    db: Session = Depends(get_db),
    restaurant_id: str = Depends(get_guest_restaurant_id),
) -> ApiResponse[GuestMenu]:
    """
    Menu shown to guests: active categories with their available items,
    photos and modifier groups.
    """
    menu = GuestMenuService(db).get_menu(
        restaurant_id,
        settings.restaurant_name,
        search=search,
        category_id=category_id,
        is_chef_recommended=is_chef_recommended,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return ApiResponse(data=menu)
