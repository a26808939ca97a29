"""
Admin API router - combines all menu administration sub-routers.

Organized by domain:

- categories: Category CRUD and status
- items: Menu item CRUD, status and modifier attachments
- photos: Menu item photo upload, ordering and primary selection
- modifier_groups: Modifier group CRUD and bulk save

All routes are prefixed with /api/admin/menu and scoped to the restaurant
named in the X-Restaurant-ID header.
"""

from fastapi import APIRouter

from .categories import router as categories_router
from .items import router as items_router
from .photos import router as photos_router
from .modifier_groups import router as modifier_groups_router


# Create the main admin router
router = APIRouter(prefix="/api/admin/menu")

router.include_router(categories_router)
router.include_router(items_router)
router.include_router(photos_router)
router.include_router(modifier_groups_router)


__all__ = ["router"]
