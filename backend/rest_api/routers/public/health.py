"""
Health check endpoints for the REST API.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.infrastructure.storage import PhotoStorage, get_photo_storage
from shared.utils.health import (
    HealthStatus,
    health_check_with_timeout,
    aggregate_health_checks,
)


router = APIRouter(prefix="/api", tags=["health"])

SERVICE_NAME = "menu-api"


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": HealthStatus.HEALTHY.value,
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="database")
async def check_database(db: Session) -> dict:
    """Check database connectivity."""
    db.execute(text("SELECT 1"))
    return {"dialect": db.get_bind().dialect.name}


@health_check_with_timeout(timeout=3.0, component="uploads")
async def check_uploads(storage: PhotoStorage) -> bool:
    """Check that the upload directory accepts writes."""
    return storage.is_writable()


@router.get("/health/detailed")
async def detailed_health_check(
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """
    Detailed health check that verifies the database and the upload directory.

    Returns 503 Service Unavailable if any dependency is down.
    """
    results = await aggregate_health_checks([
        check_database(db),
        check_uploads(storage),
    ])

    checks = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "status": results["status"],
        "dependencies": results["components"],
    }

    if results["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(content=checks, status_code=503)

    return checks
