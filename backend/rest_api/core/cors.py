"""
CORS configuration for the admin dashboard and the guest menu app.

Without ALLOWED_ORIGINS every origin may call the API (credentials are then
disabled, browsers refuse "*" with cookies). Production must list origins.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings
from shared.infrastructure.correlation import REQUEST_ID_HEADER, RESTAURANT_ID_HEADER


ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ALLOWED_HEADERS = [
    "Content-Type",
    "Accept",
    "Accept-Language",
    RESTAURANT_ID_HEADER,
    REQUEST_ID_HEADER,
]


def get_cors_origins() -> list[str]:
    """Origins from ALLOWED_ORIGINS (comma-separated), or ["*"] when unset."""
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    return origins or ["*"]


def configure_cors(app: FastAPI) -> None:
    """Add the CORS middleware to the application."""
    origins = get_cors_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=0 if settings.environment == "development" else 600,
    )
