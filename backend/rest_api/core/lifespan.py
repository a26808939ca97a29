"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from shared.infrastructure.db import engine
from shared.config.settings import settings
from shared.config.logging import setup_logging, rest_api_logger as logger
from rest_api.models import Base


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    # Validate production settings before startup (only reports in production)
    config_errors = settings.validate_production_settings()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error", error=error)
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(config_errors)}. "
            "Server will not start with insecure configuration."
        )
    if not settings.is_production:
        logger.warning(
            "Running with development settings (not suitable for production)",
            env=settings.environment,
        )

    # Uploaded photos are served from this directory
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    logger.info("Starting menu API", port=settings.rest_api_port, env=settings.environment)

    yield

    # Shutdown
    logger.info("Shutting down menu API")
