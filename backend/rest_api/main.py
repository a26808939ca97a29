"""
REST API main application.
Entry point for the FastAPI menu management server.

Run with:
    python -m rest_api.main
    uvicorn rest_api.main:app --reload --port 3000
"""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.security.rate_limit import limiter
from rest_api.core.cors import configure_cors
from rest_api.core.exception_handlers import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.admin import router as admin_router
from rest_api.routers.public import health_router, menu_router


def create_app() -> FastAPI:
    """Build the FastAPI application with middlewares, routers and static uploads."""
    app = FastAPI(
        title="Smart Restaurant Menu API",
        description="Menu management for restaurant admins and the guest menu",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter

    register_exception_handlers(app)

    # Middlewares run in reverse order of registration:
    # correlation ID first, then CORS, then content-type and security headers
    register_middlewares(app)
    configure_cors(app)
    app.add_middleware(CorrelationIdMiddleware)

    # Routers
    app.include_router(health_router)
    app.include_router(menu_router)
    app.include_router(admin_router)

    # Uploaded photos (directory is created by the lifespan)
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
