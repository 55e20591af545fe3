"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bandlab.config import Settings
from bandlab.interface.api.errors import register_exception_handlers
from bandlab.interface.api.routes import comments, health, posts
from bandlab.util.di.container import create_container, setup_di
from bandlab.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from; the production container
            is built when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="BandLab API",
        description="Posts with images, comments and recent-comment previews",
        version="1.0.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    if settings.cors_origins:
        app_instance.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Accept", "Origin", "X-User-Id"],
            expose_headers=["X-Next-Cursor"],
            max_age=600,  # Cache preflight requests for 10 minutes
        )

    register_exception_handlers(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
