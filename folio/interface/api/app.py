"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.config import Settings
from folio.interface.api.routes import (
    admin_posts,
    comments,
    files,
    health,
    posts,
    uploads,
)
from folio.interface.error import register_error_handlers
from folio.util.di.container import create_container, setup_di
from folio.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the DI container on shutdown.

    Closing finalizes app-scoped resources such as the rate limiter's
    sweep task and the database engine.
    """
    yield
    container = getattr(app.state, "dishka_container", None)
    if container is not None:
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to serve from (defaults to the production one)

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    settings = Settings()

    # Remote image fetches show up as spans
    instrument_httpx()

    app_instance = FastAPI(
        title="Folio API",
        description="Backend API for a personal site with an admin-managed blog, image uploads and threaded comments",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type", "Retry-After"],
        max_age=600,
    )

    register_error_handlers(app_instance)

    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(admin_posts.router)
    app_instance.include_router(uploads.router)
    app_instance.include_router(files.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
