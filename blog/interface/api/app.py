"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog.config import Settings
from blog.interface.api.errors import register_exception_handlers
from blog.interface.api.routes import categories, health, posts, tags
from blog.util.di.container import create_container, setup_di
from blog.util.observability import instrument_fastapi


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function. In production
    start_app.py handles it.

    Args:
        container: DI container to serve requests from. Defaults to the
            production container.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Blog API",
        description="Backend API for a blog: categories, posts, tags and likes",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(tags.router)

    return app_instance


# Note: Logfire must be configured before this module is imported
app = create_app()
