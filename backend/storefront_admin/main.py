"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_admin.config import get_settings
from storefront_admin.infrastructure.dependencies import (
    get_table_registry,
    get_table_session_manager,
)
from storefront_admin.infrastructure.logging.log_config import setup_logging
from storefront_admin.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, close table sessions on shutdown."""
    settings = get_settings()
    setup_logging()

    registry = get_table_registry()
    logger.info(
        "%s %s (%s) — %d tables registered",
        settings.app_title, settings.app_version, settings.app_env, len(registry),
    )
    if not settings.erpnext_api_url:
        logger.warning("ERPNEXT_API_URL is not configured; ERPNext tables will report a configuration error.")

    yield

    # Shutdown
    sessions = get_table_session_manager()
    await sessions.shutdown()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
