"""
FastAPI application.

create_app() wires settings, state, routers and error handling; `app` is
the instance uvicorn serves.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lorekeep import __version__
from lorekeep.api.error_handling import register_exception_handlers
from lorekeep.auth.routes import router as auth_router
from lorekeep.characters.routes import router as characters_router
from lorekeep.config import Settings, get_settings
from lorekeep.integrations.sentry import init_sentry
from lorekeep.state import AppState

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown hooks."""
    settings: Settings = app.state.settings

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    logger.info(f"Lorekeep API starting in {settings.environment} mode on port {settings.port}")

    yield

    logger.info("Lorekeep API shutting down")


# =============================================================================
# App Setup
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings (tests pass a fixed secret here).
            Defaults to the cached environment settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Lorekeep API",
        description="Token-authenticated, role-gated character service",
        version=__version__,
        lifespan=lifespan,
    )

    # State is built eagerly so the app works with or without the lifespan
    app.state.settings = settings
    app.state.services = AppState.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(characters_router)

    register_exception_handlers(app)

    return app


app = create_app()
