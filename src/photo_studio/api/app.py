"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photo_studio.api.auth import router as auth_router
from photo_studio.api.bookings import router as bookings_router
from photo_studio.api.cron import router as cron_router
from photo_studio.api.errors import register_error_handlers
from photo_studio.api.galleries import router as galleries_router
from photo_studio.api.invoices import router as invoices_router
from photo_studio.api.users import router as users_router
from photo_studio.app_logging import configure_logging
from photo_studio.config import parse_origins
from photo_studio.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        settings = state_container.settings
        if settings.admin_email and settings.admin_password:
            try:
                state_container.user_service.ensure_admin(
                    settings.admin_email, settings.admin_password, settings.admin_name
                )
            except Exception:
                logger.exception("Failed to seed admin account")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(bookings_router)
    app.include_router(galleries_router)
    app.include_router(cron_router)
    app.include_router(invoices_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
