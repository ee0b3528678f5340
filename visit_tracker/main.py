"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes (public tracking surface and the authenticated admin API)
- Middleware (request logging)
- Startup: schema bootstrap and default links seeding
"""

import logging

from fastapi import FastAPI

from visit_tracker.api import admin, endpoints
from visit_tracker.core.setting import PLACEHOLDER_ADMIN_PASS, settings
from visit_tracker.db.session import async_session_maker, db_adapter, init_db
from visit_tracker.middleware.logging import add_logging_middleware
from visit_tracker.services.links_service import LinksService
from visit_tracker.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Visit Tracker",
    description="Page view tracking with an authenticated stats and links admin API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

add_logging_middleware(app)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        Health status of the service
    """
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["Tracking"])
app.include_router(admin.router, tags=["Admin"])


@app.on_event("startup")
async def startup_event():
    """Create missing tables and seed the default links document."""
    if settings.ADMIN_PASS == PLACEHOLDER_ADMIN_PASS:
        logger.warning("ADMIN_PASS is still the placeholder value; set it before deploying")

    await init_db()

    async with async_session_maker() as session:
        await LinksService(SettingsStore(session, db_adapter)).ensure_defaults()
