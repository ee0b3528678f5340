"""
FastAPI Dependencies

Wires stores and services to the request's database session. Endpoints
receive ready-made collaborators and never reach for module globals, which
also lets tests swap any of them through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from visit_tracker.core.setting import Settings, get_settings
from visit_tracker.db.session import db_adapter, get_session
from visit_tracker.services.links_service import LinksService
from visit_tracker.services.settings_store import SettingsStore
from visit_tracker.services.stats_service import StatsService
from visit_tracker.services.tracking_service import TrackingService
from visit_tracker.services.visit_store import VisitStore


def get_visit_store(
    session: AsyncSession = Depends(get_session),
    app_settings: Settings = Depends(get_settings),
) -> VisitStore:
    return VisitStore(
        session,
        max_recent=app_settings.RECENT_VISITS_MAX,
        default_recent=app_settings.RECENT_VISITS_DEFAULT,
    )


def get_settings_store(session: AsyncSession = Depends(get_session)) -> SettingsStore:
    return SettingsStore(session, db_adapter)


def get_links_service(store: SettingsStore = Depends(get_settings_store)) -> LinksService:
    return LinksService(store)


def get_stats_service(
    visit_store: VisitStore = Depends(get_visit_store),
    app_settings: Settings = Depends(get_settings),
) -> StatsService:
    return StatsService(visit_store, countries_limit=app_settings.TOP_COUNTRIES_LIMIT)


def get_tracking_service(visit_store: VisitStore = Depends(get_visit_store)) -> TrackingService:
    return TrackingService(visit_store)
