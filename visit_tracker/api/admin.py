"""
Admin Endpoints

Everything here sits behind HTTP Basic authentication (require_admin is
attached at router level):
- GET  /api/admin/stats: visit totals and top countries per window
- GET  /api/admin/visits: most recent visits
- GET  /api/admin/links: the links settings document
- POST /api/admin/links: replace the links document (merged onto defaults)
- GET  /admin: the admin page

Storage failures surface as HTTP 500; nothing is retried.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import FileResponse

from visit_tracker.api.dependencies import get_links_service, get_stats_service, get_visit_store
from visit_tracker.api.endpoints import STATIC_DIR, read_json_body
from visit_tracker.api.schemas import LinksDocument, OkResponse, StatsResponse, VisitOut
from visit_tracker.core.exceptions import DatabaseError
from visit_tracker.core.security import require_admin
from visit_tracker.core.setting import Settings, get_settings
from visit_tracker.core.validators import parse_limit
from visit_tracker.services.links_service import LinksService
from visit_tracker.services.stats_service import StatsService
from visit_tracker.services.visit_store import VisitStore

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _storage_failure(e: DatabaseError) -> HTTPException:
    logger.error(str(e), exc_info=e.original_error or e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e)
    )


@router.get(
    "/api/admin/stats",
    response_model=StatsResponse,
    summary="Visit statistics",
    description="Visit totals and top countries for the day, week, month and all-time windows"
)
async def get_stats(
    stats_service: StatsService = Depends(get_stats_service),
) -> StatsResponse:
    try:
        report = await stats_service.get_report()
    except DatabaseError as e:
        raise _storage_failure(e)

    return StatsResponse(**report)


@router.get(
    "/api/admin/visits",
    response_model=list[VisitOut],
    summary="Recent visits",
    description="Newest visits first; limit defaults to 100 and is capped at 500"
)
async def get_recent_visits(
    limit: Optional[str] = Query(default=None),
    visit_store: VisitStore = Depends(get_visit_store),
    app_settings: Settings = Depends(get_settings),
) -> list[VisitOut]:
    """
    Args:
        limit: Raw ?limit= value. Non-numeric or negative values fall back
            to the default rather than failing the request.
    """
    row_limit = parse_limit(
        limit,
        default=app_settings.RECENT_VISITS_DEFAULT,
        maximum=app_settings.RECENT_VISITS_MAX,
    )

    try:
        visits = await visit_store.recent(row_limit)
    except DatabaseError as e:
        raise _storage_failure(e)

    return [VisitOut.model_validate(visit) for visit in visits]


@router.get(
    "/api/admin/links",
    response_model=LinksDocument,
    summary="Get links",
    description="Current links document, or the defaults if none was saved"
)
async def get_links(
    links_service: LinksService = Depends(get_links_service),
) -> dict:
    try:
        return await links_service.get_links()
    except DatabaseError as e:
        raise _storage_failure(e)


@router.post(
    "/api/admin/links",
    response_model=OkResponse,
    summary="Save links",
    description="Merges the payload onto the defaults and replaces the stored document"
)
async def save_links(
    request: Request,
    links_service: LinksService = Depends(get_links_service),
) -> OkResponse:
    payload = await read_json_body(request)

    try:
        await links_service.save_links(payload)
    except DatabaseError as e:
        raise _storage_failure(e)

    logger.info("Links document updated")
    return OkResponse(ok=True)


@router.get("/admin", include_in_schema=False)
async def admin_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "admin.html", media_type="text/html")
