"""
Public Endpoints

Unauthenticated surface used by tracked pages:
- POST /api/track: record a visit beacon
- GET /track.js: the snippet pages include to send that beacon

The tracking endpoint always answers 200 {"ok": true}. It is called
fire-and-forget from arbitrary pages, so malformed bodies fall back to
defaults and storage failures are logged server-side only.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from visit_tracker.api.dependencies import get_tracking_service
from visit_tracker.api.schemas import OkResponse
from visit_tracker.services.tracking_service import TrackingService

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Returns None for an empty, unparseable or too deeply nested body
    instead of raising, so callers can fall back to defaults.
    """
    try:
        return await request.json()
    except (ValueError, RecursionError) as e:
        logger.debug(f"Ignoring undecodable body on {request.url.path}: {type(e).__name__}")
        return None


@router.post(
    "/api/track",
    response_model=OkResponse,
    summary="Record a page view",
    description="Accepts {path, ref}; address, user agent and country are derived from headers"
)
async def track_visit(
    request: Request,
    tracking: TrackingService = Depends(get_tracking_service),
) -> OkResponse:
    payload = await read_json_body(request)
    peer_host = request.client.host if request.client else None

    await tracking.track(payload, request.headers, peer_host)

    return OkResponse(ok=True)


@router.get(
    "/track.js",
    summary="Tracking script",
    description="JavaScript snippet that posts the current path and referrer to /api/track"
)
async def tracking_script() -> FileResponse:
    return FileResponse(STATIC_DIR / "track.js", media_type="application/javascript")
