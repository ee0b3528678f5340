"""
Tracking Service

Turns a tracking beacon into a stored visit. Only path and referrer come
from the client; address, user agent and country are derived from the
request headers on the server.

Failures never reach the caller: the beacon is fired from arbitrary pages
and has nobody to report an error to. They are logged and dropped, with no
retry and no queue.
"""

import logging
from typing import Any, Mapping, Optional

from visit_tracker.core.validators import client_ip, detect_country, string_or_default
from visit_tracker.services.visit_store import VisitInput, VisitStore

logger = logging.getLogger(__name__)


def build_visit(payload: Any, headers: Mapping[str, str], peer_host: Optional[str]) -> VisitInput:
    """
    Combine client fields with server-derived request metadata.

    Args:
        payload: Decoded request body; anything other than an object counts as {}
        headers: Request headers (case-insensitive lookups with lowercase names)
        peer_host: Socket peer address, if known
    """
    body = payload if isinstance(payload, dict) else {}
    return VisitInput(
        ip=client_ip(headers, peer_host),
        user_agent=headers.get("user-agent") or "",
        country=detect_country(headers),
        path=string_or_default(body.get("path"), "/"),
        referrer=string_or_default(body.get("ref"), ""),
    )


class TrackingService:
    """
    Records beacons into a VisitStore.
    """

    def __init__(self, visit_store: VisitStore):
        self.visit_store = visit_store

    async def track(self, payload: Any, headers: Mapping[str, str], peer_host: Optional[str]) -> bool:
        """
        Record one visit.

        Returns:
            True if the visit was stored, False if recording failed
        """
        try:
            visit = build_visit(payload, headers, peer_host)
            await self.visit_store.append(visit)
            return True
        except Exception as e:
            logger.error(f"Failed to record visit: {e}", exc_info=True)
            return False
