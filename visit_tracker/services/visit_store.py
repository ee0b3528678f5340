"""
Visit Store

Append-only access to the visits table:
- append: record one page view
- count_in_range / top_countries: aggregate queries over a time window
- recent: newest-first listing for the admin UI

Design Decisions:
- The clock is injected so the store owns timestamp assignment while tests
  stay deterministic
- Every append commits before returning, so a reported success is durable
- No update or delete operations exist
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visit_tracker.core.exceptions import DatabaseError
from visit_tracker.db.models import Visit

MAX_RECENT = 500
DEFAULT_RECENT = 100


def now_ms() -> int:
    """Milliseconds since epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class VisitInput:
    """Server-enriched visit fields, before id and timestamp are assigned."""
    ip: str = ""
    user_agent: str = ""
    country: str = "Unknown"
    path: str = "/"
    referrer: str = ""


class VisitStore:
    """
    Storage operations for recorded visits.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], int] = now_ms,
        max_recent: int = MAX_RECENT,
        default_recent: int = DEFAULT_RECENT,
    ):
        """
        Args:
            session: Async database session
            clock: Returns the current time in milliseconds since epoch
            max_recent: Hard cap on rows returned by recent()
            default_recent: Rows returned by recent() for a missing or negative limit
        """
        self.session = session
        self.clock = clock
        self.max_recent = max_recent
        self.default_recent = min(default_recent, max_recent)

    async def append(self, visit: VisitInput) -> int:
        """
        Persist a visit and return its id.

        Raises:
            DatabaseError: If the insert or commit fails (transaction is rolled back)
        """
        record = Visit(
            ts=self.clock(),
            ip=visit.ip,
            ua=visit.user_agent,
            country=visit.country,
            path=visit.path,
            ref=visit.referrer,
        )

        try:
            self.session.add(record)
            await self.session.flush()
            visit_id = record.id
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(f"Failed to record visit: {e}", original_error=e)

        return visit_id

    async def count_in_range(self, start: int, end: int) -> int:
        """Number of visits with start <= ts <= end."""
        statement = select(func.count(Visit.id)).where(Visit.ts.between(start, end))
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to count visits: {e}", original_error=e)
        return result.scalar() or 0

    async def top_countries(self, start: int, end: int, limit: int = 10) -> list[tuple[str, int]]:
        """
        Visit counts per country within [start, end].

        Ordered by count descending, then country name so equal counts come
        back in a stable order. Truncated to limit entries.
        """
        count = func.count(Visit.id).label("c")
        statement = (
            select(Visit.country, count)
            .where(Visit.ts.between(start, end))
            .group_by(Visit.country)
            .order_by(count.desc(), Visit.country.asc())
            .limit(limit)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to group visits by country: {e}", original_error=e)
        return [(country, c) for country, c in result.all()]

    async def recent(self, limit: Optional[int] = None) -> list[Visit]:
        """
        Most recent visits, newest first by id.

        Returns at most min(limit, max_recent) rows (500 unless configured).
        A missing or negative limit means default_recent (100 unless configured).
        """
        if limit is None or limit < 0:
            limit = self.default_recent
        limit = min(limit, self.max_recent)

        statement = select(Visit).order_by(Visit.id.desc()).limit(limit)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to list recent visits: {e}", original_error=e)
        return list(result.scalars().all())
