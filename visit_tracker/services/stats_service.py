"""
Statistics Service

Builds the admin stats report: visit totals and top countries for four
fixed windows ending "now".

Windows (all boundaries inclusive, times in ms since epoch):
- day:   [start_of_day(now), now]
- week:  [start_of_day(now) - 6 days, now]
- month: [start_of_day(now) - 29 days, now]
- all:   [0, now]

Day offsets are fixed 24h steps from local midnight.
"""

from datetime import datetime
from typing import Callable, Optional

from visit_tracker.services.visit_store import VisitStore, now_ms

DAY_MS = 24 * 3600 * 1000

WINDOW_NAMES = ("day", "week", "month", "all")


def start_of_day(t: int) -> int:
    """Truncate a ms timestamp to local midnight."""
    moment = datetime.fromtimestamp(t / 1000)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp() * 1000)


def compute_windows(now: int) -> dict[str, tuple[int, int]]:
    """Window name -> (start, end) for the given "now"."""
    day_start = start_of_day(now)
    return {
        "day": (day_start, now),
        "week": (day_start - 6 * DAY_MS, now),
        "month": (day_start - 29 * DAY_MS, now),
        "all": (0, now),
    }


class StatsService:
    """
    Aggregates visit counts per window from a VisitStore.

    Holds no storage of its own; every figure comes from the store.
    """

    def __init__(
        self,
        visit_store: VisitStore,
        clock: Callable[[], int] = now_ms,
        countries_limit: int = 10,
    ):
        """
        Args:
            visit_store: Source of counts
            clock: Returns "now" in ms since epoch
            countries_limit: Countries listed per window
        """
        self.visit_store = visit_store
        self.clock = clock
        self.countries_limit = countries_limit

    async def get_report(self, now: Optional[int] = None) -> dict:
        """
        Returns:
            {"day": {"visits": int, "countries": [{"country": str, "c": int}, ...]},
             "week": ..., "month": ..., "all": ...}
        """
        if now is None:
            now = self.clock()

        report = {}
        for name, (start, end) in compute_windows(now).items():
            visits = await self.visit_store.count_in_range(start, end)
            countries = await self.visit_store.top_countries(start, end, self.countries_limit)
            report[name] = {
                "visits": visits,
                "countries": [{"country": country, "c": c} for country, c in countries],
            }
        return report
