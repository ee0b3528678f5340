"""
Tests for the time-window aggregation.
"""

from datetime import datetime

import pytest

from visit_tracker.services.stats_service import DAY_MS, StatsService, compute_windows, start_of_day
from visit_tracker.services.visit_store import VisitInput, VisitStore


def local_ms(*args) -> int:
    return int(datetime(*args).timestamp() * 1000)


class TestStartOfDay:
    """Truncation to local midnight."""

    def test_truncates_to_local_midnight(self):
        assert start_of_day(local_ms(2024, 3, 10, 15, 30, 12, 345000)) == local_ms(2024, 3, 10)

    def test_midnight_is_unchanged(self):
        midnight = local_ms(2024, 3, 10)
        assert start_of_day(midnight) == midnight

    def test_last_millisecond_of_day(self):
        assert start_of_day(local_ms(2024, 3, 11) - 1) == local_ms(2024, 3, 10)


class TestComputeWindows:
    """Window boundaries relative to "now"."""

    def test_window_bounds(self):
        now = local_ms(2024, 6, 15, 9, 0)
        day_start = local_ms(2024, 6, 15)

        windows = compute_windows(now)

        assert windows["day"] == (day_start, now)
        assert windows["week"] == (day_start - 6 * DAY_MS, now)
        assert windows["month"] == (day_start - 29 * DAY_MS, now)
        assert windows["all"] == (0, now)
        assert list(windows) == ["day", "week", "month", "all"]


class TestStatsReport:
    """Report built from a real visit store."""

    @pytest.mark.asyncio
    async def test_counts_per_window_include_boundaries(self, session, clock):
        now = local_ms(2024, 6, 15, 9, 0)
        windows = compute_windows(now)
        day_start = windows["day"][0]
        week_start = windows["week"][0]
        month_start = windows["month"][0]

        store = VisitStore(session, clock=clock)
        for ts in (
            now,                # day
            day_start,          # day (boundary)
            day_start - 1,      # week
            week_start,         # week (boundary)
            week_start - 1,     # month
            month_start,        # month (boundary)
            month_start - 1,    # all
            now + 1,            # after "now": in no window
        ):
            clock.now = ts
            await store.append(VisitInput(country="DE"))

        report = await StatsService(store).get_report(now=now)

        assert report["day"]["visits"] == 2
        assert report["week"]["visits"] == 4
        assert report["month"]["visits"] == 6
        assert report["all"]["visits"] == 7

    @pytest.mark.asyncio
    async def test_report_shape_and_country_order(self, session, clock):
        store = VisitStore(session, clock=clock)
        for country, count in (("A", 3), ("B", 5), ("Unknown", 1)):
            for _ in range(count):
                await store.append(VisitInput(country=country))

        report = await StatsService(store, clock=clock).get_report()

        assert set(report) == {"day", "week", "month", "all"}
        assert report["all"] == {
            "visits": 9,
            "countries": [
                {"country": "B", "c": 5},
                {"country": "A", "c": 3},
                {"country": "Unknown", "c": 1},
            ],
        }

    @pytest.mark.asyncio
    async def test_countries_limit(self, session, clock):
        store = VisitStore(session, clock=clock)
        for country in ("AA", "BB", "CC", "DD"):
            await store.append(VisitInput(country=country))

        report = await StatsService(store, clock=clock, countries_limit=2).get_report()

        assert [entry["country"] for entry in report["day"]["countries"]] == ["AA", "BB"]

    @pytest.mark.asyncio
    async def test_empty_store(self, session, clock):
        report = await StatsService(VisitStore(session), clock=clock).get_report()

        for name in ("day", "week", "month", "all"):
            assert report[name] == {"visits": 0, "countries": []}
