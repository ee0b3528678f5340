"""
Tests for the visit store: append, window counts, country grouping and the
recent listing.
"""

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from visit_tracker.core.exceptions import DatabaseError
from visit_tracker.db.models import Visit
from visit_tracker.services.visit_store import VisitInput, VisitStore


async def _bulk_insert(session, count: int, start_ts: int = 1_000) -> None:
    session.add_all(
        [Visit(ts=start_ts + i, ip="", ua="", country="Unknown", path=f"/p{i}", ref="") for i in range(count)]
    )
    await session.commit()


class TestAppend:
    """Recording visits."""

    @pytest.mark.asyncio
    async def test_append_assigns_increasing_ids_and_clock_time(self, session, clock):
        store = VisitStore(session, clock=clock)

        first_id = await store.append(VisitInput(ip="1.1.1.1", country="DE", path="/a"))
        clock.now += 5
        second_id = await store.append(VisitInput(ip="2.2.2.2", country="FR", path="/b"))

        assert second_id > first_id

        visits = await store.recent(10)
        assert [v.id for v in visits] == [second_id, first_id]
        assert visits[0].ts == clock.now
        assert visits[1].ts == clock.now - 5
        assert visits[1].ip == "1.1.1.1"
        assert visits[1].path == "/a"

    @pytest.mark.asyncio
    async def test_append_defaults(self, session, clock):
        store = VisitStore(session, clock=clock)

        await store.append(VisitInput())

        (visit,) = await store.recent(1)
        assert visit.path == "/"
        assert visit.ref == ""
        assert visit.ip == ""
        assert visit.ua == ""
        assert visit.country == "Unknown"

    @pytest.mark.asyncio
    async def test_append_is_visible_to_a_new_session(self, engine, session, clock):
        """A successful append is committed, not just flushed."""
        await VisitStore(session, clock=clock).append(VisitInput(path="/durable"))

        async with AsyncSession(engine) as other:
            visits = await VisitStore(other).recent(5)

        assert [v.path for v in visits] == ["/durable"]

    @pytest.mark.asyncio
    async def test_append_without_schema_raises_database_error(self, tmp_path, adapter, clock):
        bare_engine = adapter.create_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.sqlite'}")
        try:
            async with AsyncSession(bare_engine) as bare_session:
                store = VisitStore(bare_session, clock=clock)
                with pytest.raises(DatabaseError):
                    await store.append(VisitInput())
        finally:
            await bare_engine.dispose()


class TestCountInRange:
    """Inclusive window counts."""

    @pytest.mark.asyncio
    async def test_boundaries_are_inclusive(self, session, clock):
        store = VisitStore(session, clock=clock)
        for ts in (99, 100, 150, 200, 201):
            clock.now = ts
            await store.append(VisitInput())

        assert await store.count_in_range(100, 200) == 3
        assert await store.count_in_range(100, 100) == 1
        assert await store.count_in_range(0, 1_000) == 5
        assert await store.count_in_range(300, 400) == 0


class TestTopCountries:
    """Grouping by country."""

    @pytest.mark.asyncio
    async def test_ordered_by_count_descending(self, session, clock):
        store = VisitStore(session, clock=clock)
        for country, count in (("A", 3), ("B", 5), ("Unknown", 1)):
            for _ in range(count):
                await store.append(VisitInput(country=country))

        result = await store.top_countries(0, clock.now, limit=10)

        assert result == [("B", 5), ("A", 3), ("Unknown", 1)]

    @pytest.mark.asyncio
    async def test_truncated_to_limit(self, session, clock):
        store = VisitStore(session, clock=clock)
        for country, count in (("A", 3), ("B", 5), ("Unknown", 1)):
            for _ in range(count):
                await store.append(VisitInput(country=country))

        assert await store.top_countries(0, clock.now, limit=2) == [("B", 5), ("A", 3)]

    @pytest.mark.asyncio
    async def test_ties_ordered_by_country_name(self, session, clock):
        store = VisitStore(session, clock=clock)
        for country in ("US", "DE", "FR", "DE", "US", "FR"):
            await store.append(VisitInput(country=country))

        result = await store.top_countries(0, clock.now, limit=10)

        assert result == [("DE", 2), ("FR", 2), ("US", 2)]

    @pytest.mark.asyncio
    async def test_only_counts_visits_in_range(self, session, clock):
        store = VisitStore(session, clock=clock)
        clock.now = 10
        await store.append(VisitInput(country="OLD"))
        clock.now = 20
        await store.append(VisitInput(country="NEW"))

        assert await store.top_countries(15, 25) == [("NEW", 1)]


class TestRecent:
    """Newest-first listing with a bounded limit."""

    @pytest.mark.asyncio
    async def test_newest_first(self, session, clock):
        store = VisitStore(session, clock=clock)
        for path in ("/one", "/two", "/three"):
            await store.append(VisitInput(path=path))

        visits = await store.recent(2)

        assert [v.path for v in visits] == ["/three", "/two"]

    @pytest.mark.asyncio
    async def test_returns_everything_when_fewer_than_limit(self, session, clock):
        store = VisitStore(session, clock=clock)
        await store.append(VisitInput(path="/only"))

        assert len(await store.recent(50)) == 1

    @pytest.mark.asyncio
    async def test_capped_at_500(self, session):
        await _bulk_insert(session, 510)

        visits = await VisitStore(session).recent(10_000)

        assert len(visits) == 500
        assert visits[0].path == "/p509"

    @pytest.mark.asyncio
    async def test_cap_follows_configured_maximum(self, session):
        await _bulk_insert(session, 610)

        assert len(await VisitStore(session, max_recent=600).recent(10_000)) == 600
        assert len(await VisitStore(session, max_recent=20).recent(10_000)) == 20

    @pytest.mark.asyncio
    async def test_configured_default_used_without_limit(self, session):
        await _bulk_insert(session, 30)

        assert len(await VisitStore(session, default_recent=7).recent()) == 7
        assert len(await VisitStore(session, max_recent=5, default_recent=7).recent()) == 5

    @pytest.mark.asyncio
    async def test_missing_or_negative_limit_uses_default(self, session):
        await _bulk_insert(session, 120)
        store = VisitStore(session)

        assert len(await store.recent()) == 100
        assert len(await store.recent(-3)) == 100

    @pytest.mark.asyncio
    async def test_zero_limit_returns_nothing(self, session):
        await _bulk_insert(session, 3)

        assert await VisitStore(session).recent(0) == []
