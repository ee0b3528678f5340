"""
Shared test fixtures.

Store-level tests get their own SQLite file per test. API tests run the real
application against a throwaway database whose URL is set here, before the
application modules are imported and build their engine.
"""

import asyncio
import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="visit-tracker-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'app.sqlite'}"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from visit_tracker.core.setting import Settings, get_settings  # noqa: E402
from visit_tracker.db.session import engine as app_engine  # noqa: E402
from visit_tracker.db.sqlite_adapter import SQLiteAdapter  # noqa: E402
from visit_tracker.main import app  # noqa: E402

ADMIN_USER = "tester"
ADMIN_PASS = "s3cret-pass"


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def adapter() -> SQLiteAdapter:
    return SQLiteAdapter()


@pytest_asyncio.fixture
async def engine(tmp_path, adapter):
    """Fresh database file with all tables created."""
    test_engine = adapter.create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.sqlite'}")
    async with test_engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with AsyncSession(engine, expire_on_commit=False) as db_session:
        yield db_session


async def _reset_schema() -> None:
    async with app_engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.drop_all)
        await connection.run_sync(SQLModel.metadata.create_all)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ADMIN_USER=ADMIN_USER, ADMIN_PASS=ADMIN_PASS)


@pytest.fixture
def client(test_settings):
    """
    TestClient over a freshly emptied application database.

    Entering the client runs the startup hook, which seeds the default links.
    """
    asyncio.run(_reset_schema())
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_auth() -> tuple[str, str]:
    return (ADMIN_USER, ADMIN_PASS)
