"""
Database Session Management

This module handles async database connections using SQLAlchemy's async engine.
Uses the database abstraction layer so the rest of the codebase never deals
with backend-specific configuration.

Key Features:
- Database abstraction: engine and upsert syntax come from the adapter
- Async session management: one session per request
- Error handling: Automatic rollback on exceptions
- Schema bootstrap: missing tables are created at startup
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from visit_tracker.core.setting import settings
from visit_tracker.db import models  # noqa: F401  (registers tables on SQLModel.metadata)
from visit_tracker.db.sqlite_adapter import get_database_adapter

logger = logging.getLogger(__name__)

db_adapter = get_database_adapter()

engine = db_adapter.create_engine(
    settings.DATABASE_URL
)

async_session_maker = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    This function:
    - Creates a new async session
    - Yields it to the endpoint
    - Commits on success, rolls back on exception
    - Closes the session through the context manager
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(target: AsyncEngine = engine) -> None:
    """
    Create any missing tables.

    Safe to call on every startup; existing tables are left untouched.
    Managed deployments can run the Alembic migrations instead.
    """
    async with target.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema ready (%s)", db_adapter.get_dialect_name())
