"""
SQLite Database Adapter

This module implements the DatabaseAdapter interface for SQLite.
All SQLite-specific configuration and behavior is encapsulated here.

Key characteristics:
- File-based (single .sqlite file)
- Single writer at a time; WAL journal mode lets readers proceed while
  a write transaction is open
- Native INSERT ... ON CONFLICT DO UPDATE for the settings upsert
"""

from typing import Any, Sequence

from sqlalchemy import Table, event
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import Executable

from visit_tracker.db.interface import DatabaseAdapter


def _enable_wal(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.
    """

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create SQLite async engine with appropriate configuration.

        SQLite-specific configuration:
        - NullPool: a fresh connection per session (file-based, no pooling needed)
        - check_same_thread=False: Required for async SQLite operations
        - PRAGMA journal_mode=WAL on every new connection

        Args:
            database_url: SQLite connection string (sqlite+aiosqlite:///...)
            **kwargs: Additional engine options (merged with SQLite defaults)

        Returns:
            Configured AsyncEngine for SQLite
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        engine = create_async_engine(
            database_url,
            poolclass=self.get_pool_class(),
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )
        event.listen(engine.sync_engine, "connect", _enable_wal)
        return engine

    def get_pool_class(self) -> type[NullPool]:
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def build_upsert(
        self,
        table: Table,
        values: dict[str, Any],
        conflict_columns: Sequence[str],
    ) -> Executable:
        """
        INSERT ... ON CONFLICT(<conflict_columns>) DO UPDATE SET <rest>.

        The update half reuses the "excluded" pseudo-row so the statement
        carries each value only once.
        """
        statement = sqlite_insert(table).values(**values)
        updated = {
            name: statement.excluded[name]
            for name in values
            if name not in conflict_columns
        }
        return statement.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_=updated,
        )

    def get_dialect_name(self) -> str:
        return "sqlite"


def get_database_adapter() -> DatabaseAdapter:
    """
    Factory function to get the database adapter.

    Returns SQLiteAdapter; other backends plug in here.
    """
    return SQLiteAdapter()
