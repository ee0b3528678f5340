"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter: SQLite-specific implementation (default)
- Session management: Database session creation, schema bootstrap

To add a new database backend:
1. Create a new adapter class inheriting from DatabaseAdapter
2. Implement all abstract methods
3. Update get_database_adapter() in sqlite_adapter.py to return the new adapter
"""

from visit_tracker.db.interface import DatabaseAdapter
from visit_tracker.db.session import async_session_maker, db_adapter, engine, get_session, init_db

__all__ = [
    "DatabaseAdapter",
    "get_session",
    "init_db",
    "async_session_maker",
    "db_adapter",
    "engine",
]
