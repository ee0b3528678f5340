"""
Database Abstraction Interface

This module defines the database abstraction layer that keeps backend-specific
details (engine configuration, connection pragmas, upsert syntax) out of the
stores. The stores only ever talk to a DatabaseAdapter and an AsyncSession.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import Pool
from sqlalchemy.sql import Executable


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    To add a new database backend:
    1. Create a new class inheriting from DatabaseAdapter
    2. Implement all abstract methods
    3. Update the factory function to return the new adapter
    """

    @abstractmethod
    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create and configure the async database engine.

        Args:
            database_url: Connection string for the database
            **kwargs: Additional engine configuration options

        Returns:
            Configured AsyncEngine instance
        """
        pass

    @abstractmethod
    def get_pool_class(self) -> Optional[type[Pool]]:
        """
        Get the connection pool class for this database type.

        Returns:
            Pool class or None to use the SQLAlchemy default
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """
        Get connection arguments specific to this database type.
        """
        pass

    @abstractmethod
    def get_engine_kwargs(self) -> dict[str, Any]:
        """
        Get additional engine configuration specific to this database type.
        """
        pass

    @abstractmethod
    def build_upsert(
        self,
        table: Table,
        values: dict[str, Any],
        conflict_columns: Sequence[str],
    ) -> Executable:
        """
        Build an insert-or-replace statement for a single row.

        On conflict with conflict_columns every other column in values
        overwrites the stored row.

        Args:
            table: Target table
            values: Column values for the row
            conflict_columns: Columns forming the unique key

        Returns:
            Executable statement
        """
        pass

    @abstractmethod
    def get_dialect_name(self) -> str:
        """
        Get the SQLAlchemy dialect name for this database.
        """
        pass
