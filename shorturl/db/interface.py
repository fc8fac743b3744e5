"""
Database Adapter Interface

SQLite and PostgreSQL differ in pooling, in how a statement timeout is
passed to the driver, and in the dialect construct that spells
`INSERT ... ON CONFLICT DO UPDATE ... RETURNING`. DatabaseAdapter gathers
those differences so session.py and SequenceAllocator stay backend-neutral.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import Pool
from sqlalchemy.sql.dml import Insert


class DatabaseAdapter(ABC):
    """
    Per-backend engine setup and counter allocation.

    An adapter decides how connections are pooled and how `storage_timeout`
    reaches the driver. It also builds the counter upsert that
    SequenceAllocator executes: one statement that creates or increments the
    named counter and returns the new value, guarded so it never passes the
    64-bit ceiling. Short code uniqueness rests on that statement being
    atomic in the backend, so a backend without `ON CONFLICT ... RETURNING`
    cannot be supported by this interface.
    """

    def __init__(self, storage_timeout: float = 5.0):
        """
        Args:
            storage_timeout: Seconds a statement may wait on locks or the server
        """
        self.storage_timeout = storage_timeout

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create and configure the async database engine.

        Args:
            database_url: Connection string for the database
            **kwargs: Additional engine options (merged with adapter defaults)

        Returns:
            Configured AsyncEngine instance
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        pool_class = self.get_pool_class()
        if pool_class is not None:
            engine_kwargs["poolclass"] = pool_class

        return create_async_engine(
            database_url,
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )

    @abstractmethod
    def get_pool_class(self) -> Optional[type[Pool]]:
        """
        Get the connection pool class for this database type.

        Returns:
            Pool class (e.g., NullPool for SQLite) or None to use default
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """
        Get connection arguments specific to this database type.

        Must apply `storage_timeout` in whatever form the driver supports.
        """
        pass

    @abstractmethod
    def get_engine_kwargs(self) -> dict[str, Any]:
        """Get additional engine configuration specific to this database type."""
        pass

    @abstractmethod
    def build_counter_upsert(self, counter_name: str, max_value: int) -> Insert:
        """
        Build the atomic fetch-and-increment statement for a counter.

        The statement inserts the counter with value 1 when absent, otherwise
        increments it by one, and returns the resulting value. The increment
        only applies while the current value is below `max_value`; at the
        limit the statement returns no row.

        Args:
            counter_name: Primary key of the counter row
            max_value: Largest value the counter may reach

        Returns:
            An executable INSERT ... ON CONFLICT ... RETURNING statement
        """
        pass

    @abstractmethod
    def get_dialect_name(self) -> str:
        """
        Get the SQLAlchemy dialect name for this database.

        Returns:
            Dialect name (e.g., 'sqlite', 'postgresql')
        """
        pass
