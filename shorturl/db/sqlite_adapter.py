"""
SQLite Database Adapter

This module implements the DatabaseAdapter interface for SQLite.
All SQLite-specific configuration and behavior is encapsulated here.

SQLite is a file-based database that's perfect for:
- Local development
- Testing
- Single-instance deployments

Key characteristics:
- File-based (single .db file)
- Single writer at a time (file locking); other writers wait up to the
  busy timeout and then fail with "database is locked"
- Native `INSERT ... ON CONFLICT DO UPDATE ... RETURNING` (SQLite >= 3.35)
"""

from typing import Any

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.pool import NullPool
from sqlalchemy.sql.dml import Insert

from shorturl.db.interface import DatabaseAdapter
from shorturl.db.models import Counter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    Counter allocation relies on SQLite executing each statement atomically
    under its database-wide write lock.
    """

    def get_pool_class(self) -> type[NullPool]:
        """
        SQLite uses NullPool: every session opens its own connection, which
        lets concurrent sessions queue on the file lock instead of sharing a
        connection.
        """
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        """
        Get SQLite-specific connection arguments.

        - check_same_thread=False: Required for async SQLite operations
        - timeout: busy timeout while another connection holds the write lock
        """
        return {
            "check_same_thread": False,
            "timeout": self.storage_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def build_counter_upsert(self, counter_name: str, max_value: int) -> Insert:
        table = Counter.__table__
        statement = sqlite_insert(table).values(name=counter_name, value=1)
        return statement.on_conflict_do_update(
            index_elements=[table.c.name],
            set_={"value": table.c.value + 1},
            where=table.c.value < max_value,
        ).returning(table.c.value)

    def get_dialect_name(self) -> str:
        return "sqlite"
