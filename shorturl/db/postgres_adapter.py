"""
PostgreSQL Database Adapter

This module implements the DatabaseAdapter interface for PostgreSQL via
asyncpg. It is selected automatically when DATABASE_URL uses the
`postgresql+asyncpg://` scheme.

Key characteristics:
- Server-based, many concurrent writers
- Row-level locking: concurrent upserts on the same counter row serialize
  on that row only
- Connection pooling (QueuePool) with a bounded checkout wait
"""

from typing import Any, Optional

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.pool import Pool
from sqlalchemy.sql.dml import Insert

from shorturl.db.interface import DatabaseAdapter
from shorturl.db.models import Counter


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter implementation."""

    def get_pool_class(self) -> Optional[type[Pool]]:
        # SQLAlchemy's default pool for async engines
        return None

    def get_connect_args(self) -> dict[str, Any]:
        """
        Get asyncpg connection arguments.

        - timeout: seconds allowed to establish a connection
        - command_timeout: seconds allowed for each statement
        """
        return {
            "timeout": self.storage_timeout,
            "command_timeout": self.storage_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": self.storage_timeout,
            "pool_pre_ping": True,
        }

    def build_counter_upsert(self, counter_name: str, max_value: int) -> Insert:
        table = Counter.__table__
        statement = pg_insert(table).values(name=counter_name, value=1)
        return statement.on_conflict_do_update(
            index_elements=[table.c.name],
            set_={"value": table.c.value + 1},
            where=table.c.value < max_value,
        ).returning(table.c.value)

    def get_dialect_name(self) -> str:
        return "postgresql"
