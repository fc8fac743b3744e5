"""
Tests for database adapter selection and dialect-specific statements.
"""

import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.pool import NullPool

from shorturl.db.adapters import get_database_adapter
from shorturl.db.postgres_adapter import PostgreSQLAdapter
from shorturl.db.sqlite_adapter import SQLiteAdapter


class TestAdapterSelection:

    def test_sqlite_url(self):
        adapter = get_database_adapter("sqlite+aiosqlite:///./shorturl.db", storage_timeout=3.0)

        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.get_dialect_name() == "sqlite"
        assert adapter.get_pool_class() is NullPool
        assert adapter.get_connect_args()["timeout"] == 3.0

    def test_postgresql_url(self):
        adapter = get_database_adapter("postgresql+asyncpg://user:pw@db/shorturl", storage_timeout=2.5)

        assert isinstance(adapter, PostgreSQLAdapter)
        assert adapter.get_dialect_name() == "postgresql"
        assert adapter.get_connect_args() == {"timeout": 2.5, "command_timeout": 2.5}
        assert adapter.get_engine_kwargs()["pool_timeout"] == 2.5

    def test_unsupported_backend(self):
        with pytest.raises(ValueError):
            get_database_adapter("mysql+aiomysql://user:pw@db/shorturl")


class TestCounterUpsert:

    @pytest.mark.parametrize(
        "adapter, dialect",
        [(SQLiteAdapter(), sqlite.dialect()), (PostgreSQLAdapter(), postgresql.dialect())],
    )
    def test_upsert_statement(self, adapter, dialect):
        statement = adapter.build_counter_upsert("sequence_value", 100)
        sql = str(statement.compile(dialect=dialect)).upper()

        assert sql.startswith("INSERT INTO COUNTERS")
        assert "ON CONFLICT (NAME) DO UPDATE" in sql
        assert "RETURNING" in sql
        assert "VALUE <" in sql.split("DO UPDATE", 1)[1]
