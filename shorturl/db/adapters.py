"""
Database adapter selection.
"""

from shorturl.db.interface import DatabaseAdapter
from shorturl.db.postgres_adapter import PostgreSQLAdapter
from shorturl.db.sqlite_adapter import SQLiteAdapter

ADAPTERS = {
    "sqlite": SQLiteAdapter,
    "postgresql": PostgreSQLAdapter,
}


def get_database_adapter(database_url: str, storage_timeout: float = 5.0) -> DatabaseAdapter:
    """
    Factory function to get the database adapter for a connection string.

    The backend is taken from the URL scheme before any `+driver` suffix,
    so `sqlite+aiosqlite://...` selects SQLiteAdapter and
    `postgresql+asyncpg://...` selects PostgreSQLAdapter.

    Args:
        database_url: SQLAlchemy connection string
        storage_timeout: Seconds a statement may wait (passed to the adapter)

    Returns:
        DatabaseAdapter instance

    Raises:
        ValueError: If the backend is not supported
    """
    backend = database_url.split(":", 1)[0].split("+", 1)[0]
    try:
        adapter_class = ADAPTERS[backend]
    except KeyError:
        raise ValueError(f"Unsupported database backend '{backend}' in DATABASE_URL")
    return adapter_class(storage_timeout=storage_timeout)
