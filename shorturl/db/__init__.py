"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / PostgreSQLAdapter: backend implementations, chosen from DATABASE_URL
- Session management: Database session creation and management

Backends are keyed by the DATABASE_URL scheme in adapters.ADAPTERS. A backend
is usable only if its adapter can express the counter upsert as a single
atomic statement; engine options alone are not enough.
"""

from shorturl.db.interface import DatabaseAdapter
from shorturl.db.session import get_session, async_session_maker, engine

__all__ = [
    "DatabaseAdapter",
    "get_session",
    "async_session_maker",
    "engine",
]
