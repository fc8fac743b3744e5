"""
Database Session Management with Connection Pooling

This module handles async database connections using SQLAlchemy's async engine.
Uses a database abstraction layer to support different database backends.

Key Features:
- Database abstraction: the adapter is picked from DATABASE_URL
- Connection pooling and storage timeouts: configured per database type
- Async session management: Proper async context management
- Error handling: Automatic rollback on exceptions
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from shorturl.core.setting import settings
from shorturl.db.adapters import get_database_adapter

# Get the database adapter matching DATABASE_URL
db_adapter = get_database_adapter(
    settings.DATABASE_URL,
    storage_timeout=settings.STORAGE_TIMEOUT
)

# Create async engine using the adapter
# The adapter handles all database-specific configuration
engine = db_adapter.create_engine(settings.DATABASE_URL)


def make_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
        autoflush=False,
    )


async_session_maker = make_session_maker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    This function:
    - Creates a new async session from the pool
    - Yields it to the endpoint
    - Automatically commits on success
    - Rolls back on exception
    - Closes session automatically (context manager handles it)

    Usage in FastAPI:
        @router.get("/endpoint")
        async def endpoint(session: AsyncSession = Depends(get_session)):
            # Use session here
            pass
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()  # Commit transaction on successful completion
        except Exception:
            await session.rollback()  # Rollback on any exception
            raise


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables from the SQLModel metadata."""
    async with bind.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)


async def ping(session: AsyncSession) -> None:
    """Round-trip a trivial statement; raises if the database is unreachable."""
    await session.execute(text("SELECT 1"))
