"""
Shared fixtures.

Database tests run against a temporary SQLite file so that several sessions
(separate connections) can share state, which an in-memory database cannot
do under NullPool. DNS is replaced by FakeResolver so no network is needed.
"""

import socket

import httpx
import pytest

from shorturl.api.endpoints import get_url_validator
from shorturl.core.validators import URLValidator
from shorturl.db.session import create_tables, get_session, make_session_maker
from shorturl.db.sqlite_adapter import SQLiteAdapter
from shorturl.main import app


class FakeResolver:
    """Resolves every hostname except those under `.invalid` and explicit failures."""

    def __init__(self, unresolvable=()):
        self.unresolvable = set(unresolvable)
        self.calls = []

    async def __call__(self, hostname: str) -> str:
        self.calls.append(hostname)
        if hostname in self.unresolvable or hostname.endswith(".invalid"):
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return "93.184.216.34"


@pytest.fixture
def sqlite_adapter():
    return SQLiteAdapter(storage_timeout=10.0)


@pytest.fixture
async def engine(tmp_path, sqlite_adapter):
    engine = sqlite_adapter.create_engine(f"sqlite+aiosqlite:///{tmp_path / 'shorturl.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return make_session_maker(engine)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def validator(resolver):
    return URLValidator(resolver=resolver, lookup_timeout=1.0)


@pytest.fixture
async def client(session_maker, validator):
    """HTTP client bound to the app with the test database and resolver."""

    async def override_get_session():
        async with session_maker() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_url_validator] = lambda: validator

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
