"""
Tests for the link store.
"""

import pytest

from shorturl.core.exceptions import (
    DuplicateOriginalURLError,
    DuplicateShortCodeError,
    PersistenceError,
)
from shorturl.services.link_store import LinkStore


class TestLinkStore:

    @pytest.mark.asyncio
    async def test_insert_and_find(self, session):
        store = LinkStore(session)

        link = await store.insert("https://www.example.com", 1)

        assert link.id is not None
        assert link.original_url == "https://www.example.com"
        assert link.short_code == 1
        assert link.created_at is not None

        by_url = await store.find_by_original_url("https://www.example.com")
        by_code = await store.find_by_code(1)
        assert by_url.short_code == 1
        assert by_code.original_url == "https://www.example.com"

    @pytest.mark.asyncio
    async def test_lookups_are_exact(self, session):
        store = LinkStore(session)
        await store.insert("https://www.example.com", 1)

        assert await store.find_by_original_url("https://www.example.com/") is None
        assert await store.find_by_original_url("https://WWW.example.com") is None
        assert await store.find_by_code(2) is None

    @pytest.mark.asyncio
    async def test_duplicate_code_rejected(self, session):
        store = LinkStore(session)
        await store.insert("https://a.example.com", 7)

        with pytest.raises(DuplicateShortCodeError) as exc_info:
            await store.insert("https://b.example.com", 7)

        assert exc_info.value.error_code == "duplicate_code"
        assert isinstance(exc_info.value, PersistenceError)
        assert await store.find_by_original_url("https://b.example.com") is None
        assert (await store.find_by_code(7)).original_url == "https://a.example.com"

    @pytest.mark.asyncio
    async def test_duplicate_original_url_rejected(self, session):
        store = LinkStore(session)
        await store.insert("https://a.example.com", 1)

        with pytest.raises(DuplicateOriginalURLError) as exc_info:
            await store.insert("https://a.example.com", 2)

        assert exc_info.value.error_code == "duplicate_url"
        assert await store.find_by_code(2) is None

    @pytest.mark.asyncio
    async def test_links_visible_to_other_sessions(self, session_maker):
        async with session_maker() as writer:
            await LinkStore(writer).insert("https://www.example.com", 1)

        async with session_maker() as reader:
            link = await LinkStore(reader).find_by_code(1)

        assert link.original_url == "https://www.example.com"
