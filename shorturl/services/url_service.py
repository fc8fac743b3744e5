"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Validating URLs (syntax, scheme, hostname resolution)
- Deduplicating repeated submissions of the same URL
- Allocating sequential numeric short codes from a durable counter

Design Decisions:
- Counter-based: codes come from an atomic database counter, never from
  process memory, so multiple instances can share one database
- Dedupe is an exact string match on the URL as submitted
- Check-then-insert is not transactional; the unique index on original_url
  turns a lost race into DuplicateOriginalURLError, and the service then
  returns the winner's link. The loser's code stays unused.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.core.exceptions import DuplicateOriginalURLError, PersistenceError
from shorturl.core.setting import settings
from shorturl.core.validators import URLValidator
from shorturl.db.models import ShortLink
from shorturl.services.link_store import LinkStore
from shorturl.services.sequence_allocator import SequenceAllocator

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Orchestrates validator, link store and sequence allocator. Separated from
    API layer for testability and maintainability.
    """

    def __init__(
        self,
        session: AsyncSession,
        validator: Optional[URLValidator] = None,
        allocator: Optional[SequenceAllocator] = None,
        sequence_name: Optional[str] = None
    ):
        """
        Initialize the URL shortening service.

        Args:
            session: Database session
            validator: URL validator (default: DNS-backed URLValidator)
            allocator: Sequence allocator (default: one bound to session)
            sequence_name: Counter used for codes (default: settings.SEQUENCE_NAME)
        """
        self.session = session
        self.validator = validator or URLValidator()
        self.store = LinkStore(session)
        self.allocator = allocator or SequenceAllocator(session)
        self.sequence_name = sequence_name or settings.SEQUENCE_NAME

    async def shorten(self, original_url: str) -> ShortLink:
        """
        Return the link for a URL, creating it on first submission.

        Args:
            original_url: The long URL to shorten

        Returns:
            The existing or newly created ShortLink

        Raises:
            InvalidURLError: If URL validation fails (nothing is read or written)
            PersistenceError: If a database operation fails
        """
        await self.validator.validate(original_url)

        existing = await self.store.find_by_original_url(original_url)
        if existing:
            logger.debug(f"Returning existing code {existing.short_code} for {original_url}")
            return existing

        short_code = await self.allocator.next(self.sequence_name)

        try:
            link = await self.store.insert(original_url, short_code)
        except DuplicateOriginalURLError:
            winner = await self.store.find_by_original_url(original_url)
            if winner is None:
                raise PersistenceError(f"Link for {original_url} vanished after a conflicting insert")
            logger.info(
                f"Concurrent submission of {original_url}: "
                f"returning code {winner.short_code}, code {short_code} left unused"
            )
            return winner

        logger.info(f"Shortened {original_url} to code {link.short_code}")
        return link
