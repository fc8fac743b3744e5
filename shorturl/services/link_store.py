"""
Link Store

Durable mapping between original URLs and their short codes.

Design Decisions:
- Uniqueness of short codes (and of original URLs) is enforced by unique
  indexes; insert never pre-checks
- When an insert violates a unique index, the session is rolled back and
  the store re-reads to report which index was hit
- No update or delete operations: links are immutable once written
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.core.exceptions import (
    DuplicateOriginalURLError,
    DuplicateShortCodeError,
    PersistenceError,
)
from shorturl.db.models import ShortLink

logger = logging.getLogger(__name__)


class LinkStore:
    """Reads and writes ShortLink rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_original_url(self, original_url: str) -> Optional[ShortLink]:
        """
        Find the link stored for an original URL (exact string match).

        Raises:
            PersistenceError: If the query fails
        """
        statement = select(ShortLink).where(ShortLink.original_url == original_url).limit(1)
        return await self._first(statement, f"lookup of {original_url!r}")

    async def find_by_code(self, short_code: int) -> Optional[ShortLink]:
        """
        Find the link stored for a short code.

        Raises:
            PersistenceError: If the query fails
        """
        statement = select(ShortLink).where(ShortLink.short_code == short_code)
        return await self._first(statement, f"lookup of code {short_code}")

    async def insert(self, original_url: str, short_code: int) -> ShortLink:
        """
        Store a new link and commit it.

        Args:
            original_url: The long URL exactly as submitted
            short_code: A freshly allocated code

        Returns:
            The stored ShortLink

        Raises:
            DuplicateShortCodeError: If short_code is already taken
            DuplicateOriginalURLError: If original_url is already stored
            PersistenceError: If the write fails for any other reason
        """
        link = ShortLink(original_url=original_url, short_code=short_code)

        try:
            self.session.add(link)
            await self.session.flush()
            await self.session.commit()
            return link

        except IntegrityError as e:
            await self.session.rollback()
            if await self.find_by_code(short_code) is not None:
                raise DuplicateShortCodeError(short_code, original_error=e)
            if await self.find_by_original_url(original_url) is not None:
                raise DuplicateOriginalURLError(original_url, original_error=e)
            raise PersistenceError(
                "Failed to store link: database constraint violation",
                original_error=e
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to store link for {original_url!r}: {e}", exc_info=True)
            raise PersistenceError("Failed to store link", original_error=e)

    async def _first(self, statement, description: str) -> Optional[ShortLink]:
        try:
            result = await self.session.execute(statement)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Failed {description}: {e}", exc_info=True)
            raise PersistenceError(f"Failed {description}", original_error=e)
