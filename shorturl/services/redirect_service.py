"""
Redirect Service

This service resolves short codes back to their original URLs.
Separated from URL service because resolution never validates, allocates
or writes.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.core.exceptions import ShortCodeNotFoundError
from shorturl.core.validators import parse_short_code
from shorturl.db.models import ShortLink
from shorturl.services.link_store import LinkStore

logger = logging.getLogger(__name__)


class RedirectService:
    """
    Service for handling URL redirections.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the redirect service with a database session.

        Args:
            session: Async database session for database operations
        """
        self.session = session
        self.store = LinkStore(session)

    async def resolve(self, short_code: str) -> ShortLink:
        """
        Resolve a short code taken from the request path.

        Malformed codes are reported as not found without touching the
        database, since only decimal integers are ever issued.

        Raises:
            ShortCodeNotFoundError: If the code is malformed or unknown
            PersistenceError: If the lookup fails
        """
        code = parse_short_code(short_code)
        if code is None:
            raise ShortCodeNotFoundError(short_code)

        link = await self.store.find_by_code(code)
        if link is None:
            raise ShortCodeNotFoundError(short_code)

        logger.info(f"Redirecting {code} to: {link.original_url}")
        return link
