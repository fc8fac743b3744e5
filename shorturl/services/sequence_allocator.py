"""
Sequence Allocator

Hands out unique, monotonically increasing integers per named counter.

Design:
- One atomic statement per allocation: INSERT the counter at 1, or on
  conflict increment it, and RETURN the new value
- No in-process lock: atomicity comes from the database, so the guarantee
  holds across any number of service instances sharing the database
- The allocation is committed immediately; a value handed out is never
  handed out again, even if the caller fails before using it
- Overflow fails loudly with SequenceExhaustedError instead of wrapping
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.core.exceptions import PersistenceError, SequenceExhaustedError
from shorturl.db.interface import DatabaseAdapter

logger = logging.getLogger(__name__)

MAX_SEQUENCE_VALUE = 2**63 - 1


class SequenceAllocator:
    """
    Atomic fetch-and-increment over the `counters` table.
    """

    def __init__(
        self,
        session: AsyncSession,
        adapter: Optional[DatabaseAdapter] = None,
        max_value: int = MAX_SEQUENCE_VALUE
    ):
        """
        Initialize the allocator.

        Args:
            session: Database session used for the upsert
            adapter: Adapter providing the dialect-specific upsert statement
                (default: the adapter configured from DATABASE_URL)
            max_value: Largest value any counter may reach
        """
        if adapter is None:
            from shorturl.db.session import db_adapter
            adapter = db_adapter

        self.session = session
        self.adapter = adapter
        self.max_value = max_value

    async def next(self, counter_name: str) -> int:
        """
        Allocate the next value of a counter.

        The first allocation for an unknown counter creates it and returns 1.

        Args:
            counter_name: Name of the counter row

        Returns:
            The newly allocated value

        Raises:
            SequenceExhaustedError: If the counter is already at max_value
            PersistenceError: If the database operation fails
        """
        statement = self.adapter.build_counter_upsert(counter_name, self.max_value)

        try:
            result = await self.session.execute(statement)
            value = result.scalar_one_or_none()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to allocate from counter '{counter_name}': {e}", exc_info=True)
            raise PersistenceError(
                f"Failed to allocate from counter '{counter_name}'",
                original_error=e
            )

        if value is None:
            logger.error(f"Counter '{counter_name}' is exhausted at {self.max_value}")
            raise SequenceExhaustedError(counter_name)

        logger.debug(f"Allocated {value} from counter '{counter_name}'")
        return value
