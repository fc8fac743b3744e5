"""
Database Models for URL Shortener Service

This module defines the SQLModel database schemas for:
- ShortLink: Stores the mapping between original URLs and numeric short codes
- Counter: Named sequence rows used to allocate short codes

Design Decisions:
- short_code is persisted in the `short_url` column and carries a unique index;
  uniqueness is enforced by the database, never pre-checked
- original_url carries a unique index too, so two concurrent first-time
  submissions of the same URL cannot both be stored
- Counter rows are only ever touched through an atomic upsert
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, String, Text
from sqlmodel import Column, Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortLink(SQLModel, table=True):
    """
    Main table storing URL shortening mappings.

    Fields:
    - id: Auto-incrementing surrogate primary key
    - original_url: The long URL exactly as submitted
    - short_code: Unique integer code (column `short_url`)
    - created_at: Timestamp when URL was shortened

    Rows are immutable once written.
    """
    __tablename__ = "urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    original_url: str = Field(
        sa_column=Column(Text, nullable=False, unique=True, index=True)
    )
    short_code: int = Field(
        sa_column=Column("short_url", BigInteger, nullable=False, unique=True, index=True)
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class Counter(SQLModel, table=True):
    """
    Named counter used for sequential code allocation.

    `value` holds the last number handed out; the next allocation returns
    value + 1. A missing row behaves as value 0.
    """
    __tablename__ = "counters"

    name: str = Field(sa_column=Column(String(100), primary_key=True))
    value: int = Field(default=0, sa_column=Column(BigInteger, nullable=False, default=0))
