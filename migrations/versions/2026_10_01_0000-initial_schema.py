"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create initial database schema:
    - counters table: named sequences used to allocate short codes
    - urls table: original URL to short code mappings
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    if 'counters' not in existing_tables:
        op.create_table(
            'counters',
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('value', sa.BigInteger(), nullable=False, server_default='0'),
            sa.PrimaryKeyConstraint('name')
        )

    if 'urls' not in existing_tables:
        op.create_table(
            'urls',
            sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
            sa.Column('original_url', sa.Text(), nullable=False),
            sa.Column('short_url', sa.BigInteger(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

        op.create_index('ix_urls_short_url', 'urls', ['short_url'], unique=True)
        op.create_index('ix_urls_original_url', 'urls', ['original_url'], unique=True)


def downgrade() -> None:
    """
    Drop all tables and indexes.
    """
    op.drop_index('ix_urls_original_url', table_name='urls')
    op.drop_index('ix_urls_short_url', table_name='urls')
    op.drop_table('urls')
    op.drop_table('counters')
