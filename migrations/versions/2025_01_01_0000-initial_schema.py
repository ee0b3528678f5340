"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

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
    - visits table: Append-only page view log
    - settings table: Keyed JSON documents (the links configuration)
    """
    # Tables may already exist when the app bootstrapped the schema itself
    bind = op.get_bind()
    inspector = inspect(bind)
    existing_tables = inspector.get_table_names()

    if 'visits' not in existing_tables:
        op.create_table(
            'visits',
            sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
            sa.Column('ts', sa.BigInteger(), nullable=False),
            sa.Column('ip', sa.Text(), nullable=True),
            sa.Column('ua', sa.Text(), nullable=True),
            sa.Column('country', sa.String(length=64), nullable=True),
            sa.Column('path', sa.Text(), nullable=True),
            sa.Column('ref', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
            sqlite_autoincrement=True,
        )

        op.create_index(
            'ix_visits_ts',
            'visits',
            ['ts']
        )

    if 'settings' not in existing_tables:
        op.create_table(
            'settings',
            sa.Column('key', sa.String(length=64), nullable=False),
            sa.Column('value_json', sa.Text(), nullable=False),
            sa.Column('updated_at', sa.BigInteger(), nullable=False),
            sa.PrimaryKeyConstraint('key')
        )


def downgrade() -> None:
    """
    Drop all tables and indexes.
    """
    op.drop_index('ix_visits_ts', table_name='visits')
    op.drop_table('visits')
    op.drop_table('settings')
