"""create_availability_tables

Revision ID: 4c1f2a9d7e30
Revises:
Create Date: 2026-10-18 10:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1f2a9d7e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'availabilities',
        sa.Column('id', sa.String(length=16), nullable=False),
        sa.Column('owner', sa.String(length=255), nullable=False),
        sa.Column('owner_email', sa.String(length=255), nullable=True),
        sa.Column('owner_name', sa.String(length=255), nullable=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('timezone', sa.String(length=100), nullable=False),
        sa.Column('slots', sa.JSON(), nullable=False),
        sa.Column('busy_times', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('updated_at', sa.BigInteger(), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_availabilities_owner', 'availabilities', ['owner'], unique=False)
    op.create_index('idx_availabilities_created_at', 'availabilities', ['created_at'], unique=False)
    op.create_table(
        'owner_indexes',
        sa.Column('owner', sa.String(length=255), nullable=False),
        sa.Column('availability_ids', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('owner')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('owner_indexes')
    op.drop_index('idx_availabilities_created_at', table_name='availabilities')
    op.drop_index('idx_availabilities_owner', table_name='availabilities')
    op.drop_table('availabilities')
