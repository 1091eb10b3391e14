"""Initial schema

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-19 16:52:10.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c41d7e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Gateway session id and other credentials
    op.create_table(
        'secrets',
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('key')
    )

    # Single-row application config
    op.create_table(
        'config_store',
        sa.Column('id', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('config_json', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('id = 1', name='single_row_check')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('config_store')
    op.drop_table('secrets')
