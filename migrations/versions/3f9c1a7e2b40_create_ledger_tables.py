"""create_ledger_tables

Revision ID: 3f9c1a7e2b40
Revises:
Create Date: 2026-10-17 10:12:41.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7e2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'movements',
        sa.Column('movement_id', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=255), server_default='', nullable=False),
        sa.Column('account_type', sa.String(length=16), server_default='liquid', nullable=False),
        sa.Column('note', sa.Text(), server_default='', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('movement_id')
    )
    op.create_index('ix_movements_date', 'movements', ['date'])

    op.create_table(
        'recurring_rules',
        sa.Column('rule_id', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('account_type', sa.String(length=16), server_default='liquid', nullable=False),
        sa.Column('category', sa.String(length=255), server_default='', nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('mode', sa.String(length=32), server_default='monthly', nullable=False),
        sa.Column('interval', sa.Integer(), server_default='1', nullable=False),
        sa.Column('days_of_week', sa.String(length=32), server_default='', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('rule_id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('recurring_rules')
    op.drop_index('ix_movements_date', table_name='movements')
    op.drop_table('movements')
