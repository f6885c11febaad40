"""add position to movements and recurring_rules

Revision ID: 8d41e6b0c2a9
Revises: 3f9c1a7e2b40
Create Date: 2026-10-18 09:41:07.802114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d41e6b0c2a9'
down_revision: Union[str, Sequence[str], None] = '3f9c1a7e2b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Insertion order, used by queries instead of created_at
    op.add_column('movements',
                  sa.Column('position', sa.Integer(),
                           nullable=False, server_default='0'))
    op.add_column('recurring_rules',
                  sa.Column('position', sa.Integer(),
                           nullable=False, server_default='0'))

    # Backfill existing rows in their previous order
    op.execute("""
        UPDATE movements AS m SET position = s.rn
        FROM (
            SELECT movement_id, ROW_NUMBER() OVER (ORDER BY created_at, movement_id) AS rn
            FROM movements
        ) AS s
        WHERE m.movement_id = s.movement_id
    """)
    op.execute("""
        UPDATE recurring_rules AS r SET position = s.rn
        FROM (
            SELECT rule_id, ROW_NUMBER() OVER (ORDER BY created_at, rule_id) AS rn
            FROM recurring_rules
        ) AS s
        WHERE r.rule_id = s.rule_id
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column('recurring_rules', 'position')
    op.drop_column('movements', 'position')
