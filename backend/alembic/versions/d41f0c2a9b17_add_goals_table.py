"""add goals table

Revision ID: d41f0c2a9b17
Revises:
Create Date: 2024-01-08 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd41f0c2a9b17'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()
    if 'goals' not in tables:
        op.create_table(
            'goals',
            sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.Uuid(), nullable=False),
            sa.Column('target_protein', sa.Numeric(6, 2), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.CheckConstraint('target_protein > 0', name='ck_goals_target_positive'),
            sa.CheckConstraint('end_date IS NULL OR end_date >= start_date', name='ck_goals_end_after_start'),
        )
        op.create_index('ix_goals_user_id', 'goals', ['user_id'])
        op.create_index('ix_goals_user_start', 'goals', ['user_id', 'start_date'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS goals')
