"""add habits and habit_logs tables

Revision ID: e8a3b6c51d20
Revises: d41f0c2a9b17
Create Date: 2024-01-15 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'e8a3b6c51d20'
down_revision: Union[str, Sequence[str], None] = 'd41f0c2a9b17'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'habits' not in tables:
        op.create_table(
            'habits',
            sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.Uuid(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('target_frequency', sa.Integer(), nullable=False),
            sa.Column('archived', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.CheckConstraint('target_frequency BETWEEN 1 AND 7', name='ck_habits_frequency_range'),
        )
        op.create_index('ix_habits_user_id', 'habits', ['user_id'])

    if 'habit_logs' not in tables:
        op.create_table(
            'habit_logs',
            sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
            sa.Column('habit_id', sa.Uuid(), sa.ForeignKey('habits.id', ondelete='CASCADE'), nullable=False),
            sa.Column('log_date', sa.Date(), nullable=False),
            sa.Column('completed', sa.Boolean(), nullable=False),
            sa.Column('count', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
            sa.UniqueConstraint('habit_id', 'log_date', name='uq_habit_logs_habit_date'),
            sa.CheckConstraint('count >= 0', name='ck_habit_logs_count_non_negative'),
        )
        op.create_index('ix_habit_logs_habit_id', 'habit_logs', ['habit_id'])


def downgrade() -> None:
    op.execute('DROP TABLE IF EXISTS habit_logs')
    op.execute('DROP TABLE IF EXISTS habits')
