"""create users and budget_items tables

Revision ID: 001
Revises: 
Create Date: 2024-03-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('theme', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # No ON DELETE CASCADE: removing a user never removes budget items
    op.create_table(
        'budget_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('item', sa.String(), nullable=False),
        sa.Column('amount', sa.JSON(), nullable=False),
        sa.Column('event', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('tag', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_budget_items_id', 'budget_items', ['id'], unique=False)
    op.create_index('ix_budget_items_user_id', 'budget_items', ['user_id'], unique=False)
    op.create_index('ix_budget_items_date', 'budget_items', ['date'], unique=False)
    op.create_index('ix_budget_items_created_at', 'budget_items', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_budget_items_created_at', table_name='budget_items')
    op.drop_index('ix_budget_items_date', table_name='budget_items')
    op.drop_index('ix_budget_items_user_id', table_name='budget_items')
    op.drop_index('ix_budget_items_id', table_name='budget_items')
    op.drop_table('budget_items')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
