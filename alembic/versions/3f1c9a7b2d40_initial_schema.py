"""Initial schema for the Stock Tracker backend

Revision ID: 3f1c9a7b2d40
Revises:
Create Date: 2026-01-05

Tables Created:
- stock_users: Local projection of auth service identities
- account_shares: Share requests and links between two accounts
- stock_items: Inventory items, partitioned by owning user

The partial unique index uq_account_shares_owner_active allows at most one
pending or accepted share per owner.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7b2d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SHARE_STATUSES = ('pending', 'accepted', 'refused', 'cancelled', 'stopped')


def upgrade() -> None:
    """Create all tables and indexes."""
    # stock_users table
    op.create_table(
        'stock_users',
        sa.Column('auth_user_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_stock_users')),
    )
    op.create_index(op.f('ix_stock_users_auth_user_id'), 'stock_users', ['auth_user_id'], unique=True)
    op.create_index(op.f('ix_stock_users_created_at'), 'stock_users', ['created_at'], unique=False)

    # account_shares table
    op.create_table(
        'account_shares',
        sa.Column('owner_user_id', sa.Uuid(), nullable=False),
        sa.Column('owner_auth_user_id', sa.String(length=255), nullable=False),
        sa.Column('owner_email', sa.String(length=320), nullable=False),
        sa.Column('target_email', sa.String(length=320), nullable=False),
        sa.Column(
            'status',
            sa.Enum(*SHARE_STATUSES, name='share_status', native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column('target_auth_user_id', sa.String(length=255), nullable=True),
        sa.Column('target_user_id', sa.Uuid(), nullable=True),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('stopped_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_account_shares')),
    )
    op.create_index(op.f('ix_account_shares_owner_user_id'), 'account_shares', ['owner_user_id'], unique=False)
    op.create_index(op.f('ix_account_shares_target_email'), 'account_shares', ['target_email'], unique=False)
    op.create_index(op.f('ix_account_shares_status'), 'account_shares', ['status'], unique=False)
    op.create_index(op.f('ix_account_shares_target_auth_user_id'), 'account_shares', ['target_auth_user_id'], unique=False)
    op.create_index(op.f('ix_account_shares_created_at'), 'account_shares', ['created_at'], unique=False)

    # One active share per owner
    op.create_index(
        'uq_account_shares_owner_active',
        'account_shares',
        ['owner_user_id'],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'accepted')"),
    )

    # stock_items table
    op.create_table(
        'stock_items',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('target_quantity', sa.Integer(), nullable=False),
        sa.Column('current_quantity', sa.Integer(), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_stock_items')),
    )
    op.create_index(op.f('ix_stock_items_user_id'), 'stock_items', ['user_id'], unique=False)
    op.create_index(op.f('ix_stock_items_created_at'), 'stock_items', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_stock_items_created_at'), table_name='stock_items')
    op.drop_index(op.f('ix_stock_items_user_id'), table_name='stock_items')
    op.drop_table('stock_items')

    op.drop_index('uq_account_shares_owner_active', table_name='account_shares')
    op.drop_index(op.f('ix_account_shares_created_at'), table_name='account_shares')
    op.drop_index(op.f('ix_account_shares_target_auth_user_id'), table_name='account_shares')
    op.drop_index(op.f('ix_account_shares_status'), table_name='account_shares')
    op.drop_index(op.f('ix_account_shares_target_email'), table_name='account_shares')
    op.drop_index(op.f('ix_account_shares_owner_user_id'), table_name='account_shares')
    op.drop_table('account_shares')

    op.drop_index(op.f('ix_stock_users_created_at'), table_name='stock_users')
    op.drop_index(op.f('ix_stock_users_auth_user_id'), table_name='stock_users')
    op.drop_table('stock_users')
