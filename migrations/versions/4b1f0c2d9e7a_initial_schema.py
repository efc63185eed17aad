"""initial_schema

Revision ID: 4b1f0c2d9e7a
Revises:
Create Date: 2026-01-10 09:12:41.203517

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1f0c2d9e7a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

role_enum = sa.Enum('DISTRIBUTOR', 'PRODUCER', 'ADMIN', name='roleenum')
unit_enum = sa.Enum('KG', 'PIECE', name='productunitenum')
order_status_enum = sa.Enum(
    'DRAFT', 'SUBMITTED', 'CONFIRMED', 'IN_PRODUCTION', 'READY', 'DELIVERED', 'CANCELLED',
    name='orderstatusenum'
)
notification_type_enum = sa.Enum(
    'ORDER_STATUS', 'ORDER_CHANGE', 'PRODUCTION_UPDATE', 'SYSTEM', name='notificationtypeenum'
)
batch_status_enum = sa.Enum('PLANNED', 'IN_PROGRESS', 'COMPLETED', name='batchstatusenum')


def upgrade() -> None:
    """Users, products, orders, notifications and production batches."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('telegram_id', sa.BigInteger(), nullable=False, unique=True),
        sa.Column('role', role_enum, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('lang', sa.String(length=5), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(length=50), nullable=False, unique=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('unit', unit_enum, nullable=False),
        sa.Column('base_recipe', sa.JSON(), nullable=True),
        sa.Column('production_parameters', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_number', sa.String(length=32), nullable=False, unique=True),
        sa.Column('distributor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('delivery_date', sa.DateTime(), nullable=False),
        sa.Column('status', order_status_enum, nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_orders_order_date', 'orders', ['order_date'])
    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('original_quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('adjusted_quantity', sa.Numeric(10, 2), nullable=True),
        sa.Column('adjustment_reason', sa.Text(), nullable=True),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False, server_default='0'),
    )
    op.create_table(
        'order_status_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', order_status_enum, nullable=False),
        sa.Column('changed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('type', notification_type_enum, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('related_entity_type', sa.String(length=50), nullable=True),
        sa.Column('related_entity_id', sa.Integer(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_table(
        'production_batches',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('batch_number', sa.String(length=32), nullable=False, unique=True),
        sa.Column('production_date', sa.DateTime(), nullable=False),
        sa.Column('total_capacity', sa.Numeric(10, 2), nullable=False),
        sa.Column('used_capacity', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('status', batch_status_enum, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'production_batch_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('production_batches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('planned_quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('actual_quantity', sa.Numeric(10, 2), nullable=True),
    )


def downgrade() -> None:
    """Drop everything in reverse order."""
    op.drop_table('production_batch_items')
    op.drop_table('production_batches')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_table('order_status_history')
    op.drop_table('order_items')
    op.drop_index('ix_orders_order_date', table_name='orders')
    op.drop_table('orders')
    op.drop_table('products')
    op.drop_table('users')
    for enum in (batch_status_enum, notification_type_enum, order_status_enum, unit_enum, role_enum):
        enum.drop(op.get_bind(), checkfirst=True)
