"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-02-20 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('wa_message_id', sa.String(), nullable=True),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('delivery_date', sa.String(), nullable=True),
        sa.Column('delivery_time', sa.String(), nullable=False),
        sa.Column('order_status', sa.String(), nullable=False),
        sa.Column('payment_status', sa.String(), nullable=False),
        sa.Column('requires_review', sa.Boolean(), nullable=False),
        sa.Column('raw_message_text', sa.Text(), nullable=True),
        sa.Column('items_json', sa.JSON(), nullable=True),
        sa.Column('stated_total', sa.Numeric(), nullable=True),
        sa.Column('computed_total', sa.Numeric(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)
    op.create_index(op.f('ix_orders_wa_message_id'), 'orders', ['wa_message_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_orders_wa_message_id'), table_name='orders')
    op.drop_index(op.f('ix_orders_id'), table_name='orders')
    op.drop_table('orders')
