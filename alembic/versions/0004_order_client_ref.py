"""client reference on orders for idempotent creates

Revision ID: 0004_order_client_ref
Revises: 0003_crm_integrations
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0004_order_client_ref"
down_revision = "0003_crm_integrations"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("orders", sa.Column("client_ref", sa.String(length=64), nullable=True))
    op.create_index("uq_orders_restaurant_client_ref", "orders", ["restaurant_id", "client_ref"], unique=True)


def downgrade() -> None:
    op.drop_index("uq_orders_restaurant_client_ref", table_name="orders")
    op.drop_column("orders", "client_ref")
