"""order source, payment timestamp, menu images, usernames

Revision ID: 0002_order_payments
Revises: 0001_core
Create Date: 2026-03-16
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_order_payments"
down_revision = "0001_core"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("orders", sa.Column("order_source", sa.String(length=32), nullable=False, server_default="restaurant"))
    op.add_column("orders", sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True))
    op.execute("UPDATE orders SET paid_at = created_at WHERE status IN ('Ödendi', 'Kuryeye Teslim Edildi')")
    op.create_index("ix_orders_status_paid_at", "orders", ["status", "paid_at"])

    op.add_column("categories", sa.Column("image_url", sa.String(length=512), nullable=True))
    op.add_column("products", sa.Column("image_url", sa.String(length=512), nullable=True))

    op.add_column("users", sa.Column("username", sa.String(length=128), nullable=True))
    op.add_column("users", sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    op.create_index("ix_users_username", "users", ["username"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_username", table_name="users")
    op.drop_column("users", "updated_at")
    op.drop_column("users", "username")

    op.drop_column("products", "image_url")
    op.drop_column("categories", "image_url")

    op.drop_index("ix_orders_status_paid_at", table_name="orders")
    op.drop_column("orders", "paid_at")
    op.drop_column("orders", "order_source")
