"""restaurant CRM fields and marketplace integrations

Revision ID: 0003_crm_integrations
Revises: 0002_order_payments
Create Date: 2026-04-06
"""

from alembic import op
import sqlalchemy as sa

revision = "0003_crm_integrations"
down_revision = "0002_order_payments"
branch_labels = None
depends_on = None


def _crm_columns() -> list[sa.Column]:
    return [
        sa.Column("logo_url", sa.String(length=512), nullable=True),
        sa.Column("contract_status", sa.String(length=16), nullable=False, server_default="lead"),
        sa.Column("contract_months", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("contract_start_date", sa.Date(), nullable=True),
        sa.Column("monthly_fee", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("contact_person", sa.String(length=255), nullable=True),
        sa.Column("contact_phone", sa.String(length=64), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    for column in _crm_columns():
        op.add_column("restaurants", column)

    op.create_table(
        "platform_integrations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("restaurant_id", sa.String(length=64), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("platform", sa.String(length=32), nullable=False),
        sa.Column("seller_id", sa.String(length=128), nullable=True),
        sa.Column("store_name", sa.String(length=255), nullable=True),
        sa.Column("store_link", sa.String(length=512), nullable=True),
        sa.Column("api_key", sa.String(length=255), nullable=True),
        sa.Column("api_secret", sa.String(length=255), nullable=True),
        sa.Column("token", sa.String(length=512), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("restaurant_id", "platform", name="uq_platform_integrations_restaurant_platform"),
    )
    op.create_index("ix_platform_integrations_restaurant_id", "platform_integrations", ["restaurant_id"])


def downgrade() -> None:
    op.drop_index("ix_platform_integrations_restaurant_id", table_name="platform_integrations")
    op.drop_table("platform_integrations")
    for column in reversed(_crm_columns()):
        op.drop_column("restaurants", column.name)
