"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

# Columns added after the first release, per table.
LATE_COLUMNS: dict[str, dict[str, str]] = {
    "orders": {
        "order_source": "VARCHAR(32) NOT NULL DEFAULT 'restaurant'",
        "paid_at": "DATETIME NULL",
        "client_ref": "VARCHAR(64) NULL",
    },
    "restaurants": {
        "logo_url": "VARCHAR(512) NULL",
        "contract_status": "VARCHAR(16) NOT NULL DEFAULT 'lead'",
        "contract_months": "INTEGER NOT NULL DEFAULT 0",
        "contract_start_date": "DATE NULL",
        "monthly_fee": "NUMERIC(10, 2) NOT NULL DEFAULT 0",
        "contact_person": "VARCHAR(255) NULL",
        "contact_phone": "VARCHAR(64) NULL",
        "contact_email": "VARCHAR(255) NULL",
        "notes": "TEXT NULL",
        "updated_at": "DATETIME NULL",
    },
    "categories": {
        "image_url": "VARCHAR(512) NULL",
    },
    "products": {
        "image_url": "VARCHAR(512) NULL",
    },
    "users": {
        "username": "VARCHAR(128) NULL",
        "updated_at": "DATETIME NULL",
    },
}


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _sqlite_index_names(connection: Connection, table_name: str) -> set[str]:
    """Return index names for a SQLite table using PRAGMA index_list."""
    rows = connection.execute(text(f"PRAGMA index_list({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight schema updates for legacy SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}

        for table_name, columns in LATE_COLUMNS.items():
            if table_name not in table_names:
                continue
            existing = _sqlite_column_names(connection, table_name)
            for column_name, ddl in columns.items():
                if column_name in existing:
                    continue
                connection.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {ddl}"))
                logger.info("[MIGRATIONS] added %s.%s", table_name, column_name)

        if "orders" in table_names and "ix_orders_status_paid_at" not in _sqlite_index_names(connection, "orders"):
            connection.execute(text("CREATE INDEX ix_orders_status_paid_at ON orders (status, paid_at)"))
        if "orders" in table_names and "uq_orders_restaurant_client_ref" not in _sqlite_index_names(connection, "orders"):
            connection.execute(
                text("CREATE UNIQUE INDEX uq_orders_restaurant_client_ref ON orders (restaurant_id, client_ref)")
            )
        if "users" in table_names and "ix_users_username" not in _sqlite_index_names(connection, "users"):
            connection.execute(text("CREATE UNIQUE INDEX ix_users_username ON users (username)"))
