"""Tests for lightweight SQLite schema migrations."""

from pathlib import Path

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine

from siptakip.db.base import Base
from siptakip.db.migrations import LATE_COLUMNS, ensure_sqlite_schema


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _create_legacy_schema(engine: Engine) -> None:
    with engine.begin() as connection:
        connection.execute(
            text("CREATE TABLE restaurants (id VARCHAR(64) PRIMARY KEY, name VARCHAR(255) NOT NULL, slug VARCHAR(128))")
        )
        connection.execute(
            text(
                """
                CREATE TABLE orders (
                    id VARCHAR(36) PRIMARY KEY,
                    order_code VARCHAR(32) NOT NULL,
                    restaurant_id VARCHAR(64) NOT NULL,
                    status VARCHAR(32) NOT NULL,
                    total NUMERIC(10, 2) NOT NULL
                )
                """
            )
        )
        connection.execute(text("CREATE TABLE users (id VARCHAR(64) PRIMARY KEY, email VARCHAR(255))"))
        connection.execute(
            text("INSERT INTO orders (id, order_code, restaurant_id, status, total) VALUES ('o1', 'ORD-2025-OLD1', 'rest-001', 'Ödendi', 100)")
        )


def test_ensure_sqlite_schema_adds_late_columns(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "legacy.db")
    _create_legacy_schema(engine)

    ensure_sqlite_schema(engine)

    inspector = inspect(engine)
    for table_name in ("orders", "restaurants", "users"):
        columns = {column["name"] for column in inspector.get_columns(table_name)}
        assert set(LATE_COLUMNS[table_name]) <= columns

    order_indexes = {index["name"] for index in inspector.get_indexes("orders")}
    assert {"ix_orders_status_paid_at", "uq_orders_restaurant_client_ref"} <= order_indexes
    with engine.connect() as connection:
        source = connection.execute(text("SELECT order_source FROM orders WHERE id = 'o1'")).scalar_one()
    assert source == "restaurant"


def test_ensure_sqlite_schema_is_idempotent(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "current.db")
    Base.metadata.create_all(bind=engine)

    ensure_sqlite_schema(engine)
    ensure_sqlite_schema(engine)

    columns = {column["name"] for column in inspect(engine).get_columns("orders")}
    assert {"order_source", "paid_at", "client_ref"} <= columns


def test_startup_creates_schema_and_seed(client, session_factory) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

    with session_factory() as session:
        count = session.execute(text("SELECT COUNT(*) FROM tables WHERE restaurant_id = 'rest-001'")).scalar_one()
    assert count == 10
