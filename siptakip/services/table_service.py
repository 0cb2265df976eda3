"""Table and waiter management rules."""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.orm import Session

from siptakip.models.order import Order
from siptakip.models.table import DiningTable, Waiter
from siptakip.services.order_status import TERMINAL_STATUSES

logger = logging.getLogger(__name__)


class DuplicateTableError(Exception):
    """Raised when the table number is already used in the restaurant."""


class TableHasActiveOrdersError(Exception):
    """Raised when deleting a table that still has open orders."""


def table_id_for(restaurant_id: str, table_number: int) -> str:
    return f"table-{restaurant_id}-{table_number:03d}"


def list_tables(db: Session, restaurant_id: str | None) -> list[DiningTable]:
    query = db.query(DiningTable)
    if restaurant_id is not None:
        query = query.filter(DiningTable.restaurant_id == restaurant_id)
    return query.order_by(DiningTable.table_number.asc()).all()


def create_table(db: Session, restaurant_id: str, table_number: int) -> DiningTable:
    """Create a table with a deterministic id."""
    existing = (
        db.query(DiningTable.id)
        .filter(DiningTable.restaurant_id == restaurant_id, DiningTable.table_number == table_number)
        .first()
    )
    if existing is not None:
        raise DuplicateTableError(f"Masa {table_number} zaten mevcut")

    table = DiningTable(
        id=table_id_for(restaurant_id, table_number),
        restaurant_id=restaurant_id,
        table_number=table_number,
        is_active=True,
    )
    db.add(table)
    db.commit()
    db.refresh(table)
    logger.info("[TABLES] created %s", table.id)
    return table


def has_active_orders(db: Session, table_id: str) -> bool:
    return (
        db.query(Order.id)
        .filter(
            Order.table_id == table_id,
            Order.status.not_in([status.value for status in TERMINAL_STATUSES]),
        )
        .first()
        is not None
    )


def delete_table(db: Session, table: DiningTable) -> None:
    """Delete a table whose orders are all paid or cancelled.

    Historical orders keep their rows and lose the table link.
    """
    if has_active_orders(db, table.id):
        raise TableHasActiveOrdersError("Bu masada aktif sipariş var, silinemez")
    db.query(Order).filter(Order.table_id == table.id).update({Order.table_id: None}, synchronize_session=False)
    db.delete(table)
    db.commit()
    logger.info("[TABLES] deleted %s", table.id)


def new_waiter_id() -> str:
    return f"waiter-{secrets.token_hex(6)}"


def list_waiters(db: Session, restaurant_id: str | None) -> list[Waiter]:
    query = db.query(Waiter)
    if restaurant_id is not None:
        query = query.filter(Waiter.restaurant_id == restaurant_id)
    return query.order_by(Waiter.created_at.asc()).all()


def create_waiter(db: Session, restaurant_id: str, full_name: str, phone: str | None) -> Waiter:
    waiter = Waiter(
        id=new_waiter_id(),
        restaurant_id=restaurant_id,
        full_name=full_name,
        phone=phone or None,
        is_active=True,
    )
    db.add(waiter)
    db.commit()
    db.refresh(waiter)
    return waiter


def update_waiter(db: Session, waiter: Waiter, changes: dict) -> Waiter:
    for field, value in changes.items():
        setattr(waiter, field, value)
    db.commit()
    db.refresh(waiter)
    return waiter
