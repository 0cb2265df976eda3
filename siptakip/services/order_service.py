"""Order domain logic: creation, lookup and status changes."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from siptakip.models.menu import Product
from siptakip.models.order import Order, OrderItem
from siptakip.models.table import DiningTable
from siptakip.schemas.order import OrderCreate
from siptakip.services.order_status import OrderSource, OrderStatus, set_status

logger = logging.getLogger(__name__)

_CODE_ALPHABET: str = string.ascii_uppercase + string.digits
_MONEY = Decimal("0.01")


class TableNotFoundError(Exception):
    """Raised when a restaurant order names a table that does not exist."""


class ProductUnavailableError(Exception):
    """Raised when an order line references a product switched off by the admin."""


def generate_order_code(db: Session, now: datetime) -> str:
    """Return an unused ``ORD-<year>-<XXXX>`` code."""
    while True:
        suffix = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(4))
        code = f"ORD-{now.year}-{suffix}"
        if db.query(Order.id).filter(Order.order_code == code).first() is None:
            return code


def _order_query(db: Session):
    return db.query(Order).options(selectinload(Order.items), selectinload(Order.table))


def list_orders(db: Session, restaurant_id: str | None) -> list[Order]:
    """Return orders newest first, optionally limited to one restaurant."""
    query = _order_query(db)
    if restaurant_id is not None:
        query = query.filter(Order.restaurant_id == restaurant_id)
    return query.order_by(Order.created_at.desc()).all()


def get_order(db: Session, order_ref: str) -> Order | None:
    """Find an order by id or by its human-readable code."""
    return _order_query(db).filter(or_(Order.id == order_ref, Order.order_code == order_ref)).first()


def _find_by_client_ref(db: Session, restaurant_id: str, client_ref: str) -> Order | None:
    return (
        _order_query(db)
        .filter(Order.restaurant_id == restaurant_id, Order.client_ref == client_ref)
        .first()
    )


def create_order(db: Session, restaurant_id: str, payload: OrderCreate, now: datetime) -> Order:
    """Persist an order and its items in one transaction.

    Lines naming a product of this restaurant are priced from the catalogue;
    other lines keep the submitted name and price.
    A repeated ``client_ref`` returns the order it first created.
    """
    if payload.client_ref:
        existing = _find_by_client_ref(db, restaurant_id, payload.client_ref)
        if existing is not None:
            logger.info("[ORDERS] repeated submit %s returns %s", payload.client_ref, existing.order_code)
            return existing

    table: DiningTable | None = None
    if payload.order_source == OrderSource.RESTAURANT:
        table = (
            db.query(DiningTable)
            .filter(
                DiningTable.restaurant_id == restaurant_id,
                DiningTable.table_number == payload.table_number,
            )
            .first()
        )
        if table is None:
            raise TableNotFoundError(f"Table {payload.table_number} not found")

    product_ids = {item.id for item in payload.items if item.id}
    products: dict[str, Product] = {}
    if product_ids:
        rows = (
            db.query(Product)
            .filter(Product.restaurant_id == restaurant_id, Product.id.in_(product_ids))
            .all()
        )
        products = {product.id: product for product in rows}

    order = Order(
        id=str(uuid4()),
        order_code=generate_order_code(db, now),
        restaurant_id=restaurant_id,
        table_id=table.id if table is not None else None,
        status=OrderStatus.IN_KITCHEN.value,
        customer_note=payload.customer_note or None,
        order_source=payload.order_source.value,
        client_ref=payload.client_ref,
        created_at=now,
    )

    subtotal = Decimal("0.00")
    for line in payload.items:
        product = products.get(line.id) if line.id else None
        if product is not None and not product.is_available:
            raise ProductUnavailableError(f"{product.name} is not available")
        name = product.name if product is not None else line.name
        unit_price = (product.price if product is not None else line.price).quantize(_MONEY)
        line_total = unit_price * line.quantity
        subtotal += line_total
        order.items.append(
            OrderItem(
                id=str(uuid4()),
                product_id=line.id,
                product_name=name,
                quantity=line.quantity,
                unit_price=unit_price,
                subtotal=line_total,
            )
        )

    order.subtotal = subtotal
    order.total = subtotal
    db.add(order)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_by_client_ref(db, restaurant_id, payload.client_ref) if payload.client_ref else None
        if existing is None:
            raise
        return existing
    logger.info(
        "[ORDERS] created %s restaurant=%s source=%s total=%s",
        order.order_code,
        restaurant_id,
        order.order_source,
        order.total,
    )
    return get_order(db, order.id)  # type: ignore[return-value]


def change_status(db: Session, order: Order, new_status: OrderStatus, now: datetime) -> Order:
    """Apply a status transition and commit it."""
    previous = order.status
    if set_status(order, new_status, now):
        db.commit()
        logger.info("[ORDERS] %s status %s -> %s", order.order_code, previous, new_status.value)
    return get_order(db, order.id)  # type: ignore[return-value]


def delete_order(db: Session, order: Order) -> None:
    db.delete(order)
    db.commit()
    logger.info("[ORDERS] deleted %s", order.order_code)
