"""Revenue report aggregation over paid orders."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session, selectinload

from siptakip.models.order import Order
from siptakip.schemas.order import ReportItem, ReportOrder, ReportResponse
from siptakip.services.order_status import PAID_STATUSES, OrderSource


def _report_order(order: Order) -> ReportOrder:
    return ReportOrder(
        id=order.id,
        order_code=order.order_code,
        status=order.status,
        total=order.total,
        order_source=order.order_source,
        table_number=order.table.table_number if order.table is not None else None,
        created_at=order.created_at,
        paid_at=order.paid_at,
        items=[ReportItem.model_validate(item) for item in order.items],
    )


def summarize(period: str, window: tuple[datetime, datetime], orders: list[ReportOrder]) -> ReportResponse:
    """Build the aggregate for already-filtered orders."""
    zero = Decimal("0.00")
    restaurant = [order for order in orders if order.order_source == OrderSource.RESTAURANT]
    third_party = [order for order in orders if order.order_source != OrderSource.RESTAURANT]
    total_revenue = sum((order.total for order in orders), zero)
    average = (
        (total_revenue / len(orders)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) if orders else zero
    )
    return ReportResponse(
        period=period,
        from_date=window[0],
        to_date=window[1],
        total_revenue=total_revenue,
        total_orders=len(orders),
        average_order=average,
        restaurant_revenue=sum((order.total for order in restaurant), zero),
        restaurant_orders=len(restaurant),
        third_party_revenue=sum((order.total for order in third_party), zero),
        third_party_orders=len(third_party),
        orders=orders,
    )


def build_report(
    db: Session,
    restaurant_id: str | None,
    period: str,
    window: tuple[datetime, datetime],
    source: str | None = None,
) -> ReportResponse:
    """Aggregate orders paid inside ``window`` (half-open)."""
    start, end = window
    query = (
        db.query(Order)
        .options(selectinload(Order.items), selectinload(Order.table))
        .filter(
            Order.status.in_([status.value for status in PAID_STATUSES]),
            Order.paid_at.is_not(None),
            Order.paid_at >= start,
            Order.paid_at < end,
        )
    )
    if restaurant_id is not None:
        query = query.filter(Order.restaurant_id == restaurant_id)
    if source and source != "all":
        query = query.filter(Order.order_source == source)

    orders = [_report_order(order) for order in query.order_by(Order.paid_at.desc()).all()]
    return summarize(period, window, orders)
