"""Order endpoints."""

from datetime import date, datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from siptakip.core.config import settings
from siptakip.core.security import Identity, authenticate, authorize
from siptakip.db.session import get_db
from siptakip.models.order import Order
from siptakip.models.restaurant import Restaurant
from siptakip.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, ReportResponse
from siptakip.services import order_service, report_service
from siptakip.services.order_status import InvalidStatusTransitionError, OrderSource, role_can_set
from siptakip.services.pdf_exports import render_report_pdf
from siptakip.services.security_guards import ensure_same_tenant, resolve_restaurant_id, scoped_restaurant_id
from siptakip.utils.time import report_window

router: APIRouter = APIRouter()

ReportPeriod = Literal["daily", "weekly", "monthly"]


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _load_order(db: Session, identity: Identity, order_id: str) -> Order:
    order = order_service.get_order(db, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    ensure_same_tenant(identity, order.restaurant_id, "Order not found")
    if identity.role == "customer" and (order.table is None or order.table.table_number != identity.table_number):
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("", response_model=list[OrderResponse])
def list_orders(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authenticate),
) -> list[Order]:
    """Return the caller's restaurant orders, newest first.

    Customers only see the orders of their own table.
    """
    orders = order_service.list_orders(db, scoped_restaurant_id(identity, restaurant_id))
    if identity.role == "customer":
        orders = [
            order for order in orders
            if order.table is not None and order.table.table_number == identity.table_number
        ]
    return orders


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authenticate),
) -> Order:
    if identity.role == "customer":
        if payload.order_source != OrderSource.RESTAURANT:
            raise HTTPException(status_code=403, detail="Customers can only order for their table")
        payload.table_number = identity.table_number
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    if payload.order_source == OrderSource.RESTAURANT and payload.table_number is None:
        raise HTTPException(status_code=400, detail="tableNumber is required for restaurant orders")

    try:
        return order_service.create_order(db, restaurant_id, payload, _now_utc())
    except order_service.TableNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Table not found") from exc
    except order_service.ProductUnavailableError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/report", response_model=ReportResponse)
def get_report(
    period: ReportPeriod | None = Query(default=None),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    source: str | None = Query(default=None),
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> ReportResponse:
    """Revenue of orders paid inside the requested Istanbul-local window."""
    return _build_report(db, identity, period, start_date, end_date, source, restaurant_id)


@router.get("/report.pdf")
def get_report_pdf(
    period: ReportPeriod | None = Query(default=None),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    source: str | None = Query(default=None),
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> Response:
    report = _build_report(db, identity, period, start_date, end_date, source, restaurant_id)
    scoped = scoped_restaurant_id(identity, restaurant_id)
    restaurant = db.get(Restaurant, scoped) if scoped else None
    pdf_bytes = render_report_pdf(
        report,
        restaurant.name if restaurant is not None else "SipTakip",
        utc_offset_hours=settings.report_utc_offset_hours,
    )
    filename = f"rapor_{report.period}_{report.from_date:%Y%m%d}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _build_report(
    db: Session,
    identity: Identity,
    period: str | None,
    start_date: date | None,
    end_date: date | None,
    source: str | None,
    restaurant_id: str | None,
) -> ReportResponse:
    try:
        window = report_window(
            period,
            _now_utc(),
            settings.report_utc_offset_hours,
            start_date=start_date,
            end_date=end_date,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if period:
        label = period
    elif start_date and end_date:
        label = "custom"
    else:
        label = "daily"
    return report_service.build_report(
        db,
        scoped_restaurant_id(identity, restaurant_id),
        label,
        window,
        source=source,
    )


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authenticate),
) -> Order:
    return _load_order(db, identity, order_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("kitchen", "waiter", "admin", "super_admin")),
) -> Order:
    order = _load_order(db, identity, order_id)
    if order.status != payload.status.value and not role_can_set(identity.role, payload.status):
        raise HTTPException(status_code=403, detail=f"Role {identity.role} cannot set {payload.status.value}")
    try:
        return order_service.change_status(db, order, payload.status, _now_utc())
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> Response:
    order = _load_order(db, identity, order_id)
    order_service.delete_order(db, order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
