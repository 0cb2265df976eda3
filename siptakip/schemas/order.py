"""Order API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from siptakip.schemas.common import RequestModel
from siptakip.services.order_status import OrderSource, OrderStatus
from siptakip.utils.time import as_utc


class OrderItemPayload(RequestModel):
    """Cart line as submitted by the client."""

    id: str | None = None
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)


class OrderCreate(RequestModel):
    """Create an order for a table or a delivery marketplace.

    ``table_number`` is ignored for third-party sources.
    """

    table_number: int | None = None
    items: list[OrderItemPayload] = Field(min_length=1)
    customer_note: str | None = None
    order_source: OrderSource = OrderSource.RESTAURANT
    restaurant_id: str | None = None
    client_ref: str | None = Field(default=None, max_length=64)


class OrderStatusUpdate(RequestModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: str
    product_id: str | None
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderTableResponse(BaseModel):
    id: str
    table_number: int

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Serialized order with nested table and items."""

    id: str
    order_code: str
    restaurant_id: str
    table_id: str | None
    table: OrderTableResponse | None
    status: OrderStatus
    subtotal: Decimal
    total: Decimal
    customer_note: str | None
    order_source: OrderSource
    client_ref: str | None = None
    created_at: datetime
    paid_at: datetime | None
    items: list[OrderItemResponse]

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "paid_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class ReportItem(BaseModel):
    product_name: str
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class ReportOrder(BaseModel):
    id: str
    order_code: str
    status: OrderStatus
    total: Decimal
    order_source: OrderSource
    table_number: int | None
    created_at: datetime
    paid_at: datetime | None
    items: list[ReportItem]

    @field_validator("created_at", "paid_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class ReportResponse(BaseModel):
    """Aggregate revenue over a window of paid orders."""

    period: str
    from_date: datetime
    to_date: datetime
    total_revenue: Decimal
    total_orders: int
    average_order: Decimal
    restaurant_revenue: Decimal
    restaurant_orders: int
    third_party_revenue: Decimal
    third_party_orders: int
    orders: list[ReportOrder]
