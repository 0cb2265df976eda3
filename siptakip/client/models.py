"""Local (device-side) shapes cached by the client stores."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from siptakip.services.order_status import OrderSource, OrderStatus


class LocalOrderItem(BaseModel):
    id: str | None = None
    name: str
    price: Decimal
    quantity: int


class LocalTable(BaseModel):
    table_number: int = 0
    waiter_name: str = ""
    note: str = ""


class LocalTotals(BaseModel):
    subtotal: Decimal
    total: Decimal


class LocalOrder(BaseModel):
    """An order as screens see it, keyed by its human-readable code."""

    order_id: str
    created_at: datetime
    items: list[LocalOrderItem]
    table: LocalTable = Field(default_factory=LocalTable)
    totals: LocalTotals
    status: OrderStatus = OrderStatus.IN_KITCHEN
    source: OrderSource = OrderSource.RESTAURANT
    paid_at: datetime | None = None
    pending_sync: bool = False


class CartLine(BaseModel):
    product_id: str
    name: str
    price: Decimal
    quantity: int
    image_url: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
