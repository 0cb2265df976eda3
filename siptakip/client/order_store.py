"""Client-side order state with offline fallback and a replayable outbox."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from siptakip.client.gateway import ApiError, ApiGateway, ServiceUnavailableError, UnauthorizedError
from siptakip.client.models import CartLine, LocalOrder, LocalOrderItem, LocalTable, LocalTotals
from siptakip.client.poller import Poller
from siptakip.client.storage import ORDER_COUNTER_KEY, ORDERS_KEY, ORDERS_OUTBOX_KEY, LocalStorage
from siptakip.core.config import settings
from siptakip.schemas.order import ReportItem, ReportOrder, ReportResponse
from siptakip.services.order_status import PAID_STATUSES, OrderSource, OrderStatus
from siptakip.services.report_service import summarize
from siptakip.utils.time import in_window, local_date, report_window

logger = logging.getLogger(__name__)

SOURCE_LABELS = {
    OrderSource.RESTAURANT: "Restoran",
    OrderSource.YEMEKSEPETI: "Yemeksepeti",
    OrderSource.TRENDYOL: "Trendyol",
    OrderSource.GETIR: "Getir",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_order(data: dict[str, Any]) -> LocalOrder:
    """Convert an API order into the local shape."""
    source = OrderSource(data.get("order_source") or OrderSource.RESTAURANT)
    table = data.get("table") or {}
    return LocalOrder(
        order_id=data["order_code"],
        created_at=data["created_at"],
        items=[
            LocalOrderItem(
                id=item.get("product_id"),
                name=item["product_name"],
                price=item["unit_price"],
                quantity=item["quantity"],
            )
            for item in data.get("items", [])
        ],
        table=LocalTable(
            table_number=table.get("table_number") or 0,
            waiter_name="Çevrimiçi" if source == OrderSource.RESTAURANT else SOURCE_LABELS[source],
            note=data.get("customer_note") or "",
        ),
        totals=LocalTotals(subtotal=data["subtotal"], total=data["total"]),
        status=data["status"],
        source=source,
        paid_at=data.get("paid_at"),
    )


class OrderStore:
    """Order list shared by the role screens.

    The server list is authoritative while online. When the API is unreachable
    the store serves the last persisted snapshot, numbers new orders locally
    (``SIP-0001``...) and queues mutations in a persisted outbox that is
    replayed on the next successful refresh.
    """

    def __init__(
        self,
        gateway: ApiGateway,
        storage: LocalStorage,
        poll_interval: float | None = None,
    ) -> None:
        self.gateway = gateway
        self.storage = storage
        self.online = False
        self.id_map: dict[str, str] = {}
        self.status_changes: list[tuple[str, OrderStatus, OrderStatus]] = []
        self.orders: list[LocalOrder] = self._load_snapshot()
        self._lock = threading.RLock()
        self._poller = Poller(self.refresh, poll_interval or settings.poll_interval_seconds)

    # persistence

    def _load_snapshot(self) -> list[LocalOrder]:
        raw = self.storage.get(ORDERS_KEY, [])
        try:
            return [LocalOrder.model_validate(entry) for entry in raw]
        except (ValidationError, TypeError) as exc:
            logger.warning("[CLIENT] Discarding unreadable order snapshot: %s", exc)
            return []

    def _save_snapshot(self) -> None:
        self.storage.set(ORDERS_KEY, [order.model_dump(mode="json") for order in self.orders])

    @property
    def outbox(self) -> list[dict[str, Any]]:
        return self.storage.get(ORDERS_OUTBOX_KEY, [])

    def _save_outbox(self, entries: list[dict[str, Any]]) -> None:
        if entries:
            self.storage.set(ORDERS_OUTBOX_KEY, entries)
        else:
            self.storage.remove(ORDERS_OUTBOX_KEY)

    def _next_offline_code(self) -> str:
        counter = int(self.storage.get(ORDER_COUNTER_KEY, 0)) + 1
        self.storage.set(ORDER_COUNTER_KEY, counter)
        return f"SIP-{counter:04d}"

    # polling

    def start_polling(self) -> None:
        self._poller.start()

    def stop_polling(self) -> None:
        self._poller.stop()

    # sync

    def refresh(self) -> bool:
        """Replay the outbox, then fetch the full list. Return True when online."""
        with self._lock:
            try:
                self._replay_outbox()
                data = self.gateway.get("/orders")
            except ServiceUnavailableError:
                if not self.orders:
                    self.orders = self._load_snapshot()
                self.online = False
                self.status_changes = []
                return False

            fetched: list[LocalOrder] = []
            for entry in data:
                self.id_map[entry["order_code"]] = entry["id"]
                fetched.append(normalize_order(entry))
            # Orders still waiting in the outbox stay visible.
            queued = {entry["local_code"] for entry in self.outbox if entry["kind"] == "create"}
            fetched = [order for order in self.orders if order.order_id in queued] + fetched

            previous = {order.order_id: order.status for order in self.orders}
            self.status_changes = [
                (order.order_id, previous[order.order_id], order.status)
                for order in fetched
                if order.order_id in previous and previous[order.order_id] != order.status
            ]
            if fetched != self.orders:
                self.orders = fetched
                self._save_snapshot()
            self.online = True
            return True

    def _replay_outbox(self) -> None:
        entries = self.outbox
        while entries:
            entry = entries[0]
            try:
                if entry["kind"] == "create":
                    self._replay_create(entry, entries[1:])
                else:
                    self._replay_status(entry)
            except (ServiceUnavailableError, UnauthorizedError):
                self._save_outbox(entries)
                raise
            except ApiError as exc:
                logger.warning(
                    "[CLIENT] Dropping queued %s for %s: %s",
                    entry["kind"],
                    entry.get("local_code") or entry.get("order_code"),
                    exc.message,
                )
                if entry["kind"] == "create":
                    self.orders = [order for order in self.orders if order.order_id != entry["local_code"]]
            entries = entries[1:]
            self._save_outbox(entries)

    def _replay_create(self, entry: dict[str, Any], rest: list[dict[str, Any]]) -> None:
        created = self.gateway.post("/orders", entry["payload"])
        local_code, server_code = entry["local_code"], created["order_code"]
        self.id_map[server_code] = created["id"]
        for later in rest:
            if later.get("order_code") == local_code:
                later["order_code"] = server_code

        for index, order in enumerate(self.orders):
            if order.order_id == local_code:
                self.orders[index] = order.model_copy(update={"order_id": server_code, "pending_sync": False})
        logger.info("[CLIENT] Synced offline order %s as %s", local_code, server_code)

    def _replay_status(self, entry: dict[str, Any]) -> None:
        code = entry["order_code"]
        current = self.gateway.get(f"/orders/{self.id_map.get(code, code)}")
        if current["status"] != entry["base_status"]:
            logger.warning(
                "[CLIENT] Dropping queued status %s for %s: server has %s",
                entry["status"],
                code,
                current["status"],
            )
            return
        self.gateway.patch(f"/orders/{current['id']}/status", {"status": entry["status"]})

    # mutations

    def create_order(
        self,
        lines: Iterable[CartLine],
        table_number: int | None = None,
        note: str = "",
        source: OrderSource = OrderSource.RESTAURANT,
        restaurant_id: str | None = None,
    ) -> LocalOrder:
        """Create an order online, or locally with a ``SIP-`` code when offline.

        Rejections (4xx) propagate as ``ApiError`` and nothing is stored.
        """
        lines = list(lines)
        payload: dict[str, Any] = {
            "items": [
                {"id": line.product_id, "name": line.name, "price": str(line.price), "quantity": line.quantity}
                for line in lines
            ],
            "customerNote": note or None,
            "orderSource": source.value,
            "clientRef": str(uuid4()),
        }
        if source == OrderSource.RESTAURANT:
            payload["tableNumber"] = table_number
        if restaurant_id:
            payload["restaurantId"] = restaurant_id

        with self._lock:
            try:
                created = self.gateway.post("/orders", payload)
            except ServiceUnavailableError:
                order = self._offline_order(lines, table_number, note, source)
                self._save_outbox(self.outbox + [{"kind": "create", "local_code": order.order_id, "payload": payload}])
                self.online = False
                logger.info("[CLIENT] Queued offline order %s", order.order_id)
            else:
                self.id_map[created["order_code"]] = created["id"]
                order = normalize_order(created)
                self.online = True

            self.orders = [order] + self.orders
            self._save_snapshot()
            return order

    def _offline_order(
        self,
        lines: list[CartLine],
        table_number: int | None,
        note: str,
        source: OrderSource,
    ) -> LocalOrder:
        total = sum((line.line_total for line in lines), Decimal("0.00"))
        return LocalOrder(
            order_id=self._next_offline_code(),
            created_at=_utcnow(),
            items=[
                LocalOrderItem(id=line.product_id, name=line.name, price=line.price, quantity=line.quantity)
                for line in lines
            ],
            table=LocalTable(
                table_number=(table_number or 0) if source == OrderSource.RESTAURANT else 0,
                waiter_name="Çevrimdışı" if source == OrderSource.RESTAURANT else SOURCE_LABELS[source],
                note=note,
            ),
            totals=LocalTotals(subtotal=total, total=total),
            source=source,
            pending_sync=True,
        )

    def update_order_status(self, order_code: str, status: OrderStatus | str) -> LocalOrder:
        """Change an order's status; queue the change when the API is unreachable.

        Raises ``KeyError`` for unknown codes and ``ApiError`` when the server
        rejects the change.
        """
        status = OrderStatus(status)
        with self._lock:
            order = self.get_order_by_id(order_code)
            if order is None:
                raise KeyError(order_code)

            server_id = self.id_map.get(order_code)
            updated: LocalOrder | None = None
            if server_id is not None and not order.pending_sync:
                try:
                    updated = normalize_order(self.gateway.patch(f"/orders/{server_id}/status", {"status": status.value}))
                    self.online = True
                except ServiceUnavailableError:
                    self.online = False

            if updated is None:
                queued = {"kind": "status", "order_code": order_code, "base_status": order.status.value, "status": status.value}
                self._save_outbox(self.outbox + [queued])
                paid_at = order.paid_at
                if status in PAID_STATUSES and paid_at is None:
                    paid_at = _utcnow()
                updated = order.model_copy(update={"status": status, "paid_at": paid_at})

            self.orders = [updated if existing.order_id == order_code else existing for existing in self.orders]
            self._save_snapshot()
            return updated

    # views

    def get_order_by_id(self, order_code: str) -> LocalOrder | None:
        return next((order for order in self.orders if order.order_id == order_code), None)

    def _with_status(self, status: OrderStatus) -> list[LocalOrder]:
        return [order for order in self.orders if order.status == status]

    @property
    def kitchen_orders(self) -> list[LocalOrder]:
        return self._with_status(OrderStatus.IN_KITCHEN)

    @property
    def ready_orders(self) -> list[LocalOrder]:
        return self._with_status(OrderStatus.READY)

    @property
    def delivered_orders(self) -> list[LocalOrder]:
        return self._with_status(OrderStatus.DELIVERED)

    @property
    def pending_payment_orders(self) -> list[LocalOrder]:
        return self.delivered_orders

    @property
    def third_party_orders(self) -> list[LocalOrder]:
        return [order for order in self.orders if order.source != OrderSource.RESTAURANT]

    @property
    def courier_orders(self) -> list[LocalOrder]:
        return self._with_status(OrderStatus.COURIER_DELIVERED)

    def orders_by_table(self, table_number: int) -> list[LocalOrder]:
        return [
            order
            for order in self.orders
            if order.source == OrderSource.RESTAURANT and order.table.table_number == table_number
        ]

    def table_payment_summary(self) -> dict[int, dict[str, Any]]:
        """Delivered, unpaid restaurant orders grouped by table with the amount due."""
        summary: dict[int, dict[str, Any]] = {}
        for order in self.pending_payment_orders:
            if order.source != OrderSource.RESTAURANT:
                continue
            group = summary.setdefault(order.table.table_number, {"orders": [], "total": Decimal("0.00")})
            group["orders"].append(order)
            group["total"] += order.totals.total
        return dict(sorted(summary.items()))

    def today_order_count(self, now: datetime | None = None, utc_offset_hours: int | None = None) -> int:
        offset = settings.report_utc_offset_hours if utc_offset_hours is None else utc_offset_hours
        today = local_date(now or _utcnow(), offset)
        return sum(1 for order in self.orders if local_date(order.created_at, offset) == today)

    @property
    def total_revenue(self) -> Decimal:
        return sum(
            (order.totals.total for order in self.orders if order.status in PAID_STATUSES),
            Decimal("0.00"),
        )

    def offline_report(
        self,
        period: str | None = "daily",
        now: datetime | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        source: str | None = None,
    ) -> ReportResponse:
        """Revenue report over the cached list, with the server's window rules."""
        window = report_window(
            period,
            now or _utcnow(),
            settings.report_utc_offset_hours,
            start_date=start_date,
            end_date=end_date,
        )
        rows = [
            ReportOrder(
                id=self.id_map.get(order.order_id, order.order_id),
                order_code=order.order_id,
                status=order.status,
                total=order.totals.total,
                order_source=order.source,
                table_number=order.table.table_number or None,
                created_at=order.created_at,
                paid_at=order.paid_at,
                items=[ReportItem(product_name=item.name, quantity=item.quantity, unit_price=item.price) for item in order.items],
            )
            for order in self.orders
            if order.status in PAID_STATUSES
            and in_window(order.paid_at or order.created_at, window)
            and (not source or source == "all" or order.source == source)
        ]
        label = period or ("custom" if start_date and end_date else "daily")
        return summarize(label, window, rows)
