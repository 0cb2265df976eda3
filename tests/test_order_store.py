"""OrderStore online behaviour, offline fallback and outbox replay."""

from decimal import Decimal
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from siptakip.client.auth_store import AuthStore
from siptakip.client.gateway import ApiError, ApiGateway, UnauthorizedError
from siptakip.client.menu_store import MenuStore
from siptakip.client.models import CartLine
from siptakip.client.order_store import OrderStore
from siptakip.client.storage import AUTH_TOKEN_KEY, LocalStorage
from siptakip.core.config import settings
from siptakip.services.order_status import OrderSource, OrderStatus

COFFEE = CartLine(product_id="prod-001", name="Türk Kahvesi", price=Decimal("45.00"), quantity=2)
TEA = CartLine(product_id="prod-002", name="Çay", price=Decimal("15.00"), quantity=1)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def _offline_gateway(storage: LocalStorage) -> ApiGateway:
    client = httpx.Client(base_url="http://offline.test/api/v1", transport=httpx.MockTransport(_refuse))
    return ApiGateway(storage, client=client)


def _online_gateway(storage: LocalStorage, api_client: TestClient, email: str = "admin@kofteci.com") -> ApiGateway:
    gateway = ApiGateway(storage, client=api_client)
    AuthStore(gateway, storage).login(settings.admin_password, email=email)
    return gateway


def test_online_create_and_status_change(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    store = OrderStore(_online_gateway(storage, api_client), storage)
    assert store.refresh() is True
    assert store.online is True

    order = store.create_order([COFFEE, TEA], table_number=3, note="Az şekerli")
    assert order.order_id.startswith("ORD-")
    assert order.order_id in store.id_map
    assert order.totals.total == Decimal("105.00")
    assert order.table.table_number == 3
    assert order.table.note == "Az şekerli"
    assert store.kitchen_orders == [order]

    ready = store.update_order_status(order.order_id, OrderStatus.READY)
    assert ready.status == OrderStatus.READY
    assert store.kitchen_orders == []
    assert [entry.order_id for entry in store.ready_orders] == [order.order_id]

    with pytest.raises(ApiError) as excinfo:
        store.update_order_status(order.order_id, OrderStatus.PAID)
    assert excinfo.value.status_code == 409
    assert store.get_order_by_id(order.order_id).status == OrderStatus.READY


def test_refresh_keeps_state_when_nothing_changed(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    store = OrderStore(_online_gateway(storage, api_client), storage)
    store.create_order([TEA], table_number=1)
    store.refresh()

    before = store.orders
    store.refresh()
    assert store.orders is before
    assert store.status_changes == []


def test_refresh_reports_status_changes(tmp_path: Path, api_client: TestClient, kitchen_headers) -> None:
    storage = LocalStorage(tmp_path / "device")
    store = OrderStore(_online_gateway(storage, api_client), storage)
    order = store.create_order([TEA], table_number=1)

    server_id = store.id_map[order.order_id]
    api_client.patch(f"/orders/{server_id}/status", json={"status": "Hazır"}, headers=kitchen_headers)

    store.refresh()
    assert store.status_changes == [(order.order_id, OrderStatus.IN_KITCHEN, OrderStatus.READY)]


def test_offline_orders_are_numbered_and_survive_reload(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "device")
    store = OrderStore(_offline_gateway(storage), storage)
    assert store.refresh() is False
    assert store.online is False

    first = store.create_order([COFFEE], table_number=2)
    second = store.create_order([TEA], table_number=5)
    assert (first.order_id, second.order_id) == ("SIP-0001", "SIP-0002")
    assert first.pending_sync is True
    assert first.totals.total == Decimal("90.00")

    reloaded = OrderStore(_offline_gateway(storage), storage)
    reloaded.refresh()
    assert [order.order_id for order in reloaded.orders] == ["SIP-0002", "SIP-0001"]
    assert reloaded.create_order([TEA], table_number=2).order_id == "SIP-0003"
    assert len(reloaded.outbox) == 3


def test_offline_views_and_report(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "device")
    store = OrderStore(_offline_gateway(storage), storage)
    table_two = store.create_order([COFFEE], table_number=2)
    store.create_order([TEA], table_number=5)
    courier = store.create_order([TEA, TEA], source=OrderSource.GETIR)

    store.update_order_status(table_two.order_id, OrderStatus.DELIVERED)
    store.update_order_status(courier.order_id, OrderStatus.COURIER_DELIVERED)

    summary = store.table_payment_summary()
    assert list(summary) == [2]
    assert summary[2]["total"] == Decimal("90.00")
    assert [order.order_id for order in store.third_party_orders] == [courier.order_id]
    assert [order.order_id for order in store.courier_orders] == [courier.order_id]
    assert [order.order_id for order in store.orders_by_table(5)] == ["SIP-0002"]
    assert store.today_order_count() == 3
    assert store.total_revenue == Decimal("30.00")

    store.update_order_status(table_two.order_id, OrderStatus.PAID)
    report = store.offline_report("daily")
    assert report.total_orders == 2
    assert report.total_revenue == Decimal("120.00")
    assert report.third_party_orders == 1


def test_outbox_replays_creations_and_status_changes(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    offline = OrderStore(_offline_gateway(storage), storage)
    local = offline.create_order([COFFEE], table_number=3)
    offline.update_order_status(local.order_id, OrderStatus.READY)
    assert [entry["kind"] for entry in offline.outbox] == ["create", "status"]

    online = OrderStore(_online_gateway(storage, api_client), storage)
    assert online.refresh() is True

    assert online.outbox == []
    assert len(online.orders) == 1
    synced = online.orders[0]
    assert synced.order_id.startswith("ORD-")
    assert synced.status == OrderStatus.READY
    assert synced.pending_sync is False
    assert synced.table.table_number == 3


def test_queued_status_change_loses_to_server(
    tmp_path: Path,
    api_client: TestClient,
    kitchen_headers,
) -> None:
    storage = LocalStorage(tmp_path / "device")
    online = OrderStore(_online_gateway(storage, api_client), storage)
    order = online.create_order([TEA], table_number=4)
    server_id = online.id_map[order.order_id]

    offline = OrderStore(_offline_gateway(storage), storage)
    offline.update_order_status(order.order_id, OrderStatus.CANCELLED)
    api_client.patch(f"/orders/{server_id}/status", json={"status": "Hazır"}, headers=kitchen_headers)

    online = OrderStore(ApiGateway(storage, client=api_client), storage)
    online.refresh()
    assert online.outbox == []
    assert online.get_order_by_id(order.order_id).status == OrderStatus.READY


def test_rejected_offline_order_is_dropped(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    offline = OrderStore(_offline_gateway(storage), storage)
    offline.create_order([TEA], table_number=99)

    online = OrderStore(_online_gateway(storage, api_client), storage)
    online.refresh()
    assert online.outbox == []
    assert online.orders == []


class _LostCreateResponse:
    """Forwards to the app but drops the response of the first order creation."""

    def __init__(self, inner: TestClient) -> None:
        self.inner = inner
        self.dropped = False

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = self.inner.request(method, url, **kwargs)
        if method == "POST" and url == "/orders" and not self.dropped:
            self.dropped = True
            raise httpx.ReadTimeout("read timed out", request=response.request)
        return response

    def close(self) -> None:
        self.inner.close()


def test_create_replay_after_lost_response_does_not_duplicate(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    _online_gateway(storage, api_client)
    store = OrderStore(ApiGateway(storage, client=_LostCreateResponse(api_client)), storage)

    local = store.create_order([TEA], table_number=4)
    assert local.order_id == "SIP-0001"
    assert store.online is False

    assert store.refresh() is True
    assert store.outbox == []
    table_orders = store.orders_by_table(4)
    assert len(table_orders) == 1
    assert table_orders[0].order_id.startswith("ORD-")
    assert len(store.kitchen_orders) == 1


def test_third_party_order_from_menu_reaches_courier(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    gateway = _online_gateway(storage, api_client)
    menu = MenuStore(gateway, "rest-001")
    menu.load()
    lines = menu.cart_lines({"prod-007": 2, "prod-003": 0, "prod-404": 1})
    assert [(line.product_id, line.quantity) for line in lines] == [("prod-007", 2)]

    store = OrderStore(gateway, storage)
    order = store.create_order(lines, source=OrderSource.GETIR, note="Zili çalmayın")
    assert order.table.table_number == 0
    assert order.table.waiter_name == "Getir"
    assert [entry.order_id for entry in store.third_party_orders] == [order.order_id]

    store.update_order_status(order.order_id, OrderStatus.READY)
    store.update_order_status(order.order_id, OrderStatus.COURIER_DELIVERED)
    assert [entry.order_id for entry in store.courier_orders] == [order.order_id]
    assert store.total_revenue == Decimal("640.00")


def test_expired_session_signs_out_and_keeps_queued_work(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "device")
    offline = OrderStore(_offline_gateway(storage), storage)
    local = offline.create_order([TEA], table_number=2)

    gateway = _online_gateway(storage, api_client)
    storage.set(AUTH_TOKEN_KEY, "expired-token")
    store = OrderStore(gateway, storage)

    with pytest.raises(UnauthorizedError):
        store.refresh()
    assert AuthStore(gateway, storage).is_authenticated is False
    assert [entry["local_code"] for entry in store.outbox] == [local.order_id]
    assert [order.order_id for order in store.orders] == [local.order_id]
