"""Cart, session, menu and admin stores."""

import threading
from decimal import Decimal
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from siptakip.client.admin_store import AdminStore
from siptakip.client.auth_store import AuthStore
from siptakip.client.cart_store import CartStore
from siptakip.client.gateway import ApiGateway
from siptakip.client.menu_store import MenuStore
from siptakip.client.poller import Poller
from siptakip.client.storage import AUTH_TOKEN_KEY, USER_ROLE_KEY, LocalStorage
from siptakip.core.config import settings

KOFTE = {"id": "prod-006", "name": "Izgara Köfte", "price": "220.00"}
AYRAN = {"id": "prod-003", "name": "Ayran", "price": "20.00"}


def _offline_gateway(storage: LocalStorage) -> ApiGateway:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(base_url="http://offline.test/api/v1", transport=httpx.MockTransport(refuse))
    return ApiGateway(storage, client=client)


def test_cart_merges_lines_and_persists(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    cart = CartStore(storage)
    cart.add(KOFTE)
    cart.add(KOFTE)
    cart.add(AYRAN, quantity=3)

    assert cart.item_count == 5
    assert cart.subtotal == Decimal("500.00")
    assert cart.total == cart.subtotal

    reopened = CartStore(storage)
    assert [(line.product_id, line.quantity) for line in reopened.lines] == [("prod-006", 2), ("prod-003", 3)]

    reopened.update_quantity("prod-003", 0)
    assert [line.product_id for line in reopened.lines] == ["prod-006"]
    reopened.clear()
    assert CartStore(storage).lines == []


def test_staff_login_and_logout(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path)
    auth = AuthStore(ApiGateway(storage, client=api_client), storage)
    user = auth.login(settings.admin_password, email="admin@kofteci.com")

    assert user["role"] == "admin"
    assert auth.is_authenticated
    assert auth.role == "admin"
    assert auth.restaurant_id == "rest-001"

    auth.logout()
    assert not auth.is_authenticated
    assert storage.get(USER_ROLE_KEY) is None


def test_customer_qr_login(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path)
    auth = AuthStore(ApiGateway(storage, client=api_client), storage)
    auth.customer_login("kofteci-ramiz", 8)

    assert auth.role == "customer"
    assert auth.table_number == 8
    assert auth.restaurant_id == "rest-001"
    assert storage.get(AUTH_TOKEN_KEY)


def test_menu_loads_from_api(tmp_path: Path, api_client: TestClient) -> None:
    menu = MenuStore(ApiGateway(LocalStorage(tmp_path), client=api_client), "rest-001")
    menu.load()

    assert menu.using_demo is False
    assert menu.restaurant_name == "Köfteci Ramiz"
    assert len(menu.products) == 10
    assert [product["id"] for product in menu.items_by_category("cat-004")] == ["prod-009", "prod-010"]
    assert menu.get_item_by_id("prod-006")["name"] == "Izgara Köfte"


def test_menu_falls_back_to_demo_data(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    menu = MenuStore(_offline_gateway(storage), "rest-001")
    menu.load()

    assert menu.using_demo is True
    assert menu.restaurant_name == "SipTakip"
    assert len(menu.categories) == 4
    assert list(menu.grouped_categories()) == ["İçecekler", "Kahvaltı", "Ana Yemek", "Tatlılar"]
    assert menu.get_item_by_id("prod-404") is None


def test_admin_manages_menu(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path / "admin")
    gateway = ApiGateway(storage, client=api_client)
    AuthStore(gateway, storage).login(settings.admin_password, email="admin@kofteci.com")
    menu = MenuStore(gateway, "rest-001")
    menu.load(include_unavailable=True)

    category = menu.create_category("Çorbalar", icon="🥣", sort_order=5)
    soup = menu.create_product("Mercimek Çorbası", Decimal("60.00"), category["id"], "Limonlu")
    assert [product["name"] for product in menu.items_by_category(category["id"])] == ["Mercimek Çorbası"]

    menu.set_product_available(soup["id"], False)
    assert menu.get_item_by_id(soup["id"])["is_available"] is False
    guest_menu = MenuStore(ApiGateway(LocalStorage(tmp_path / "guest"), client=api_client), "rest-001")
    guest_menu.load()
    assert guest_menu.get_item_by_id(soup["id"]) is None

    menu.update_product(soup["id"], price="65.00")
    assert Decimal(menu.get_item_by_id(soup["id"])["price"]) == Decimal("65.00")

    menu.delete_category(category["id"])
    assert menu.get_item_by_id(soup["id"]) is None
    assert category["id"] not in {item["id"] for item in menu.categories}


def test_admin_lists_fall_back_to_cache(tmp_path: Path, api_client: TestClient) -> None:
    storage = LocalStorage(tmp_path)
    gateway = ApiGateway(storage, client=api_client)
    AuthStore(gateway, storage).login(settings.admin_password, email="admin@kofteci.com")

    admin = AdminStore(gateway, storage)
    assert len(admin.load_tables()) == 10
    admin.create_table(12)
    assert admin.tables[-1]["table_number"] == 12
    admin.create_waiter("Zeynep Ak")
    assert len(admin.active_waiters) == 3

    offline = AdminStore(_offline_gateway(storage), storage)
    assert len(offline.load_tables()) == 11
    assert len(offline.load_waiters()) == 3
    assert offline.online is False


def test_poller_runs_callback_until_stopped() -> None:
    calls: list[int] = []
    done = threading.Event()

    def tick() -> None:
        calls.append(1)
        if len(calls) >= 2:
            done.set()

    poller = Poller(tick, interval=0.01)
    poller.start()
    assert poller.running
    assert done.wait(timeout=2)
    poller.stop(timeout=1)
    assert not poller.running
    assert len(calls) >= 2
