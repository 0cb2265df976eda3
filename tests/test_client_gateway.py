"""ApiGateway error mapping over a mocked transport."""

from pathlib import Path

import httpx
import pytest

from siptakip.client.gateway import ApiError, ApiGateway, ServiceUnavailableError, UnauthorizedError
from siptakip.client.storage import AUTH_TOKEN_KEY, USER_DATA_KEY, LocalStorage


def _gateway(storage: LocalStorage, handler, **kwargs) -> ApiGateway:
    client = httpx.Client(base_url="http://api.test/api/v1", transport=httpx.MockTransport(handler))
    return ApiGateway(storage, client=client, **kwargs)


def test_bearer_token_is_attached(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    storage.set(AUTH_TOKEN_KEY, "abc")
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization", "")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[])

    assert _gateway(storage, handler).get("/orders") == []
    assert seen == {"auth": "Bearer abc", "path": "/api/v1/orders"}


def test_unauthorized_clears_session_and_calls_hook(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    storage.set(AUTH_TOKEN_KEY, "expired")
    storage.set(USER_DATA_KEY, {"role": "admin"})
    calls: list[bool] = []

    gateway = _gateway(
        storage,
        lambda request: httpx.Response(401, json={"error": "Invalid token"}),
        on_unauthorized=lambda: calls.append(True),
    )
    with pytest.raises(UnauthorizedError):
        gateway.get("/orders")

    assert storage.get(AUTH_TOKEN_KEY) is None
    assert storage.get(USER_DATA_KEY) is None
    assert calls == [True]


def test_client_errors_keep_server_message(tmp_path: Path) -> None:
    gateway = _gateway(LocalStorage(tmp_path), lambda request: httpx.Response(409, json={"error": "Masa 3 zaten mevcut"}))
    with pytest.raises(ApiError) as excinfo:
        gateway.post("/tables", {"tableNumber": 3})
    assert excinfo.value.status_code == 409
    assert excinfo.value.message == "Masa 3 zaten mevcut"


def test_server_errors_and_transport_failures_mean_unavailable(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    with pytest.raises(ServiceUnavailableError):
        _gateway(storage, lambda request: httpx.Response(503, json={"error": "down"})).get("/orders")

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ServiceUnavailableError):
        _gateway(storage, refuse).get("/orders")


def test_no_content_returns_none(tmp_path: Path) -> None:
    gateway = _gateway(LocalStorage(tmp_path), lambda request: httpx.Response(204))
    assert gateway.delete("/waiters/waiter-001") is None


def test_storage_survives_corrupt_files(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    (tmp_path / "orders_v1.json").write_text("{not json", encoding="utf-8")
    assert storage.get("orders_v1", []) == []

    storage.set("cart_v1", [{"product_id": "prod-001"}])
    assert storage.get("cart_v1") == [{"product_id": "prod-001"}]
    storage.remove("cart_v1")
    storage.remove("cart_v1")
    assert storage.get("cart_v1") is None
