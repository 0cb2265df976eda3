"""Tests for staff and customer authentication."""

from fastapi.testclient import TestClient
from jose import jwt

from siptakip.core.config import settings
from siptakip.core.security import create_access_token, get_password_hash, verify_password, verify_token


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_carries_expiry() -> None:
    token = create_access_token({"sub": "usr-1", "role": "admin"})
    payload = verify_token(token)
    assert payload["sub"] == "usr-1"
    assert "exp" in payload


def test_admin_login_returns_token_with_role_and_tenant(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "admin@kofteci.com", "password": settings.admin_password},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["role"] == "admin"
    assert body["user"]["restaurant"]["slug"] == "kofteci-ramiz"

    claims = jwt.decode(body["token"], settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert claims["role"] == "admin"
    assert claims["restaurant_id"] == "rest-001"


def test_wrong_password_is_rejected(client: TestClient) -> None:
    response = client.post("/api/v1/auth/login", json={"email": "admin@kofteci.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_requires_email_or_username(client: TestClient) -> None:
    response = client.post("/api/v1/auth/login", json={"password": "12345"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_customer_login_binds_table(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/customer-login",
        json={"restaurantSlug": "kofteci-ramiz", "tableNumber": 7},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["table_number"] == 7
    assert body["restaurant"]["id"] == "rest-001"

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "customer"
    assert me.json()["table_number"] == 7


def test_customer_login_unknown_restaurant(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/customer-login",
        json={"restaurantSlug": "yok-boyle-bir-yer", "tableNumber": 1},
    )
    assert response.status_code == 404


def test_missing_and_invalid_tokens(client: TestClient) -> None:
    assert client.get("/api/v1/orders").json() == {"error": "Authentication required"}

    response = client.get("/api/v1/orders", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_role_guard_answers_403(client: TestClient, kitchen_headers: dict[str, str]) -> None:
    response = client.post("/api/v1/tables", json={"tableNumber": 30}, headers=kitchen_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions"}
