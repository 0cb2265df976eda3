"""Public menu reads and admin menu management."""

import base64
from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient

from siptakip.core.config import settings
from siptakip.services.menu_service import parent_category_name

PNG_PIXEL = base64.b64encode(
    bytes.fromhex(
        "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
        "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
    )
).decode()


def test_parent_category_grouping() -> None:
    assert parent_category_name("Sıcak Kahveler") == "Kahveler"
    assert parent_category_name("Soğuk Kahveler") == "Kahveler"
    assert parent_category_name("Tatlılar") is None


def test_public_menu_needs_a_restaurant(client: TestClient) -> None:
    response = client.get("/api/v1/menu/categories")
    assert response.status_code == 400

    categories = client.get("/api/v1/menu/categories", params={"restaurant_id": "rest-001"}).json()
    assert [category["name"] for category in categories] == ["İçecekler", "Kahvaltı", "Ana Yemek", "Tatlılar"]


def test_customer_token_selects_restaurant(client: TestClient, customer_headers) -> None:
    products = client.get("/api/v1/menu/products", headers=customer_headers(1)).json()
    assert len(products) == 10


def test_unavailable_products_hidden_from_public_menu(client: TestClient, admin_headers) -> None:
    client.patch("/api/v1/menu/products/prod-010", json={"isAvailable": False}, headers=admin_headers)

    public = client.get("/api/v1/menu/products", params={"restaurant_id": "rest-001"}).json()
    assert "prod-010" not in {product["id"] for product in public}

    everything = client.get("/api/v1/menu/products/all", headers=admin_headers).json()
    assert "prod-010" in {product["id"] for product in everything}


def test_category_and_product_management(client: TestClient, admin_headers) -> None:
    category = client.post(
        "/api/v1/menu/categories",
        json={"name": "Sıcak Kahveler", "icon": "☕", "sortOrder": 5},
        headers=admin_headers,
    )
    assert category.status_code == 201
    assert category.json()["parent_name"] == "Kahveler"

    product = client.post(
        "/api/v1/menu/products",
        json={"name": "Latte", "price": "85.00", "categoryId": category.json()["id"]},
        headers=admin_headers,
    )
    assert product.status_code == 201
    assert product.json()["restaurant_id"] == "rest-001"

    renamed = client.patch(
        f"/api/v1/menu/products/{product.json()['id']}",
        json={"price": "90.00", "description": None},
        headers=admin_headers,
    )
    assert Decimal(renamed.json()["price"]) == Decimal("90.00")
    assert renamed.json()["description"] is None

    missing_category = client.post(
        "/api/v1/menu/products",
        json={"name": "Mocha", "price": "95", "categoryId": "cat-none"},
        headers=admin_headers,
    )
    assert missing_category.status_code == 400


def test_delete_category_removes_its_products(client: TestClient, admin_headers) -> None:
    assert client.delete("/api/v1/menu/categories/cat-004", headers=admin_headers).status_code == 204
    products = client.get("/api/v1/menu/products/all", headers=admin_headers).json()
    assert not {"prod-009", "prod-010"} & {product["id"] for product in products}


def test_menu_writes_need_admin(client: TestClient, waiter_headers) -> None:
    response = client.post("/api/v1/menu/categories", json={"name": "Gizli"}, headers=waiter_headers)
    assert response.status_code == 403


def test_restaurant_branding(client: TestClient, admin_headers) -> None:
    response = client.patch(
        "/api/v1/menu/restaurants/rest-001",
        json={"name": "Köfteci Ramiz Kadıköy", "logoUrl": "/uploads/rest-001/logo.png"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["logo_url"] == "/uploads/rest-001/logo.png"

    restaurants = client.get("/api/v1/menu/restaurants").json()
    assert restaurants[0]["name"] == "Köfteci Ramiz Kadıköy"


def test_upload_image(client: TestClient, admin_headers) -> None:
    response = client.post(
        "/api/v1/menu/upload-image",
        json={"image": f"data:image/png;base64,{PNG_PIXEL}", "fileName": "pixel.png"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    url = response.json()["url"]
    assert url.startswith("/uploads/rest-001/") and url.endswith(".png")
    assert (Path(settings.uploads_dir) / url.removeprefix("/uploads/")).exists()


def test_upload_rejects_other_types(client: TestClient, admin_headers) -> None:
    response = client.post(
        "/api/v1/menu/upload-image",
        json={"image": "data:text/plain;base64,aGVsbG8="},
        headers=admin_headers,
    )
    assert response.status_code == 400
