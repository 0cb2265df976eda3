"""Table and waiter management endpoints."""

from fastapi.testclient import TestClient


def test_seeded_tables_are_listed_for_staff(client: TestClient, waiter_headers) -> None:
    response = client.get("/api/v1/tables", headers=waiter_headers)
    assert response.status_code == 200
    assert [table["table_number"] for table in response.json()] == list(range(1, 11))
    assert response.json()[0]["id"] == "table-rest-001-001"


def test_create_table_and_reject_duplicate(client: TestClient, admin_headers) -> None:
    created = client.post("/api/v1/tables", json={"tableNumber": 11}, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["id"] == "table-rest-001-011"
    assert created.json()["is_active"] is True

    duplicate = client.post("/api/v1/tables", json={"tableNumber": 3}, headers=admin_headers)
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Masa 3 zaten mevcut"}


def test_table_number_must_be_positive(client: TestClient, admin_headers) -> None:
    response = client.post("/api/v1/tables", json={"tableNumber": 0}, headers=admin_headers)
    assert response.status_code == 400


def test_toggle_table_active(client: TestClient, admin_headers) -> None:
    response = client.patch("/api/v1/tables/table-rest-001-002", json={"isActive": False}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["is_active"] is False


def test_delete_table_blocked_by_active_orders(client: TestClient, admin_headers) -> None:
    order = client.post(
        "/api/v1/orders",
        json={"tableNumber": 6, "items": [{"id": "prod-002", "name": "Çay", "price": "15", "quantity": 1}]},
        headers=admin_headers,
    ).json()

    blocked = client.delete("/api/v1/tables/table-rest-001-006", headers=admin_headers)
    assert blocked.status_code == 400

    client.patch(f"/api/v1/orders/{order['id']}/status", json={"status": "İptal"}, headers=admin_headers)
    deleted = client.delete("/api/v1/tables/table-rest-001-006", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True}

    kept = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
    assert kept["table_id"] is None
    assert kept["status"] == "İptal"


def test_unknown_table_is_404(client: TestClient, admin_headers) -> None:
    assert client.delete("/api/v1/tables/table-rest-001-999", headers=admin_headers).status_code == 404


def test_waiter_roster_crud(client: TestClient, admin_headers) -> None:
    listed = client.get("/api/v1/waiters", headers=admin_headers).json()
    assert {waiter["id"] for waiter in listed} == {"waiter-001", "waiter-002"}

    created = client.post("/api/v1/waiters", json={"fullName": "Mehmet Kaya", "phone": ""}, headers=admin_headers)
    assert created.status_code == 201
    waiter = created.json()
    assert waiter["id"].startswith("waiter-")
    assert waiter["phone"] is None

    updated = client.patch(f"/api/v1/waiters/{waiter['id']}", json={"isActive": False}, headers=admin_headers)
    assert updated.json()["is_active"] is False

    assert client.delete(f"/api/v1/waiters/{waiter['id']}", headers=admin_headers).status_code == 204
    assert len(client.get("/api/v1/waiters", headers=admin_headers).json()) == 2


def test_waiter_name_too_short(client: TestClient, admin_headers) -> None:
    response = client.post("/api/v1/waiters", json={"fullName": "A"}, headers=admin_headers)
    assert response.status_code == 400
