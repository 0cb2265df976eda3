"""Marketplace integration settings and bulk marketing e-mail."""

import smtplib

from fastapi.testclient import TestClient

from siptakip.services import email_service


def test_integration_crud_and_credential_check(client: TestClient, admin_headers) -> None:
    created = client.post(
        "/api/v1/integrations",
        json={"platform": "getir", "storeName": "Köfteci Ramiz Getir"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    integration = created.json()
    assert integration["restaurant_id"] == "rest-001"

    duplicate = client.post("/api/v1/integrations", json={"platform": "getir"}, headers=admin_headers)
    assert duplicate.status_code == 409

    failed = client.post(f"/api/v1/integrations/{integration['id']}/test", headers=admin_headers).json()
    assert failed["success"] is False

    client.patch(f"/api/v1/integrations/{integration['id']}", json={"sellerId": "S-1001"}, headers=admin_headers)
    passed = client.post(f"/api/v1/integrations/{integration['id']}/test", headers=admin_headers).json()
    assert passed["success"] is True
    assert passed["platform"] == "getir"

    assert client.delete(f"/api/v1/integrations/{integration['id']}", headers=admin_headers).status_code == 204
    assert client.get("/api/v1/integrations", headers=admin_headers).json() == []


def test_integration_platform_is_validated(client: TestClient, admin_headers) -> None:
    response = client.post("/api/v1/integrations", json={"platform": "glovo"}, headers=admin_headers)
    assert response.status_code == 400


def test_email_template(client: TestClient, platform_headers) -> None:
    response = client.get("/api/v1/email/template", headers=platform_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["subject"] == email_service.DEFAULT_SUBJECT
    assert "SipTakip" in body["html"]


class _RecordingMailer:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, to: str, subject: str, html: str) -> None:
        if to.startswith("bounce"):
            raise smtplib.SMTPRecipientsRefused({to: (550, b"no such user")})
        self.sent.append((to, subject))


def test_bulk_send_reports_each_recipient(client: TestClient, platform_headers, monkeypatch) -> None:
    mailer = _RecordingMailer()
    monkeypatch.setattr(email_service, "get_mailer", lambda: mailer)

    response = client.post(
        "/api/v1/email/send",
        json={"emails": ["ali@example.com", "bounce@example.com"], "subject": "Merhaba"},
        headers=platform_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["sent"] == 1
    assert body["failed"] == 1
    assert [result["success"] for result in body["results"]] == [True, False]
    assert mailer.sent == [("ali@example.com", "Merhaba")]


def test_send_without_smtp_configuration(client: TestClient, platform_headers, monkeypatch) -> None:
    monkeypatch.setattr(email_service.settings, "smtp_host", "")
    response = client.post("/api/v1/email/send", json={"emails": ["ali@example.com"]}, headers=platform_headers)
    assert response.status_code == 500
    assert "error" in response.json()


def test_email_is_platform_only(client: TestClient, admin_headers) -> None:
    assert client.get("/api/v1/email/template", headers=admin_headers).status_code == 403
