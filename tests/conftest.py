"""Shared fixtures: a throwaway SQLite database per test and an API client."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from siptakip.core.config import settings
from siptakip.db import session as db_session
from siptakip.db.base import Base
from siptakip.main import app


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def session_factory(tmp_path: Path, monkeypatch) -> Iterator[sessionmaker]:
    engine = _build_test_engine(tmp_path / "siptakip_test.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "seed_demo_data", True)
    monkeypatch.setattr(settings, "uploads_dir", tmp_path / "uploads")
    yield testing_session_local
    engine.dispose()


@pytest.fixture
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient) -> Callable[..., dict[str, str]]:
    """Log a seeded account in and return its Authorization header."""

    def _login(email: str, password: str | None = None) -> dict[str, str]:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password or settings.admin_password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def admin_headers(login) -> dict[str, str]:
    return login("admin@kofteci.com")


@pytest.fixture
def kitchen_headers(login) -> dict[str, str]:
    return login("mutfak@kofteci.com")


@pytest.fixture
def waiter_headers(login) -> dict[str, str]:
    return login("garson@kofteci.com")


@pytest.fixture
def platform_headers(login) -> dict[str, str]:
    return login("platform@siptakip.local")


@pytest.fixture
def customer_headers(client: TestClient) -> Callable[[int], dict[str, str]]:
    def _customer(table_number: int) -> dict[str, str]:
        response = client.post(
            "/api/v1/auth/customer-login",
            json={"restaurantSlug": "kofteci-ramiz", "tableNumber": table_number},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _customer


@pytest.fixture
def api_client(client: TestClient) -> TestClient:
    """A second client rooted at ``/api/v1``, the way the client gateway addresses the API."""
    return TestClient(app, base_url="http://testserver/api/v1")
