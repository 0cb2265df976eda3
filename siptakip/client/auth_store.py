"""Persisted session: role, bearer token and user profile."""

from __future__ import annotations

import logging
from typing import Any

from siptakip.client.gateway import ApiGateway
from siptakip.client.storage import AUTH_TOKEN_KEY, USER_DATA_KEY, USER_ROLE_KEY, LocalStorage

logger = logging.getLogger(__name__)


class AuthStore:
    def __init__(self, gateway: ApiGateway, storage: LocalStorage) -> None:
        self.gateway = gateway
        self.storage = storage

    @property
    def token(self) -> str | None:
        return self.storage.get(AUTH_TOKEN_KEY)

    @property
    def user(self) -> dict[str, Any] | None:
        return self.storage.get(USER_DATA_KEY)

    @property
    def role(self) -> str | None:
        return self.storage.get(USER_ROLE_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def restaurant_id(self) -> str | None:
        restaurant = (self.user or {}).get("restaurant")
        return restaurant["id"] if restaurant else None

    @property
    def table_number(self) -> int | None:
        return (self.user or {}).get("table_number")

    def login(
        self,
        password: str,
        email: str | None = None,
        username: str | None = None,
        restaurant_slug: str | None = None,
    ) -> dict[str, Any]:
        """Staff login. Raises ``UnauthorizedError`` on bad credentials."""
        body = {"email": email, "username": username, "password": password, "restaurantSlug": restaurant_slug}
        data = self.gateway.post("/auth/login", {key: value for key, value in body.items() if value is not None})
        self.storage.set(AUTH_TOKEN_KEY, data["token"])
        self.storage.set(USER_DATA_KEY, data["user"])
        self.storage.set(USER_ROLE_KEY, data["user"]["role"])
        logger.info("[CLIENT] Logged in as %s", data["user"]["role"])
        return data["user"]

    def customer_login(self, restaurant_slug: str, table_number: int) -> dict[str, Any]:
        """Exchange a scanned QR code (restaurant slug + table) for a customer token."""
        data = self.gateway.post(
            "/auth/customer-login",
            {"restaurantSlug": restaurant_slug, "tableNumber": table_number},
        )
        user = {"role": "customer", "restaurant": data["restaurant"], "table_number": data["table_number"]}
        self.storage.set(AUTH_TOKEN_KEY, data["token"])
        self.storage.set(USER_DATA_KEY, user)
        self.storage.set(USER_ROLE_KEY, "customer")
        return user

    def logout(self) -> None:
        for key in (AUTH_TOKEN_KEY, USER_DATA_KEY, USER_ROLE_KEY):
            self.storage.remove(key)
