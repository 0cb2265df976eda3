"""Tables and waiters for the admin screens, cached for offline viewing."""

from __future__ import annotations

import logging
from typing import Any

from siptakip.client.gateway import ApiGateway, ServiceUnavailableError
from siptakip.client.storage import TABLES_CACHE_KEY, WAITERS_CACHE_KEY, LocalStorage

logger = logging.getLogger(__name__)


class AdminStore:
    def __init__(self, gateway: ApiGateway, storage: LocalStorage) -> None:
        self.gateway = gateway
        self.storage = storage
        self.tables: list[dict[str, Any]] = storage.get(TABLES_CACHE_KEY, [])
        self.waiters: list[dict[str, Any]] = storage.get(WAITERS_CACHE_KEY, [])
        self.online = False

    def _fetch(self, path: str, cache_key: str) -> list[dict[str, Any]] | None:
        try:
            data = self.gateway.get(path)
        except ServiceUnavailableError:
            logger.info("[CLIENT] %s unavailable, using cached copy", path)
            self.online = False
            return None
        self.storage.set(cache_key, data)
        self.online = True
        return data

    def load_tables(self) -> list[dict[str, Any]]:
        data = self._fetch("/tables", TABLES_CACHE_KEY)
        if data is not None:
            self.tables = data
        return self.tables

    def load_waiters(self) -> list[dict[str, Any]]:
        data = self._fetch("/waiters", WAITERS_CACHE_KEY)
        if data is not None:
            self.waiters = data
        return self.waiters

    def create_table(self, table_number: int) -> dict[str, Any]:
        created = self.gateway.post("/tables", {"tableNumber": table_number})
        self.load_tables()
        return created

    def set_table_active(self, table_id: str, is_active: bool) -> dict[str, Any]:
        updated = self.gateway.patch(f"/tables/{table_id}", {"isActive": is_active})
        self.load_tables()
        return updated

    def delete_table(self, table_id: str) -> None:
        self.gateway.delete(f"/tables/{table_id}")
        self.load_tables()

    def create_waiter(self, full_name: str, phone: str | None = None) -> dict[str, Any]:
        created = self.gateway.post("/waiters", {"fullName": full_name, "phone": phone})
        self.load_waiters()
        return created

    def update_waiter(self, waiter_id: str, **changes: Any) -> dict[str, Any]:
        updated = self.gateway.patch(f"/waiters/{waiter_id}", changes)
        self.load_waiters()
        return updated

    def delete_waiter(self, waiter_id: str) -> None:
        self.gateway.delete(f"/waiters/{waiter_id}")
        self.load_waiters()

    @property
    def active_waiters(self) -> list[dict[str, Any]]:
        return [waiter for waiter in self.waiters if waiter.get("is_active")]
