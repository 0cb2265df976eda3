"""JSON-file key/value store standing in for device local storage."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"
USER_DATA_KEY = "user_data"
USER_ROLE_KEY = "user_role_v1"
CART_KEY = "cart_v1"
ORDERS_KEY = "orders_v1"
ORDER_COUNTER_KEY = "order_counter_v1"
ORDERS_OUTBOX_KEY = "orders_outbox_v1"
TABLES_CACHE_KEY = "tables_cache_v1"
WAITERS_CACHE_KEY = "waiters_cache_v1"
LANGUAGE_KEY = "app_language"


class LocalStorage:
    """One JSON file per key under ``directory``.

    Reads never raise: a missing or unreadable key yields the caller's default.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        with self._lock:
            if not path.exists():
                return default
            try:
                return json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("[CLIENT] Error reading storage key %r: %s", key, exc)
                return default

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        with self._lock:
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
                tmp_path = path.with_suffix(".tmp")
                tmp_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
                tmp_path.replace(path)
            except OSError as exc:
                logger.error("[CLIENT] Error writing storage key %r: %s", key, exc)

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                self._path(key).unlink(missing_ok=True)
            except OSError as exc:
                logger.error("[CLIENT] Error removing storage key %r: %s", key, exc)
