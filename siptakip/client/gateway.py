"""HTTP gateway used by the client stores."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from siptakip.client.storage import AUTH_TOKEN_KEY, USER_DATA_KEY, LocalStorage
from siptakip.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API rejected the request (4xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UnauthorizedError(ApiError):
    """The stored token is missing, invalid or expired."""


class ServiceUnavailableError(Exception):
    """The API could not be reached or failed with a server error."""


class ApiGateway:
    """Thin JSON client attaching the stored bearer token to every call.

    No retries: a failed call surfaces immediately to the store.
    """

    def __init__(
        self,
        storage: LocalStorage,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.storage = storage
        self.on_unauthorized = on_unauthorized
        self._client = client or httpx.Client(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.client_timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> dict[str, str]:
        token = self.storage.get(AUTH_TOKEN_KEY)
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = self._client.request(method, path, json=json, params=params, headers=self._headers())
        except httpx.TransportError as exc:
            logger.warning("[CLIENT] %s %s failed: %s", method, path, exc)
            raise ServiceUnavailableError(str(exc)) from exc

        if response.status_code == 401:
            self.storage.remove(AUTH_TOKEN_KEY)
            self.storage.remove(USER_DATA_KEY)
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            raise UnauthorizedError(401, _error_message(response))
        if response.status_code >= 500:
            logger.warning("[CLIENT] %s %s -> %s", method, path, response.status_code)
            raise ServiceUnavailableError(_error_message(response))
        if response.status_code >= 400:
            raise ApiError(response.status_code, _error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        if response.headers.get("content-type", "").startswith("application/json"):
            return response.json()
        return response.content

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"
