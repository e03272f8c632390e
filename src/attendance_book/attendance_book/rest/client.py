from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.exceptions import BackendError, RecordNotFoundError

logger = logging.getLogger(__name__)


class RestClient:
    """JSON document store over HTTP (json-server style collections).

    Every transport error or non-2xx answer is surfaced as `BackendError`;
    a 404 becomes `RecordNotFoundError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
    ) -> Any:
        try:
            resp = self._client.request(method, path, params=params, json=json)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise RecordNotFoundError(f"{method} {path}: not found") from e
            logger.error("REST %s %s failed with HTTP %s", method, path, status)
            raise BackendError(f"{method} {path} failed with HTTP {status}") from e
        except httpx.HTTPError as e:
            logger.error("REST %s %s failed: %s", method, path, e)
            raise BackendError(f"{method} {path} failed: {e}") from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"{method} {path} returned invalid JSON") from e

    def get(self, path: str, **params) -> Any:
        return self.request("GET", path, params=params or None)

    def post(self, path: str, body: dict) -> Any:
        return self.request("POST", path, json=body)

    def put(self, path: str, body: dict) -> Any:
        return self.request("PUT", path, json=body)

    def delete(self, path: str) -> None:
        self.request("DELETE", path)
