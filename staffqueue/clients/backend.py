from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from staffqueue.services.exceptions import DownstreamServiceError

logger = logging.getLogger(__name__)


class BackendClient:
    """Async HTTP client for the remote persistence backend."""

    def __init__(
        self,
        base_url: str | None,
        *,
        timeout: float = 10.0,
        use_mock_data: bool = True,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = str(base_url).rstrip("/") if base_url else None
        self._timeout = timeout
        self.use_mock_data = use_mock_data or not self._base_url
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self.use_mock_data or not self._base_url:
            raise RuntimeError("HTTP client requested while running in mock mode")
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        client = await self._ensure_client()
        logger.debug("POST %s", path)
        try:
            response = await client.post(path, json=payload)
            response.raise_for_status()
            return response.json() if response.content else {}
        except httpx.HTTPStatusError as exc:
            logger.exception("Backend returned error %s", exc.response.status_code)
            raise DownstreamServiceError(
                "Backend returned an error response",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            logger.exception("Unable to reach backend: %s", exc)
            raise DownstreamServiceError(
                "Unable to reach backend", status_code=None, cause=exc
            ) from exc

    async def get(
        self, path: str, params: Dict[str, Any] | None = None
    ) -> Any:
        client = await self._ensure_client()
        logger.debug("GET %s", path)
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.exception("Backend returned error %s", exc.response.status_code)
            raise DownstreamServiceError(
                "Backend returned an error response",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            logger.exception("Unable to reach backend: %s", exc)
            raise DownstreamServiceError(
                "Unable to reach backend", status_code=None, cause=exc
            ) from exc
