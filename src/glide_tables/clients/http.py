# src/glide_tables/clients/http.py
"""Async HTTP transport for the Big Tables API."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Any

import httpx
import structlog

from glide_tables.core.config import GlideSettings

logger = structlog.get_logger(__name__)


class GlideHTTPClient:
    """Authenticated JSON transport built on httpx.AsyncClient.

    Every request carries the bearer token, JSON content negotiation headers
    and, when configured, the X-Glide-Client-ID header. Requests and their
    latency are logged; the token never is.

    Example:
        async with GlideHTTPClient(settings) as client:
            response = await client.post("/tables/abc/rows", [{"Name": "Ann"}])
            print(response.json())

    Clients derived with with_() share the parent's connection pool and do
    not close it; only the client that created the pool closes it.
    """

    def __init__(
        self,
        settings: GlideSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            settings: Validated connection settings
            client: Existing httpx.AsyncClient to share. When None, a client
                is created and owned (closed by aclose()).
        """
        self._settings = settings
        self._owns_client = client is None
        # follow_redirects=False: a redirected mutation must surface as a failure
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout,
            follow_redirects=False,
        )

    @property
    def settings(self) -> GlideSettings:
        return self._settings

    def with_(self, **overrides: Any) -> GlideHTTPClient:
        """Return a client with updated settings sharing this connection pool.

        None values are ignored, so optional per-table overrides can be passed
        straight through.
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        settings = GlideSettings(**{**self._settings.model_dump(), **updates})
        return GlideHTTPClient(settings, client=self._client)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._settings.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._settings.client_id is not None:
            headers["X-Glide-Client-ID"] = self._settings.client_id
        return headers

    def _resolve_url(self, path: str) -> str:
        """Join the endpoint with path, handling slash combinations."""
        return f"{self._settings.endpoint}/{path.lstrip('/')}"

    async def _request(self, method: str, path: str, body: Any = None) -> httpx.Response:
        url = self._resolve_url(path)
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                json=body,
                headers=self._headers(),
                timeout=self._settings.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning(
                "glide_request_failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=(time.perf_counter() - start) * 1000,
            )
            raise

        logger.debug(
            "glide_request",
            method=method,
            path=path,
            status_code=response.status_code,
            latency_ms=(time.perf_counter() - start) * 1000,
        )
        return response

    async def get(self, path: str) -> httpx.Response:
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> httpx.Response:
        return await self._request("POST", path, body)

    async def put(self, path: str, body: Any) -> httpx.Response:
        return await self._request("PUT", path, body)

    async def aclose(self) -> None:
        """Close the connection pool if this client owns it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GlideHTTPClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
