# src/glide_tables/clients/base.py
"""Transport protocol consumed by tables and stashes."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Minimal async interface to the Big Tables API.

    Paths are relative to the API endpoint (e.g. ``/tables/abc/rows``).
    Implementations return the response as received; status checking is
    the caller's job (see glide_tables.core.validation).
    """

    async def get(self, path: str) -> httpx.Response:
        """Issue a GET request."""
        ...

    async def post(self, path: str, body: Any) -> httpx.Response:
        """Issue a POST request with a JSON body."""
        ...

    async def put(self, path: str, body: Any) -> httpx.Response:
        """Issue a PUT request with a JSON body."""
        ...
