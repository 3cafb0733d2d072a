# tests/helpers.py
"""Helpers shared by HTTP-level tests."""

from __future__ import annotations

import itertools
import json
from typing import Any

import httpx

BASE_URL = "https://api.test"
TEST_TOKEN = "test-token-123"


def request_json(call: Any) -> Any:
    """Decode the JSON body of a recorded respx call."""
    return json.loads(call.request.content)


def row_ids_response(row_ids: list[str], status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"data": {"rowIDs": row_ids}})


class RowIdIssuer:
    """respx side effect answering each mutation with fresh, unique row IDs.

    The backend assigns IDs; this mimics it so tests can check ordering and
    that repeated adds never reuse an ID.
    """

    def __init__(self) -> None:
        self._counter = itertools.count()
        self.issued: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        ids = [f"row-{next(self._counter)}" for _ in body]
        self.issued.extend(ids)
        return row_ids_response(ids)
