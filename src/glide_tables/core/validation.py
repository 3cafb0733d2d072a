# src/glide_tables/core/validation.py
"""Response validation shared by every mutation.

check_response() only judges the status code. Payload extraction is done by
the caller through extract_data() / extract_row_ids(), which validate the
envelope shape at the API boundary.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from typing import Any

import httpx

from glide_tables.contracts.errors import ResponseFormatError, TransportFailure
from glide_tables.contracts.schema import RowID


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _backend_message(body: str) -> str | None:
    """Pull the error message out of a JSON error body, if there is one."""
    try:
        parsed = json.loads(body)
    except JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    error = parsed.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    if isinstance(parsed.get("message"), str):
        return parsed["message"]
    return None


def check_response(response: httpx.Response) -> None:
    """Raise TransportFailure unless the response status is 2xx.

    The raw body text is kept on the error; when the body is a JSON error
    envelope its message is used for the error text.
    """
    if is_success(response.status_code):
        return
    body = response.text
    try:
        request: httpx.Request | None = response.request
    except RuntimeError:
        # Responses built by hand (tests, replays) carry no request
        request = None
    raise TransportFailure(
        response.status_code,
        method=request.method if request is not None else "",
        url=str(request.url) if request is not None else "",
        body=body,
        message=_backend_message(body),
    )


def extract_data(response: httpx.Response) -> Any:
    """Return the ``data`` member of a success payload.

    Raises:
        ResponseFormatError: If the body is not JSON or has no ``data`` member
    """
    try:
        payload = response.json()
    except JSONDecodeError as e:
        raise ResponseFormatError(f"Response body is not JSON: {e}", payload=response.text) from e
    if not isinstance(payload, dict) or "data" not in payload:
        raise ResponseFormatError("Response payload has no 'data' member", payload=payload)
    return payload["data"]


def extract_row_ids(response: httpx.Response) -> list[RowID]:
    """Return ``data.rowIDs`` from a mutation response."""
    data = extract_data(response)
    row_ids = data.get("rowIDs") if isinstance(data, dict) else None
    if not isinstance(row_ids, list):
        raise ResponseFormatError("Mutation response has no 'data.rowIDs' list", payload=data)
    return row_ids
