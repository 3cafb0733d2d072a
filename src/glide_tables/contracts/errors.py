# src/glide_tables/contracts/errors.py
"""Error taxonomy for table mutations.

Every failure raised by this package derives from GlideTablesError. None of
these are retried internally; they propagate to the immediate caller.
"""

from __future__ import annotations

from typing import Any


class GlideTablesError(Exception):
    """Base class for all glide_tables errors."""

    pass


class TransportFailure(GlideTablesError):
    """Raised when the backend answers with a non-success status.

    Attributes:
        status_code: HTTP status returned by the backend
        method: HTTP method of the failed request
        url: Full URL of the failed request
        body: Raw response body text (may be empty)
        message: Backend error message when the body carries one, else the body
    """

    def __init__(
        self,
        status_code: int,
        *,
        method: str = "",
        url: str = "",
        body: str = "",
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        self.message = message if message is not None else body
        target = f" {method} {url}" if method else ""
        detail = f": {self.message}" if self.message else ""
        super().__init__(f"HTTP {status_code}{target}{detail}")


class PartialBatchFailure(GlideTablesError):
    """Raised when a chunk fails after earlier chunks were already committed.

    Rows from completed chunks are not rolled back and not reported. The
    original error is available as ``__cause__`` and ``cause``.

    Attributes:
        chunk_index: Zero-based index of the failing chunk
        chunk_count: Total number of chunks in the dispatch
        chunks_completed: Chunks that succeeded before the failure
        cause: The exception raised by the failing chunk
        status_code: Status of the cause when it is a TransportFailure, else None
        body: Body of the cause when it is a TransportFailure, else ""
    """

    def __init__(
        self,
        *,
        chunk_index: int,
        chunk_count: int,
        chunks_completed: int,
        cause: BaseException,
    ) -> None:
        self.chunk_index = chunk_index
        self.chunk_count = chunk_count
        self.chunks_completed = chunks_completed
        self.cause = cause
        if isinstance(cause, TransportFailure):
            self.status_code: int | None = cause.status_code
            self.body = cause.body
        else:
            self.status_code = None
            self.body = ""
        super().__init__(
            f"Chunk {chunk_index + 1}/{chunk_count} failed after {chunks_completed} chunk(s) were committed: {cause}"
        )


class ResponseFormatError(GlideTablesError):
    """Raised when a success response does not carry the expected payload."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class StashNotBoundError(GlideTablesError):
    """Raised when committing a stash that is not bound to a table."""

    pass
