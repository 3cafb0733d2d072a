# tests/unit/contracts/test_errors.py
"""Tests for the error taxonomy."""

import httpx

from glide_tables.contracts.errors import (
    GlideTablesError,
    PartialBatchFailure,
    ResponseFormatError,
    StashNotBoundError,
    TransportFailure,
)


class TestTransportFailure:
    def test_message_includes_status_target_and_backend_text(self) -> None:
        error = TransportFailure(500, method="POST", url="https://api.test/tables/t/rows", body="boom")

        assert str(error) == "HTTP 500 POST https://api.test/tables/t/rows: boom"
        assert error.status_code == 500
        assert error.body == "boom"

    def test_explicit_message_preferred_over_body(self) -> None:
        error = TransportFailure(400, body='{"error": {"message": "bad row"}}', message="bad row")

        assert str(error) == "HTTP 400: bad row"
        assert error.body == '{"error": {"message": "bad row"}}'

    def test_empty_body(self) -> None:
        assert str(TransportFailure(502)) == "HTTP 502"


class TestPartialBatchFailure:
    def test_copies_transport_details_from_cause(self) -> None:
        cause = TransportFailure(500, body="server exploded")

        error = PartialBatchFailure(chunk_index=1, chunk_count=3, chunks_completed=1, cause=cause)

        assert error.status_code == 500
        assert error.body == "server exploded"
        assert error.cause is cause
        assert "Chunk 2/3" in str(error)
        assert "1 chunk(s) were committed" in str(error)

    def test_non_transport_cause_has_no_status(self) -> None:
        cause = httpx.ReadTimeout("timed out")

        error = PartialBatchFailure(chunk_index=2, chunk_count=4, chunks_completed=2, cause=cause)

        assert error.status_code is None
        assert error.body == ""
        assert "timed out" in str(error)


def test_all_errors_share_base() -> None:
    for cls in (TransportFailure, PartialBatchFailure, ResponseFormatError, StashNotBoundError):
        assert issubclass(cls, GlideTablesError)
