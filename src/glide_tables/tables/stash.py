# src/glide_tables/tables/stash.py
"""Staged uploads (stashes).

A stash is an append-only, sequence-numbered side channel for assembling a
large row set before materializing it with a single mutation. Rows are
appended in partitions addressed by ``(stash_id, sequence)``; the backend
reassembles partitions by sequence number, not by arrival order.

Sequence numbers are assigned synchronously when append() is called, before
the request is issued, so concurrent appends on one stash still receive
0, 1, 2, ... in call order. The counter is owned by the instance and is not
safe to share across threads.

A stash is single-use. Appending after a commit is a caller error and is not
detected.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Sequence
from typing import TYPE_CHECKING

import structlog

from glide_tables.clients.base import Transport
from glide_tables.contracts.errors import StashNotBoundError, TransportFailure
from glide_tables.contracts.schema import Row, RowID
from glide_tables.core.config import MAX_MUTATIONS
from glide_tables.core.naming import SchemaTranslator
from glide_tables.core.validation import check_response

if TYPE_CHECKING:
    from glide_tables.tables.big_table import BigTable

logger = structlog.get_logger(__name__)


async def _iterate(rows: Iterable[Row] | AsyncIterable[Row]) -> AsyncIterator[Row]:
    if isinstance(rows, AsyncIterable):
        async for row in rows:
            yield row
    else:
        for row in rows:
            yield row


class Stash:
    """Sequence-numbered staged upload.

    Example:
        stash = table.create_stash()
        await stash.append(first_rows)   # sequence 0
        await stash.append(more_rows)    # sequence 1
        row_ids = await stash.commit_as_insert()
    """

    def __init__(
        self,
        stash_id: str,
        transport: Transport,
        *,
        translator: SchemaTranslator,
        table: BigTable | None = None,
        batch_size: int = MAX_MUTATIONS,
    ) -> None:
        """Initialize a stash.

        Args:
            stash_id: Globally unique stash identifier (never reused)
            transport: Transport used for appends
            translator: Translator applied to appended rows
            table: Table the stash commits into; None for stashes that seed
                a new table (see Glide.add_big_table_stash)
            batch_size: Default rows per append for append_all()
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self._stash_id = stash_id
        self._transport = transport
        self._translator = translator
        self._table = table
        self._batch_size = batch_size
        self._next_sequence = 0

    @property
    def stash_id(self) -> str:
        return self._stash_id

    @property
    def table(self) -> BigTable | None:
        return self._table

    @property
    def next_sequence(self) -> int:
        """Sequence number the next append() will use."""
        return self._next_sequence

    def _take_sequence(self) -> int:
        sequence = self._next_sequence
        self._next_sequence += 1
        return sequence

    async def append(self, rows: Sequence[Row]) -> int:
        """Append one partition of rows to the stash.

        Args:
            rows: Rows keyed by display name

        Returns:
            The sequence number used for this partition

        Raises:
            TransportFailure: If the backend rejects the partition; the error
                carries the raw response body
        """
        # Taken before the first await; ordering holds under concurrency
        sequence = self._take_sequence()
        path = f"/stashes/{self._stash_id}/{sequence}"
        with structlog.contextvars.bound_contextvars(stash_id=self._stash_id):
            response = await self._transport.post(path, self._translator.translate(rows))
        try:
            check_response(response)
        except TransportFailure as e:
            logger.error(
                "stash_append_failed",
                stash_id=self._stash_id,
                sequence=sequence,
                status_code=e.status_code,
                body=e.body,
            )
            raise
        return sequence

    async def append_all(
        self,
        rows: Iterable[Row] | AsyncIterable[Row],
        *,
        batch_size: int | None = None,
    ) -> int:
        """Stream rows into the stash, appending every ``batch_size`` rows.

        Accepts any iterable or async iterable, so rows can be produced
        incrementally without holding the whole data set in memory.

        Returns:
            Number of rows appended
        """
        size = batch_size if batch_size is not None else self._batch_size
        if size < 1:
            raise ValueError(f"batch_size must be >= 1, got {size}")

        total = 0
        buffer: list[Row] = []
        async for row in _iterate(rows):
            buffer.append(row)
            if len(buffer) >= size:
                await self.append(buffer)
                total += len(buffer)
                buffer = []
        if buffer:
            await self.append(buffer)
            total += len(buffer)
        return total

    def _bound_table(self) -> BigTable:
        if self._table is None:
            raise StashNotBoundError(
                f"Stash {self._stash_id} is not bound to a table; use Glide.add_big_table_stash() to commit it"
            )
        return self._table

    async def commit_as_insert(self) -> list[RowID]:
        """Materialize every appended partition as new rows of the bound table."""
        return await self._bound_table().add_stash(self)

    async def commit_as_overwrite(self) -> list[RowID]:
        """Replace the bound table's rows with every appended partition."""
        return await self._bound_table().overwrite_stash(self)
