# src/glide_tables/tables/big_table.py
"""Mutations against a single Big Table."""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, overload
from uuid import uuid4

import httpx
import structlog

from glide_tables.clients.base import Transport
from glide_tables.contracts.errors import ResponseFormatError
from glide_tables.contracts.schema import STASH_ID_KEY, ColumnSchema, Row, RowID, parse_column_schema
from glide_tables.core.chunking import dispatch_chunks
from glide_tables.core.config import MAX_MUTATIONS
from glide_tables.core.naming import SchemaTranslator
from glide_tables.core.validation import check_response, extract_row_ids
from glide_tables.tables.stash import Stash

logger = structlog.get_logger(__name__)


def _chunk_row_ids(response: httpx.Response, sent: int) -> list[RowID]:
    """Row IDs of one chunk; one per sent row, in order."""
    check_response(response)
    row_ids = extract_row_ids(response)
    if len(row_ids) != sent:
        raise ResponseFormatError(
            f"Expected {sent} row ID(s) for the chunk, got {len(row_ids)}",
            payload=row_ids,
        )
    return row_ids


class BigTable:
    """Handle on one backend table.

    Owns the table's SchemaTranslator, built once from the column schema
    given at construction. Rows are addressed by display name and translated
    to storage names on the way out.

    add() and overwrite() accept either one row or a sequence of rows and
    return the matching shape: one RowID for one row, a list of RowIDs (in
    input order) for a sequence, even a sequence of length one.

    Rows are sent in chunks of at most ``max_mutations``. Chunks are not
    atomic as a whole: if one fails, earlier chunks stay committed (see
    glide_tables.core.chunking). Adding the same rows twice adds them twice.
    A chunk answered with a different number of row IDs than rows it sent
    fails with ResponseFormatError, so returned IDs always line up with rows.

    Example:
        table = glide.big_table("native-table-abc", columns={"Name": "string"})
        row_id = await table.add({"Name": "Ann"})
        row_ids = await table.add([{"Name": "Bo"}, {"Name": "Cy"}])
    """

    def __init__(
        self,
        table_id: str,
        transport: Transport,
        *,
        name: str = "",
        columns: Mapping[str, Any] | None = None,
        max_mutations: int = MAX_MUTATIONS,
        max_concurrency: int = 1,
    ) -> None:
        """Bind a table.

        Args:
            table_id: Backend table identifier
            transport: Transport for all requests on this table
            name: Display name of the table
            columns: Raw column declarations keyed by display name
            max_mutations: Maximum rows per add/overwrite request
            max_concurrency: Chunks allowed in flight at once
        """
        if max_mutations < 1:
            raise ValueError(f"max_mutations must be >= 1, got {max_mutations}")
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self._table_id = table_id
        self._name = name
        self._transport = transport
        self._schema = parse_column_schema(columns)
        self._translator = SchemaTranslator(self._schema)
        self._max_mutations = max_mutations
        self._max_concurrency = max_concurrency

    @property
    def id(self) -> str:
        return self._table_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> ColumnSchema:
        return self._schema

    @property
    def translator(self) -> SchemaTranslator:
        return self._translator

    @property
    def max_mutations(self) -> int:
        return self._max_mutations

    def __repr__(self) -> str:
        return f"BigTable(id={self._table_id!r}, name={self._name!r})"

    # --- Row mutations ---

    @overload
    async def add(self, rows: Row) -> RowID: ...

    @overload
    async def add(self, rows: Sequence[Row]) -> list[RowID]: ...

    async def add(self, rows: Row | Sequence[Row]) -> RowID | list[RowID]:
        """Add one row or a sequence of rows to the table."""
        return await self._mutate(rows, self._add_chunk, "rows_added")

    @overload
    async def overwrite(self, rows: Row) -> RowID: ...

    @overload
    async def overwrite(self, rows: Sequence[Row]) -> list[RowID]: ...

    async def overwrite(self, rows: Row | Sequence[Row]) -> RowID | list[RowID]:
        """Replace the table's rows with one row or a sequence of rows.

        Each request replaces the whole table, so a row set larger than
        ``max_mutations`` leaves only the last chunk in place. Use a stash
        and commit_as_overwrite() to replace a table with more rows.
        """
        return await self._mutate(rows, self._overwrite_chunk, "rows_overwritten", replaces_table=True)

    async def _mutate(
        self,
        rows: Row | Sequence[Row],
        send: Callable[[Sequence[dict[str, Any]]], Awaitable[list[RowID]]],
        event: str,
        *,
        replaces_table: bool = False,
    ) -> RowID | list[RowID]:
        single = isinstance(rows, Mapping)
        batch: Sequence[Row] = [rows] if isinstance(rows, Mapping) else rows
        translated = self._translator.translate(batch)
        chunk_count = math.ceil(len(translated) / self._max_mutations)

        if replaces_table and chunk_count > 1:
            logger.warning(
                "overwrite_spans_multiple_chunks",
                table_id=self._table_id,
                rows=len(translated),
                chunks=chunk_count,
            )

        with structlog.contextvars.bound_contextvars(table_id=self._table_id):
            row_ids: list[RowID] = await dispatch_chunks(
                translated,
                self._max_mutations,
                send,
                max_concurrency=self._max_concurrency,
            )
        logger.info(event, table_id=self._table_id, rows=len(row_ids), chunks=chunk_count)

        # Every chunk returned exactly one ID per row
        return row_ids[0] if single else row_ids

    async def _add_chunk(self, chunk: Sequence[dict[str, Any]]) -> list[RowID]:
        response = await self._transport.post(f"/tables/{self._table_id}/rows", list(chunk))
        return _chunk_row_ids(response, len(chunk))

    async def _overwrite_chunk(self, chunk: Sequence[dict[str, Any]]) -> list[RowID]:
        response = await self._transport.put(f"/tables/{self._table_id}/", list(chunk))
        return _chunk_row_ids(response, len(chunk))

    # --- Stashes ---

    def create_stash(self) -> Stash:
        """Create a new stash bound to this table.

        Rows appended to it are translated with this table's schema.
        """
        return Stash(
            str(uuid4()),
            self._transport,
            translator=self._translator,
            table=self,
            batch_size=self._max_mutations,
        )

    async def add_stash(self, stash: Stash) -> list[RowID]:
        """Add every row held in the stash to this table."""
        return await self._commit_stash(stash, f"/tables/{self._table_id}/rows", "insert")

    async def overwrite_stash(self, stash: Stash) -> list[RowID]:
        """Replace this table's rows with every row held in the stash."""
        return await self._commit_stash(stash, f"/tables/{self._table_id}", "overwrite")

    async def _commit_stash(self, stash: Stash, path: str, mode: str) -> list[RowID]:
        with structlog.contextvars.bound_contextvars(table_id=self._table_id, stash_id=stash.stash_id):
            response = await self._transport.post(path, {STASH_ID_KEY: stash.stash_id})
        check_response(response)
        row_ids = extract_row_ids(response)
        logger.info(
            "stash_committed",
            table_id=self._table_id,
            stash_id=stash.stash_id,
            mode=mode,
            partitions=stash.next_sequence,
            rows=len(row_ids),
        )
        return row_ids
