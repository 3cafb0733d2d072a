# src/glide_tables/glide.py
"""Entry point object: binds tables, lists tables, creates tables."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import Any
from uuid import uuid4

import structlog

from glide_tables.clients.base import Transport
from glide_tables.clients.http import GlideHTTPClient
from glide_tables.contracts.errors import ResponseFormatError
from glide_tables.contracts.schema import STASH_ID_KEY, Row, RowID, parse_column_schema, to_api_columns
from glide_tables.core.config import GlideSettings, load_settings
from glide_tables.core.naming import SchemaTranslator
from glide_tables.core.validation import check_response, extract_data
from glide_tables.tables.big_table import BigTable
from glide_tables.tables.stash import Stash

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreatedTable:
    """Result of creating a Big Table.

    Attributes:
        table: Handle bound to the new table with the schema it was created with
        row_ids: IDs of the rows the table was seeded with
    """

    table: BigTable
    row_ids: list[RowID]


class Glide:
    """Client for the Big Tables API.

    Example:
        async with Glide(load_settings()) as glide:
            table = glide.big_table("native-table-abc", columns={"Name": "string"})
            await table.add([{"Name": "Ann"}])
    """

    def __init__(
        self,
        settings: GlideSettings | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection and batching settings. When None, a
                GlideHTTPClient transport's own settings are used; otherwise
                they are loaded with load_settings(), which needs GLIDE_TOKEN
                even if a custom transport never sends it.
            transport: Transport to use instead of a GlideHTTPClient built
                from settings (the caller keeps ownership)
        """
        if settings is None:
            settings = transport.settings if isinstance(transport, GlideHTTPClient) else load_settings()
        self._settings = settings
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else GlideHTTPClient(self._settings)

    @property
    def settings(self) -> GlideSettings:
        return self._settings

    def _transport_for(self, token: str | None) -> Transport:
        if token is None:
            return self._transport
        if not isinstance(self._transport, GlideHTTPClient):
            raise TypeError("Per-table tokens require a GlideHTTPClient transport")
        return self._transport.with_(token=token)

    def big_table(
        self,
        table_id: str,
        *,
        name: str = "",
        columns: Mapping[str, Any] | None = None,
        token: str | None = None,
        max_mutations: int | None = None,
        max_concurrency: int | None = None,
    ) -> BigTable:
        """Bind a handle on an existing Big Table.

        Args:
            table_id: Backend table identifier
            name: Display name of the table
            columns: Raw column declarations keyed by display name
            token: Token overriding the client's for this table
            max_mutations: Rows per request (defaults to settings)
            max_concurrency: Chunks in flight at once (defaults to settings)
        """
        return BigTable(
            table_id,
            self._transport_for(token),
            name=name,
            columns=columns,
            max_mutations=max_mutations if max_mutations is not None else self._settings.max_mutations,
            max_concurrency=max_concurrency if max_concurrency is not None else self._settings.max_concurrency,
        )

    def create_stash(self, columns: Mapping[str, Any] | None = None) -> Stash:
        """Create a stash not bound to any table.

        Used to seed a new table through add_big_table_stash(). Appended rows
        are translated with ``columns``, which should be the schema the table
        will be created with.
        """
        return Stash(
            str(uuid4()),
            self._transport,
            translator=SchemaTranslator(parse_column_schema(columns)),
            batch_size=self._settings.max_mutations,
        )

    async def get_big_tables(self) -> list[BigTable]:
        """List the Big Tables visible to the token.

        Tables are bound with empty schemas: rows are sent with their keys
        unchanged.
        """
        response = await self._transport.get("/tables")
        check_response(response)
        data = extract_data(response)
        if not isinstance(data, list):
            raise ResponseFormatError("Table listing 'data' is not a list", payload=data)
        tables: list[BigTable] = []
        for entry in data:
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
                raise ResponseFormatError("Table listing entry has no string 'id'", payload=entry)
            tables.append(self.big_table(entry["id"], name=str(entry.get("name", ""))))
        return tables

    async def add_big_table(
        self,
        name: str,
        schema: Mapping[str, Any],
        rows: Sequence[Row],
    ) -> CreatedTable:
        """Create a Big Table seeded with rows.

        The rows are sent in the creation request itself, unchunked. Seed
        larger data sets through add_big_table_stash().
        """
        parsed = parse_column_schema(schema)
        translated = SchemaTranslator(parsed).translate(rows)
        return await self._create_table(name, schema, translated)

    async def add_big_table_stash(
        self,
        name: str,
        schema: Mapping[str, Any],
        stash: Stash,
    ) -> CreatedTable:
        """Create a Big Table seeded with every row held in a stash."""
        return await self._create_table(name, schema, {STASH_ID_KEY: stash.stash_id})

    async def _create_table(self, name: str, schema: Mapping[str, Any], rows: Any) -> CreatedTable:
        body = {
            "name": name,
            "schema": {"columns": to_api_columns(parse_column_schema(schema))},
            "rows": rows,
        }
        response = await self._transport.post("/tables", body)
        check_response(response)
        data = extract_data(response)
        # tableID and tableId are both accepted
        table_id = data.get("tableID", data.get("tableId")) if isinstance(data, dict) else None
        if not isinstance(table_id, str):
            raise ResponseFormatError("Table creation response has no table ID", payload=data)
        row_ids = data.get("rowIDs", [])
        if not isinstance(row_ids, list):
            raise ResponseFormatError("Table creation response 'rowIDs' is not a list", payload=data)
        logger.info("table_created", table_id=table_id, name=name, rows=len(row_ids))
        return CreatedTable(table=self.big_table(table_id, name=name, columns=schema), row_ids=row_ids)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, GlideHTTPClient):
            await self._transport.aclose()

    async def __aenter__(self) -> Glide:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
