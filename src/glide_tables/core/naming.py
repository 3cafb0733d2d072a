# src/glide_tables/core/naming.py
"""Display-name to storage-name translation for outgoing rows.

Callers address columns by display name; the backend stores them under
storage identifiers. A NameMap is built once per table from its ColumnSchema
and is read-only afterwards, so one translator may be shared by any number
of concurrent mutations on the same table.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from glide_tables.contracts.schema import ROW_ID_COLUMN, ColumnSchema, Row

NameMap = Mapping[str, str]


def build_name_map(schema: ColumnSchema) -> NameMap:
    """Build the display-name to storage-name mapping for a schema.

    The row identifier pseudo-column is always present and maps to itself.
    A display name equal to another column's storage name is not detected.
    """
    mapping = {display: spec.storage_name(display) for display, spec in schema.items()}
    mapping[ROW_ID_COLUMN] = ROW_ID_COLUMN
    return MappingProxyType(mapping)


def translate_row(row: Row, name_map: NameMap) -> dict[str, Any]:
    """Return a new row keyed by storage names.

    Unknown keys pass through unchanged (server directives included).
    None is sent as an empty string; the API has no null.
    """
    return {name_map.get(key, key): "" if value is None else value for key, value in row.items()}


def translate_rows(rows: Iterable[Row], name_map: NameMap) -> list[dict[str, Any]]:
    """Translate every row, leaving the inputs untouched."""
    return [translate_row(row, name_map) for row in rows]


class SchemaTranslator:
    """Owns the NameMap of one table and rewrites outgoing rows.

    Example:
        translator = SchemaTranslator(parse_column_schema({"Age": {"type": "number", "name": "age_col"}}))
        translator.translate([{"Age": 30}])  # [{"age_col": 30}]
    """

    def __init__(self, schema: ColumnSchema) -> None:
        self._name_map = build_name_map(schema)

    @property
    def name_map(self) -> NameMap:
        return self._name_map

    def storage_name(self, display_name: str) -> str:
        return self._name_map.get(display_name, display_name)

    def translate(self, rows: Iterable[Row]) -> list[dict[str, Any]]:
        return translate_rows(rows, self._name_map)
