# src/glide_tables/contracts/schema.py
"""Column schema contracts.

A table's columns are declared by display name. Each display name maps to a
column specification which is one of two variants:

- Identity: the column is stored under its display name.
- Aliased: the column is stored under an explicit storage identifier.

Raw user input (a bare type string such as ``"string"`` or a descriptor such as
``{"type": "number", "name": "age_col"}``) is parsed into these variants once,
when a table is bound. Nothing downstream inspects raw specs again.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

# Pseudo-column carrying the backend row identifier. Always maps to itself.
ROW_ID_COLUMN = "$rowID"

# Mutation body key directing the backend to materialize a stash.
STASH_ID_KEY = "$stashID"

# Row values are scalars; None is lowered to "" on the way out.
Scalar = str | int | float | bool | None
Row = Mapping[str, Scalar]
RowID = str


@dataclass(frozen=True, slots=True)
class Identity:
    """Column stored under its display name."""

    kind: str | None = None

    def storage_name(self, display_name: str) -> str:
        return display_name


@dataclass(frozen=True, slots=True)
class Aliased:
    """Column stored under an explicit storage identifier."""

    name: str
    kind: str | None = None

    def storage_name(self, display_name: str) -> str:
        return self.name


ColumnSpec = Identity | Aliased
ColumnSchema = Mapping[str, ColumnSpec]


def parse_column_spec(display_name: str, raw: Any) -> ColumnSpec:
    """Parse one raw column declaration into a ColumnSpec.

    Args:
        display_name: Column display name (used for error messages only)
        raw: Bare type string, descriptor mapping, or an existing ColumnSpec

    Returns:
        Identity or Aliased

    Raises:
        TypeError: If the declaration is neither a string, a mapping nor a ColumnSpec
        ValueError: If a descriptor carries a non-string or empty ``name``
    """
    if isinstance(raw, Identity | Aliased):
        return raw
    if isinstance(raw, str):
        return Identity(kind=raw)
    if isinstance(raw, Mapping):
        kind = raw.get("type")
        if "name" not in raw:
            return Identity(kind=kind)
        name = raw["name"]
        if not isinstance(name, str) or not name:
            raise ValueError(f"Column '{display_name}' has invalid storage name {name!r}")
        return Aliased(name=name, kind=kind)
    raise TypeError(f"Column '{display_name}' has unsupported spec of type {type(raw).__name__}")


def parse_column_schema(columns: Mapping[str, Any] | None) -> ColumnSchema:
    """Parse a raw column mapping into a read-only ColumnSchema."""
    if not columns:
        return MappingProxyType({})
    return MappingProxyType({display: parse_column_spec(display, raw) for display, raw in columns.items()})


def to_api_columns(schema: ColumnSchema) -> list[dict[str, Any]]:
    """Render a ColumnSchema as the column list used when creating a table.

    Columns without a declared kind default to ``string``.
    """
    return [
        {
            "id": spec.storage_name(display),
            "displayName": display,
            "type": spec.kind or "string",
        }
        for display, spec in schema.items()
    ]
