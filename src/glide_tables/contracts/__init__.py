# src/glide_tables/contracts/__init__.py
"""Shared contracts: column schema variants, row types and errors."""

from glide_tables.contracts.errors import (
    GlideTablesError,
    PartialBatchFailure,
    ResponseFormatError,
    StashNotBoundError,
    TransportFailure,
)
from glide_tables.contracts.schema import (
    ROW_ID_COLUMN,
    STASH_ID_KEY,
    Aliased,
    ColumnSchema,
    ColumnSpec,
    Identity,
    Row,
    RowID,
    Scalar,
    parse_column_schema,
    parse_column_spec,
    to_api_columns,
)

__all__ = [
    "ROW_ID_COLUMN",
    "STASH_ID_KEY",
    "Aliased",
    "ColumnSchema",
    "ColumnSpec",
    "GlideTablesError",
    "Identity",
    "PartialBatchFailure",
    "ResponseFormatError",
    "Row",
    "RowID",
    "Scalar",
    "StashNotBoundError",
    "TransportFailure",
    "parse_column_schema",
    "parse_column_spec",
    "to_api_columns",
]
