"""
glide_tables: batched row mutations for Glide Big Tables.

Rows addressed by display name are translated to storage names, split into
request-sized chunks and dispatched in order. Very large or streamed data
sets go through stashes: sequence-numbered staged uploads committed with a
single mutation.
"""

from glide_tables.contracts.errors import (
    GlideTablesError,
    PartialBatchFailure,
    ResponseFormatError,
    StashNotBoundError,
    TransportFailure,
)
from glide_tables.core.config import MAX_MUTATIONS, GlideSettings, load_settings
from glide_tables.glide import CreatedTable, Glide
from glide_tables.tables import BigTable, Stash

__version__ = "0.1.0"

__all__ = [
    "MAX_MUTATIONS",
    "BigTable",
    "CreatedTable",
    "Glide",
    "GlideSettings",
    "GlideTablesError",
    "PartialBatchFailure",
    "ResponseFormatError",
    "Stash",
    "StashNotBoundError",
    "TransportFailure",
    "__version__",
    "load_settings",
]
