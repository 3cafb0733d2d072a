# src/glide_tables/core/__init__.py
"""Core mutation pipeline: naming, chunking, validation, config, logging."""

from glide_tables.core.chunking import chunked, dispatch_chunks
from glide_tables.core.config import DEFAULT_ENDPOINT, MAX_MUTATIONS, GlideSettings, load_settings
from glide_tables.core.naming import NameMap, SchemaTranslator, build_name_map, translate_rows
from glide_tables.core.validation import check_response, extract_data, extract_row_ids

__all__ = [
    "DEFAULT_ENDPOINT",
    "MAX_MUTATIONS",
    "GlideSettings",
    "NameMap",
    "SchemaTranslator",
    "build_name_map",
    "check_response",
    "chunked",
    "dispatch_chunks",
    "extract_data",
    "extract_row_ids",
    "load_settings",
    "translate_rows",
]
