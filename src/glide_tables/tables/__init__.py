# src/glide_tables/tables/__init__.py
"""Table handles and staged uploads."""

from glide_tables.tables.big_table import BigTable
from glide_tables.tables.stash import Stash

__all__ = [
    "BigTable",
    "Stash",
]
