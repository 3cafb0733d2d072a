# src/glide_tables/clients/__init__.py
"""Transports for the Big Tables API.

Tables and stashes depend only on the Transport protocol; GlideHTTPClient is
the production implementation.

Example:
    from glide_tables.clients import GlideHTTPClient
    from glide_tables.core import load_settings

    async with GlideHTTPClient(load_settings()) as client:
        response = await client.get("/tables")
"""

from glide_tables.clients.base import Transport
from glide_tables.clients.http import GlideHTTPClient

__all__ = [
    "GlideHTTPClient",
    "Transport",
]
