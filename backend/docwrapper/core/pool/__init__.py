"""
MongoDB connection pool for the document endpoint.

The driver (pymongo AsyncMongoClient) does the pooling; PoolManager owns the
single client and its lifecycle.
"""

from .connect import create_client, find_document, parse_document_id, render_document
from .health import health_check, ping
from .manager import PoolManager

__all__ = [
    "create_client",
    "find_document",
    "parse_document_id",
    "render_document",
    "health_check",
    "ping",
    "PoolManager",
]
