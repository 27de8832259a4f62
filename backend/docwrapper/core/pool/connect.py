"""
MongoDB client and point-lookup helpers.

The client is pymongo's asyncio client; it owns the bounded connection pool.
"""

import asyncio
import re
from collections.abc import Callable
from typing import Any

from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import (
    ConnectionFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)

from docwrapper.core.exceptions import (
    DocumentLookupError,
    DocumentNotFoundError,
    LookupTimeoutError,
    StoreUnavailableError,
)

_INT_RE = re.compile(r"-?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def create_client(
    uri: str,
    *,
    max_pool_size: int,
    connect_timeout: float,
    client_factory: Callable[..., Any] = AsyncMongoClient,
) -> Any:
    """
    Build the client without doing any I/O (pymongo connects lazily).

    connect_timeout (seconds) bounds both socket connect and server selection,
    so a dead store surfaces as an error instead of a hang.
    """
    timeout_ms = int(connect_timeout * 1000)
    return client_factory(
        uri,
        maxPoolSize=max_pool_size,
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )


def parse_document_id(raw: str | int | None, default: str | int) -> Any:
    """
    Turn a key from the request (or the configured default) into an _id value.

    - 24 hex chars -> ObjectId
    - ASCII decimal integer within int64 -> int
    - anything else -> unchanged string
    """
    value = default if raw is None or raw == "" else raw
    if isinstance(value, int):
        return value
    s = str(value).strip()
    if len(s) == 24 and ObjectId.is_valid(s):
        return ObjectId(s)
    if _INT_RE.fullmatch(s):
        n = int(s)
        if _INT64_MIN <= n <= _INT64_MAX:
            return n
    return s


async def find_document(collection: Any, document_id: Any, timeout: float) -> dict[str, Any]:
    """
    Single find_one by _id, cancelled after *timeout* seconds.

    Raises a DocumentLookupError subclass on every failure; never returns None.
    """
    try:
        doc = await asyncio.wait_for(
            collection.find_one({"_id": document_id}), timeout=timeout
        )
    except asyncio.TimeoutError as e:
        raise LookupTimeoutError(document_id, timeout) from e
    except ServerSelectionTimeoutError as e:
        raise StoreUnavailableError(document_id, str(e)) from e
    except PyMongoError as e:
        if e.timeout:
            raise LookupTimeoutError(document_id, timeout) from e
        if isinstance(e, ConnectionFailure):
            raise StoreUnavailableError(document_id, str(e)) from e
        raise DocumentLookupError(document_id, str(e)) from e

    if doc is None:
        raise DocumentNotFoundError(document_id)
    return doc


def render_document(doc: dict[str, Any]) -> str:
    """Plain-text body for a fetched document."""
    return f"Fetched document: {doc}"
