"""
Process-wide MongoDB connection pool.

One PoolManager owns one client for the life of the process: initialize()
opens it and pings the store (fail fast), shutdown() closes it within a
bounded time. The manager never exits the process itself; callers decide.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pymongo import AsyncMongoClient

from docwrapper.core.config import Settings
from docwrapper.core.exceptions import ConnectivityError, PoolClosedError

from .connect import create_client
from .health import ping

_log = logging.getLogger(__name__)


class PoolManager:
    """Bounded pool to one MongoDB deployment, one collection."""

    def __init__(
        self,
        uri: str,
        *,
        database: str,
        collection: str,
        max_pool_size: int,
        connect_timeout: float,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ) -> None:
        self.uri = uri
        self.database = database
        self.collection = collection
        self.max_pool_size = max_pool_size
        self.connect_timeout = connect_timeout
        self._client_factory = client_factory
        self._client: Any = None
        self._closed = False

    @classmethod
    def from_settings(
        cls, settings: Settings, client_factory: Callable[..., Any] = AsyncMongoClient
    ) -> "PoolManager":
        return cls(
            settings.MONGODB_URI,
            database=settings.MONGODB_DATABASE,
            collection=settings.MONGODB_COLLECTION,
            max_pool_size=settings.MONGODB_MAX_POOL_SIZE,
            connect_timeout=settings.MONGODB_CONNECT_TIMEOUT,
            client_factory=client_factory,
        )

    @property
    def is_ready(self) -> bool:
        return self._client is not None and not self._closed

    async def initialize(self) -> None:
        """Open the pool and ping the store. Raises ConnectivityError on failure."""
        if self._client is not None or self._closed:
            raise RuntimeError("PoolManager.initialize() may only be called once")

        try:
            client = create_client(
                self.uri,
                max_pool_size=self.max_pool_size,
                connect_timeout=self.connect_timeout,
                client_factory=self._client_factory,
            )
        except Exception as e:
            # bad URI / options
            raise ConnectivityError(f"Error connecting to MongoDB: {e}") from e

        try:
            await ping(client, self.connect_timeout)
        except Exception as e:
            await self._close_quiet(client)
            if isinstance(e, asyncio.TimeoutError):
                msg = f"Ping timed out after {self.connect_timeout}s"
            else:
                msg = f"Ping failed: {e}"
            raise ConnectivityError(msg) from e

        self._client = client
        _log.info(
            "Connected to MongoDB (database=%s, collection=%s, max_pool_size=%d)",
            self.database,
            self.collection,
            self.max_pool_size,
        )

    def get_collection(self) -> Any:
        """Collection handle bound to the shared pool."""
        if self._closed:
            raise PoolClosedError("connection pool has been shut down")
        if self._client is None:
            raise PoolClosedError("connection pool is not initialized")
        return self._client[self.database][self.collection]

    async def shutdown(self, timeout: float) -> None:
        """Close all pooled connections; best effort, never raises."""
        if self._closed:
            return
        self._closed = True
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await asyncio.wait_for(client.close(), timeout=timeout)
        except asyncio.TimeoutError:
            _log.warning("MongoDB pool did not close within %ss", timeout)
            return
        except Exception:
            _log.warning("Error while closing MongoDB pool", exc_info=True)
            return
        _log.info("MongoDB pool closed")

    def stats(self) -> dict[str, Any]:
        """Pool configuration and state, for logs."""
        return {
            "database": self.database,
            "collection": self.collection,
            "max_pool_size": self.max_pool_size,
            "ready": self.is_ready,
            "closed": self._closed,
        }

    @staticmethod
    async def _close_quiet(client: Any) -> None:
        try:
            await client.close()
        except Exception:
            _log.debug("Ignoring error while closing half-open client", exc_info=True)
