"""
Store liveness check (ping against the admin database).
"""

import asyncio
import logging
from typing import Any

_log = logging.getLogger(__name__)


async def ping(client: Any, timeout: float) -> None:
    """Run the ping command; raises on failure or after *timeout* seconds."""
    await asyncio.wait_for(client.admin.command("ping"), timeout=timeout)


async def health_check(client: Any, timeout: float) -> bool:
    """
    Return True if the store answers ping within *timeout*. Never raises.
    """
    try:
        await ping(client, timeout)
        return True
    except Exception as e:
        _log.debug("MongoDB ping failed: %s", e)
        return False
