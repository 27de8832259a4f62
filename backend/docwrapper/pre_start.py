"""
Container pre-start check: exit 0 if MongoDB answers ping, 1 otherwise.

Usage:
    python -m docwrapper.pre_start
"""

import asyncio
import logging
import sys
from typing import Any

from docwrapper.core.config import settings
from docwrapper.core.logging_config import setup_logging
from docwrapper.core.pool import create_client, health_check

logger = logging.getLogger(__name__)


async def init(client: Any) -> bool:
    try:
        return await health_check(client, settings.MONGODB_CONNECT_TIMEOUT)
    finally:
        await client.close()


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    logger.info("Checking MongoDB at %s", settings.MONGODB_URI)
    client = create_client(
        settings.MONGODB_URI,
        max_pool_size=1,
        connect_timeout=settings.MONGODB_CONNECT_TIMEOUT,
    )
    if not asyncio.run(init(client)):
        logger.error("MongoDB is not reachable")
        sys.exit(1)
    logger.info("MongoDB is reachable")


if __name__ == "__main__":
    main()
