"""
Run the service: open the MongoDB pool, then serve HTTP with uvicorn.

Exits with status 1, without ever binding the port, when the store is not
reachable at startup. uvicorn handles SIGINT/SIGTERM and re-raises the signal
once it has stopped; SIGTERM is mapped to KeyboardInterrupt here so both stop
paths close the pool and exit with status 0.

Usage:
    python -m docwrapper
"""

import asyncio
import logging
import signal
import sys

from uvicorn import Config, Server

from docwrapper.core.config import settings
from docwrapper.core.exceptions import ConnectivityError
from docwrapper.core.logging_config import setup_logging
from docwrapper.core.pool import PoolManager
from docwrapper.main import create_app

logger = logging.getLogger(__name__)


async def serve(pool: PoolManager | None = None) -> int:
    """Return the process exit code."""
    pool = pool or PoolManager.from_settings(settings)
    try:
        await pool.initialize()
    except ConnectivityError as e:
        logger.critical("%s", e)
        return 1

    app = create_app(pool)
    config = Config(
        app=app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = Server(config)
    logger.info("Service running on %s:%d %s", settings.HOST, settings.PORT, pool.stats())
    try:
        await server.serve()
    finally:
        await pool.shutdown(settings.SHUTDOWN_TIMEOUT)
    return 0


def _interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    signal.signal(signal.SIGTERM, _interrupt)
    try:
        code = asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Service stopped")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
