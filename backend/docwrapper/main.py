import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from docwrapper.api.routes.documents import router as documents_router
from docwrapper.core.config import settings
from docwrapper.core.logging_config import setup_logging
from docwrapper.core.pool import PoolManager

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Own the pool for the app's lifetime.

    When served by plain ``uvicorn docwrapper.main:app`` the pool is opened
    here, so a ConnectivityError aborts startup before the socket is bound.
    The runner in ``docwrapper.__main__`` opens it earlier and this is a no-op.
    """
    pool: PoolManager = app.state.pool_manager
    if not pool.is_ready:
        await pool.initialize()
    try:
        yield
    finally:
        await pool.shutdown(settings.SHUTDOWN_TIMEOUT)


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions: log and return 500 with safe message."""
    _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    detail = "Internal server error"
    if settings.ENVIRONMENT == "local":
        detail = f"Internal server error: {exc}"
    return JSONResponse(status_code=500, content={"detail": detail})


def create_app(pool_manager: PoolManager | None = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
        sentry_sdk.init(dsn=str(settings.SENTRY_DSN))

    app = FastAPI(
        title=settings.PROJECT_NAME,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.pool_manager = pool_manager or PoolManager.from_settings(settings)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(documents_router)
    return app


app = create_app()
