"""
Document endpoint: one point lookup per request on the root path.

Status mapping: 200 found, 404 no such _id, 500 deadline exceeded or other
driver error, 503 store unreachable or pool closed.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from docwrapper.api.deps import PoolDep
from docwrapper.core.config import settings
from docwrapper.core.exceptions import (
    DocumentLookupError,
    DocumentNotFoundError,
    PoolClosedError,
    StoreUnavailableError,
)
from docwrapper.core.pool import find_document, parse_document_id, render_document

_log = logging.getLogger(__name__)

ERROR_FETCHING = "Error fetching data"
NOT_FOUND = "Document not found"

router = APIRouter(tags=["documents"])


def _log_lookup_error(exc: Exception) -> None:
    level = logging.WARNING if settings.LOG_LOOKUP_ERRORS else logging.DEBUG
    _log.log(level, "Error fetching document: %s", exc)


@router.api_route(
    "/",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
    response_class=PlainTextResponse,
)
async def fetch_document(
    pool: PoolDep,
    doc_id: Annotated[str | None, Query(alias="id")] = None,
) -> PlainTextResponse:
    """
    Fetch one document by _id (``?id=``, default DEFAULT_DOCUMENT_ID) and
    return it as text. The HTTP method is not checked.
    """
    document_id = parse_document_id(doc_id, settings.DEFAULT_DOCUMENT_ID)
    try:
        collection = pool.get_collection()
        doc = await find_document(collection, document_id, settings.LOOKUP_TIMEOUT)
    except PoolClosedError as e:
        _log_lookup_error(e)
        return PlainTextResponse(ERROR_FETCHING, status_code=503)
    except DocumentNotFoundError as e:
        _log_lookup_error(e)
        return PlainTextResponse(NOT_FOUND, status_code=404)
    except StoreUnavailableError as e:
        _log_lookup_error(e)
        return PlainTextResponse(ERROR_FETCHING, status_code=503)
    except DocumentLookupError as e:
        _log_lookup_error(e)
        return PlainTextResponse(ERROR_FETCHING, status_code=500)
    return PlainTextResponse(render_document(doc))
