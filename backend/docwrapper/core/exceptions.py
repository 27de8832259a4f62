"""
Errors raised by the document store layer.

Startup failures (ConnectivityError) are terminal for the process; lookup
failures (DocumentLookupError and subclasses) are contained by the request
handler and mapped to an HTTP status.
"""


class StoreError(Exception):
    """Base class for document store errors."""


class ConnectivityError(StoreError):
    """Store unreachable while opening the pool (ping failed or timed out)."""


class PoolClosedError(StoreError):
    """Pool not initialized yet, or already shut down."""


class DocumentLookupError(StoreError):
    """A point lookup failed."""

    def __init__(self, document_id: object, message: str | None = None) -> None:
        self.document_id = document_id
        super().__init__(message or f"lookup failed for _id={document_id!r}")


class DocumentNotFoundError(DocumentLookupError):
    def __init__(self, document_id: object) -> None:
        super().__init__(document_id, f"no document with _id={document_id!r}")


class LookupTimeoutError(DocumentLookupError):
    def __init__(self, document_id: object, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            document_id, f"lookup for _id={document_id!r} exceeded {timeout}s"
        )


class StoreUnavailableError(DocumentLookupError):
    """Connection to the store lost during a lookup."""
