"""Translate failed results into HTTP error responses."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.responses import JSONResponse

from twiglet_store.errors import DocumentError, ErrorKind, Result

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class DocumentFailure(Exception):  # noqa: N818
    """Raised by route handlers to end a request with a classified failure."""

    def __init__(self, error: DocumentError) -> None:
        super().__init__(error.message)
        self.error = error


def raise_for_error(result: Result, *, action: str) -> None:
    """Log and raise ``DocumentFailure`` if ``result`` failed."""
    error = result.error
    if error is None:
        return
    if error.kind is ErrorKind.STORE_FAILURE:
        logger.error("%s failed: %s", action, error.message)
    else:
        logger.warning(
            "%s rejected: kind=%s message=%s revision=%s",
            action,
            error.kind,
            error.message,
            error.revision,
        )
    raise DocumentFailure(error)


async def _document_failure_handler(_request: Request, exc: Exception) -> JSONResponse:
    error = exc.error if isinstance(exc, DocumentFailure) else None
    if error is None:
        return JSONResponse({"message": "Internal Server Error"}, status_code=500)
    body: dict[str, object] = {
        "statusCode": error.status_code,
        "error": HTTPStatus(error.status_code).phrase,
        "message": error.message,
    }
    if error.revision is not None:
        body["_rev"] = error.revision
    return JSONResponse(body, status_code=error.status_code)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocumentFailure, _document_failure_handler)
