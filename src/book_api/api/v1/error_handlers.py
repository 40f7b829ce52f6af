# book_api/api/v1/error_handlers.py
"""
FastAPI exception handlers that map repository-level exceptions to HTTP responses.

Routers unwrap repository `Outcome`s with `outcome.unwrap()`, which re-raises the
stored RepositoryError; the handlers below turn it into a stable JSON payload
(via .to_payload()) and the matching status (via .http_status()):

    NOT_FOUND            -> 404
    REJECTED             -> 422 (400 for an id mismatch)
    CONFLICT             -> 409
    PERSISTENCE_FAILURE  -> 500
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from book_api.exceptions.base import (
    RepositoryError,
    ValidationRejectedError,
    NotFoundError,
    ConflictError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


# Most specific first. Status mapping lives on the exception classes.

async def rejected_handler(request: Request, exc: ValidationRejectedError) -> JSONResponse:
    logger.info("Rejected %s %s: code=%s fields=%s", request.method, request.url.path, exc.error_code, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.info("ConflictError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """
    500 for storage faults. The constraint name goes to the log, never to the client.
    """
    logger.error(
        "PersistenceError for %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        extra={"constraint": exc.constraint},
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Fallback for any other repository error (status from its error_code, 400 by default)."""
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationRejectedError, rejected_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
