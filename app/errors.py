"""
Error taxonomy and the exception handlers that render it.

Only two outcomes reach the client: 400 for anything wrong with the
request itself, 500 for everything else.  Lookups that find no row raise
``NotFoundError`` so callers can tell the cases apart, but the HTTP layer
still answers 500 for them.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.responses import error_response

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for failures raised by the service layer."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """The requested row does not exist (or not under the given parent)."""


class InvalidReferenceError(ServiceError):
    """A body field points at a row that does not exist."""


def _format_validation_error(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", "invalid value")


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [_format_validation_error(e) for e in exc.errors()] or ["invalid request"]
    logger.warning("Validation error on %s: %s", request.url.path, details)
    return error_response(400, *details)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning("Service error on %s: %s", request.url.path, exc.message)
    return error_response(500, exc.message)


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.warning("Database error on %s: %s", request.url.path, exc)
    # The driver message is the closest thing to a reason the storage layer has.
    detail = str(getattr(exc, "orig", None) or exc)
    return error_response(500, detail)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
