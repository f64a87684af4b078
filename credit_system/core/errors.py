from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from credit_system.schemas.errors import ExceptionDetails

logger = logging.getLogger(__name__)

BAD_REQUEST_TITLE = "Bad Request! Consult the documentation"
NOT_FOUND_TITLE = "Not Found! Consult the documentation"
CONFLICT_TITLE = "Conflict! Consult the documentation"
INTERNAL_ERROR_TITLE = "Internal Server Error! Consult the documentation"


class CreditSystemError(Exception):
    """Base error. Subclasses pin the HTTP status and the response title."""

    status_code = status.HTTP_400_BAD_REQUEST
    title = BAD_REQUEST_TITLE

    def __init__(self, message: str, *, field: str = "message") -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class BusinessError(CreditSystemError):
    """A well-formed request that breaks a business rule."""


class NotFoundError(CreditSystemError):
    status_code = status.HTTP_404_NOT_FOUND
    title = NOT_FOUND_TITLE


class ConflictError(CreditSystemError):
    status_code = status.HTTP_409_CONFLICT
    title = CONFLICT_TITLE


def _error_response(
    *, status_code: int, title: str, exception: str, details: dict[str, Any]
) -> JSONResponse:
    body = ExceptionDetails(
        title=title,
        timestamp=datetime.now(),
        status=status_code,
        exception=exception,
        details=details,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _validation_details(exc: RequestValidationError) -> dict[str, Any]:
    details: dict[str, Any] = {}
    for error in exc.errors():
        location = error.get("loc") or ()
        field = str(location[-1]) if location else "request"
        details[field] = error.get("msg")
    return details


async def credit_system_error_handler(_request: Request, exc: CreditSystemError) -> JSONResponse:
    logger.info("request rejected error=%s message=%s", type(exc).__name__, exc.message)
    return _error_response(
        status_code=exc.status_code,
        title=exc.title,
        exception=type(exc).__name__,
        details={exc.field: exc.message},
    )


async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(exc)
    logger.info("request validation failed fields=%s", ",".join(sorted(details)))
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title=BAD_REQUEST_TITLE,
        exception=type(exc).__name__,
        details=details,
    )


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error")
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title=INTERNAL_ERROR_TITLE,
        exception=type(exc).__name__,
        details={"message": "Unexpected error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CreditSystemError, credit_system_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
