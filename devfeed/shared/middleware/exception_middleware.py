# devfeed/shared/middleware/exception_middleware.py (async version)

"""
Centralized exception handling.

Every error leaves the application in the same envelope:

    {"error": CODE, "message": ..., "status": ..., "path": ...,
     "timestamp": "YYYY-MM-DD HH:MM:SS", "validationErrors": [...]}

Domain exceptions, request validation errors and framework HTTP errors are
turned into it by exception handlers. Anything else reaches the middleware,
which answers 500 with a generic message and logs the details.
"""

import time
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Callable, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from devfeed.adapters.configuration.config import settings
from devfeed.domain.exceptions import DatabaseOperationException, DomainException

# Configure logger
logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"
VALUE_ERROR_PREFIX = "Value error, "


def error_response(
        status_code: int,
        code: str,
        message: str,
        path: str,
        validation_errors: Optional[List[str]] = None,
        headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the error envelope. ``validationErrors`` is present only when given."""
    content = {
        "error": code,
        "message": message,
        "status": status_code,
        "path": path,
        "timestamp": datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
    }
    if validation_errors:
        content["validationErrors"] = validation_errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _client(request: Request) -> str:
    return request.client.host if request.client else "N/A"


def format_validation_errors(exc: RequestValidationError) -> List[str]:
    """One ``field: message`` line per failing field, without pydantic's "Value error, " prefix."""
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {message}" if field else message)
    return messages


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    if isinstance(exc, DatabaseOperationException):
        logger.error(
            f"Database operation failed: {exc.detail} | "
            f"Original: {type(exc.original_error).__name__ if exc.original_error else 'N/A'} | "
            f"Path: {request.url.path}"
        )
    else:
        logger.warning(
            f"Domain exception: {exc.message} | Code: {exc.internal_code} | "
            f"Path: {request.url.path}"
        )
    return error_response(
        exc.status_code,
        exc.internal_code,
        exc.message,
        request.url.path,
        exc.validation_errors,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc)
    logger.warning(f"Validation error: {len(errors)} field(s) | Path: {request.url.path}")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Validation failed",
        request.url.path,
        errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        code = HTTPStatus(exc.status_code).phrase.upper().replace(" ", "_").replace("-", "_")
    except ValueError:
        code = "HTTP_ERROR"
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return error_response(
        exc.status_code,
        code,
        message,
        request.url.path,
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to ``app``."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence for exceptions no handler claimed.

    The client only ever sees a generic 500. Details go to the log, with the
    full traceback outside production.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except SQLAlchemyError as exc:
            if settings.ENVIRONMENT == "production":
                logger.error(
                    f"Database error: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            else:
                logger.error(
                    f"Database error: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_SERVER_ERROR",
                GENERIC_ERROR_MESSAGE,
                request.url.path,
            )

        except Exception as exc:
            if settings.ENVIRONMENT == "production":
                logger.error(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            else:
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_SERVER_ERROR",
                GENERIC_ERROR_MESSAGE,
                request.url.path,
            )
