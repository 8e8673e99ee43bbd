"""Error taxonomy and the exception handlers that turn it into the JSON envelope."""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.responses import envelope, error_response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Erreur opérationnelle : remonte telle quelle jusqu'au handler."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
        is_operational: bool = True,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.is_operational = is_operational


class ValidationFailure(ApiError):
    status_code = 422


class DomainValidation(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT


class UnsupportedMedia(ApiError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE


_LOCATIONS = {"body": "body", "query": "query", "path": "params", "header": "headers"}


def format_validation_issues(errors) -> list[dict]:
    """Convertit les erreurs pydantic/FastAPI en [{location, path, message}]"""
    issues = []
    for error in errors:
        loc = list(error.get("loc", ()))
        location = _LOCATIONS.get(str(loc[0]), str(loc[0])) if loc else "body"
        path = ".".join(str(part) for part in loc[1:]) or location
        issues.append({"location": location, "path": path, "message": error.get("msg", "Invalid value")})
    return issues


def api_error_handler(request: Request, exc: ApiError):
    if not exc.is_operational:
        logger.error(f"Non-operational error on {request.method} {request.url.path}: {exc.message}")
    meta = {"details": exc.details} if exc.details else None
    return envelope(exc.status_code, error_response(exc.message, meta))


def request_validation_handler(request: Request, exc: RequestValidationError):
    details = format_validation_issues(exc.errors())
    return envelope(
        422,
        error_response("Validation failed", {"details": details}),
    )


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Resource not found"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return envelope(exc.status_code, error_response(message))


def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_response("Internal server error"),
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
