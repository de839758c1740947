"""Error taxonomy and the exception handlers that turn errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors that map to a single JSON response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class InputValidationError(AppError):
    """Request body or query failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """A uniqueness constraint in the store was violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class RequestTimeoutError(AppError):
    """A persistence call did not finish before its deadline."""

    status_code = status.HTTP_408_REQUEST_TIMEOUT
    default_message = "Request took too long"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid log in credentials"


class NotAuthenticatedError(AppError):
    """Missing, invalid or expired session token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class RateLimitedError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests, please try again later."


class InternalError(AppError):
    pass


def _json_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _wants_html(request: Request) -> bool:
    """True when the client is a browser navigating to a page."""
    return "text/html" in request.headers.get("accept", "").lower()


def first_validation_message(exc: RequestValidationError) -> str:
    """Human-readable text of the first validation issue, prefixed with its field."""
    errors = exc.errors()
    if not errors:
        return InputValidationError.default_message
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    msg = first.get("msg", InputValidationError.default_message)
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def app_error_handler(request: Request, exc: AppError) -> Response:
    if isinstance(exc, NotAuthenticatedError) and _wants_html(request):
        return RedirectResponse(
            url=get_settings().LOGIN_URL,
            status_code=status.HTTP_303_SEE_OTHER,
        )
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message, exc_info=exc.cause or exc)
    return _json_error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    return _json_error(status.HTTP_400_BAD_REQUEST, first_validation_message(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method},
    )
    return _json_error(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-to-response mapping to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
