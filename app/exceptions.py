# =============================================================================
# app/exceptions.py - Error Taxonomy and Centralized Error Responder
# =============================================================================
# Every failure the API reports is one of six classified errors, each with a
# fixed HTTP status. Services, the auth dependency and the validator raise
# them; nothing in between catches them. The handlers at the bottom of this
# module are the only place where an error becomes an HTTP response.
#
# Response body is always {"message": ...}. For 500s the message is a fixed
# generic string; the real cause only goes to the server log.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.validation import format_validation_errors, loggable_errors
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger("wtwr.errors")

GENERIC_SERVER_ERROR = "An error has occurred on the server"
ROUTE_NOT_FOUND = "Requested resource not found"


class WTWRException(Exception):
    """
    Base exception for the WTWR API.

    Do not raise this directly; raise one of the six subclasses below.
    Attributes are set once in __init__ and never changed afterwards.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def public_message(self) -> str:
        """Message safe to send to the caller."""
        if self.status_code >= 500:
            return GENERIC_SERVER_ERROR
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"message": self.public_message()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status_code}, message={self.message!r})"


# =============================================================================
# The Six Kinds
# =============================================================================

class BadRequestError(WTWRException):
    """Malformed input, failed validation, unparseable identifier."""
    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(WTWRException):
    """Missing, invalid or expired credential."""
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(WTWRException):
    """Authenticated, but not allowed to touch this resource."""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(WTWRException):
    """Referenced entity (or route) does not exist."""
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(WTWRException):
    """Uniqueness violation, e.g. duplicate email."""
    status_code = 409
    code = "CONFLICT"


class InternalServerError(WTWRException):
    """Anything unexpected. The message is logged, never sent."""
    status_code = 500
    code = "INTERNAL_ERROR"


_BY_STATUS: dict[int, type[WTWRException]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    405: NotFoundError,
    409: ConflictError,
}


# =============================================================================
# Persistence Error Translation
# =============================================================================
# Postgres SQLSTATE codes the driver can surface for bad client data.

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
DATA_ERROR_CODES = frozenset({
    "22P02",  # invalid_text_representation
    "22P05",  # untranslatable_character (NUL in text)
    "22001",  # string_data_right_truncation
    "23502",  # not_null_violation
    "23514",  # check_violation
})


def classify_persistence_error(
    error: SupabaseClientError,
    conflict_message: str = "Duplicate Email: Email already exists",
    missing_message: str = "Referenced resource not found",
) -> WTWRException:
    """
    Translate a raw database failure into a classified error.

    Args:
        error: The wrapped driver error
        conflict_message: Message to use if this was a unique violation
        missing_message: Message to use if a referenced row does not exist

    Returns:
        ConflictError, NotFoundError, BadRequestError or InternalServerError
    """
    details = {"db_code": error.code, **error.details}
    if error.code == UNIQUE_VIOLATION:
        return ConflictError(conflict_message, details=details)
    if error.code == FOREIGN_KEY_VIOLATION:
        return NotFoundError(missing_message, details=details)
    if error.code in DATA_ERROR_CODES:
        return BadRequestError("Invalid data", details=details)
    return InternalServerError(str(error), details=details)


# =============================================================================
# Exception Handlers
# =============================================================================

def _log_error(request: Request, exc: WTWRException, cause: BaseException | None = None) -> None:
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": exc.status_code,
        "error_code": exc.code,
        "details": exc.details,
    }
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}",
            extra=extra,
            exc_info=cause or exc,
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}",
            extra=extra,
        )


def render_error(request: Request, exc: WTWRException, cause: BaseException | None = None) -> JSONResponse:
    """
    Log a classified error and turn it into the uniform JSON response.

    Every handler below funnels into this function.
    """
    _log_error(request, exc, cause)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def wtwr_exception_handler(request: Request, exc: WTWRException) -> JSONResponse:
    """Handle any classified error raised by auth, validation or services."""
    return render_error(request, exc)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Convert request validation failures into one BadRequestError.

    All field violations are reported together, one message per field.
    """
    errors = exc.errors()
    classified = BadRequestError(
        format_validation_errors(errors),
        details={"errors": loggable_errors(errors)},
    )
    return render_error(request, classified)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Classify framework-level HTTP errors.

    Unmatched routes (404) and unmatched methods (405) both become the
    standard "Requested resource not found" response.
    """
    if exc.status_code in (404, 405):
        classified: WTWRException = NotFoundError(
            ROUTE_NOT_FOUND,
            details={"framework_detail": exc.detail},
        )
    else:
        error_class = _BY_STATUS.get(exc.status_code)
        if error_class is None:
            error_class = BadRequestError if exc.status_code < 500 else InternalServerError
        classified = error_class(str(exc.detail))
    return render_error(request, classified)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected errors. Never exposes internals."""
    classified = InternalServerError(
        f"Unhandled {type(exc).__name__}: {exc}",
    )
    return render_error(request, classified, cause=exc)
