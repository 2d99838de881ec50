# =============================================================================
# app/validation.py - Validation Error Formatting
# =============================================================================
# pydantic reports every violated constraint at once. This module turns that
# list into one human-readable line per field, e.g.
#   The minimum length of the "name" field is 2; The "imageUrl" field must be a valid url
#
# The raw error list is also kept (minus the submitted values, which may be
# passwords) so the error responder can log it.
# =============================================================================

from collections.abc import Sequence
from typing import Any

from lib.utils import OBJECT_ID_PATTERN

# Location prefixes FastAPI adds in front of the field name
_SOURCES = {"body", "path", "query", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc if part not in _SOURCES]
    return ".".join(parts)


def _format_one(error: dict[str, Any]) -> str:
    """Render a single pydantic error dict as a sentence."""
    field = _field_name(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "json_invalid":
        return "The request body must be valid JSON"
    if not field:
        if kind == "missing":
            return "The request body is required"
        return f"The request body is invalid: {error.get('msg', '')}"

    if kind == "missing":
        return f'The "{field}" field is required'
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f'The "{field}" field must be filled in'
        return f'The minimum length of the "{field}" field is {ctx.get("min_length")}'
    if kind == "string_too_long":
        return f'The maximum length of the "{field}" field is {ctx.get("max_length")}'
    if kind == "string_pattern_mismatch":
        if ctx.get("pattern") == OBJECT_ID_PATTERN:
            return f'The "{field}" must be a valid 24-character hexadecimal string'
        return f'The "{field}" field has an invalid format'
    if kind == "enum":
        return f'The "{field}" field must be one of {ctx.get("expected")}'
    if kind in ("string_type", "str_type"):
        return f'The "{field}" field must be a string'
    if kind == "value_error":
        # EmailStr puts its explanation in ctx["reason"]; our own
        # validators raise ValueError("must be ...") which lands in ctx["error"]
        if "reason" in ctx:
            return f'The "{field}" field must be a valid email'
        if "error" in ctx:
            return f'The "{field}" field {ctx["error"]}'
    return f'The "{field}" field is invalid: {error.get("msg", "")}'


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    """
    Join every validation error into one message.

    Messages are de-duplicated but keep their original order.

    Args:
        errors: RequestValidationError.errors() or ValidationError.errors()

    Returns:
        Semicolon-separated message, one sentence per violation
    """
    messages: list[str] = []
    for error in errors:
        message = _format_one(error)
        if message not in messages:
            messages.append(message)
    return "; ".join(messages) or "Invalid data"


def loggable_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Strip submitted values from pydantic errors before they are logged.

    Keeps type, location and message. Drops `input` (may hold a password)
    and `ctx` (may hold exception objects).
    """
    return [
        {
            "type": error.get("type"),
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg"),
        }
        for error in errors
    ]
