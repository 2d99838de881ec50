# =============================================================================
# core/models/fields.py - Reusable Field Types
# =============================================================================
# Annotated string types shared by the user and item schemas. URL checks use
# pydantic's HttpUrl but keep the original string, so a stored URL is exactly
# what the client sent (no trailing-slash normalization).
# =============================================================================

from typing import Annotated

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError

_HTTP_URL = TypeAdapter(HttpUrl)


def validate_url(value: str) -> str:
    """Accept only absolute http(s) URLs; return the value unchanged."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid url") from None
    return value


def validate_optional_url(value: str) -> str:
    """Like validate_url, but the empty string means "no URL"."""
    if value == "":
        return value
    return validate_url(value)


# 2-30 characters, same bound for user and item names
Name = Annotated[str, Field(min_length=2, max_length=30)]

Url = Annotated[str, AfterValidator(validate_url)]

OptionalUrl = Annotated[str, AfterValidator(validate_optional_url)]

Password = Annotated[str, Field(min_length=8, max_length=128)]
