# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The dependency is declared per protected route, never globally. FastAPI
# resolves it before the route's body and path parameters, so a request
# without a valid token is rejected before its input is validated.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.auth.models import AuthUser, TokenPayload
from app.auth.security import decode_access_token
from app.config import Settings, get_settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# Every auth failure gets the same caller-visible message; the reason is
# only logged.
AUTH_REQUIRED = "Authorization Required"

# HTTP Bearer token extractor. auto_error=False so a missing header reaches
# get_current_user and is reported as our own UnauthorizedError.
# HTTPBearer matches the scheme case-insensitively; only "Bearer" is accepted.
BEARER_SCHEME = "Bearer"
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    This dependency:
    1. Requires an "Authorization: Bearer <token>" header
    2. Verifies the token signature and expiry with the shared secret
    3. Returns an AuthUser carrying the user's id

    Raises:
        UnauthorizedError: "Authorization Required" for any failure
    """
    if (
        credentials is None
        or credentials.scheme != BEARER_SCHEME
        or not credentials.credentials
    ):
        logger.warning("Missing or malformed Authorization header")
        raise UnauthorizedError(AUTH_REQUIRED, details={"reason": "missing_bearer"})

    try:
        claims = decode_access_token(
            credentials.credentials,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        payload = TokenPayload.from_claims(claims)

    except ExpiredSignatureError:
        logger.warning("Bearer token has expired")
        raise UnauthorizedError(AUTH_REQUIRED, details={"reason": "expired"})

    except (JWTError, ValidationError) as e:
        logger.warning(f"Bearer token validation failed: {e}")
        raise UnauthorizedError(AUTH_REQUIRED, details={"reason": "invalid"})

    if not payload.subject:
        logger.warning("Bearer token missing user id claim")
        raise UnauthorizedError(AUTH_REQUIRED, details={"reason": "no_subject"})

    logger.debug(f"Authenticated user: {payload.subject}")
    return AuthUser(id=payload.subject)
