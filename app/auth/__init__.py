# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication: bcrypt password hashes, HS256 JWTs signed
# with the shared secret from Settings, and the get_current_user dependency.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import AUTH_REQUIRED, get_current_user
from app.auth.models import AuthUser, TokenPayload

__all__ = [
    "AUTH_REQUIRED",
    "get_current_user",
    "AuthUser",
    "TokenPayload",
]
