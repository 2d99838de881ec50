# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a verified bearer token.

    This is the minimal identity available from the token itself,
    without querying the database. It lives for one request.
    """

    model_config = ConfigDict(frozen=True)

    id: str


class TokenPayload(BaseModel):
    """
    Decoded bearer token payload.

    Tokens issued by this API carry the user id as both "_id" and "sub".
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = None
    sub: str | None = None
    iat: int | None = None
    exp: int

    @classmethod
    def from_claims(cls, claims: dict) -> "TokenPayload":
        """Build from raw JWT claims ("_id" cannot be a field name)."""
        return cls.model_validate({**claims, "user_id": claims.get("_id")})

    @property
    def subject(self) -> str | None:
        """The user id this token was issued for."""
        return self.user_id or self.sub
