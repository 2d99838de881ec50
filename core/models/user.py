# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Body of POST /signup
# - UserLogin: Body of POST /signin
# - UserUpdate: Body of PATCH /users/me
# - UserResponse: Public user shape (never includes the password)
# - SigninResponse: Token plus the public user fields
#
# Identifiers go over the wire as "_id" for compatibility with the WTWR
# frontend; internally (and in the database) the column is "id".
# =============================================================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .fields import Name, OptionalUrl, Password


class UserCreate(BaseModel):
    """
    Schema for registering a new user.

    Example:
        {
            "name": "Al",
            "avatar": "http://x.com/a.png",
            "email": "a@a.com",
            "password": "password1"
        }
    """

    name: Name = Field(..., description="Display name, 2-30 characters")

    # Optional; an empty string means "no avatar"
    avatar: OptionalUrl = Field(
        default="",
        description="Avatar image URL"
    )

    email: EmailStr = Field(..., description="Unique email address")

    password: Password = Field(..., description="Plain-text password, at least 8 characters")


class UserLogin(BaseModel):
    """Schema for signing in with email and password."""

    email: EmailStr
    password: Password


class UserUpdate(BaseModel):
    """
    Schema for updating the current user's profile.

    Only name and avatar can change. Omitted fields are left untouched.

    Example:
        {"name": "Alice"}
    """

    name: Name | None = Field(default=None, description="New display name")
    avatar: OptionalUrl | None = Field(default=None, description="New avatar URL")

    def changes(self) -> dict[str, str]:
        """Columns to write, i.e. the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserResponse(BaseModel):
    """
    Public representation of a user.

    There is deliberately no password field here, so a hash can never be
    serialized even if one slips into the source dict.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., alias="_id", description="24-hex user identifier")
    name: str
    avatar: str = ""
    email: str


class SigninResponse(UserResponse):
    """Successful signin: the bearer token plus the public user fields."""

    token: str = Field(..., description="Signed bearer token, valid for 7 days")
