# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - fields.py: Shared constrained types (names, URLs, passwords)
# - user.py: Signup/signin/profile schemas
# - item.py: Clothing item schemas
#
# These models define the "contract" between API and clients. Request models
# double as the input validator: FastAPI runs them after authentication and
# before any service code.
# =============================================================================

from .fields import Name, OptionalUrl, Password, Url, validate_url
from .item import ItemCreate, ItemResponse, MessageResponse, Weather
from .user import SigninResponse, UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    # Fields
    "Name",
    "OptionalUrl",
    "Password",
    "Url",
    "validate_url",
    # Users
    "SigninResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
    # Items
    "ItemCreate",
    "ItemResponse",
    "MessageResponse",
    "Weather",
]
