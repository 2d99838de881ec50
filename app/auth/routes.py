# =============================================================================
# app/auth/routes.py - Signup and Signin Endpoints
# =============================================================================
# The only two routes that do not require a bearer token besides GET /items.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.security import create_access_token
from app.config import Settings, get_settings
from core.models import SigninResponse, UserCreate, UserLogin, UserResponse
from core.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    payload: UserCreate,
    settings: Settings = Depends(get_settings),
):
    """
    Register a new user.

    The password is hashed before storage and never returned.

    Raises:
        400: Invalid body
        409: Email already registered
    """
    return UserService.create_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        avatar=payload.avatar,
        rounds=settings.BCRYPT_ROUNDS,
    )


@router.post("/signin", response_model=SigninResponse)
def signin(
    payload: UserLogin,
    settings: Settings = Depends(get_settings),
):
    """
    Exchange email and password for a bearer token.

    Returns:
        The token (valid for JWT_EXPIRES_DAYS) and the public user fields

    Raises:
        400: Invalid body
        401: Unknown email or wrong password
    """
    user = UserService.authenticate(payload.email, payload.password)

    token = create_access_token(
        user["id"],
        settings.JWT_SECRET,
        expires_days=settings.JWT_EXPIRES_DAYS,
        algorithm=settings.JWT_ALGORITHM,
    )
    logger.info(f"Issued token for user: {user['id']}")

    return {**user, "token": token}
