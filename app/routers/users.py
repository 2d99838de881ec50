# =============================================================================
# app/routers/users.py - Current User Endpoints
# =============================================================================
# Both endpoints act on the authenticated user only; there is no way to
# read or change another user's profile.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from core.models import UserResponse, UserUpdate
from core.services import UserService

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_me(user: AuthUser = Depends(get_current_user)):
    """Get the current user's profile."""
    return UserService.get_user(user.id)


@router.patch("/me", response_model=UserResponse)
def update_me(
    payload: UserUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update the current user's name and/or avatar.

    Only the fields present in the body are changed.
    """
    return UserService.update_user(user.id, **payload.changes())
