# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles signup, signin and profile operations.
# Separates HTTP concerns from database/business logic.
#
# Raw database failures are translated here, exactly once, into classified
# errors. Classified errors raised here propagate untouched to the error
# responder.
# =============================================================================

import logging
from typing import Any

from app.auth.security import hash_password, verify_password
from app.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    classify_persistence_error,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import new_object_id

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Duplicate Email: Email already exists"
INVALID_CREDENTIALS = "Invalid email or password"
USER_NOT_FOUND = "User not found"


class UserService:
    """
    Service for user account operations.

    Provides a clean interface between API routes and database.
    Returned user dicts never contain the password hash.
    """

    @staticmethod
    def create_user(
        name: str,
        email: str,
        password: str,
        avatar: str = "",
        rounds: int = 10,
    ) -> dict[str, Any]:
        """
        Register a new user.

        Args:
            name: Display name
            email: Email address (must be unused)
            password: Plain-text password, hashed before storage
            avatar: Avatar URL or "" for none
            rounds: bcrypt cost factor

        Returns:
            Created user dict (id, name, avatar, email)

        Raises:
            ConflictError: If the email is already registered
        """
        try:
            existing = SupabaseClient.fetch_user_by_email(email)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if existing:
            raise ConflictError(DUPLICATE_EMAIL, details={"email": email})

        data = {
            "id": new_object_id(),
            "name": name,
            "avatar": avatar,
            "email": email,
            "password": hash_password(password, rounds=rounds),
        }

        try:
            # The unique constraint still catches a signup racing this one
            user = SupabaseClient.insert_user(data)
        except SupabaseClientError as e:
            raise classify_persistence_error(e, conflict_message=DUPLICATE_EMAIL) from e

        logger.info(f"Created user: {user['id']}")
        return user

    @staticmethod
    def authenticate(email: str, password: str) -> dict[str, Any]:
        """
        Check signin credentials.

        Unknown email and wrong password produce the same error, so the
        response does not reveal which accounts exist.

        Returns:
            The user dict (without password)

        Raises:
            UnauthorizedError: If the credentials do not match
        """
        try:
            user = SupabaseClient.fetch_user_by_email(email, include_password=True)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not user or not verify_password(password, user.get("password")):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return {key: value for key, value in user.items() if key != "password"}

    @staticmethod
    def get_user(user_id: str) -> dict[str, Any]:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        try:
            user = SupabaseClient.fetch_user(user_id)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not user:
            raise NotFoundError(USER_NOT_FOUND, details={"user_id": user_id})

        return user

    @staticmethod
    def update_user(
        user_id: str,
        name: str | None = None,
        avatar: str | None = None,
    ) -> dict[str, Any]:
        """
        Update the current user's name and/or avatar.

        Fields left as None are not changed. With nothing to change the
        current profile is returned as-is.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        update_data: dict[str, Any] = {}
        if name is not None:
            update_data["name"] = name
        if avatar is not None:
            update_data["avatar"] = avatar

        if not update_data:
            return UserService.get_user(user_id)

        try:
            user = SupabaseClient.update_user(user_id, update_data)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not user:
            raise NotFoundError(USER_NOT_FOUND, details={"user_id": user_id})

        logger.info(f"Updated user: {user_id}")
        return user
