# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Users (lookup by id/email, insert, profile update)
# - Clothing items (list, fetch, insert, delete)
# - Likes (atomic add/remove through database functions)
#
# Every driver failure is wrapped in SupabaseClientError carrying the
# Postgres error code. Translating that into an HTTP-facing error is the
# job of the service layer, not this module.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user = SupabaseClient.fetch_user_by_email("a@a.com")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import ClientOptions, create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

USERS_TABLE = "users"
ITEMS_TABLE = "items"

# The password hash is only ever selected explicitly, for signin
USER_PUBLIC_COLUMNS = "id, name, avatar, email"
USER_AUTH_COLUMNS = "id, name, avatar, email, password"
ITEM_COLUMNS = "id, name, weather, image_url, owner, likes, created_at"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `code` is the Postgres/PostgREST error code when the driver reported
    one (e.g. "23505" for a unique violation), otherwise a local code
    such as "INSERT_NO_DATA".
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def _strip_password(row: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in row.items() if key != "password"}


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        item = SupabaseClient.fetch_item("6719a3f04c1e9b2d7a885f10")
        if item is None:
            ...
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY,
                    options=ClientOptions(
                        postgrest_client_timeout=settings.DB_TIMEOUT_SECONDS,
                    ),
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                ) from e
        return cls._instance

    @classmethod
    def reset_client(cls) -> None:
        """Drop the cached client (used on shutdown and in tests)."""
        cls._instance = None

    @staticmethod
    def _wrap(error: Exception, message: str, **details: Any) -> SupabaseClientError:
        """Wrap a driver exception, keeping its Postgres error code."""
        code = getattr(error, "code", None) or "SUPABASE_ERROR"
        return SupabaseClientError(
            message=f"{message}: {error}",
            code=str(code),
            details=details,
        )

    @staticmethod
    def _first(data: Any) -> dict[str, Any] | None:
        if isinstance(data, list):
            return data[0] if data else None
        return data or None

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """
        Run the cheapest possible query to prove the database is reachable.

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()
        try:
            client.table(USERS_TABLE).select("id").limit(1).execute()
        except Exception as e:
            raise cls._wrap(e, "Database ping failed") from e

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str) -> dict[str, Any] | None:
        """
        Fetch a user by ID, without the password hash.

        Args:
            user_id: 24-hex user identifier

        Returns:
            User dict (id, name, avatar, email), or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(USERS_TABLE)
                .select(USER_PUBLIC_COLUMNS)
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
            return cls._first(response.data)

        except Exception as e:
            raise cls._wrap(e, "Failed to fetch user", user_id=user_id) from e

    @classmethod
    def fetch_user_by_email(
        cls,
        email: str,
        include_password: bool = False,
    ) -> dict[str, Any] | None:
        """
        Fetch a user by email address.

        Args:
            email: Email address (exact match)
            include_password: Also select the password hash (signin only)

        Returns:
            User dict, or None if no user has this email

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        columns = USER_AUTH_COLUMNS if include_password else USER_PUBLIC_COLUMNS

        try:
            response = (
                client.table(USERS_TABLE)
                .select(columns)
                .eq("email", email)
                .limit(1)
                .execute()
            )
            return cls._first(response.data)

        except Exception as e:
            raise cls._wrap(e, "Failed to fetch user by email") from e

    @classmethod
    def insert_user(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new user row.

        Args:
            data: Row values including the already-hashed password

        Returns:
            Inserted user dict with the password hash removed

        Raises:
            SupabaseClientError: If insert fails (code "23505" on duplicate email)
        """
        client = cls.get_client()

        try:
            response = client.table(USERS_TABLE).insert(data).execute()
        except Exception as e:
            raise cls._wrap(e, "Failed to insert user") from e

        row = cls._first(response.data)
        if row is None:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": USERS_TABLE},
            )
        return _strip_password(row)

    @classmethod
    def update_user(cls, user_id: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """
        Update a user's profile fields.

        Args:
            user_id: 24-hex user identifier
            data: Columns to change

        Returns:
            Updated user dict (without password), or None if no such user

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(USERS_TABLE)
                .update(data)
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            raise cls._wrap(e, "Failed to update user", user_id=user_id) from e

        row = cls._first(response.data)
        return _strip_password(row) if row else None

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_items(cls) -> list[dict[str, Any]]:
        """
        Fetch every clothing item, oldest first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(ITEMS_TABLE)
                .select(ITEM_COLUMNS)
                .order("created_at")
                .execute()
            )
            items = response.data or []
            logger.debug(f"Fetched {len(items)} items")
            return items

        except Exception as e:
            raise cls._wrap(e, "Failed to fetch items") from e

    @classmethod
    def fetch_item(cls, item_id: str) -> dict[str, Any] | None:
        """
        Fetch a clothing item by ID.

        Returns:
            Item dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(ITEMS_TABLE)
                .select(ITEM_COLUMNS)
                .eq("id", item_id)
                .limit(1)
                .execute()
            )
            return cls._first(response.data)

        except Exception as e:
            raise cls._wrap(e, "Failed to fetch item", item_id=item_id) from e

    @classmethod
    def insert_item(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new clothing item.

        Returns:
            Inserted item dict (created_at filled by the database)

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(ITEMS_TABLE).insert(data).execute()
        except Exception as e:
            raise cls._wrap(e, "Failed to insert item") from e

        row = cls._first(response.data)
        if row is None:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": ITEMS_TABLE},
            )
        return row

    @classmethod
    def delete_item(cls, item_id: str) -> dict[str, Any] | None:
        """
        Delete a clothing item.

        Returns:
            The deleted item dict, or None if nothing was deleted

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(ITEMS_TABLE)
                .delete()
                .eq("id", item_id)
                .execute()
            )
            return cls._first(response.data)

        except Exception as e:
            raise cls._wrap(e, "Failed to delete item", item_id=item_id) from e

    # -------------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------------
    # Both functions are defined in supabase/schema.sql and update the likes
    # array in a single statement, so concurrent likes never lose updates.

    @classmethod
    def add_item_like(cls, item_id: str, user_id: str) -> dict[str, Any] | None:
        """
        Add a user to an item's likes (no-op if already present).

        Returns:
            Updated item dict, or None if the item does not exist

        Raises:
            SupabaseClientError: If the call fails
        """
        return cls._call_like_function("add_item_like", item_id, user_id)

    @classmethod
    def remove_item_like(cls, item_id: str, user_id: str) -> dict[str, Any] | None:
        """
        Remove a user from an item's likes (no-op if absent).

        Returns:
            Updated item dict, or None if the item does not exist

        Raises:
            SupabaseClientError: If the call fails
        """
        return cls._call_like_function("remove_item_like", item_id, user_id)

    @classmethod
    def _call_like_function(
        cls,
        function: str,
        item_id: str,
        user_id: str,
    ) -> dict[str, Any] | None:
        client = cls.get_client()

        try:
            response = client.rpc(
                function,
                {"target_item_id": item_id, "liker_id": user_id},
            ).execute()
            return cls._first(response.data)

        except Exception as e:
            raise cls._wrap(
                e, f"Failed to call {function}", item_id=item_id, user_id=user_id
            ) from e
