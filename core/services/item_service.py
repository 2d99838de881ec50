# =============================================================================
# core/services/item_service.py - Clothing Item Business Logic
# =============================================================================
# Handles listing, creating, deleting and liking clothing items.
# Ownership checks for deletion live here.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ForbiddenError, NotFoundError, classify_persistence_error
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import new_object_id, normalize_object_id

logger = logging.getLogger(__name__)

ITEM_NOT_FOUND = "Item ID not found"
NOT_ITEM_OWNER = "Forbidden: You can only delete your own items"
OWNER_NOT_FOUND = "User not found"


class ItemService:
    """
    Service for clothing item operations.

    Item ids arriving here have already passed the 24-hex format check.
    """

    @staticmethod
    def list_items() -> list[dict[str, Any]]:
        """List every item in creation order. Public; no owner filter."""
        try:
            return SupabaseClient.fetch_items()
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

    @staticmethod
    def get_item(item_id: str) -> dict[str, Any]:
        """
        Get an item by ID.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        item_id = normalize_object_id(item_id)
        try:
            item = SupabaseClient.fetch_item(item_id)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not item:
            raise NotFoundError(ITEM_NOT_FOUND, details={"item_id": item_id})
        return item

    @staticmethod
    def create_item(
        name: str,
        weather: str,
        image_url: str,
        owner: str,
    ) -> dict[str, Any]:
        """
        Create an item owned by the given user.

        Args:
            name: Item name
            weather: "hot", "warm" or "cold"
            image_url: Image URL
            owner: Authenticated user's id

        Returns:
            Created item dict with empty likes
        """
        data = {
            "id": new_object_id(),
            "name": name,
            "weather": weather,
            "image_url": image_url,
            "owner": owner,
            "likes": [],
        }

        try:
            item = SupabaseClient.insert_item(data)
        except SupabaseClientError as e:
            # items.owner references users.id; the token outlived its user
            raise classify_persistence_error(e, missing_message=OWNER_NOT_FOUND) from e

        logger.info(f"Created item: {item['id']} for user: {owner}")
        return item

    @staticmethod
    def delete_item(item_id: str, user_id: str) -> dict[str, Any]:
        """
        Delete an item. Only its owner may do this.

        Returns:
            The deleted item

        Raises:
            NotFoundError: If the item doesn't exist
            ForbiddenError: If the user is not the owner (item is left as is)
        """
        item = ItemService.get_item(item_id)

        if str(item.get("owner")) != str(user_id):
            raise ForbiddenError(
                NOT_ITEM_OWNER,
                details={"item_id": item["id"], "user_id": user_id},
            )

        try:
            deleted = SupabaseClient.delete_item(item["id"])
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        # Someone else deleted it between our read and our delete
        if not deleted:
            raise NotFoundError(ITEM_NOT_FOUND, details={"item_id": item["id"]})

        logger.info(f"Deleted item: {item['id']}")
        return deleted

    @staticmethod
    def like_item(item_id: str, user_id: str) -> dict[str, Any]:
        """
        Add the user to the item's likes. Liking twice changes nothing.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        item_id = normalize_object_id(item_id)
        try:
            item = SupabaseClient.add_item_like(item_id, user_id)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not item:
            raise NotFoundError(ITEM_NOT_FOUND, details={"item_id": item_id})
        return item

    @staticmethod
    def unlike_item(item_id: str, user_id: str) -> dict[str, Any]:
        """
        Remove the user from the item's likes.

        Unliking an item the user never liked succeeds and changes nothing.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        item_id = normalize_object_id(item_id)
        try:
            item = SupabaseClient.remove_item_like(item_id, user_id)
        except SupabaseClientError as e:
            raise classify_persistence_error(e) from e

        if not item:
            raise NotFoundError(ITEM_NOT_FOUND, details={"item_id": item_id})
        return item
