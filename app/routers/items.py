# =============================================================================
# app/routers/items.py - Clothing Item Endpoints
# =============================================================================
# GET /items is public. Everything else requires a bearer token; the token
# is checked before the body or the item id is validated.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from core.models import ItemCreate, ItemResponse, MessageResponse
from core.services import ItemService
from lib.utils import OBJECT_ID_PATTERN

router = APIRouter()

ItemId = Annotated[
    str,
    Path(
        pattern=OBJECT_ID_PATTERN,
        description="24-character hexadecimal item id",
    ),
]


@router.get("", response_model=list[ItemResponse])
def list_items():
    """List all clothing items. No authentication required."""
    return ItemService.list_items()


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    payload: ItemCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Create an item owned by the current user."""
    return ItemService.create_item(
        name=payload.name,
        weather=payload.weather.value,
        image_url=payload.image_url,
        owner=user.id,
    )


@router.delete("/{itemId}", response_model=MessageResponse)
def delete_item(
    itemId: ItemId,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete an item. Only its owner may delete it.

    Raises:
        403: The current user is not the owner
        404: No item with this id
    """
    ItemService.delete_item(itemId, user.id)
    return {"message": "Item successfully deleted"}


@router.put("/{itemId}/likes", response_model=ItemResponse)
def like_item(
    itemId: ItemId,
    user: AuthUser = Depends(get_current_user),
):
    """Like an item. Liking an already-liked item is a no-op."""
    return ItemService.like_item(itemId, user.id)


@router.delete("/{itemId}/likes", response_model=ItemResponse)
def unlike_item(
    itemId: ItemId,
    user: AuthUser = Depends(get_current_user),
):
    """Remove the current user's like. Succeeds even if there was none."""
    return ItemService.unlike_item(itemId, user.id)
