# =============================================================================
# core/models/item.py - Clothing Item Schemas
# =============================================================================
# - Weather: The three weather types an item can be worn in
# - ItemCreate: Body of POST /items
# - ItemResponse: Item as returned to clients
# - MessageResponse: Plain {"message": ...} acknowledgement
#
# Database columns are snake_case; the wire format is camelCase
# (imageUrl, createdAt) with "_id" for the identifier.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .fields import Name, Url


class Weather(str, Enum):
    """Weather an item is suited for."""
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class ItemCreate(BaseModel):
    """
    Schema for creating a clothing item.

    The owner is never taken from the body; it is the authenticated user.

    Example:
        {
            "name": "Beanie",
            "weather": "cold",
            "imageUrl": "https://example.com/beanie.png"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Name = Field(..., description="Item name, 2-30 characters")
    weather: Weather = Field(..., description="hot, warm or cold")
    image_url: Url = Field(..., alias="imageUrl", description="Image URL")


class ItemResponse(BaseModel):
    """Clothing item as returned by every item endpoint."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., alias="_id")
    name: str
    weather: Weather
    image_url: str = Field(..., alias="imageUrl")

    # User id of the creator; fixed at creation
    owner: str

    # User ids, no duplicates
    likes: list[str] = Field(default_factory=list)

    created_at: datetime | None = Field(default=None, alias="createdAt")


class MessageResponse(BaseModel):
    """Simple acknowledgement body."""

    message: str
