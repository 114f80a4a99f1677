"""Listing models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from src.models.viewport import Coordinate


COMPLETED_STATUS = "COMPLETED"


class Listing(BaseModel):
    """Marketplace service listing as returned by the listing service."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, description="Listing ID, absent until persisted")
    title: str = Field("", description="Listing title")
    description: str = Field("", description="Listing description")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Cover image URL")
    address: str = Field("", description="Street address")
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")
    price: float = Field(0.0, description="Price, 0 when not given")
    user_id: Optional[str] = Field(None, alias="userId", description="Owner user ID")
    user_name: Optional[str] = Field(None, alias="userName", description="Owner display name")
    is_completed: Optional[bool] = Field(None, alias="isCompleted", description="Completed flag")
    status: Optional[str] = Field(None, description="Listing status, e.g. ACTIVE or COMPLETED")
    created_at: Optional[str] = Field(None, alias="createdAt")

    @property
    def has_coordinates(self) -> bool:
        """Only listings with both latitude and longitude reach the map layer.

        Out-of-range values are treated the same as missing ones.
        """
        if self.latitude is None or self.longitude is None:
            return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if not self.has_coordinates:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def is_active(self) -> bool:
        if self.is_completed:
            return False
        return (self.status or "").upper() != COMPLETED_STATUS


class ListingsResponse(BaseModel):
    """Listing service response envelope."""
    success: bool = Field(True, description="Service-side success flag")
    data: Optional[list[Listing]] = Field(None, description="Listings, null when none")
    message: Optional[str] = Field(None, description="Service message")

    @property
    def listings(self) -> list[Listing]:
        return self.data or []


class ListingResponse(BaseModel):
    """Single listing response envelope."""
    success: bool = True
    data: Optional[Listing] = None
    message: Optional[str] = None
