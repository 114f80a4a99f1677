"""Cluster model - derived map markers, recomputed on every render pass."""

from pydantic import BaseModel, ConfigDict, Field

from src.models.listing import Listing
from src.models.viewport import Coordinate


class ListingCluster(BaseModel):
    """One map marker covering one or more listings."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Bucket key or singleton listing key")
    coordinate: Coordinate = Field(..., description="Marker position")
    listings: tuple[Listing, ...] = Field(..., min_length=1, description="Member listings, ordered")

    @property
    def count(self) -> int:
        return len(self.listings)

    @property
    def is_single(self) -> bool:
        """Size-1 clusters are drawn as plain listing markers."""
        return len(self.listings) == 1

    @property
    def listing_ids(self) -> list[int | None]:
        return [listing.id for listing in self.listings]
