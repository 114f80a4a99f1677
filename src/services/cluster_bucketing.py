"""Grid bucketing of listings for zoomed-out map views."""

import math
from typing import Iterable, Optional

from src.models.cluster import ListingCluster
from src.models.listing import Listing
from src.models.viewport import Coordinate, ViewportRegion
from src.utils.map_config import MapConfig

BucketKey = tuple[int, int]


def cell_size(region: ViewportRegion, divisions: int, min_cell_degrees: float) -> tuple[float, float]:
    """(latitude, longitude) cell size: span / divisions with a floor."""
    return (
        max(region.span.latitude_delta / divisions, min_cell_degrees),
        max(region.span.longitude_delta / divisions, min_cell_degrees),
    )


def bucket_key(latitude: float, longitude: float, lat_cell: float, lon_cell: float) -> BucketKey:
    return math.floor(latitude / lat_cell), math.floor(longitude / lon_cell)


def centroid(listings: Iterable[Listing]) -> Coordinate:
    """Unweighted per-axis mean of member coordinates."""
    members = list(listings)
    count = len(members)
    return Coordinate(
        latitude=sum(listing.latitude for listing in members) / count,
        longitude=sum(listing.longitude for listing in members) / count,
    )


def bucket_listings(
    listings: Iterable[Listing],
    region: ViewportRegion,
    divisions: Optional[int] = None,
    min_cell_degrees: Optional[float] = None,
) -> list[ListingCluster]:
    """
    Group listings that fall into the same grid cell.

    Cell size is derived from the viewport span (``span / divisions`` per
    axis) with ``min_cell_degrees`` as a floor so cells never collapse at
    extreme zoom. Listings without coordinates are skipped. Every occupied
    cell yields one cluster positioned at the members' centroid, including
    cells with a single listing.

    Clusters are returned in order of each cell's first listing.
    """
    divisions = divisions or MapConfig.CLUSTER_GRID_DIVISIONS
    if min_cell_degrees is None:
        min_cell_degrees = MapConfig.CLUSTER_MIN_CELL_DEGREES

    lat_cell, lon_cell = cell_size(region, divisions, min_cell_degrees)

    buckets: dict[BucketKey, list[Listing]] = {}
    for listing in listings:
        if not listing.has_coordinates:
            continue
        key = bucket_key(listing.latitude, listing.longitude, lat_cell, lon_cell)
        buckets.setdefault(key, []).append(listing)

    return [
        ListingCluster(
            id=f"{lat_index}_{lon_index}",
            coordinate=centroid(group),
            listings=tuple(group),
        )
        for (lat_index, lon_index), group in buckets.items()
    ]
