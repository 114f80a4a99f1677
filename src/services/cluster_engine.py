"""Cluster computation entry point used by the map layer on every render pass."""

from typing import Iterable, Optional

from src.models.cluster import ListingCluster
from src.models.listing import Listing
from src.models.viewport import CoordinateSpan, ViewportRegion
from src.services.cluster_bucketing import bucket_listings
from src.services.ring_spreader import spread_listings
from src.utils.logging import get_structured_logger, timed
from src.utils.map_config import MapConfig

logger = get_structured_logger(__name__)


@timed("compute_clusters")
def compute_clusters(
    listings: Iterable[Listing],
    viewport: Optional[ViewportRegion],
    clustering_enabled: bool,
) -> list[ListingCluster]:
    """
    Turn the current listing set into map markers.

    Pure: the same inputs always give the same clusters. Listings without
    coordinates never appear in the output; every other listing appears in
    exactly one cluster. Grid bucketing is used when clustering is enabled
    and a viewport is known, the ring layout otherwise.
    """
    items = [listing for listing in listings if listing.has_coordinates]
    if not items:
        return []

    if viewport is None or not clustering_enabled:
        clusters = spread_listings(items)
        mode = "spread"
    else:
        clusters = bucket_listings(items, viewport)
        mode = "bucket"

    logger.debug(
        "Clusters computed",
        mode=mode,
        listings_count=len(items),
        clusters_count=len(clusters)
    )
    return clusters


def zoom_to_cluster(
    cluster: ListingCluster,
    region: ViewportRegion,
    min_span: Optional[float] = None,
) -> ViewportRegion:
    """Region centered on ``cluster`` with half the current span (floored)."""
    if min_span is None:
        min_span = MapConfig.CLUSTER_MIN_CELL_DEGREES

    return ViewportRegion(
        center=cluster.coordinate,
        span=CoordinateSpan(
            latitude_delta=max(region.span.latitude_delta / 2, min_span),
            longitude_delta=max(region.span.longitude_delta / 2, min_span),
        ),
    )
