"""Map session - listing set, viewport and clustering state for one map screen."""

from typing import Optional

from src.models.cluster import ListingCluster
from src.models.listing import Listing
from src.models.viewport import Coordinate, CoordinateSpan, ViewportRegion
from src.services.cluster_engine import compute_clusters, zoom_to_cluster
from src.services.clustering_policy import ClusteringPolicy
from src.services.listing_service import ListingService
from src.services.viewport_debouncer import ViewportQueryDebouncer
from src.utils.logging import get_structured_logger
from src.utils.map_config import MapConfig

logger = get_structured_logger(__name__)


class MapSession:
    """
    Owns everything the map layer needs between renders.

    Viewport changes feed the clustering policy and the debounced fetch;
    ``clusters()`` is recomputed from scratch from the current listings,
    viewport and policy state.
    """

    def __init__(
        self,
        service: ListingService,
        policy: Optional[ClusteringPolicy] = None,
        debounce_seconds: Optional[float] = None,
        expansion_factor: Optional[float] = None,
    ):
        self.service = service
        self.policy = policy or ClusteringPolicy()
        self.viewport: Optional[ViewportRegion] = None
        self.listings: list[Listing] = []
        self.debouncer = ViewportQueryDebouncer(
            fetch=service.query,
            on_listings=self._apply_listings,
            delay_seconds=debounce_seconds,
            expansion_factor=expansion_factor,
        )

    @property
    def clustering_enabled(self) -> bool:
        return self.policy.enabled

    def _apply_listings(self, listings: list[Listing]) -> None:
        active = [listing for listing in listings if listing.is_active]
        dropped = len(listings) - len(active)
        self.listings = active
        if dropped:
            logger.debug("Completed listings hidden", hidden_count=dropped)

    async def on_viewport_settled(self, region: ViewportRegion) -> None:
        """Camera stopped moving: update clustering state and schedule a fetch."""
        self.viewport = region
        self.policy.update(region)
        await self.debouncer.schedule(region)

    def clusters(self) -> list[ListingCluster]:
        return compute_clusters(self.listings, self.viewport, self.policy.enabled)

    async def center_on(self, coordinate: Coordinate, delta: Optional[float] = None) -> ViewportRegion:
        """Settle on a square region around ``coordinate`` (e.g. the user's location)."""
        delta = MapConfig.DEFAULT_VIEWPORT_DELTA if delta is None else delta
        region = ViewportRegion.around(coordinate.latitude, coordinate.longitude, delta)
        await self.on_viewport_settled(region)
        return region

    async def focus_on(self, listing: Listing) -> Optional[ViewportRegion]:
        """Center on a listing while keeping the current zoom level."""
        coordinate = listing.coordinate
        if coordinate is None:
            return None

        if self.viewport is not None:
            span = self.viewport.span
        else:
            delta = MapConfig.DEFAULT_VIEWPORT_DELTA
            span = CoordinateSpan(latitude_delta=delta, longitude_delta=delta)

        region = ViewportRegion(center=coordinate, span=span)
        await self.on_viewport_settled(region)
        return region

    async def zoom_to(self, cluster: ListingCluster) -> Optional[ViewportRegion]:
        """Zoom in on a tapped cluster badge."""
        if self.viewport is None:
            return None
        region = zoom_to_cluster(cluster, self.viewport)
        await self.on_viewport_settled(region)
        return region

    async def wait_for_listings(self) -> None:
        await self.debouncer.wait()

    async def close(self) -> None:
        """Tear down: pending and in-flight fetches never touch the listing set."""
        await self.debouncer.close()
        logger.debug("Map session closed", listings_count=len(self.listings))
