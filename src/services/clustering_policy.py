"""Clustering on/off decision with hysteresis."""

from typing import Optional, Union

from src.models.viewport import CoordinateSpan, ViewportRegion
from src.utils.errors import ConfigurationError
from src.utils.logging import get_structured_logger
from src.utils.map_config import MapConfig

logger = get_structured_logger(__name__)


class ClusteringPolicy:
    """
    Decide whether the map buckets listings or spreads them.

    Clustering turns off once both spans are at or below
    ``disable_threshold`` and turns back on once either span reaches
    ``enable_threshold``. Spans between the two thresholds keep the current
    state, so a slow zoom around one value does not flicker.
    """

    def __init__(
        self,
        disable_threshold: Optional[float] = None,
        enable_threshold: Optional[float] = None,
        enabled: bool = True,
    ):
        self.disable_threshold = (
            MapConfig.CLUSTERING_DISABLE_SPAN if disable_threshold is None else disable_threshold
        )
        self.enable_threshold = (
            MapConfig.CLUSTERING_ENABLE_SPAN if enable_threshold is None else enable_threshold
        )
        if self.enable_threshold <= self.disable_threshold:
            raise ConfigurationError(
                f"enable_threshold ({self.enable_threshold}) must be greater than "
                f"disable_threshold ({self.disable_threshold})"
            )
        self.enabled = enabled

    def update(self, region: Union[ViewportRegion, CoordinateSpan]) -> bool:
        """Apply a settled viewport and return the resulting state."""
        span = region.span if isinstance(region, ViewportRegion) else region
        lat_delta, lon_delta = span.latitude_delta, span.longitude_delta

        if self.enabled:
            if lat_delta <= self.disable_threshold and lon_delta <= self.disable_threshold:
                self.enabled = False
                logger.info(
                    "Clustering disabled",
                    latitude_delta=lat_delta,
                    longitude_delta=lon_delta,
                    disable_threshold=self.disable_threshold
                )
        elif lat_delta >= self.enable_threshold or lon_delta >= self.enable_threshold:
            self.enabled = True
            logger.info(
                "Clustering enabled",
                latitude_delta=lat_delta,
                longitude_delta=lon_delta,
                enable_threshold=self.enable_threshold
            )

        return self.enabled
