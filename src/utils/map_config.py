"""Map engine tunables with environment variable support."""

import os
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    value = os.environ.get(name, "").strip()
    return float(value) if value else None


class MapConfig:
    """Centralized map configuration.

    Every value here is only a default: components accept explicit
    parameters and read these when none are given.
    """

    # Listing service
    LISTINGS_API_BASE_URL = os.environ.get("LISTINGS_API_BASE_URL", "").strip() or "http://localhost:8080"
    # None keeps the httpx client default
    LISTINGS_REQUEST_TIMEOUT_SECONDS = _optional_float("LISTINGS_REQUEST_TIMEOUT_SECONDS")

    # Viewport query debouncing
    VIEWPORT_DEBOUNCE_SECONDS = float(os.environ.get("VIEWPORT_DEBOUNCE_SECONDS", "0.5"))
    VIEWPORT_EXPANSION_FACTOR = float(os.environ.get("VIEWPORT_EXPANSION_FACTOR", "5.0"))
    DEFAULT_VIEWPORT_DELTA = float(os.environ.get("DEFAULT_VIEWPORT_DELTA", "0.04"))

    # Bucketing
    CLUSTER_GRID_DIVISIONS = int(os.environ.get("CLUSTER_GRID_DIVISIONS", "8"))
    CLUSTER_MIN_CELL_DEGREES = float(os.environ.get("CLUSTER_MIN_CELL_DEGREES", "0.002"))

    # Clustering hysteresis (degrees of span)
    CLUSTERING_DISABLE_SPAN = float(os.environ.get("CLUSTERING_DISABLE_SPAN", "0.02"))
    CLUSTERING_ENABLE_SPAN = float(os.environ.get("CLUSTERING_ENABLE_SPAN", "0.03"))
