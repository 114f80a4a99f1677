"""Cluster endpoint - listings around a viewport, grouped into map markers."""

import json
import asyncio
from typing import Optional

from pydantic import ValidationError

from src.models.cluster import ListingCluster
from src.models.viewport import ViewportRegion, Coordinate, CoordinateSpan
from src.services.cluster_engine import compute_clusters
from src.services.clustering_policy import ClusteringPolicy
from src.services.geo import query_bounds
from src.services.listing_service import ListingService
from src.utils.errors import InvalidViewportError, ListingServiceError
from src.utils.logging import correlation_context, get_structured_logger, setup_logging
from src.utils.map_config import MapConfig

setup_logging()
logger = get_structured_logger(__name__)


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body)
    }


def parse_viewport(query_params: dict) -> ViewportRegion:
    """Build a region from ``lat``, ``lon``, ``latDelta`` and ``lonDelta``."""
    try:
        default_delta = str(MapConfig.DEFAULT_VIEWPORT_DELTA)
        return ViewportRegion(
            center=Coordinate(
                latitude=float(query_params["lat"]),
                longitude=float(query_params["lon"])
            ),
            span=CoordinateSpan(
                latitude_delta=float(query_params.get("latDelta", default_delta)),
                longitude_delta=float(query_params.get("lonDelta", default_delta))
            )
        )
    except KeyError as e:
        raise InvalidViewportError(f"Missing query parameter: {e.args[0]}") from e
    except (TypeError, ValueError, ValidationError) as e:
        raise InvalidViewportError(f"Invalid viewport parameters: {e}") from e


def parse_clustering(value: Optional[str], region: ViewportRegion) -> bool:
    """Explicit ``clustering`` flag, otherwise a fresh policy decision for the span."""
    if value is None or value == "":
        return ClusteringPolicy().update(region)
    return value.lower() in ("1", "true", "yes")


def serialize_cluster(cluster: ListingCluster) -> dict:
    return {
        "id": cluster.id,
        "latitude": cluster.coordinate.latitude,
        "longitude": cluster.coordinate.longitude,
        "count": cluster.count,
        "listingIds": cluster.listing_ids
    }


async def fetch_clusters(region: ViewportRegion, clustering_enabled: bool) -> list[ListingCluster]:
    bounds = query_bounds(region, MapConfig.VIEWPORT_EXPANSION_FACTOR)
    async with ListingService() as service:
        listings = await service.query(bounds)
    active = [listing for listing in listings if listing.is_active]
    return compute_clusters(active, region, clustering_enabled)


def handler(request):
    """
    Compute clusters for a viewport.

    Query params: ``lat``, ``lon``, ``latDelta``, ``lonDelta`` and optional
    ``clustering`` (``true``/``false``).
    """
    with correlation_context():
        try:
            query_params = request.get("query", {}) or {}
            region = parse_viewport(query_params)
            clustering_enabled = parse_clustering(query_params.get("clustering"), region)

            clusters = asyncio.run(fetch_clusters(region, clustering_enabled))

            return _response(200, {
                "ok": True,
                "clustering": clustering_enabled,
                "clusters": [serialize_cluster(cluster) for cluster in clusters]
            })

        except InvalidViewportError as e:
            logger.warning("Rejected cluster request", error=str(e))
            return _response(400, {"error": str(e)})
        except ListingServiceError as e:
            logger.error("Listing service unavailable", error=str(e), exc_info=True)
            return _response(502, {"error": "listing service unavailable"})
        except Exception as e:
            logger.error("Error computing clusters", error=str(e), exc_info=True)
            return _response(500, {"error": "internal server error"})
