"""Geometry helpers - degree/meter conversion, query bounds and distances.

All conversions use a flat-earth approximation (1 degree of latitude is
111 km) which is accurate enough for marker placement at city scale.
"""

import math

from src.models.viewport import BoundingBox, Coordinate, ViewportRegion
from src.utils.errors import ConfigurationError

METERS_PER_DEGREE_LAT = 111_000.0
# Floor for cos(latitude) so longitude degrees never blow up near the poles
MIN_LON_SCALE = 0.1
EARTH_RADIUS_METERS = 6_371_000.0


def meters_per_degree_lon(latitude: float) -> float:
    return METERS_PER_DEGREE_LAT * max(math.cos(math.radians(latitude)), MIN_LON_SCALE)


def meters_to_degrees(meters: float, latitude: float) -> tuple[float, float]:
    """Convert a distance in meters to (latitude, longitude) degree offsets at ``latitude``."""
    return meters / METERS_PER_DEGREE_LAT, meters / meters_per_degree_lon(latitude)


def offset_coordinate(base: Coordinate, meters: float, angle: float) -> Coordinate:
    """
    Move ``base`` by ``meters`` in direction ``angle`` (radians, 0 is north,
    pi/2 is east). The result is clamped/wrapped into valid ranges.
    """
    lat_degrees, lon_degrees = meters_to_degrees(meters, base.latitude)

    latitude = min(max(base.latitude + lat_degrees * math.cos(angle), -90.0), 90.0)
    longitude = base.longitude + lon_degrees * math.sin(angle)
    if longitude > 180.0:
        longitude -= 360.0
    elif longitude < -180.0:
        longitude += 360.0
    return Coordinate(latitude=latitude, longitude=longitude)


def query_bounds(region: ViewportRegion, expansion_factor: float) -> BoundingBox:
    """
    Bounding box for a listing query around ``region``.

    The visible span is multiplied by ``expansion_factor`` around the center
    so small follow-up pans stay inside already fetched data. The box is
    clamped to valid latitude and longitude ranges.
    """
    if expansion_factor <= 0:
        raise ConfigurationError(f"expansion_factor must be positive, got {expansion_factor}")

    half_lat = region.span.latitude_delta / 2 * expansion_factor
    half_lon = region.span.longitude_delta / 2 * expansion_factor
    center = region.center

    return BoundingBox(
        min_lat=max(center.latitude - half_lat, -90.0),
        max_lat=min(center.latitude + half_lat, 90.0),
        min_lon=max(center.longitude - half_lon, -180.0),
        max_lon=min(center.longitude + half_lon, 180.0),
    )


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two coordinates."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def format_distance(meters: float) -> str:
    """Human readable distance: meters under 1 km, one decimal under 10 km."""
    if meters < 1000:
        return f"{int(round(meters))} m"

    km = meters / 1000
    if km < 10:
        return f"{km:.1f} km"
    return f"{int(round(km))} km"
