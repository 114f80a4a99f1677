"""Viewport and coordinate models."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """Geographic coordinate in decimal degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")


class CoordinateSpan(BaseModel):
    """Visible extent of a viewport in degrees."""
    model_config = ConfigDict(frozen=True)

    latitude_delta: float = Field(..., ge=0.0, description="Latitude span in degrees")
    longitude_delta: float = Field(..., ge=0.0, description="Longitude span in degrees")


class ViewportRegion(BaseModel):
    """Currently visible map extent: a center plus a span."""
    model_config = ConfigDict(frozen=True)

    center: Coordinate
    span: CoordinateSpan

    @classmethod
    def around(cls, latitude: float, longitude: float, delta: float) -> "ViewportRegion":
        """Square region of ``delta`` degrees centered on a point."""
        return cls(
            center=Coordinate(latitude=latitude, longitude=longitude),
            span=CoordinateSpan(latitude_delta=delta, longitude_delta=delta),
        )

    @property
    def is_degenerate(self) -> bool:
        return self.span.latitude_delta <= 0 or self.span.longitude_delta <= 0


class BoundingBox(BaseModel):
    """Query bounds sent to the listing service."""
    model_config = ConfigDict(frozen=True)

    min_lat: float = Field(..., ge=-90.0, le=90.0)
    max_lat: float = Field(..., ge=-90.0, le=90.0)
    min_lon: float = Field(..., ge=-180.0, le=180.0)
    max_lon: float = Field(..., ge=-180.0, le=180.0)

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.min_lat <= coordinate.latitude <= self.max_lat
            and self.min_lon <= coordinate.longitude <= self.max_lon
        )

    def to_query_params(self) -> dict[str, str]:
        """Query parameters understood by ``GET /api/listings``."""
        return {
            "minLat": str(self.min_lat),
            "maxLat": str(self.max_lat),
            "minLon": str(self.min_lon),
            "maxLon": str(self.max_lon),
        }
