"""Error handling utilities."""


class MapEngineError(Exception):
    """Base exception for the listing map engine."""
    pass


class ConfigurationError(MapEngineError):
    """Invalid tunable (threshold, factor, delay) supplied."""
    pass


class InvalidViewportError(MapEngineError):
    """Viewport parameters could not be turned into a region."""
    pass


class ListingServiceError(MapEngineError):
    """Listing service request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ListingDecodeError(ListingServiceError):
    """Listing service returned a payload that could not be decoded."""
    pass
