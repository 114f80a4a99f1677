"""Listing service client - async HTTP wrapper around the marketplace API."""

from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from src.models.listing import Listing, ListingResponse, ListingsResponse
from src.models.viewport import BoundingBox
from src.utils.errors import ListingDecodeError, ListingServiceError
from src.utils.logging import get_structured_logger, log_timing, mask_user_id
from src.utils.map_config import MapConfig

logger = get_structured_logger(__name__)

LISTINGS_PATH = "/api/listings"


class ListingService:
    """Async context manager for the listing API.

    The underlying ``httpx.AsyncClient`` is created lazily so one instance
    can be shared by a whole map session.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or MapConfig.LISTINGS_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else MapConfig.LISTINGS_REQUEST_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs = {"base_url": self.base_url, "transport": self._transport}
            # Only override the httpx default timeout when one is configured
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(**kwargs)
            logger.info("Listing service client initialized", base_url=self.base_url)
        return self._client

    async def __aenter__(self) -> "ListingService":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type and issubclass(exc_type, ListingServiceError):
            logger.error(
                "Listing service operation error",
                error=str(exc_val),
                error_type=exc_type.__name__
            )
        await self.aclose()
        return False

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Listing service client closed")

    async def _get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        try:
            response = await self._get_client().get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ListingServiceError(
                f"Listing service returned {e.response.status_code} for {path}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ListingServiceError(f"Listing service request failed for {path}: {e}") from e
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[BaseModel]) -> BaseModel:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise ListingDecodeError(
                f"Could not decode listing service response: {e.error_count()} errors"
            ) from e

    async def query(self, bounds: Optional[BoundingBox] = None) -> list[Listing]:
        """
        Fetch listings inside ``bounds``.

        Without bounds the service returns its unfiltered listing set.
        """
        params = bounds.to_query_params() if bounds is not None else None

        with log_timing("query_listings", logger=logger, has_bounds=bounds is not None):
            response = await self._get(LISTINGS_PATH, params=params)
            envelope = self._decode(response, ListingsResponse)

        listings = envelope.listings
        logger.debug(
            "Listings fetched",
            listings_count=len(listings),
            min_lat=bounds.min_lat if bounds else None,
            max_lat=bounds.max_lat if bounds else None,
            min_lon=bounds.min_lon if bounds else None,
            max_lon=bounds.max_lon if bounds else None
        )
        return listings

    async def get_listing(self, listing_id: int) -> Optional[Listing]:
        """Fetch a single listing, e.g. to open a listing from a notification."""
        response = await self._get(f"{LISTINGS_PATH}/{listing_id}")
        return self._decode(response, ListingResponse).data

    async def get_user_listings(self, user_id: str) -> list[Listing]:
        """Fetch all listings owned by ``user_id``."""
        response = await self._get(f"{LISTINGS_PATH}/user/{user_id}")
        listings = self._decode(response, ListingsResponse).listings
        logger.debug(
            "User listings fetched",
            user_id=mask_user_id(user_id),
            listings_count=len(listings)
        )
        return listings
