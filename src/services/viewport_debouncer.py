"""Viewport query debouncer - one listing fetch per settled pan/zoom burst."""

import asyncio
from typing import Awaitable, Callable, Optional

from src.models.listing import Listing
from src.models.viewport import BoundingBox, ViewportRegion
from src.services.geo import query_bounds
from src.utils.errors import ConfigurationError, ListingServiceError
from src.utils.logging import (
    correlation_context,
    generate_correlation_id,
    get_structured_logger,
)
from src.utils.map_config import MapConfig

logger = get_structured_logger(__name__)

FetchListings = Callable[[Optional[BoundingBox]], Awaitable[list[Listing]]]
ApplyListings = Callable[[list[Listing]], None]


class ViewportQueryDebouncer:
    """
    Delay listing fetches until the viewport stops moving.

    Every ``schedule`` call cancels the pending fetch and starts a new timer.
    Each scheduled fetch carries a generation number; its result is applied
    only if no newer fetch was scheduled meanwhile and the debouncer is not
    closed, so the last-scheduled fetch always wins over a slower, older one.
    """

    def __init__(
        self,
        fetch: FetchListings,
        on_listings: ApplyListings,
        delay_seconds: Optional[float] = None,
        expansion_factor: Optional[float] = None,
    ):
        self.delay_seconds = MapConfig.VIEWPORT_DEBOUNCE_SECONDS if delay_seconds is None else delay_seconds
        self.expansion_factor = (
            MapConfig.VIEWPORT_EXPANSION_FACTOR if expansion_factor is None else expansion_factor
        )
        if self.delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds must not be negative, got {self.delay_seconds}")
        if self.expansion_factor <= 0:
            raise ConfigurationError(f"expansion_factor must be positive, got {self.expansion_factor}")

        self._fetch = fetch
        self._on_listings = on_listings
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._closed = False
        logger.info(
            "ViewportQueryDebouncer initialized",
            debounce_delay_seconds=self.delay_seconds,
            expansion_factor=self.expansion_factor
        )

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    async def schedule(self, region: ViewportRegion) -> asyncio.Task:
        """Supersede any pending fetch with one for ``region``."""
        if self._closed:
            raise RuntimeError("ViewportQueryDebouncer is closed")

        self._generation += 1
        generation = self._generation

        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Debounce timer reset", generation=generation)

        self._task = asyncio.create_task(self._fetch_after_delay(region, generation))
        return self._task

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _fetch_after_delay(self, region: ViewportRegion, generation: int) -> None:
        await asyncio.sleep(self.delay_seconds)
        if not self._is_current(generation):
            return

        # Degenerate spans query without bounds
        bounds = None if region.is_degenerate else query_bounds(region, self.expansion_factor)

        with correlation_context(generate_correlation_id("viewport")):
            logger.debug(
                "Viewport settled, fetching listings",
                generation=generation,
                center_latitude=region.center.latitude,
                center_longitude=region.center.longitude,
                has_bounds=bounds is not None
            )
            try:
                listings = await self._fetch(bounds)
            except ListingServiceError as e:
                # Keep showing the previous listing set
                logger.error(
                    "Listing fetch failed",
                    generation=generation,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True
                )
                return
            except Exception as e:
                logger.error(
                    "Unexpected error fetching listings",
                    generation=generation,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True
                )
                return

            if not self._is_current(generation):
                logger.debug(
                    "Discarding superseded listing fetch",
                    generation=generation,
                    current_generation=self._generation,
                    closed=self._closed
                )
                return

            try:
                self._on_listings(listings)
            except Exception as e:
                logger.error(
                    "Error applying fetched listings",
                    generation=generation,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True
                )
                return

            logger.info(
                "Listings applied",
                generation=generation,
                listings_count=len(listings)
            )

    async def wait(self) -> None:
        """Wait for the most recently scheduled fetch to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def close(self) -> None:
        """Cancel pending work; any in-flight result is discarded."""
        self._closed = True
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        logger.debug("ViewportQueryDebouncer closed")
