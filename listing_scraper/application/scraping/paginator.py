import asyncio
from collections.abc import Callable, Iterable

import structlog

from listing_scraper.application.interfaces.page_driver import PageDriver, ProbeTimeoutError
from listing_scraper.application.scraping.extractor import (
    DEFAULT_EXCLUDED_MARKERS,
    extract_listings,
)
from listing_scraper.config import Settings
from listing_scraper.domain.entities.listing_record import ListingRecord

logger = structlog.get_logger(__name__)

PageCallback = Callable[[int, int], None]


class Paginator:
    """
    Walks up to ``max_pages`` result pages through a PageDriver, extracting
    listings from each one.

    Stops early, without error, when a page has no "next" control.
    """

    def __init__(
        self,
        *,
        navigation_timeout_ms: int = 60_000,
        probe_selector: str = "a",
        probe_timeout_ms: int = 5_000,
        settle_delay_ms: int = 2_000,
        pagination_delay_ms: int = 1_500,
        next_page_label: str = "»",
        excluded_markers: Iterable[str] = DEFAULT_EXCLUDED_MARKERS,
    ) -> None:
        self._navigation_timeout_ms = navigation_timeout_ms
        self._probe_selector = probe_selector
        self._probe_timeout_ms = probe_timeout_ms
        self._settle_delay_ms = settle_delay_ms
        self._pagination_delay_ms = pagination_delay_ms
        self._next_page_label = next_page_label
        self._excluded_markers = tuple(excluded_markers)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Paginator":
        return cls(
            navigation_timeout_ms=settings.navigation_timeout_ms,
            probe_selector=settings.probe_selector,
            probe_timeout_ms=settings.probe_timeout_ms,
            settle_delay_ms=settings.settle_delay_ms,
            pagination_delay_ms=settings.pagination_delay_ms,
            next_page_label=settings.next_page_label,
            excluded_markers=settings.excluded_markers,
        )

    async def paginate(
        self,
        driver: PageDriver,
        start_url: str,
        max_pages: int,
        on_page: PageCallback | None = None,
    ) -> list[ListingRecord]:
        """Return every listing found, in page order and not deduplicated."""
        await driver.navigate(start_url, self._navigation_timeout_ms)

        listings: list[ListingRecord] = []
        for page in range(1, max_pages + 1):
            logger.info("scraping_page", url=start_url, page=page, total_pages=max_pages)

            try:
                await driver.wait_for(self._probe_selector, self._probe_timeout_ms)
            except ProbeTimeoutError:
                logger.warning(
                    "probe_selector_not_found",
                    selector=self._probe_selector,
                    page=page,
                )
            await _pause(self._settle_delay_ms)

            page_listings = extract_listings(
                await driver.collect_anchors(), self._excluded_markers
            )
            listings.extend(page_listings)
            logger.info("page_scraped", page=page, listings=len(page_listings))

            if on_page is not None:
                on_page(page, max_pages)

            if page < max_pages:
                control = await driver.find_control(self._next_page_label)
                if control is None:
                    logger.info("no_more_pages", page=page)
                    break
                await driver.activate(control)
                await _pause(self._pagination_delay_ms)

        return listings


async def _pause(delay_ms: int) -> None:
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
