from dataclasses import dataclass

import structlog

from listing_scraper.application.interfaces.job_store import JobStore
from listing_scraper.application.interfaces.page_driver import PageDriver, PageDriverFactory
from listing_scraper.application.scraping.deduplicator import dedupe_by_link
from listing_scraper.application.scraping.paginator import Paginator

logger = structlog.get_logger(__name__)


@dataclass
class RunScrapeJobInput:
    job_id: str
    origin_url: str
    max_pages: int


class RunScrapeJob:
    """
    Use case: Execute one scrape job end to end.

    Moves the job through running → completed | failed, writing every change
    back through the JobStore. Errors never escape: they become the job's
    failed state. The browser session is closed on every path.
    """

    def __init__(
        self,
        job_store: JobStore,
        driver_factory: PageDriverFactory,
        paginator: Paginator,
    ) -> None:
        self._job_store = job_store
        self._driver_factory = driver_factory
        self._paginator = paginator

    async def execute(self, input_data: RunScrapeJobInput) -> None:
        job_id = input_data.job_id
        log = logger.bind(job_id=job_id)

        job = self._job_store.require(job_id)
        job.start()
        self._job_store.put(job)
        log.info("job_started", origin_url=input_data.origin_url, max_pages=input_data.max_pages)

        try:
            driver = await self._driver_factory.open()
        except Exception as exc:
            log.exception("browser_session_failed")
            self._fail(job_id, exc)
            return

        try:
            listings = await self._paginator.paginate(
                driver,
                input_data.origin_url,
                input_data.max_pages,
                on_page=lambda page, total: self._record_progress(job_id, page, total),
            )
            unique_listings = dedupe_by_link(listings)

            job = self._job_store.require(job_id)
            job.complete(unique_listings)
            self._job_store.put(job)
            log.info("job_completed", listings=len(unique_listings), scraped=len(listings))
        except Exception as exc:
            log.exception("job_failed")
            self._fail(job_id, exc)
        finally:
            await self._close(driver, job_id)

    def _record_progress(self, job_id: str, page: int, total_pages: int) -> None:
        job = self._job_store.require(job_id)
        job.record_progress(page, total_pages)
        self._job_store.put(job)

    def _fail(self, job_id: str, exc: Exception) -> None:
        job = self._job_store.require(job_id)
        job.fail(str(exc) or type(exc).__name__)
        self._job_store.put(job)

    async def _close(self, driver: PageDriver, job_id: str) -> None:
        try:
            await driver.close()
        except Exception:
            logger.exception("browser_session_close_failed", job_id=job_id)
