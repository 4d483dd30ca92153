"""Unit tests for the submission and runner use cases."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from listing_scraper.application.interfaces.job_store import JobStore
from listing_scraper.application.interfaces.page_driver import NavigationError
from listing_scraper.application.scraping.paginator import Paginator
from listing_scraper.application.use_cases.run_scrape_job import RunScrapeJob, RunScrapeJobInput
from listing_scraper.application.use_cases.submit_scrape_job import (
    InvalidPageLimitError,
    MissingOriginUrlError,
    SubmitScrapeJob,
    SubmitScrapeJobInput,
)
from listing_scraper.domain.enums.job_status import JobStatus
from listing_scraper.infrastructure.job_store.in_memory_job_store import InMemoryJobStore
from tests.fakes import FakeDriverFactory, FakePage, FakePageDriver, listing_anchor, three_page_fixture

ORIGIN_URL = "https://example.test/listings"


def _submit(store: JobStore, limit_pages: int | None = None) -> RunScrapeJobInput:
    result = SubmitScrapeJob(store).execute(
        SubmitScrapeJobInput(origin_url=ORIGIN_URL, limit_pages=limit_pages)
    )
    return RunScrapeJobInput(
        job_id=result.job_id, origin_url=result.origin_url, max_pages=result.max_pages
    )


class TestSubmitScrapeJob:
    def test_creates_queued_job(self, job_store: InMemoryJobStore) -> None:
        result = SubmitScrapeJob(job_store).execute(
            SubmitScrapeJobInput(origin_url=ORIGIN_URL, limit_pages=3)
        )
        job = job_store.require(result.job_id)
        assert job.status == JobStatus.QUEUED
        assert job.max_pages == 3
        assert job.origin_url == ORIGIN_URL

    def test_job_ids_are_fresh(self, job_store: InMemoryJobStore) -> None:
        use_case = SubmitScrapeJob(job_store)
        ids = {use_case.execute(SubmitScrapeJobInput(origin_url=ORIGIN_URL)).job_id for _ in range(50)}
        assert len(ids) == 50

    @pytest.mark.parametrize("limit_pages", [None, 0])
    def test_defaults_page_limit(self, job_store: InMemoryJobStore, limit_pages: int | None) -> None:
        result = SubmitScrapeJob(job_store, default_limit_pages=1).execute(
            SubmitScrapeJobInput(origin_url=ORIGIN_URL, limit_pages=limit_pages)
        )
        assert result.max_pages == 1

    @pytest.mark.parametrize("origin_url", [None, "", "   "])
    def test_rejects_missing_url(self, job_store: InMemoryJobStore, origin_url: str | None) -> None:
        with pytest.raises(MissingOriginUrlError):
            SubmitScrapeJob(job_store).execute(SubmitScrapeJobInput(origin_url=origin_url))
        assert job_store.list_all() == []

    def test_rejects_negative_page_limit(self, job_store: InMemoryJobStore) -> None:
        with pytest.raises(InvalidPageLimitError):
            SubmitScrapeJob(job_store).execute(
                SubmitScrapeJobInput(origin_url=ORIGIN_URL, limit_pages=-2)
            )
        assert job_store.list_all() == []


class TestRunScrapeJob:
    @pytest.mark.asyncio
    async def test_completes_with_unique_listings(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        driver = FakePageDriver(three_page_fixture())
        run_input = _submit(job_store, limit_pages=3)

        await RunScrapeJob(job_store, FakeDriverFactory(driver), paginator).execute(run_input)

        job = job_store.require(run_input.job_id)
        assert job.status == JobStatus.COMPLETED
        assert job.progress == 100
        assert job.error is None
        assert job.completed_at is not None
        assert [r.link.rsplit("/", 1)[-1] for r in job.results] == ["1", "2", "3", "4"]
        # Listing 2 reappears on page 2 with a new price
        assert job.results[1].price == "310,000"
        assert job.results[3].area == "N/A"
        assert driver.closed is True

    @pytest.mark.asyncio
    async def test_progress_is_written_per_page(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        run_input = _submit(job_store, limit_pages=3)
        observed: list[tuple[JobStatus, int, int | None]] = []
        original_put = job_store.put

        def recording_put(job):  # type: ignore[no-untyped-def]
            observed.append((job.status, job.progress, job.current_page))
            original_put(job)

        job_store.put = recording_put  # type: ignore[method-assign]
        driver = FakePageDriver(three_page_fixture())

        await RunScrapeJob(job_store, FakeDriverFactory(driver), paginator).execute(run_input)

        assert observed == [
            (JobStatus.RUNNING, 0, None),
            (JobStatus.RUNNING, 33, 1),
            (JobStatus.RUNNING, 67, 2),
            (JobStatus.RUNNING, 100, 3),
            (JobStatus.COMPLETED, 100, 3),
        ]
        progress = [p for _, p, _ in observed]
        assert progress == sorted(progress)

    @pytest.mark.asyncio
    async def test_early_stop_keeps_requested_total(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        pages = [FakePage(anchors=[listing_anchor(1)]), FakePage(anchors=[listing_anchor(2)], has_next=False)]
        run_input = _submit(job_store, limit_pages=5)

        await RunScrapeJob(job_store, FakeDriverFactory(FakePageDriver(pages)), paginator).execute(run_input)

        job = job_store.require(run_input.job_id)
        assert job.status == JobStatus.COMPLETED
        assert job.current_page == 2
        assert job.total_pages == 5
        assert len(job.results) == 2

    @pytest.mark.asyncio
    async def test_session_failure_fails_job(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        run_input = _submit(job_store)
        factory = FakeDriverFactory(error=RuntimeError("Executable doesn't exist"))

        await RunScrapeJob(job_store, factory, paginator).execute(run_input)

        job = job_store.require(run_input.job_id)
        assert job.status == JobStatus.FAILED
        assert job.error == "Executable doesn't exist"
        assert job.progress == 0

    @pytest.mark.asyncio
    async def test_navigation_failure_discards_partial_results(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        driver = FakePageDriver(three_page_fixture(), navigation_error=NavigationError("net::ERR_NAME_NOT_RESOLVED"))
        run_input = _submit(job_store, limit_pages=3)

        await RunScrapeJob(job_store, FakeDriverFactory(driver), paginator).execute(run_input)

        job = job_store.require(run_input.job_id)
        assert job.status == JobStatus.FAILED
        assert job.error == "net::ERR_NAME_NOT_RESOLVED"
        assert job.progress == 0
        assert job.results == []
        assert driver.closed is True

    @pytest.mark.asyncio
    async def test_extraction_failure_after_progress(
        self, job_store: InMemoryJobStore
    ) -> None:
        paginator = MagicMock()

        async def paginate(driver, url, max_pages, on_page=None):  # type: ignore[no-untyped-def]
            on_page(1, max_pages)
            raise ValueError()

        paginator.paginate = AsyncMock(side_effect=paginate)
        driver = FakePageDriver(three_page_fixture())
        run_input = _submit(job_store, limit_pages=2)

        await RunScrapeJob(job_store, FakeDriverFactory(driver), paginator).execute(run_input)

        job = job_store.require(run_input.job_id)
        assert job.status == JobStatus.FAILED
        assert job.error == "ValueError"
        assert job.progress == 0
        assert driver.closed is True

    @pytest.mark.asyncio
    async def test_close_failure_does_not_change_outcome(
        self, job_store: InMemoryJobStore, paginator: Paginator
    ) -> None:
        driver = FakePageDriver(three_page_fixture(), close_error=RuntimeError("browser gone"))
        run_input = _submit(job_store)

        await RunScrapeJob(job_store, FakeDriverFactory(driver), paginator).execute(run_input)

        assert job_store.require(run_input.job_id).status == JobStatus.COMPLETED
