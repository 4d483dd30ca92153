from dataclasses import dataclass

import structlog

from listing_scraper.application.interfaces.job_store import JobStore
from listing_scraper.domain.entities.job import Job

logger = structlog.get_logger(__name__)


class JobSubmissionError(Exception):
    """Base class for rejected scrape submissions."""


class MissingOriginUrlError(JobSubmissionError):
    def __init__(self) -> None:
        super().__init__("Missing originUrl")


class InvalidPageLimitError(JobSubmissionError):
    def __init__(self, limit_pages: int) -> None:
        self.limit_pages = limit_pages
        super().__init__(f"limit_pages must be a positive integer, got {limit_pages}")


@dataclass
class SubmitScrapeJobInput:
    origin_url: str | None
    limit_pages: int | None = None


@dataclass
class SubmitScrapeJobOutput:
    job_id: str
    origin_url: str
    max_pages: int


class SubmitScrapeJob:
    """
    Use case: Validate a scrape request and register it as a queued Job.

    Running the job is left to the caller so the request can return at once.
    """

    def __init__(self, job_store: JobStore, default_limit_pages: int = 1) -> None:
        self._job_store = job_store
        self._default_limit_pages = default_limit_pages

    def execute(self, input_data: SubmitScrapeJobInput) -> SubmitScrapeJobOutput:
        origin_url = (input_data.origin_url or "").strip()
        if not origin_url:
            raise MissingOriginUrlError()

        # 0 and null both fall back to the default
        max_pages = input_data.limit_pages or self._default_limit_pages
        if max_pages < 1:
            raise InvalidPageLimitError(max_pages)

        job = Job(origin_url=origin_url, max_pages=max_pages)
        self._job_store.add(job)

        logger.info("job_submitted", job_id=job.id, origin_url=origin_url, max_pages=max_pages)
        return SubmitScrapeJobOutput(job_id=job.id, origin_url=origin_url, max_pages=max_pages)
