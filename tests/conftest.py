import pytest

from listing_scraper.application.scraping.paginator import Paginator
from listing_scraper.infrastructure.job_store.in_memory_job_store import InMemoryJobStore


@pytest.fixture()
def paginator() -> Paginator:
    return Paginator(settle_delay_ms=0, pagination_delay_ms=0)


@pytest.fixture()
def job_store() -> InMemoryJobStore:
    return InMemoryJobStore()
