"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected, so the route handlers stay thin.
"""
from functools import lru_cache

from fastapi import Depends

from listing_scraper.application.interfaces.job_store import JobStore
from listing_scraper.application.interfaces.page_driver import PageDriverFactory
from listing_scraper.application.scraping.paginator import Paginator
from listing_scraper.application.use_cases.run_scrape_job import RunScrapeJob
from listing_scraper.application.use_cases.submit_scrape_job import SubmitScrapeJob
from listing_scraper.config import settings
from listing_scraper.infrastructure.browser.playwright_driver import PlaywrightSessionFactory
from listing_scraper.infrastructure.job_store.in_memory_job_store import InMemoryJobStore


# ---- Low-level dependencies ------------------------------------------------

@lru_cache
def get_job_store() -> JobStore:
    # One store for the whole process
    return InMemoryJobStore()


def get_driver_factory() -> PageDriverFactory:
    return PlaywrightSessionFactory()


def get_paginator() -> Paginator:
    return Paginator.from_settings(settings)


# ---- Use-case dependencies -------------------------------------------------

def get_submit_scrape_job_use_case(
    job_store: JobStore = Depends(get_job_store),
) -> SubmitScrapeJob:
    return SubmitScrapeJob(job_store, default_limit_pages=settings.default_limit_pages)


def get_run_scrape_job_use_case(
    job_store: JobStore = Depends(get_job_store),
    driver_factory: PageDriverFactory = Depends(get_driver_factory),
    paginator: Paginator = Depends(get_paginator),
) -> RunScrapeJob:
    return RunScrapeJob(job_store, driver_factory, paginator)
