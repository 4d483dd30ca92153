from fastapi import APIRouter, BackgroundTasks, Body, Depends, status

from listing_scraper.api.dependencies import (
    get_job_store,
    get_run_scrape_job_use_case,
    get_submit_scrape_job_use_case,
)
from listing_scraper.api.schemas.job_requests import ScrapeRequest
from listing_scraper.api.schemas.job_responses import (
    JobListResponse,
    JobProgressResponse,
    JobResultResponse,
    JobSummaryResponse,
    ListingResponse,
    ScrapeAcceptedResponse,
)
from listing_scraper.application.interfaces.job_store import JobStore
from listing_scraper.application.use_cases.run_scrape_job import RunScrapeJob, RunScrapeJobInput
from listing_scraper.application.use_cases.submit_scrape_job import (
    SubmitScrapeJob,
    SubmitScrapeJobInput,
)
from listing_scraper.domain.entities.job import Job

router = APIRouter(tags=["jobs"])


def _job_to_response(job: Job) -> JobProgressResponse | JobResultResponse:
    if not job.is_finished:
        return JobProgressResponse(
            job_id=job.id,
            status=job.status,
            progress=job.progress,
            current_page=job.current_page,
            total_pages=job.total_pages,
        )
    return JobResultResponse(
        job_id=job.id,
        status=job.status,
        progress=job.progress,
        count=len(job.results),
        data=[ListingResponse.model_validate(record) for record in job.results],
        error=job.error,
        completed_at=job.completed_at,
    )


@router.post(
    "/scrape",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ScrapeAcceptedResponse,
)
async def start_scrape(
    background: BackgroundTasks,
    submit: SubmitScrapeJob = Depends(get_submit_scrape_job_use_case),
    runner: RunScrapeJob = Depends(get_run_scrape_job_use_case),
    # A missing or empty body is treated like {}
    body: ScrapeRequest | None = Body(default=None),
) -> ScrapeAcceptedResponse:
    """Queue a scrape and return its job id without waiting for it to run."""
    if body is None:
        body = ScrapeRequest()
    result = submit.execute(
        SubmitScrapeJobInput(origin_url=body.origin_url, limit_pages=body.limit_pages)
    )
    background.add_task(
        runner.execute,
        RunScrapeJobInput(
            job_id=result.job_id,
            origin_url=result.origin_url,
            max_pages=result.max_pages,
        ),
    )

    status_url = f"/job/{result.job_id}"
    return ScrapeAcceptedResponse(
        job_id=result.job_id,
        check_status_url=status_url,
        tip=f"Poll GET {status_url} to check progress",
    )


@router.get("/job/{job_id}", response_model=None)
async def get_job(
    job_id: str,
    store: JobStore = Depends(get_job_store),
) -> JobProgressResponse | JobResultResponse:
    # Unfinished jobs report progress only; results appear once the job ends
    return _job_to_response(store.require(job_id))


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(store: JobStore = Depends(get_job_store)) -> JobListResponse:
    return JobListResponse(
        jobs=[
            JobSummaryResponse(job_id=job.id, status=job.status, progress=job.progress)
            for job in store.list_all()
        ]
    )
