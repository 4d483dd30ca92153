from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from listing_scraper.domain.enums.job_status import JobStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ScrapeAcceptedResponse(_CamelModel):
    success: bool = True
    message: str = "Scraping job started"
    job_id: str = Field(alias="jobId")
    check_status_url: str = Field(alias="checkStatusUrl")
    tip: str


class ListingResponse(BaseModel):
    title: str
    price: str
    area: str
    link: str

    model_config = {"from_attributes": True}


class JobProgressResponse(_CamelModel):
    """Shape of a job that has not finished yet; carries no results."""

    job_id: str = Field(alias="jobId")
    status: JobStatus
    progress: int
    current_page: int | None = Field(default=None, alias="currentPage")
    total_pages: int | None = Field(default=None, alias="totalPages")


class JobResultResponse(_CamelModel):
    job_id: str = Field(alias="jobId")
    status: JobStatus
    progress: int
    count: int
    data: list[ListingResponse]
    error: str | None = None
    completed_at: datetime | None = Field(default=None, alias="completedAt")


class JobSummaryResponse(_CamelModel):
    job_id: str = Field(alias="jobId")
    status: JobStatus
    progress: int


class JobListResponse(BaseModel):
    jobs: list[JobSummaryResponse]

