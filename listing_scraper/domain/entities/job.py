import math
import secrets
import string
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from listing_scraper.domain.entities.listing_record import ListingRecord
from listing_scraper.domain.enums.job_status import JobStatus
from listing_scraper.domain.state_machine.job_state_machine import JobStateMachine

_state_machine = JobStateMachine()

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_job_id() -> str:
    """Return an id of the form ``job_<epoch millis>_<9 random chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"job_{int(time.time() * 1000)}_{suffix}"


def page_progress(current_page: int, total_pages: int) -> int:
    """Percentage of planned pages done, rounded half up and clamped to 0-100."""
    if total_pages <= 0:
        return 0
    percent = math.floor(current_page / total_pages * 100 + 0.5)
    return max(0, min(100, percent))


class InvalidProgressError(Exception):
    """Raised when progress is reported for a job that is not running."""

    def __init__(self, job_id: str, status: JobStatus) -> None:
        super().__init__(f"Cannot record progress for job {job_id} in state {status.value}.")


@dataclass
class Job:
    """
    A single scrape request tracked from submission to completion or failure.

    Mutated only through the transition methods below, which enforce the
    queued → running → completed | failed lifecycle.
    """

    # Identity
    id: str = field(default_factory=generate_job_id)

    # Request
    origin_url: str = ""
    max_pages: int = 1

    # State
    status: JobStatus = JobStatus.QUEUED
    progress: int = 0
    current_page: int | None = None
    total_pages: int | None = None

    # Outcome
    results: list[ListingRecord] = field(default_factory=list)
    error: str | None = None

    # Timestamps
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def start(self) -> None:
        self._transition_to(JobStatus.RUNNING)
        self.progress = 0

    def record_progress(self, current_page: int, total_pages: int) -> None:
        """Store the page counters; progress never moves backwards."""
        if self.status is not JobStatus.RUNNING:
            raise InvalidProgressError(self.id, self.status)
        self.current_page = current_page
        self.total_pages = total_pages
        self.progress = max(self.progress, page_progress(current_page, total_pages))
        self.updated_at = _utcnow()

    def complete(self, results: list[ListingRecord]) -> None:
        self._transition_to(JobStatus.COMPLETED)
        self.progress = 100
        self.results = list(results)
        self.error = None
        self.completed_at = self.updated_at

    def fail(self, message: str) -> None:
        self._transition_to(JobStatus.FAILED)
        self.progress = 0
        self.results = []
        self.error = message

    def _transition_to(self, new_status: JobStatus) -> None:
        _state_machine.validate_transition(self.status, new_status)
        self.status = new_status
        self.updated_at = _utcnow()

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @property
    def is_finished(self) -> bool:
        return self.status.is_terminal

    def copy(self) -> "Job":
        """Return a detached copy; records are immutable so a shallow list copy suffices."""
        return replace(self, results=list(self.results))
