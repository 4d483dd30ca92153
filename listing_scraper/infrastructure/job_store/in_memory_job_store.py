"""
Process-local job store.

State lives only as long as the process; entries are never evicted.
"""
import threading

import structlog

from listing_scraper.application.interfaces.job_store import (
    DuplicateJobError,
    JobNotFoundError,
    JobStore,
)
from listing_scraper.domain.entities.job import Job

logger = structlog.get_logger(__name__)


class InMemoryJobStore(JobStore):
    """Dict-backed JobStore guarded by a lock; stores and returns copies."""

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._lock = threading.Lock()

    def add(self, job: Job) -> None:
        with self._lock:
            if job.id in self._jobs:
                raise DuplicateJobError(job.id)
            self._jobs[job.id] = job.copy()
        logger.debug("job_added", job_id=job.id)

    def get(self, job_id: str) -> Job | None:
        with self._lock:
            job = self._jobs.get(job_id)
            return job.copy() if job is not None else None

    def put(self, job: Job) -> None:
        with self._lock:
            if job.id not in self._jobs:
                raise JobNotFoundError(job.id)
            self._jobs[job.id] = job.copy()

    def list_all(self) -> list[Job]:
        with self._lock:
            return [job.copy() for job in self._jobs.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
