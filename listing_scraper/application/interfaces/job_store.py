from abc import ABC, abstractmethod

from listing_scraper.domain.entities.job import Job


class JobNotFoundError(Exception):
    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found.")


class DuplicateJobError(Exception):
    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job {job_id} already exists.")


class JobStore(ABC):
    """
    Port for the process-wide job registry.

    Implementations hand out copies and replace whole records on put(), so
    callers never share a mutable Job with a concurrent reader.
    """

    @abstractmethod
    def add(self, job: Job) -> None:
        """Register a new job. Raises DuplicateJobError if the id is taken."""
        ...

    @abstractmethod
    def get(self, job_id: str) -> Job | None:
        ...

    @abstractmethod
    def put(self, job: Job) -> None:
        """Replace an existing job. Raises JobNotFoundError for unknown ids."""
        ...

    @abstractmethod
    def list_all(self) -> list[Job]:
        """Return every job in submission order."""
        ...

    def require(self, job_id: str) -> Job:
        job = self.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job
