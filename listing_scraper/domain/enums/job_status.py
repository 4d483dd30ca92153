from enum import Enum


class JobStatus(str, Enum):
    """All possible states of a scrape job."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Terminal states cannot be transitioned out of."""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)
