from listing_scraper.domain.enums.job_status import JobStatus


# Mapping of valid transitions: from_state -> set of allowed to_states
VALID_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.QUEUED: frozenset({JobStatus.RUNNING}),
    JobStatus.RUNNING: frozenset({JobStatus.COMPLETED, JobStatus.FAILED}),
    # Terminal states have no outgoing transitions
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
}


class InvalidJobTransitionError(Exception):
    """Raised when an invalid job status transition is attempted."""

    def __init__(
        self,
        from_state: JobStatus,
        to_state: JobStatus,
        allowed: frozenset[JobStatus] = frozenset(),
    ) -> None:
        self.from_state = from_state
        self.to_state = to_state
        self.allowed = allowed
        super().__init__(
            f"Invalid transition from {from_state.value} to {to_state.value}. "
            f"Allowed transitions: {sorted(s.value for s in allowed)}"
        )


class JobStateMachine:
    """
    Validates status transitions of a scrape job.

    Stateless: call can_transition() or validate_transition() with explicit states.
    """

    def can_transition(self, from_state: JobStatus, to_state: JobStatus) -> bool:
        """Return True if transitioning from_state → to_state is permitted."""
        if from_state.is_terminal:
            return False
        return to_state in VALID_TRANSITIONS.get(from_state, frozenset())

    def validate_transition(self, from_state: JobStatus, to_state: JobStatus) -> None:
        """Raise InvalidJobTransitionError if the transition is not permitted."""
        if not self.can_transition(from_state, to_state):
            raise InvalidJobTransitionError(
                from_state, to_state, self.get_allowed_transitions(from_state)
            )

    def get_allowed_transitions(self, from_state: JobStatus) -> frozenset[JobStatus]:
        """Return the set of states reachable from from_state."""
        return VALID_TRANSITIONS.get(from_state, frozenset())
