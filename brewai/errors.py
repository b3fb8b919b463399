"""Exception hierarchy.

Every pipeline failure is a distinct subclass of :class:`PipelineError` so
callers can branch on the kind of failure (``RunTimedOut`` means "still
processing, try later", ``RunFailed`` means the run is dead) instead of
parsing messages.
"""
from __future__ import annotations


class BrewError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(BrewError):
    pass


class StoreError(BrewError):
    """A Supabase REST call failed or returned a non-success response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PipelineError(BrewError):
    """Base class for failures of one pipeline run."""

    def __init__(self, message: str, run_id: str | None = None) -> None:
        super().__init__(message)
        self.run_id = run_id


class SubmissionTransportError(PipelineError):
    """start_pipeline could not be completed or was rejected."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidRunHandle(PipelineError):
    """Submission succeeded but the response carried no usable run id."""


class PollTransportError(PipelineError):
    """A single status check failed at the network or response level."""

    def __init__(
        self, message: str, run_id: str | None = None, status_code: int | None = None,
    ) -> None:
        super().__init__(message, run_id)
        self.status_code = status_code


class RunFailed(PipelineError):
    """The service reported FAILED or TERMINATED."""

    NO_LOG = "No error logs provided"

    def __init__(self, status: str, log_lines: list[str] | None = None, run_id: str | None = None) -> None:
        self.status = status
        self.log_lines = list(log_lines or [])
        detail = "\n".join(self.log_lines) or self.NO_LOG
        super().__init__(f"Pipeline run {status.lower()}: {detail}", run_id)


class RunTimedOut(PipelineError):
    """The attempt budget ran out before a terminal state was seen."""

    def __init__(self, max_attempts: int, run_id: str | None = None) -> None:
        self.max_attempts = max_attempts
        super().__init__(
            f"Pipeline run did not complete after {max_attempts} attempts", run_id,
        )


class RunCancelled(PipelineError):
    """The caller's cancel token was set while the run was being polled."""


class MalformedOutput(PipelineError):
    """A DONE run returned outputs that cannot be mapped to candidates."""
