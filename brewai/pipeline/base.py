from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from brewai.models import JobSubmission


class PipelineClient(ABC):
    """Blocking transport to an asynchronous pipeline service."""

    @abstractmethod
    def start_pipeline(self, submission: JobSubmission) -> dict[str, Any]:
        """Start one run; returns the decoded response body."""

    @abstractmethod
    def get_run(self, run_id: str) -> dict[str, Any]:
        """Fetch the current state of a run; returns the decoded response body."""
