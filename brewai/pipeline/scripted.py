"""In-memory pipeline that replays scripted run states (demo and tests)."""
from __future__ import annotations

import itertools
import threading
from typing import Any, Iterable

from brewai.log import get_logger
from brewai.models import JobSubmission
from brewai.pipeline.base import PipelineClient

log = get_logger(__name__)


class ScriptedPipeline(PipelineClient):
    """Each started run replays ``states``; the last entry repeats forever.

    An entry is either a state string or a full response dict. The string
    ``"DONE"`` is expanded to ``{"state": "DONE", "outputs": outputs}``.
    An exception instance in the script is raised from ``get_run``.
    """

    def __init__(
        self,
        states: Iterable[Any] = ("RUNNING", "DONE"),
        outputs: dict[str, Any] | None = None,
        run_id_prefix: str = "run",
    ) -> None:
        self.states = list(states)
        if not self.states:
            raise ValueError("states must not be empty")
        self.outputs = outputs or {}
        self.run_id_prefix = run_id_prefix
        self.submissions: list[JobSubmission] = []
        self.polls: dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def start_pipeline(self, submission: JobSubmission) -> dict[str, Any]:
        with self._lock:
            run_id = f"{self.run_id_prefix}-{next(self._ids)}"
            self.submissions.append(submission)
            self.polls[run_id] = 0
        log.debug("Scripted run %s started", run_id)
        return {"run_id": run_id}

    def get_run(self, run_id: str) -> dict[str, Any]:
        with self._lock:
            n = self.polls[run_id]
            self.polls[run_id] = n + 1
        entry = self.states[min(n, len(self.states) - 1)]
        if isinstance(entry, BaseException):
            raise entry
        if isinstance(entry, dict):
            return entry
        if entry == "DONE":
            return {"state": "DONE", "outputs": self.outputs}
        return {"state": entry}


DEMO_OUTPUTS: dict[str, list[str]] = {
    "first_names": ["Priya", "Marcus"],
    "last_names": ["Raman", "Okafor"],
    "job_titles": ["Engineering Manager", "Senior Recruiter"],
    "headlines": [
        "Building payments infrastructure",
        "Hiring engineers for platform teams",
    ],
    "links": [
        "https://www.linkedin.com/in/example-priya",
        "https://www.linkedin.com/in/example-marcus",
    ],
    "profile_pictures": ["", ""],
    "cities": ["Seattle", "Austin"],
    "states": ["WA", "TX"],
    "countries": ["United States", ""],
    "custom_messages": [
        "Hi Priya, I just applied to the backend role on your team and would love to hear how the team works.",
        "Hi Marcus, I applied to the platform engineer opening and wanted to introduce myself.",
    ],
}


def demo_pipeline() -> ScriptedPipeline:
    return ScriptedPipeline(states=("RUNNING", "DONE"), outputs=DEMO_OUTPUTS, run_id_prefix="demo")
