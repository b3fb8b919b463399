"""
Drive one pipeline run from submission to a list of CandidateRecords.

Flow: start_pipeline → poll get_run on a fixed interval → zip outputs.

Every poll attempt is delay-then-check, including the first one, so a run
that is DONE on the first check costs exactly one delay. The worst case is
``max_attempts × delay_ms`` (60 s at the defaults).
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from brewai.candidates import zip_outputs
from brewai.config import PipelineSettings
from brewai.errors import InvalidRunHandle, PollTransportError, RunCancelled, RunFailed, RunTimedOut
from brewai.log import get_logger
from brewai.models import CandidateRecord, JobSubmission, RunSnapshot, RunStatus
from brewai.pipeline.base import PipelineClient

log = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class JobRunner:
    """Holds only read-only settings and a client; each run keeps its own state."""

    def __init__(
        self,
        client: PipelineClient,
        settings: PipelineSettings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.settings = settings
        self._sleep = sleep

    async def run(
        self,
        subject_id: str | None,
        posting_url: str,
        cancel: asyncio.Event | None = None,
    ) -> list[CandidateRecord]:
        if not posting_url or not posting_url.strip():
            raise ValueError("posting_url is required")
        submission = JobSubmission.for_posting(subject_id, posting_url)
        run_id = await self.submit(submission)
        outputs = await self.wait_for_outputs(run_id, cancel=cancel)
        candidates = zip_outputs(outputs, run_id)
        log.info("Run %s produced %d candidate(s)", run_id, len(candidates))
        return candidates

    def run_sync(
        self, subject_id: str | None, posting_url: str,
    ) -> list[CandidateRecord]:
        """Blocking wrapper for scripts; not for use inside a running loop."""
        return asyncio.run(self.run(subject_id, posting_url))

    async def submit(self, submission: JobSubmission) -> str:
        data = await asyncio.to_thread(self.client.start_pipeline, submission)
        run_id = data.get("run_id") if isinstance(data, dict) else None
        if not isinstance(run_id, str) or not run_id.strip():
            raise InvalidRunHandle(f"start_pipeline returned no usable run_id: {data!r}")
        log.info("Pipeline started: run_id=%s", run_id)
        return run_id

    async def wait_for_outputs(
        self, run_id: str, cancel: asyncio.Event | None = None,
    ) -> dict[str, Any] | None:
        """Poll until DONE and return the raw outputs mapping."""
        max_attempts = self.settings.max_attempts
        last_error: PollTransportError | None = None

        for attempt in range(1, max_attempts + 1):
            await self._sleep(self.settings.delay_seconds)
            if cancel is not None and cancel.is_set():
                log.info("Run %s cancelled before attempt %d", run_id, attempt)
                raise RunCancelled(f"Pipeline run {run_id} was cancelled", run_id)

            try:
                data = await asyncio.to_thread(self.client.get_run, run_id)
            except PollTransportError as exc:
                if not self.settings.retry_poll_errors:
                    raise
                last_error = exc
                log.warning(
                    "Run %s status check failed (attempt %d/%d): %s",
                    run_id, attempt, max_attempts, exc,
                )
                continue

            snapshot = RunSnapshot.from_response(run_id, data)
            log.debug(
                "Run %s state: %s (attempt %d/%d)",
                run_id, snapshot.raw_state, attempt, max_attempts,
            )

            if snapshot.status.is_terminal:
                if snapshot.status.is_failure:
                    log.error("Run %s ended %s", run_id, snapshot.status.value)
                    raise RunFailed(snapshot.status.value, snapshot.log, run_id)
                log.info("Run %s done after %d attempt(s)", run_id, attempt)
                return snapshot.outputs
            if snapshot.status is RunStatus.UNKNOWN:
                log.warning(
                    "Run %s reported unrecognized state %r; still polling",
                    run_id, snapshot.raw_state,
                )

        log.error("Run %s still not finished after %d attempts", run_id, max_attempts)
        raise RunTimedOut(max_attempts, run_id) from last_error
