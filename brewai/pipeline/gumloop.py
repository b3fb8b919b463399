"""Gumloop REST API: start a saved pipeline and read its run state."""
from __future__ import annotations

from typing import Any

import requests

from brewai.config import PipelineSettings
from brewai.errors import PollTransportError, SubmissionTransportError
from brewai.log import get_logger
from brewai.models import JobSubmission
from brewai.pipeline.base import PipelineClient

log = get_logger(__name__)


class GumloopClient(PipelineClient):
    def __init__(self, settings: PipelineSettings) -> None:
        self.settings = settings

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.settings.api_key}"}

    def start_pipeline(self, submission: JobSubmission) -> dict[str, Any]:
        body = {
            "user_id": self.settings.user_id,
            "saved_item_id": self.settings.saved_item_id,
            "pipeline_inputs": submission.to_payload(),
        }
        try:
            r = requests.post(
                f"{self.settings.base_url}/start_pipeline",
                json=body,
                headers={**self._headers(), "Content-Type": "application/json"},
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise SubmissionTransportError(f"Gumloop API call failed: {exc}") from exc
        if not r.ok:
            raise SubmissionTransportError(
                f"Gumloop API call failed: {r.status_code} {r.reason}", status_code=r.status_code,
            )
        try:
            data = r.json()
        except ValueError as exc:
            raise SubmissionTransportError("Gumloop API returned a non-JSON body") from exc
        log.debug("start_pipeline response: %s", data)
        return data if isinstance(data, dict) else {}

    def get_run(self, run_id: str) -> dict[str, Any]:
        try:
            r = requests.get(
                f"{self.settings.base_url}/get_pl_run",
                params={"run_id": run_id, "user_id": self.settings.user_id},
                headers=self._headers(),
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise PollTransportError(f"Failed to retrieve run details: {exc}", run_id) from exc
        if not r.ok:
            raise PollTransportError(
                f"Failed to retrieve run details: {r.status_code} {r.reason}",
                run_id,
                status_code=r.status_code,
            )
        try:
            data = r.json()
        except ValueError as exc:
            raise PollTransportError("Run details were not valid JSON", run_id) from exc
        if not isinstance(data, dict):
            raise PollTransportError("Run details were not a JSON object", run_id)
        return data
