"""Data models for pipeline runs and recommended connections."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RunStatus(str, Enum):
    RUNNING = "RUNNING"
    TERMINATING = "TERMINATING"
    DONE = "DONE"
    FAILED = "FAILED"
    TERMINATED = "TERMINATED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: Any) -> "RunStatus":
        """Map the service's state string; anything undocumented is UNKNOWN."""
        if isinstance(raw, str):
            try:
                return cls(raw)
            except ValueError:
                pass
        return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.DONE, RunStatus.FAILED, RunStatus.TERMINATED)

    @property
    def is_failure(self) -> bool:
        return self in (RunStatus.FAILED, RunStatus.TERMINATED)


@dataclass(frozen=True)
class PipelineInput:
    name: str
    value: str

    def to_payload(self) -> dict[str, str]:
        return {"input_name": self.name, "value": self.value}


@dataclass(frozen=True)
class JobSubmission:
    inputs: tuple[PipelineInput, ...]

    @classmethod
    def for_posting(cls, subject_id: str | None, posting_url: str) -> "JobSubmission":
        # personal_linked_in is always sent, even when empty
        return cls(inputs=(
            PipelineInput("personal_linked_in", subject_id or ""),
            PipelineInput("job_posting_url", posting_url),
        ))

    def to_payload(self) -> list[dict[str, str]]:
        return [i.to_payload() for i in self.inputs]


def _log_lines(raw: Any) -> list[str]:
    """Normalise the service's diagnostic log to a list of strings."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(line) for line in raw]
    if isinstance(raw, dict):
        return [f"{k}: {v}" for k, v in raw.items()]
    return [str(raw)]


@dataclass
class RunSnapshot:
    run_id: str
    status: RunStatus
    raw_state: Any = None
    outputs: dict[str, Any] | None = None
    log: list[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, run_id: str, data: dict[str, Any]) -> "RunSnapshot":
        outputs = data.get("outputs")
        return cls(
            run_id=run_id,
            status=RunStatus.parse(data.get("state")),
            raw_state=data.get("state"),
            outputs=outputs if isinstance(outputs, dict) else None,
            log=_log_lines(data.get("log")),
        )


@dataclass
class Location:
    city: str = ""
    state: str = ""
    country: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"city": self.city, "state": self.state, "country": self.country}

    def __str__(self) -> str:
        parts = [p for p in (self.city, self.state, self.country) if p]
        return ", ".join(parts)


@dataclass
class CandidateRecord:
    first_name: str
    last_name: str = ""
    job_title: str = ""
    headline: str = ""
    link: str = ""
    profile_picture: str = ""
    location: Location = field(default_factory=Location)
    custom_message: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "job_title": self.job_title,
            "headline": self.headline,
            "link": self.link,
            "profile_picture": self.profile_picture,
            "location": self.location.to_dict(),
            "custom_message": self.custom_message,
        }

    def to_connection_row(self) -> dict[str, Any]:
        """Columns stored in the connections table (no custom_message)."""
        row = self.to_dict()
        row.pop("custom_message")
        return row
