"""Turn a finished run's parallel output lists into CandidateRecords.

The pipeline returns one list per field (``first_names``, ``last_names``,
...) where index ``i`` of every list describes the same person. The number
of records is the length of ``first_names``. A shorter list yields empty
fields for the trailing records instead of dropping them; the mismatch is
logged. Missing keys other than ``first_names`` count as empty lists.
"""
from __future__ import annotations

from typing import Any

from brewai.errors import MalformedOutput
from brewai.log import get_logger
from brewai.models import CandidateRecord, Location

log = get_logger(__name__)

NAME_KEY = "first_names"

# output key -> CandidateRecord field
_TEXT_FIELDS: dict[str, str] = {
    "last_names": "last_name",
    "job_titles": "job_title",
    "headlines": "headline",
    "links": "link",
    "profile_pictures": "profile_picture",
    "custom_messages": "custom_message",
}
_LOCATION_KEYS = ("cities", "states", "countries")

OUTPUT_KEYS: tuple[str, ...] = (NAME_KEY, *_TEXT_FIELDS, *_LOCATION_KEYS)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _at(seq: list[Any], index: int) -> str:
    return _text(seq[index]) if index < len(seq) else ""


def _column(outputs: dict[str, Any], key: str, run_id: str | None) -> list[Any]:
    value = outputs.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MalformedOutput(
            f"Output {key!r} should be a list, got {type(value).__name__}", run_id,
        )
    return list(value)


def zip_outputs(outputs: dict[str, Any] | None, run_id: str | None = None) -> list[CandidateRecord]:
    if not isinstance(outputs, dict):
        raise MalformedOutput("Run finished without an outputs mapping", run_id)
    if outputs.get(NAME_KEY) is None:
        raise MalformedOutput(f"Run outputs are missing {NAME_KEY!r}", run_id)

    columns = {key: _column(outputs, key, run_id) for key in OUTPUT_KEYS}
    names = columns[NAME_KEY]
    count = len(names)

    short = {k: len(v) for k, v in columns.items() if k != NAME_KEY and len(v) != count}
    if short:
        log.warning(
            "Run %s: output lengths differ from %d names: %s",
            run_id or "?", count, ", ".join(f"{k}={n}" for k, n in sorted(short.items())),
        )

    countries = columns["countries"]
    records: list[CandidateRecord] = []
    for i, name in enumerate(names):
        fields = {attr: _at(columns[key], i) for key, attr in _TEXT_FIELDS.items()}
        country = _at(countries, i) or None
        records.append(
            CandidateRecord(
                first_name=_text(name),
                location=Location(
                    city=_at(columns["cities"], i),
                    state=_at(columns["states"], i),
                    country=country,
                ),
                **fields,
            )
        )
    return records
