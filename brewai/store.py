"""Profiles, chats and connections stored in Supabase (PostgREST over HTTP).

Docs: https://postgrest.org/en/stable/references/api/tables_views.html
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

import requests

from brewai.config import StoreSettings
from brewai.errors import StoreError
from brewai.log import get_logger
from brewai.models import CandidateRecord
from brewai.retry import retry

log = get_logger(__name__)

DEFAULT_CHAT_STATUS = "Sent"
RECENT_WINDOW = timedelta(days=7)


def _transient(exc: BaseException) -> bool:
    status = getattr(exc, "status_code", None)
    return status is None or status >= 500


def _week_ago(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return (now - RECENT_WINDOW).isoformat()


def _parse_count(content_range: str | None) -> int:
    # "0-4/12" or "*/0"
    if not content_range or "/" not in content_range:
        return 0
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class OutreachStore:
    def __init__(self, settings: StoreSettings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.http = session or requests.Session()
        self.timeout = 15

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.settings.key,
            "Authorization": f"Bearer {self.settings.key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> requests.Response:
        url = f"{self.settings.url}/rest/v1/{table}"
        try:
            r = self.http.request(
                method, url, params=params, json=json,
                headers=self._headers(prefer), timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise StoreError(f"{method} {table} failed: {exc}") from exc
        if not r.ok:
            try:
                message = r.json().get("message", r.text)
            except ValueError:
                message = r.text
            raise StoreError(f"{method} {table} failed: {message}", status_code=r.status_code)
        return r

    def _json(self, r: requests.Response, method: str, table: str) -> Any:
        try:
            return r.json()
        except ValueError as exc:
            raise StoreError(f"{method} {table} returned a non-JSON body", status_code=r.status_code) from exc

    @retry(max_attempts=3, retryable=(StoreError,), should_retry=_transient)
    def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        return self._json(self._request("GET", table, params=params), "GET", table)

    def _write(self, method: str, table: str, params: dict[str, str] | None, body: Any) -> list[dict[str, Any]]:
        r = self._request(method, table, params=params, json=body, prefer="return=representation")
        return self._json(r, method, table)

    # ── profiles ─────────────────────────────────────────────────────────

    def get_profile_linkedin(self, user_id: str) -> str | None:
        rows = self._select("profiles", {"select": "linkedin_url", "id": f"eq.{user_id}"})
        if not rows:
            raise StoreError(f"No profile for user {user_id}")
        return rows[0].get("linkedin_url") or None

    # ── chats ────────────────────────────────────────────────────────────

    def create_chat(self, user_id: str, notes: str, status: str = DEFAULT_CHAT_STATUS) -> int:
        rows = self._write("POST", "chats", {"select": "id"}, {
            "user_id": user_id, "notes": notes, "status": status,
        })
        if not rows or "id" not in rows[0]:
            raise StoreError("Chat insert returned no id")
        chat_id = rows[0]["id"]
        log.debug("Created chat %s for user %s [%s]", chat_id, user_id, status)
        return chat_id

    def get_chats(self, user_id: str) -> list[dict[str, Any]]:
        return self._select("chats", {"select": "*", "user_id": f"eq.{user_id}"})

    def get_weekly_chats_count(self, user_id: str, now: datetime | None = None) -> int:
        r = self._request(
            "HEAD", "chats",
            params={"select": "*", "user_id": f"eq.{user_id}", "created_at": f"gte.{_week_ago(now)}"},
            prefer="count=exact",
        )
        return _parse_count(r.headers.get("Content-Range"))

    def _update_chat(self, chat_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        rows = self._write("PATCH", "chats", {"id": f"eq.{chat_id}", "select": "*"}, changes)
        if not rows:
            raise StoreError(f"Chat {chat_id} not found", status_code=404)
        return rows[0]

    def update_chat_notes(self, chat_id: int, notes: str) -> dict[str, Any]:
        return self._update_chat(chat_id, {"notes": notes})

    def update_chat_status(self, chat_id: int, status: str) -> dict[str, Any]:
        return self._update_chat(chat_id, {"status": status})

    def get_recent_chats(
        self, user_id: str, limit: int = 5, now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Chats from the last 7 days, newest first, with their connections."""
        return self._select("chats", {
            "select": "*,connections(*)",
            "user_id": f"eq.{user_id}",
            "created_at": f"gte.{_week_ago(now)}",
            "order": "created_at.desc",
            "limit": str(limit),
        })

    def get_chats_with_connections(self, user_id: str) -> dict[str, list[dict[str, Any]]]:
        chats = self.get_chats(user_id)
        if not chats:
            return {"chats": [], "connections": []}
        ids = ",".join(str(c["id"]) for c in chats)
        connections = self._select("connections", {
            "select": "*,chats:chat_id(*)",
            "chat_id": f"in.({ids})",
        })
        return {"chats": chats, "connections": connections}

    # ── connections ──────────────────────────────────────────────────────

    def create_connection(self, candidate: CandidateRecord, chat_id: int) -> dict[str, Any]:
        row = {**candidate.to_connection_row(), "chat_id": chat_id}
        rows = self._write("POST", "connections", None, row)
        return rows[0] if rows else row

    def create_connections(self, candidates: Iterable[CandidateRecord]) -> list[dict[str, Any]]:
        body = [c.to_connection_row() for c in candidates]
        if not body:
            return []
        rows = self._write("POST", "connections", None, body)
        log.info("Inserted %d connection(s)", len(rows))
        return rows

    def get_connections(self, chat_id: int) -> list[dict[str, Any]]:
        return self._select("connections", {"select": "*", "chat_id": f"eq.{chat_id}"})
