"""
Recommendation requests and outreach tracking.

recommend: resolve the caller's own LinkedIn URL → run the pipeline → candidates.
send_outreach: record a sent message as a chat plus the contacted connection.
"""
from __future__ import annotations

import asyncio

from brewai.log import get_logger
from brewai.models import CandidateRecord
from brewai.runner import JobRunner
from brewai.store import DEFAULT_CHAT_STATUS, OutreachStore

log = get_logger(__name__)


class RecommendationService:
    def __init__(self, runner: JobRunner, store: OutreachStore | None = None) -> None:
        self.runner = runner
        self.store = store

    def _subject_id(self, user_id: str | None, linkedin_url: str | None) -> str:
        if linkedin_url:
            return linkedin_url
        if user_id and self.store is not None:
            return self.store.get_profile_linkedin(user_id) or ""
        return ""

    async def recommend(
        self,
        posting_url: str,
        user_id: str | None = None,
        linkedin_url: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> list[CandidateRecord]:
        posting_url = (posting_url or "").strip()
        if not posting_url:
            raise ValueError("A job posting URL is required")
        subject = await asyncio.to_thread(self._subject_id, user_id, linkedin_url)
        if not subject:
            log.info("No LinkedIn URL on file; submitting with an empty profile")
        return await self.runner.run(subject, posting_url, cancel=cancel)

    def send_outreach(
        self,
        user_id: str,
        candidate: CandidateRecord,
        message: str,
        status: str = DEFAULT_CHAT_STATUS,
    ) -> int:
        if self.store is None:
            raise RuntimeError("send_outreach needs a store")
        if not message or not message.strip():
            raise ValueError("Message must not be empty")
        chat_id = self.store.create_chat(user_id, f"Message: {message}", status)
        self.store.create_connection(candidate, chat_id)
        log.info("Recorded outreach to %s (chat %s)", candidate.full_name, chat_id)
        return chat_id
