import asyncio

import pytest

from brewai.models import CandidateRecord
from brewai.pipeline import ScriptedPipeline
from brewai.recommendations import RecommendationService
from brewai.runner import JobRunner


class FakeStore:
    def __init__(self, linkedin="https://linkedin.com/in/stored"):
        self.linkedin = linkedin
        self.events = []

    def get_profile_linkedin(self, user_id):
        self.events.append(("profile", user_id))
        return self.linkedin

    def create_chat(self, user_id, notes, status="Sent"):
        self.events.append(("chat", user_id, notes, status))
        return 7

    def create_connection(self, candidate, chat_id):
        self.events.append(("connection", candidate.first_name, chat_id))
        return {"id": 1}


@pytest.fixture
def pipeline(outputs):
    return ScriptedPipeline(states=["DONE"], outputs=outputs)


@pytest.fixture
def service(pipeline, settings, sleep):
    return RecommendationService(JobRunner(pipeline, settings, sleep=sleep), FakeStore())


def _submitted_profile(pipeline):
    return pipeline.submissions[0].inputs[0].value


def test_recommend_uses_profile_linkedin(service, pipeline):
    result = asyncio.run(service.recommend(" https://jobs/1 ", user_id="u1"))

    assert len(result) == 2
    assert _submitted_profile(pipeline) == "https://linkedin.com/in/stored"
    assert pipeline.submissions[0].inputs[1].value == "https://jobs/1"


def test_explicit_linkedin_skips_store(service, pipeline):
    asyncio.run(service.recommend("https://jobs/1", user_id="u1", linkedin_url="https://linkedin.com/in/given"))

    assert _submitted_profile(pipeline) == "https://linkedin.com/in/given"
    assert service.store.events == []


def test_missing_profile_url_submits_empty(pipeline, settings, sleep):
    service = RecommendationService(JobRunner(pipeline, settings, sleep=sleep), FakeStore(linkedin=None))
    asyncio.run(service.recommend("https://jobs/1", user_id="u1"))
    assert _submitted_profile(pipeline) == ""


def test_blank_posting_url_rejected(service, pipeline):
    with pytest.raises(ValueError):
        asyncio.run(service.recommend("  "))
    assert pipeline.submissions == []


def test_send_outreach_creates_chat_then_connection(service):
    chat_id = service.send_outreach("u1", CandidateRecord(first_name="Ada"), "Hello Ada")

    assert chat_id == 7
    assert service.store.events == [
        ("chat", "u1", "Message: Hello Ada", "Sent"),
        ("connection", "Ada", 7),
    ]


def test_send_outreach_requires_message(service):
    with pytest.raises(ValueError):
        service.send_outreach("u1", CandidateRecord(first_name="Ada"), "   ")
    assert service.store.events == []
