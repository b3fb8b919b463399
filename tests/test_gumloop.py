import pytest
import requests

import brewai.pipeline.gumloop as gumloop
from brewai.errors import PollTransportError, SubmissionTransportError
from brewai.models import JobSubmission
from brewai.pipeline import GumloopClient, ScriptedPipeline, get_pipeline_client


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


@pytest.fixture
def client(settings):
    return GumloopClient(settings)


def test_start_pipeline_posts_inputs(monkeypatch, client):
    calls = []

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(body={"run_id": "abc"})

    monkeypatch.setattr(gumloop.requests, "post", fake_post)

    data = client.start_pipeline(JobSubmission.for_posting("", "https://jobs/1"))

    assert data == {"run_id": "abc"}
    url, kwargs = calls[0]
    assert url == "https://api.gumloop.com/api/v1/start_pipeline"
    assert kwargs["headers"]["Authorization"] == "Bearer key"
    assert kwargs["json"] == {
        "user_id": "user-1",
        "saved_item_id": "flow-1",
        "pipeline_inputs": [
            {"input_name": "personal_linked_in", "value": ""},
            {"input_name": "job_posting_url", "value": "https://jobs/1"},
        ],
    }


def test_start_pipeline_non_success(monkeypatch, client):
    monkeypatch.setattr(
        gumloop.requests, "post", lambda url, **kw: FakeResponse(500, reason="Server Error"),
    )
    with pytest.raises(SubmissionTransportError) as exc_info:
        client.start_pipeline(JobSubmission.for_posting("", "u"))
    assert exc_info.value.status_code == 500


def test_start_pipeline_network_error(monkeypatch, client):
    def boom(url, **kw):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(gumloop.requests, "post", boom)
    with pytest.raises(SubmissionTransportError, match="refused"):
        client.start_pipeline(JobSubmission.for_posting("", "u"))


def test_get_run_sends_run_and_user_ids(monkeypatch, client):
    seen = {}

    def fake_get(url, **kwargs):
        seen.update(kwargs, url=url)
        return FakeResponse(body={"state": "RUNNING"})

    monkeypatch.setattr(gumloop.requests, "get", fake_get)

    assert client.get_run("abc") == {"state": "RUNNING"}
    assert seen["url"].endswith("/get_pl_run")
    assert seen["params"] == {"run_id": "abc", "user_id": "user-1"}


@pytest.mark.parametrize(
    "response",
    [FakeResponse(404, reason="Not Found"), FakeResponse(body=ValueError("no json")), FakeResponse(body=["x"])],
)
def test_get_run_errors(monkeypatch, client, response):
    monkeypatch.setattr(gumloop.requests, "get", lambda url, **kw: response)
    with pytest.raises(PollTransportError) as exc_info:
        client.get_run("abc")
    assert exc_info.value.run_id == "abc"


def test_client_selection(settings):
    import dataclasses

    assert isinstance(get_pipeline_client(settings), GumloopClient)
    assert isinstance(get_pipeline_client(dataclasses.replace(settings, api_key="")), ScriptedPipeline)
