import os

os.environ.setdefault("BREWAI_NO_LOG_FILE", "1")

import pytest

from brewai.config import PipelineSettings


class RecordingSleep:
    """Stands in for asyncio.sleep; records each requested delay."""

    def __init__(self, on_call=None):
        self.calls = []
        self.on_call = on_call

    async def __call__(self, seconds):
        self.calls.append(seconds)
        if self.on_call is not None:
            self.on_call(len(self.calls))


@pytest.fixture
def settings():
    return PipelineSettings(api_key="key", user_id="user-1", saved_item_id="flow-1")


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def outputs():
    return {
        "first_names": ["Ada", "Grace"],
        "last_names": ["Lovelace", "Hopper"],
        "job_titles": ["Engineer", "Admiral"],
        "headlines": ["Analytical engines", "Compilers"],
        "links": ["https://linkedin.com/in/ada", "https://linkedin.com/in/grace"],
        "profile_pictures": ["https://img/ada.png", ""],
        "cities": ["London", "Arlington"],
        "states": ["England", "VA"],
        "countries": ["UK", ""],
        "custom_messages": ["Hi Ada", "Hi Grace"],
    }


@pytest.fixture
def make_sleep():
    return RecordingSleep
