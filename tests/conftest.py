"""
Shared fixtures: an app wired to a fresh in-memory store and a scripted
stand-in for the OpenAI client.
"""

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from main import create_app
from stars.agents.advisor_agent import AdvisorAgent
from stars.api.deps import get_advisor, get_store
from stars.db.memory_storage import MemoryStorage
from stars.db.sqlite_storage import SQLiteStorage
from stars.models.user_models import SessionContext


# -------------------------------------------------------------------
# Fake chat-completion client
# -------------------------------------------------------------------
def text_reply(content):
    message = SimpleNamespace(content=content, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def tool_reply(arguments, call_id="call_1", name="createBooking"):
    raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
    call = SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments=raw))
    message = SimpleNamespace(content=None, tool_calls=[call])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeLLM:
    """Replays scripted replies (or raises scripted exceptions) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(dict(kwargs, messages=list(kwargs["messages"])))
        if not self.replies:
            raise AssertionError("FakeLLM ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


# -------------------------------------------------------------------
# Storage
# -------------------------------------------------------------------
@pytest.fixture
def store():
    storage = MemoryStorage()
    storage.seed_accommodations()
    return storage


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path):
    """Runs a test against both persistence backends."""
    if request.param == "memory":
        storage = MemoryStorage()
    else:
        storage = SQLiteStorage(str(tmp_path / "test.sqlite3"))
    storage.seed_accommodations()
    yield storage
    if request.param == "sqlite":
        storage.close()


@pytest.fixture
def alice_ctx(store):
    user = store.create_user(username="alice", hashed_password="x")
    return SessionContext(session_id="s-alice", user_id=user["id"], username="alice")


# -------------------------------------------------------------------
# App + HTTP clients
# -------------------------------------------------------------------
@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def app(store, fake_llm):
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    application.dependency_overrides[get_advisor] = lambda: AdvisorAgent(store, client=fake_llm)
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def other_client(app):
    """Second browser with its own cookie jar."""
    with TestClient(app) as c:
        yield c


def register(client, username, password="secret123", **extra):
    return client.post("/api/auth/register", json={"username": username, "password": password, **extra})


def booking_payload(**overrides):
    payload = {
        "destination": "mars",
        "departureDate": "2030-06-15T00:00:00Z",
        "returnDate": "2030-12-20T00:00:00Z",
        "travelClass": "vip",
        "numberOfTravelers": 1,
    }
    payload.update(overrides)
    return payload
