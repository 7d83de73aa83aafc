"""
Pytest configuration and shared fixtures for listening_quiz tests.
"""

import json
import os
import tempfile
import uuid

# Settings are read at import time, so point them at scratch locations first
_TMP = tempfile.mkdtemp(prefix="listening-quiz-tests-")
os.environ.setdefault("QUIZ_DATABASE_URL", f"sqlite+aiosqlite:///{_TMP}/test.db")
os.environ.setdefault("QUIZ_REMOTE_MIRROR_URL", "")
os.environ.setdefault("QUIZ_MEDIA_ROOT", os.path.join(_TMP, "media"))
os.environ.setdefault("QUIZ_LOG_DIR", os.path.join(_TMP, "logs"))

import pytest
from fastapi.testclient import TestClient

from listening_quiz.schemas import Question
from listening_quiz.services.question_store import QuestionStore
from listening_quiz.services.transcript import parse


class MemoryStorage:
    """In-memory stand-in for DatabaseStorage."""

    def __init__(self, values=None):
        self.values = dict(values or {})
        self.writes = 0

    async def read(self, key):
        return self.values.get(key)

    async def write(self, key, value):
        self.values[key] = value
        self.writes += 1

    def stored(self, key="fib-questions"):
        return json.loads(self.values[key])


def make_question(question_id, transcript, time_limit_sec=None, title=None):
    tokens, blanks = parse(transcript)
    return Question(
        id=question_id,
        title=title or f"Question {question_id}",
        audio_url=f"https://example.com/{question_id}.mp3",
        time_limit_sec=time_limit_sec,
        tokens=tokens,
        blanks=blanks,
    )


def storage_with(*questions, key="fib-questions"):
    payload = [q.model_dump(mode="json", by_alias=True) for q in questions]
    return MemoryStorage({key: json.dumps(payload)})


@pytest.fixture
def parks_question():
    """The built-in seed question."""
    return make_question(
        "q1",
        "City parks provide vital [amenities] for residents, offering spaces for [exercise], "
        "relaxation, and community events.",
        time_limit_sec=90,
        title="Urban parks audio clip",
    )


@pytest.fixture
def three_questions():
    return [
        make_question("a", "The capital is [Paris] and it has [5] bridges."),
        make_question("b", "I like [tea]."),
        make_question("c", "No blanks here."),
    ]


@pytest.fixture
def store_of():
    def build(*questions):
        return QuestionStore(MemoryStorage(), questions=list(questions))

    return build


@pytest.fixture
def client(monkeypatch):
    """TestClient over the real app, isolated under a fresh storage key."""
    from listening_quiz.core.config import settings
    from listening_quiz.main import app

    monkeypatch.setattr(settings, "storage_key", f"test-{uuid.uuid4().hex}")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    from listening_quiz.core.config import settings

    response = client.post("/admin/unlock", json={"code": settings.admin_code})
    assert response.status_code == 200
    return client
