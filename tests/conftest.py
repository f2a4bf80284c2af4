"""Shared fixtures: in-memory remote store, in-memory local storage, API client."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from quizmaster import models  # noqa: F401
from quizmaster.database import Base, get_engine, get_session_factory
from quizmaster.dependencies import get_persistence
from quizmaster.exceptions import LocalStoreError, TransientStoreError
from quizmaster.main import app
from quizmaster.schemas.quiz import QuizCreate
from quizmaster.schemas.result import QuizResult
from quizmaster.services.local_store import LocalQuizStore
from quizmaster.services.persistence import QuizPersistence
from quizmaster.services.remote_store import RemoteQuizStore
from quizmaster.utils.storage import InMemoryStorage


class FailingRemoteStore:
    """Remote store stand-in for an outage: every call fails."""

    def __init__(self):
        self.calls = []

    def _fail(self, name):
        self.calls.append(name)
        raise TransientStoreError(f"{name}: connection refused")

    def ping(self):
        self._fail("ping")

    def list_quizzes(self):
        self._fail("list_quizzes")

    def get_quiz(self, quiz_id):
        self._fail("get_quiz")

    def create_quiz(self, quiz):
        self._fail("create_quiz")

    def save_result(self, result):
        self._fail("save_result")

    def list_history(self):
        self._fail("list_history")

    def list_results_for_quiz(self, quiz_id):
        self._fail("list_results_for_quiz")

    def delete_quiz(self, quiz_id):
        self._fail("delete_quiz")


class BrokenStorage:
    """Local storage that reads as empty and refuses every write."""

    def get(self, key):
        return None

    def set(self, key, value):
        raise LocalStoreError("disk full")


def make_quiz(title="Capitals", n_questions=2, **overrides) -> QuizCreate:
    questions = [
        {
            "id": f"q{i}",
            "text": f"Question {i}?",
            "options": [f"Option {i}-{j}" for j in range(4)],
            "correct_answer": i % 4,
        }
        for i in range(n_questions)
    ]
    data = {
        "title": title,
        "description": f"{title} description",
        "questions": questions,
        "category": "Geography",
        "time_limit": 5,
    }
    data.update(overrides)
    return QuizCreate(**data)


def make_result(quiz_id, score=1, total=2, completed_at=None, user_name="Ada") -> QuizResult:
    return QuizResult(
        quiz_id=quiz_id,
        score=score,
        total_questions=total,
        time_taken=42,
        completed_at=completed_at or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        user_name=user_name,
        answers=[{"question_id": "q0", "selected_answer": 0}],
    )


@pytest.fixture
def engine():
    engine = get_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def remote_store(engine):
    return RemoteQuizStore(get_session_factory(engine))


@pytest.fixture
def failing_remote():
    return FailingRemoteStore()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def local_store(storage):
    return LocalQuizStore(storage)


@pytest.fixture
def persistence(remote_store, local_store):
    return QuizPersistence(remote_store, local_store)


@pytest.fixture
def offline_persistence(failing_remote, local_store):
    return QuizPersistence(failing_remote, local_store)


@pytest.fixture
def client_for():
    """Build a TestClient whose persistence dependency is the given adapter."""

    def _client(persistence):
        app.dependency_overrides[get_persistence] = lambda: persistence
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
