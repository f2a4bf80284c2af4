"""
Wiring of the persistence adapter used by the API
"""
from functools import lru_cache

from quizmaster.config import settings
from quizmaster.database import SessionLocal
from quizmaster.services.local_store import LocalQuizStore
from quizmaster.services.persistence import QuizPersistence
from quizmaster.services.remote_store import RemoteQuizStore
from quizmaster.utils.storage import build_storage


@lru_cache()
def get_persistence() -> QuizPersistence:
    """
    Build the adapter once from settings

    Tests replace this dependency through app.dependency_overrides.
    """
    storage = build_storage(
        settings.LOCAL_STORE_BACKEND,
        path=settings.LOCAL_STORE_PATH,
        redis_url=settings.REDIS_URL,
    )
    local = LocalQuizStore(
        storage,
        quizzes_key=settings.LOCAL_QUIZZES_KEY,
        history_key=settings.QUIZ_HISTORY_KEY,
    )
    remote = RemoteQuizStore(SessionLocal)
    return QuizPersistence(remote, local)
