"""
Dual-store persistence adapter

Remote first, local fallback. Every operation reports which path produced
its value through a StoreResult outcome instead of surfacing remote errors.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar

from quizmaster.exceptions import LocalStoreError, QuizNotFoundError, TransientStoreError
from quizmaster.schemas.quiz import Quiz, QuizCreate
from quizmaster.schemas.result import HistoryEntry, QuizResult, StoredResult, UNKNOWN_QUIZ
from quizmaster.services.local_store import LocalQuizStore
from quizmaster.services.remote_store import RemoteQuizStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreOutcome(str, Enum):
    """Which path produced a StoreResult"""
    OK = "ok"
    REMOTE_FAILED_USED_LOCAL = "remote_failed_used_local"
    FAILED = "failed"


@dataclass
class StoreResult(Generic[T]):
    """Value of a persistence call tagged with the path that produced it"""
    value: T
    outcome: StoreOutcome = StoreOutcome.OK
    error: Optional[Exception] = None

    @property
    def used_local(self) -> bool:
        return self.outcome == StoreOutcome.REMOTE_FAILED_USED_LOCAL


def _completed_key(entry: HistoryEntry) -> datetime:
    # Remote drivers may hand back naive timestamps; they are stored as UTC
    completed_at = entry.completed_at
    if completed_at.tzinfo is None:
        return completed_at.replace(tzinfo=timezone.utc)
    return completed_at


class QuizPersistence:
    """
    Uniform quiz/result interface over a remote and a local store

    Remote and local quiz ids are separate namespaces: listings concatenate
    them and nothing reconciles the two.
    """

    def __init__(self, remote: RemoteQuizStore, local: LocalQuizStore):
        self.remote = remote
        self.local = local

    def list_quizzes(self) -> StoreResult[List[Quiz]]:
        """
        Remote quiz summaries followed by local quizzes

        Either side failing contributes an empty list.
        """
        outcome = StoreOutcome.OK
        error = None
        remote_quizzes: List[Quiz] = []

        try:
            remote_quizzes = self.remote.list_quizzes()
        except TransientStoreError as e:
            logger.warning(f"Error fetching quizzes from remote store: {str(e)}")
            outcome = StoreOutcome.REMOTE_FAILED_USED_LOCAL
            error = e

        local_quizzes = self.local.load_quizzes()

        return StoreResult(remote_quizzes + local_quizzes, outcome, error)

    def get_quiz_by_id(self, quiz_id: str) -> StoreResult[Quiz]:
        """
        Full quiz with questions, remote first then the local list

        Raises:
            QuizNotFoundError: Neither store has the quiz
        """
        error: Optional[Exception] = None
        try:
            quiz = self.remote.get_quiz(quiz_id)
            if quiz is not None:
                return StoreResult(quiz)
            logger.info(f"Quiz {quiz_id} not in remote store, checking local store")
        except TransientStoreError as e:
            logger.warning(f"Error getting quiz from remote store, checking local store: {str(e)}")
            error = e

        local_quiz = self.local.find_quiz(quiz_id)
        if local_quiz is not None:
            logger.info(f"Found quiz in local store: {local_quiz.title}")
            return StoreResult(local_quiz, StoreOutcome.REMOTE_FAILED_USED_LOCAL, error)

        raise QuizNotFoundError(quiz_id)

    def create_quiz(self, quiz: QuizCreate) -> StoreResult[str]:
        """
        Create a quiz remotely, or locally when the quiz row insert fails

        Raises:
            LocalStoreError: The local fallback could not be written either
        """
        try:
            return StoreResult(self.remote.create_quiz(quiz))
        except TransientStoreError as e:
            logger.warning(f"Remote quiz creation failed, using local fallback: {str(e)}")
            stored = self.local.add_quiz(quiz)
            return StoreResult(stored.id, StoreOutcome.REMOTE_FAILED_USED_LOCAL, e)

    def save_result(self, result: QuizResult) -> StoreResult[Optional[str]]:
        """
        Save a completed attempt; never raises

        Returns:
            Result id from whichever store accepted it, None if neither did
        """
        try:
            return StoreResult(self.remote.save_result(result))
        except TransientStoreError as e:
            logger.warning(f"Error saving result to remote store, saving locally: {str(e)}")
            remote_error = e

        try:
            result_id = self.local.append_result(result)
            return StoreResult(result_id, StoreOutcome.REMOTE_FAILED_USED_LOCAL, remote_error)
        except LocalStoreError as e:
            logger.error(f"Error saving result to local store: {str(e)}")
            return StoreResult(None, StoreOutcome.FAILED, e)

    def list_history(self) -> StoreResult[List[HistoryEntry]]:
        """
        Attempt history, newest first

        An empty or failing remote read falls back to local history, with
        each entry's quiz title and category resolved best-effort.
        """
        remote_error: Optional[Exception] = None
        try:
            entries = self.remote.list_history()
            if entries:
                return StoreResult(entries)
        except TransientStoreError as e:
            logger.warning(f"Error getting history from remote store, checking local store: {str(e)}")
            remote_error = e

        try:
            local_results = self.local.load_history()
        except LocalStoreError as e:
            logger.error(f"Error reading history from local store: {str(e)}")
            return StoreResult([], StoreOutcome.FAILED, e)

        history = [self._resolve_entry(result) for result in local_results]
        history.sort(key=_completed_key, reverse=True)

        outcome = StoreOutcome.REMOTE_FAILED_USED_LOCAL if remote_error else StoreOutcome.OK
        return StoreResult(history, outcome, remote_error)

    def _resolve_entry(self, result: StoredResult) -> HistoryEntry:
        quiz_title = UNKNOWN_QUIZ
        category = None
        try:
            quiz = self.get_quiz_by_id(result.quiz_id).value
            quiz_title = quiz.title
            category = quiz.category
        except QuizNotFoundError:
            logger.debug(f"No quiz found for history entry {result.id}")

        return HistoryEntry(quiz_title=quiz_title, category=category, **result.model_dump())


async def create_quiz_with_retry(
    persistence: QuizPersistence,
    quiz: QuizCreate,
    max_attempts: int = 2,
    delay: float = 1.0,
    sleep: Callable[[float], Any] = asyncio.sleep
) -> StoreResult[str]:
    """
    Run the whole create call up to max_attempts times

    Args:
        persistence: Adapter to create the quiz through
        quiz: Quiz to create
        max_attempts: Total attempts before giving up
        delay: Seconds to wait between attempts
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        StoreResult of the first successful attempt

    Raises:
        The last attempt's error once all attempts fail
    """
    attempts = max(max_attempts, 1)
    for attempt in range(1, attempts + 1):
        logger.info(f"Attempt {attempt} to create quiz...")
        try:
            return persistence.create_quiz(quiz)
        except Exception as e:
            logger.error(f"Error on attempt {attempt}: {str(e)}")
            if attempt >= attempts:
                raise
            await sleep(delay)
