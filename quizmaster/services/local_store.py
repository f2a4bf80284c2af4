"""
Local fallback store: two JSON lists kept in key-value storage
"""
import json
import logging
import uuid
from typing import List, Optional

from pydantic import ValidationError

from quizmaster.exceptions import LocalStoreError
from quizmaster.models.columns import utcnow
from quizmaster.schemas.quiz import Quiz, QuizCreate
from quizmaster.schemas.result import QuizResult, StoredResult
from quizmaster.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class LocalQuizStore:
    """
    Author-created quizzes and attempt history persisted locally

    Every write is a read-modify-write of the whole list without locking.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        quizzes_key: str = "localQuizzes",
        history_key: str = "quizHistory"
    ):
        self.storage = storage
        self.quizzes_key = quizzes_key
        self.history_key = history_key

    def _read_list(self, key: str) -> list:
        raw = self.storage.get(key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            raise LocalStoreError(f"Corrupt local list under {key}: {str(e)}") from e
        if not isinstance(items, list):
            raise LocalStoreError(f"Corrupt local list under {key}: not a list")
        return items

    def _write_list(self, key: str, items: list) -> None:
        self.storage.set(key, json.dumps(items))

    def _read_or_reset(self, key: str) -> list:
        """Existing list for an append, or an empty one if it cannot be read"""
        try:
            return self._read_list(key)
        except LocalStoreError as e:
            logger.error(f"Error reading local store: {str(e)}")
            return []

    def load_quizzes(self) -> List[Quiz]:
        """
        All locally created quizzes, empty when missing or corrupt
        """
        try:
            return [Quiz.model_validate(item) for item in self._read_list(self.quizzes_key)]
        except (LocalStoreError, ValidationError) as e:
            logger.error(f"Error reading local quizzes: {str(e)}")
            return []

    def find_quiz(self, quiz_id: str) -> Optional[Quiz]:
        for quiz in self.load_quizzes():
            if quiz.id == quiz_id:
                return quiz
        return None

    def add_quiz(self, quiz: QuizCreate) -> Quiz:
        """
        Mint an id for the quiz and append it to the local list

        Raises:
            LocalStoreError: Storage write failed
        """
        now = utcnow()
        stored = Quiz(
            id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            **quiz.model_dump()
        )

        items = self._read_or_reset(self.quizzes_key)
        items.append(stored.model_dump(mode="json"))
        self._write_list(self.quizzes_key, items)

        logger.info(f"Quiz saved locally with ID: {stored.id}")
        return stored

    def load_history(self) -> List[StoredResult]:
        """
        Locally saved results in insertion order

        Raises:
            LocalStoreError: History exists but cannot be read
        """
        try:
            return [
                StoredResult.model_validate(item)
                for item in self._read_list(self.history_key)
            ]
        except ValidationError as e:
            raise LocalStoreError(f"Corrupt local history: {str(e)}") from e

    def append_result(self, result: QuizResult) -> str:
        """
        Append a result with a fresh id and return that id

        Raises:
            LocalStoreError: Storage write failed
        """
        stored = StoredResult(id=str(uuid.uuid4()), **result.model_dump())

        items = self._read_or_reset(self.history_key)
        items.append(stored.model_dump(mode="json"))
        self._write_list(self.history_key, items)

        logger.info(f"Saved result locally with ID: {stored.id}")
        return stored.id
