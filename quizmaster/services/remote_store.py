"""
Remote store: quizzes, questions and results in the hosted relational database
"""
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from pydantic import ValidationError
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from quizmaster.exceptions import TransientStoreError
from quizmaster.models import Question as QuestionRow
from quizmaster.models import Quiz as QuizRow
from quizmaster.models import QuizResult as QuizResultRow
from quizmaster.schemas.quiz import Question, Quiz, QuizCreate
from quizmaster.schemas.result import HistoryEntry, QuizResult, UNKNOWN_QUIZ

logger = logging.getLogger(__name__)


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    """Remote ids are UUIDs; anything else cannot exist remotely"""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC; aware ones are converted to it"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _quiz_from_row(row: QuizRow, with_questions: bool = True) -> Quiz:
    questions = []
    if with_questions:
        questions = [
            Question(
                id=str(q.id),
                text=q.text,
                options=q.options,
                correct_answer=q.correct_answer
            )
            for q in row.questions
        ]

    return Quiz(
        id=str(row.id),
        title=row.title,
        description=row.description,
        questions=questions,
        created_at=row.created_at,
        updated_at=row.updated_at,
        category=row.category,
        time_limit=row.time_limit,
        author=row.author,
    )


def _history_from_row(row: QuizResultRow) -> HistoryEntry:
    quiz = row.quiz
    return HistoryEntry(
        id=str(row.id),
        quiz_id=str(row.quiz_id),
        quiz_title=quiz.title if quiz else UNKNOWN_QUIZ,
        category=quiz.category if quiz else None,
        user_name=row.user_name,
        score=row.score,
        total_questions=row.total_questions,
        time_taken=row.time_taken,
        completed_at=row.completed_at,
        answers=row.answers or [],
    )


class RemoteQuizStore:
    """
    Row-oriented access to the remote relations

    Every database failure is re-raised as TransientStoreError so the
    persistence adapter can decide whether to fall back.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
        except (SQLAlchemyError, ValidationError) as e:
            session.rollback()
            raise TransientStoreError(f"Remote store error: {str(e)}") from e
        finally:
            session.close()

    def ping(self) -> None:
        """Round trip to the database, raises TransientStoreError if unreachable"""
        with self._session() as session:
            session.execute(text("SELECT 1"))

    def list_quizzes(self) -> List[Quiz]:
        """Quiz summaries without their questions, newest first"""
        with self._session() as session:
            rows = session.scalars(
                select(QuizRow).order_by(QuizRow.created_at.desc())
            ).all()
            return [_quiz_from_row(row, with_questions=False) for row in rows]

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        """
        Quiz with its ordered questions in one round trip

        Returns:
            The quiz, or None when no row has this id
        """
        key = _as_uuid(quiz_id)
        if key is None:
            return None

        with self._session() as session:
            row = session.scalars(
                select(QuizRow)
                .options(joinedload(QuizRow.questions))
                .where(QuizRow.id == key)
            ).unique().first()
            return _quiz_from_row(row) if row else None

    def create_quiz(self, quiz: QuizCreate) -> str:
        """
        Insert the quiz row, then its questions as a separate batch

        The quiz id is assigned once the quiz row commits. A failure while
        inserting questions is logged and leaves the quiz in place.

        Returns:
            Database-generated quiz id
        """
        with self._session() as session:
            row = QuizRow(
                title=quiz.title,
                description=quiz.description,
                category=quiz.category,
                time_limit=quiz.time_limit,
                author=quiz.author,
            )
            session.add(row)
            session.commit()
            quiz_id = row.id

        logger.info(f"Quiz created successfully with ID: {quiz_id}")

        try:
            with self._session() as session:
                session.add_all([
                    QuestionRow(
                        quiz_id=quiz_id,
                        text=question.text,
                        options=list(question.options),
                        correct_answer=question.correct_answer,
                        position=position,
                    )
                    for position, question in enumerate(quiz.questions)
                ])
                session.commit()
            logger.info(f"Inserted {len(quiz.questions)} questions for quiz {quiz_id}")
        except TransientStoreError as e:
            logger.warning(f"Error creating questions but quiz was created: {str(e)}")

        return str(quiz_id)

    def save_result(self, result: QuizResult) -> str:
        """Insert a result row with its answers embedded as JSON"""
        quiz_key = _as_uuid(result.quiz_id)
        if quiz_key is None:
            raise TransientStoreError(f"Quiz {result.quiz_id} cannot exist in the remote store")

        with self._session() as session:
            row = QuizResultRow(
                quiz_id=quiz_key,
                user_name=result.user_name,
                score=result.score,
                total_questions=result.total_questions,
                time_taken=result.time_taken,
                completed_at=_as_utc(result.completed_at),
                answers=[answer.model_dump() for answer in result.answers],
            )
            session.add(row)
            session.commit()
            result_id = str(row.id)

        logger.info(f"Quiz result saved successfully to database with ID: {result_id}")
        return result_id

    def list_history(self) -> List[HistoryEntry]:
        """Results joined with their quiz title and category, newest first"""
        with self._session() as session:
            rows = session.scalars(
                select(QuizResultRow)
                .options(joinedload(QuizResultRow.quiz))
                .order_by(QuizResultRow.completed_at.desc())
            ).all()
            return [_history_from_row(row) for row in rows]

    def list_results_for_quiz(self, quiz_id: str) -> List[HistoryEntry]:
        """Results of a single quiz, best score first"""
        key = _as_uuid(quiz_id)
        if key is None:
            return []

        with self._session() as session:
            rows = session.scalars(
                select(QuizResultRow)
                .options(joinedload(QuizResultRow.quiz))
                .where(QuizResultRow.quiz_id == key)
                .order_by(QuizResultRow.score.desc(), QuizResultRow.completed_at.asc())
            ).all()
            return [_history_from_row(row) for row in rows]

    def delete_quiz(self, quiz_id: str) -> bool:
        """
        Delete a quiz with its questions and results

        Returns:
            False when no quiz has this id
        """
        key = _as_uuid(quiz_id)
        if key is None:
            return False

        with self._session() as session:
            row = session.get(QuizRow, key)
            if row is None:
                return False
            session.delete(row)
            session.commit()

        logger.info(f"Deleted quiz {quiz_id}")
        return True
