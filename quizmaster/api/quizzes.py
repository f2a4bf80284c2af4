"""
Quiz browsing, authoring and submission API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List, Optional
import logging
from quizmaster.config import settings
from quizmaster.dependencies import get_persistence
from quizmaster.exceptions import ParseError, QuizNotFoundError, TransientStoreError
from quizmaster.schemas.quiz import (
    BulkParseRequest,
    BulkParseResponse,
    Quiz,
    QuizCreate,
    QuizCreateResponse,
    QuizListResponse,
)
from quizmaster.schemas.result import HistoryEntry, QuizSubmission, SubmissionResponse
from quizmaster.services.grading_service import grading_service
from quizmaster.services.persistence import QuizPersistence, create_quiz_with_retry
from quizmaster.services.question_parser import parse_questions


router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


def _matches(quiz: Quiz, category: Optional[str], search: Optional[str]) -> bool:
    if category and quiz.category != category:
        return False
    if search:
        needle = search.lower()
        return needle in quiz.title.lower() or needle in quiz.description.lower()
    return True


@router.get("", response_model=QuizListResponse)
async def list_quizzes(
    category: Optional[str] = None,
    search: Optional[str] = None,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """
    List quizzes from the remote store followed by locally created ones

    - Remote entries carry no questions (loaded per quiz)
    - Optional category and title/description search filters
    """
    result = persistence.list_quizzes()
    quizzes = [quiz for quiz in result.value if _matches(quiz, category, search)]

    return QuizListResponse(
        quizzes=quizzes,
        total=len(quizzes),
        source=result.outcome.value,
    )


@router.get("/categories", response_model=List[str])
async def list_categories(persistence: QuizPersistence = Depends(get_persistence)):
    """Distinct categories across all listed quizzes"""
    result = persistence.list_quizzes()
    return sorted({quiz.category for quiz in result.value if quiz.category})


@router.post("/parse", response_model=BulkParseResponse)
async def parse_bulk_text(request: BulkParseRequest):
    """
    Convert pasted text into questions

    Blocks are separated by blank lines: a question line then four options.
    Mark the correct option with *, (correct) or a trailing ✓.
    """
    try:
        questions = parse_questions(request.text)
    except ParseError as e:
        logger.info(f"Bulk text rejected: {e.message}")
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "block_index": e.block_index},
        )

    return BulkParseResponse(questions=questions, total_questions=len(questions))


@router.post("", response_model=QuizCreateResponse, status_code=201)
async def create_quiz(
    quiz: QuizCreate,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """
    Create a quiz

    - Remote store first, local store when the remote insert fails
    - The whole create is retried after a short delay before giving up
    """
    logger.info(f"Attempting to create quiz '{quiz.title}' with {len(quiz.questions)} questions")

    try:
        result = await create_quiz_with_retry(
            persistence,
            quiz,
            max_attempts=settings.CREATE_QUIZ_MAX_ATTEMPTS,
            delay=settings.CREATE_QUIZ_RETRY_DELAY,
        )
    except Exception as e:
        logger.error(f"Failed to create quiz: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create quiz: {str(e)}")

    return QuizCreateResponse(quiz_id=result.value, source=result.outcome.value)


@router.get("/{quiz_id}", response_model=Quiz)
async def get_quiz(
    quiz_id: str,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """Get a quiz with its questions"""
    try:
        return persistence.get_quiz_by_id(quiz_id).value
    except QuizNotFoundError:
        raise HTTPException(status_code=404, detail="Quiz not found")


@router.delete("/{quiz_id}", status_code=204)
async def delete_quiz(
    quiz_id: str,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """Delete a remote quiz together with its questions and results"""
    try:
        deleted = persistence.remote.delete_quiz(quiz_id)
    except TransientStoreError as e:
        logger.error(f"Failed to delete quiz {quiz_id}: {str(e)}")
        raise HTTPException(status_code=503, detail="Quiz store is unavailable")

    if not deleted:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return Response(status_code=204)


@router.get("/{quiz_id}/results", response_model=List[HistoryEntry])
async def get_quiz_results(
    quiz_id: str,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """Results for one quiz, best score first"""
    try:
        return persistence.remote.list_results_for_quiz(quiz_id)
    except TransientStoreError as e:
        logger.error(f"Failed to fetch results for quiz {quiz_id}: {str(e)}")
        raise HTTPException(status_code=503, detail="Quiz store is unavailable")


@router.post("/{quiz_id}/submit", response_model=SubmissionResponse)
async def submit_quiz(
    quiz_id: str,
    submission: QuizSubmission,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """
    Grade a finished quiz and save the result

    Saving never fails the submission: the score is returned even when
    neither store accepted the result (result_id is then null).
    """
    try:
        quiz = persistence.get_quiz_by_id(quiz_id).value
    except QuizNotFoundError:
        raise HTTPException(status_code=404, detail="Quiz not found")

    graded = grading_service.grade_submission(quiz, submission)
    saved = persistence.save_result(graded.result)

    logger.info(f"Quiz result saving completed, result ID: {saved.value}")

    return SubmissionResponse(
        quiz_id=quiz.id,
        score=graded.result.score,
        total_questions=graded.result.total_questions,
        percentage=graded.percentage,
        score_display=graded.score_display,
        time_taken=graded.result.time_taken,
        time_display=graded.time_display,
        message=graded.message,
        celebrate=graded.celebrate,
        result_id=saved.value,
        source=saved.outcome.value,
    )
