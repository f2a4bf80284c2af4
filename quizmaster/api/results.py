"""
Quiz result and history API endpoints
"""
from fastapi import APIRouter, Depends
import logging

from quizmaster.dependencies import get_persistence
from quizmaster.schemas.result import HistoryResponse, QuizResult, SaveResultResponse
from quizmaster.services.persistence import QuizPersistence

router = APIRouter(prefix="/api/results", tags=["results"])
logger = logging.getLogger(__name__)


@router.post("", response_model=SaveResultResponse, status_code=201)
async def save_result(
    result: QuizResult,
    persistence: QuizPersistence = Depends(get_persistence),
):
    """
    Save a completed attempt

    Falls back to the local store; result_id is null only when both
    stores rejected the result.
    """
    saved = persistence.save_result(result)
    return SaveResultResponse(result_id=saved.value, source=saved.outcome.value)


@router.get("/history", response_model=HistoryResponse)
async def get_history(persistence: QuizPersistence = Depends(get_persistence)):
    """
    Attempt history, newest first

    Remote history when available, otherwise local history with quiz
    titles resolved where possible.
    """
    history = persistence.list_history()
    return HistoryResponse(
        results=history.value,
        total=len(history.value),
        source=history.outcome.value,
    )
