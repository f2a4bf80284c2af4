"""
Pydantic schemas for quiz results, submissions and history
"""
from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional
from datetime import datetime

ANONYMOUS = "Anonymous"
UNKNOWN_QUIZ = "Unknown Quiz"


class AnswerRecord(BaseModel):
    """Selected option for a single question"""
    question_id: str
    selected_answer: int


class QuizResult(BaseModel):
    """A completed attempt"""
    quiz_id: str
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)
    time_taken: int = Field(..., ge=0, description="Seconds")
    completed_at: datetime
    user_name: str = ANONYMOUS
    answers: List[AnswerRecord] = Field(default_factory=list)
    
    @model_validator(mode="after")
    def score_within_total(self):
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed total_questions")
        return self


class StoredResult(QuizResult):
    """A result as kept in history, with the id its store minted"""
    id: str


class HistoryEntry(StoredResult):
    """History row with its quiz title and category resolved"""
    quiz_title: str = UNKNOWN_QUIZ
    category: Optional[str] = None


class QuizSubmission(BaseModel):
    """Answers submitted at the end of a quiz"""
    answers: Dict[str, int] = Field(default_factory=dict)  # {question_id: selected index}
    time_taken: int = Field(0, ge=0, description="Seconds")
    user_name: str = ANONYMOUS


class SaveResultResponse(BaseModel):
    """Id of the saved result (None when both stores failed)"""
    result_id: Optional[str] = None
    source: str


class SubmissionResponse(BaseModel):
    """Graded attempt returned to the quiz taker"""
    quiz_id: str
    score: int
    total_questions: int
    percentage: int
    score_display: str
    time_taken: int
    time_display: str
    message: str
    celebrate: bool
    result_id: Optional[str] = None
    source: str


class HistoryResponse(BaseModel):
    """Attempt history and the path that produced it"""
    results: List[HistoryEntry]
    total: int
    source: str
