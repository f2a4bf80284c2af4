"""
Pydantic schemas for quizzes and questions
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class Question(BaseModel):
    """Multiple-choice question with exactly four options"""
    id: str
    text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer: int = Field(0, ge=0, le=3, description="Index of the correct option")
    
    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Question text must not be empty")
        return value
    
    @field_validator("options")
    @classmethod
    def options_not_blank(cls, value: List[str]) -> List[str]:
        if any(not option.strip() for option in value):
            raise ValueError("Option text must not be empty")
        return value


class QuizCreate(BaseModel):
    """Request schema for quiz creation"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    questions: List[Question] = Field(default_factory=list)
    category: Optional[str] = None
    time_limit: Optional[int] = Field(None, gt=0, description="Time limit in minutes")
    author: Optional[str] = None
    
    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Field must not be empty")
        return value

    @field_validator("category", "author")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class Quiz(QuizCreate):
    """A stored quiz, remote or local"""
    id: str
    created_at: datetime
    updated_at: datetime


class QuizListResponse(BaseModel):
    """Merged quiz listing and the path that produced it"""
    quizzes: List[Quiz]
    total: int
    source: str


class QuizCreateResponse(BaseModel):
    """Response after quiz creation"""
    quiz_id: str
    source: str


class BulkParseRequest(BaseModel):
    """Free-form text to convert into questions"""
    text: str


class BulkParseResponse(BaseModel):
    """Questions parsed from bulk text"""
    questions: List[Question]
    total_questions: int
