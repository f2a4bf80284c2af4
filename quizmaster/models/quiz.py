"""
Quiz model - quiz metadata, questions live in their own table
"""
from sqlalchemy import Column, String, Text, Integer, DateTime, Uuid
from sqlalchemy.orm import relationship
from quizmaster.database import Base
from quizmaster.models.columns import utcnow
import uuid


class Quiz(Base):
    """
    Quizzes table - one row per quiz, ids are minted by the database layer
    """
    __tablename__ = "quizzes"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100))
    time_limit = Column(Integer)  # minutes
    author = Column(String(255), index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    
    questions = relationship(
        "Question",
        back_populates="quiz",
        order_by="Question.position",
        cascade="all, delete-orphan",
    )
    results = relationship(
        "QuizResult",
        back_populates="quiz",
        cascade="all, delete-orphan",
    )
    
    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title})>"
