"""
QuizResult model - one row per completed attempt
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from quizmaster.database import Base
from quizmaster.models.columns import JSONType, utcnow
import uuid


class QuizResult(Base):
    """
    Quiz results table - answers are embedded as JSON [{question_id, selected_answer}]
    """
    __tablename__ = "quiz_results"
    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= total_questions", name="score_validation"),
    )
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_name = Column(String(255), nullable=False, default="Anonymous")
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    time_taken = Column(Integer, nullable=False)  # seconds
    completed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    answers = Column(JSONType)
    
    quiz = relationship("Quiz", back_populates="results")
    
    def __repr__(self):
        return f"<QuizResult(quiz_id={self.quiz_id}, score={self.score}/{self.total_questions})>"
