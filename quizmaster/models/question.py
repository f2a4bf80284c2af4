"""
Question model - ordered 4-option questions belonging to a quiz
"""
from sqlalchemy import Column, Text, Integer, DateTime, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from quizmaster.database import Base
from quizmaster.models.columns import JSONType, utcnow
import uuid


class Question(Base):
    """
    Questions table - options stored as a JSON array of four strings
    """
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("correct_answer >= 0 AND correct_answer <= 3", name="correct_answer_range"),
    )
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    options = Column(JSONType, nullable=False)  # ["opt A", "opt B", "opt C", "opt D"]
    correct_answer = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    
    quiz = relationship("Quiz", back_populates="questions")
    
    def __repr__(self):
        return f"<Question(id={self.id}, quiz_id={self.quiz_id}, position={self.position})>"
