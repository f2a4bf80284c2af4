"""
Database models package
"""
from quizmaster.models.quiz import Quiz
from quizmaster.models.question import Question
from quizmaster.models.quiz_result import QuizResult

__all__ = ["Quiz", "Question", "QuizResult"]
