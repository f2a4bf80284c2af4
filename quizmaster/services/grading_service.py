"""
Quiz grading service
Scores a submission against the quiz answer key and builds the result to save
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from quizmaster.models.columns import utcnow
from quizmaster.schemas.quiz import Quiz
from quizmaster.schemas.result import ANONYMOUS, AnswerRecord, QuizResult, QuizSubmission
from quizmaster.services.quiz_timer import QuizCountdown, format_time

logger = logging.getLogger(__name__)


@dataclass
class GradedAttempt:
    """Outcome of grading one submission"""
    result: QuizResult
    percentage: int
    message: str
    celebrate: bool

    @property
    def score_display(self) -> str:
        return f"{self.result.score}/{self.result.total_questions}"

    @property
    def time_display(self) -> str:
        return format_time(self.result.time_taken)


class GradingService:
    """
    Exact-match grading for 4-option questions

    Message tiers by percentage: 90 / 70 / 50. Scores of 70% or more
    are celebrated.
    """
    
    CELEBRATE_THRESHOLD = 0.7
    
    MESSAGE_TIERS = [
        (90, "Excellent! You're a master of this subject!"),
        (70, "Great job! You know your stuff!"),
        (50, "Good effort! Keep practicing to improve."),
    ]
    FALLBACK_MESSAGE = "Keep studying! You'll get there."
    
    def grade_submission(
        self,
        quiz: Quiz,
        submission: QuizSubmission,
        completed_at: Optional[datetime] = None
    ) -> GradedAttempt:
        """
        Grade a submission
        
        Args:
            quiz: Quiz with its questions and answer key
            submission: Selected option per question id
            completed_at: Completion time (defaults to now)
            
        Returns:
            GradedAttempt with the QuizResult ready to save
        """
        total_questions = len(quiz.questions)
        score = sum(
            1 for question in quiz.questions
            if submission.answers.get(question.id) == question.correct_answer
        )
        
        known_ids = {question.id for question in quiz.questions}
        answers = [
            AnswerRecord(question_id=question_id, selected_answer=selected)
            for question_id, selected in submission.answers.items()
            if question_id in known_ids
        ]
        
        result = QuizResult(
            quiz_id=quiz.id,
            score=score,
            total_questions=total_questions,
            time_taken=self._clamp_time_taken(submission.time_taken, quiz.time_limit),
            completed_at=completed_at or utcnow(),
            user_name=submission.user_name.strip() or ANONYMOUS,
            answers=answers,
        )
        
        percentage = round(score / total_questions * 100) if total_questions else 0
        celebrate = bool(total_questions) and score / total_questions >= self.CELEBRATE_THRESHOLD
        
        logger.info(f"Quiz {quiz.id} graded: {score}/{total_questions} ({percentage}%)")
        
        return GradedAttempt(
            result=result,
            percentage=percentage,
            message=self.result_message(percentage),
            celebrate=celebrate,
        )
    
    def result_message(self, percentage: int) -> str:
        for threshold, message in self.MESSAGE_TIERS:
            if percentage >= threshold:
                return message
        return self.FALLBACK_MESSAGE
    
    @staticmethod
    def _clamp_time_taken(time_taken: int, time_limit: Optional[int]) -> int:
        # Replay the attempt on the quiz countdown, which auto-submits at zero
        countdown = QuizCountdown(time_limit)
        if countdown.limit_seconds is None:
            return time_taken
        countdown.start()
        countdown.advance(time_taken)
        return countdown.elapsed


# Global instance
grading_service = GradingService()
