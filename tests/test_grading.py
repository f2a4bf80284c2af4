"""Tests for grading and the quiz countdown."""

from datetime import datetime, timezone

import pytest

from quizmaster.schemas.quiz import Quiz
from quizmaster.schemas.result import QuizSubmission
from quizmaster.services.grading_service import GradingService
from quizmaster.services.quiz_timer import QuizCountdown, format_time
from tests.conftest import make_quiz

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _quiz(n_questions=4, time_limit=5) -> Quiz:
    data = make_quiz(n_questions=n_questions, time_limit=time_limit).model_dump()
    return Quiz(id="quiz-1", created_at=NOW, updated_at=NOW, **data)


@pytest.fixture
def grader():
    return GradingService()


class TestGradeSubmission:

    def test_counts_correct_answers(self, grader):
        quiz = _quiz()
        answers = {q.id: q.correct_answer for q in quiz.questions[:3]}
        answers[quiz.questions[3].id] = (quiz.questions[3].correct_answer + 1) % 4

        graded = grader.grade_submission(quiz, QuizSubmission(answers=answers, time_taken=30))

        assert graded.result.score == 3
        assert graded.result.total_questions == 4
        assert graded.percentage == 75
        assert graded.score_display == "3/4"
        assert graded.message == "Great job! You know your stuff!"
        assert graded.celebrate

    def test_unanswered_and_unknown_questions(self, grader):
        quiz = _quiz()
        submission = QuizSubmission(answers={"nope": 0})

        graded = grader.grade_submission(quiz, submission)

        assert graded.result.score == 0
        assert graded.result.answers == []
        assert graded.message == "Keep studying! You'll get there."
        assert not graded.celebrate

    def test_time_taken_clamped_to_limit(self, grader):
        graded = grader.grade_submission(_quiz(time_limit=1), QuizSubmission(time_taken=500))
        assert graded.result.time_taken == 60
        assert graded.time_display == "1:00"

    def test_time_within_limit_is_kept(self, grader):
        graded = grader.grade_submission(_quiz(time_limit=5), QuizSubmission(time_taken=125))
        assert graded.result.time_taken == 125
        assert graded.time_display == "2:05"

    def test_time_taken_unclamped_without_limit(self, grader):
        graded = grader.grade_submission(_quiz(time_limit=None), QuizSubmission(time_taken=500))
        assert graded.result.time_taken == 500

    def test_blank_name_becomes_anonymous(self, grader):
        graded = grader.grade_submission(_quiz(), QuizSubmission(user_name="   "))
        assert graded.result.user_name == "Anonymous"

    def test_empty_quiz(self, grader):
        graded = grader.grade_submission(_quiz(n_questions=0), QuizSubmission(), completed_at=NOW)
        assert graded.percentage == 0
        assert graded.result.completed_at == NOW

    @pytest.mark.parametrize("percentage,message", [
        (100, "Excellent! You're a master of this subject!"),
        (90, "Excellent! You're a master of this subject!"),
        (70, "Great job! You know your stuff!"),
        (50, "Good effort! Keep practicing to improve."),
        (49, "Keep studying! You'll get there."),
    ])
    def test_message_tiers(self, grader, percentage, message):
        assert grader.result_message(percentage) == message


class TestQuizCountdown:

    def test_counts_down_only_after_start(self):
        countdown = QuizCountdown(1)
        assert countdown.tick() == 60
        countdown.start()
        assert countdown.tick() == 59
        assert countdown.display() == "0:59"

    def test_pause_stops_ticks(self):
        countdown = QuizCountdown(1)
        countdown.start()
        countdown.pause()
        assert countdown.tick() == 60
        assert countdown.toggle_pause() is False
        assert countdown.tick() == 59

    def test_expiry_fires_once(self):
        fired = []
        countdown = QuizCountdown(1, on_expire=lambda: fired.append(True))
        countdown.start()

        for _ in range(65):
            countdown.tick()

        assert countdown.remaining == 0
        assert countdown.expired
        assert fired == [True]

    def test_advance_stops_at_zero(self):
        fired = []
        countdown = QuizCountdown(2, on_expire=lambda: fired.append(True))
        countdown.start()

        assert countdown.advance(45) == 75
        assert countdown.elapsed == 45
        assert countdown.advance(500) == 0
        assert countdown.elapsed == 120
        assert countdown.advance(10) == 0
        assert fired == [True]

    def test_untimed_quiz_has_no_countdown(self):
        countdown = QuizCountdown(None)
        countdown.start()
        assert countdown.tick() is None
        assert countdown.display() == ""
        assert countdown.elapsed is None

    @pytest.mark.parametrize("seconds,expected", [(0, "0:00"), (65, "1:05"), (600, "10:00"), (-3, "0:00")])
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected
