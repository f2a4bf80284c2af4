"""Tests for loading the sample quizzes."""

import quizmaster.seed as seed_module
from quizmaster.data.sample_quizzes import SAMPLE_QUIZZES


def test_seed_creates_each_sample_once(monkeypatch, persistence):
    monkeypatch.setattr(seed_module, "get_persistence", lambda: persistence)

    first = seed_module.seed()
    second = seed_module.seed()

    assert len(first) == len(SAMPLE_QUIZZES)
    assert second == []
    titles = [quiz.title for quiz in persistence.list_quizzes().value]
    assert sorted(titles) == sorted(quiz.title for quiz in SAMPLE_QUIZZES)


def test_sample_quizzes_have_valid_answer_keys():
    for quiz in SAMPLE_QUIZZES:
        assert len(quiz.questions) == 5
        assert all(len(q.options) == 4 for q in quiz.questions)
