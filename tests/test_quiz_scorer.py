"""
Tests for quiz scoring.
"""
import pytest
from app.models.schemas import Question, QuizVerdict
from app.services.quiz_scorer import score_quiz, score_percentage, verdict_for
from app.utils.exceptions import InvalidInputError


def make_questions(correct_indexes):
    return [
        Question(question=f"Q{number}", options=["a", "b", "c", "d"], correct=correct, explanation=f"E{number}")
        for number, correct in enumerate(correct_indexes)
    ]


def test_all_correct():
    result = score_quiz("SQL", make_questions([0, 2]), [0, 2])

    assert result.score == 2
    assert result.total == 2
    assert result.percentage == 100
    assert result.verdict == QuizVerdict.GREAT
    assert result.message == "🎉 Great Job!"


def test_missing_and_null_answers_are_wrong():
    result = score_quiz("SQL", make_questions([0, 1, 2, 3]), [0, None])

    assert result.score == 1
    assert result.percentage == 25
    assert result.verdict == QuizVerdict.KEEP_STUDYING
    assert [entry.selected for entry in result.review] == [0, None, None, None]
    assert [entry.is_correct for entry in result.review] == [True, False, False, False]
    assert result.review[0].explanation == "E0"


# (score, total, expected percentage)
ROUNDING_CASES = [
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (5, 8, 63),
    (0, 5, 0),
]


@pytest.mark.parametrize("score,total,expected", ROUNDING_CASES)
def test_percentage_rounds_half_up(score, total, expected):
    assert score_percentage(score, total) == expected


@pytest.mark.parametrize("percentage,verdict", [
    (100, QuizVerdict.GREAT),
    (70, QuizVerdict.GREAT),
    (69, QuizVerdict.GOOD),
    (50, QuizVerdict.GOOD),
    (49, QuizVerdict.KEEP_STUDYING),
    (0, QuizVerdict.KEEP_STUDYING),
])
def test_verdict_thresholds(percentage, verdict):
    assert verdict_for(percentage) == verdict


def test_no_questions_rejected():
    with pytest.raises(InvalidInputError):
        score_quiz("Empty", [], [])


def test_too_many_answers_rejected():
    with pytest.raises(InvalidInputError):
        score_quiz("SQL", make_questions([0]), [0, 1])
