"""
Quiz scoring for submitted answers.
"""
import math
from typing import List, Optional
from app.core.logging_config import logger
from app.models.schemas import Question, QuizResult, QuizVerdict, QuestionReview
from app.utils.exceptions import InvalidInputError


GREAT_THRESHOLD = 70
GOOD_THRESHOLD = 50

VERDICT_MESSAGES = {
    QuizVerdict.GREAT: "🎉 Great Job!",
    QuizVerdict.GOOD: "👍 Good Effort!",
    QuizVerdict.KEEP_STUDYING: "📚 Keep Studying!",
}


def score_percentage(score: int, total: int) -> int:
    """Percentage rounded half up."""
    return int(math.floor(score / total * 100 + 0.5))


def verdict_for(percentage: int) -> QuizVerdict:
    if percentage >= GREAT_THRESHOLD:
        return QuizVerdict.GREAT
    if percentage >= GOOD_THRESHOLD:
        return QuizVerdict.GOOD
    return QuizVerdict.KEEP_STUDYING


def score_quiz(topic_name: str, questions: List[Question], answers: List[Optional[int]]) -> QuizResult:
    """
    Score submitted answers against a topic's questions.

    Args:
        topic_name: Topic the quiz belongs to
        questions: Questions in display order
        answers: Selected option index per question; None or a missing tail means unanswered

    Returns:
        QuizResult with score, percentage, verdict and per-question review

    Raises:
        InvalidInputError: If there are no questions or more answers than questions
    """
    if not questions:
        raise InvalidInputError("Cannot score a quiz with no questions")
    if len(answers) > len(questions):
        raise InvalidInputError(
            f"Received {len(answers)} answers for {len(questions)} questions"
        )

    review = []
    for position, question in enumerate(questions):
        selected = answers[position] if position < len(answers) else None
        review.append(QuestionReview(
            question=question.question,
            selected=selected,
            correct=question.correct,
            is_correct=selected == question.correct,
            explanation=question.explanation
        ))

    score = sum(1 for entry in review if entry.is_correct)
    percentage = score_percentage(score, len(questions))
    verdict = verdict_for(percentage)

    logger.info(f"[QuizScorer] '{topic_name}': {score}/{len(questions)} ({percentage}%) → {verdict.value}")

    return QuizResult(
        topic_name=topic_name,
        score=score,
        total=len(questions),
        percentage=percentage,
        verdict=verdict,
        message=VERDICT_MESSAGES[verdict],
        review=review
    )
