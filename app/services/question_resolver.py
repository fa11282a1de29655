"""
Question resolver.
Resolves quiz questions for a topic in three stages, first success wins:
1. Bank match against the subject's canonical topic names
2. Template synthesis from the subject's question templates
3. A single generic fallback question
"""
from typing import List, Optional
from app.core.logging_config import logger
from app.models.schemas import (
    SubjectCategory,
    QuestionType,
    Question,
    QuestionTemplate,
    TopicRecord
)
from app.services.question_bank import get_bank, get_templates
from app.utils.exceptions import TemplateGenerationError


MAX_QUESTIONS = 5
MAX_TEMPLATE_QUESTIONS = 3


def match_bank_questions(topic_name: str, subject: SubjectCategory) -> Optional[List[Question]]:
    """
    Find the first canonical bank topic that contains, or is contained in, the topic name.

    Args:
        topic_name: Parsed topic name
        subject: Subject whose bank is searched

    Returns:
        Copy of the matched topic's questions, or None
    """
    name = topic_name.lower()
    for bank_topic, bank_questions in get_bank(subject).items():
        key = bank_topic.lower()
        if key in name or name in key:
            logger.info(f"[Resolver] Bank match: '{topic_name}' → '{bank_topic}'")
            return [question.model_copy(deep=True) for question in bank_questions]
    return None


def build_template_options(question_type: QuestionType, topic_name: str, subject: SubjectCategory) -> List[str]:
    """Fixed option set for a template type; the first option is always correct."""
    if question_type == QuestionType.DEFINITION:
        return [
            f"{topic_name} is a key concept in {subject.value}",
            f"{topic_name} is not related to this subject",
            f"{topic_name} is only theoretical",
            f"{topic_name} is outdated",
        ]
    if question_type == QuestionType.CHARACTERISTIC:
        return [
            "It is fundamental to understanding the subject",
            "It has no practical applications",
            "It is only used in research",
            "It is being phased out",
        ]
    if question_type == QuestionType.PURPOSE:
        return [
            "To provide essential knowledge for the subject",
            "To make the subject more difficult",
            "To confuse students",
            "To fill curriculum requirements",
        ]
    return [
        f"Understanding {topic_name} involves studying its key concepts and applications",
        f"{topic_name} is not important",
        f"{topic_name} is optional",
        f"{topic_name} is deprecated",
    ]


def generate_question_from_template(
    template: QuestionTemplate,
    topic: TopicRecord,
    subject: SubjectCategory
) -> Question:
    """
    Fill a template with the topic name.

    Raises:
        TemplateGenerationError: If the template cannot be filled in
    """
    try:
        return Question(
            question=template.template.replace("{topic}", topic.name, 1),
            options=build_template_options(template.type, topic.name, subject),
            correct=0,
            explanation=f"{topic.name} is an important topic that requires thorough understanding."
        )
    except Exception as e:
        raise TemplateGenerationError(f"Template '{template.template}' failed for '{topic.name}': {e}") from e


def synthesize_questions(topic: TopicRecord, subject: SubjectCategory) -> List[Question]:
    """Generate up to three questions from the subject's templates, skipping failures."""
    questions = []
    for template in get_templates(subject)[:MAX_TEMPLATE_QUESTIONS]:
        try:
            questions.append(generate_question_from_template(template, topic, subject))
        except TemplateGenerationError as e:
            logger.warning(f"[Resolver] Skipping template: {e}")
    return questions


def fallback_question(topic_name: str) -> Question:
    """Generic question used when nothing else produced one."""
    return Question(
        question=f"What is the main concept of {topic_name}?",
        options=[
            f"{topic_name} is a fundamental concept in this subject",
            f"{topic_name} is not relevant to this topic",
            f"{topic_name} is only used in advanced applications",
            f"{topic_name} is outdated and no longer used",
        ],
        correct=0,
        explanation=f"{topic_name} is an important topic that requires understanding of its core concepts and applications."
    )


def resolve_questions(topic: TopicRecord, subject: SubjectCategory) -> List[Question]:
    """
    Resolve quiz questions for a topic.

    Args:
        topic: Parsed topic record
        subject: Subject category of the whole syllabus

    Returns:
        Between 1 and 5 questions, order preserved
    """
    logger.info(f"[Resolver] Resolving questions for '{topic.name}' ({subject.value})")

    questions = match_bank_questions(topic.name, subject)

    if not questions:
        questions = synthesize_questions(topic, subject)
        logger.info(f"[Resolver] Synthesized {len(questions)} template questions for '{topic.name}'")

    if not questions:
        logger.warning(f"[Resolver] No questions for '{topic.name}', using generic fallback")
        questions = [fallback_question(topic.name)]

    return questions[:MAX_QUESTIONS]
