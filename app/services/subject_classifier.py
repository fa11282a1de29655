"""
Keyword-based subject classifier for syllabus text.
"""
from typing import List, Tuple
from app.core.logging_config import logger
from app.models.schemas import SubjectCategory


# Evaluated in order, first hit wins. "equation" appears under both science and
# mathematics; science is checked first so it takes the tie.
SUBJECT_RULES: List[Tuple[Tuple[str, ...], SubjectCategory]] = [
    (("database", "sql", "dbms", "normalization", "relational"), SubjectCategory.DATABASE),
    (("programming", "code", "function", "variable", "algorithm"), SubjectCategory.PROGRAMMING),
    (("physics", "chemistry", "biology", "formula", "equation"), SubjectCategory.SCIENCE),
    (("algebra", "calculus", "geometry", "mathematics", "equation"), SubjectCategory.MATHEMATICS),
]


def classify_subject(syllabus_text: str) -> SubjectCategory:
    """
    Classify syllabus text into a subject category.

    Args:
        syllabus_text: Raw syllabus text

    Returns:
        First matching SubjectCategory, or SubjectCategory.DEFAULT
    """
    text = (syllabus_text or "").lower()

    for keywords, category in SUBJECT_RULES:
        matched = next((keyword for keyword in keywords if keyword in text), None)
        if matched:
            logger.info(f"[SubjectClassifier] '{matched}' → {category.value}")
            return category

    logger.info("[SubjectClassifier] No subject keywords, using default")
    return SubjectCategory.DEFAULT
