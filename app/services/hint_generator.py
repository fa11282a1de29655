"""
Study hint generator.
"""
from typing import List
from app.models.schemas import TopicRecord


MAX_HINT_SUBTOPICS = 3


def generate_hints(topic: TopicRecord) -> List[str]:
    """
    Generate study hints for a topic.

    Args:
        topic: Parsed topic record

    Returns:
        Five generic hints, plus a "pay attention to" hint when the topic has subtopics
    """
    hints = [
        f"💡 Focus on understanding the core concepts of {topic.name}",
        f"📚 Study the practical applications of {topic.name}",
        f"🔍 Look for real-world examples related to {topic.name}",
        f"⚡ Practice problems and exercises on {topic.name}",
        f"🎯 Connect {topic.name} with other related topics",
    ]

    if topic.subtopics:
        hints.append(f"📝 Pay attention to: {', '.join(topic.subtopics[:MAX_HINT_SUBTOPICS])}")

    return hints
