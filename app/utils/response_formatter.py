"""
Response formatting utilities.
Builds the {success, data} API envelope and the chat text for quiz results.
"""
from typing import Dict, Any
from pydantic import BaseModel
from app.models.schemas import QuizResult


def success_envelope(data: Any) -> Dict[str, Any]:
    """
    Wrap a payload in the API's success envelope.

    Args:
        data: Pydantic model or plain JSON-compatible value

    Returns:
        {"success": True, "data": ...}
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return {"success": True, "data": data}


def format_quiz_result_message(result: QuizResult, user_id: str = None) -> str:
    """
    Format a quiz result as a short chat message.

    Args:
        result: Scored quiz
        user_id: Optional user label to include

    Returns:
        One-paragraph message for Slack/Discord
    """
    who = f"{user_id} scored" if user_id else "Quiz score"
    return (
        f"{who} {result.score}/{result.total} ({result.percentage}%) "
        f"on \"{result.topic_name}\". {result.message}"
    )
