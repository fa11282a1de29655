"""
Custom exceptions for the application.
"""


class CramMasterException(Exception):
    """Base exception for all study-service errors."""
    pass


class NoDataError(CramMasterException):
    """Raised when a topic index has no resolved data in the session."""

    def __init__(self, topic_index: int, message: str = None):
        self.topic_index = topic_index
        super().__init__(message or f"No data found for topic {topic_index}")


class TemplateGenerationError(CramMasterException):
    """Raised when a single question template cannot be filled in."""
    pass


class InvalidInputError(CramMasterException):
    """Raised when input validation fails."""
    pass


class SessionNotFoundError(CramMasterException):
    """Raised when a study session id is unknown."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class QuizGenerationError(CramMasterException):
    """Raised when the LLM quiz call or its output parsing fails."""
    pass


class NotificationError(CramMasterException):
    """Raised when a webhook notification cannot be delivered."""
    pass


class TimerNotFoundError(CramMasterException):
    """Raised when a timer session id is unknown."""

    def __init__(self, timer_id: str):
        self.timer_id = timer_id
        super().__init__(f"Timer session not found: {timer_id}")
