"""
Pydantic models for quiz progress tracking.
"""
from pydantic import BaseModel, Field
from typing import Optional, List


class QuizAttempt(BaseModel):
    """Single recorded quiz attempt."""

    timestamp: int = Field(..., description="Unix timestamp in milliseconds")
    session_id: str = Field(..., description="Study session the quiz belonged to")
    topic_index: int = Field(..., description="Topic position within the session")
    topic_name: str = Field(..., description="Topic label")
    score: int = Field(..., description="Correct answers")
    total: int = Field(..., description="Number of questions")
    percentage: int = Field(..., description="Rounded score percentage")


class ProgressSummary(BaseModel):
    """Quiz progress for a user."""

    user_id: str = Field(..., description="User identifier")
    attempts: List[QuizAttempt] = Field(default_factory=list, description="Attempts, newest first")
    total_progress: float = Field(default=0.0, description="Mean percentage over the returned attempts")
    topics_studied: int = Field(default=0, description="Distinct topic names attempted")
    last_activity: Optional[int] = Field(None, description="Timestamp of the newest attempt")


class ProgressSaveRequest(BaseModel):
    """Request to save a quiz attempt to DynamoDB."""

    user_id: str = Field(..., description="User identifier")
    timestamp: int = Field(..., description="Unix timestamp in milliseconds")
    session_id: str = Field(..., description="Study session id")
    topic_index: int = Field(..., description="Topic position")
    topic_name: str = Field(..., description="Topic label")
    score: int = Field(..., description="Correct answers")
    total: int = Field(..., description="Number of questions")
    percentage: int = Field(..., description="Rounded score percentage")
    ttl: int = Field(..., description="TTL for DynamoDB auto-deletion")
