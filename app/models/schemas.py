"""
Pydantic models for request and response validation.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


class SubjectCategory(str, Enum):
    """Coarse subject of a syllabus, selects question bank and templates."""
    DATABASE = "database"
    PROGRAMMING = "programming"
    MATHEMATICS = "mathematics"
    SCIENCE = "science"
    DEFAULT = "default"


class QuestionType(str, Enum):
    """Type tags for question templates."""
    DEFINITION = "definition"
    CHARACTERISTIC = "characteristic"
    PURPOSE = "purpose"
    ACRONYM = "acronym"
    CONCEPT = "concept"
    SYNTAX = "syntax"
    FORMULA = "formula"


class NotificationChannel(str, Enum):
    """Supported chat webhook channels."""
    SLACK = "slack"
    DISCORD = "discord"


class TopicRecord(BaseModel):
    """A parsed unit of study material."""
    index: int = Field(..., ge=0, description="Zero-based position in parse order")
    name: str = Field(..., description="Cleaned topic label")
    subtopics: List[str] = Field(default_factory=list, description="Child lines of the topic")
    keywords: List[str] = Field(default_factory=list, description="Subtopics split on commas and semicolons")

    model_config = {"frozen": True}


class Question(BaseModel):
    """Multiple choice question with a single correct option."""
    question: str = Field(..., description="Question text")
    options: List[str] = Field(..., min_length=1, description="Answer options in display order")
    correct: int = Field(..., ge=0, description="Index of the correct option")
    explanation: str = Field(default="", description="Why the correct option is right")

    @model_validator(mode="after")
    def check_correct_in_range(self):
        if self.correct >= len(self.options):
            raise ValueError(f"correct index {self.correct} is out of range for {len(self.options)} options")
        return self


class QuestionTemplate(BaseModel):
    """Sentence pattern with a {topic} placeholder and an option rule tag."""
    template: str
    type: QuestionType


class ResolvedTopicData(BaseModel):
    """Questions and hints resolved for one topic."""
    name: str
    questions: List[Question]
    hints: List[str]
    subtopics: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class TopicQuestions(BaseModel):
    """Quiz payload for one topic."""
    topic_name: str
    questions: List[Question]


class TopicHints(BaseModel):
    """Hints payload for one topic."""
    topic_name: str
    hints: List[str]


class QuizVerdict(str, Enum):
    """Result band of a submitted quiz."""
    GREAT = "great"
    GOOD = "good"
    KEEP_STUDYING = "keep_studying"


class QuestionReview(BaseModel):
    """Per-question outcome of a submitted quiz."""
    question: str
    selected: Optional[int] = None
    correct: int
    is_correct: bool
    explanation: str = ""


class QuizResult(BaseModel):
    """Score of a submitted quiz."""
    topic_name: str
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)
    verdict: QuizVerdict
    message: str
    review: List[QuestionReview] = Field(default_factory=list)


class GeneratedQuestion(BaseModel):
    """Question produced by the LLM quiz generator."""
    type: str = "MCQ"
    question: str
    options: List[str] = Field(default_factory=list)
    answer: str
    explanation: str = ""
    points: int = 10


class GeneratedQuiz(BaseModel):
    """LLM or fallback quiz for a free-form topic."""
    topic: str
    difficulty: str
    source: str = Field(..., description="'llm' or 'fallback'")
    questions: List[GeneratedQuestion]
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class StudyAids(BaseModel):
    """Memory techniques, study tips and quick facts for a free-form topic."""
    topic: str
    difficulty: str
    source: str = Field(..., description="'llm' or 'fallback'")
    memory_techniques: List[str] = Field(default_factory=list)
    study_tips: List[str] = Field(default_factory=list)
    quick_facts: List[str] = Field(default_factory=list)
    motivation: str = ""


class TimerSlot(BaseModel):
    """One topic's block of study time."""
    id: str
    topic: str
    duration: int = Field(..., ge=0, description="Seconds")
    breaks: int = Field(..., ge=0, description="Pomodoro breaks within the slot")
    status: str = "pending"


class TimerSession(BaseModel):
    """Pomodoro plan built from a list of topics."""
    session_id: str
    user_id: Optional[str] = None
    sessions: List[TimerSlot]
    total_duration: int = Field(..., ge=0, description="Seconds")
    created_at: datetime = Field(default_factory=datetime.utcnow)


# ==================== API request / response models ====================

class SyllabusRequest(BaseModel):
    """Request model for creating or rebuilding a study session."""
    syllabus_content: str = Field(..., description="Raw syllabus text")

    class Config:
        json_schema_extra = {
            "example": {
                "syllabus_content": "1. Introduction\n- basics\n- overview\n2. SQL\n- SELECT, WHERE"
            }
        }


class SessionResponse(BaseModel):
    """Response model for a created or rebuilt session."""
    session_id: str
    subject: SubjectCategory
    topics: List[TopicRecord]


class QuizSubmitRequest(BaseModel):
    """Request model for submitting quiz answers."""
    answers: List[Optional[int]] = Field(..., description="Selected option index per question, null if skipped")
    user_id: Optional[str] = Field(default=None, description="Records progress when given")
    notify_channels: List[NotificationChannel] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {"answers": [0, 2, None], "user_id": "user123", "notify_channels": ["slack"]}
        }


class QuizGenerateRequest(BaseModel):
    """Request model for LLM quiz generation."""
    topic: str = Field(..., min_length=1)
    question_count: Optional[int] = Field(default=None, ge=1, le=10)
    difficulty: str = Field(default="Medium")


class StudyAidsRequest(BaseModel):
    """Request model for LLM study aid generation."""
    topic: str = Field(..., min_length=1)
    difficulty: str = Field(default="Medium")


class TimerTopic(BaseModel):
    """Topic and minutes allocated to it."""
    topic: str = Field(..., min_length=1)
    time_allocation: int = Field(..., ge=1, description="Minutes")


class TimerCreateRequest(BaseModel):
    """Request model for a timer session, from explicit topics or a study session."""
    topics: List[TimerTopic] = Field(default_factory=list)
    study_session_id: Optional[str] = Field(default=None, description="Use every topic of this study session")
    minutes_per_topic: int = Field(default=25, ge=1)
    user_id: Optional[str] = None

    @model_validator(mode="after")
    def check_topic_source(self):
        if not self.topics and not self.study_session_id:
            raise ValueError("Provide topics or a study_session_id")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "topics": [{"topic": "SQL", "time_allocation": 50}],
                "user_id": "user123"
            }
        }


class NotificationRequest(BaseModel):
    """Request model for sending a webhook notification."""
    message: str = Field(..., min_length=1)
    channels: List[NotificationChannel] = Field(..., min_length=1)


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    services: Dict[str, Any] = Field(default_factory=dict, description="Optional integrations")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")


class ErrorResponse(BaseModel):
    """Response model for errors."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
