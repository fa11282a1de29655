"""
Configuration management using Pydantic Settings.
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    log_level: str = "INFO"
    environment: str = "development"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_title: str = "CramMaster Study API"
    api_version: str = "1.0.0"
    api_description: str = "FastAPI service that turns syllabus text into topics, quizzes and study hints"

    # OpenAI Configuration (quiz generation falls back to templates without a key)
    openai_api_key: Optional[str] = None
    openai_org_id: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 1200
    quiz_question_count: int = 3
    study_aids_max_tokens: int = 800

    # Study Session Configuration
    max_sessions: int = 1000  # oldest session is evicted beyond this
    pomodoro_minutes: int = 25

    # Webhook Notification Configuration
    slack_webhook_url: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    webhook_timeout: int = 10  # seconds

    # AWS Configuration
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # DynamoDB Progress Configuration
    progress_tracking_enabled: bool = False
    dynamodb_table_name: str = "crammaster_quiz_progress"
    progress_retention_days: int = 90
    progress_query_limit: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
