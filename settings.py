"""
Portal client configuration.

Values come from the environment (prefixed with APTLEARN_) or a local .env file.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration for the quiz-session client."""

    # Backend
    BACKEND_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float = 15.0

    # Auto-created demo identity (no auth in the portal yet)
    DEMO_USER_NAME: str = "Demo User"
    DEMO_USER_EMAIL: str = "demo@aptlearn.io"

    # Curriculum
    TOTAL_DAYS: int = 15

    # User-facing notices
    TAB_SWITCH_MESSAGE: str = "Quiz paused due to tab switch. Please stay on this tab."
    SUBMISSION_FAILED_MESSAGE: str = "Submission failed"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        env_prefix = "APTLEARN_"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
