"""
Application configuration
Loaded from environment variables and the .env file via pydantic-settings
"""

import os
from typing import Optional
from pydantic_settings import BaseSettings

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    """Global settings"""

    # ========== Basics ==========
    APP_NAME: str = "Question and Answer HQ"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ========== Database ==========
    # SQLite file used when no DATABASE_URL_OVERRIDE is given
    DATABASE_PATH: str = os.path.join(_BACKEND_DIR, "data", "qahq.db")
    # Full async SQLAlchemy URL, e.g. postgresql+asyncpg://...
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """Async SQLAlchemy connection string"""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"sqlite+aiosqlite:///{self.DATABASE_PATH}"

    # ========== Answer generator (OpenAI compatible) ==========
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 4096

    # ========== Secrets ==========
    # Shared secret expected in the x-cron-secret header of the daily trigger
    CRON_SECRET: Optional[str] = None
    # Shared secret for admin endpoints (x-admin-secret header or admin_session cookie)
    ADMIN_SECRET: Optional[str] = None
    # Only send the admin_session cookie over HTTPS
    ADMIN_COOKIE_SECURE: bool = True
    ADMIN_SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # seconds

    # ========== Daily generation ==========
    DAILY_BATCH_SIZE: int = 5  # daily target of published questions
    IDEA_POOL_SIZE: int = 50  # max ideas sampled per run
    RELATED_QUESTIONS_LIMIT: int = 6  # links in the "Related Questions" block

    # ========== Scheduler ==========
    SCHEDULER_ENABLED: bool = False
    SCHEDULER_TIMEZONE: str = "UTC"
    GENERATION_HOUR_UTC: int = 9
    GENERATION_MINUTE: int = 0

    # ========== CORS ==========
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = {
        "env_file": os.path.join(_BACKEND_DIR, ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global settings singleton
settings = Settings()
