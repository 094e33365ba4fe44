"""
Application configuration using Pydantic Settings.

Timeline engine constants (grid snapping, drag threshold, conflict buffers)
live here so they can be tuned per environment instead of being re-derived.
"""

from datetime import date
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./daybook.db"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # User id used when no X-User-Id header is sent
    DEFAULT_USER_ID: str = "dev_user"

    # ===========================================
    # Routine generator
    # ===========================================
    # Monday of the first week of the progressive wake-up plan.
    # None = Monday of the current week.
    ROUTINE_WEEK1_START: Optional[date] = None

    # ===========================================
    # Drag / resize
    # ===========================================
    SNAP_MINUTES: int = 5
    DRAG_THRESHOLD_PX: float = 5.0
    PX_PER_MINUTE: float = 1.8
    MIN_BLOCK_MINUTES: int = 5
    DEFAULT_NEW_BLOCK_MINUTES: int = 60

    # ===========================================
    # Conflict detection
    # ===========================================
    # Length assumed for a flexible item without an explicit end
    DEFAULT_FLEXIBLE_MINUTES: int = 15
    CONFLICT_BUFFER_MINUTES: int = 15
    SUGGESTION_EARLIEST: str = "06:00"
    SUGGESTION_LATEST_END: str = "23:00"
    WORKOUT_ROUTINE_IDS: List[str] = Field(default=["workout", "peloton"])
    CONFLICT_LOOKAHEAD_DAYS: int = 14

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
