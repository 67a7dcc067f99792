"""
Configuration settings for the exam planner.

Uses Pydantic Settings for environment variable management with .env file support.
Static tuning tables (levels, phase splits, rank curves) are constants in
studyplan.core.constants, not settings.
"""
from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Learner Defaults
    # ========================================
    default_target_exam: str = Field(
        default="JEE",
        description="Exam used when the profile has none (JEE, NEET, CET, Foundation)",
    )
    default_exam_date: date = Field(
        default=date(2026, 5, 24),
        description="Exam date used when the profile has none",
    )
    default_daily_hours: float = Field(
        default=4,
        description="Daily study hours used when the profile has none",
    )

    # ========================================
    # Planner Bounds
    # ========================================
    min_daily_hours: float = Field(
        default=1,
        description="Lowest accepted daily study budget (hours)",
    )
    max_daily_hours: float = Field(
        default=14,
        description="Highest accepted daily study budget (hours)",
    )
    min_questions_for_plan: int = Field(
        default=10,
        description="Questions answered before a personalized plan is generated",
    )
    min_topics_for_plan: int = Field(
        default=3,
        description="Topics practiced before a personalized plan is generated",
    )

    # ========================================
    # Variety
    # ========================================
    motivation_seed: int | None = Field(
        default=None,
        description="Seed for motivation text and weekly delta (None = unseeded)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def get_planner_config(self) -> dict[str, Any]:
        """Get planner configuration as a dictionary."""
        return {
            "defaults": {
                "target_exam": self.default_target_exam,
                "exam_date": self.default_exam_date.isoformat(),
                "daily_hours": self.default_daily_hours,
            },
            "daily_hours_bounds": {
                "min": self.min_daily_hours,
                "max": self.max_daily_hours,
            },
            "data_sufficiency": {
                "min_questions": self.min_questions_for_plan,
                "min_topics": self.min_topics_for_plan,
            },
            "motivation_seed": self.motivation_seed,
        }

    def clamp_daily_hours(self, hours: float) -> float:
        """Clamp a study budget into the configured bounds."""
        return max(self.min_daily_hours, min(self.max_daily_hours, hours))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
