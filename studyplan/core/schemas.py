"""
Input schemas for the data crossing the engine boundary.

The performance store hands the engine raw topic rows and a profile; the
CLI reads both from one JSON snapshot file. Every field is optional and
falls back to a documented default downstream.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class PerformanceRow(BaseModel):
    """One topic-performance row from the performance store."""

    model_config = ConfigDict(extra="ignore")

    subject: str | None = Field(None, description="Subject name, e.g. Physics")
    chapter: str | None = Field(None, description="Chapter name")
    topic: str | None = Field(None, description="Topic name")
    accuracy: float | None = Field(None, ge=0, le=100, description="Accuracy percentage")
    questions_attempted: int | None = Field(None, ge=0, description="Questions attempted")
    last_practiced: datetime | date | None = Field(None, description="Last practice timestamp")
    stuck_days: int | None = Field(None, ge=0, description="Days without improvement")


class ProfileSnapshot(BaseModel):
    """Learner profile scalars."""

    model_config = ConfigDict(extra="ignore")

    full_name: str | None = None
    total_points: int = Field(0, ge=0, description="Lifetime XP")
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    target_exam: str | None = None
    target_exam_date: date | None = None
    daily_study_hours: float | None = Field(None, gt=0)


class PlannerSnapshot(BaseModel):
    """Everything the planner needs for one learner, as read by the CLI."""

    model_config = ConfigDict(extra="ignore")

    profile: ProfileSnapshot = Field(default_factory=ProfileSnapshot)
    rows: list[PerformanceRow] = Field(default_factory=list)
    total_questions: int = Field(0, ge=0)
    unlocked_achievements: list[str] = Field(default_factory=list)
    completed_task_ids: list[str] = Field(default_factory=list)
    # (subject, topic) pairs that belong to the target exam; empty = no filter
    valid_topics: list[tuple[str, str]] = Field(default_factory=list)
