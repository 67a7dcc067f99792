"""
Core Module - Shared domain models, tables and schemas.

Components:
- models: Enums and result records (TopicInsight, PlannerTask, DayPlan, ...)
- constants: Static tuning tables (levels, phases, rank curves, templates)
- schemas: Pydantic models for raw rows and planner snapshots
- errors: Package exceptions

Design Principle:
Engine modules under studyplan/study/ and studyplan/gamification/
import shared concepts from here rather than redefining them.
"""

from studyplan.core.errors import PlannerError, PlannerInputError
from studyplan.core.models import (
    Achievement,
    BrainDimensions,
    BrainScore,
    ChapterPriority,
    DailyChallenge,
    DayKind,
    DayPlan,
    ExamPhase,
    Greeting,
    LevelInfo,
    PlannerStats,
    PlannerTask,
    RankPrediction,
    RankRange,
    RevisionItem,
    SubjectBreakdown,
    TaskPriority,
    TaskStatus,
    TaskType,
    TimeSlot,
    TopicInsight,
    TopicStatus,
    Trajectory,
    Trend,
    WeeklyWin,
)
from studyplan.core.schemas import PerformanceRow, PlannerSnapshot, ProfileSnapshot

__all__ = [
    # Errors
    "PlannerError",
    "PlannerInputError",
    # Enums
    "DayKind",
    "ExamPhase",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "TimeSlot",
    "TopicStatus",
    "Trajectory",
    "Trend",
    # Records
    "Achievement",
    "BrainDimensions",
    "BrainScore",
    "ChapterPriority",
    "DailyChallenge",
    "DayPlan",
    "Greeting",
    "LevelInfo",
    "PlannerStats",
    "PlannerTask",
    "RankPrediction",
    "RankRange",
    "RevisionItem",
    "SubjectBreakdown",
    "TopicInsight",
    "WeeklyWin",
    # Schemas
    "PerformanceRow",
    "PlannerSnapshot",
    "ProfileSnapshot",
]
