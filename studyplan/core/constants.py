"""
Planner Constants.

Static tuning tables for the study-plan engine. Every number here is
calibrated for Indian competitive exams (JEE / NEET / MHT-CET).

Tables:
- PLANNER / XP: core budget and reward numbers
- LEVELS: XP ladder
- PHASES / PHASE_TIME_SPLIT: exam phase thresholds and time splits
- RANK_MODELS / SUBJECT_WEIGHTS: score-to-rank curves per exam
- EXAMS: exam catalogue
- CHALLENGE_TEMPLATES / ACHIEVEMENT_DEFS / MOTIVATIONS: gamification data

These are constants, not settings. Runtime knobs live in config.Settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from studyplan.core.models import (
    AchievementMetric,
    ChallengeType,
    ExamPhase,
    Rarity,
    TaskPriority,
    TaskType,
)

# =============================================================================
# Core Planner Numbers
# =============================================================================


@dataclass(frozen=True)
class PlannerLimits:
    """Budget and sizing limits for plan generation."""

    min_task_mins: int = 15
    max_task_mins: int = 90
    questions_per_min: float = 0.33

    # Per-slot task sizes
    rest_day_topics: int = 2
    rest_day_mins: int = 20
    mock_share: float = 0.40
    saturday_practice_topics: int = 3
    saturday_practice_mins: int = 35
    deep_topics: int = 3
    deep_mins_weak: int = 45
    deep_mins_developing: int = 35
    afternoon_topics: int = 3
    afternoon_mins: int = 30
    evening_topics: int = 2
    evening_mins: int = 25
    stale_days: int = 3
    stale_min_accuracy: int = 30


PLANNER = PlannerLimits()


@dataclass(frozen=True)
class XPRewards:
    """XP reward numbers."""

    task_complete: int = 25


XP = XPRewards()

PRIORITY_XP_MULTIPLIER: dict[TaskPriority, float] = {
    TaskPriority.CRITICAL: 2.0,
    TaskPriority.HIGH: 1.5,
    TaskPriority.MEDIUM: 1.2,
    TaskPriority.LOW: 1.0,
}

TYPE_XP_MULTIPLIER: dict[TaskType, float] = {
    TaskType.MOCK_TEST: 2.0,
    TaskType.DEEP_STUDY: 1.3,
}


# =============================================================================
# Level System
# =============================================================================


@dataclass(frozen=True)
class Level:
    level: int
    title: str
    xp: int
    icon: str


LEVELS: tuple[Level, ...] = (
    Level(1, "Aspirant", 0, "🌱"),
    Level(2, "Learner", 500, "📚"),
    Level(3, "Scholar", 1500, "🎓"),
    Level(4, "Practitioner", 3500, "⚡"),
    Level(5, "Strategist", 7000, "🧠"),
    Level(6, "Expert", 12000, "💎"),
    Level(7, "Master", 20000, "👑"),
    Level(8, "Champion", 35000, "🏆"),
    Level(9, "Legend", 55000, "🌟"),
    Level(10, "Genius", 80000, "🔥"),
)


# =============================================================================
# Exam Phases
# =============================================================================


@dataclass(frozen=True)
class PhaseInfo:
    min_days: int
    label: str
    emoji: str


# Ordered from furthest to nearest; a phase applies when days > min_days.
PHASES: dict[ExamPhase, PhaseInfo] = {
    ExamPhase.FOUNDATION: PhaseInfo(180, "Foundation", "🏗️"),
    ExamPhase.BUILDING: PhaseInfo(120, "Building", "📚"),
    ExamPhase.STRENGTHENING: PhaseInfo(60, "Strengthening", "💪"),
    ExamPhase.REVISION_SPRINT: PhaseInfo(30, "Revision Sprint", "🔄"),
    ExamPhase.MOCK_INTENSIVE: PhaseInfo(14, "Mock Intensive", "📝"),
    ExamPhase.FINAL_PUSH: PhaseInfo(0, "Final Push", "🚀"),
}

# Time split per phase: (deep_study, practice, mock_test)
PHASE_TIME_SPLIT: dict[ExamPhase, tuple[float, float, float]] = {
    ExamPhase.FOUNDATION: (0.55, 0.30, 0.15),
    ExamPhase.BUILDING: (0.40, 0.35, 0.25),
    ExamPhase.STRENGTHENING: (0.25, 0.40, 0.35),
    ExamPhase.REVISION_SPRINT: (0.15, 0.40, 0.45),
    ExamPhase.MOCK_INTENSIVE: (0.10, 0.30, 0.60),
    ExamPhase.FINAL_PUSH: (0.05, 0.25, 0.70),
}

DEFAULT_TIME_SPLIT: tuple[float, float, float] = (0.40, 0.35, 0.25)


# =============================================================================
# Rank Model
# =============================================================================

DEFAULT_EXAM = "JEE"
DEFAULT_SUBJECT_WEIGHT = 0.33
NO_COLLEGE_MESSAGE = "Keep improving to unlock college predictions"


@dataclass(frozen=True)
class RankModel:
    """Score-to-rank data for one exam."""

    max_score: int
    total_candidates: int
    # (score, rank) sorted by score descending
    curve: tuple[tuple[int, int], ...]
    # rank threshold -> named outcomes, thresholds ascending
    colleges: dict[int, tuple[str, ...]]


RANK_MODELS: dict[str, RankModel] = {
    "JEE": RankModel(
        max_score=300,
        total_candidates=1_200_000,
        curve=(
            (280, 100), (250, 1000), (220, 5000), (200, 10000), (180, 25000),
            (160, 50000), (140, 100000), (120, 200000), (100, 400000), (80, 600000),
        ),
        colleges={
            100: ("IIT Bombay CSE", "IIT Delhi CSE"),
            1000: ("IIT Bombay", "IIT Delhi", "IIT Madras", "IIT Kanpur"),
            5000: ("Top IITs (most branches)", "IIIT Hyderabad"),
            10000: ("All IITs", "Top NITs"),
            25000: ("NITs (good branches)", "BITS Pilani"),
            50000: ("NITs", "IIITs", "Top State Colleges"),
            100000: ("State Engineering Colleges",),
        },
    ),
    "NEET": RankModel(
        max_score=720,
        total_candidates=2_000_000,
        curve=(
            (700, 100), (680, 1000), (650, 5000), (620, 15000), (580, 30000),
            (540, 60000), (500, 100000), (450, 200000), (400, 400000),
        ),
        colleges={
            100: ("AIIMS Delhi", "JIPMER"),
            1000: ("AIIMS network", "Top Govt Medical"),
            5000: ("Govt Medical (metro cities)",),
            15000: ("All Govt Medical Colleges",),
            30000: ("Govt + Top Private Medical",),
            60000: ("Most Medical Colleges",),
            100000: ("Private Medical Colleges",),
        },
    ),
}

SUBJECT_WEIGHTS: dict[str, dict[str, float]] = {
    "JEE": {"Physics": 0.33, "Chemistry": 0.33, "Mathematics": 0.34},
    "NEET": {"Physics": 0.25, "Chemistry": 0.25, "Biology": 0.50},
    "CET": {"Physics": 0.33, "Chemistry": 0.33, "Mathematics": 0.34},
    "Foundation": {"Physics": 0.25, "Chemistry": 0.25, "Mathematics": 0.25, "Biology": 0.25},
}


# =============================================================================
# Exam Catalogue
# =============================================================================


@dataclass(frozen=True)
class ExamOption:
    value: str
    label: str
    subjects: tuple[str, ...]


EXAMS: tuple[ExamOption, ...] = (
    ExamOption("JEE", "JEE", ("Physics", "Chemistry", "Mathematics")),
    ExamOption("NEET", "NEET", ("Physics", "Chemistry", "Biology")),
    ExamOption("CET", "MHT-CET", ("Physics", "Chemistry", "Mathematics")),
    ExamOption("Foundation", "Foundation", ("Physics", "Chemistry", "Mathematics", "Biology")),
)

SUBJECT_ICONS: dict[str, str] = {
    "Physics": "⚡",
    "Chemistry": "🧪",
    "Mathematics": "📐",
    "Biology": "🧬",
}


# =============================================================================
# Daily Challenges
# =============================================================================


@dataclass(frozen=True)
class ChallengeTemplate:
    type: ChallengeType
    title: str
    description: str
    target: int
    xp: int
    icon: str


CHALLENGE_TEMPLATES: tuple[ChallengeTemplate, ...] = (
    ChallengeTemplate(ChallengeType.SPEED_ROUND, "Speed Demon", "Solve 10 Qs under 20 min", 10, 100, "⚡"),
    ChallengeTemplate(ChallengeType.ACCURACY_CHALLENGE, "Sharpshooter", "8/10 correct in a row", 8, 120, "🎯"),
    ChallengeTemplate(ChallengeType.TOPIC_BOSS, "Topic Boss", "Reach 70% in a weak topic", 70, 150, "👊"),
    ChallengeTemplate(ChallengeType.CONSISTENCY, "Iron Will", "Complete all tasks today", 100, 200, "🔥"),
)


# =============================================================================
# Achievements
# =============================================================================


@dataclass(frozen=True)
class AchievementDef:
    """An achievement unlocked when stats[metric] >= threshold."""

    id: str
    title: str
    description: str
    icon: str
    rarity: Rarity
    xp: int
    metric: AchievementMetric
    threshold: int


ACHIEVEMENT_DEFS: tuple[AchievementDef, ...] = (
    AchievementDef("first-blood", "First Blood", "Complete your first task", "🗡️",
                   Rarity.COMMON, 25, AchievementMetric.TASKS_COMPLETED, 1),
    AchievementDef("streak-3", "Consistent", "3-day study streak", "🔥",
                   Rarity.COMMON, 50, AchievementMetric.STREAK, 3),
    AchievementDef("streak-7", "Dedicated", "7-day study streak", "⚡",
                   Rarity.RARE, 150, AchievementMetric.STREAK, 7),
    AchievementDef("streak-30", "Unstoppable", "30-day study streak", "💎",
                   Rarity.EPIC, 500, AchievementMetric.STREAK, 30),
    AchievementDef("qs-100", "Century", "100 questions solved", "💯",
                   Rarity.COMMON, 75, AchievementMetric.TOTAL_QS, 100),
    AchievementDef("qs-500", "Half-K Warrior", "500 questions solved", "⚔️",
                   Rarity.RARE, 250, AchievementMetric.TOTAL_QS, 500),
    AchievementDef("qs-1000", "K-Club", "1000 questions solved", "🏆",
                   Rarity.EPIC, 500, AchievementMetric.TOTAL_QS, 1000),
    AchievementDef("acc-80", "Precision Strike", "80%+ overall accuracy", "🎯",
                   Rarity.RARE, 200, AchievementMetric.ACCURACY, 80),
    AchievementDef("mastery-5", "Scholar", "Master 5 topics", "📚",
                   Rarity.RARE, 200, AchievementMetric.MASTERED, 5),
    AchievementDef("mastery-15", "Grandmaster", "Master 15 topics", "👑",
                   Rarity.EPIC, 500, AchievementMetric.MASTERED, 15),
    AchievementDef("mastery-30", "Legendary Mind", "Master 30 topics", "🌟",
                   Rarity.LEGENDARY, 1000, AchievementMetric.MASTERED, 30),
    AchievementDef("level-5", "Strategist", "Reach Level 5", "🧠",
                   Rarity.RARE, 300, AchievementMetric.LEVEL, 5),
    AchievementDef("level-8", "Champion", "Reach Level 8", "🏅",
                   Rarity.EPIC, 750, AchievementMetric.LEVEL, 8),
    AchievementDef("level-10", "Genius Mode", "Reach Level 10", "🔥",
                   Rarity.LEGENDARY, 2000, AchievementMetric.LEVEL, 10),
)


# =============================================================================
# Motivation Pools
# =============================================================================

MOTIVATIONS: dict[str, tuple[str, ...]] = {
    "streak_high": (
        "You're not just studying, you're building dominance.",
        "This consistency puts you in the top 1% of aspirants.",
    ),
    "streak_mid": (
        "Building the habit. Momentum is everything.",
        "Every day you show up is a day closer to your dream college.",
    ),
    "accuracy_high": (
        "Your accuracy is in the topper zone. Don't let up.",
        "At this rate, you're gunning for top 5000.",
    ),
    "accuracy_low": (
        "Focus on understanding, not just solving. Quality > quantity.",
        "The gap between you and toppers is smaller than you think.",
    ),
    "exam_near": (
        "Final sprint. Every question counts double now.",
        "Stay calm, stay focused. You've prepared for this.",
    ),
    "general": (
        "Every expert was once a beginner. Today is your day.",
        "One topic at a time. That's how IITians are made.",
        "Your future self will thank you for today's effort.",
    ),
}
