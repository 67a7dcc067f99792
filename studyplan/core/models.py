"""
Core Planner Models.

Canonical enums and records shared by every engine module.

Design:
- Enums are str-valued so they compare equal to the wire strings
  the presentation layer expects ("deep-study", "not-started", ...)
- Records are dataclasses; TopicInsight is frozen because it is the
  shared input of every downstream calculation
- Output records are regenerated on every call and carry no lifecycle
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class TopicStatus(str, Enum):
    """Performance classification of a single topic."""

    NOT_STARTED = "not-started"
    WEAK = "weak"
    DEVELOPING = "developing"
    STRONG = "strong"
    MASTERED = "mastered"

    @classmethod
    def classify(cls, accuracy: float, attempts: int) -> TopicStatus:
        """
        Classify a topic from raw accuracy (0-100) and attempt count.

        Ladder (first match wins):
            mastered   - accuracy >= 90 and attempts >= 15
            strong     - accuracy >= 75 and attempts >= 8
            developing - accuracy >= 50
            not-started - no attempts
            weak       - everything else
        """
        if accuracy >= 90 and attempts >= 15:
            return cls.MASTERED
        if accuracy >= 75 and attempts >= 8:
            return cls.STRONG
        if accuracy >= 50:
            return cls.DEVELOPING
        if attempts == 0:
            return cls.NOT_STARTED
        return cls.WEAK

    @property
    def display_name(self) -> str:
        return self.value.replace("-", " ").title()

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            TopicStatus.NOT_STARTED: "dim",
            TopicStatus.WEAK: "red",
            TopicStatus.DEVELOPING: "yellow",
            TopicStatus.STRONG: "cyan",
            TopicStatus.MASTERED: "green",
        }[self]


class TaskType(str, Enum):
    DEEP_STUDY = "deep-study"
    PRACTICE = "practice"
    MOCK_TEST = "mock-test"
    PYQ = "pyq"
    FORMULA_DRILL = "formula-drill"


class TaskPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def color(self) -> str:
        return {
            TaskPriority.CRITICAL: "bold red",
            TaskPriority.HIGH: "red",
            TaskPriority.MEDIUM: "yellow",
            TaskPriority.LOW: "dim",
        }[self]


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class ExamPhase(str, Enum):
    """Preparation stage derived from days remaining to the exam."""

    FOUNDATION = "foundation"
    BUILDING = "building"
    STRENGTHENING = "strengthening"
    REVISION_SPRINT = "revision-sprint"
    MOCK_INTENSIVE = "mock-intensive"
    FINAL_PUSH = "final-push"


class DayKind(str, Enum):
    """Allocation policy for a calendar day."""

    REST = "rest"  # Sunday
    MOCK = "mock"  # Saturday
    WEEKDAY = "weekday"


class Trend(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class Trajectory(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class WinType(str, Enum):
    MASTERED = "mastered"
    IMPROVED = "improved"
    STREAK = "streak"
    MILESTONE = "milestone"
    RANK_UP = "rank-up"
    CHALLENGE = "challenge"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ChallengeType(str, Enum):
    SPEED_ROUND = "speed-round"
    ACCURACY_CHALLENGE = "accuracy-challenge"
    TOPIC_BOSS = "topic-boss"
    CONSISTENCY = "consistency"


class AchievementMetric(str, Enum):
    """Stat an achievement condition reads."""

    STREAK = "streak"
    TOTAL_QS = "total_qs"
    ACCURACY = "accuracy"
    MASTERED = "mastered"
    LEVEL = "level"
    TASKS_COMPLETED = "tasks_completed"


class RevisionUrgency(str, Enum):
    OVERDUE = "overdue"
    DUE = "due"
    UPCOMING = "upcoming"


# ============================================================================
# Records
# ============================================================================


@dataclass(frozen=True)
class TopicInsight:
    """Derived performance snapshot for one exam topic."""

    subject: str
    chapter: str
    topic: str
    accuracy: int  # 0-100, rounded
    questions_attempted: int
    status: TopicStatus
    days_since_practice: int
    priority_score: int  # higher = more urgent
    stuck_days: int = 0

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the topic within a day plan."""
        return (self.subject, self.topic)


@dataclass
class PlannerTask:
    """A single scheduled study task."""

    id: str
    subject: str
    chapter: str
    topic: str
    type: TaskType
    priority: TaskPriority
    status: TaskStatus
    time_slot: TimeSlot
    allocated_minutes: int
    questions_target: int
    accuracy: int
    reason: str
    xp_reward: int

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


@dataclass
class DayPlan:
    """Generated schedule for one calendar date."""

    date: str
    day_name: str
    day_short: str
    is_today: bool = False
    is_rest_day: bool = False
    tasks: list[PlannerTask] = field(default_factory=list)
    completed_minutes: int = 0
    focus_subject: str = ""

    @property
    def total_minutes(self) -> int:
        """Sum of task minutes; never an independent input."""
        return sum(t.allocated_minutes for t in self.tasks)

    @property
    def total_xp(self) -> int:
        return sum(t.xp_reward for t in self.tasks)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["total_minutes"] = self.total_minutes
        return data


@dataclass
class BrainDimensions:
    conceptual: int = 0
    problem_solving: int = 0
    consistency: int = 0
    exam_readiness: int = 0
    growth: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class BrainScore:
    """Composite 0-100 mastery and readiness metric."""

    overall: int = 0
    dimensions: BrainDimensions = field(default_factory=BrainDimensions)
    trend: Trend = Trend.STABLE
    weekly_delta: int = 0


@dataclass
class RankRange:
    min: int
    max: int


@dataclass
class RankPrediction:
    estimated_rank: int
    rank_range: RankRange
    confidence: int
    estimated_score: int
    max_score: int
    trajectory: Trajectory
    top_colleges: list[str] = field(default_factory=list)


@dataclass
class SubjectBreakdown:
    subject: str
    avg_accuracy: int
    topic_count: int
    mastered_count: int
    strong_count: int
    developing_count: int
    weak_count: int
    topics: list[TopicInsight] = field(default_factory=list)


@dataclass
class ChapterPriority:
    subject: str
    chapter: str
    score: int
    weak_topics: int
    total_topics: int
    avg_accuracy: int


@dataclass
class WeeklyWin:
    type: WinType
    title: str
    detail: str
    emoji: str
    xp: int


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    rarity: Rarity
    unlocked: bool
    newly_unlocked: bool
    progress: int  # 0-100
    xp_reward: int


@dataclass
class DailyChallenge:
    id: str
    type: ChallengeType
    title: str
    description: str
    target: int
    current: int
    xp_reward: int
    icon: str


@dataclass
class LevelInfo:
    level: int
    title: str
    icon: str
    xp_to_next: int
    progress: int  # 0-100
    next_title: str


@dataclass
class RevisionItem:
    subject: str
    chapter: str
    topic: str
    accuracy: int
    days_since: int
    urgency: RevisionUrgency
    forgetting_risk: int  # 0-100


@dataclass
class PlannerStats:
    days_to_exam: int
    exam_phase: ExamPhase
    total_topics_practiced: int
    mastered_count: int
    strong_count: int
    developing_count: int
    weak_count: int
    avg_accuracy: int
    current_streak: int
    longest_streak: int
    today_tasks_total: int
    today_tasks_done: int
    total_questions_all_time: int
    current_xp: int
    level: int
    level_title: str
    level_icon: str
    xp_to_next_level: int
    xp_progress: int


@dataclass
class Greeting:
    greeting: str
    motivation: str
