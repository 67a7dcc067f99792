"""
Plan Generator.

Builds a day's task list from topic insights, a rolling week of plans,
and on-demand replans with a reduced budget.

Day kinds (by weekday):
- REST (Sunday): light 20-minute practice on up to 2 strong topics
- MOCK (Saturday): 40% of the budget on a mini mock test for the most
  urgent subject, the rest on practice for weak/developing topics
- WEEKDAY: budget split by exam phase into
    morning deep study (weak/developing) ->
    afternoon practice (developing/strong) ->
    evening PYQs (stale topics)

A topic appears at most once per day and every task is capped at 90 minutes.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta

from loguru import logger

from studyplan.core.constants import (
    PLANNER,
    PRIORITY_XP_MULTIPLIER,
    TYPE_XP_MULTIPLIER,
    XP,
    PlannerLimits,
)
from studyplan.core.models import (
    DayKind,
    DayPlan,
    ExamPhase,
    PlannerTask,
    TaskPriority,
    TaskStatus,
    TaskType,
    TimeSlot,
    TopicInsight,
    TopicStatus,
)
from studyplan.core.utils import round_half_up, to_date
from studyplan.study.progression import get_phase_split

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAY_SHORTS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

MOCK_TOPIC = "Mini Mock Test"
MOCK_CHAPTER = "Mixed"
FALLBACK_SUBJECT = "Physics"

WEAK_OR_DEVELOPING = (TopicStatus.WEAK, TopicStatus.DEVELOPING)
DEVELOPING_OR_STRONG = (TopicStatus.DEVELOPING, TopicStatus.STRONG)


# =============================================================================
# Task helpers
# =============================================================================


def day_index(day: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return day.isoweekday() % 7


def day_kind(day: date) -> DayKind:
    idx = day_index(day)
    if idx == 0:
        return DayKind.REST
    if idx == 6:
        return DayKind.MOCK
    return DayKind.WEEKDAY


def task_id(date_str: str, subject: str, topic: str, task_type: TaskType) -> str:
    """Deterministic composite key, stable across regenerations of a day."""
    raw = f"{date_str}::{subject}::{topic}::{task_type.value}"
    return re.sub(r"\s+", "_", raw).lower()


def questions_for(minutes: int, limits: PlannerLimits = PLANNER) -> int:
    return max(3, round_half_up(minutes * limits.questions_per_min))


def task_priority(topic: TopicInsight) -> TaskPriority:
    if topic.status == TopicStatus.WEAK and topic.days_since_practice > 5:
        return TaskPriority.CRITICAL
    if topic.status == TopicStatus.WEAK:
        return TaskPriority.HIGH
    if topic.status == TopicStatus.DEVELOPING:
        return TaskPriority.MEDIUM
    return TaskPriority.LOW


def task_reason(topic: TopicInsight, task_type: TaskType) -> str:
    """Pick a reason template keyed on task type, status and staleness."""
    if task_type == TaskType.MOCK_TEST:
        return f"Simulate exam conditions: {topic.subject}"
    if topic.status == TopicStatus.WEAK:
        return f"Only {topic.accuracy}%, needs focused work"
    if topic.status == TopicStatus.DEVELOPING:
        return f"{topic.accuracy}% and climbing, push to 75%+"
    if topic.status == TopicStatus.STRONG:
        return f"Strong at {topic.accuracy}%, maintain sharpness"
    if topic.days_since_practice > 7:
        return f"Untouched for {topic.days_since_practice}d, don't let it fade"
    return f"{topic.accuracy}% mastery, keep it locked"


def xp_for_task(task_type: TaskType, minutes: int, priority: TaskPriority) -> int:
    """25 XP per 30 minutes, scaled by priority and task type."""
    time_mult = minutes / 30
    priority_mult = PRIORITY_XP_MULTIPLIER[priority]
    type_mult = TYPE_XP_MULTIPLIER.get(task_type, 1.0)
    return round_half_up(XP.task_complete * time_mult * priority_mult * type_mult)


def make_task(
    topic: TopicInsight,
    task_type: TaskType,
    slot: TimeSlot,
    minutes: int,
    date_str: str,
    limits: PlannerLimits = PLANNER,
) -> PlannerTask:
    minutes = min(minutes, limits.max_task_mins)
    priority = task_priority(topic)
    return PlannerTask(
        id=task_id(date_str, topic.subject, topic.topic, task_type),
        subject=topic.subject,
        chapter=topic.chapter,
        topic=topic.topic,
        type=task_type,
        priority=priority,
        status=TaskStatus.PENDING,
        time_slot=slot,
        allocated_minutes=minutes,
        questions_target=questions_for(minutes, limits),
        accuracy=topic.accuracy,
        reason=task_reason(topic, task_type),
        xp_reward=xp_for_task(task_type, minutes, priority),
    )


def most_urgent_subject(topics: Sequence[TopicInsight]) -> str:
    """Subject with the highest summed priority (first seen wins ties)."""
    scores: dict[str, int] = {}
    for t in topics:
        scores[t.subject] = scores.get(t.subject, 0) + t.priority_score
    if not scores:
        return FALLBACK_SUBJECT
    return max(scores.items(), key=lambda item: item[1])[0]


def focus_subject(tasks: Sequence[PlannerTask]) -> str:
    """Subject with the most tasks (first seen wins ties), '' for no tasks."""
    counts: dict[str, int] = {}
    for t in tasks:
        counts[t.subject] = counts.get(t.subject, 0) + 1
    if not counts:
        return ""
    return max(counts.items(), key=lambda item: item[1])[0]


class _DayBuilder:
    """Accumulates tasks for one day, one task per (subject, topic)."""

    def __init__(self, date_str: str, limits: PlannerLimits):
        self.date_str = date_str
        self.limits = limits
        self.tasks: list[PlannerTask] = []
        self.used: set[tuple[str, str]] = set()

    def is_used(self, topic: TopicInsight) -> bool:
        return topic.key in self.used

    def add(self, topic: TopicInsight, task_type: TaskType, slot: TimeSlot, minutes: int) -> int:
        """Add a task; returns the minutes consumed (0 if the topic was used)."""
        if self.is_used(topic):
            return 0
        self.used.add(topic.key)
        task = make_task(topic, task_type, slot, minutes, self.date_str, self.limits)
        self.tasks.append(task)
        return task.allocated_minutes

    def fill(
        self,
        candidates: Sequence[TopicInsight],
        task_type: TaskType,
        slot: TimeSlot,
        budget: int,
        size: Callable[[TopicInsight], int],
    ) -> int:
        """Allocate tasks from candidates until the budget drops below the minimum task size."""
        left = budget
        for topic in candidates:
            if left < self.limits.min_task_mins:
                break
            left -= self.add(topic, task_type, slot, min(left, size(topic)))
        return left


# =============================================================================
# Plan Generator
# =============================================================================


class PlanGenerator:
    """
    Generates day and week plans.

    Each day kind has its own allocation policy, dispatched from a table
    so the policies can be exercised independently.
    """

    def __init__(self, limits: PlannerLimits | None = None):
        self.limits = limits or PLANNER
        self._policies: dict[DayKind, Callable[[_DayBuilder, Sequence[TopicInsight], int, ExamPhase | str], None]] = {
            DayKind.REST: self._plan_rest_day,
            DayKind.MOCK: self._plan_mock_day,
            DayKind.WEEKDAY: self._plan_weekday,
        }

    # ─── Day policies ────────────────────────────────────────────────────────

    def _plan_rest_day(
        self,
        builder: _DayBuilder,
        topics: Sequence[TopicInsight],
        total_mins: int,
        phase: ExamPhase | str,
    ) -> None:
        strong = [t for t in topics if t.status == TopicStatus.STRONG][: self.limits.rest_day_topics]
        for t in strong:
            builder.add(t, TaskType.PRACTICE, TimeSlot.MORNING, self.limits.rest_day_mins)

    def _plan_mock_day(
        self,
        builder: _DayBuilder,
        topics: Sequence[TopicInsight],
        total_mins: int,
        phase: ExamPhase | str,
    ) -> None:
        subject = most_urgent_subject(topics)
        mock_mins = round_half_up(total_mins * self.limits.mock_share)
        mock_topic = next((t for t in topics if t.subject == subject), topics[0] if topics else None)

        if mock_topic is not None:
            task = make_task(
                mock_topic, TaskType.MOCK_TEST, TimeSlot.MORNING, mock_mins, builder.date_str, self.limits
            )
            task.topic = MOCK_TOPIC
            task.chapter = MOCK_CHAPTER
            task.id = task_id(builder.date_str, task.subject, MOCK_TOPIC, TaskType.MOCK_TEST)
            task.reason = f"Full practice: {subject} simulation"
            builder.tasks.append(task)
            builder.used.add((task.subject, MOCK_TOPIC))

        weak = [t for t in topics if t.status in WEAK_OR_DEVELOPING][: self.limits.saturday_practice_topics]
        builder.fill(
            weak,
            TaskType.PRACTICE,
            TimeSlot.AFTERNOON,
            total_mins - mock_mins,
            lambda t: self.limits.saturday_practice_mins,
        )

    def _plan_weekday(
        self,
        builder: _DayBuilder,
        topics: Sequence[TopicInsight],
        total_mins: int,
        phase: ExamPhase | str,
    ) -> None:
        deep_pct, practice_pct, _ = get_phase_split(phase)
        deep_mins = round_half_up(total_mins * deep_pct)
        practice_mins = round_half_up(total_mins * practice_pct)
        mock_mins = total_mins - deep_mins - practice_mins

        # Morning: deep study on the weakest topics
        weak = [t for t in topics if t.status in WEAK_OR_DEVELOPING][: self.limits.deep_topics]
        builder.fill(
            weak,
            TaskType.DEEP_STUDY,
            TimeSlot.MORNING,
            deep_mins,
            lambda t: (
                self.limits.deep_mins_weak if t.status == TopicStatus.WEAK else self.limits.deep_mins_developing
            ),
        )

        # Afternoon: practice on developing/strong
        medium = [t for t in topics if t.status in DEVELOPING_OR_STRONG and not builder.is_used(t)]
        builder.fill(
            medium[: self.limits.afternoon_topics],
            TaskType.PRACTICE,
            TimeSlot.AFTERNOON,
            practice_mins,
            lambda t: self.limits.afternoon_mins,
        )

        # Evening: PYQs on topics not practiced recently
        stale = [
            t
            for t in topics
            if t.days_since_practice >= self.limits.stale_days
            and t.accuracy > self.limits.stale_min_accuracy
            and not builder.is_used(t)
        ]
        stale.sort(key=lambda t: t.days_since_practice, reverse=True)
        builder.fill(
            stale[: self.limits.evening_topics],
            TaskType.PYQ,
            TimeSlot.EVENING,
            mock_mins,
            lambda t: self.limits.evening_mins,
        )

    # ─── Public API ──────────────────────────────────────────────────────────

    def day_plan(
        self,
        topics: Sequence[TopicInsight],
        daily_hours: float,
        phase: ExamPhase | str,
        day: date | datetime | str,
    ) -> DayPlan:
        """
        Generate one day's plan.

        Args:
            topics: Topic insights, most urgent first
            daily_hours: Study budget in hours
            phase: Exam phase selecting the weekday time split
            day: Calendar date (ISO string or date)

        Returns:
            DayPlan with pending tasks
        """
        day = to_date(day)
        date_str = day.isoformat()
        kind = day_kind(day)
        total_mins = round_half_up(daily_hours * 60)

        builder = _DayBuilder(date_str, self.limits)
        self._policies[kind](builder, topics, total_mins, phase)

        idx = day_index(day)
        plan = DayPlan(
            date=date_str,
            day_name=DAY_NAMES[idx],
            day_short=DAY_SHORTS[idx],
            is_today=False,
            is_rest_day=kind == DayKind.REST,
            tasks=builder.tasks,
            completed_minutes=0,
            focus_subject=focus_subject(builder.tasks),
        )
        logger.debug(
            f"Generated {kind.value} plan for {date_str}: "
            f"{len(plan.tasks)} tasks, {plan.total_minutes}/{total_mins} min"
        )
        return plan

    def week_plan(
        self,
        topics: Sequence[TopicInsight],
        daily_hours: float,
        phase: ExamPhase | str,
        start: date | datetime | str | None = None,
    ) -> list[DayPlan]:
        """Seven consecutive day plans from start (default today), topics rotated per day."""
        start_day = to_date(start) if start is not None else date.today()
        plans = []
        for offset in range(7):
            day = start_day + timedelta(days=offset)
            plan = self.day_plan(rotate_topics(topics, offset), daily_hours, phase, day)
            plan.is_today = offset == 0
            plans.append(plan)

        logger.info(
            f"Built week plan from {start_day.isoformat()}: "
            f"{sum(len(p.tasks) for p in plans)} tasks, "
            f"{sum(p.total_minutes for p in plans)} min"
        )
        return plans


def _rotate(bucket: Sequence[TopicInsight], offset: int) -> list[TopicInsight]:
    n = len(bucket)
    if n == 0:
        return []
    shift = offset % n
    return [bucket[(i + shift) % n] for i in range(n)]


def rotate_topics(topics: Sequence[TopicInsight], offset: int) -> list[TopicInsight]:
    """
    Rotate topics within three status buckets so different topics surface each day.

    Buckets (in output order): weak + not-started, developing, strong + mastered.
    Each bucket is circularly shifted by offset; relative order is preserved.
    Lists of 3 or fewer topics are returned unchanged.
    """
    if len(topics) <= 3:
        return list(topics)

    weak = [t for t in topics if t.status in (TopicStatus.WEAK, TopicStatus.NOT_STARTED)]
    mid = [t for t in topics if t.status == TopicStatus.DEVELOPING]
    top = [t for t in topics if t.status in (TopicStatus.STRONG, TopicStatus.MASTERED)]
    return _rotate(weak, offset) + _rotate(mid, offset) + _rotate(top, offset)


# =============================================================================
# Functional API
# =============================================================================


def generate_day_plan(
    topics: Sequence[TopicInsight],
    daily_hours: float,
    phase: ExamPhase | str,
    day: date | datetime | str,
) -> DayPlan:
    return PlanGenerator().day_plan(topics, daily_hours, phase, day)


def generate_week_plan(
    topics: Sequence[TopicInsight],
    daily_hours: float,
    phase: ExamPhase | str,
    start: date | datetime | str | None = None,
) -> list[DayPlan]:
    return PlanGenerator().week_plan(topics, daily_hours, phase, start)


def quick_replan(
    topics: Sequence[TopicInsight],
    available_minutes: int,
    phase: ExamPhase | str,
    day: date | datetime | str,
) -> DayPlan:
    """'I only have N minutes today': a day plan with an explicit budget."""
    return generate_day_plan(topics, available_minutes / 60, phase, day)
