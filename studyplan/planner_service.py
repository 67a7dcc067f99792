"""
Planner Service.

Provides high-level operations for the CLI and any presentation layer:
- Assemble a full PlannerState from a learner snapshot
- Gate personalization on data sufficiency (diagnostic needed or not)
- Toggle task completion and recompute completed minutes
- Quick replan of today with a reduced budget

The service never persists anything; callers store completed task ids
and unlocked achievement ids and pass them back in on the next call.
"""

from __future__ import annotations

import json
import random
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, time
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from config import Settings, get_settings
from studyplan.core.errors import PlannerInputError
from studyplan.core.models import (
    Achievement,
    BrainScore,
    ChapterPriority,
    DailyChallenge,
    DayPlan,
    PlannerStats,
    PlannerTask,
    RankPrediction,
    RevisionItem,
    SubjectBreakdown,
    TaskStatus,
    TopicInsight,
    WeeklyWin,
)
from studyplan.core.schemas import PlannerSnapshot
from studyplan.core.utils import to_date
from studyplan.gamification.achievements import AchievementStats, compute_achievements
from studyplan.gamification.challenges import pick_daily_challenge
from studyplan.gamification.motivation import get_greeting
from studyplan.study.aggregators import (
    compute_stats,
    detect_weekly_wins,
    get_chapter_priorities,
    get_revision_due,
    get_subject_breakdowns,
)
from studyplan.study.brain_score import compute_brain_score
from studyplan.study.plan_generator import PlanGenerator, quick_replan
from studyplan.study.progression import get_exam_phase
from studyplan.study.rank_predictor import predict_rank
from studyplan.study.topic_analyzer import analyze_topics, average_accuracy, filter_exam_topics


@dataclass
class PlannerState:
    """Every engine output for one learner at one point in time."""

    student_name: str
    target_exam: str
    exam_date: str
    daily_study_hours: float
    total_questions: int
    has_enough_data: bool
    needs_diagnostic: bool

    brain_score: BrainScore | None = None
    rank_prediction: RankPrediction | None = None
    stats: PlannerStats | None = None
    today_plan: DayPlan | None = None
    week_plan: list[DayPlan] = field(default_factory=list)

    topics: list[TopicInsight] = field(default_factory=list)
    subject_breakdowns: list[SubjectBreakdown] = field(default_factory=list)
    chapter_priorities: list[ChapterPriority] = field(default_factory=list)
    revision_due: list[RevisionItem] = field(default_factory=list)
    weekly_wins: list[WeeklyWin] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)
    daily_challenge: DailyChallenge | None = None

    greeting: str = ""
    motivation: str = ""


def load_snapshot(path: str | Path) -> PlannerSnapshot:
    """
    Load and validate a planner snapshot JSON file.

    Raises:
        PlannerInputError: If the file is missing, not JSON, or invalid
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise PlannerInputError(f"Snapshot file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise PlannerInputError(f"Snapshot file is not valid JSON: {path} ({e})") from e

    try:
        snapshot = PlannerSnapshot.model_validate(raw)
    except ValidationError as e:
        raise PlannerInputError(f"Snapshot file failed validation: {path}\n{e}") from e

    logger.debug(f"Loaded snapshot {path}: {len(snapshot.rows)} rows")
    return snapshot


def toggle_task(plan: DayPlan, task_id: str) -> DayPlan:
    """
    Flip one task between pending and completed.

    Returns a new DayPlan with completed_minutes recomputed; the input plan
    is left untouched. Unknown ids return an unchanged copy.
    """
    tasks: list[PlannerTask] = []
    found = False
    for t in plan.tasks:
        if t.id == task_id:
            found = True
            new_status = TaskStatus.PENDING if t.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
            tasks.append(replace(t, status=new_status))
        else:
            tasks.append(replace(t))

    if not found:
        logger.debug(f"Task {task_id} not in plan for {plan.date}")

    return replace(plan, tasks=tasks, completed_minutes=_completed_minutes(tasks))


def apply_completed(plan: DayPlan, completed_ids: Iterable[str]) -> DayPlan:
    """Restore persisted completions onto a freshly generated plan."""
    done = set(completed_ids)
    if not done:
        return plan
    tasks = [
        replace(t, status=TaskStatus.COMPLETED) if t.id in done else replace(t)
        for t in plan.tasks
    ]
    return replace(plan, tasks=tasks, completed_minutes=_completed_minutes(tasks))


def _completed_minutes(tasks: Iterable[PlannerTask]) -> int:
    return sum(t.allocated_minutes for t in tasks if t.is_completed)


class PlannerService:
    """
    Assembles planner state from a learner snapshot.

    Args:
        settings: Settings instance (defaults to get_settings())
        rng: Random source for motivation text and weekly delta; derived
            from settings.motivation_seed when not given
    """

    def __init__(self, settings: Settings | None = None, rng: random.Random | None = None):
        self.settings = settings or get_settings()
        if rng is None:
            rng = random.Random(self.settings.motivation_seed)
        self.rng = rng
        self.generator = PlanGenerator()

    def resolve_daily_hours(self, hours: float | None) -> float:
        requested = hours or self.settings.default_daily_hours
        clamped = self.settings.clamp_daily_hours(requested)
        if clamped != requested:
            logger.warning(
                f"Daily study hours {requested} outside "
                f"[{self.settings.min_daily_hours}, {self.settings.max_daily_hours}], using {clamped}"
            )
        return clamped

    def days_to_exam(self, exam_date: date, today: date) -> int:
        return (exam_date - today).days

    def build_state(
        self,
        snapshot: PlannerSnapshot,
        today: date | datetime | str | None = None,
        now: datetime | None = None,
        hour: int | None = None,
    ) -> PlannerState:
        """
        Run the full engine pipeline for one learner.

        Args:
            snapshot: Rows, profile and persisted ids
            today: Plan start date (defaults to the current date)
            now: Reference time for topic staleness (defaults to noon UTC
                on `today` when a date is given, else the current time)
            hour: Local hour for the greeting (defaults to the current hour)

        Returns:
            PlannerState; when data is insufficient only the header
            fields and sufficiency flags are populated
        """
        if today is not None:
            today = to_date(today)
            if now is None:
                now = datetime.combine(today, time(12), tzinfo=UTC)
        else:
            today = date.today()

        profile = snapshot.profile
        target_exam = profile.target_exam or self.settings.default_target_exam
        exam_date = profile.target_exam_date or self.settings.default_exam_date
        daily_hours = self.resolve_daily_hours(profile.daily_study_hours)
        total_questions = snapshot.total_questions

        rows = filter_exam_topics(snapshot.rows, snapshot.valid_topics)
        min_q = self.settings.min_questions_for_plan
        min_t = self.settings.min_topics_for_plan
        needs_diagnostic = total_questions < min_q and len(rows) < min_t
        has_enough_data = total_questions >= min_q and len(rows) >= min_t

        state = PlannerState(
            student_name=profile.full_name or "",
            target_exam=target_exam,
            exam_date=exam_date.isoformat(),
            daily_study_hours=daily_hours,
            total_questions=total_questions,
            has_enough_data=has_enough_data,
            needs_diagnostic=needs_diagnostic,
        )
        if not has_enough_data:
            logger.info(
                f"Not enough data for a plan: {total_questions} questions, {len(rows)} topics "
                f"(need {min_q} and {min_t})"
            )
            return state

        days_to_exam = self.days_to_exam(exam_date, today)
        phase = get_exam_phase(days_to_exam)
        streak = profile.current_streak

        topics = analyze_topics(rows, now)
        avg_accuracy = average_accuracy(topics)

        week = self.generator.week_plan(topics, daily_hours, phase, today)
        week[0] = apply_completed(week[0], snapshot.completed_task_ids)
        today_plan = week[0]

        stats = compute_stats(topics, profile, days_to_exam, today_plan, total_questions)
        achievements = compute_achievements(
            AchievementStats(
                streak=streak,
                total_qs=total_questions,
                accuracy=avg_accuracy,
                mastered=stats.mastered_count,
                level=stats.level,
                tasks_completed=stats.today_tasks_done,
            ),
            snapshot.unlocked_achievements,
        )
        greeting = get_greeting(profile.full_name, streak, avg_accuracy, days_to_exam, hour, self.rng)

        state.brain_score = compute_brain_score(topics, streak, avg_accuracy, total_questions, self.rng)
        state.rank_prediction = predict_rank(topics, target_exam, avg_accuracy)
        state.stats = stats
        state.today_plan = today_plan
        state.week_plan = week
        state.topics = topics
        state.subject_breakdowns = get_subject_breakdowns(topics)
        state.chapter_priorities = get_chapter_priorities(topics)
        state.revision_due = get_revision_due(topics)
        state.weekly_wins = detect_weekly_wins(topics, streak, avg_accuracy, total_questions)
        state.achievements = achievements
        state.daily_challenge = pick_daily_challenge(today)
        state.greeting = greeting.greeting
        state.motivation = greeting.motivation

        logger.info(
            f"Planner state for {target_exam}: {len(topics)} topics, phase {phase.value}, "
            f"{len(today_plan.tasks)} tasks today"
        )
        return state

    def replan(self, state: PlannerState, available_minutes: int) -> PlannerState:
        """Replace today's plan with one sized to the available minutes."""
        if state.today_plan is None or state.stats is None:
            return state

        new_today = quick_replan(
            state.topics, available_minutes, state.stats.exam_phase, state.today_plan.date
        )
        new_today.is_today = True
        week = [new_today, *state.week_plan[1:]]
        stats = replace(state.stats, today_tasks_total=len(new_today.tasks), today_tasks_done=0)
        logger.info(f"Replanned {new_today.date} for {available_minutes} min: {len(new_today.tasks)} tasks")
        return replace(state, today_plan=new_today, week_plan=week, stats=stats)

    def toggle(self, state: PlannerState, task_id: str) -> PlannerState:
        """Toggle a task in today's plan and refresh the done count."""
        if state.today_plan is None or state.stats is None:
            return state
        new_today = toggle_task(state.today_plan, task_id)
        week = [new_today, *state.week_plan[1:]]
        done = sum(1 for t in new_today.tasks if t.is_completed)
        return replace(
            state,
            today_plan=new_today,
            week_plan=week,
            stats=replace(state.stats, today_tasks_done=done),
        )
