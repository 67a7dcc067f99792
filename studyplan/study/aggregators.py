"""
Aggregators: subject rollups, chapter ranking, weekly wins, stats, revision due.

All functions recompute from TopicInsight lists plus profile scalars;
none of them keep state between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from studyplan.core.models import (
    ChapterPriority,
    DayPlan,
    PlannerStats,
    RevisionItem,
    RevisionUrgency,
    SubjectBreakdown,
    TopicInsight,
    TopicStatus,
    WeeklyWin,
    WinType,
)
from studyplan.core.schemas import ProfileSnapshot
from studyplan.core.utils import round_half_up
from studyplan.study.progression import get_exam_phase, get_level_info
from studyplan.study.topic_analyzer import average_accuracy

MAX_WEEKLY_WINS = 5
MAX_REVISION_ITEMS = 8


def _count(topics: Sequence[TopicInsight], *statuses: TopicStatus) -> int:
    return sum(1 for t in topics if t.status in statuses)


def get_subject_breakdowns(topics: Sequence[TopicInsight]) -> list[SubjectBreakdown]:
    """Per-subject rollup, weakest subject (lowest mean accuracy) first."""
    groups: dict[str, list[TopicInsight]] = {}
    for t in topics:
        groups.setdefault(t.subject, []).append(t)

    breakdowns = [
        SubjectBreakdown(
            subject=subject,
            avg_accuracy=average_accuracy(subs),
            topic_count=len(subs),
            mastered_count=_count(subs, TopicStatus.MASTERED),
            strong_count=_count(subs, TopicStatus.STRONG),
            developing_count=_count(subs, TopicStatus.DEVELOPING),
            weak_count=_count(subs, TopicStatus.WEAK),
            topics=sorted(subs, key=lambda t: t.priority_score, reverse=True),
        )
        for subject, subs in groups.items()
    ]
    breakdowns.sort(key=lambda b: b.avg_accuracy)
    return breakdowns


def get_chapter_priorities(topics: Sequence[TopicInsight]) -> list[ChapterPriority]:
    """
    Rank chapters by what to study next.

    score = 50 x weak fraction + 0.5 x (100 - mean accuracy), where weak
    counts both weak and not-started topics.
    """
    groups: dict[tuple[str, str], list[TopicInsight]] = {}
    for t in topics:
        groups.setdefault((t.subject, t.chapter), []).append(t)

    priorities = []
    for (subject, chapter), ch_topics in groups.items():
        weak_count = _count(ch_topics, TopicStatus.WEAK, TopicStatus.NOT_STARTED)
        avg = average_accuracy(ch_topics)
        score = round_half_up(weak_count / len(ch_topics) * 50 + (100 - avg) * 0.5)
        priorities.append(
            ChapterPriority(
                subject=subject,
                chapter=chapter,
                score=score,
                weak_topics=weak_count,
                total_topics=len(ch_topics),
                avg_accuracy=avg,
            )
        )
    priorities.sort(key=lambda p: p.score, reverse=True)
    return priorities


def detect_weekly_wins(
    topics: Sequence[TopicInsight],
    streak: int,
    avg_accuracy: float,
    total_questions: int,
) -> list[WeeklyWin]:
    """Rule-based wins: mastery, streak, question milestones, accuracy. At most 5."""
    wins: list[WeeklyWin] = []

    mastered = [t for t in topics if t.status == TopicStatus.MASTERED]
    if mastered:
        title = f"Mastered {mastered[0].topic}" if len(mastered) == 1 else f"{len(mastered)} topics mastered"
        wins.append(
            WeeklyWin(
                type=WinType.MASTERED,
                title=title,
                detail=", ".join(t.topic for t in mastered[:3]),
                emoji="🏆",
                xp=len(mastered) * 50,
            )
        )

    if streak >= 7:
        wins.append(WeeklyWin(WinType.STREAK, f"{streak}-day streak!", "Absolute consistency machine.", "🔥", streak * 10))
    elif streak >= 3:
        wins.append(WeeklyWin(WinType.STREAK, f"{streak} days strong", "Building the habit.", "⚡", streak * 5))

    if total_questions >= 1000:
        wins.append(WeeklyWin(WinType.MILESTONE, "1000+ solved", "Top 5% of aspirants.", "💎", 200))
    elif total_questions >= 500:
        wins.append(WeeklyWin(WinType.MILESTONE, "500+ solved", "Serious momentum.", "🎯", 100))
    elif total_questions >= 100:
        wins.append(WeeklyWin(WinType.MILESTONE, f"{total_questions} conquered", "Building the base.", "🚀", 50))

    if avg_accuracy >= 80:
        wins.append(
            WeeklyWin(WinType.IMPROVED, f"{round_half_up(avg_accuracy)}% accuracy", "AIR under 5000 territory.", "🎯", 100)
        )

    return wins[:MAX_WEEKLY_WINS]


def get_revision_due(topics: Sequence[TopicInsight]) -> list[RevisionItem]:
    """
    Topics at risk of being forgotten, highest risk first (top 8).

    forgetting_risk = min(100, days x (1 - 0.7 x accuracy/100) x 8);
    higher accuracy decays slower.
    """
    items = []
    for t in topics:
        if t.days_since_practice < 2 or t.accuracy <= 20:
            continue
        retention = t.accuracy / 100
        risk = min(100, round_half_up(t.days_since_practice * (1 - retention * 0.7) * 8))
        if t.days_since_practice > 7:
            urgency = RevisionUrgency.OVERDUE
        elif t.days_since_practice > 3:
            urgency = RevisionUrgency.DUE
        else:
            urgency = RevisionUrgency.UPCOMING
        items.append(
            RevisionItem(
                subject=t.subject,
                chapter=t.chapter,
                topic=t.topic,
                accuracy=t.accuracy,
                days_since=t.days_since_practice,
                urgency=urgency,
                forgetting_risk=risk,
            )
        )
    items.sort(key=lambda r: r.forgetting_risk, reverse=True)
    return items[:MAX_REVISION_ITEMS]


def compute_stats(
    topics: Sequence[TopicInsight],
    profile: ProfileSnapshot | None,
    days_to_exam: int,
    today_plan: DayPlan,
    total_questions: int,
) -> PlannerStats:
    """Headline numbers for the dashboard."""
    profile = profile or ProfileSnapshot()
    xp = profile.total_points
    level = get_level_info(xp)

    return PlannerStats(
        days_to_exam=max(0, days_to_exam),
        exam_phase=get_exam_phase(days_to_exam),
        total_topics_practiced=len(topics),
        mastered_count=_count(topics, TopicStatus.MASTERED),
        strong_count=_count(topics, TopicStatus.STRONG),
        developing_count=_count(topics, TopicStatus.DEVELOPING),
        weak_count=_count(topics, TopicStatus.WEAK),
        avg_accuracy=average_accuracy(topics),
        current_streak=profile.current_streak,
        longest_streak=profile.longest_streak,
        today_tasks_total=len(today_plan.tasks),
        today_tasks_done=sum(1 for t in today_plan.tasks if t.is_completed),
        total_questions_all_time=total_questions,
        current_xp=xp,
        level=level.level,
        level_title=level.title,
        level_icon=level.icon,
        xp_to_next_level=level.xp_to_next,
        xp_progress=level.progress,
    )
