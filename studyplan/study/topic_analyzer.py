"""
Topic Analyzer.

Turns raw topic-performance rows into classified, prioritized
TopicInsight records. Every other engine component consumes its output.

Priority formula (higher = study now):
    45% x (100 - accuracy) +
    35% x min(days since practice, 30) +
    20% x max(0, 20 - attempts)

Missing values never raise: accuracy and attempts default to 0,
a topic that was never practiced counts as 30 days stale.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel

from studyplan.core.models import TopicInsight, TopicStatus
from studyplan.core.utils import round_half_up

DEFAULT_STALE_DAYS = 30
SECONDS_PER_DAY = 86400

WEIGHT_ACCURACY = 0.45
WEIGHT_RECENCY = 0.35
WEIGHT_EXPOSURE = 0.20
RECENCY_CAP_DAYS = 30
EXPOSURE_TARGET = 20


def _to_utc(value: date | datetime) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a last-practiced value into an aware UTC datetime.

    Accepts datetime, date or ISO 8601 strings (a trailing "Z" is allowed).
    Unparseable values are treated as never practiced.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return _to_utc(value)
    if isinstance(value, str):
        try:
            return _to_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            logger.debug(f"Ignoring unparseable last_practiced value: {value!r}")
            return None
    return None


def days_since(last_practiced: Any, now: datetime | None = None) -> int:
    """Whole days elapsed since last practice, 30 when never practiced."""
    practiced_at = parse_timestamp(last_practiced)
    if practiced_at is None:
        return DEFAULT_STALE_DAYS
    now = _to_utc(now) if now is not None else datetime.now(UTC)
    elapsed = (now - practiced_at).total_seconds() // SECONDS_PER_DAY
    return max(0, int(elapsed))


def compute_priority_score(accuracy: float, days_since_practice: int, attempts: int) -> int:
    """Weighted urgency score for a topic."""
    accuracy_w = (100 - accuracy) * WEIGHT_ACCURACY
    recency_w = min(days_since_practice, RECENCY_CAP_DAYS) * WEIGHT_RECENCY
    exposure_w = max(0, EXPOSURE_TARGET - attempts) * WEIGHT_EXPOSURE
    return round_half_up(accuracy_w + recency_w + exposure_w)


def analyze_row(row: Mapping[str, Any] | BaseModel, now: datetime | None = None) -> TopicInsight:
    """Convert one raw row into a TopicInsight."""
    if isinstance(row, BaseModel):
        row = row.model_dump()

    accuracy = row.get("accuracy") or 0
    attempts = row.get("questions_attempted") or 0
    days = days_since(row.get("last_practiced"), now)

    return TopicInsight(
        subject=row.get("subject") or "Unknown",
        chapter=row.get("chapter") or "",
        topic=row.get("topic") or "",
        accuracy=round_half_up(accuracy),
        questions_attempted=attempts,
        status=TopicStatus.classify(accuracy, attempts),
        days_since_practice=days,
        priority_score=compute_priority_score(accuracy, days, attempts),
        stuck_days=row.get("stuck_days") or 0,
    )


def analyze_topics(
    rows: Iterable[Mapping[str, Any] | BaseModel],
    now: datetime | None = None,
) -> list[TopicInsight]:
    """
    Analyze raw performance rows.

    Args:
        rows: Mappings or PerformanceRow models
        now: Reference time for staleness (defaults to current UTC time)

    Returns:
        TopicInsight list sorted by priority_score descending (stable)
    """
    insights = [analyze_row(row, now) for row in rows]
    insights.sort(key=lambda t: t.priority_score, reverse=True)
    logger.debug(f"Analyzed {len(insights)} topics")
    return insights


def average_accuracy(topics: Iterable[TopicInsight]) -> int:
    """Rounded mean accuracy, 0 when there are no topics."""
    items = list(topics)
    if not items:
        return 0
    return round_half_up(sum(t.accuracy for t in items) / len(items))


def filter_exam_topics(
    rows: Iterable[Mapping[str, Any] | BaseModel],
    valid_topics: Iterable[tuple[str, str]],
) -> list[Mapping[str, Any] | BaseModel]:
    """
    Keep only rows whose (subject, topic) belongs to the target exam.

    An empty valid set means the exam catalogue is unknown; nothing is
    filtered in that case.
    """
    valid = set(valid_topics)
    rows = list(rows)
    if not valid:
        return rows

    def _key(row: Mapping[str, Any] | BaseModel) -> tuple[Any, Any]:
        if isinstance(row, BaseModel):
            return (getattr(row, "subject", None), getattr(row, "topic", None))
        return (row.get("subject"), row.get("topic"))

    kept = [row for row in rows if _key(row) in valid]
    logger.debug(f"Exam filter kept {len(kept)}/{len(rows)} rows")
    return kept
