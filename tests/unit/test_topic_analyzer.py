"""
Unit tests for topic classification, staleness and priority scoring.
"""

from datetime import UTC, date, datetime

import pytest

from studyplan.core.models import TopicStatus
from studyplan.core.schemas import PerformanceRow
from studyplan.study.topic_analyzer import (
    analyze_row,
    analyze_topics,
    average_accuracy,
    compute_priority_score,
    days_since,
    filter_exam_topics,
    parse_timestamp,
)


class TestTopicStatus:
    """Status ladder boundaries."""

    def test_mastered_boundary_is_inclusive(self):
        assert TopicStatus.classify(90, 15) == TopicStatus.MASTERED

    def test_just_below_mastered_accuracy(self):
        """89.999 with 15 attempts is strong, not mastered."""
        assert TopicStatus.classify(89.999, 15) == TopicStatus.STRONG

    def test_mastered_needs_attempts(self):
        assert TopicStatus.classify(95, 14) == TopicStatus.STRONG

    def test_strong_needs_attempts(self):
        assert TopicStatus.classify(80, 7) == TopicStatus.DEVELOPING

    def test_developing_ignores_attempts(self):
        assert TopicStatus.classify(50, 0) == TopicStatus.DEVELOPING

    def test_not_started(self):
        assert TopicStatus.classify(0, 0) == TopicStatus.NOT_STARTED

    def test_weak(self):
        assert TopicStatus.classify(49, 3) == TopicStatus.WEAK

    def test_display_name(self):
        assert TopicStatus.NOT_STARTED.display_name == "Not Started"


class TestTimestamps:
    def test_parse_trailing_z(self):
        parsed = parse_timestamp("2025-01-07T12:00:00Z")
        assert parsed == datetime(2025, 1, 7, 12, 0, tzinfo=UTC)

    def test_parse_date(self):
        assert parse_timestamp(date(2025, 1, 7)) == datetime(2025, 1, 7, tzinfo=UTC)

    def test_parse_garbage_is_none(self):
        assert parse_timestamp("last tuesday") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None

    def test_whole_days_elapsed(self, now):
        assert days_since("2025-01-07T12:00:00Z", now) == 3
        assert days_since("2025-01-07T13:00:00Z", now) == 2

    def test_never_practiced_counts_as_30_days(self, now):
        assert days_since(None, now) == 30
        assert days_since("not a date", now) == 30

    def test_future_timestamp_clamps_to_zero(self, now):
        assert days_since("2025-02-01T00:00:00Z", now) == 0


class TestPriorityScore:
    def test_empty_row_defaults(self, now):
        """Missing fields default to zero and 30 stale days."""
        t = analyze_row({}, now)

        assert t.subject == "Unknown"
        assert t.accuracy == 0
        assert t.questions_attempted == 0
        assert t.days_since_practice == 30
        assert t.status == TopicStatus.NOT_STARTED
        # 45 + 10.5 + 4 = 59.5
        assert t.priority_score == 60

    def test_lower_accuracy_never_lowers_priority(self):
        scores = [compute_priority_score(acc, 5, 10) for acc in range(100, -1, -1)]
        assert scores == sorted(scores)

    def test_staleness_raises_priority_up_to_30_days(self):
        scores = [compute_priority_score(60, d, 10) for d in range(0, 31)]
        assert scores == sorted(scores)
        assert compute_priority_score(60, 45, 10) == compute_priority_score(60, 30, 10)

    def test_accepts_pydantic_rows(self, now):
        row = PerformanceRow(subject="Chemistry", topic="Mole Concept", accuracy=72.6, questions_attempted=9)
        t = analyze_row(row, now)

        assert t.subject == "Chemistry"
        assert t.accuracy == 73


class TestAnalyzeTopics:
    def test_sorted_by_priority_descending(self, sample_rows, now):
        topics = analyze_topics(sample_rows, now)

        assert len(topics) == len(sample_rows)
        scores = [t.priority_score for t in topics]
        assert scores == sorted(scores, reverse=True)

    def test_stable_for_equal_priority(self, now):
        rows = [{"subject": "Physics", "topic": name, "accuracy": 50, "questions_attempted": 10} for name in "ABC"]
        topics = analyze_topics(rows, now)
        assert [t.topic for t in topics] == ["A", "B", "C"]

    def test_empty(self):
        assert analyze_topics([]) == []

    def test_average_accuracy(self, insight):
        assert average_accuracy([]) == 0
        assert average_accuracy([insight("a", accuracy=50), insight("b", accuracy=75)]) == 63


class TestExamFilter:
    def test_keeps_only_exam_topics(self, sample_rows):
        kept = filter_exam_topics(sample_rows, [("Physics", "Kinematics"), ("Chemistry", "Mole Concept")])
        assert [r["topic"] for r in kept] == ["Kinematics", "Mole Concept"]

    def test_empty_catalogue_keeps_everything(self, sample_rows):
        assert filter_exam_topics(sample_rows, []) == sample_rows

    @pytest.mark.parametrize("valid", [[("Biology", "Genetics")]])
    def test_no_match_drops_everything(self, sample_rows, valid):
        assert filter_exam_topics(sample_rows, valid) == []
