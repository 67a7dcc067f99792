"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings, get_settings  # noqa: E402
from studyplan.core.models import TopicInsight, TopicStatus  # noqa: E402
from studyplan.study.topic_analyzer import compute_priority_score  # noqa: E402

# Friday
NOW = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings():
    """Settings with defaults only (no .env)."""
    return Settings(_env_file=None)


def make_insight(
    topic: str,
    subject: str = "Physics",
    accuracy: int = 60,
    attempts: int = 10,
    days: int = 1,
    chapter: str | None = None,
    status: TopicStatus | None = None,
) -> TopicInsight:
    """Build a TopicInsight with a consistent status and priority."""
    return TopicInsight(
        subject=subject,
        chapter=chapter or f"{topic} Chapter",
        topic=topic,
        accuracy=accuracy,
        questions_attempted=attempts,
        status=status or TopicStatus.classify(accuracy, attempts),
        days_since_practice=days,
        priority_score=compute_priority_score(accuracy, days, attempts),
    )


@pytest.fixture
def insight():
    """Factory fixture for TopicInsight records."""
    return make_insight


@pytest.fixture
def scenario_topics():
    """
    12 topics: 3 mastered, 4 strong, 3 developing, 2 weak.

    Sorted by priority descending like analyze_topics output.
    """
    topics = [
        make_insight("Kinematics", "Physics", 92, 20, 1),
        make_insight("Mole Concept", "Chemistry", 92, 20, 1),
        make_insight("Limits", "Mathematics", 92, 20, 1),
        make_insight("Laws of Motion", "Physics", 80, 12, 2),
        make_insight("Atomic Structure", "Chemistry", 80, 12, 2),
        make_insight("Matrices", "Mathematics", 80, 12, 2),
        make_insight("Work Energy", "Physics", 80, 12, 2),
        make_insight("Thermodynamics", "Physics", 60, 10, 4),
        make_insight("Chemical Bonding", "Chemistry", 60, 10, 4),
        make_insight("Integration", "Mathematics", 60, 10, 4),
        make_insight("Electrostatics", "Physics", 35, 6, 8),
        make_insight("Organic Basics", "Chemistry", 35, 6, 8),
    ]
    topics.sort(key=lambda t: t.priority_score, reverse=True)
    return topics


@pytest.fixture
def sample_rows():
    """Raw performance rows as the store would return them."""
    return [
        {
            "subject": "Physics",
            "chapter": "Mechanics",
            "topic": "Kinematics",
            "accuracy": 92,
            "questions_attempted": 25,
            "last_practiced": "2025-01-09T08:00:00Z",
        },
        {
            "subject": "Physics",
            "chapter": "Electricity",
            "topic": "Electrostatics",
            "accuracy": 38,
            "questions_attempted": 9,
            "last_practiced": "2025-01-01T08:00:00Z",
        },
        {
            "subject": "Chemistry",
            "chapter": "Physical Chemistry",
            "topic": "Mole Concept",
            "accuracy": 78,
            "questions_attempted": 14,
            "last_practiced": "2025-01-05T08:00:00Z",
        },
        {
            "subject": "Chemistry",
            "chapter": "Organic Chemistry",
            "topic": "Hydrocarbons",
            "accuracy": 55,
            "questions_attempted": 11,
            "last_practiced": "2025-01-06T08:00:00Z",
        },
        {
            "subject": "Mathematics",
            "chapter": "Calculus",
            "topic": "Integration",
            "accuracy": 44,
            "questions_attempted": 16,
            "last_practiced": "2024-12-28T08:00:00Z",
        },
        {
            "subject": "Mathematics",
            "chapter": "Algebra",
            "topic": "Matrices",
            "accuracy": 81,
            "questions_attempted": 10,
            "last_practiced": "2025-01-08T08:00:00Z",
        },
    ]


@pytest.fixture
def snapshot_data(sample_rows):
    """Planner snapshot as the CLI reads it from JSON."""
    return {
        "profile": {
            "full_name": "Asha Verma",
            "total_points": 750,
            "current_streak": 4,
            "longest_streak": 9,
            "target_exam": "JEE",
            "target_exam_date": "2025-05-24",
            "daily_study_hours": 4,
        },
        "rows": sample_rows,
        "total_questions": 85,
        "unlocked_achievements": ["streak-3"],
        "completed_task_ids": [],
    }


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path
