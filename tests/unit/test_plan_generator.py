"""
Unit tests for day, week and quick-replan generation.

Calendar used below: 2025-01-10 Fri, 01-11 Sat, 01-12 Sun, 01-13 Mon.
"""

from datetime import date

import pytest

from studyplan.core.models import (
    DayKind,
    ExamPhase,
    TaskPriority,
    TaskStatus,
    TaskType,
    TimeSlot,
    TopicStatus,
)
from studyplan.study.plan_generator import (
    PlanGenerator,
    day_index,
    day_kind,
    focus_subject,
    generate_day_plan,
    generate_week_plan,
    most_urgent_subject,
    questions_for,
    quick_replan,
    rotate_topics,
    task_id,
    task_priority,
    xp_for_task,
)

MONDAY = "2025-01-13"
SATURDAY = "2025-01-11"
SUNDAY = "2025-01-12"


class TestHelpers:
    def test_day_index_sunday_is_zero(self):
        assert day_index(date(2025, 1, 12)) == 0
        assert day_index(date(2025, 1, 11)) == 6

    def test_day_kind(self):
        assert day_kind(date(2025, 1, 12)) == DayKind.REST
        assert day_kind(date(2025, 1, 11)) == DayKind.MOCK
        assert day_kind(date(2025, 1, 13)) == DayKind.WEEKDAY

    def test_task_id_normalizes_whitespace_and_case(self):
        tid = task_id("2025-01-10", "Physics", "Rotational  Motion", TaskType.PRACTICE)
        assert tid == "2025-01-10::physics::rotational_motion::practice"

    def test_questions_target(self):
        assert questions_for(20) == 7
        assert questions_for(5) == 3

    def test_xp_for_task(self):
        assert xp_for_task(TaskType.PRACTICE, 30, TaskPriority.LOW) == 25
        assert xp_for_task(TaskType.DEEP_STUDY, 45, TaskPriority.HIGH) == 73
        assert xp_for_task(TaskType.MOCK_TEST, 90, TaskPriority.CRITICAL) == 300

    def test_task_priority(self, insight):
        assert task_priority(insight("a", accuracy=30, days=6)) == TaskPriority.CRITICAL
        assert task_priority(insight("a", accuracy=30, days=5)) == TaskPriority.HIGH
        assert task_priority(insight("a", accuracy=60)) == TaskPriority.MEDIUM
        assert task_priority(insight("a", accuracy=95, attempts=20)) == TaskPriority.LOW

    def test_most_urgent_subject_fallback(self):
        assert most_urgent_subject([]) == "Physics"

    def test_focus_subject(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        assert focus_subject(plan.tasks) in {"Physics", "Chemistry", "Mathematics"}
        assert focus_subject([]) == ""


class TestWeekday:
    def test_slots_and_budgets(self, scenario_topics):
        """240 min in building phase: 96 deep, 84 practice, 60 PYQ."""
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)

        assert plan.day_name == "Monday"
        assert plan.is_rest_day is False
        assert [t.time_slot for t in plan.tasks] == [
            TimeSlot.MORNING,
            TimeSlot.MORNING,
            TimeSlot.AFTERNOON,
            TimeSlot.AFTERNOON,
            TimeSlot.AFTERNOON,
        ]
        assert [t.allocated_minutes for t in plan.tasks] == [45, 45, 30, 30, 24]
        assert plan.total_minutes == 174

    def test_deep_study_goes_to_weak_topics(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        deep = [t for t in plan.tasks if t.type == TaskType.DEEP_STUDY]

        assert {t.topic for t in deep} == {"Electrostatics", "Organic Basics"}
        assert all(t.priority == TaskPriority.CRITICAL for t in deep)

    def test_evening_pyqs_for_stale_topics(self, insight):
        topics = [
            insight("Optics", accuracy=40, attempts=5, days=10),
            insight("Waves", accuracy=80, attempts=12, days=9),
            insight("Fluids", accuracy=85, attempts=12, days=6),
            insight("Gravitation", accuracy=78, attempts=9, days=4),
            insight("Units", accuracy=20, attempts=5, days=12),
        ]
        plan = generate_day_plan(topics, 4, ExamPhase.FINAL_PUSH, MONDAY)
        pyqs = [t for t in plan.tasks if t.type == TaskType.PYQ]

        assert pyqs
        assert all(t.time_slot == TimeSlot.EVENING for t in pyqs)
        assert "Units" not in {t.topic for t in pyqs}  # accuracy 20 is too low

    def test_all_tasks_start_pending(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        assert all(t.status == TaskStatus.PENDING for t in plan.tasks)
        assert plan.completed_minutes == 0

    def test_ids_stable_across_regeneration(self, scenario_topics):
        a = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        b = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        assert [t.id for t in a.tasks] == [t.id for t in b.tasks]

    def test_to_dict_includes_total_minutes(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        data = plan.to_dict()
        assert data["total_minutes"] == plan.total_minutes
        assert data["tasks"][0]["type"] == "deep-study"


class TestSaturday:
    def test_mock_test_first(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, SATURDAY)
        mock = plan.tasks[0]

        assert mock.type == TaskType.MOCK_TEST
        assert mock.topic == "Mini Mock Test"
        assert mock.chapter == "Mixed"
        assert mock.subject == "Physics"
        assert mock.allocated_minutes == 90  # 40% of 240 capped at 90
        assert mock.id == "2025-01-11::physics::mini_mock_test::mock-test"

    def test_afternoon_practice_on_weak_topics(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, SATURDAY)
        practice = plan.tasks[1:]

        assert [t.allocated_minutes for t in practice] == [35, 35, 35]
        assert all(t.type == TaskType.PRACTICE for t in practice)
        assert all(t.time_slot == TimeSlot.AFTERNOON for t in practice)

    def test_no_topics_gives_empty_plan(self):
        plan = generate_day_plan([], 4, ExamPhase.BUILDING, SATURDAY)
        assert plan.tasks == []


class TestSunday:
    def test_light_practice_on_strong_topics(self, scenario_topics):
        plan = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, SUNDAY)

        assert plan.is_rest_day is True
        assert [t.topic for t in plan.tasks] == ["Laws of Motion", "Atomic Structure"]
        assert all(t.allocated_minutes == 20 for t in plan.tasks)

    def test_no_strong_topics_is_empty_rest_day(self, insight):
        topics = [insight("Optics", accuracy=40), insight("Waves", accuracy=60)]
        plan = generate_day_plan(topics, 6, ExamPhase.BUILDING, SUNDAY)

        assert plan.is_rest_day is True
        assert plan.tasks == []
        assert plan.total_minutes == 0
        assert plan.focus_subject == ""


class TestPlanInvariants:
    @pytest.mark.parametrize("hours", [1, 2.5, 4, 8, 14])
    @pytest.mark.parametrize("phase", list(ExamPhase))
    def test_no_duplicates_and_budget_respected(self, scenario_topics, hours, phase):
        for plan in generate_week_plan(scenario_topics, hours, phase, "2025-01-10"):
            keys = [(t.subject, t.topic) for t in plan.tasks]
            assert len(keys) == len(set(keys))
            assert plan.total_minutes == sum(t.allocated_minutes for t in plan.tasks)
            assert plan.total_minutes <= hours * 60 + 90
            assert all(t.allocated_minutes <= 90 for t in plan.tasks)
            assert all(t.questions_target >= 3 for t in plan.tasks)

    def test_unknown_phase_uses_default_split(self, scenario_topics):
        odd = generate_day_plan(scenario_topics, 4, "not-a-phase", MONDAY)
        building = generate_day_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        assert [t.id for t in odd.tasks] == [t.id for t in building.tasks]


class TestWeekPlan:
    def test_seven_consecutive_days(self, scenario_topics):
        week = PlanGenerator().week_plan(scenario_topics, 4, ExamPhase.BUILDING, "2025-01-10")

        assert [p.date for p in week] == [f"2025-01-{d}" for d in range(10, 17)]
        assert [p.is_today for p in week] == [True] + [False] * 6
        assert [p.day_short for p in week][:3] == ["Fri", "Sat", "Sun"]
        assert week[2].is_rest_day is True

    def test_rotation_varies_weekday_topics(self, scenario_topics):
        week = generate_week_plan(scenario_topics, 4, ExamPhase.BUILDING, MONDAY)
        assert week[0].tasks[0].topic == "Electrostatics"
        assert week[1].tasks[0].topic == "Organic Basics"


class TestRotation:
    def test_short_lists_unchanged(self, insight):
        topics = [insight("a", accuracy=90, attempts=20), insight("b", accuracy=10)]
        assert rotate_topics(topics, 3) == topics

    def test_buckets_in_order(self, scenario_topics):
        rotated = rotate_topics(scenario_topics, 0)
        statuses = [t.status for t in rotated]

        assert statuses[:2] == [TopicStatus.WEAK] * 2
        assert statuses[2:5] == [TopicStatus.DEVELOPING] * 3
        assert set(statuses[5:]) == {TopicStatus.STRONG, TopicStatus.MASTERED}

    def test_each_bucket_shifts_by_offset(self, insight):
        weak = [insight(f"w{i}", accuracy=20) for i in range(3)]
        mid = [insight(f"d{i}", accuracy=60) for i in range(2)]
        rotated = rotate_topics(weak + mid, 1)
        assert [t.topic for t in rotated] == ["w1", "w2", "w0", "d1", "d0"]

    def test_same_members(self, scenario_topics):
        for offset in range(7):
            rotated = rotate_topics(scenario_topics, offset)
            assert sorted(t.topic for t in rotated) == sorted(t.topic for t in scenario_topics)


class TestQuickReplan:
    def test_fits_reduced_budget(self, scenario_topics):
        plan = quick_replan(scenario_topics, 60, ExamPhase.BUILDING, MONDAY)

        assert plan.tasks
        assert plan.total_minutes <= 60

    def test_tiny_budget_gives_no_tasks(self, scenario_topics):
        plan = quick_replan(scenario_topics, 10, ExamPhase.BUILDING, MONDAY)
        assert plan.tasks == []
