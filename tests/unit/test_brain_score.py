"""
Unit tests for the Brain Score calculator.
"""

import random

from studyplan.core.models import Trend
from studyplan.study.brain_score import BrainScoreCalculator, compute_brain_score
from studyplan.study.progression import get_exam_phase


class TestBrainScoreScenario:
    """12 topics, streak 10, avg 72, 600 questions."""

    def test_dimensions(self, scenario_topics):
        score = compute_brain_score(scenario_topics, 10, 72, 600, random.Random(0))
        dims = score.dimensions

        assert dims.conceptual == 58  # 7 / 12
        assert dims.problem_solving == 79
        assert dims.consistency == 33
        assert dims.exam_readiness == 69  # 12.5 + 36 + 20
        assert dims.growth == 83  # 10 of 12 within a week

    def test_overall_and_trend(self, scenario_topics):
        score = compute_brain_score(scenario_topics, 10, 72, 600, random.Random(0))

        assert score.overall == 66
        assert score.trend == Trend.RISING
        assert 2 <= score.weekly_delta <= 7

    def test_phase_for_45_days(self):
        # >30 and <=60 days remaining
        assert get_exam_phase(45).value == "revision-sprint"


class TestBrainScoreEdges:
    def test_no_topics_is_all_zero(self):
        score = compute_brain_score([], 12, 80, 900)

        assert score.overall == 0
        assert score.dimensions.to_dict() == {
            "conceptual": 0,
            "problem_solving": 0,
            "consistency": 0,
            "exam_readiness": 0,
            "growth": 0,
        }
        assert score.trend == Trend.STABLE
        assert score.weekly_delta == 0

    def test_dimensions_capped_at_100(self, insight):
        topics = [insight("Kinematics", accuracy=100, attempts=50, days=0)]
        score = compute_brain_score(topics, 90, 100, 10_000)

        for value in score.dimensions.to_dict().values():
            assert 0 <= value <= 100
        assert score.dimensions.consistency == 99  # streak capped at 30

    def test_declining_trend_has_negative_delta(self, insight):
        topics = [insight("Optics", days=20), insight("Waves", days=15)]
        score = compute_brain_score(topics, 0, 40, 50, random.Random(3))

        assert score.trend == Trend.DECLINING
        assert -4 <= score.weekly_delta <= -1

    def test_stable_trend_has_zero_delta(self, insight):
        calc = BrainScoreCalculator()
        assert calc.trend(45) == Trend.STABLE
        assert calc.weekly_delta(Trend.STABLE) == 0

    def test_seeded_delta_is_reproducible(self, scenario_topics):
        a = compute_brain_score(scenario_topics, 10, 72, 600, random.Random(42))
        b = compute_brain_score(scenario_topics, 10, 72, 600, random.Random(42))
        assert a.weekly_delta == b.weekly_delta

    def test_readiness_accuracy_bonus_only_above_70(self, insight):
        calc = BrainScoreCalculator()
        topics = [insight("Optics")]

        assert calc.exam_readiness(topics, 70, 0) == 20  # 70 x 0.28 = 19.6
        assert calc.exam_readiness(topics, 71, 0) == 20
        assert calc.exam_readiness(topics, 50, 0) == 14
