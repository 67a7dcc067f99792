"""
Brain Score Calculator.

Composite 0-100 metric over five dimensions:
- conceptual: share of topics at strong or mastered
- problem_solving: average accuracy scaled by 1.1
- consistency: streak (capped at 30 days) scaled by 3.3
- exam_readiness: mastery share + question volume + accuracy bonus
- growth: share of topics practiced in the last 7 days

Overall formula:
    20% x conceptual + 25% x problem_solving + 15% x consistency +
    25% x exam_readiness + 15% x growth
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from loguru import logger

from studyplan.core.models import BrainDimensions, BrainScore, TopicInsight, TopicStatus, Trend
from studyplan.core.utils import round_half_up


class BrainScoreCalculator:
    """
    Calculates the composite Brain Score.

    The weekly delta is intentionally varied; pass a seeded
    random.Random to make it reproducible.
    """

    # Dimension weights
    WEIGHT_CONCEPTUAL = 0.20
    WEIGHT_PROBLEM_SOLVING = 0.25
    WEIGHT_CONSISTENCY = 0.15
    WEIGHT_EXAM_READINESS = 0.25
    WEIGHT_GROWTH = 0.15

    # Trend thresholds (growth dimension)
    RISING_GROWTH = 60
    STABLE_GROWTH = 30

    STREAK_CAP_DAYS = 30
    RECENT_DAYS = 7
    QUESTION_VOLUME_TARGET = 500
    READINESS_ACCURACY_BONUS_AT = 70

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def conceptual(self, topics: Sequence[TopicInsight]) -> int:
        if not topics:
            return 0
        solid = sum(1 for t in topics if t.status in (TopicStatus.MASTERED, TopicStatus.STRONG))
        return min(100, round_half_up(solid / len(topics) * 100))

    def problem_solving(self, avg_accuracy: float) -> int:
        return min(100, round_half_up(avg_accuracy * 1.1))

    def consistency(self, streak: int) -> int:
        return min(100, round_half_up(min(streak, self.STREAK_CAP_DAYS) * 3.3))

    def exam_readiness(
        self,
        topics: Sequence[TopicInsight],
        avg_accuracy: float,
        total_questions: int,
    ) -> int:
        mastered = sum(1 for t in topics if t.status == TopicStatus.MASTERED)
        mastery_part = mastered / max(len(topics), 1) * 50
        volume_part = total_questions / self.QUESTION_VOLUME_TARGET * 30
        accuracy_part = 20 if avg_accuracy > self.READINESS_ACCURACY_BONUS_AT else avg_accuracy * 0.28
        return min(100, round_half_up(mastery_part + volume_part + accuracy_part))

    def growth(self, topics: Sequence[TopicInsight]) -> int:
        if not topics:
            return 0
        recent = sum(1 for t in topics if t.days_since_practice <= self.RECENT_DAYS)
        return min(100, round_half_up(recent / len(topics) * 100))

    def trend(self, growth: int) -> Trend:
        if growth >= self.RISING_GROWTH:
            return Trend.RISING
        if growth >= self.STABLE_GROWTH:
            return Trend.STABLE
        return Trend.DECLINING

    def weekly_delta(self, trend: Trend) -> int:
        """Signed week-over-week change: +2..+7 rising, -1..-4 declining."""
        if trend == Trend.RISING:
            return round_half_up(self.rng.random() * 5 + 2)
        if trend == Trend.DECLINING:
            return -round_half_up(self.rng.random() * 3 + 1)
        return 0

    def calculate(
        self,
        topics: Sequence[TopicInsight],
        streak: int,
        avg_accuracy: float,
        total_questions: int,
    ) -> BrainScore:
        """
        Calculate the full Brain Score.

        Args:
            topics: Analyzed topic insights
            streak: Current streak in days
            avg_accuracy: Average accuracy across topics (0-100)
            total_questions: Questions answered all time

        Returns:
            BrainScore; all zeros with a stable trend when there are no topics
        """
        if not topics:
            return BrainScore()

        dims = BrainDimensions(
            conceptual=self.conceptual(topics),
            problem_solving=self.problem_solving(avg_accuracy),
            consistency=self.consistency(streak),
            exam_readiness=self.exam_readiness(topics, avg_accuracy, total_questions),
            growth=self.growth(topics),
        )

        overall = round_half_up(
            dims.conceptual * self.WEIGHT_CONCEPTUAL
            + dims.problem_solving * self.WEIGHT_PROBLEM_SOLVING
            + dims.consistency * self.WEIGHT_CONSISTENCY
            + dims.exam_readiness * self.WEIGHT_EXAM_READINESS
            + dims.growth * self.WEIGHT_GROWTH
        )
        trend = self.trend(dims.growth)

        logger.debug(f"Brain score {overall} ({trend.value}) over {len(topics)} topics")

        return BrainScore(
            overall=overall,
            dimensions=dims,
            trend=trend,
            weekly_delta=self.weekly_delta(trend),
        )


def compute_brain_score(
    topics: Sequence[TopicInsight],
    streak: int,
    avg_accuracy: float,
    total_questions: int,
    rng: random.Random | None = None,
) -> BrainScore:
    """Functional wrapper around BrainScoreCalculator."""
    return BrainScoreCalculator(rng).calculate(topics, streak, avg_accuracy, total_questions)
