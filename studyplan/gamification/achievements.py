"""
Achievement evaluation.

Definitions are data (metric + threshold), see ACHIEVEMENT_DEFS.
Unlocking is monotonic: an id the caller already persisted stays
unlocked even if its condition no longer holds.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from loguru import logger

from studyplan.core.constants import ACHIEVEMENT_DEFS, AchievementDef
from studyplan.core.models import Achievement, AchievementMetric


@dataclass
class AchievementStats:
    """Current learner stats the achievement conditions read."""

    streak: int = 0
    total_qs: int = 0
    accuracy: float = 0
    mastered: int = 0
    level: int = 1
    tasks_completed: int = 0

    def value(self, metric: AchievementMetric) -> float:
        return getattr(self, metric.value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, float]) -> AchievementStats:
        return cls(**{m.value: data[m.value] for m in AchievementMetric if m.value in data})


def is_satisfied(definition: AchievementDef, stats: AchievementStats) -> bool:
    return stats.value(definition.metric) >= definition.threshold


def achievement_progress(definition: AchievementDef, stats: AchievementStats) -> int:
    """Percentage toward the threshold; 100 only once satisfied."""
    if is_satisfied(definition, stats):
        return 100
    if definition.threshold <= 0:
        return 0
    return max(0, min(99, math.floor(stats.value(definition.metric) / definition.threshold * 100)))


def compute_achievements(
    stats: AchievementStats,
    unlocked_ids: Iterable[str] = (),
    definitions: Iterable[AchievementDef] = ACHIEVEMENT_DEFS,
) -> list[Achievement]:
    """
    Evaluate every achievement definition.

    Args:
        stats: Current learner stats
        unlocked_ids: Ids unlocked on earlier evaluations
        definitions: Achievement table (defaults to ACHIEVEMENT_DEFS)

    Returns:
        One Achievement per definition, in table order
    """
    previously = set(unlocked_ids)
    results = []
    for d in definitions:
        satisfied = is_satisfied(d, stats)
        was_unlocked = d.id in previously
        unlocked = satisfied or was_unlocked
        results.append(
            Achievement(
                id=d.id,
                title=d.title,
                description=d.description,
                icon=d.icon,
                rarity=d.rarity,
                unlocked=unlocked,
                newly_unlocked=satisfied and not was_unlocked,
                progress=100 if unlocked else achievement_progress(d, stats),
                xp_reward=d.xp,
            )
        )

    fresh = [a.id for a in results if a.newly_unlocked]
    if fresh:
        logger.info(f"Unlocked achievements: {', '.join(fresh)}")
    return results


def unlocked_ids(achievements: Iterable[Achievement]) -> list[str]:
    """Ids the caller should persist for the next evaluation."""
    return [a.id for a in achievements if a.unlocked]
