"""
Gamification Module.

- achievements: data-driven unlock evaluation (monotonic)
- challenges: deterministic daily challenge by date
- motivation: greeting by hour, motivation by priority ladder
"""

from studyplan.gamification.achievements import (
    AchievementStats,
    compute_achievements,
    unlocked_ids,
)
from studyplan.gamification.challenges import pick_daily_challenge
from studyplan.gamification.motivation import get_greeting

__all__ = [
    "AchievementStats",
    "compute_achievements",
    "get_greeting",
    "pick_daily_challenge",
    "unlocked_ids",
]
