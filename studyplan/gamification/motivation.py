"""
Greeting and motivation text.

The greeting depends on the local hour. The motivation pool is chosen by a
priority ladder, then one line is drawn at random from it; inject a seeded
random.Random to make the draw reproducible.
"""

from __future__ import annotations

import random
from datetime import datetime

from studyplan.core.constants import MOTIVATIONS
from studyplan.core.models import Greeting


def greeting_for_hour(hour: int, name: str | None) -> str:
    display = name.split()[0] if name and name.split() else "there"
    if hour < 12:
        return f"Good morning, {display}"
    if hour < 17:
        return f"Good afternoon, {display}"
    if hour < 21:
        return f"Good evening, {display}"
    return f"Night owl mode, {display}?"


def motivation_pool(streak: int, avg_accuracy: float, days_to_exam: int) -> str:
    """
    Name of the motivation pool to draw from.

    Ladder (first match wins): exam within 30 days, streak >= 7,
    streak >= 3, accuracy >= 70, 0 < accuracy < 50, general.
    """
    if days_to_exam <= 30:
        return "exam_near"
    if streak >= 7:
        return "streak_high"
    if streak >= 3:
        return "streak_mid"
    if avg_accuracy >= 70:
        return "accuracy_high"
    if 0 < avg_accuracy < 50:
        return "accuracy_low"
    return "general"


def get_greeting(
    name: str | None,
    streak: int,
    avg_accuracy: float,
    days_to_exam: int,
    hour: int | None = None,
    rng: random.Random | None = None,
) -> Greeting:
    hour = datetime.now().hour if hour is None else hour
    rng = rng or random.Random()
    pool = MOTIVATIONS[motivation_pool(streak, avg_accuracy, days_to_exam)]
    return Greeting(greeting=greeting_for_hour(hour, name), motivation=rng.choice(pool))
