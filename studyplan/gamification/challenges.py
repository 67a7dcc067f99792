"""
Daily challenge selection.

Deterministic: the same ISO date always yields the same challenge.
"""

from __future__ import annotations

from datetime import date, datetime

from studyplan.core.constants import CHALLENGE_TEMPLATES, ChallengeTemplate
from studyplan.core.models import DailyChallenge
from studyplan.core.utils import to_date


def date_hash(date_str: str) -> int:
    """Sum of the numeric components of YYYY-MM-DD."""
    return sum(int(part) for part in date_str.split("-"))


def pick_daily_challenge(
    day: date | datetime | str,
    templates: tuple[ChallengeTemplate, ...] = CHALLENGE_TEMPLATES,
) -> DailyChallenge:
    date_str = to_date(day).isoformat()
    tmpl = templates[date_hash(date_str) % len(templates)]
    return DailyChallenge(
        id=f"challenge-{date_str}",
        type=tmpl.type,
        title=tmpl.title,
        description=tmpl.description,
        target=tmpl.target,
        current=0,
        xp_reward=tmpl.xp,
        icon=tmpl.icon,
    )
