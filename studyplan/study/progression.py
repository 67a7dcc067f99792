"""
Progression: XP levels and exam phases.

Both are pure lookups over the static ladders in studyplan.core.constants.
"""

from __future__ import annotations

from studyplan.core.constants import (
    DEFAULT_TIME_SPLIT,
    LEVELS,
    PHASE_TIME_SPLIT,
    PHASES,
    Level,
    PhaseInfo,
)
from studyplan.core.models import ExamPhase, LevelInfo
from studyplan.core.utils import round_half_up


def get_level_info(xp: int, levels: tuple[Level, ...] = LEVELS) -> LevelInfo:
    """
    Map lifetime XP to a level.

    The current level is the highest threshold <= xp; progress is the
    percentage of the way to the next threshold (100 at the top level).
    """
    current = levels[0]
    for lvl in levels:
        if xp >= lvl.xp:
            current = lvl
        else:
            break

    nxt = next((lvl for lvl in levels if lvl.xp > xp), None)
    if nxt is None:
        return LevelInfo(
            level=current.level,
            title=current.title,
            icon=current.icon,
            xp_to_next=0,
            progress=100,
            next_title="Max",
        )

    span = nxt.xp - current.xp
    progress = (xp - current.xp) / span * 100 if span > 0 else 100
    return LevelInfo(
        level=current.level,
        title=current.title,
        icon=current.icon,
        xp_to_next=max(0, nxt.xp - xp),
        progress=max(0, min(100, round_half_up(progress))),
        next_title=nxt.title,
    )


def get_exam_phase(days_to_exam: int) -> ExamPhase:
    """Threshold ladder on days remaining; phases apply when days > min_days."""
    for phase, info in PHASES.items():
        if days_to_exam > info.min_days:
            return phase
    return ExamPhase.FINAL_PUSH


def get_phase_split(phase: ExamPhase | str) -> tuple[float, float, float]:
    """(deep_study, practice, mock_test) shares of the daily budget."""
    try:
        return PHASE_TIME_SPLIT[ExamPhase(phase)]
    except ValueError:
        return DEFAULT_TIME_SPLIT


def get_phase_info(phase: ExamPhase | str) -> PhaseInfo:
    return PHASES[ExamPhase(phase)]
