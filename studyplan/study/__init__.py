"""
Study Engine Module.

Pure computation over topic-performance data:
- Topic analysis (raw rows -> TopicInsight)
- Levels and exam phases
- Brain Score
- Rank prediction
- Day / week plan generation and quick replans
- Subject, chapter, weekly-win, stats and revision-due aggregators
"""

from studyplan.study.aggregators import (
    compute_stats,
    detect_weekly_wins,
    get_chapter_priorities,
    get_revision_due,
    get_subject_breakdowns,
)
from studyplan.study.brain_score import BrainScoreCalculator, compute_brain_score
from studyplan.study.plan_generator import (
    PlanGenerator,
    generate_day_plan,
    generate_week_plan,
    quick_replan,
    rotate_topics,
)
from studyplan.study.progression import get_exam_phase, get_level_info, get_phase_split
from studyplan.study.rank_predictor import get_exam_option, predict_rank
from studyplan.study.topic_analyzer import analyze_topics, average_accuracy

__all__ = [
    "BrainScoreCalculator",
    "PlanGenerator",
    "analyze_topics",
    "average_accuracy",
    "compute_brain_score",
    "compute_stats",
    "detect_weekly_wins",
    "generate_day_plan",
    "generate_week_plan",
    "get_chapter_priorities",
    "get_exam_option",
    "get_exam_phase",
    "get_level_info",
    "get_phase_split",
    "get_revision_due",
    "get_subject_breakdowns",
    "predict_rank",
    "quick_replan",
    "rotate_topics",
]
