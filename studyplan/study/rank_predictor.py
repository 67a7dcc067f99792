"""
Rank Predictor.

Projects a competitive-exam rank from topic accuracy:
1. Group topics by subject and take each subject's mean accuracy
2. Weight by the exam's subject table into an estimated score
3. Interpolate the score over the exam's historical score-to-rank curve
4. Look up the outcome bucket (colleges) for the predicted rank

Unknown exams fall back to the JEE model and weights.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from studyplan.core.constants import (
    DEFAULT_EXAM,
    DEFAULT_SUBJECT_WEIGHT,
    EXAMS,
    NO_COLLEGE_MESSAGE,
    RANK_MODELS,
    SUBJECT_WEIGHTS,
    ExamOption,
    RankModel,
)
from studyplan.core.models import RankPrediction, RankRange, TopicInsight, Trajectory
from studyplan.core.utils import clamp, round_half_up


def get_exam_option(exam: str) -> ExamOption:
    """Catalogue entry (label, subjects) for an exam id; JEE when unknown."""
    for option in EXAMS:
        if option.value == exam:
            return option
    return next(o for o in EXAMS if o.value == DEFAULT_EXAM)


def get_rank_model(exam: str) -> RankModel:
    """Score-to-rank model for an exam; catalogue exams without a curve share JEE's."""
    model = RANK_MODELS.get(exam)
    if model is None:
        if any(option.value == exam for option in EXAMS):
            logger.debug(f"{exam} has no rank curve of its own, using {DEFAULT_EXAM}")
        else:
            logger.warning(f"No rank model for exam {exam!r}, falling back to {DEFAULT_EXAM}")
        return RANK_MODELS[DEFAULT_EXAM]
    return model


def get_subject_weights(exam: str) -> dict[str, float]:
    weights = SUBJECT_WEIGHTS.get(exam)
    if weights is None:
        logger.warning(f"No subject weights for exam {exam!r}, falling back to {DEFAULT_EXAM}")
        return SUBJECT_WEIGHTS[DEFAULT_EXAM]
    return weights


def estimate_score(topics: Sequence[TopicInsight], max_score: int, weights: dict[str, float]) -> int:
    """Sum of (subject mean accuracy / 100) x max score x subject weight."""
    groups: dict[str, list[int]] = {}
    for t in topics:
        groups.setdefault(t.subject, []).append(t.accuracy)

    score = 0.0
    for subject, accuracies in groups.items():
        weight = weights.get(subject, DEFAULT_SUBJECT_WEIGHT)
        subject_accuracy = sum(accuracies) / len(accuracies)
        score += subject_accuracy / 100 * max_score * weight
    return round_half_up(score)


def interpolate_rank(score: float, curve: Sequence[tuple[int, int]], total_candidates: int) -> int:
    """
    Map a score to a rank over a curve sorted by score descending.

    At or above the top point the top rank applies; between two points the
    rank is interpolated linearly; below every point the pool size applies.
    """
    for (s1, r1), (s2, r2) in zip(curve, curve[1:]):
        if score >= s1:
            return r1
        if score >= s2:
            ratio = (score - s2) / (s1 - s2)
            return round_half_up(r2 - ratio * (r2 - r1))
    if len(curve) == 1 and score >= curve[0][0]:
        return curve[0][1]
    return total_candidates


def lookup_colleges(rank: int, colleges: dict[int, tuple[str, ...]]) -> list[str]:
    """First bucket whose rank threshold is >= rank, thresholds ascending."""
    for threshold in sorted(colleges):
        if rank <= threshold:
            return list(colleges[threshold])
    return [NO_COLLEGE_MESSAGE]


def trajectory_for(avg_accuracy: float) -> Trajectory:
    if avg_accuracy >= 70:
        return Trajectory.IMPROVING
    if avg_accuracy >= 50:
        return Trajectory.STABLE
    return Trajectory.DECLINING


def predict_rank(
    topics: Sequence[TopicInsight],
    exam: str,
    avg_accuracy: float,
) -> RankPrediction:
    """
    Predict the learner's rank for an exam.

    Args:
        topics: Analyzed topic insights
        exam: Exam identifier (JEE, NEET, CET, Foundation)
        avg_accuracy: Average accuracy across topics (0-100)

    Returns:
        RankPrediction with range, confidence and outcome bucket
    """
    model = get_rank_model(exam)
    weights = get_subject_weights(exam)

    score = estimate_score(topics, model.max_score, weights)
    rank = interpolate_rank(score, model.curve, model.total_candidates)
    confidence = int(clamp(20, 95, round_half_up(len(topics) * 2 + avg_accuracy * 0.5)))

    logger.debug(f"Rank prediction for {exam}: score {score}/{model.max_score} -> rank {rank}")

    return RankPrediction(
        estimated_rank=rank,
        rank_range=RankRange(min=round_half_up(rank * 0.7), max=round_half_up(rank * 1.5)),
        confidence=confidence,
        estimated_score=score,
        max_score=model.max_score,
        trajectory=trajectory_for(avg_accuracy),
        top_colleges=lookup_colleges(rank, model.colleges),
    )
