#!/usr/bin/env python3
"""
Breakdown Formatter - assembles PDSScoreBreakdown values for display and storage.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from core.scoring.models import CriteriaScore, CriterionKey, PDSScoreBreakdown, ScoringSystem

logger = logging.getLogger(__name__)

# (minimum percentage, rating) checked top-down
SCORE_RATINGS = (
    (90.0, "Excellent"),
    (75.0, "Very Good"),
    (60.0, "Good"),
)
LOWEST_RATING = "Fair"
NOT_SCORED_LABEL = "Not yet scored"

SCORING_SYSTEM_LABELS: Dict[ScoringSystem, str] = {
    ScoringSystem.JOB_CUSTOM: "Job-Specific Scoring",
    ScoringSystem.COMPANY_CUSTOM: "Company Custom Scoring",
    ScoringSystem.DEFAULT: "Default System Scoring",
}


def percentage_of(earned: float, maximum: float) -> float:
    """earned / maximum * 100, or 0 for a zero maximum."""
    if maximum <= 0:
        return 0.0
    return earned / maximum * 100.0


def score_rating(percentage: Optional[float]) -> str:
    """Display rating for an overall percentage."""
    if percentage is None:
        return NOT_SCORED_LABEL
    for threshold, label in SCORE_RATINGS:
        if percentage >= threshold:
            return label
    return LOWEST_RATING


def criteria_score(
    label: str,
    earned_points: float,
    max_points: float,
    weight: float,
    enabled: bool = True,
    matched_criteria: Optional[str] = None,
    details: Optional[str] = None
) -> CriteriaScore:
    return CriteriaScore(
        label=label,
        earned_points=earned_points,
        max_points=max_points,
        weight=weight,
        percentage=percentage_of(earned_points, max_points) if enabled else 0.0,
        enabled=enabled,
        matched_criteria=matched_criteria,
        details=details,
    )


def build_breakdown(
    criteria_scores: Dict[CriterionKey, CriteriaScore],
    max_possible_score: float,
    scoring_system_used: ScoringSystem,
    applied_date: Optional[datetime] = None
) -> PDSScoreBreakdown:
    """Aggregate per-criterion scores into a breakdown.

    Disabled criteria stay in criteria_scores but do not count toward totals.
    A configuration with nothing enabled yields 0 percent.
    """
    total_score = sum(score.earned_points for score in criteria_scores.values() if score.enabled)

    if max_possible_score <= 0:
        logger.warning("Degenerate scoring configuration: no enabled criteria, reporting 0%")

    return PDSScoreBreakdown(
        total_score=total_score,
        max_possible_score=max_possible_score,
        percentage=percentage_of(total_score, max_possible_score),
        scoring_system_used=ScoringSystem(scoring_system_used),
        criteria_scores=dict(criteria_scores),
        applied_date=applied_date,
    )


def summarize(breakdown: PDSScoreBreakdown) -> str:
    """One-line summary, e.g. "70/100 (70.0%) - Good, Default System Scoring"."""
    return (
        f"{breakdown.total_score:g}/{breakdown.max_possible_score:g} "
        f"({breakdown.percentage:.1f}%) - {score_rating(breakdown.percentage)}, "
        f"{SCORING_SYSTEM_LABELS[breakdown.scoring_system_used]}"
    )
