#!/usr/bin/env python3
"""
Score Calculator - maps an applicant profile onto the bands of each criterion.

For every enabled criterion the measurer produces one number; the bands are
scanned in authored order (highest points first) and the first band whose
predicate holds is the match. Earned points are that band's points; weight
is never applied as a multiplier.

Per-criterion problems (absent profile data, empty or ascending bands) score
that criterion 0 and never abort the run.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from core.scoring.breakdown import build_breakdown, criteria_score
from core.scoring.exceptions import MalformedSubCriteria, MissingMeasurement
from core.scoring.measurement import ApplicantProfile, JobContext, Measurer, default_measure
from core.scoring.models import (
    CriteriaScore,
    Criterion,
    CriterionKey,
    PDSScoreBreakdown,
    ScoringCriteria,
    ScoringSystem,
    SubCriterion,
)
from core.scoring.weights import calculate_max_score

logger = logging.getLogger(__name__)


def select_band(key: CriterionKey, criterion: Criterion, measurement: float) -> Optional[SubCriterion]:
    """First band whose predicate holds, or None.

    Raises:
        MalformedSubCriteria: If the criterion has no bands or they are not
            ordered from highest to lowest points.
    """
    if not criterion.sub_criteria:
        raise MalformedSubCriteria(key.value, "no sub-criteria defined")
    if not criterion.bands_descending():
        raise MalformedSubCriteria(key.value, "sub-criteria are not ordered from highest to lowest points")

    for band in criterion.sub_criteria:
        if band.qualifies(measurement):
            return band
    return None


def _zero(criterion: Criterion, details: str) -> CriteriaScore:
    return criteria_score(
        label=criterion.label,
        earned_points=0.0,
        max_points=criterion.max_points,
        weight=criterion.weight,
        details=details,
    )


def score_criterion(
    key: CriterionKey,
    criterion: Criterion,
    profile: ApplicantProfile,
    job: Optional[JobContext] = None,
    measure: Measurer = default_measure
) -> CriteriaScore:
    """Score a single criterion."""
    if not criterion.enabled:
        return criteria_score(
            label=criterion.label,
            earned_points=0.0,
            max_points=criterion.max_points,
            weight=criterion.weight,
            enabled=False,
            details="Criterion disabled",
        )

    try:
        measurement = measure(key, profile, job)
        if measurement is None:
            raise MissingMeasurement(key.value)
        band = select_band(key, criterion, measurement)
    except MissingMeasurement as e:
        logger.debug(f"{e}; scoring 0")
        return _zero(criterion, str(e))
    except MalformedSubCriteria as e:
        logger.warning(f"{e}; scoring 0 for applicant {profile.applicant_id or '<unknown>'}")
        return _zero(criterion, str(e))

    if band is None:
        return _zero(criterion, f"No sub-criterion matched measured value {measurement:g}")

    earned = min(max(band.points, 0.0), criterion.max_points)
    if earned != band.points:
        logger.warning(
            f"{key.value}: band '{band.name}' awards {band.points:g} points, "
            f"clamped to max points {criterion.max_points:g}"
        )

    return criteria_score(
        label=criterion.label,
        earned_points=earned,
        max_points=criterion.max_points,
        weight=criterion.weight,
        matched_criteria=band.name,
        details=f"Measured {measurement:g}: {band.description}" if band.description else f"Measured {measurement:g}",
    )


def score_profile(
    profile: ApplicantProfile,
    config: ScoringCriteria,
    job: Optional[JobContext] = None,
    measure: Measurer = default_measure,
    scoring_system_used: ScoringSystem = ScoringSystem.DEFAULT,
    applied_date: Optional[datetime] = None
) -> PDSScoreBreakdown:
    """Score a profile against a configuration.

    Args:
        profile: Parsed applicant PDS fields.
        config: Effective configuration (see core.scoring.resolver).
        job: Job context for job-dependent measurements (skills, relevance).
        measure: Measurer returning one number per criterion or None.
        scoring_system_used: Tag recorded on the breakdown.
        applied_date: Timestamp recorded on the breakdown.

    Returns:
        PDSScoreBreakdown with an entry for every criterion.
    """
    scores: Dict[CriterionKey, CriteriaScore] = {
        key: score_criterion(key, criterion, profile, job, measure)
        for key, criterion in config.items()
    }

    breakdown = build_breakdown(
        criteria_scores=scores,
        max_possible_score=calculate_max_score(config),
        scoring_system_used=scoring_system_used,
        applied_date=applied_date,
    )
    logger.debug(
        f"Scored applicant {profile.applicant_id or '<unknown>'}: "
        f"{breakdown.total_score:g}/{breakdown.max_possible_score:g} ({breakdown.percentage:.1f}%)"
    )
    return breakdown
