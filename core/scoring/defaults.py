#!/usr/bin/env python3
"""
Built-in PDS scoring rubric.

Band thresholds are expressed on the scales produced by
core.scoring.measurement: years for experience, counts for training, skills,
awards and certifications, and the EducationLevel / EligibilityTier ordinals
for education and eligibility.
"""

import logging
from typing import Any, Dict, Optional

from core.scoring.measurement import EducationLevel, EligibilityTier
from core.scoring.merge import merge_scoring_config
from core.scoring.models import Criterion, ScoringCriteria, ScoringOverride, SubCriterion
from core.scoring.exceptions import ConfigurationInvalid
from core.scoring.weights import WEIGHT_TOLERANCE, validate_scoring_config

logger = logging.getLogger(__name__)


def _band(name: str, points: float, description: str, min_value: float, max_value: Optional[float] = None) -> SubCriterion:
    return SubCriterion(
        name=name,
        points=points,
        description=description,
        min_value=float(min_value),
        max_value=None if max_value is None else float(max_value),
    )


DEFAULT_SCORING_CONFIG = ScoringCriteria(
    education=Criterion(
        label="Education",
        max_points=20,
        weight=20,
        description="Educational attainment and academic qualifications",
        sub_criteria=(
            _band("Doctorate Degree", 20, "PhD or equivalent", EducationLevel.DOCTORATE),
            _band("Master's Degree", 18, "Master's or equivalent", EducationLevel.MASTER),
            _band("Bachelor's Degree", 15, "College graduate", EducationLevel.BACHELOR),
            _band("Vocational/Technical", 12, "Technical education", EducationLevel.VOCATIONAL),
            _band("High School Graduate", 8, "Secondary education", EducationLevel.HIGH_SCHOOL),
        ),
    ),
    experience=Criterion(
        label="Work Experience",
        max_points=25,
        weight=25,
        description="Total years of professional work experience",
        sub_criteria=(
            _band("10+ years", 25, "Extensive experience", 10),
            _band("7-9 years", 20, "Senior level", 7),
            _band("4-6 years", 15, "Mid-level", 4),
            _band("2-3 years", 10, "Junior level", 2),
            _band("0-1 years", 5, "Entry level", 0),
        ),
    ),
    training=Criterion(
        label="Training & Seminars",
        max_points=10,
        weight=10,
        description="Relevant training programs and professional development",
        sub_criteria=(
            _band("10+ trainings", 10, "Extensive training", 10),
            _band("6-9 trainings", 8, "Good training background", 6),
            _band("3-5 trainings", 6, "Moderate training", 3),
            _band("1-2 trainings", 4, "Basic training", 1),
            _band("No training", 0, "No formal training", 0),
        ),
    ),
    eligibility=Criterion(
        label="Civil Service Eligibility",
        max_points=15,
        weight=15,
        description="Government eligibility and professional licenses",
        sub_criteria=(
            _band("Professional License + CS Professional", 15, "Highest eligibility",
                  EligibilityTier.LICENSE_AND_CS_PROFESSIONAL),
            _band("CS Professional", 12, "Professional civil service", EligibilityTier.CS_PROFESSIONAL),
            _band("CS Sub-Professional", 10, "Sub-professional level", EligibilityTier.CS_SUB_PROFESSIONAL),
            _band("RA 1080", 8, "RA 1080 eligible", EligibilityTier.RA_1080),
            _band("None", 0, "No eligibility", EligibilityTier.NONE),
        ),
    ),
    skills=Criterion(
        label="Special Skills",
        max_points=10,
        weight=10,
        description="Technical and soft skills relevant to the position",
        sub_criteria=(
            _band("Expert (5+ skills)", 10, "Multiple advanced skills", 5),
            _band("Advanced (3-4 skills)", 8, "Good skill set", 3),
            _band("Intermediate (2 skills)", 6, "Basic skills", 2),
            _band("Beginner (1 skill)", 4, "Limited skills", 1),
            _band("None", 0, "No special skills", 0),
        ),
    ),
    awards=Criterion(
        label="Recognition & Awards",
        max_points=5,
        weight=5,
        description="Professional recognition and achievements",
        sub_criteria=(
            _band("5+ awards", 5, "Highly recognized", 5),
            _band("3-4 awards", 4, "Well recognized", 3),
            _band("1-2 awards", 3, "Some recognition", 1),
            _band("None", 0, "No formal awards", 0),
        ),
    ),
    relevant_experience=Criterion(
        label="Relevant Experience",
        max_points=10,
        weight=10,
        description="Experience directly related to the job position",
        sub_criteria=(
            _band("Highly Relevant (5+ years)", 10, "Extensive relevant experience", 5),
            _band("Very Relevant (3-4 years)", 8, "Good relevant experience", 3),
            _band("Relevant (1-2 years)", 6, "Some relevant experience", 1),
            _band("Somewhat Relevant", 4, "Limited relevant experience", 0.5),
            _band("Not Relevant", 0, "No relevant experience", 0),
        ),
    ),
    certifications=Criterion(
        label="Professional Certifications",
        max_points=5,
        weight=5,
        description="Industry certifications and professional credentials",
        sub_criteria=(
            _band("3+ certifications", 5, "Multiple certifications", 3),
            _band("2 certifications", 4, "Good credentials", 2),
            _band("1 certification", 3, "Basic certification", 1),
            _band("None", 0, "No certifications", 0),
        ),
    ),
)


def build_system_default(
    overrides: Optional[Dict[str, Any]] = None,
    tolerance: float = WEIGHT_TOLERANCE
) -> ScoringCriteria:
    """Build the process-wide system default from the built-in rubric.

    Args:
        overrides: Optional ScoringOverride document (from config.yaml) merged
            over DEFAULT_SCORING_CONFIG.
        tolerance: Weight-sum tolerance.

    Returns:
        The immutable system default.

    Raises:
        ConfigurationInvalid: If the merged default fails validation. The
            system default is the fallback for every other configuration, so
            it must be valid before the process starts serving.
    """
    if not overrides:
        return DEFAULT_SCORING_CONFIG

    override = ScoringOverride.model_validate(overrides)
    config = merge_scoring_config(DEFAULT_SCORING_CONFIG, override)

    result = validate_scoring_config(config, tolerance)
    if not result.valid:
        raise ConfigurationInvalid(
            f"Configured system default is invalid: {'; '.join(result.errors)}",
            scoring_system="default",
            total_weight=result.total_weight,
            enabled=result.enabled,
        )
    for warning in result.warnings:
        logger.warning(f"System default scoring: {warning}")

    logger.info(f"Built system default scoring with overrides for: {', '.join(sorted(overrides))}")
    return config
