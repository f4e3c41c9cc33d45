#!/usr/bin/env python3
"""
Weight validation and max-score helpers.

validate_weights() is the acceptance invariant: enabled weights must sum to
100 within WEIGHT_TOLERANCE. validate_scoring_config() adds the editor checks
that gate saving a configuration. Neither runs during scoring.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.scoring.models import CRITERION_FIELDS, ScoringCriteria

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 0.01

MIN_MAX_POINTS = 1
MAX_MAX_POINTS = 100

# Lower bound of the "close" weight status shown in the editor
CLOSE_WEIGHT_FLOOR = 90.0


@dataclass
class WeightValidationResult:
    """Outcome of validating a configuration for storage."""
    valid: bool
    total_weight: float
    enabled: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def weight_status(self) -> str:
        return weight_status(self.total_weight)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "totalWeight": self.total_weight,
            "weightStatus": self.weight_status,
            "enabled": list(self.enabled),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def total_enabled_weight(config: ScoringCriteria) -> float:
    return sum(criterion.weight for _, criterion in config.enabled_items())


def calculate_max_score(config: ScoringCriteria) -> float:
    """Sum of max_points over enabled criteria."""
    return sum(criterion.max_points for _, criterion in config.enabled_items())


def validate_weights(config: ScoringCriteria, tolerance: float = WEIGHT_TOLERANCE) -> bool:
    """True if enabled weights sum to 100 within tolerance."""
    return abs(total_enabled_weight(config) - 100) < tolerance


def weight_status(total_weight: float, tolerance: float = WEIGHT_TOLERANCE) -> str:
    """Editor status for a weight sum: perfect, over, close or under."""
    if abs(total_weight - 100) < tolerance:
        return "perfect"
    if total_weight > 100:
        return "over"
    if total_weight > CLOSE_WEIGHT_FLOOR:
        return "close"
    return "under"


def validate_scoring_config(
    config: ScoringCriteria,
    tolerance: float = WEIGHT_TOLERANCE
) -> WeightValidationResult:
    """Validate a configuration before it is stored.

    Errors block the save; warnings are informational (e.g. max_points not
    matching the highest band).

    Args:
        config: Full configuration (system, company-merged or job-merged).
        tolerance: Weight-sum tolerance.

    Returns:
        WeightValidationResult with the enabled criteria and their weight sum.
    """
    enabled = [key.value for key, _ in config.enabled_items()]
    total_weight = total_enabled_weight(config)
    errors: List[str] = []
    warnings: List[str] = []

    if not enabled:
        errors.append("At least one criterion must be enabled")

    if abs(total_weight - 100) >= tolerance:
        errors.append(
            f"Total weight of enabled criteria must equal 100 "
            f"(currently {total_weight:g}; enabled: {', '.join(enabled) or 'none'})"
        )

    for key, criterion in config.enabled_items():
        name = key.value

        if not (MIN_MAX_POINTS <= criterion.max_points <= MAX_MAX_POINTS):
            errors.append(
                f"{name}: max points must be between {MIN_MAX_POINTS} and {MAX_MAX_POINTS}, "
                f"got {criterion.max_points:g}"
            )

        if criterion.weight <= 0:
            errors.append(f"{name}: weight must be greater than 0 for enabled criteria")

        if not criterion.sub_criteria:
            errors.append(f"{name}: at least one sub-criterion is required")
            continue

        if not criterion.bands_descending():
            errors.append(f"{name}: sub-criteria must be ordered from highest to lowest points")

        # An unbounded band matches every measurement, so nothing after it is reachable
        shadowing = [band.name for band in criterion.sub_criteria[:-1] if not band.has_bounds]
        if shadowing:
            errors.append(
                f"{name}: sub-criteria without a threshold must be the last band: "
                f"{', '.join(shadowing)}"
            )

        over_max = [band.name for band in criterion.sub_criteria if band.points > criterion.max_points]
        if over_max:
            errors.append(
                f"{name}: sub-criteria points exceed max points ({criterion.max_points:g}): "
                f"{', '.join(over_max)}"
            )

        highest = criterion.highest_band_points
        if highest is not None and highest != criterion.max_points:
            warnings.append(
                f"{name}: max points ({criterion.max_points:g}) does not match "
                f"the highest sub-criterion ({highest:g})"
            )

    result = WeightValidationResult(
        valid=not errors,
        total_weight=total_weight,
        enabled=enabled,
        errors=errors,
        warnings=warnings,
    )
    if not result.valid:
        logger.debug(f"Scoring configuration failed validation: {errors}")
    return result


def auto_distribute_weights(config: ScoringCriteria) -> ScoringCriteria:
    """Spread 100 evenly over enabled criteria; the remainder goes to the first.

    Returns config unchanged if nothing is enabled.
    """
    enabled = config.enabled_items()
    if not enabled:
        return config

    equal_weight = 100 // len(enabled)
    remainder = 100 - equal_weight * len(enabled)

    updates = {}
    for index, (key, criterion) in enumerate(enabled):
        weight = equal_weight + (remainder if index == 0 else 0)
        updates[CRITERION_FIELDS[key]] = criterion.model_copy(update={"weight": float(weight)})

    return config.model_copy(update=updates)
