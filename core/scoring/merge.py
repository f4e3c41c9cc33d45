#!/usr/bin/env python3
"""
Partial-override merging.

Company and job configurations store only the criterion fields they change.
merge_scoring_config() lays such a ScoringOverride over a full base
configuration and returns a new ScoringCriteria; the base is never modified.
"""

from typing import Optional, Tuple

from core.scoring.models import (
    CRITERION_FIELDS,
    Criterion,
    CriterionOverride,
    ScoringCriteria,
    ScoringOverride,
    SubCriterion,
)


def _inherit_band_bounds(
    base_bands: Tuple[SubCriterion, ...],
    override_bands: Tuple[SubCriterion, ...]
) -> Tuple[SubCriterion, ...]:
    """Give unbounded override bands the predicate of the same-named base band.

    The configuration editor edits names and points only, so bands coming back
    from it carry no thresholds of their own.
    """
    base_by_name = {band.name: band for band in base_bands}
    merged = []
    for band in override_bands:
        source = base_by_name.get(band.name)
        if not band.has_bounds and source is not None and source.has_bounds:
            band = band.model_copy(update={
                "min_value": source.min_value,
                "max_value": source.max_value,
            })
        merged.append(band)
    return tuple(merged)


def merge_criterion(base: Criterion, override: Optional[CriterionOverride]) -> Criterion:
    """Return base with every field set in override replaced."""
    if override is None:
        return base

    updates = {}
    for name in override.model_fields_set:
        value = getattr(override, name)
        if value is None:
            continue
        if name == "sub_criteria":
            value = _inherit_band_bounds(base.sub_criteria, value)
        updates[name] = value

    if not updates:
        return base
    return base.model_copy(update=updates)


def merge_scoring_config(base: ScoringCriteria, override: Optional[ScoringOverride]) -> ScoringCriteria:
    """Merge a sparse override over a full configuration."""
    if override is None:
        return base

    merged = {
        attr: merge_criterion(getattr(base, attr), getattr(override, attr))
        for attr in CRITERION_FIELDS.values()
    }
    return ScoringCriteria(**merged)


def diff_scoring_config(base: ScoringCriteria, config: ScoringCriteria) -> ScoringOverride:
    """Smallest override that turns base into config.

    Used when an administrator saves a full configuration from the editor so
    that only the changed fields are stored.
    """
    changes = {}
    for key, criterion in config.items():
        base_criterion = base.get(key)
        fields = {}
        for name in Criterion.model_fields:
            value = getattr(criterion, name)
            if value != getattr(base_criterion, name):
                fields[name] = value
        if fields:
            changes[CRITERION_FIELDS[key]] = CriterionOverride(**fields)
    return ScoringOverride(**changes)
