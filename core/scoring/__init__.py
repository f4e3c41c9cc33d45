#!/usr/bin/env python3
"""
PDS Scoring Module.

Public API:
- ScoringService: resolve, score and persist against stored records
- score_profile: pure scoring of a profile against a configuration
- resolve_config / resolve_config_or_default: configuration precedence
- validate_weights / validate_scoring_config / calculate_max_score
- DEFAULT_SCORING_CONFIG: built-in rubric

Modules:
- models.py: Criterion, ScoringCriteria, overrides, CriteriaScore, PDSScoreBreakdown
- defaults.py: Built-in rubric and system default construction
- merge.py: Partial-override merging
- weights.py: Weight validator and max-score helper
- resolver.py: job-custom > company-custom > default resolution
- measurement.py: Applicant profile measurements
- calculator.py: Band matching and scoring
- breakdown.py: Breakdown assembly and display ratings
- ranking.py: Applicant ranking per job
- service.py: ScoringService orchestrator
"""

from core.scoring.calculator import score_profile
from core.scoring.defaults import DEFAULT_SCORING_CONFIG, build_system_default
from core.scoring.models import (
    Criterion,
    CriterionKey,
    JobScoringConfig,
    PDSScoreBreakdown,
    ScoringCriteria,
    ScoringOverride,
    ScoringSystem,
    SubCriterion,
)
from core.scoring.resolver import ResolvedConfig, resolve_config, resolve_config_or_default
from core.scoring.service import ScoringService
from core.scoring.weights import calculate_max_score, validate_scoring_config, validate_weights

__all__ = [
    'ScoringService',
    'score_profile',
    'resolve_config',
    'resolve_config_or_default',
    'ResolvedConfig',
    'validate_weights',
    'validate_scoring_config',
    'calculate_max_score',
    'build_system_default',
    'DEFAULT_SCORING_CONFIG',
    'Criterion',
    'CriterionKey',
    'JobScoringConfig',
    'PDSScoreBreakdown',
    'ScoringCriteria',
    'ScoringOverride',
    'ScoringSystem',
    'SubCriterion',
]
