#!/usr/bin/env python3
"""
Configuration Resolver - picks the scoring configuration for a job.

Precedence (first applicable wins):
1. Job customScoring with neither default flag set -> merged over the system
   default, tagged job-custom.
2. Job useSystemDefault -> system default.
3. Company custom override -> merged over the system default, tagged
   company-custom.
4. System default.

resolve_config() raises ConfigurationInvalid when a custom result fails the
weight invariant. resolve_config_or_default() is what scoring uses: it logs
the failure and falls back to the system default.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from core.scoring.exceptions import ConfigurationInvalid, DegenerateConfiguration
from core.scoring.merge import merge_scoring_config
from core.scoring.models import JobScoringConfig, ScoringCriteria, ScoringOverride, ScoringSystem
from core.scoring.weights import WEIGHT_TOLERANCE, total_enabled_weight, validate_weights

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedConfig:
    """Effective configuration for a job and where it came from."""
    config: ScoringCriteria
    scoring_system_used: ScoringSystem
    fallback_error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_error is not None

    @property
    def enabled(self):
        return [key.value for key, _ in self.config.enabled_items()]


def _check_weights(config: ScoringCriteria, scoring_system: ScoringSystem, tolerance: float) -> None:
    enabled = [key.value for key, _ in config.enabled_items()]
    if not enabled:
        raise DegenerateConfiguration(
            f"{scoring_system.value} configuration has no enabled criteria",
            scoring_system=scoring_system.value,
            total_weight=0.0,
            enabled=enabled,
        )
    if not validate_weights(config, tolerance):
        total = total_enabled_weight(config)
        raise ConfigurationInvalid(
            f"{scoring_system.value} configuration weights sum to {total:g}, expected 100 "
            f"(enabled: {', '.join(enabled)})",
            scoring_system=scoring_system.value,
            total_weight=total,
            enabled=enabled,
        )


def resolve_config(
    job_scoring: Optional[JobScoringConfig],
    company_override: Optional[ScoringOverride],
    system_default: ScoringCriteria,
    tolerance: float = WEIGHT_TOLERANCE
) -> ResolvedConfig:
    """Resolve the effective configuration. Pure function of its inputs.

    Raises:
        ConfigurationInvalid: If a job or company configuration fails the
            weight invariant.
    """
    if (
        job_scoring is not None
        and job_scoring.custom_scoring is not None
        and not job_scoring.use_company_default
        and not job_scoring.use_system_default
    ):
        config = merge_scoring_config(system_default, job_scoring.custom_scoring)
        _check_weights(config, ScoringSystem.JOB_CUSTOM, tolerance)
        return ResolvedConfig(config=config, scoring_system_used=ScoringSystem.JOB_CUSTOM)

    if job_scoring is not None and job_scoring.use_system_default:
        return ResolvedConfig(config=system_default, scoring_system_used=ScoringSystem.DEFAULT)

    if company_override is not None:
        config = merge_scoring_config(system_default, company_override)
        _check_weights(config, ScoringSystem.COMPANY_CUSTOM, tolerance)
        return ResolvedConfig(config=config, scoring_system_used=ScoringSystem.COMPANY_CUSTOM)

    return ResolvedConfig(config=system_default, scoring_system_used=ScoringSystem.DEFAULT)


def resolve_config_or_default(
    job_scoring: Optional[JobScoringConfig],
    company_override: Optional[ScoringOverride],
    system_default: ScoringCriteria,
    tolerance: float = WEIGHT_TOLERANCE,
    context: str = ""
) -> ResolvedConfig:
    """Resolve, falling back to the system default if the result is invalid."""
    try:
        return resolve_config(job_scoring, company_override, system_default, tolerance)
    except ConfigurationInvalid as e:
        logger.warning(f"Falling back to default scoring{' for ' + context if context else ''}: {e}")
        return ResolvedConfig(
            config=system_default,
            scoring_system_used=ScoringSystem.DEFAULT,
            fallback_error=f"{e.__class__.__name__}: {e}",
        )


def parse_job_scoring(document: Optional[Dict[str, Any]]) -> Optional[JobScoringConfig]:
    """Parse a stored job scoring document.

    Raises:
        ConfigurationInvalid: If the document does not match the schema.
    """
    if not document:
        return None
    try:
        return JobScoringConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigurationInvalid(
            f"Stored job scoring configuration is malformed: {e.error_count()} error(s)",
            scoring_system=ScoringSystem.JOB_CUSTOM.value,
        ) from e


def parse_scoring_override(document: Optional[Dict[str, Any]]) -> Optional[ScoringOverride]:
    """Parse a stored company override document.

    Raises:
        ConfigurationInvalid: If the document does not match the schema.
    """
    if not document:
        return None
    try:
        return ScoringOverride.model_validate(document)
    except ValidationError as e:
        raise ConfigurationInvalid(
            f"Stored company scoring configuration is malformed: {e.error_count()} error(s)",
            scoring_system=ScoringSystem.COMPANY_CUSTOM.value,
        ) from e
