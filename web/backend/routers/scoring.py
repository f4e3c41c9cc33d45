#!/usr/bin/env python3
"""
Scoring configuration endpoints - view, validate and edit PDS scoring.
"""

import logging
from fastapi import APIRouter, Depends

from core.scoring import ScoringCriteria, ScoringService, calculate_max_score, validate_scoring_config
from core.scoring.breakdown import SCORING_SYSTEM_LABELS
from core.scoring.models import ScoringSystem
from core.scoring.weights import WeightValidationResult, auto_distribute_weights
from ..config import get_config, get_system_default
from ..dependencies import get_scoring_service
from ..utils import parse_uuid
from ..models.requests import (
    ValidateScoringRequest,
    DistributeWeightsRequest,
    CompanyScoringUpdate,
    JobScoringUpdate,
)
from ..models.responses import (
    ScoringConfigResponse,
    ValidateScoringResponse,
    DistributeWeightsResponse,
    ValidationResultResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["scoring"])


def _validation_response(result: WeightValidationResult) -> ValidationResultResponse:
    return ValidationResultResponse(
        valid=result.valid,
        total_weight=result.total_weight,
        weight_status=result.weight_status,
        enabled=result.enabled,
        errors=result.errors,
        warnings=result.warnings
    )


def _config_response(
    config: ScoringCriteria,
    scoring_system: ScoringSystem,
    fallback_error=None
) -> ScoringConfigResponse:
    return ScoringConfigResponse(
        success=True,
        scoring_system_used=scoring_system.value,
        scoring_system_label=SCORING_SYSTEM_LABELS[scoring_system],
        max_possible_score=calculate_max_score(config),
        enabled=[key.value for key, _ in config.enabled_items()],
        config=config.to_document(),
        fallback_error=fallback_error
    )


@router.get("/scoring/default", response_model=ScoringConfigResponse)
def get_default_scoring(system_default: ScoringCriteria = Depends(get_system_default)):
    """
    Get the system default scoring configuration.

    This is the configuration every job uses unless its company or the job
    itself customises scoring.
    """
    return _config_response(system_default, ScoringSystem.DEFAULT)


@router.post("/scoring/validate", response_model=ValidateScoringResponse)
def validate_scoring(request: ValidateScoringRequest):
    """
    Validate a complete scoring configuration without storing it.

    The configuration is valid when the enabled weights sum to 100 and every
    enabled criterion has well-formed sub-criteria. Warnings do not block
    saving.
    """
    result = validate_scoring_config(request.config, get_config().scoring.weight_tolerance)
    return ValidateScoringResponse(success=True, validation=_validation_response(result))


@router.post("/scoring/distribute-weights", response_model=DistributeWeightsResponse)
def distribute_weights(request: DistributeWeightsRequest):
    """
    Spread 100 weight points evenly across the enabled criteria.

    Any remainder goes to the first enabled criterion.
    """
    config = auto_distribute_weights(request.config)
    result = validate_scoring_config(config, get_config().scoring.weight_tolerance)
    return DistributeWeightsResponse(
        success=True,
        config=config.to_document(),
        validation=_validation_response(result)
    )


@router.get("/jobs/{job_id}/scoring-config", response_model=ScoringConfigResponse)
def get_job_scoring(
    job_id: str,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Get the effective scoring configuration for a job.

    If the stored job or company configuration is invalid, the system default
    is returned and fallback_error explains why.
    """
    resolved = service.resolve_config(parse_uuid(job_id, "job_id"))
    return _config_response(resolved.config, resolved.scoring_system_used, resolved.fallback_error)


@router.put("/jobs/{job_id}/scoring-config", response_model=ScoringConfigResponse)
def update_job_scoring(
    job_id: str,
    update: JobScoringUpdate,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Replace a job's scoring configuration.

    - customScoring with both flags false: job-specific scoring, validated
    - useSystemDefault: ignore the company configuration
    - useCompanyDefault or null: inherit from the company

    Existing scores for the job are marked stale.
    """
    resolved = service.update_job_scoring(parse_uuid(job_id, "job_id"), update.scoring)
    logger.info(f"Updated scoring for job {job_id}: {resolved.scoring_system_used.value}")
    return _config_response(resolved.config, resolved.scoring_system_used, resolved.fallback_error)


@router.put("/companies/{company_id}/scoring-config", response_model=ScoringConfigResponse)
def update_company_scoring(
    company_id: str,
    update: CompanyScoringUpdate,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Replace a company's scoring override.

    The override is merged over the system default and must pass validation.
    Scores for all of the company's jobs are marked stale.
    """
    config = service.update_company_scoring(parse_uuid(company_id, "company_id"), update.scoring)
    scoring_system = ScoringSystem.DEFAULT if update.scoring is None else ScoringSystem.COMPANY_CUSTOM
    logger.info(f"Updated scoring for company {company_id}: {scoring_system.value}")
    return _config_response(config, scoring_system)
