#!/usr/bin/env python3
"""
Application endpoints - score applicants and rank them per job.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from core.scoring import ScoringService
from core.scoring.breakdown import score_rating, summarize
from core.scoring.ranking import rankings_to_csv
from ..dependencies import get_scoring_service
from ..utils import parse_uuid
from ..models.requests import ScoreApplicationRequest, ApplicantProfileUpdate
from ..models.responses import (
    ScoreBreakdownResponse,
    RankingsResponse,
    RankedApplicationResponse,
    RescoreResponse,
    ProfileUpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["applications"])


@router.post("/applications/score", response_model=ScoreBreakdownResponse)
def score_application(
    request: ScoreApplicationRequest,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Score an applicant against a job.

    The breakdown is stored on the application when the applicant has applied
    to the job; otherwise it is returned as a preview (stored = false).
    """
    job_id = parse_uuid(request.job_id, "job_id")
    applicant_id = parse_uuid(request.applicant_id, "applicant_id")

    breakdown = service.score_application(job_id, applicant_id)
    stored = service.repo.applications.get_application(job_id, applicant_id) is not None

    return ScoreBreakdownResponse(
        success=True,
        job_id=str(job_id),
        applicant_id=str(applicant_id),
        stored=stored,
        rating=score_rating(breakdown.percentage),
        summary=summarize(breakdown),
        breakdown=breakdown.to_document()
    )


@router.get("/jobs/{job_id}/rankings", response_model=RankingsResponse)
def get_rankings(
    job_id: str,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Get a job's applications ranked by score.

    Ties are broken by total score, then application date, then applicant id.
    Unscored, stale and failed applications are listed last without a rank;
    stale ones keep their last score.
    """
    job_uuid = parse_uuid(job_id, "job_id")
    rankings = service.get_job_rankings(job_uuid)

    return RankingsResponse(
        success=True,
        job_id=str(job_uuid),
        count=len(rankings),
        rankings=[RankedApplicationResponse(**row.to_dict()) for row in rankings]
    )


@router.get("/jobs/{job_id}/rankings/export")
def export_rankings(
    job_id: str,
    service: ScoringService = Depends(get_scoring_service)
):
    """Download a job's ranking as CSV."""
    job_uuid = parse_uuid(job_id, "job_id")
    rankings = service.get_job_rankings(job_uuid)

    filename = f"rankings_{job_uuid}.csv"
    logger.info(f"Exporting {len(rankings)} ranked applications for job {job_uuid}")
    return Response(
        content=rankings_to_csv(rankings),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/jobs/{job_id}/rankings/recalculate", response_model=RescoreResponse)
def recalculate_rankings(
    job_id: str,
    service: ScoringService = Depends(get_scoring_service)
):
    """Rescore every application for a job with its current configuration."""
    job_uuid = parse_uuid(job_id, "job_id")
    summary = service.rescore_job(job_uuid)

    return RescoreResponse(
        success=True,
        job_id=str(job_uuid),
        **summary.to_dict()
    )


@router.put("/applicants/{applicant_id}/profile", response_model=ProfileUpdateResponse)
def update_applicant_profile(
    applicant_id: str,
    update: ApplicantProfileUpdate,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Replace an applicant's parsed PDS fields.

    The applicant's existing scores are marked stale so they are picked up by
    the next rescoring run.
    """
    applicant_uuid = parse_uuid(applicant_id, "applicant_id")
    invalidated = service.update_applicant_profile(applicant_uuid, update.profile, update.display_name)

    return ProfileUpdateResponse(
        success=True,
        applicant_id=str(applicant_uuid),
        invalidated_scores=invalidated
    )
