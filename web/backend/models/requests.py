#!/usr/bin/env python3
"""
Request models for API endpoints.

Scoring documents are accepted with camelCase keys ("maxPoints",
"subCriteria", "relevantExperience") exactly as they are stored.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from core.scoring import JobScoringConfig, ScoringCriteria, ScoringOverride
from core.scoring.measurement import ApplicantProfile


class ValidateScoringRequest(BaseModel):
    """Request to validate a full scoring configuration."""
    config: ScoringCriteria = Field(..., description="Complete configuration (all eight criteria)")


class DistributeWeightsRequest(BaseModel):
    """Request to spread weights evenly across enabled criteria."""
    config: ScoringCriteria = Field(..., description="Complete configuration (all eight criteria)")


class CompanyScoringUpdate(BaseModel):
    """Request to replace a company's scoring override."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scoring": {
                    "experience": {"weight": 30},
                    "awards": {"enabled": False}
                }
            }
        }
    )

    scoring: Optional[ScoringOverride] = Field(
        None,
        description="Partial override merged over the system default, or null to reset"
    )


class JobScoringUpdate(BaseModel):
    """Request to replace a job's scoring choice."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scoring": {
                    "useCompanyDefault": False,
                    "useSystemDefault": False,
                    "customScoring": {"skills": {"weight": 20}, "experience": {"weight": 15}}
                }
            }
        }
    )

    scoring: Optional[JobScoringConfig] = Field(
        None,
        description="Job scoring choice, or null to inherit from the company"
    )


class ScoreApplicationRequest(BaseModel):
    """Request to score an applicant against a job."""
    job_id: str = Field(..., description="Job posting UUID")
    applicant_id: str = Field(..., description="Applicant UUID")


class ApplicantProfileUpdate(BaseModel):
    """Request to replace an applicant's parsed PDS fields."""
    display_name: Optional[str] = Field(None, description="Name shown in rankings")
    profile: ApplicantProfile
