#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class ValidationResultResponse(BaseModel):
    """Outcome of validating a scoring configuration."""
    valid: bool
    total_weight: float
    weight_status: str
    enabled: List[str]
    errors: List[str]
    warnings: List[str]


class ScoringConfigResponse(BaseModel):
    """A scoring configuration and where it came from."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "scoring_system_used": "company-custom",
                "scoring_system_label": "Company Custom Scoring",
                "max_possible_score": 95.0,
                "enabled": ["education", "experience", "training", "eligibility",
                            "skills", "relevantExperience", "certifications"],
                "config": {"education": {"label": "Education", "maxPoints": 20, "weight": 20}},
                "fallback_error": None
            }
        }
    )

    success: bool
    scoring_system_used: str
    scoring_system_label: str
    max_possible_score: float = Field(ge=0)
    enabled: List[str]
    config: Dict[str, Any]
    fallback_error: Optional[str] = None


class ValidateScoringResponse(BaseModel):
    """Response for configuration validation."""
    success: bool
    validation: ValidationResultResponse


class DistributeWeightsResponse(BaseModel):
    """Response for even weight redistribution."""
    success: bool
    config: Dict[str, Any]
    validation: ValidationResultResponse


class ScoreBreakdownResponse(BaseModel):
    """Score of one applicant against one job."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "job_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "applicant_id": "550e8400-e29b-41d4-a716-446655440000",
                "stored": True,
                "rating": "Good",
                "summary": "70/100 (70.0%) - Good, Default System Scoring",
                "breakdown": {
                    "totalScore": 70,
                    "maxPossibleScore": 100,
                    "percentage": 70.0,
                    "scoringSystemUsed": "default"
                }
            }
        }
    )

    success: bool
    job_id: str
    applicant_id: str
    stored: bool
    rating: str
    summary: str
    breakdown: Dict[str, Any]


class RankedApplicationResponse(BaseModel):
    """One row of a job's ranking."""
    application_id: str
    applicant_id: str
    rank: Optional[int]
    score_status: str
    percentage: Optional[float] = Field(None, ge=0, le=100)
    total_score: Optional[float] = None
    max_possible_score: Optional[float] = None
    scoring_system_used: Optional[str] = None
    rating: str
    applied_at: Optional[str] = None


class RankingsResponse(BaseModel):
    """Ranked applications for a job."""
    success: bool
    job_id: str
    count: int
    rankings: List[RankedApplicationResponse]


class RescoreResponse(BaseModel):
    """Outcome of rescoring a job's applications."""
    success: bool
    job_id: str
    scored: int
    failed: int
    errors: List[str]


class ProfileUpdateResponse(BaseModel):
    """Response after replacing an applicant profile."""
    success: bool
    applicant_id: str
    invalidated_scores: int
