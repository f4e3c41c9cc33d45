#!/usr/bin/env python3
"""
Scoring Models - configuration values and scoring results.

Configuration types (SubCriterion, Criterion, ScoringCriteria, ScoringOverride,
JobScoringConfig) are frozen pydantic models so they can be parsed straight
from stored documents and API payloads. Persisted documents use camelCase
keys ("maxPoints", "subCriteria", "relevantExperience"); Python code uses the
snake_case attribute names.

Result types (CriteriaScore, PDSScoreBreakdown) are plain dataclasses built by
the calculator and serialized with to_document().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CriterionKey(str, Enum):
    """The eight PDS scoring dimensions, valued by their document keys."""
    EDUCATION = "education"
    EXPERIENCE = "experience"
    TRAINING = "training"
    ELIGIBILITY = "eligibility"
    SKILLS = "skills"
    AWARDS = "awards"
    RELEVANT_EXPERIENCE = "relevantExperience"
    CERTIFICATIONS = "certifications"


class ScoringSystem(str, Enum):
    """Which configuration produced a score."""
    DEFAULT = "default"
    COMPANY_CUSTOM = "company-custom"
    JOB_CUSTOM = "job-custom"


# CriterionKey -> attribute name on ScoringCriteria / ScoringOverride, in display order
CRITERION_FIELDS: Dict[CriterionKey, str] = {
    CriterionKey.EDUCATION: "education",
    CriterionKey.EXPERIENCE: "experience",
    CriterionKey.TRAINING: "training",
    CriterionKey.ELIGIBILITY: "eligibility",
    CriterionKey.SKILLS: "skills",
    CriterionKey.AWARDS: "awards",
    CriterionKey.RELEVANT_EXPERIENCE: "relevant_experience",
    CriterionKey.CERTIFICATIONS: "certifications",
}


class _DocumentModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_document(self) -> Dict[str, Any]:
        """Serialize with camelCase keys for storage and API responses."""
        return self.model_dump(by_alias=True, mode="json")


class SubCriterion(_DocumentModel):
    """
    A named point band within a criterion.

    The qualifying predicate is the inclusive range [min_value, max_value];
    either bound may be omitted. A band with no bounds qualifies for any
    measured value.
    """
    name: str
    points: float = Field(ge=0)
    description: str = ""
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    @property
    def has_bounds(self) -> bool:
        return self.min_value is not None or self.max_value is not None

    def qualifies(self, measurement: float) -> bool:
        if self.min_value is not None and measurement < self.min_value:
            return False
        if self.max_value is not None and measurement > self.max_value:
            return False
        return True


class Criterion(_DocumentModel):
    """A single scoring dimension with its bands, ordered highest points first."""
    label: str
    max_points: float = Field(ge=0)
    weight: float = Field(ge=0, le=100)
    enabled: bool = True
    description: str = ""
    sub_criteria: Tuple[SubCriterion, ...] = ()

    @property
    def highest_band_points(self) -> Optional[float]:
        if not self.sub_criteria:
            return None
        return max(band.points for band in self.sub_criteria)

    def bands_descending(self) -> bool:
        """True if bands are authored from highest to lowest points."""
        bands = self.sub_criteria
        return all(bands[i].points >= bands[i + 1].points for i in range(len(bands) - 1))


class ScoringCriteria(_DocumentModel):
    """A complete scoring configuration: one Criterion per dimension."""
    education: Criterion
    experience: Criterion
    training: Criterion
    eligibility: Criterion
    skills: Criterion
    awards: Criterion
    relevant_experience: Criterion
    certifications: Criterion

    def get(self, key: CriterionKey) -> Criterion:
        return getattr(self, CRITERION_FIELDS[CriterionKey(key)])

    def items(self) -> Iterator[Tuple[CriterionKey, Criterion]]:
        for key, attr in CRITERION_FIELDS.items():
            yield key, getattr(self, attr)

    def enabled_items(self) -> List[Tuple[CriterionKey, Criterion]]:
        return [(key, criterion) for key, criterion in self.items() if criterion.enabled]


class CriterionOverride(_DocumentModel):
    """Partial Criterion: only the fields that are set replace the base."""
    model_config = ConfigDict(extra="forbid")

    label: Optional[str] = None
    max_points: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0, le=100)
    enabled: Optional[bool] = None
    description: Optional[str] = None
    sub_criteria: Optional[Tuple[SubCriterion, ...]] = None


class ScoringOverride(_DocumentModel):
    """Sparse criterion-key -> partial Criterion map used by company and job configs."""
    model_config = ConfigDict(extra="forbid")

    education: Optional[CriterionOverride] = None
    experience: Optional[CriterionOverride] = None
    training: Optional[CriterionOverride] = None
    eligibility: Optional[CriterionOverride] = None
    skills: Optional[CriterionOverride] = None
    awards: Optional[CriterionOverride] = None
    relevant_experience: Optional[CriterionOverride] = None
    certifications: Optional[CriterionOverride] = None

    def get(self, key: CriterionKey) -> Optional[CriterionOverride]:
        return getattr(self, CRITERION_FIELDS[CriterionKey(key)])

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class JobScoringConfig(_DocumentModel):
    """Per-job scoring choice stored on the job posting."""
    use_company_default: bool = False
    use_system_default: bool = False
    custom_scoring: Optional[ScoringOverride] = None

    def to_document(self) -> Dict[str, Any]:
        document = {
            "useCompanyDefault": self.use_company_default,
            "useSystemDefault": self.use_system_default,
        }
        if self.custom_scoring is not None:
            document["customScoring"] = self.custom_scoring.to_document()
        return document


@dataclass(frozen=True)
class CriteriaScore:
    """Per-criterion result; only ever lives inside a PDSScoreBreakdown."""
    label: str
    earned_points: float
    max_points: float
    weight: float
    percentage: float
    enabled: bool
    matched_criteria: Optional[str] = None
    details: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        document = {
            "label": self.label,
            "earnedPoints": self.earned_points,
            "maxPoints": self.max_points,
            "weight": self.weight,
            "percentage": self.percentage,
            "enabled": self.enabled,
        }
        if self.matched_criteria is not None:
            document["matchedCriteria"] = self.matched_criteria
        if self.details is not None:
            document["details"] = self.details
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "CriteriaScore":
        return cls(
            label=document.get("label", ""),
            earned_points=document.get("earnedPoints", 0),
            max_points=document.get("maxPoints", 0),
            weight=document.get("weight", 0),
            percentage=document.get("percentage", 0),
            enabled=document.get("enabled", False),
            matched_criteria=document.get("matchedCriteria"),
            details=document.get("details"),
        )


@dataclass(frozen=True)
class PDSScoreBreakdown:
    """Complete score of one applicant against one job."""
    total_score: float
    max_possible_score: float
    percentage: float
    scoring_system_used: ScoringSystem
    criteria_scores: Dict[CriterionKey, CriteriaScore] = field(default_factory=dict)
    applied_date: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Nested document stored on Application.match_details."""
        document = {
            "totalScore": self.total_score,
            "maxPossibleScore": self.max_possible_score,
            "percentage": self.percentage,
            "criteriaScores": {
                key.value: score.to_document()
                for key, score in self.criteria_scores.items()
            },
            "scoringSystemUsed": self.scoring_system_used.value,
        }
        if self.applied_date is not None:
            document["appliedDate"] = self.applied_date.isoformat()
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "PDSScoreBreakdown":
        applied = document.get("appliedDate")
        return cls(
            total_score=document.get("totalScore", 0),
            max_possible_score=document.get("maxPossibleScore", 0),
            percentage=document.get("percentage", 0),
            scoring_system_used=ScoringSystem(document.get("scoringSystemUsed", "default")),
            criteria_scores={
                CriterionKey(key): CriteriaScore.from_document(value)
                for key, value in (document.get("criteriaScores") or {}).items()
            },
            applied_date=datetime.fromisoformat(applied) if applied else None,
        )
