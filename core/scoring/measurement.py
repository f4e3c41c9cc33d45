#!/usr/bin/env python3
"""
Applicant measurements.

Turns a parsed PDS profile into one number per scoring dimension so that every
band predicate is a numeric threshold. Categorical dimensions are mapped onto
ordinal scales (EducationLevel, EligibilityTier).

default_measure() is the built-in measurer; any callable with the same
signature can be passed to the calculator instead.
"""

import logging
import re
from enum import IntEnum
from typing import Callable, Iterable, List, Optional, Set, Union

from pydantic import BaseModel, Field, field_validator

from core.scoring.models import CriterionKey

logger = logging.getLogger(__name__)


class EducationLevel(IntEnum):
    NONE = 0
    HIGH_SCHOOL = 1
    VOCATIONAL = 2
    BACHELOR = 3
    MASTER = 4
    DOCTORATE = 5

    @classmethod
    def parse(cls, value: Union[str, int, None]) -> Optional["EducationLevel"]:
        """Map free-text or ordinal education values onto the scale.

        Returns None when the value is absent or unrecognised.
        """
        if value is None:
            return None
        if isinstance(value, (int, float)):
            return cls(int(value))

        text = value.strip().lower()
        if not text:
            return None
        # Order matters: "master" must be checked before "bachelor" etc.
        for keywords, level in _EDUCATION_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return level
        logger.debug(f"Unrecognised education level: {value!r}")
        return None


_EDUCATION_KEYWORDS = (
    (("doctor", "phd", "ph.d", "doctoral"), EducationLevel.DOCTORATE),
    (("master", "mba", "m.s.", "m.a."), EducationLevel.MASTER),
    (("bachelor", "college graduate", "b.s.", "b.a.", "undergraduate"), EducationLevel.BACHELOR),
    (("vocational", "technical", "tesda", "trade"), EducationLevel.VOCATIONAL),
    (("high school", "secondary", "senior high"), EducationLevel.HIGH_SCHOOL),
    (("none", "elementary", "primary"), EducationLevel.NONE),
)


class EligibilityTier(IntEnum):
    NONE = 0
    RA_1080 = 1
    CS_SUB_PROFESSIONAL = 2
    CS_PROFESSIONAL = 3
    LICENSE_AND_CS_PROFESSIONAL = 4

    @classmethod
    def from_eligibilities(cls, eligibilities: Iterable[str]) -> "EligibilityTier":
        """Highest tier supported by a list of civil-service eligibilities.

        A professional license (RA 1080 board/bar passer) combined with
        CS Professional ranks above either one alone.
        """
        has_license = False
        has_professional = False
        has_sub_professional = False

        for raw in eligibilities:
            text = raw.strip().lower()
            if not text:
                continue
            words = set(re.findall(r"[a-z0-9]+", text))
            if "sub-professional" in text or "subprofessional" in text or "sub professional" in text:
                has_sub_professional = True
            elif "professional" in text and ("cs" in words or "civil service" in text or "career service" in text):
                has_professional = True
            if "1080" in text or "license" in text or "board" in text or "bar" in words:
                has_license = True

        if has_license and has_professional:
            return cls.LICENSE_AND_CS_PROFESSIONAL
        if has_professional:
            return cls.CS_PROFESSIONAL
        if has_sub_professional:
            return cls.CS_SUB_PROFESSIONAL
        if has_license:
            return cls.RA_1080
        return cls.NONE


class WorkExperience(BaseModel):
    """One work-history entry from the PDS."""
    title: str = ""
    category: Optional[str] = None
    years: float = Field(0.0, ge=0)


class ApplicantProfile(BaseModel):
    """
    Structured applicant fields supplied by the profile provider.

    None means the field is absent from the PDS (MissingMeasurement);
    an empty list or zero is a real measurement of nothing.
    """
    applicant_id: Optional[str] = None
    education_level: Optional[EducationLevel] = None
    years_of_experience: Optional[float] = Field(None, ge=0)
    work_experience: Optional[List[WorkExperience]] = None
    training_count: Optional[int] = Field(None, ge=0)
    eligibilities: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    awards_count: Optional[int] = Field(None, ge=0)
    certifications_count: Optional[int] = Field(None, ge=0)
    relevant_experience_years: Optional[float] = Field(None, ge=0)

    @field_validator("education_level", mode="before")
    @classmethod
    def _parse_education(cls, value):
        if isinstance(value, EducationLevel):
            return value
        return EducationLevel.parse(value)


class JobContext(BaseModel):
    """The parts of a job posting the measurer looks at."""
    title: str = ""
    category: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)


Measurer = Callable[[CriterionKey, ApplicantProfile, Optional[JobContext]], Optional[float]]

_STOPWORDS = {"and", "or", "of", "the", "for", "in", "at", "to", "a", "an", "with", "i", "ii", "iii", "iv"}


def _normalize(value: str) -> str:
    return re.sub(r"\s+", " ", value.strip().lower())


def _keywords(text: str) -> Set[str]:
    tokens = re.findall(r"[a-z0-9+#]+", text.lower())
    return {token for token in tokens if len(token) > 2 and token not in _STOPWORDS}


def is_relevant_experience(entry: WorkExperience, job: JobContext) -> bool:
    """Work entry counts as relevant if it shares the job's category or a title keyword."""
    if entry.category and job.category and _normalize(entry.category) == _normalize(job.category):
        return True
    return bool(_keywords(entry.title) & _keywords(job.title))


def count_matching_skills(skills: Iterable[str], job: Optional[JobContext]) -> int:
    """Skills matching the job's required skills, or all distinct skills if the job lists none."""
    applicant = {_normalize(skill) for skill in skills if skill and skill.strip()}
    if job is None or not job.required_skills:
        return len(applicant)
    required = {_normalize(skill) for skill in job.required_skills if skill and skill.strip()}
    return len(applicant & required)


def total_experience_years(profile: ApplicantProfile) -> Optional[float]:
    if profile.years_of_experience is not None:
        return profile.years_of_experience
    if profile.work_experience is not None:
        return sum(entry.years for entry in profile.work_experience)
    return None


def relevant_experience_years(profile: ApplicantProfile, job: Optional[JobContext]) -> Optional[float]:
    if profile.relevant_experience_years is not None:
        return profile.relevant_experience_years
    if job is None or profile.work_experience is None:
        return None
    return sum(entry.years for entry in profile.work_experience if is_relevant_experience(entry, job))


def default_measure(
    key: CriterionKey,
    profile: ApplicantProfile,
    job: Optional[JobContext] = None
) -> Optional[float]:
    """Measure one dimension of a profile. Returns None when the data is absent."""
    key = CriterionKey(key)

    if key is CriterionKey.EDUCATION:
        return None if profile.education_level is None else float(profile.education_level)
    if key is CriterionKey.EXPERIENCE:
        return total_experience_years(profile)
    if key is CriterionKey.TRAINING:
        return None if profile.training_count is None else float(profile.training_count)
    if key is CriterionKey.ELIGIBILITY:
        if profile.eligibilities is None:
            return None
        return float(EligibilityTier.from_eligibilities(profile.eligibilities))
    if key is CriterionKey.SKILLS:
        if profile.skills is None:
            return None
        return float(count_matching_skills(profile.skills, job))
    if key is CriterionKey.AWARDS:
        return None if profile.awards_count is None else float(profile.awards_count)
    if key is CriterionKey.RELEVANT_EXPERIENCE:
        return relevant_experience_years(profile, job)
    if key is CriterionKey.CERTIFICATIONS:
        return None if profile.certifications_count is None else float(profile.certifications_count)

    raise ValueError(f"Unknown criterion: {key}")
