#!/usr/bin/env python3
"""
Scoring exceptions.

ConfigurationInvalid and its subclass are raised by the resolver and caught by
the fallback path. MissingMeasurement and MalformedSubCriteria are raised per
criterion inside the calculator and converted to a zero score there.
"""

from typing import List, Optional


class ScoringError(Exception):
    """Base exception for the scoring package."""
    pass


class ConfigurationInvalid(ScoringError):
    """Raised when a resolved configuration's enabled weights do not sum to 100."""

    def __init__(
        self,
        message: str,
        scoring_system: Optional[str] = None,
        total_weight: Optional[float] = None,
        enabled: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.scoring_system = scoring_system
        self.total_weight = total_weight
        self.enabled = enabled or []


class DegenerateConfiguration(ConfigurationInvalid):
    """Raised when a configuration has no enabled criteria."""
    pass


class MissingMeasurement(ScoringError):
    """Raised when profile data needed for a criterion is absent."""

    def __init__(self, criterion: str):
        super().__init__(f"No profile data available for '{criterion}'")
        self.criterion = criterion


class MalformedSubCriteria(ScoringError):
    """Raised when a criterion's bands are empty or not in descending order."""

    def __init__(self, criterion: str, reason: str):
        super().__init__(f"Malformed sub-criteria for '{criterion}': {reason}")
        self.criterion = criterion
        self.reason = reason


class ScoringConfigRejected(ScoringError):
    """Raised when an administrator tries to store a configuration that fails validation."""

    def __init__(self, result):
        errors = "; ".join(result.errors)
        super().__init__(f"Scoring configuration rejected: {errors}")
        self.result = result


class JobNotFound(ScoringError):
    """Raised when a job posting is not found."""
    pass


class CompanyNotFound(ScoringError):
    """Raised when a company is not found."""
    pass


class ApplicantNotFound(ScoringError):
    """Raised when an applicant profile is not found."""
    pass


class ProfileInvalid(ScoringError):
    """Raised when a stored applicant profile does not match the profile schema."""

    def __init__(self, applicant_id, errors: List[str]):
        super().__init__(f"Profile for applicant {applicant_id} is malformed: {'; '.join(errors)}")
        self.applicant_id = applicant_id
        self.errors = errors
