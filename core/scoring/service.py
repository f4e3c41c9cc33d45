#!/usr/bin/env python3
"""
Scoring Service - PDS scoring against stored jobs, companies and applicants.

Reads Job/Company/Applicant records through a PortalRepository, resolves the
effective configuration, scores, and writes the breakdown back onto the
Application (match_score = percentage, match_details = breakdown document).

Configuration edits go through update_company_scoring / update_job_scoring,
which validate before storing and mark affected scores stale.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from core.scoring.calculator import score_profile
from core.scoring.defaults import DEFAULT_SCORING_CONFIG
from core.scoring.exceptions import (
    ApplicantNotFound,
    CompanyNotFound,
    ConfigurationInvalid,
    JobNotFound,
    ProfileInvalid,
    ScoringConfigRejected,
    ScoringError,
)
from core.scoring.measurement import ApplicantProfile, JobContext, Measurer, default_measure
from core.scoring.merge import merge_scoring_config
from core.scoring.models import (
    JobScoringConfig,
    PDSScoreBreakdown,
    ScoringCriteria,
    ScoringOverride,
    ScoringSystem,
)
from core.scoring.ranking import RankedApplication, rank_applications
from core.scoring.resolver import (
    ResolvedConfig,
    parse_job_scoring,
    parse_scoring_override,
    resolve_config_or_default,
)
from core.scoring.weights import WEIGHT_TOLERANCE, WeightValidationResult, validate_scoring_config

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RescoreSummary:
    """Outcome of a batch rescoring run."""
    scored: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"scored": self.scored, "failed": self.failed, "errors": list(self.errors)}


class ScoringService:
    """
    PDS scoring over the portal's persistence layer.

    Exposes:
    - resolve_config(job_id): effective configuration for display/editing
    - score_application(job_id, applicant_id): score and persist
    - validate_scoring_config(config): editor validation
    """

    def __init__(
        self,
        repo,
        system_default: ScoringCriteria = DEFAULT_SCORING_CONFIG,
        measure: Measurer = default_measure,
        tolerance: float = WEIGHT_TOLERANCE,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.repo = repo
        self.system_default = system_default
        self.measure = measure
        self.tolerance = tolerance
        self.clock = clock

    # Lookups

    def _get_job(self, job_id: Any):
        job = self.repo.jobs.get_by_id(job_id)
        if job is None:
            raise JobNotFound(f"Job {job_id} not found")
        return job

    def _get_company(self, company_id: Any):
        company = self.repo.companies.get_by_id(company_id)
        if company is None:
            raise CompanyNotFound(f"Company {company_id} not found")
        return company

    def load_profile(self, applicant_id: Any) -> ApplicantProfile:
        """Read an applicant's parsed PDS fields.

        Raises:
            ApplicantNotFound: If there is no profile for the applicant.
            ProfileInvalid: If the stored profile is malformed.
        """
        record = self.repo.applicants.get_profile(applicant_id)
        if record is None:
            raise ApplicantNotFound(f"Applicant {applicant_id} not found")
        data = dict(record.profile_data or {})
        data["applicant_id"] = str(record.applicant_id)
        try:
            return ApplicantProfile.model_validate(data)
        except ValidationError as e:
            raise ProfileInvalid(applicant_id, [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]) from e

    @staticmethod
    def job_context(job) -> JobContext:
        return JobContext(
            title=job.title or "",
            category=job.category,
            required_skills=list(job.required_skills or []),
        )

    # Resolution

    def resolve_for_job(self, job) -> ResolvedConfig:
        """Effective configuration for a loaded job record; never raises on bad config."""
        company = job.company
        try:
            job_scoring = parse_job_scoring(job.scoring_config)
            company_override = parse_scoring_override(company.scoring_config if company else None)
        except ConfigurationInvalid as e:
            logger.warning(f"Falling back to default scoring for job {job.id}: {e}")
            return ResolvedConfig(
                config=self.system_default,
                scoring_system_used=ScoringSystem.DEFAULT,
                fallback_error=f"{e.__class__.__name__}: {e}",
            )

        return resolve_config_or_default(
            job_scoring,
            company_override,
            self.system_default,
            self.tolerance,
            context=f"job {job.id}",
        )

    def resolve_config(self, job_id: Any) -> ResolvedConfig:
        return self.resolve_for_job(self._get_job(job_id))

    # Scoring

    def _score(self, job, profile: ApplicantProfile, resolved: ResolvedConfig) -> PDSScoreBreakdown:
        return score_profile(
            profile=profile,
            config=resolved.config,
            job=self.job_context(job),
            measure=self.measure,
            scoring_system_used=resolved.scoring_system_used,
            applied_date=self.clock(),
        )

    def _persist(self, application, breakdown: PDSScoreBreakdown) -> None:
        self.repo.applications.save_score(
            application,
            match_score=breakdown.percentage,
            match_details=breakdown.to_document(),
            scoring_system_used=breakdown.scoring_system_used.value,
            scored_at=breakdown.applied_date,
        )

    def score_application(self, job_id: Any, applicant_id: Any) -> PDSScoreBreakdown:
        """Score an applicant against a job.

        The breakdown is stored on the Application when one exists; otherwise
        it is returned as a preview only.

        Raises:
            JobNotFound: If the job does not exist.
            ApplicantNotFound: If the applicant has no profile.
            ProfileInvalid: If the stored profile is malformed.
        """
        job = self._get_job(job_id)
        profile = self.load_profile(applicant_id)
        resolved = self.resolve_for_job(job)

        breakdown = self._score(job, profile, resolved)

        application = self.repo.applications.get_application(job.id, applicant_id)
        if application is not None:
            self._persist(application, breakdown)
            self.repo.commit()
        else:
            logger.debug(f"No application for applicant {applicant_id} on job {job_id}; score not stored")

        logger.info(
            f"Scored applicant {applicant_id} for job {job_id}: "
            f"{breakdown.percentage:.1f}% ({breakdown.scoring_system_used.value})"
        )
        return breakdown

    def _rescore(self, applications, summary: RescoreSummary) -> None:
        resolved_by_job: Dict[Any, ResolvedConfig] = {}
        jobs: Dict[Any, Any] = {}

        for application in applications:
            try:
                if application.job_id not in jobs:
                    jobs[application.job_id] = self._get_job(application.job_id)
                    resolved_by_job[application.job_id] = self.resolve_for_job(jobs[application.job_id])
                job = jobs[application.job_id]
                profile = self.load_profile(application.applicant_id)
                breakdown = self._score(job, profile, resolved_by_job[application.job_id])
            except ScoringError as e:
                summary.failed += 1
                summary.errors.append(f"application {application.id}: {e}")
                logger.warning(f"Could not rescore application {application.id}: {e}")
                self.repo.applications.mark_score_failed(application, f"{e.__class__.__name__}: {e}")
                continue

            self._persist(application, breakdown)
            summary.scored += 1

    def rescore_job(self, job_id: Any) -> RescoreSummary:
        """Recalculate every application's score for a job."""
        self._get_job(job_id)
        summary = RescoreSummary()
        self._rescore(self.repo.applications.get_applications_for_job(job_id), summary)
        self.repo.commit()
        logger.info(f"Rescored job {job_id}: {summary.scored} scored, {summary.failed} failed")
        return summary

    def rescore_stale(self, limit: int = 100) -> RescoreSummary:
        """Score up to limit applications that are unscored or stale."""
        summary = RescoreSummary()
        self._rescore(self.repo.applications.get_stale_applications(limit), summary)
        self.repo.commit()
        logger.info(f"Rescored stale applications: {summary.scored} scored, {summary.failed} failed")
        return summary

    def get_job_rankings(self, job_id: Any) -> List[RankedApplication]:
        self._get_job(job_id)
        return rank_applications(self.repo.applications.get_applications_for_job(job_id))

    # Configuration editing

    def validate_scoring_config(self, config: ScoringCriteria) -> WeightValidationResult:
        return validate_scoring_config(config, self.tolerance)

    def _validated_merge(self, override: ScoringOverride) -> ScoringCriteria:
        config = merge_scoring_config(self.system_default, override)
        result = self.validate_scoring_config(config)
        if not result.valid:
            raise ScoringConfigRejected(result)
        return config

    def update_company_scoring(
        self,
        company_id: Any,
        override: Optional[ScoringOverride]
    ) -> ScoringCriteria:
        """Store a company's custom scoring; None resets it to the system default.

        Raises:
            CompanyNotFound: If the company does not exist.
            ScoringConfigRejected: If the merged configuration fails validation.
        """
        company = self._get_company(company_id)

        if override is None:
            config = self.system_default
            document = None
        else:
            config = self._validated_merge(override)
            document = override.to_document()

        self.repo.companies.set_scoring_config(company, document)
        self.repo.applications.batch_invalidate_scores_for_jobs(
            self.repo.jobs.get_ids_for_company(company.id),
            reason="Company scoring configuration changed",
        )
        self.repo.commit()
        return config

    def update_job_scoring(self, job_id: Any, job_scoring: Optional[JobScoringConfig]) -> ResolvedConfig:
        """Store a job's scoring choice and return the resulting effective configuration.

        Raises:
            JobNotFound: If the job does not exist.
            ScoringConfigRejected: If a custom configuration fails validation.
        """
        job = self._get_job(job_id)

        if (
            job_scoring is not None
            and job_scoring.custom_scoring is not None
            and not job_scoring.use_company_default
            and not job_scoring.use_system_default
        ):
            self._validated_merge(job_scoring.custom_scoring)

        self.repo.jobs.set_scoring_config(job, job_scoring.to_document() if job_scoring else None)
        self.repo.applications.invalidate_scores_for_job(job.id, reason="Job scoring configuration changed")
        self.repo.commit()
        return self.resolve_for_job(job)

    def mark_applicant_stale(self, applicant_id: Any) -> int:
        """Mark an applicant's scores stale after their profile changed."""
        count = self.repo.applications.invalidate_scores_for_applicant(applicant_id)
        self.repo.commit()
        return count

    def update_applicant_profile(
        self,
        applicant_id: Any,
        profile: ApplicantProfile,
        display_name: Optional[str] = None
    ) -> int:
        """Store an applicant's parsed PDS fields and mark their scores stale.

        Returns:
            Number of applications whose score was invalidated.
        """
        self.repo.applicants.save_profile(
            profile.model_dump(mode="json", exclude={"applicant_id"}, exclude_none=True),
            applicant_id=applicant_id,
            display_name=display_name,
        )
        return self.mark_applicant_stale(applicant_id)
