#!/usr/bin/env python3
"""
Test suite for ScoringService with a mocked repository.
"""

import unittest
import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

from core.scoring import DEFAULT_SCORING_CONFIG, ScoringService
from core.scoring.exceptions import (
    ApplicantNotFound,
    CompanyNotFound,
    JobNotFound,
    ProfileInvalid,
    ScoringConfigRejected,
)
from core.scoring.measurement import ApplicantProfile
from core.scoring.models import CriterionKey, JobScoringConfig, ScoringOverride, ScoringSystem

FIXED_NOW = datetime(2026, 5, 4, 12, 0, tzinfo=timezone.utc)

PROFILE_DATA = {
    "education_level": "Master's Degree",
    "years_of_experience": 10,
    "training_count": 2,
    "eligibilities": ["CS Professional"],
    "skills": ["Records Management", "MS Excel", "Bookkeeping"],
    "awards_count": 0,
    "relevant_experience_years": 0,
    "certifications_count": 1,
}


def _company(scoring_config=None):
    company = MagicMock()
    company.id = uuid.uuid4()
    company.scoring_config = scoring_config
    return company


def _job(company=None, scoring_config=None, required_skills=None):
    job = MagicMock()
    job.id = uuid.uuid4()
    job.title = "Administrative Officer II"
    job.category = "Administration"
    job.required_skills = required_skills or []
    job.scoring_config = scoring_config
    job.company = company or _company()
    return job


def _profile_record(applicant_id, data=None):
    record = MagicMock()
    record.applicant_id = applicant_id
    record.profile_data = dict(PROFILE_DATA if data is None else data)
    return record


class ScoringServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.service = ScoringService(self.repo, clock=lambda: FIXED_NOW)
        self.applicant_id = uuid.uuid4()
        self.job = _job()

        self.repo.jobs.get_by_id.return_value = self.job
        self.repo.applicants.get_profile.return_value = _profile_record(self.applicant_id)


class TestScoreApplication(ScoringServiceTestCase):
    """Scoring one applicant against one job."""

    def test_scores_and_persists(self):
        print("\n📊 Service: score and persist")
        application = MagicMock()
        self.repo.applications.get_application.return_value = application

        breakdown = self.service.score_application(self.job.id, self.applicant_id)

        self.assertEqual(breakdown.total_score, 70)
        self.assertEqual(breakdown.percentage, 70.0)
        self.assertEqual(breakdown.scoring_system_used, ScoringSystem.DEFAULT)
        self.assertEqual(breakdown.applied_date, FIXED_NOW)

        self.repo.applications.save_score.assert_called_once()
        kwargs = self.repo.applications.save_score.call_args.kwargs
        self.assertIs(self.repo.applications.save_score.call_args.args[0], application)
        self.assertEqual(kwargs["match_score"], 70.0)
        self.assertEqual(kwargs["match_details"]["totalScore"], 70)
        self.assertEqual(kwargs["scoring_system_used"], "default")
        self.repo.commit.assert_called_once()
        print(f"  ✓ Stored {kwargs['match_score']}%")

    def test_preview_without_application(self):
        self.repo.applications.get_application.return_value = None

        breakdown = self.service.score_application(self.job.id, self.applicant_id)

        self.assertEqual(breakdown.total_score, 70)
        self.repo.applications.save_score.assert_not_called()
        self.repo.commit.assert_not_called()

    def test_company_custom_tag(self):
        self.job.company.scoring_config = {"awards": {"enabled": False}, "skills": {"weight": 15}}
        self.repo.applications.get_application.return_value = None

        breakdown = self.service.score_application(self.job.id, self.applicant_id)

        self.assertEqual(breakdown.scoring_system_used, ScoringSystem.COMPANY_CUSTOM)
        self.assertEqual(breakdown.max_possible_score, 95)
        self.assertFalse(breakdown.criteria_scores[CriterionKey.AWARDS].enabled)

    def test_invalid_company_config_falls_back(self):
        self.job.company.scoring_config = {"experience": {"weight": 30}}
        self.repo.applications.get_application.return_value = None

        breakdown = self.service.score_application(self.job.id, self.applicant_id)

        self.assertEqual(breakdown.scoring_system_used, ScoringSystem.DEFAULT)
        self.assertEqual(breakdown.max_possible_score, 100)

    def test_malformed_stored_config_falls_back(self):
        self.job.scoring_config = {"customScoring": {"education": {"weight": "heavy"}}}

        resolved = self.service.resolve_for_job(self.job)

        self.assertEqual(resolved.scoring_system_used, ScoringSystem.DEFAULT)
        self.assertTrue(resolved.fallback_error.startswith("ConfigurationInvalid:"))

    def test_job_required_skills_are_used(self):
        self.job.required_skills = ["Bookkeeping"]
        self.repo.applications.get_application.return_value = None

        breakdown = self.service.score_application(self.job.id, self.applicant_id)

        # 1 matching skill -> "Beginner (1 skill)"
        self.assertEqual(breakdown.criteria_scores[CriterionKey.SKILLS].earned_points, 4)

    def test_job_not_found(self):
        self.repo.jobs.get_by_id.return_value = None
        with self.assertRaises(JobNotFound):
            self.service.score_application(uuid.uuid4(), self.applicant_id)

    def test_applicant_not_found(self):
        self.repo.applicants.get_profile.return_value = None
        with self.assertRaises(ApplicantNotFound):
            self.service.score_application(self.job.id, self.applicant_id)

    def test_malformed_profile_is_reported(self):
        self.repo.applicants.get_profile.return_value = _profile_record(
            self.applicant_id, {"years_of_experience": -3}
        )
        with self.assertRaises(ProfileInvalid) as ctx:
            self.service.score_application(self.job.id, self.applicant_id)

        self.assertEqual(len(ctx.exception.errors), 1)
        self.assertTrue(ctx.exception.errors[0].startswith("years_of_experience:"))
        self.repo.applications.save_score.assert_not_called()


class TestRescoring(ScoringServiceTestCase):
    """Batch rescoring."""

    def _application(self, applicant_id=None):
        application = MagicMock()
        application.id = uuid.uuid4()
        application.job_id = self.job.id
        application.applicant_id = applicant_id or uuid.uuid4()
        return application

    def test_rescore_job(self):
        applications = [self._application(), self._application()]
        self.repo.applications.get_applications_for_job.return_value = applications

        summary = self.service.rescore_job(self.job.id)

        self.assertEqual(summary.scored, 2)
        self.assertEqual(summary.failed, 0)
        self.assertEqual(self.repo.applications.save_score.call_count, 2)
        self.repo.commit.assert_called_once()

    def test_failures_do_not_stop_the_batch(self):
        missing = self._application()
        present = self._application()
        self.repo.applications.get_applications_for_job.return_value = [missing, present]
        self.repo.applicants.get_profile.side_effect = lambda applicant_id: (
            None if applicant_id == missing.applicant_id else _profile_record(applicant_id)
        )

        summary = self.service.rescore_job(self.job.id)

        self.assertEqual(summary.scored, 1)
        self.assertEqual(summary.failed, 1)
        self.assertIn(str(missing.id), summary.errors[0])
        self.repo.applications.mark_score_failed.assert_called_once()
        self.assertIs(self.repo.applications.mark_score_failed.call_args.args[0], missing)
        self.assertTrue(self.repo.applications.mark_score_failed.call_args.args[1].startswith("ApplicantNotFound:"))

    def test_malformed_profile_counts_as_failure(self):
        application = self._application()
        self.repo.applications.get_stale_applications.return_value = [application]
        self.repo.applicants.get_profile.return_value = _profile_record(
            application.applicant_id, {"years_of_experience": -3}
        )

        summary = self.service.rescore_stale(limit=10)

        self.repo.applications.get_stale_applications.assert_called_once_with(10)
        self.assertEqual(summary.failed, 1)
        self.assertEqual(summary.to_dict()["scored"], 0)

    def test_job_resolved_once_per_batch(self):
        self.repo.applications.get_stale_applications.return_value = [
            self._application(), self._application(), self._application()
        ]

        self.service.rescore_stale()

        self.assertEqual(self.repo.jobs.get_by_id.call_count, 1)

    def test_rankings(self):
        self.repo.applications.get_applications_for_job.return_value = []
        self.assertEqual(self.service.get_job_rankings(self.job.id), [])


class TestConfigurationEditing(ScoringServiceTestCase):
    """Validated saves and stale invalidation."""

    def test_update_company_scoring(self):
        company = _company()
        self.repo.companies.get_by_id.return_value = company
        job_ids = [uuid.uuid4(), uuid.uuid4()]
        self.repo.jobs.get_ids_for_company.return_value = job_ids

        override = ScoringOverride.model_validate({"experience": {"weight": 30}, "education": {"weight": 15}})
        config = self.service.update_company_scoring(company.id, override)

        self.assertEqual(config.experience.weight, 30)
        self.repo.companies.set_scoring_config.assert_called_once_with(
            company, {"experience": {"weight": 30.0}, "education": {"weight": 15.0}}
        )
        self.repo.applications.batch_invalidate_scores_for_jobs.assert_called_once()
        self.assertEqual(self.repo.applications.batch_invalidate_scores_for_jobs.call_args.args[0], job_ids)
        self.repo.commit.assert_called_once()

    def test_rejected_company_scoring_is_not_stored(self):
        company = _company()
        self.repo.companies.get_by_id.return_value = company

        with self.assertRaises(ScoringConfigRejected) as ctx:
            self.service.update_company_scoring(
                company.id, ScoringOverride.model_validate({"experience": {"weight": 30}})
            )

        self.assertEqual(ctx.exception.result.total_weight, 105)
        self.repo.companies.set_scoring_config.assert_not_called()
        self.repo.commit.assert_not_called()

    def test_reset_company_scoring(self):
        company = _company({"awards": {"enabled": False}, "skills": {"weight": 15}})
        self.repo.companies.get_by_id.return_value = company

        config = self.service.update_company_scoring(company.id, None)

        self.assertIs(config, DEFAULT_SCORING_CONFIG)
        self.repo.companies.set_scoring_config.assert_called_once_with(company, None)

    def test_company_not_found(self):
        self.repo.companies.get_by_id.return_value = None
        with self.assertRaises(CompanyNotFound):
            self.service.update_company_scoring(uuid.uuid4(), None)

    def test_update_job_scoring_custom(self):
        job_scoring = JobScoringConfig.model_validate({
            "customScoring": {"skills": {"weight": 20}, "experience": {"weight": 15}}
        })

        def store(job, document):
            job.scoring_config = document
            return job
        self.repo.jobs.set_scoring_config.side_effect = store

        resolved = self.service.update_job_scoring(self.job.id, job_scoring)

        self.assertEqual(resolved.scoring_system_used, ScoringSystem.JOB_CUSTOM)
        self.assertEqual(resolved.config.skills.weight, 20)
        self.repo.applications.invalidate_scores_for_job.assert_called_once()
        self.repo.commit.assert_called_once()

    def test_rejected_job_scoring(self):
        job_scoring = JobScoringConfig.model_validate({"customScoring": {"skills": {"weight": 50}}})

        with self.assertRaises(ScoringConfigRejected):
            self.service.update_job_scoring(self.job.id, job_scoring)

        self.repo.jobs.set_scoring_config.assert_not_called()

    def test_invalid_custom_with_flag_is_not_validated(self):
        # customScoring is ignored while useSystemDefault is set
        job_scoring = JobScoringConfig.model_validate({
            "useSystemDefault": True,
            "customScoring": {"skills": {"weight": 50}}
        })

        def store(job, document):
            job.scoring_config = document
            return job
        self.repo.jobs.set_scoring_config.side_effect = store

        resolved = self.service.update_job_scoring(self.job.id, job_scoring)
        self.assertEqual(resolved.scoring_system_used, ScoringSystem.DEFAULT)

    def test_update_applicant_profile_marks_stale(self):
        self.repo.applications.invalidate_scores_for_applicant.return_value = 3
        profile = ApplicantProfile.model_validate(PROFILE_DATA)

        count = self.service.update_applicant_profile(self.applicant_id, profile, display_name="Juan")

        self.assertEqual(count, 3)
        stored = self.repo.applicants.save_profile.call_args.args[0]
        self.assertEqual(stored["education_level"], 4)
        self.assertNotIn("applicant_id", stored)
        self.repo.applications.invalidate_scores_for_applicant.assert_called_once_with(self.applicant_id)
        self.repo.commit.assert_called_once()


if __name__ == '__main__':
    unittest.main(verbosity=2)
