#!/usr/bin/env python3
"""
Test suite for scoring configuration and result models.
"""

import unittest
from datetime import datetime, timezone

from pydantic import ValidationError

from core.scoring import DEFAULT_SCORING_CONFIG
from core.scoring.models import (
    CriteriaScore,
    Criterion,
    CriterionKey,
    JobScoringConfig,
    PDSScoreBreakdown,
    ScoringCriteria,
    ScoringOverride,
    ScoringSystem,
    SubCriterion,
)


class TestSubCriterion(unittest.TestCase):
    """Band predicates."""

    def test_min_bound_is_inclusive(self):
        band = SubCriterion(name="10+ years", points=25, min_value=10)
        self.assertTrue(band.qualifies(10))
        self.assertTrue(band.qualifies(15))
        self.assertFalse(band.qualifies(9.99))

    def test_closed_range(self):
        band = SubCriterion(name="2-3 years", points=10, min_value=2, max_value=3)
        self.assertTrue(band.qualifies(2))
        self.assertTrue(band.qualifies(3))
        self.assertFalse(band.qualifies(3.5))

    def test_unbounded_band_matches_anything(self):
        band = SubCriterion(name="Any", points=1)
        self.assertFalse(band.has_bounds)
        self.assertTrue(band.qualifies(-5))
        self.assertTrue(band.qualifies(1000))

    def test_negative_points_rejected(self):
        with self.assertRaises(ValidationError):
            SubCriterion(name="Bad", points=-1)


class TestCriterion(unittest.TestCase):
    """Criterion helpers and camelCase documents."""

    def test_parses_camel_case_document(self):
        criterion = Criterion.model_validate({
            "label": "Skills",
            "maxPoints": 10,
            "weight": 10,
            "subCriteria": [{"name": "Expert", "points": 10, "minValue": 5}],
        })
        self.assertEqual(criterion.max_points, 10)
        self.assertEqual(criterion.sub_criteria[0].min_value, 5)
        self.assertTrue(criterion.enabled)

    def test_to_document_uses_camel_case(self):
        document = DEFAULT_SCORING_CONFIG.to_document()
        self.assertIn("relevantExperience", document)
        self.assertIn("maxPoints", document["education"])
        self.assertIn("subCriteria", document["education"])

    def test_bands_descending(self):
        self.assertTrue(DEFAULT_SCORING_CONFIG.experience.bands_descending())
        ascending = Criterion(
            label="Bad",
            max_points=10,
            weight=10,
            sub_criteria=(SubCriterion(name="low", points=1), SubCriterion(name="high", points=5)),
        )
        self.assertFalse(ascending.bands_descending())
        self.assertEqual(ascending.highest_band_points, 5)

    def test_weight_above_100_rejected(self):
        with self.assertRaises(ValidationError):
            Criterion(label="Too heavy", max_points=10, weight=120)

    def test_models_are_frozen(self):
        with self.assertRaises(ValidationError):
            DEFAULT_SCORING_CONFIG.education.weight = 50


class TestScoringCriteria(unittest.TestCase):
    """Lookup and iteration order."""

    def test_items_follow_canonical_order(self):
        keys = [key for key, _ in DEFAULT_SCORING_CONFIG.items()]
        self.assertEqual(keys, list(CriterionKey))

    def test_get_by_key_or_string(self):
        self.assertEqual(DEFAULT_SCORING_CONFIG.get(CriterionKey.RELEVANT_EXPERIENCE).label, "Relevant Experience")
        self.assertEqual(DEFAULT_SCORING_CONFIG.get("relevantExperience").label, "Relevant Experience")

    def test_document_roundtrip(self):
        restored = ScoringCriteria.model_validate(DEFAULT_SCORING_CONFIG.to_document())
        self.assertEqual(restored, DEFAULT_SCORING_CONFIG)


class TestOverrides(unittest.TestCase):
    """Sparse override documents."""

    def test_override_document_omits_unset_fields(self):
        override = ScoringOverride.model_validate({"experience": {"weight": 30}})
        self.assertEqual(override.to_document(), {"experience": {"weight": 30.0}})

    def test_unknown_criterion_rejected(self):
        with self.assertRaises(ValidationError):
            ScoringOverride.model_validate({"hobbies": {"weight": 5}})

    def test_job_scoring_defaults(self):
        job_scoring = JobScoringConfig.model_validate({"customScoring": {"skills": {"weight": 20}}})
        self.assertFalse(job_scoring.use_company_default)
        self.assertFalse(job_scoring.use_system_default)
        self.assertEqual(job_scoring.custom_scoring.skills.weight, 20)
        self.assertEqual(
            job_scoring.to_document(),
            {
                "useCompanyDefault": False,
                "useSystemDefault": False,
                "customScoring": {"skills": {"weight": 20.0}},
            }
        )


class TestBreakdownDocument(unittest.TestCase):
    """PDSScoreBreakdown storage format."""

    def test_document_keys(self):
        breakdown = PDSScoreBreakdown(
            total_score=12,
            max_possible_score=20,
            percentage=60.0,
            scoring_system_used=ScoringSystem.COMPANY_CUSTOM,
            criteria_scores={
                CriterionKey.EDUCATION: CriteriaScore(
                    label="Education",
                    earned_points=12,
                    max_points=20,
                    weight=20,
                    percentage=60.0,
                    enabled=True,
                    matched_criteria="Bachelor's Degree",
                )
            },
            applied_date=datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc),
        )

        document = breakdown.to_document()
        self.assertEqual(document["scoringSystemUsed"], "company-custom")
        self.assertEqual(document["criteriaScores"]["education"]["earnedPoints"], 12)
        self.assertEqual(document["criteriaScores"]["education"]["matchedCriteria"], "Bachelor's Degree")
        self.assertNotIn("details", document["criteriaScores"]["education"])
        self.assertEqual(document["appliedDate"], "2026-01-15T09:30:00+00:00")

        self.assertEqual(PDSScoreBreakdown.from_document(document), breakdown)


if __name__ == '__main__':
    unittest.main(verbosity=2)
