#!/usr/bin/env python3
"""
Test suite for the built-in rubric and configured system default.
"""

import unittest

from core.scoring import DEFAULT_SCORING_CONFIG, build_system_default, validate_scoring_config
from core.scoring.exceptions import ConfigurationInvalid


class TestBuiltInRubric(unittest.TestCase):

    def test_rubric_is_valid(self):
        result = validate_scoring_config(DEFAULT_SCORING_CONFIG)
        self.assertTrue(result.valid, result.errors)

    def test_max_points_match_highest_band(self):
        for key, criterion in DEFAULT_SCORING_CONFIG.items():
            self.assertEqual(criterion.highest_band_points, criterion.max_points, key)

    def test_every_band_has_a_threshold(self):
        for _, criterion in DEFAULT_SCORING_CONFIG.items():
            for band in criterion.sub_criteria:
                self.assertIsNotNone(band.min_value, band.name)


class TestBuildSystemDefault(unittest.TestCase):

    def test_no_overrides_returns_rubric(self):
        self.assertIs(build_system_default(None), DEFAULT_SCORING_CONFIG)
        self.assertIs(build_system_default({}), DEFAULT_SCORING_CONFIG)

    def test_valid_overrides_are_merged(self):
        config = build_system_default({"experience": {"weight": 30}, "education": {"weight": 15}})
        self.assertEqual(config.experience.weight, 30)
        self.assertEqual(config.education.weight, 15)

    def test_invalid_overrides_raise(self):
        with self.assertRaises(ConfigurationInvalid) as ctx:
            build_system_default({"experience": {"weight": 30}})
        self.assertEqual(ctx.exception.total_weight, 105)

    def test_tolerance_is_applied(self):
        config = build_system_default({"experience": {"weight": 25.3}}, tolerance=0.5)
        self.assertEqual(config.experience.weight, 25.3)


if __name__ == '__main__':
    unittest.main(verbosity=2)
