#!/usr/bin/env python3
"""
Unit tests for the command line entry point.
"""

import os
import tempfile
import unittest
import uuid
from unittest.mock import patch, MagicMock

import yaml

import main
from core.scoring import DEFAULT_SCORING_CONFIG
from core.scoring.exceptions import JobNotFound
from core.scoring.service import RescoreSummary


class TestValidateConfigCommand(unittest.TestCase):
    """`main.py validate-config PATH`."""

    def _write(self, document) -> str:
        handle, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(handle, "w") as f:
            yaml.safe_dump(document, f)
        self.addCleanup(os.remove, path)
        return path

    def test_valid_file(self):
        path = self._write(DEFAULT_SCORING_CONFIG.to_document())
        with patch("builtins.print") as mock_print:
            self.assertEqual(main.main(["validate-config", path]), 0)
        self.assertIn('"valid": true', mock_print.call_args.args[0])

    def test_invalid_weights(self):
        document = DEFAULT_SCORING_CONFIG.to_document()
        document["experience"]["weight"] = 30
        path = self._write(document)
        with patch("builtins.print"):
            self.assertEqual(main.main(["validate-config", path]), 1)

    def test_schema_error(self):
        path = self._write({"education": {"label": "Education"}})
        self.assertEqual(main.main(["validate-config", path]), 1)

    def test_missing_file(self):
        self.assertEqual(main.main(["validate-config", "/nonexistent/scoring.yaml"]), 2)


class TestRescoreCommands(unittest.TestCase):
    """Rescoring commands with the unit of work mocked out."""

    def setUp(self):
        self.repo = MagicMock()
        uow = patch("main.portal_uow").start()
        uow.return_value.__enter__ = MagicMock(return_value=self.repo)
        uow.return_value.__exit__ = MagicMock(return_value=False)
        patch("main.make_session_factory").start()
        self.service = MagicMock()
        patch("main.build_service", return_value=self.service).start()
        self.addCleanup(patch.stopall)

    def test_rescore_job(self):
        job_id = uuid.uuid4()
        self.service.rescore_job.return_value = RescoreSummary(scored=3)

        self.assertEqual(main.main(["rescore", "--job-id", str(job_id)]), 0)
        self.service.rescore_job.assert_called_once_with(job_id)

    def test_rescore_job_not_found(self):
        self.service.rescore_job.side_effect = JobNotFound("Job missing")
        self.assertEqual(main.main(["rescore", "--job-id", str(uuid.uuid4())]), 1)

    def test_rescore_stale_all_batches(self):
        self.service.rescore_stale.side_effect = [
            RescoreSummary(scored=5),
            RescoreSummary(scored=2, failed=1, errors=["application x: bad profile"]),
            RescoreSummary(),
        ]

        self.assertEqual(main.main(["rescore-stale", "--limit", "5", "--all"]), 1)
        self.assertEqual(self.service.rescore_stale.call_count, 3)
        self.service.rescore_stale.assert_called_with(5)

    def test_rescore_stale_continues_past_failed_batch(self):
        self.service.rescore_stale.side_effect = [
            RescoreSummary(failed=2, errors=["a: bad profile", "b: bad profile"]),
            RescoreSummary(scored=1),
            RescoreSummary(),
        ]

        self.assertEqual(main.main(["rescore-stale", "--limit", "2", "--all"]), 1)
        self.assertEqual(self.service.rescore_stale.call_count, 3)

    def test_rescore_stale_single_batch(self):
        self.service.rescore_stale.return_value = RescoreSummary(scored=5)

        self.assertEqual(main.main(["rescore-stale"]), 0)
        self.service.rescore_stale.assert_called_once_with(100)


if __name__ == '__main__':
    unittest.main(verbosity=2)
