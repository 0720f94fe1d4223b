# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from nutritrack.anthropometry.models import BodyStats, MeasurementEntry
from nutritrack.anthropometry.preprocess import (
    MeasurementValidationError,
    compute_bmi,
    preprocess_entry,
    validate_entry,
)
from nutritrack.anthropometry.ratios import compute_ratios


def _entry(height=170.0, weight=65.0, **measurements) -> MeasurementEntry:
    base = {"waist": 75.0, "hip": 98.0, "chest": 92.0}
    base.update(measurements)
    return MeasurementEntry(
        body_stats=BodyStats(height_cm=height, weight_kg=weight),
        measurements={k: v for k, v in base.items() if v is not None},
    )


class TestPreprocess(unittest.TestCase):
    def test_clean_entry(self) -> None:
        result = preprocess_entry(_entry(shoulder=101.236))
        self.assertTrue(result.ok)
        self.assertEqual(result.warnings, [])
        self.assertEqual(result.sanitized.measurements["shoulder"], 101.24)
        self.assertEqual(result.sanitized.body_stats.bmi, 22.5)

    def test_outlier_is_dropped_with_warning(self) -> None:
        result = preprocess_entry(_entry(waist=500.0))
        self.assertNotIn("waist", result.sanitized.measurements)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("waist", result.warnings[0])
        self.assertIn("500", result.warnings[0])
        # waist is required, so dropping it is also a hard error
        self.assertTrue(any("'waist'" in e for e in result.errors))
        ratios = compute_ratios(result.sanitized)
        self.assertIsNone(ratios.whr)
        self.assertIsNone(ratios.whtr)

    def test_non_required_outlier_is_only_a_warning(self) -> None:
        result = preprocess_entry(_entry(wrist=15.0))
        self.assertTrue(result.ok)
        self.assertNotIn("wrist", result.sanitized.measurements)
        self.assertEqual(len(result.warnings), 1)

    def test_missing_height_and_weight(self) -> None:
        result = preprocess_entry(_entry(height=None, weight=None))
        self.assertIn("Height missing or invalid.", result.errors)
        self.assertIn("Weight missing or invalid.", result.errors)
        self.assertIsNone(result.sanitized.body_stats.bmi)

    def test_out_of_range_stats_are_removed(self) -> None:
        result = preprocess_entry(_entry(height=250.0, weight=20.0))
        self.assertIn("Height outside plausible range after conversion.", result.errors)
        self.assertIn("Weight outside plausible range after conversion.", result.errors)
        self.assertIsNone(result.sanitized.body_stats.height_cm)
        self.assertIsNone(result.sanitized.body_stats.weight_kg)
        self.assertIsNone(result.sanitized.body_stats.bmi)

    def test_missing_hip_is_reported(self) -> None:
        result = preprocess_entry(_entry(hip=None))
        self.assertEqual(result.errors, ["Required measurement 'hip' unavailable after preprocessing."])

    def test_raise_for_errors(self) -> None:
        failed = preprocess_entry(_entry(hip=None))
        with self.assertRaises(MeasurementValidationError) as ctx:
            failed.raise_for_errors()
        self.assertEqual(ctx.exception.errors, failed.errors)
        self.assertIsInstance(ctx.exception, ValueError)

        passed = preprocess_entry(_entry())
        self.assertEqual(passed.raise_for_errors(), passed.sanitized)

    def test_validate_entry_raises(self) -> None:
        with self.assertRaises(MeasurementValidationError) as ctx:
            validate_entry(_entry(chest=None, height=None))
        self.assertEqual(len(ctx.exception.errors), 2)
        sanitized = validate_entry(_entry())
        self.assertEqual(sanitized.body_stats.height_cm, 170.0)

    def test_entry_is_not_mutated(self) -> None:
        entry = _entry(waist=500.0)
        before = entry.model_dump()
        preprocess_entry(entry)
        self.assertEqual(entry.model_dump(), before)

    def test_compute_bmi(self) -> None:
        self.assertEqual(compute_bmi(80.0, 180.0), 24.7)
        self.assertIsNone(compute_bmi(None, 180.0))


if __name__ == "__main__":
    unittest.main()
