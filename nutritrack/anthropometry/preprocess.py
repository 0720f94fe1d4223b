# -*- coding: utf-8 -*-
"""
Anthropometry — validation and preprocessing.

Range-checks a MeasurementEntry, drops implausible body-part values as
outliers and computes BMI. Height and weight problems, and missing
waist/hip/chest after outlier removal, are hard errors.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .bodyparts import BodyPart
from .models import (
    MeasurementEntry,
    MeasurementValidationError,
    PreprocessResult,
    SanitizedBodyStats,
    SanitizedEntry,
)
from .thresholds import DEFAULT_THRESHOLDS, MeasurementRanges

logger = logging.getLogger(__name__)

REQUIRED_PARTS = (BodyPart.waist, BodyPart.hip, BodyPart.chest)


def _within(value: float, bounds: Tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def _check_stat(
    value: Optional[float],
    bounds: Tuple[float, float],
    name: str,
    errors: List[str],
) -> Optional[float]:
    if value is None:
        errors.append(f"{name} missing or invalid.")
        return None
    if not _within(value, bounds):
        errors.append(f"{name} outside plausible range after conversion.")
        return None
    return value


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    if not weight_kg or not height_cm:
        return None
    height_m = height_cm / 100
    return round(weight_kg / (height_m ** 2), 1)


def preprocess_entry(
    entry: MeasurementEntry,
    ranges: MeasurementRanges = DEFAULT_THRESHOLDS.ranges,
) -> PreprocessResult:
    warnings: List[str] = []
    errors: List[str] = []

    height = _check_stat(entry.body_stats.height_cm, ranges.height_cm, "Height", errors)
    weight = _check_stat(entry.body_stats.weight_kg, ranges.weight_kg, "Weight", errors)

    measurements: Dict[str, float] = {}
    for key, value in entry.measurements.items():
        rounded = round(value, 2)
        if not _within(rounded, ranges.body_part_cm):
            warnings.append(f"Discarded {key} measurement ({rounded:g} cm) as an outlier.")
            continue
        measurements[key] = rounded

    for part in REQUIRED_PARTS:
        if part.value not in measurements:
            errors.append(f"Required measurement '{part.value}' unavailable after preprocessing.")

    if errors:
        logger.debug("Entry %s failed validation: %s", entry.id, errors)

    sanitized = SanitizedEntry(
        profile=entry.profile,
        body_stats=SanitizedBodyStats(
            height_cm=height,
            weight_kg=weight,
            bmi=compute_bmi(weight, height),
        ),
        measurements=measurements,
        advanced=entry.advanced,
        survey=entry.survey,
    )
    return PreprocessResult(sanitized=sanitized, warnings=warnings, errors=errors)


def validate_entry(
    entry: MeasurementEntry,
    ranges: MeasurementRanges = DEFAULT_THRESHOLDS.ranges,
) -> SanitizedEntry:
    """Preprocess and raise MeasurementValidationError on any hard error."""
    return preprocess_entry(entry, ranges).raise_for_errors()
