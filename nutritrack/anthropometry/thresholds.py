# -*- coding: utf-8 -*-
"""
Anthropometry — tunable constants.

Plausibility ranges are physiological bounds. Everything else here (shape
cut-offs, score bonuses, simplified somatotype points) is a heuristic weight
kept at its historical value so results stay comparable across releases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class MeasurementRanges:
    """Inclusive plausibility bounds used by the preprocessor."""
    height_cm: Tuple[float, float] = (120.0, 230.0)
    weight_kg: Tuple[float, float] = (30.0, 250.0)
    body_part_cm: Tuple[float, float] = (20.0, 200.0)


@dataclass(frozen=True)
class ShapeThresholds:
    # Apple
    central_whtr: float = 0.5
    female_whr: float = 0.85
    other_whr: float = 0.95
    upper_bhr: float = 0.95
    upper_shr: float = 1.0
    # Inverted Triangle
    inverted_ratio: float = 1.05
    # Pear
    pear_whr: float = 0.8
    pear_bhr: float = 0.85
    pear_shr: float = 0.9
    # Rectangle
    rectangle_whr: float = 0.825
    rectangle_whr_tolerance: float = 0.025
    balance_tolerance: float = 0.05
    # Hourglass
    hourglass_whr: float = 0.8
    # score bonuses
    apple_upper_bonus: float = 0.3
    pear_primary_weight: float = 1.0
    pear_secondary_bonus: float = 0.3
    hourglass_waist_bonus: float = 0.5


@dataclass(frozen=True)
class SomatotypePoints:
    """Point values for the simplified (survey + ratio) somatotype estimate."""
    # Endomorph
    central_whtr: float = 0.5
    central_whtr_points: int = 2
    high_whr: float = 0.9
    high_whr_points: int = 1
    high_bmi: float = 28.0
    high_bmi_points: int = 1
    gain_fat_points: int = 2
    # Mesomorph
    gain_muscle_points: int = 2
    broad_bone_points: int = 1
    muscular_arm_cm: float = 35.0
    muscular_arm_points: int = 1
    muscular_thigh_cm: float = 55.0
    muscular_thigh_points: int = 1
    broad_shr: float = 1.05
    broad_shr_points: int = 1
    thick_wrist_cm: float = 18.0
    thick_wrist_points: int = 1
    athletic_bmi: Tuple[float, float] = (24.0, 27.0)
    athletic_bmi_points: int = 1
    # Ectomorph
    slim_wrist_cm: float = 16.0
    slim_wrist_points: int = 2
    hard_gainer_points: int = 2
    low_bmi: float = 20.0
    low_bmi_points: int = 2
    lean_whtr: float = 0.44
    lean_whtr_points: int = 1


@dataclass(frozen=True)
class SomatotypeThresholds:
    points: SomatotypePoints = field(default_factory=SomatotypePoints)
    dominant_share: float = 0.6
    blend_share: float = 0.4


@dataclass(frozen=True)
class Thresholds:
    ranges: MeasurementRanges = field(default_factory=MeasurementRanges)
    shape: ShapeThresholds = field(default_factory=ShapeThresholds)
    somatotype: SomatotypeThresholds = field(default_factory=SomatotypeThresholds)


DEFAULT_THRESHOLDS = Thresholds()
