# -*- coding: utf-8 -*-
"""
Anthropometry — somatotype estimation.

Two mutually exclusive paths, chosen by ``has_complete_advanced_data``:

* Heath-Carter: the anthropometric equations, when skinfolds, girths and bone
  breadths are all present together with height and weight.
* Simplified: integer points per component from ratios, BMI, limb girths and
  self-reported survey cues.

Both paths report component shares summing to 1 and a dominance label.

Reference:
    Carter JEL, Heath BH. Somatotyping: development and applications. 1990.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple, Union

from .bodyparts import BodyPart
from .models import (
    AdvancedData,
    BoneStructure,
    HeathCarterResult,
    RankedShare,
    RatioSet,
    SanitizedEntry,
    SimplifiedResult,
    SomatotypeTriplet,
)
from .thresholds import DEFAULT_THRESHOLDS, SomatotypeThresholds

ENDOMORPH = "Endomorph"
MESOMORPH = "Mesomorph"
ECTOMORPH = "Ectomorph"
COMPONENTS = (ENDOMORPH, MESOMORPH, ECTOMORPH)

REQUIRED_SKINFOLDS = ("triceps", "subscapular", "supraspinale", "calf")
REQUIRED_CIRCUMFERENCES = ("flexed_arm", "calf", "thigh")
REQUIRED_BREADTHS = ("humerus", "femur")


def has_complete_advanced_data(
    advanced: Optional[AdvancedData],
    height_cm: Optional[float],
    weight_kg: Optional[float],
) -> bool:
    if advanced is None or not height_cm or not weight_kg:
        return False
    groups = (
        (advanced.skinfolds, REQUIRED_SKINFOLDS),
        (advanced.circumferences, REQUIRED_CIRCUMFERENCES),
        (advanced.bone_breadths, REQUIRED_BREADTHS),
    )
    for group, names in groups:
        if group is None or any(getattr(group, name) is None for name in names):
            return False
    return True


def compute_heath_carter(advanced: AdvancedData, height_cm: float, weight_kg: float) -> SomatotypeTriplet:
    """
    Heath-Carter anthropometric somatotype.

    Assumes ``has_complete_advanced_data`` holds. Skinfolds in mm, girths and
    breadths in cm. Each component is floored at 0 and rounded to 0.1.
    """
    skf = advanced.skinfolds
    circ = advanced.circumferences
    bones = advanced.bone_breadths

    sum_skf = skf.triceps + skf.subscapular + skf.supraspinale
    endomorphy = -0.7182 + 0.1451 * sum_skf - 0.00068 * sum_skf ** 2 + 0.0000014 * sum_skf ** 3

    corrected_arm = circ.flexed_arm - skf.triceps / 10
    corrected_calf = circ.calf - skf.calf / 10
    mesomorphy = (
        0.858 * bones.humerus
        + 0.601 * bones.femur
        + 0.188 * corrected_arm
        + 0.161 * corrected_calf
        - 0.131 * height_cm
        + 4.5
    )

    hwr = height_cm / weight_kg ** (1 / 3)
    if hwr > 40.75:
        ectomorphy = 0.732 * hwr - 28.58
    elif hwr > 38.25:
        ectomorphy = 0.463 * hwr - 17.63
    else:
        ectomorphy = 0.1

    return SomatotypeTriplet(
        endomorphy=round(max(0.0, endomorphy), 1),
        mesomorphy=round(max(0.0, mesomorphy), 1),
        ectomorphy=round(max(0.0, ectomorphy), 1),
    )


def _first_present(measurements: Mapping[str, float], *parts: BodyPart) -> Optional[float]:
    for part in parts:
        value = measurements.get(part.value)
        if value is not None:
            return value
    return None


def _raw_bmi(entry: SanitizedEntry) -> Optional[float]:
    height = entry.body_stats.height_cm
    weight = entry.body_stats.weight_kg
    if not height or not weight:
        return None
    return weight / (height / 100) ** 2


def score_simplified(
    entry: SanitizedEntry,
    ratios: RatioSet,
    thresholds: SomatotypeThresholds = DEFAULT_THRESHOLDS.somatotype,
) -> Dict[str, int]:
    """Accumulate heuristic points per component from whatever evidence exists."""
    p = thresholds.points
    points = {component: 0 for component in COMPONENTS}
    survey = entry.survey
    m = entry.measurements

    if ratios.whtr is not None and ratios.whtr >= p.central_whtr:
        points[ENDOMORPH] += p.central_whtr_points
    if ratios.whr is not None and ratios.whr >= p.high_whr:
        points[ENDOMORPH] += p.high_whr_points
    if entry.body_stats.bmi and entry.body_stats.bmi >= p.high_bmi:
        points[ENDOMORPH] += p.high_bmi_points
    if survey is not None and survey.gain_fat_easily:
        points[ENDOMORPH] += p.gain_fat_points

    if survey is not None and survey.gain_muscle_easily:
        points[MESOMORPH] += p.gain_muscle_points
    if survey is not None and survey.bone_structure == BoneStructure.broad:
        points[MESOMORPH] += p.broad_bone_points

    arm = _first_present(m, BodyPart.left_arm, BodyPart.right_arm, BodyPart.arm)
    if arm is not None and arm >= p.muscular_arm_cm:
        points[MESOMORPH] += p.muscular_arm_points
    thigh = _first_present(m, BodyPart.left_thigh, BodyPart.right_thigh, BodyPart.thigh)
    if thigh is not None and thigh >= p.muscular_thigh_cm:
        points[MESOMORPH] += p.muscular_thigh_points

    wrist = m.get(BodyPart.wrist.value)
    if wrist is not None:
        if wrist <= p.slim_wrist_cm:
            points[ECTOMORPH] += p.slim_wrist_points
        elif wrist >= p.thick_wrist_cm:
            points[MESOMORPH] += p.thick_wrist_points

    if survey is not None and survey.hard_to_gain_weight:
        points[ECTOMORPH] += p.hard_gainer_points

    # BMI bands here use the unrounded value; the high-BMI check above uses the reported one.
    bmi = _raw_bmi(entry)
    if bmi is not None:
        low, high = p.athletic_bmi
        if bmi < p.low_bmi:
            points[ECTOMORPH] += p.low_bmi_points
        elif low <= bmi <= high:
            points[MESOMORPH] += p.athletic_bmi_points

    if ratios.shr is not None and ratios.shr >= p.broad_shr:
        points[MESOMORPH] += p.broad_shr_points
    if ratios.whtr is not None and ratios.whtr <= p.lean_whtr:
        points[ECTOMORPH] += p.lean_whtr_points

    return points


def normalize_to_percent(scores: Mapping[str, float]) -> Dict[str, float]:
    total = sum(scores.values())
    if total <= 0:
        return {component: 1 / 3 for component in COMPONENTS}
    return {label: value / total for label, value in scores.items()}


def pick_dominant_label(
    percentages: Mapping[str, float],
    dominant_share: float = DEFAULT_THRESHOLDS.somatotype.dominant_share,
    blend_share: float = DEFAULT_THRESHOLDS.somatotype.blend_share,
) -> Tuple[str, List[RankedShare]]:
    ranking = [
        RankedShare(label=label, value=value)
        for label, value in sorted(percentages.items(), key=lambda item: -item[1])
    ]
    if not ranking:
        return "Balanced", ranking

    first = ranking[0]
    if first.value >= dominant_share:
        return f"{first.label} dominant", ranking
    if len(ranking) > 1 and ranking[1].value >= blend_share:
        return f"{first.label}-{ranking[1].label} blend", ranking
    return "Balanced", ranking


def classify_somatotype(
    entry: SanitizedEntry,
    ratios: RatioSet,
    thresholds: SomatotypeThresholds = DEFAULT_THRESHOLDS.somatotype,
) -> Union[HeathCarterResult, SimplifiedResult]:
    height = entry.body_stats.height_cm
    weight = entry.body_stats.weight_kg

    if has_complete_advanced_data(entry.advanced, height, weight):
        triplet = compute_heath_carter(entry.advanced, height, weight)
        scores = normalize_to_percent(
            {
                ENDOMORPH: triplet.endomorphy,
                MESOMORPH: triplet.mesomorphy,
                ECTOMORPH: triplet.ectomorphy,
            }
        )
        label, ranking = pick_dominant_label(scores, thresholds.dominant_share, thresholds.blend_share)
        return HeathCarterResult(label=label, scores=scores, ranking=ranking, triplet=triplet)

    points = score_simplified(entry, ratios, thresholds)
    scores = normalize_to_percent(points)
    label, ranking = pick_dominant_label(scores, thresholds.dominant_share, thresholds.blend_share)
    return SimplifiedResult(label=label, scores=scores, ranking=ranking, points=points)
