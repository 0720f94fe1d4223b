# -*- coding: utf-8 -*-
"""Anthropometry — body-proportion ratios."""

from __future__ import annotations

import math
from typing import Optional

from .bodyparts import BodyPart
from .models import RatioSet, SanitizedEntry


def _ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    if not numerator or not denominator:
        return None
    value = numerator / denominator
    if not math.isfinite(value):
        return None
    return round(value, 3)


def compute_ratios(entry: SanitizedEntry) -> RatioSet:
    """
    Derive WHR, WHtR, SHR, BHR and SWR.

    Only exact body-part keys are used; a ratio whose inputs are missing is
    left as None rather than guessed.
    """
    m = entry.measurements
    waist = m.get(BodyPart.waist.value)
    hip = m.get(BodyPart.hip.value)
    chest = m.get(BodyPart.chest.value)
    shoulder = m.get(BodyPart.shoulder.value)
    height = entry.body_stats.height_cm

    return RatioSet(
        whr=_ratio(waist, hip),
        whtr=_ratio(waist, height),
        shr=_ratio(shoulder, hip),
        bhr=_ratio(chest, hip),
        swr=_ratio(shoulder, waist),
    )
