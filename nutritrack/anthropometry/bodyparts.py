# -*- coding: utf-8 -*-
"""Anthropometry — recognized body-part keys and alias table."""

from __future__ import annotations

import math
import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


class BodyPart(str, Enum):
    waist = "waist"
    hip = "hip"
    chest = "chest"
    shoulder = "shoulder"
    abdomen = "abdomen"
    neck = "neck"
    left_arm = "leftArm"
    right_arm = "rightArm"
    arm = "arm"
    left_forearm = "leftForearm"
    right_forearm = "rightForearm"
    left_thigh = "leftThigh"
    right_thigh = "rightThigh"
    thigh = "thigh"
    left_calf = "leftCalf"
    right_calf = "rightCalf"
    calf = "calf"
    wrist = "wrist"
    ankle = "ankle"


def _fold(name: str) -> str:
    return re.sub(r"[\s_\-]+", "", name).lower()


BODY_PART_ALIASES: Mapping[str, BodyPart] = MappingProxyType(
    {
        "hips": BodyPart.hip,
        "shoulders": BodyPart.shoulder,
        "bust": BodyPart.chest,
    }
)

_CANONICAL: Mapping[str, BodyPart] = MappingProxyType({_fold(part.value): part for part in BodyPart})

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def canonical_key(name: object) -> Optional[BodyPart]:
    """Resolve a raw measurement key ("Left Arm", "left_arm", "HIPS") to a BodyPart."""
    if isinstance(name, BodyPart):
        return name
    if not isinstance(name, str):
        return None
    folded = _fold(name)
    return _CANONICAL.get(folded) or BODY_PART_ALIASES.get(folded)


def coerce_float(value: Any) -> Optional[float]:
    """Best-effort numeric coercion; returns None for blanks, booleans and non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUM_RE.search(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def canonicalize_measurements(
    raw: Mapping[Any, Any] | None,
) -> Tuple[Dict[str, float], List[str]]:
    """Map raw keys onto canonical body parts.

    Returns the canonical mapping and the list of keys that were not recognized.
    Blank or non-numeric values are skipped silently. When both a canonical key
    and one of its aliases are given, the canonical key wins.
    """
    canonical: Dict[str, float] = {}
    aliased: Dict[str, float] = {}
    unknown: List[str] = []

    for key, value in (raw or {}).items():
        part = canonical_key(key)
        if part is None:
            unknown.append(str(key))
            continue
        number = coerce_float(value)
        if number is None:
            continue
        if isinstance(key, str) and _fold(key) in BODY_PART_ALIASES:
            aliased.setdefault(part.value, number)
        else:
            canonical[part.value] = number

    for key, number in aliased.items():
        canonical.setdefault(key, number)
    return canonical, unknown
