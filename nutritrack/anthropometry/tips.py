# -*- coding: utf-8 -*-
"""Anthropometry — coaching tips for a shape/somatotype combination."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union

from .models import HeathCarterResult, ShapeResult, SimplifiedResult

TipTable = Mapping[str, Tuple[str, ...]]


@dataclass(frozen=True)
class TipTables:
    shape: TipTable
    somatotype: TipTable
    fallback: str = "Balanced"


SHAPE_TIPS: TipTable = MappingProxyType(
    {
        "Apple": (
            "Prioritise waist-friendly nutrition: higher fibre, lower refined sugars, and consistent hydration.",
            "Pair cardio intervals with core stability work (planks, Pallof presses) to trim central adiposity.",
            "Track stress and sleep, since elevated cortisol often drives central fat storage.",
        ),
        "Pear": (
            "Lean into lower-body strength training (squats, hip thrusts) to build glute support.",
            "Balance macros with slightly higher protein to maintain upper-body tone.",
            "Include circulation boosters (walking, cycling) to mobilise lower-body fat stores.",
        ),
        "Rectangle": (
            "Use hypertrophy blocks for shoulders and glutes to create more curvature.",
            "Dial in nutrition with slight caloric surplus and progressive overload programming.",
            "Incorporate waist-shaping core work (vacuum breathing, anti-rotation exercises).",
        ),
        "Inverted Triangle": (
            "Emphasise lower-body hypertrophy and posterior-chain work to balance proportions.",
            "Keep upper-body training high-quality but moderate in volume to avoid over-dominance.",
            "Prioritise recovery and mobility for the shoulders to prevent overuse.",
        ),
        "Hourglass": (
            "Maintain muscle balance with alternating upper/lower splits and core stability work.",
            "Stay consistent with protein timing to preserve lean curves during fat-loss phases.",
            "Use waist-friendly conditioning (rowing, pilates, loaded carries) to reinforce symmetry.",
        ),
    }
)

SOMATOTYPE_TIPS: TipTable = MappingProxyType(
    {
        "Endomorph": (
            "Adopt moderate calorie deficits with high protein and plenty of non-starchy vegetables.",
            "Combine resistance training with interval cardio three times per week.",
            "Monitor carbohydrate timing: cluster carbs around training for better utilisation.",
        ),
        "Mesomorph": (
            "Leverage structured strength programs (push/pull/legs or upper/lower splits).",
            "Maintain a performance-focused diet with balanced macros and peri-workout nutrition.",
            "Schedule deload weeks, as mesomorphs can overtrain when progress feels easy.",
        ),
        "Ectomorph": (
            "Increase calorie density with healthy fats and frequent meals/snacks.",
            "Focus on compound lifts in lower rep ranges to stimulate muscle gain.",
            "Prioritise sleep and reduce long-duration cardio to conserve energy for growth.",
        ),
        "Balanced": (
            "Use periodised training blocks to explore different goals across the year.",
            "Keep nutrition flexible but anchored by adequate protein at each meal.",
            "Regularly reassess metrics to stay aligned with evolving goals.",
        ),
    }
)

DEFAULT_TIP_TABLES = TipTables(shape=SHAPE_TIPS, somatotype=SOMATOTYPE_TIPS)

_LABEL_SUFFIX = re.compile(r" dominant| blend", re.IGNORECASE)


def _strip_suffix(label: str) -> str:
    return _LABEL_SUFFIX.sub("", label).strip()


def build_tips(
    shape: Optional[ShapeResult],
    somatotype: Optional[Union[HeathCarterResult, SimplifiedResult]],
    tables: TipTables = DEFAULT_TIP_TABLES,
    limit: int = 6,
) -> List[str]:
    """Shape tips first, then tips for the top two somatotype components; deduplicated, order kept."""
    tips: List[str] = []

    def add(group: Tuple[str, ...]) -> None:
        for tip in group:
            if tip not in tips:
                tips.append(tip)

    if shape is not None and shape.primary is not None:
        add(tables.shape.get(shape.primary.value, ()))

    if somatotype is not None:
        for share in somatotype.ranking[:2]:
            add(tables.somatotype.get(_strip_suffix(share.label), ()))

    if not tips:
        add(tables.somatotype.get(tables.fallback, ()))

    return tips[:limit]
