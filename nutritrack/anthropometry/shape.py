# -*- coding: utf-8 -*-
"""
Anthropometry — body-shape classification.

The primary label comes from an ordered rule cascade (first match wins). A
softmax over per-shape scores is always computed: it is reported for
transparency and supplies the label when no rule fires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

import numpy as np

from .bodyparts import BodyPart
from .models import BodyShape, Gender, RatioSet, SanitizedEntry, ShapeProbability, ShapeResult
from .thresholds import DEFAULT_THRESHOLDS, ShapeThresholds

logger = logging.getLogger(__name__)

K = TypeVar("K")

TIE_BREAK_REASON = "Selected via probability tie-break."


@dataclass(frozen=True)
class ShapeContext:
    ratios: RatioSet
    whr_threshold: float
    thresholds: ShapeThresholds


@dataclass(frozen=True)
class ShapeRule:
    shape: BodyShape
    matches: Callable[[ShapeContext], bool]
    explain: Callable[[ShapeContext], str]


# ==================== helpers ====================

def _fmt(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def _at_least(value: Optional[float], threshold: float) -> bool:
    return value is not None and value >= threshold


def _below(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


def _at_most(value: Optional[float], threshold: float) -> bool:
    return value is not None and value <= threshold


def _near(value: Optional[float], target: float, tolerance: float) -> bool:
    return value is not None and abs(value - target) <= tolerance


def _relative_excess(value: Optional[float], threshold: float) -> float:
    if value is None or not threshold:
        return 0.0
    return (value - threshold) / threshold


def whr_threshold_for(gender: Gender, thresholds: ShapeThresholds = DEFAULT_THRESHOLDS.shape) -> float:
    return thresholds.female_whr if gender == Gender.female else thresholds.other_whr


# ==================== rules ====================

def _upper_dominant(ctx: ShapeContext) -> bool:
    r, t = ctx.ratios, ctx.thresholds
    return _at_least(r.bhr, t.upper_bhr) or _at_least(r.shr, t.upper_shr)


def _central(ctx: ShapeContext) -> bool:
    r = ctx.ratios
    return _at_least(r.whtr, ctx.thresholds.central_whtr) or _at_least(r.whr, ctx.whr_threshold)


def _is_apple(ctx: ShapeContext) -> bool:
    return _central(ctx) and _upper_dominant(ctx)


def _is_inverted_triangle(ctx: ShapeContext) -> bool:
    r, t = ctx.ratios, ctx.thresholds
    return _at_least(r.shr, t.inverted_ratio) or _at_least(r.bhr, t.inverted_ratio)


def _hips_dominate(ctx: ShapeContext) -> bool:
    r, t = ctx.ratios, ctx.thresholds
    return _at_most(r.bhr, t.pear_bhr) or _below(r.shr, t.pear_shr)


def _is_pear(ctx: ShapeContext) -> bool:
    return _below(ctx.ratios.whr, ctx.thresholds.pear_whr) and _hips_dominate(ctx)


def _is_rectangle(ctx: ShapeContext) -> bool:
    r, t = ctx.ratios, ctx.thresholds
    return (
        _near(r.whr, t.rectangle_whr, t.rectangle_whr_tolerance)
        and _near(r.bhr, 1.0, t.balance_tolerance)
        and (r.shr is None or _near(r.shr, 1.0, t.balance_tolerance))
    )


def _is_hourglass(ctx: ShapeContext) -> bool:
    r, t = ctx.ratios, ctx.thresholds
    return _near(r.bhr, 1.0, t.balance_tolerance) and _at_most(r.whr, t.hourglass_whr)


SHAPE_RULES: Tuple[ShapeRule, ...] = (
    ShapeRule(
        BodyShape.apple,
        _is_apple,
        lambda c: (
            f"Elevated central ratios (WHtR {_fmt(c.ratios.whtr)} / WHR {_fmt(c.ratios.whr)}) "
            "with upper-body dominance."
        ),
    ),
    ShapeRule(
        BodyShape.inverted_triangle,
        _is_inverted_triangle,
        lambda c: f"Shoulder or chest exceed hips (SHR {_fmt(c.ratios.shr)} / BHR {_fmt(c.ratios.bhr)}).",
    ),
    ShapeRule(
        BodyShape.pear,
        _is_pear,
        lambda c: f"Lower WHR ({_fmt(c.ratios.whr)}) with hips dominating shoulders.",
    ),
    ShapeRule(
        BodyShape.rectangle,
        _is_rectangle,
        lambda c: "Measurements closely aligned, suggesting even proportions.",
    ),
    ShapeRule(
        BodyShape.hourglass,
        _is_hourglass,
        lambda c: f"Balanced hips/shoulders with clearly smaller waist (WHR {_fmt(c.ratios.whr)}).",
    ),
)


def match_rule(ctx: ShapeContext, rules: Tuple[ShapeRule, ...] = SHAPE_RULES) -> Optional[ShapeRule]:
    for rule in rules:
        if rule.matches(ctx):
            return rule
    return None


# ==================== scoring ====================

def _mean_abs_deviation(deviations: List[Optional[float]]) -> float:
    valid = [abs(d) for d in deviations if d is not None]
    if not valid:
        return 1.0
    return min(1.0, sum(valid) / len(valid))


def score_shapes(ctx: ShapeContext) -> Dict[BodyShape, float]:
    """Raw (pre-softmax) score per shape."""
    r, t = ctx.ratios, ctx.thresholds

    apple = max(
        _relative_excess(r.whtr, t.central_whtr),
        _relative_excess(r.whr, ctx.whr_threshold),
    ) + (t.apple_upper_bonus if _upper_dominant(ctx) else 0.0)

    pear = (t.pear_primary_weight if _below(r.whr, t.pear_whr) else 0.0) + (
        t.pear_secondary_bonus if _hips_dominate(ctx) else 0.0
    )

    rectangle = 1.0 - _mean_abs_deviation(
        [
            r.bhr - 1.0 if r.bhr is not None else None,
            r.shr - 1.0 if r.shr is not None else None,
            r.whr - t.rectangle_whr if r.whr is not None else None,
        ]
    )

    inverted = max(
        _relative_excess(r.shr if r.shr is not None else 1.0, t.inverted_ratio),
        _relative_excess(r.bhr, t.inverted_ratio),
    )

    hourglass = (1.0 - abs(r.bhr - 1.0) if r.bhr is not None else 0.0) + (
        t.hourglass_waist_bonus if _at_most(r.whr, t.hourglass_whr) else 0.0
    )

    return {
        BodyShape.apple: apple,
        BodyShape.pear: pear,
        BodyShape.rectangle: rectangle,
        BodyShape.inverted_triangle: inverted,
        BodyShape.hourglass: hourglass,
    }


def softmax(scores: Mapping[K, float]) -> Dict[K, float]:
    """exp(score - max) normalized to sum to 1; keys keep their order."""
    labels = list(scores)
    if not labels:
        return {}
    values = np.array([scores[label] for label in labels], dtype=float)
    exponentials = np.exp(values - values.max())
    probabilities = exponentials / exponentials.sum()
    return {label: float(p) for label, p in zip(labels, probabilities)}


def rank_probabilities(probabilities: Mapping[BodyShape, float]) -> List[ShapeProbability]:
    ranked = sorted(probabilities.items(), key=lambda item: -item[1])
    return [ShapeProbability(shape=shape, probability=p) for shape, p in ranked]


# ==================== classifier ====================

_SHAPE_INPUTS = (BodyPart.waist, BodyPart.hip, BodyPart.chest)


def classify_body_shape(
    entry: SanitizedEntry,
    ratios: RatioSet,
    thresholds: ShapeThresholds = DEFAULT_THRESHOLDS.shape,
) -> ShapeResult:
    missing = [part.value for part in _SHAPE_INPUTS if entry.measurements.get(part.value) is None]
    if entry.body_stats.height_cm is None:
        missing.append("height")
    if missing:
        return ShapeResult(
            available=False,
            reason=f"Insufficient data to compute body-shape ratios (missing: {', '.join(missing)}).",
        )

    ctx = ShapeContext(
        ratios=ratios,
        whr_threshold=whr_threshold_for(entry.profile.gender, thresholds),
        thresholds=thresholds,
    )
    ranked = rank_probabilities(softmax(score_shapes(ctx)))

    rule = match_rule(ctx)
    if rule is not None:
        primary, reason = rule.shape, rule.explain(ctx)
    else:
        primary, reason = ranked[0].shape, TIE_BREAK_REASON

    logger.debug("Body shape %s (%s)", primary.value, reason)
    return ShapeResult(
        available=True,
        primary=primary,
        confidence=ranked[0].probability,
        reason=reason,
        probabilities=ranked,
    )
