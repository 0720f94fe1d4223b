# -*- coding: utf-8 -*-
"""
Anthropometry — classification entry points.

``classify`` runs the full pipeline for one MeasurementEntry:
preprocess -> ratios -> {shape, somatotype} -> tips. Every stage is a pure
function, so calls for different entries can run concurrently.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping

import pandas as pd

from .models import AnalysisResult, MeasurementEntry, ShapeResult
from .preprocess import preprocess_entry
from .ratios import compute_ratios
from .shape import classify_body_shape
from .somatotype import classify_somatotype
from .thresholds import DEFAULT_THRESHOLDS, Thresholds
from .tips import DEFAULT_TIP_TABLES, TipTables, build_tips
from .units import normalize_entry

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    "id",
    "label",
    "recorded_at",
    "gender",
    "age",
    "height_cm",
    "weight_kg",
    "bmi",
    "WHR",
    "WHtR",
    "SHR",
    "shape",
    "somatotype",
]


def classify(
    entry: MeasurementEntry,
    *,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    tip_tables: TipTables = DEFAULT_TIP_TABLES,
    max_tips: int = 6,
) -> AnalysisResult:
    preprocessing = preprocess_entry(entry, thresholds.ranges)
    if preprocessing.errors:
        logger.info("Entry %s not classified: %s", entry.id, " ".join(preprocessing.errors))
        return AnalysisResult(
            preprocessing=preprocessing,
            ratios=None,
            shape=ShapeResult(available=False, reason=" ".join(preprocessing.errors)),
            somatotype=None,
            tips=[],
        )

    sanitized = preprocessing.sanitized
    ratios = compute_ratios(sanitized)
    shape = classify_body_shape(sanitized, ratios, thresholds.shape)
    somatotype = classify_somatotype(sanitized, ratios, thresholds.somatotype)
    tips = build_tips(shape if shape.available else None, somatotype, tip_tables, limit=max_tips)

    logger.debug(
        "Entry %s: ratios=%s shape=%s somatotype=%s (%s)",
        entry.id,
        ratios.model_dump(by_alias=True),
        shape.primary,
        somatotype.label,
        somatotype.method,
    )
    return AnalysisResult(
        preprocessing=preprocessing,
        ratios=ratios,
        shape=shape,
        somatotype=somatotype,
        tips=tips,
    )


def classify_raw(
    payload: Mapping[str, Any],
    *,
    length_unit: str = "cm",
    mass_unit: str = "kg",
    **options: Any,
) -> AnalysisResult:
    """Normalize a raw payload (any supported units) and classify it.

    Warnings from normalization (e.g. ignored keys) precede the preprocessing warnings.
    """
    entry, warnings = normalize_entry(payload, length_unit=length_unit, mass_unit=mass_unit)
    result = classify(entry, **options)
    if not warnings:
        return result
    preprocessing = result.preprocessing.model_copy(
        update={"warnings": warnings + result.preprocessing.warnings}
    )
    return result.model_copy(update={"preprocessing": preprocessing})


def summarize_history(
    entries: Iterable[MeasurementEntry],
    *,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> pd.DataFrame:
    """One row per entry with its key ratios and labels, newest first."""
    rows: List[dict] = []
    for entry in entries:
        result = classify(entry, thresholds=thresholds)
        stats = result.preprocessing.sanitized.body_stats
        ratios = result.ratios
        rows.append(
            {
                "id": entry.id,
                "label": entry.label,
                "recorded_at": entry.recorded_at,
                "gender": entry.profile.gender.value,
                "age": entry.profile.age,
                "height_cm": entry.body_stats.height_cm,
                "weight_kg": entry.body_stats.weight_kg,
                "bmi": stats.bmi,
                "WHR": ratios.whr if ratios else None,
                "WHtR": ratios.whtr if ratios else None,
                "SHR": ratios.shr if ratios else None,
                "shape": result.shape.primary.value if result.shape.primary else None,
                "somatotype": result.somatotype.label if result.somatotype else None,
            }
        )

    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    if df.empty:
        return df
    order = pd.to_datetime(df["recorded_at"], utc=True, errors="coerce", format="ISO8601")
    df = df.assign(_order=order).sort_values("_order", ascending=False, na_position="last", kind="stable")
    return df.drop(columns="_order").reset_index(drop=True)
