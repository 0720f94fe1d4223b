# -*- coding: utf-8 -*-
"""Anthropometry — unit conversion and raw payload normalization."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .bodyparts import canonicalize_measurements, coerce_float
from .models import MeasurementEntry

logger = logging.getLogger(__name__)

_LENGTH_TO_CM = {
    "cm": 1.0,
    "mm": 0.1,
    "m": 100.0,
    "in": 2.54,
    "inch": 2.54,
    "inches": 2.54,
}

_MASS_TO_KG = {
    "kg": 1.0,
    "g": 0.001,
    "lb": 0.45359237,
    "lbs": 0.45359237,
}


class UnitError(ValueError):
    """Raised for a unit name that has no conversion factor."""


def _factor(unit: str, table: Mapping[str, float], kind: str) -> float:
    key = (unit or "").strip().lower()
    try:
        return table[key]
    except KeyError:
        raise UnitError(f"Unsupported {kind} unit: {unit!r} (expected one of {', '.join(table)})") from None


def to_centimeters(value: float, unit: str = "cm") -> float:
    return value * _factor(unit, _LENGTH_TO_CM, "length")


def to_kilograms(value: float, unit: str = "kg") -> float:
    return value * _factor(unit, _MASS_TO_KG, "mass")


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _convert(value: Any, factor: float) -> Optional[float]:
    number = coerce_float(value)
    return number * factor if number is not None else None


def normalize_entry(
    payload: Mapping[str, Any],
    *,
    length_unit: str = "cm",
    mass_unit: str = "kg",
) -> Tuple[MeasurementEntry, List[str]]:
    """Build a canonical MeasurementEntry from a loosely-typed payload.

    Height and body-part girths are converted with ``length_unit`` and weight
    with ``mass_unit``. Skinfolds (mm) and advanced girths/breadths (cm) are
    already in standard anthropometric units and pass through unchanged.

    Unrecognized body-part keys are dropped and reported as warnings instead of
    failing the whole entry. A section of the wrong shape (e.g. a list of
    measurements) raises pydantic.ValidationError.
    """
    length_factor = _factor(length_unit, _LENGTH_TO_CM, "length")
    mass_factor = _factor(mass_unit, _MASS_TO_KG, "mass")
    warnings: List[str] = []

    raw_stats = _pick(payload, "bodyStats", "body_stats") or {}
    body_stats: Any = raw_stats
    if isinstance(raw_stats, Mapping):
        body_stats = {
            "height_cm": _convert(_pick(raw_stats, "heightCm", "height_cm", "height"), length_factor),
            "weight_kg": _convert(_pick(raw_stats, "weightKg", "weight_kg", "weight"), mass_factor),
        }

    raw_measurements = _pick(payload, "measurements") or {}
    measurements: Any = raw_measurements
    if isinstance(raw_measurements, Mapping):
        canonical, unknown = canonicalize_measurements(raw_measurements)
        for key in unknown:
            warnings.append(f"Ignored unrecognized measurement '{key}'.")
        if unknown:
            logger.debug("Dropped unrecognized measurement keys: %s", unknown)
        measurements = {key: value * length_factor for key, value in canonical.items()}

    data: Dict[str, Any] = {
        "profile": _pick(payload, "profile") or {},
        "body_stats": body_stats,
        "measurements": measurements,
        "advanced": _pick(payload, "advanced"),
        "survey": _pick(payload, "survey"),
        "notes": _pick(payload, "notes"),
    }
    for field_name, keys in (
        ("id", ("id",)),
        ("recorded_at", ("recordedAt", "recorded_at")),
        ("label", ("label",)),
        ("source", ("source",)),
    ):
        value = _pick(payload, *keys)
        if value is not None:
            data[field_name] = str(value)

    return MeasurementEntry.model_validate(data), warnings
