# -*- coding: utf-8 -*-
"""Anthropometry — Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .bodyparts import canonicalize_measurements, coerce_float


class _Record(BaseModel):
    # Payloads arrive camelCase from the web client; Python callers use field names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def _positive_or_none(value: object) -> Optional[float]:
    number = coerce_float(value)
    if number is None or number <= 0:
        return None
    return number


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


# ==================== Input ====================

class Gender(str, Enum):
    female = "female"
    male = "male"
    non_binary = "non-binary"
    unspecified = "unspecified"


class BoneStructure(str, Enum):
    narrow = "narrow"
    medium = "medium"
    broad = "broad"


class BodyShape(str, Enum):
    apple = "Apple"
    pear = "Pear"
    rectangle = "Rectangle"
    inverted_triangle = "Inverted Triangle"
    hourglass = "Hourglass"


class Profile(_Record):
    gender: Gender = Gender.unspecified
    age: Optional[int] = Field(None, gt=0)

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, value: object) -> Gender:
        if isinstance(value, Gender):
            return value
        if not isinstance(value, str):
            return Gender.unspecified
        key = value.strip().lower().replace("_", "-").replace(" ", "-")
        if key == "nonbinary":
            key = Gender.non_binary.value
        try:
            return Gender(key)
        except ValueError:
            return Gender.unspecified

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: object) -> Optional[int]:
        number = _positive_or_none(value)
        return int(number) if number is not None else None


class BodyStats(_Record):
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None

    @field_validator("height_cm", "weight_kg", mode="before")
    @classmethod
    def _coerce_positive(cls, value: object) -> Optional[float]:
        return _positive_or_none(value)


class _PositiveFields(_Record):
    @field_validator("*", mode="before")
    @classmethod
    def _coerce_positive(cls, value: object) -> Optional[float]:
        return _positive_or_none(value)


class Skinfolds(_PositiveFields):
    """Skinfold thicknesses in millimeters."""
    triceps: Optional[float] = None
    subscapular: Optional[float] = None
    supraspinale: Optional[float] = None
    calf: Optional[float] = None


class Circumferences(_PositiveFields):
    """Girths in centimeters."""
    flexed_arm: Optional[float] = None
    calf: Optional[float] = None
    thigh: Optional[float] = None


class BoneBreadths(_PositiveFields):
    """Biepicondylar breadths in centimeters."""
    humerus: Optional[float] = None
    femur: Optional[float] = None


class AdvancedData(_Record):
    skinfolds: Optional[Skinfolds] = None
    circumferences: Optional[Circumferences] = None
    bone_breadths: Optional[BoneBreadths] = None


class Survey(_Record):
    gain_fat_easily: bool = False
    gain_muscle_easily: bool = False
    hard_to_gain_weight: bool = False
    bone_structure: Optional[BoneStructure] = None

    @field_validator("gain_fat_easily", "gain_muscle_easily", "hard_to_gain_weight", mode="before")
    @classmethod
    def _coerce_flag(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "y"}
        return bool(value)

    @field_validator("bone_structure", mode="before")
    @classmethod
    def _coerce_bone_structure(cls, value: object) -> Optional[BoneStructure]:
        if isinstance(value, BoneStructure):
            return value
        if not isinstance(value, str):
            return None
        try:
            return BoneStructure(value.strip().lower())
        except ValueError:
            return None


class MeasurementEntry(_Record):
    """A single measurement record. Immutable once constructed.

    Freezing is shallow: ``measurements`` is a plain dict so it serializes as
    JSON, and callers must treat it as read-only. The pipeline only reads it
    and builds new dicts for sanitized values.
    """

    id: str = Field(default_factory=lambda: f"entry-{uuid4().hex[:8]}")
    recorded_at: str = Field(default_factory=_utc_now_iso, description="ISO8601 timestamp")
    label: str = "Measurement"
    source: str = "Unknown"
    profile: Profile = Field(default_factory=Profile)
    body_stats: BodyStats = Field(default_factory=BodyStats)
    measurements: Dict[str, float] = Field(
        default_factory=dict,
        description="Body-part circumferences in cm keyed by canonical body part (waist, hip, leftArm, ...)",
    )
    advanced: Optional[AdvancedData] = None
    survey: Optional[Survey] = None
    notes: Optional[Dict[str, Any]] = None

    @field_validator("measurements", mode="before")
    @classmethod
    def _canonical_measurements(cls, value: object) -> Dict[str, float]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("measurements must be a mapping of body part to centimeters")
        canonical, unknown = canonicalize_measurements(value)
        if unknown:
            raise ValueError(f"Unrecognized body-part keys: {', '.join(sorted(unknown))}")
        return canonical


# ==================== Derived ====================

class SanitizedBodyStats(_Record):
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    bmi: Optional[float] = None


class SanitizedEntry(_Record):
    profile: Profile = Field(default_factory=Profile)
    body_stats: SanitizedBodyStats = Field(default_factory=SanitizedBodyStats)
    measurements: Dict[str, float] = Field(default_factory=dict)
    advanced: Optional[AdvancedData] = None
    survey: Optional[Survey] = None


class MeasurementValidationError(ValueError):
    """An entry cannot be classified; ``errors`` lists every hard error."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__(" ".join(errors))
        self.errors = list(errors)


class PreprocessResult(_Record):
    sanitized: SanitizedEntry
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> SanitizedEntry:
        """Return the sanitized entry, or raise MeasurementValidationError on any hard error."""
        if self.errors:
            raise MeasurementValidationError(self.errors)
        return self.sanitized


class RatioSet(_Record):
    whr: Optional[float] = Field(None, alias="WHR", description="waist / hip")
    whtr: Optional[float] = Field(None, alias="WHtR", description="waist / height")
    shr: Optional[float] = Field(None, alias="SHR", description="shoulder / hip")
    bhr: Optional[float] = Field(None, alias="BHR", description="chest / hip")
    swr: Optional[float] = Field(None, alias="SWR", description="shoulder / waist")


class ShapeProbability(_Record):
    shape: BodyShape
    probability: float = Field(..., ge=0, le=1)


class ShapeResult(_Record):
    available: bool
    primary: Optional[BodyShape] = None
    confidence: Optional[float] = Field(None, ge=0, le=1)
    reason: str = ""
    probabilities: List[ShapeProbability] = Field(default_factory=list)


class RankedShare(_Record):
    label: str
    value: float


class SomatotypeTriplet(_Record):
    endomorphy: float = Field(..., ge=0)
    mesomorphy: float = Field(..., ge=0)
    ectomorphy: float = Field(..., ge=0)


class HeathCarterResult(_Record):
    method: Literal["Heath-Carter"] = "Heath-Carter"
    label: str
    scores: Dict[str, float]
    ranking: List[RankedShare]
    triplet: SomatotypeTriplet
    notes: str = "Exact Heath-Carter somatotype calculated from full anthropometric data."


class SimplifiedResult(_Record):
    method: Literal["Simplified"] = "Simplified"
    label: str
    scores: Dict[str, float]
    ranking: List[RankedShare]
    points: Dict[str, int]
    notes: str = "Simplified somatotype estimation using core ratios and survey cues."


SomatotypeResult = Annotated[Union[HeathCarterResult, SimplifiedResult], Field(discriminator="method")]


class AnalysisResult(_Record):
    preprocessing: PreprocessResult
    ratios: Optional[RatioSet] = None
    shape: ShapeResult
    somatotype: Optional[SomatotypeResult] = None
    tips: List[str] = Field(default_factory=list)
