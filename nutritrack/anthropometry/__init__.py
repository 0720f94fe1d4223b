# -*- coding: utf-8 -*-
"""
Anthropometric classification

Validates body measurements, derives proportion ratios, classifies body shape
and somatotype, and suggests coaching tips.
"""

from .bodyparts import BodyPart, canonical_key
from .engine import classify, classify_raw, summarize_history
from .models import (
    AnalysisResult,
    BodyShape,
    Gender,
    HeathCarterResult,
    MeasurementEntry,
    RatioSet,
    SanitizedEntry,
    ShapeResult,
    SimplifiedResult,
)
from .preprocess import MeasurementValidationError, preprocess_entry, validate_entry
from .ratios import compute_ratios
from .shape import classify_body_shape
from .somatotype import classify_somatotype
from .thresholds import DEFAULT_THRESHOLDS, Thresholds
from .tips import DEFAULT_TIP_TABLES, TipTables, build_tips
from .units import UnitError, normalize_entry

__all__ = [
    'BodyPart',
    'canonical_key',
    'classify',
    'classify_raw',
    'summarize_history',
    'AnalysisResult',
    'BodyShape',
    'Gender',
    'HeathCarterResult',
    'MeasurementEntry',
    'RatioSet',
    'SanitizedEntry',
    'ShapeResult',
    'SimplifiedResult',
    'MeasurementValidationError',
    'preprocess_entry',
    'validate_entry',
    'compute_ratios',
    'classify_body_shape',
    'classify_somatotype',
    'DEFAULT_THRESHOLDS',
    'Thresholds',
    'DEFAULT_TIP_TABLES',
    'TipTables',
    'build_tips',
    'UnitError',
    'normalize_entry',
]
