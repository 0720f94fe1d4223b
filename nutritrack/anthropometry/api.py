# -*- coding: utf-8 -*-
"""Anthropometry — API endpoints."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List

import pandas as pd
from fastapi import APIRouter, HTTPException, Path, Query
from pydantic import BaseModel, Field, ValidationError

from ..config import settings
from .engine import classify, classify_raw, summarize_history
from .models import AnalysisResult, MeasurementEntry
from .storage import clear_entries, get_entries, get_entry, save_entry
from .units import UnitError, normalize_entry

router = APIRouter(prefix="/api/anthropometry", tags=["Anthropometry"])

_ID_PATTERN = r"^[A-Za-z0-9_\-][A-Za-z0-9_.\-]{0,127}$"
_SAFE_ID = re.compile(_ID_PATTERN)


# ==================== request/response models ====================

class ClassifyRequest(BaseModel):
    entry: Dict[str, Any] = Field(..., description="Measurement entry (camelCase or snake_case keys)")
    length_unit: str = Field(default_factory=lambda: settings.default_length_unit, description="cm | mm | m | in")
    mass_unit: str = Field(default_factory=lambda: settings.default_mass_unit, description="kg | g | lb")


class SaveEntryResponse(BaseModel):
    entry_id: str
    saved_at: str
    warnings: List[str] = []


class HistoryResponse(BaseModel):
    subject_id: str
    count: int
    entries: List[MeasurementEntry]


class HistorySummaryResponse(BaseModel):
    subject_id: str
    rows: List[Dict[str, Any]]


class ClearHistoryResponse(BaseModel):
    subject_id: str
    removed: int


def _normalize_or_400(request: ClassifyRequest) -> tuple[MeasurementEntry, List[str]]:
    try:
        return normalize_entry(request.entry, length_unit=request.length_unit, mass_unit=request.mass_unit)
    except UnitError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid measurement entry: {exc}") from exc


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # NaN is not valid JSON
    return df.astype(object).where(pd.notna(df), None).to_dict(orient="records")


# ==================== endpoints ====================

@router.post("/classify", response_model=AnalysisResult, summary="Classify body shape and somatotype (no storage)")
def classify_entry(request: ClassifyRequest):
    try:
        return classify_raw(
            request.entry,
            length_unit=request.length_unit,
            mass_unit=request.mass_unit,
            max_tips=settings.max_tips,
        )
    except UnitError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid measurement entry: {exc}") from exc


@router.post("/history/{subject_id}", response_model=SaveEntryResponse, summary="Store a measurement entry")
def create_history_entry(
    request: ClassifyRequest,
    subject_id: str = Path(..., pattern=_ID_PATTERN),
):
    entry, warnings = _normalize_or_400(request)
    if not _SAFE_ID.match(entry.id):
        raise HTTPException(status_code=400, detail=f"Invalid entry id: {entry.id!r}")
    try:
        save_entry(subject_id, entry)
    except OSError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to save entry: {exc}") from exc
    return SaveEntryResponse(
        entry_id=entry.id,
        saved_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        warnings=warnings,
    )


@router.get("/history/{subject_id}", response_model=HistoryResponse, summary="List measurement entries")
def list_history(
    subject_id: str = Path(..., pattern=_ID_PATTERN),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
):
    entries = get_entries(subject_id)
    return HistoryResponse(subject_id=subject_id, count=len(entries), entries=entries[offset : offset + limit])


@router.get(
    "/history/{subject_id}/summary",
    response_model=HistorySummaryResponse,
    summary="Key ratios and labels for every stored entry",
)
def history_summary(subject_id: str = Path(..., pattern=_ID_PATTERN)):
    df = summarize_history(get_entries(subject_id))
    return HistorySummaryResponse(subject_id=subject_id, rows=_records(df))


@router.get(
    "/history/{subject_id}/{entry_id}/analysis",
    response_model=AnalysisResult,
    summary="Classify a stored entry",
)
def analyse_history_entry(
    subject_id: str = Path(..., pattern=_ID_PATTERN),
    entry_id: str = Path(..., pattern=_ID_PATTERN),
):
    entry = get_entry(subject_id, entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Measurement entry not found: {entry_id}")
    return classify(entry, max_tips=settings.max_tips)


@router.delete("/history/{subject_id}", response_model=ClearHistoryResponse, summary="Clear measurement history")
def clear_history(subject_id: str = Path(..., pattern=_ID_PATTERN)):
    return ClearHistoryResponse(subject_id=subject_id, removed=clear_entries(subject_id))
