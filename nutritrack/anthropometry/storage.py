# -*- coding: utf-8 -*-
"""Anthropometry — JSON file storage for measurement history."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..config import settings
from .models import MeasurementEntry

logger = logging.getLogger(__name__)


def _data_root_for(subject_id: str) -> Path:
    return settings.data_root / "users" / subject_id / "measurements"


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def save_entry(
    subject_id: str,
    entry: MeasurementEntry,
    data_root: Path | None = None,
) -> str:
    root = data_root or _data_root_for(subject_id)
    _ensure_dir(root)
    fp = root / f"{entry.id}.json"
    fp.write_text(entry.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return entry.id


def _recorded_at_key(entry: MeasurementEntry) -> datetime:
    """Parsed UTC timestamp for ordering; naive values count as UTC, unparseable ones sort last."""
    try:
        parsed = datetime.fromisoformat(entry.recorded_at.strip().replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _load(fp: Path) -> Optional[MeasurementEntry]:
    try:
        raw = json.loads(fp.read_text(encoding="utf-8"))
        return MeasurementEntry.model_validate(raw)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Skipping unreadable measurement entry %s: %s", fp, exc)
        return None


def get_entries(subject_id: str, data_root: Path | None = None) -> List[MeasurementEntry]:
    """All stored entries for a subject, newest ``recorded_at`` first."""
    root = data_root or _data_root_for(subject_id)
    if not root.exists():
        return []

    entries: List[MeasurementEntry] = []
    for fp in sorted(root.glob("*.json")):
        entry = _load(fp)
        if entry is not None:
            entries.append(entry)
    entries.sort(key=_recorded_at_key, reverse=True)
    return entries


def get_entry(
    subject_id: str,
    entry_id: str,
    data_root: Path | None = None,
) -> Optional[MeasurementEntry]:
    root = data_root or _data_root_for(subject_id)
    fp = root / f"{entry_id}.json"
    if not fp.exists():
        return None
    return _load(fp)


def clear_entries(subject_id: str, data_root: Path | None = None) -> int:
    root = data_root or _data_root_for(subject_id)
    if not root.exists():
        return 0
    removed = 0
    for fp in root.glob("*.json"):
        fp.unlink()
        removed += 1
    return removed
