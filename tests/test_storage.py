# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path

from nutritrack.anthropometry.engine import summarize_history
from nutritrack.anthropometry.models import MeasurementEntry
from nutritrack.anthropometry.storage import clear_entries, get_entries, get_entry, save_entry


def _entry(entry_id: str, recorded_at: str) -> MeasurementEntry:
    return MeasurementEntry.model_validate(
        {
            "id": entry_id,
            "recordedAt": recorded_at,
            "bodyStats": {"heightCm": 170, "weightKg": 70},
            "measurements": {"waist": 80, "hip": 98, "chest": 94},
        }
    )


class TestMeasurementStorage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="nutritrack-storage-"))
        self.root = self._tmp / "measurements"

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_save_and_get(self) -> None:
        save_entry("s1", _entry("e1", "2024-01-01T08:00:00Z"), data_root=self.root)
        loaded = get_entry("s1", "e1", data_root=self.root)
        self.assertEqual(loaded, _entry("e1", "2024-01-01T08:00:00Z"))
        self.assertIsNone(get_entry("s1", "nope", data_root=self.root))

    def test_mixed_offsets_sort_by_instant(self) -> None:
        # 09:00+02:00 is 07:00 UTC, earlier than 08:00Z despite sorting later as text
        save_entry("s1", _entry("plus-two", "2024-03-01T09:00:00+02:00"), data_root=self.root)
        save_entry("s1", _entry("utc", "2024-03-01T08:00:00Z"), data_root=self.root)
        save_entry("s1", _entry("offset-zero", "2024-02-28T23:00:00+00:00"), data_root=self.root)
        save_entry("s1", _entry("garbled", "not a timestamp"), data_root=self.root)

        entries = get_entries("s1", data_root=self.root)
        ids = [e.id for e in entries]
        self.assertEqual(ids, ["utc", "plus-two", "offset-zero", "garbled"])
        self.assertEqual(summarize_history(entries)["id"].tolist(), ids)

    def test_unreadable_files_are_skipped(self) -> None:
        save_entry("s1", _entry("ok", "2024-01-01T08:00:00Z"), data_root=self.root)
        (self.root / "broken.json").write_text("{not json", encoding="utf-8")
        with self.assertLogs("nutritrack.anthropometry.storage", level="WARNING"):
            entries = get_entries("s1", data_root=self.root)
        self.assertEqual([e.id for e in entries], ["ok"])

    def test_clear(self) -> None:
        save_entry("s1", _entry("a", "2024-01-01T08:00:00Z"), data_root=self.root)
        save_entry("s1", _entry("b", "2024-01-02T08:00:00Z"), data_root=self.root)
        self.assertEqual(clear_entries("s1", data_root=self.root), 2)
        self.assertEqual(get_entries("s1", data_root=self.root), [])
        self.assertEqual(clear_entries("s1", data_root=self.root), 0)


if __name__ == "__main__":
    unittest.main()
