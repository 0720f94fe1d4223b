# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient


def _entry(entry_id: str, recorded_at: str, **measurements) -> dict:
    values = {"waist": 95, "hip": 95, "chest": 100, "shoulder": 105}
    values.update(measurements)
    return {
        "id": entry_id,
        "recordedAt": recorded_at,
        "label": "Morning check-in",
        "profile": {"gender": "female", "age": 41},
        "bodyStats": {"heightCm": 170, "weightKg": 80},
        "measurements": values,
    }


class TestAnthropometryApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="nutritrack-test-"))
        os.environ["NUTRITRACK_DATA_ROOT"] = str(cls._tmp / "data")

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name == "nutritrack" or name.startswith("nutritrack."):
                sys.modules.pop(name, None)

        from nutritrack.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        os.environ.pop("NUTRITRACK_DATA_ROOT", None)
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def test_logging_configured_only_by_run(self) -> None:
        sys.modules.pop("nutritrack.api", None)
        with mock.patch("logging.basicConfig") as basic_config:
            import nutritrack.api as api_module  # noqa: WPS433

            basic_config.assert_not_called()
            with mock.patch("uvicorn.run") as uvicorn_run:
                api_module.run()
            basic_config.assert_called_once()
            uvicorn_run.assert_called_once()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_classify_imperial_units(self) -> None:
        resp = self.client.post(
            "/api/anthropometry/classify",
            json={
                "entry": {
                    "bodyStats": {"heightCm": 67, "weightKg": 176},
                    "measurements": {"Waist": 37.5, "Hips": 37.5, "Chest": 39.5, "Shoulders": 41, "elbow": 10},
                },
                "length_unit": "in",
                "mass_unit": "lb",
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertTrue(body["shape"]["available"])
        self.assertEqual(body["shape"]["primary"], "Apple")
        self.assertEqual(len(body["shape"]["probabilities"]), 5)
        self.assertEqual(body["preprocessing"]["warnings"], ["Ignored unrecognized measurement 'elbow'."])
        self.assertIn("WHtR", body["ratios"])
        self.assertEqual(body["somatotype"]["method"], "Simplified")
        self.assertLessEqual(len(body["tips"]), 6)

    def test_classify_reports_hard_errors(self) -> None:
        entry = _entry("x", "2024-01-01T00:00:00Z")
        del entry["measurements"]["hip"]
        resp = self.client.post("/api/anthropometry/classify", json={"entry": entry})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertFalse(body["shape"]["available"])
        self.assertIn("hip", body["shape"]["reason"])
        self.assertIsNone(body["ratios"])
        self.assertIsNone(body["somatotype"])

    def test_classify_rejects_unknown_unit(self) -> None:
        resp = self.client.post(
            "/api/anthropometry/classify",
            json={"entry": _entry("x", "2024-01-01T00:00:00Z"), "length_unit": "furlong"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("furlong", resp.json()["detail"])

    def test_classify_rejects_malformed_entry(self) -> None:
        entry = _entry("x", "2024-01-01T00:00:00Z")
        entry["notes"] = "not a mapping"
        resp = self.client.post("/api/anthropometry/classify", json={"entry": entry})
        self.assertEqual(resp.status_code, 422)

    def test_measurements_list_is_rejected(self) -> None:
        entry = _entry("x", "2024-01-01T00:00:00Z")
        entry["measurements"] = [95, 95, 100]
        resp = self.client.post("/api/anthropometry/classify", json={"entry": entry})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post("/api/anthropometry/history/subject-3", json={"entry": entry})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.client.get("/api/anthropometry/history/subject-3").json()["count"], 0)

    def test_history_lifecycle(self) -> None:
        base = "/api/anthropometry/history/subject-1"
        for entry in (
            _entry("e1", "2024-02-01T08:00:00Z"),
            _entry("e2", "2024-03-01T08:00:00Z", waist=70, hip=100, chest=84, shoulder=88),
        ):
            resp = self.client.post(base, json={"entry": entry})
            self.assertEqual(resp.status_code, 200, resp.text)
            self.assertEqual(resp.json()["entry_id"], entry["id"])

        resp = self.client.get(base)
        self.assertEqual(resp.status_code, 200)
        listing = resp.json()
        self.assertEqual(listing["count"], 2)
        self.assertEqual([e["id"] for e in listing["entries"]], ["e2", "e1"])
        self.assertEqual(listing["entries"][0]["bodyStats"]["heightCm"], 170.0)

        resp = self.client.get(f"{base}/e2/analysis")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["shape"]["primary"], "Pear")

        resp = self.client.get(f"{base}/missing/analysis")
        self.assertEqual(resp.status_code, 404)

        resp = self.client.get(f"{base}/summary")
        self.assertEqual(resp.status_code, 200)
        rows = resp.json()["rows"]
        self.assertEqual([row["id"] for row in rows], ["e2", "e1"])
        self.assertEqual(rows[1]["shape"], "Apple")
        self.assertEqual(rows[1]["WHR"], 1.0)

        resp = self.client.delete(base)
        self.assertEqual(resp.json()["removed"], 2)
        self.assertEqual(self.client.get(base).json()["count"], 0)

    def test_unsafe_ids_are_rejected(self) -> None:
        resp = self.client.get("/api/anthropometry/history/bad$id")
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post(
            "/api/anthropometry/history/subject-2",
            json={"entry": _entry("../escape", "2024-01-01T00:00:00Z")},
        )
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
