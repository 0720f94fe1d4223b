# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from nutritrack.anthropometry.models import BodyShape, RankedShare, ShapeResult, SimplifiedResult
from nutritrack.anthropometry.tips import SHAPE_TIPS, SOMATOTYPE_TIPS, TipTables, build_tips


def _somatotype(label: str, *ranking: str) -> SimplifiedResult:
    shares = [RankedShare(label=name, value=1.0 / len(ranking)) for name in ranking]
    return SimplifiedResult(
        label=label,
        scores={share.label: share.value for share in shares},
        ranking=shares,
        points={name: 1 for name in ranking},
    )


class TestBuildTips(unittest.TestCase):
    def test_shape_then_top_two_components(self) -> None:
        shape = ShapeResult(available=True, primary=BodyShape.pear, confidence=0.6, reason="")
        tips = build_tips(shape, _somatotype("Endomorph-Mesomorph blend", "Endomorph", "Mesomorph", "Ectomorph"))
        self.assertEqual(len(tips), 6)
        self.assertEqual(tips[:3], list(SHAPE_TIPS["Pear"]))
        self.assertEqual(tips[3:], list(SOMATOTYPE_TIPS["Endomorph"]))

    def test_limit(self) -> None:
        shape = ShapeResult(available=True, primary=BodyShape.apple)
        tips = build_tips(shape, _somatotype("Ectomorph dominant", "Ectomorph", "Mesomorph"), limit=4)
        self.assertEqual(len(tips), 4)
        self.assertEqual(tips[3], SOMATOTYPE_TIPS["Ectomorph"][0])

    def test_fallback_when_nothing_matches(self) -> None:
        self.assertEqual(build_tips(None, None), list(SOMATOTYPE_TIPS["Balanced"]))
        unavailable = ShapeResult(available=False, reason="missing hip")
        self.assertEqual(build_tips(unavailable, None), list(SOMATOTYPE_TIPS["Balanced"]))

    def test_ranking_labels_with_suffix(self) -> None:
        tips = build_tips(None, _somatotype("Mesomorph dominant", "Mesomorph dominant"))
        self.assertEqual(tips, list(SOMATOTYPE_TIPS["Mesomorph"]))

    def test_duplicates_are_dropped(self) -> None:
        tables = TipTables(
            shape={"Hourglass": ("Lift heavy.", "Sleep well.")},
            somatotype={"Mesomorph": ("Sleep well.", "Eat protein."), "Balanced": ("Rest.",)},
        )
        shape = ShapeResult(available=True, primary=BodyShape.hourglass)
        tips = build_tips(shape, _somatotype("Mesomorph dominant", "Mesomorph"), tables)
        self.assertEqual(tips, ["Lift heavy.", "Sleep well.", "Eat protein."])


if __name__ == "__main__":
    unittest.main()
