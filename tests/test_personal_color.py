import unittest
from unittest.mock import patch

from src.beauty_engine import Season, SkinTone, Undertone, analyze_skin_tone, build_color_analysis, classify_from_metrics
from src.beauty_engine.personal_color import (
    OPPOSITE_SEASON,
    SEASON_PALETTES,
    SKIN_TONE_PALETTE,
    estimate_depth,
    skin_lab_metrics,
)


class ClassifyFromMetricsTests(unittest.TestCase):
    def test_warm_vs_cool(self) -> None:
        warm_metrics = {"L": 60.0, "a": 25.0, "b": 30.0, "ITA": 35.0}
        cool_metrics = {"L": 40.0, "a": -5.0, "b": -10.0, "ITA": 5.0}

        season, undertone = classify_from_metrics(warm_metrics)
        self.assertIs(undertone, Undertone.WARM)
        self.assertIs(season, Season.SPRING)

        season_cool, undertone_cool = classify_from_metrics(cool_metrics)
        self.assertIs(undertone_cool, Undertone.COOL)
        self.assertIs(season_cool, Season.WINTER)

    def test_ambiguous_angle_uses_b_star(self) -> None:
        self.assertEqual(
            classify_from_metrics({"L": 50.0, "a": 0.0, "b": 12.0, "ITA": 20.0}),
            (Season.AUTUMN, Undertone.WARM),
        )
        self.assertEqual(
            classify_from_metrics({"L": 70.0, "a": 0.0, "b": -6.0, "ITA": 20.0}),
            (Season.SUMMER, Undertone.COOL),
        )
        self.assertEqual(
            classify_from_metrics({"L": 70.0, "a": 0.0, "b": 1.0, "ITA": 20.0}),
            (Season.SUMMER, Undertone.NEUTRAL),
        )

    def test_palette_anchors_map_to_their_own_depth(self) -> None:
        for name, hex_color, depth in SKIN_TONE_PALETTE:
            with self.subTest(name=name):
                self.assertEqual(estimate_depth(hex_color), depth)

    def test_depth_spans_the_whole_scale(self) -> None:
        self.assertEqual(estimate_depth("#FFFFFF"), 1)
        self.assertEqual(estimate_depth("#000000"), 10)


class AnalyzeSkinToneTests(unittest.TestCase):
    def test_light_warm_skin(self) -> None:
        tone = analyze_skin_tone("#D4A574")

        self.assertEqual(tone.hex, "#d4a574")
        self.assertIs(tone.undertone, Undertone.WARM)
        self.assertIs(tone.season, Season.SPRING)
        self.assertEqual(tone.depth, 5)

    def test_deep_skin(self) -> None:
        tone = analyze_skin_tone("#3B2219")

        self.assertIs(tone.undertone, Undertone.COOL)
        self.assertIs(tone.season, Season.WINTER)
        self.assertGreaterEqual(tone.depth, 8)

    def test_lab_metrics(self) -> None:
        metrics = skin_lab_metrics("#ffffff")
        self.assertAlmostEqual(metrics["L"], 100.0, places=1)
        self.assertAlmostEqual(metrics["b"], 0.0, places=1)

    def test_flow_uses_lab_metrics(self) -> None:
        fake = {"L": 40.0, "a": 10.0, "b": 15.0, "ITA": -30.0}
        with patch("src.beauty_engine.personal_color.skin_lab_metrics", return_value=fake):
            tone = analyze_skin_tone("#8D5524")

        self.assertIs(tone.undertone, Undertone.COOL)
        self.assertIs(tone.season, Season.WINTER)


class ColorAnalysisTests(unittest.TestCase):
    def test_palette_for_season(self) -> None:
        tone = SkinTone(hex="#D4A574", undertone=Undertone.WARM, depth=3, season=Season.SPRING)
        analysis = build_color_analysis(tone, dominant_colors=["#D4A574"])
        palette = SEASON_PALETTES[Season.SPRING]
        opposite = SEASON_PALETTES[OPPOSITE_SEASON[Season.SPRING]]

        self.assertIs(analysis.season, Season.SPRING)
        self.assertEqual(analysis.dominant_colors, ["#D4A574"])
        self.assertEqual(sorted(analysis.recommended_colors.eyeshadow), sorted(palette["eyeshadow"]))
        self.assertEqual(sorted(analysis.recommended_colors.lipstick), sorted(palette["lipstick"]))
        self.assertEqual(analysis.recommended_colors.foundation[0], "#d4a574")
        self.assertEqual(len(analysis.recommended_colors.foundation), 3)
        self.assertEqual(analysis.colors_to_avoid[:3], opposite["lipstick"])

    def test_season_defaults_from_depth(self) -> None:
        light = SkinTone(hex="#F1D3C2", undertone=Undertone.COOL, depth=2)
        deep = SkinTone(hex="#5A3825", undertone=Undertone.WARM, depth=8)

        self.assertIs(build_color_analysis(light).season, Season.SUMMER)
        self.assertIs(build_color_analysis(deep).season, Season.AUTUMN)


if __name__ == "__main__":
    unittest.main()
