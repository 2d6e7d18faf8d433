import itertools
import unittest

from src.beauty_engine import color_math
from src.beauty_engine.color_math import (
    BLACK,
    RGB,
    generate_color_palette,
    get_analogous_colors,
    get_color_temperature,
    get_complementary_color,
    get_contrast_ratio,
    hex_to_rgb,
    hsl_to_rgb,
    is_light_color,
    is_valid_hex,
    parse_hex,
    rgb_to_hex,
    rgb_to_hsl,
    round_half_up,
)
from src.beauty_engine.models import Undertone

SAMPLE_HEXES = ["#D4A574", "#ff8040", "#3366CC", "#20b2aa", "#8B008B", "#000000", "#FFFFFF", "#7f7f7f"]


def _hue_distance(a: float, b: float) -> float:
    d = abs(a - b) % 360
    return min(d, 360 - d)


class HexParsingTests(unittest.TestCase):
    def test_hex_round_trip_is_case_normalised(self) -> None:
        for value in range(0, 0xFFFFFF + 1, 0x010203):
            hex_upper = f"#{value:06X}"
            self.assertEqual(rgb_to_hex(*hex_to_rgb(hex_upper)), hex_upper.lower())

    def test_hash_prefix_is_optional(self) -> None:
        self.assertEqual(hex_to_rgb("ff8000"), RGB(255, 128, 0))
        self.assertEqual(hex_to_rgb("#FF8000"), RGB(255, 128, 0))

    def test_malformed_input_falls_back_to_black(self) -> None:
        for bad in ["#FFF", "zzzzzz", "", "#1234567", "##123456", "#12345g", "#123456\n", None]:
            self.assertEqual(hex_to_rgb(bad), BLACK, bad)

    def test_strict_parser_raises(self) -> None:
        with self.assertRaises(ValueError):
            parse_hex("#abc")
        with self.assertRaises(ValueError):
            parse_hex(None)
        self.assertTrue(is_valid_hex("#AbCdEf"))
        self.assertFalse(is_valid_hex("#AbCdE"))

    def test_rgb_to_hex_pads_channels(self) -> None:
        self.assertEqual(rgb_to_hex(0, 10, 255), "#000aff")


class HslConversionTests(unittest.TestCase):
    def test_primary_colors(self) -> None:
        hsl = rgb_to_hsl(255, 0, 0)
        self.assertAlmostEqual(hsl.h, 0.0)
        self.assertAlmostEqual(hsl.s, 100.0)
        self.assertAlmostEqual(hsl.l, 50.0)
        self.assertAlmostEqual(rgb_to_hsl(0, 0, 255).h, 240.0)

    def test_achromatic_has_zero_hue_and_saturation(self) -> None:
        for k in (0, 1, 127, 128, 254, 255):
            hsl = rgb_to_hsl(k, k, k)
            self.assertEqual(hsl.h, 0)
            self.assertEqual(hsl.s, 0)
            self.assertAlmostEqual(hsl.l, k / 255 * 100)

    def test_round_trip_within_one_per_channel(self) -> None:
        for r, g, b in itertools.product(range(0, 256, 17), repeat=3):
            back = hsl_to_rgb(*rgb_to_hsl(r, g, b))
            for original, restored in zip((r, g, b), back):
                self.assertLessEqual(abs(original - restored), 1, (r, g, b, back))
                self.assertTrue(0 <= restored <= 255)

    def test_rounding_goes_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(67.5), 68)
        self.assertEqual(round_half_up(62.75), 63)
        self.assertEqual(round_half_up(-2.5), -2)


class DerivedPropertyTests(unittest.TestCase):
    def test_temperature_bands(self) -> None:
        self.assertEqual(get_color_temperature("#ff0000"), Undertone.WARM)
        self.assertEqual(get_color_temperature("#ff0080"), Undertone.WARM)  # ~330
        self.assertEqual(get_color_temperature("#80ff00"), Undertone.NEUTRAL)  # ~90
        self.assertEqual(get_color_temperature("#00ffff"), Undertone.COOL)
        self.assertEqual(get_color_temperature("#0000ff"), Undertone.COOL)
        # achromatic colors have hue 0
        self.assertEqual(get_color_temperature("#808080"), Undertone.WARM)

    def test_complementary_color(self) -> None:
        self.assertEqual(get_complementary_color("#ff0000"), "#00ffff")
        for hex_color in ["#D4A574", "#3366cc", "#ff8040", "#20b2aa"]:
            twice = get_complementary_color(get_complementary_color(hex_color))
            original_h = rgb_to_hsl(*hex_to_rgb(hex_color)).h
            restored_h = rgb_to_hsl(*hex_to_rgb(twice)).h
            self.assertLess(_hue_distance(original_h, restored_h), 2.0, hex_color)

    def test_analogous_colors_are_thirty_degrees_apart(self) -> None:
        first, second = get_analogous_colors("#ff0000")
        self.assertLess(_hue_distance(rgb_to_hsl(*hex_to_rgb(first)).h, 30), 1.0)
        self.assertLess(_hue_distance(rgb_to_hsl(*hex_to_rgb(second)).h, 330), 1.0)
        self.assertEqual(len(get_analogous_colors("#3366cc")), 2)

    def test_contrast_ratio(self) -> None:
        self.assertAlmostEqual(get_contrast_ratio("#ffffff", "#000000"), 21.0)
        for a, b in itertools.product(SAMPLE_HEXES, repeat=2):
            self.assertEqual(get_contrast_ratio(a, b), get_contrast_ratio(b, a))
        for a in SAMPLE_HEXES:
            self.assertEqual(get_contrast_ratio(a, a), 1.0)

    def test_contrast_ratio_matches_wcag_reference(self) -> None:
        # #777777 on white is the classic 4.48:1 example
        self.assertAlmostEqual(get_contrast_ratio("#777777", "#ffffff"), 4.48, places=2)

    def test_light_color_threshold_is_exclusive(self) -> None:
        self.assertTrue(is_light_color("#ffffff"))
        self.assertFalse(is_light_color("#000000"))
        self.assertFalse(is_light_color("#808080"))
        self.assertTrue(is_light_color("#818181"))


class PaletteTests(unittest.TestCase):
    def test_lightness_sweep(self) -> None:
        palette = generate_color_palette("#FF0000")
        self.assertEqual(palette, ["#000000", "#800000", "#ff0000", "#ff8080", "#ffffff"])

    def test_two_samples_are_black_and_white(self) -> None:
        self.assertEqual(generate_color_palette("#3366cc", 2), ["#000000", "#ffffff"])

    def test_single_sample_returns_base(self) -> None:
        self.assertEqual(generate_color_palette("#FF0000", 1), ["#ff0000"])

    def test_non_positive_count_is_rejected(self) -> None:
        for count in (0, -3):
            with self.assertRaises(ValueError):
                generate_color_palette("#ff0000", count)

    def test_module_exports(self) -> None:
        for name in color_math.__all__:
            self.assertTrue(hasattr(color_math, name), name)


if __name__ == "__main__":
    unittest.main()
