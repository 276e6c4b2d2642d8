"""Tests for color parsing, HSL conversion and hue rotation."""

from __future__ import annotations

import itertools
import random

import pytest

from color_util import (
    HSL,
    RGB,
    format_hex,
    format_rgb,
    hsl_to_rgb,
    hue_angle,
    parse_color,
    parse_hex,
    parse_rgb,
    recolor,
    rgb_to_hsl,
    rotate_hue,
)

SAMPLE_CHANNELS = (0, 37, 128, 200, 255)
SATURATED = [RGB(200, 30, 30), RGB(30, 144, 255), RGB(120, 200, 80), RGB(250, 240, 10)]


def _hue_distance(a: float, b: float) -> float:
    d = abs(a - b) % 360
    return min(d, 360 - d)


class TestParsing:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("#ff0000", RGB(255, 0, 0)),
            ("ff0000", RGB(255, 0, 0)),
            ("#F0a", RGB(255, 0, 170)),
            ("abc", RGB(170, 187, 204)),
            ("#1E90FF", RGB(30, 144, 255)),
        ],
    )
    def test_parse_hex(self, text, expected):
        assert parse_hex(text) == expected

    @pytest.mark.parametrize("text", ["", "#12345", "#ggg", "red", "#ff00001", "rgb(1, 2, 3)"])
    def test_parse_hex_rejects(self, text):
        assert parse_hex(text) is None

    def test_parse_rgb(self):
        assert parse_rgb("rgb(12, 34, 56)") == RGB(12, 34, 56)
        assert parse_rgb("rgb(12,34,56)") == RGB(12, 34, 56)

    def test_parse_rgb_does_not_clamp(self):
        assert parse_rgb("rgb(300, 1, 2)") == RGB(300, 1, 2)

    @pytest.mark.parametrize("text", ["rgb(1, 2)", "rgba(1, 2, 3, 0.5)", "rgb( 1, 2, 3)", "rgb(1.5, 2, 3)"])
    def test_parse_rgb_rejects(self, text):
        assert parse_rgb(text) is None

    def test_parse_color_dispatch(self):
        assert parse_color("#00f") == RGB(0, 0, 255)
        assert parse_color("rgb(0, 0, 255)") == RGB(0, 0, 255)
        assert parse_color("none") is None
        assert parse_color("") is None

    def test_format_rgb(self):
        assert format_rgb(RGB(1, 2, 3)) == "rgb(1, 2, 3)"

    def test_format_hex(self):
        assert format_hex(RGB(0, 15, 255)) == "#000fff"
        assert format_hex(RGB(300, -1, 16)) == "#ff0010"


class TestHslConversion:
    def test_primaries(self):
        assert rgb_to_hsl(RGB(255, 0, 0)) == pytest.approx(HSL(0, 1, 0.5))
        assert rgb_to_hsl(RGB(0, 255, 0)) == pytest.approx(HSL(120, 1, 0.5))
        assert rgb_to_hsl(RGB(0, 0, 255)) == pytest.approx(HSL(240, 1, 0.5))

    def test_achromatic(self):
        h, s, l = rgb_to_hsl(RGB(128, 128, 128))
        assert (h, s) == (0, 0)
        assert l == pytest.approx(128 / 255)

    def test_hue_stays_below_360(self):
        # magenta-ish red: max is red, green < blue
        h, _, _ = rgb_to_hsl(RGB(255, 0, 10))
        assert 0 <= h < 360
        assert h > 350

    def test_half_rounds_up(self):
        assert hsl_to_rgb(HSL(0, 0, 0.5)) == RGB(128, 128, 128)

    def test_round_trip(self):
        for c in itertools.product(SAMPLE_CHANNELS, repeat=3):
            color = RGB(*c)
            back = hsl_to_rgb(rgb_to_hsl(color))
            assert all(abs(x - y) <= 1 for x, y in zip(back, color)), (color, back)


class TestHueRemap:
    def test_hue_angle_to_itself_is_zero(self):
        for c in SATURATED + [RGB(0, 0, 0), RGB(128, 128, 128)]:
            assert hue_angle(c, c) == 0

    def test_hue_angle_is_forward(self):
        assert hue_angle(RGB(255, 0, 0), RGB(0, 0, 255)) == 240
        assert hue_angle(RGB(0, 0, 255), RGB(255, 0, 0)) == 120

    @pytest.mark.parametrize("angle", [0, 45, 120, 200, 359])
    def test_rotation_keeps_saturation_and_lightness(self, angle):
        for color in SATURATED:
            h, s, l = rgb_to_hsl(color)
            nh, ns, nl = rgb_to_hsl(rotate_hue(color, angle))
            assert ns == pytest.approx(s, abs=0.02)
            assert nl == pytest.approx(l, abs=0.02)
            assert _hue_distance(nh, (h + angle) % 360) < 1.5

    def test_rotate_red_to_blue(self):
        assert rotate_hue(RGB(255, 0, 0), 240) == RGB(0, 0, 255)

    def test_gray_has_no_hue_to_rotate(self):
        assert rotate_hue(RGB(90, 90, 90), 123) == RGB(90, 90, 90)


class TestRecolor:
    def test_red_to_blue(self):
        assert recolor("#ff0000", "#0000ff") == "rgb(0, 0, 255)"

    def test_keeps_shade(self):
        # dark red stays dark, pale red stays pale
        assert recolor("#800000", "#0000ff") == "rgb(0, 0, 128)"
        assert recolor("#ff8080", "#0000ff") == "rgb(128, 128, 255)"

    def test_functional_target(self):
        assert recolor("#00ff00", "rgb(0, 0, 255)") == "rgb(0, 0, 255)"

    def test_none_is_not_recolored(self):
        assert recolor("none", "#00ff00") is None

    @pytest.mark.parametrize("source,target", [("#ff0000", "blue"), ("#xyz", "#00f"), ("url(#a)", "#00f")])
    def test_unparsable_gives_none(self, source, target):
        assert recolor(source, target) is None

    def test_second_pass_stays_within_rounding(self):
        # the first pass rounds to whole channels, so the result's hue can sit a
        # fraction of a degree off the target and a second pass may move one unit
        rng = random.Random(1234)
        for _ in range(2000):
            source = format_rgb(RGB(*(rng.randrange(256) for _ in range(3))))
            target = format_rgb(RGB(*(rng.randrange(256) for _ in range(3))))
            once = recolor(source, target)
            twice = recolor(once, target)
            assert all(abs(a - b) <= 1 for a, b in zip(parse_rgb(once), parse_rgb(twice))), (source, target)

    def test_pure_hues_are_stable(self):
        for source in ("#ff0000", "#800000", "#ff8080"):
            once = recolor(source, "#0000ff")
            assert recolor(once, "#0000ff") == once
