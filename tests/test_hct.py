"""Tests for Hct — construction, derived colors and viewing-condition shifts."""

import dataclasses

import pytest

from appearance_models import Hct, ViewingConditions
from tonal_colorutils import blue_from_argb, green_from_argb, red_from_argb


def _channels_close(a, b, tolerance=1):
    return (abs(red_from_argb(a) - red_from_argb(b)) <= tolerance
            and abs(green_from_argb(a) - green_from_argb(b)) <= tolerance
            and abs(blue_from_argb(a) - blue_from_argb(b)) <= tolerance)


class TestConstruction:
    def test_blue(self):
        hct = Hct.from_int(0xFF0000FF)
        assert hct.hue == pytest.approx(282.788, abs=0.01)
        assert hct.chroma == pytest.approx(87.230, abs=0.01)
        assert hct.tone == pytest.approx(32.302, abs=0.01)

    def test_from_hct_keeps_in_gamut_coordinates(self):
        hct = Hct.from_hct(120.0, 20.0, 60.0)
        assert hct.hue == pytest.approx(120.0, abs=1.0)
        assert hct.chroma == pytest.approx(20.0, abs=1.0)
        assert hct.tone == pytest.approx(60.0, abs=0.5)

    def test_from_hct_clips_chroma(self):
        hct = Hct.from_hct(120.0, 500.0, 60.0)
        assert hct.chroma < 500.0
        assert hct.tone == pytest.approx(60.0, abs=0.5)

    @pytest.mark.parametrize("argb, expected", [
        (0x0000FF, 0xFF0000FF),
        (0x806750A4, 0xFF6750A4),
        (0xFF123456, 0xFF123456),
    ])
    def test_stored_color_is_opaque(self, argb, expected):
        hct = Hct.from_int(argb)
        assert hct.argb == expected
        assert hct.to_int() == expected

    def test_alpha_does_not_change_coordinates(self):
        translucent = Hct.from_int(0x0000FF)
        opaque = Hct.from_int(0xFF0000FF)
        assert translucent == opaque

    def test_hex_round_trip(self):
        hct = Hct.from_hex("#6750a4")
        assert hct.to_hex() == "#6750a4"
        assert hct.to_int() == 0xFF6750A4
        assert int(hct) == 0xFF6750A4

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            Hct.from_hex("not-a-color")

    def test_str_shows_hex(self):
        assert "#6750a4" in str(Hct.from_int(0xFF6750A4))

    def test_frozen(self):
        hct = Hct.from_int(0xFF6750A4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            hct.tone = 10.0


class TestDerivedColors:
    def test_with_tone(self):
        lighter = Hct.from_int(0xFF6750A4).with_tone(90.0)
        assert lighter.tone == pytest.approx(90.0, abs=0.5)

    def test_with_chroma(self):
        muted = Hct.from_int(0xFF6750A4).with_chroma(10.0)
        assert muted.chroma == pytest.approx(10.0, abs=1.0)

    def test_with_hue(self):
        base = Hct.from_hct(30.0, 20.0, 50.0)
        rotated = base.with_hue(210.0)
        assert rotated.hue == pytest.approx(210.0, abs=2.0)
        assert rotated.tone == pytest.approx(base.tone, abs=0.5)


class TestViewingConditions:
    @pytest.mark.parametrize("argb", [0xFF6750A4, 0xFF808080, 0xFF3A7D44, 0xFFC0A060])
    def test_default_conditions_are_identity(self, argb):
        hct = Hct.from_int(argb)
        assert _channels_close(hct.in_viewing_conditions(ViewingConditions.DEFAULT).argb, argb)

    def test_dark_room_stays_valid(self):
        dark = ViewingConditions.make(
            adapting_luminance=1.0, background_lstar=10.0, surround=0.0
        )
        for argb in (0xFF6750A4, 0xFFFF0000, 0xFF00FF00, 0xFFFFFFFF, 0xFF000000):
            shifted = Hct.from_int(argb).in_viewing_conditions(dark)
            assert -1e-9 <= shifted.tone <= 100.0 + 1e-9
            assert shifted.chroma >= 0.0
            assert 0.0 <= shifted.hue < 360.0
