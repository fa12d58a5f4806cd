"""Tests for tonal_colorutils — packing, transfer functions, XYZ / Lab / L*."""

import numpy as np
import pytest

import tonal_colorutils
from tonal_colorutils import (
    WHITE_POINT_D65,
    SRGB_TO_XYZ,
    XYZ_TO_SRGB,
    alpha_from_argb,
    argb_from_hex,
    argb_from_lab,
    argb_from_lstar,
    argb_from_rgb,
    argb_from_xyz,
    blue_from_argb,
    delinearized,
    green_from_argb,
    hex_from_argb,
    is_opaque,
    lab_from_argb,
    linearized,
    lstar_from_argb,
    lstar_from_y,
    red_from_argb,
    set_strict_ieee,
    true_delinearized,
    xyz_from_argb,
    y_from_lstar,
)

SAMPLE_COLORS = [
    0xFF000000, 0xFFFFFFFF, 0xFFFF0000, 0xFF00FF00, 0xFF0000FF,
    0xFF6750A4, 0xFF123456, 0xFFFEDCBA, 0xFF808080, 0xFF00FFFF,
]


def _channels_close(a, b, tolerance=1):
    return (abs(red_from_argb(a) - red_from_argb(b)) <= tolerance
            and abs(green_from_argb(a) - green_from_argb(b)) <= tolerance
            and abs(blue_from_argb(a) - blue_from_argb(b)) <= tolerance)


class TestArgbPacking:
    def test_pack_red(self):
        assert argb_from_rgb(255, 0, 0) == 0xFFFF0000

    def test_unpack(self):
        argb = 0xFF123456
        assert alpha_from_argb(argb) == 0xFF
        assert red_from_argb(argb) == 0x12
        assert green_from_argb(argb) == 0x34
        assert blue_from_argb(argb) == 0x56
        assert is_opaque(argb)

    def test_translucent_is_not_opaque(self):
        assert not is_opaque(0x80FFFFFF)


class TestHex:
    def test_six_digits(self):
        assert argb_from_hex("#0000ff") == 0xFF0000FF

    def test_no_hash_uppercase(self):
        assert argb_from_hex("FF8000") == 0xFFFF8000

    def test_short_form(self):
        assert argb_from_hex("#fff") == 0xFFFFFFFF

    def test_eight_digits_forces_opaque(self):
        assert argb_from_hex("#80ff0000") == 0xFFFF0000

    @pytest.mark.parametrize("text", ["#ff", "#12345", "xyzxyz", "#ff_ff0", ""])
    def test_invalid_raises(self, text):
        with pytest.raises(ValueError):
            argb_from_hex(text)

    def test_format(self):
        assert hex_from_argb(0xFF0000FF) == "#0000ff"
        assert hex_from_argb(argb_from_hex("#6750a4")) == "#6750a4"


class TestTransferFunctions:
    def test_linearized_endpoints(self):
        assert linearized(0) == 0.0
        assert linearized(255) == pytest.approx(100.0)

    def test_linearized_monotonic(self):
        values = [linearized(i) for i in range(256)]
        assert all(b > a for a, b in zip(values, values[1:]))

    def test_delinearized_inverts_linearized(self):
        for component in range(256):
            assert delinearized(linearized(component)) == component

    def test_delinearized_clamps(self):
        assert delinearized(-5.0) == 0
        assert delinearized(150.0) == 255

    def test_true_delinearized_is_unrounded(self):
        assert true_delinearized(100.0) == pytest.approx(255.0)
        mid = true_delinearized(linearized(128) + 0.01)
        assert 128.0 < mid < 129.0

    def test_strict_mode_matches_fast_mode(self):
        fast = [linearized(i) for i in range(0, 256, 15)]
        set_strict_ieee(True)
        try:
            strict = [linearized(i) for i in range(0, 256, 15)]
            assert tonal_colorutils._STRICT_IEEE
        finally:
            set_strict_ieee(False)
        np.testing.assert_allclose(fast, strict, rtol=1e-9)


class TestXyz:
    def test_matrices_are_inverse(self):
        np.testing.assert_allclose(SRGB_TO_XYZ @ XYZ_TO_SRGB, np.eye(3), atol=1e-12)

    def test_matrices_are_read_only(self):
        with pytest.raises(ValueError):
            SRGB_TO_XYZ[0, 0] = 1.0

    def test_white_is_d65(self):
        np.testing.assert_allclose(xyz_from_argb(0xFFFFFFFF), WHITE_POINT_D65, atol=1e-3)

    @pytest.mark.parametrize("argb", SAMPLE_COLORS)
    def test_xyz_round_trip(self, argb):
        x, y, z = xyz_from_argb(argb)
        assert _channels_close(argb_from_xyz(x, y, z), argb, tolerance=0)


class TestLab:
    def test_white(self):
        l, a, b = lab_from_argb(0xFFFFFFFF)
        assert l == pytest.approx(100.0, abs=1e-3)
        assert a == pytest.approx(0.0, abs=1e-3)
        assert b == pytest.approx(0.0, abs=1e-3)

    @pytest.mark.parametrize("argb", SAMPLE_COLORS)
    def test_lab_round_trip(self, argb):
        assert _channels_close(argb_from_lab(*lab_from_argb(argb)), argb)


class TestLstar:
    @pytest.mark.parametrize("argb, expected", [
        (0xFF0000FF, 32.30),
        (0xFFFF0000, 53.23),
        (0xFF00FF00, 87.74),
        (0xFFFFFFFF, 100.0),
        (0xFF000000, 0.0),
    ])
    def test_lstar_of_primaries(self, argb, expected):
        assert lstar_from_argb(argb) == pytest.approx(expected, abs=0.05)

    def test_y_from_lstar_mid_gray(self):
        assert y_from_lstar(50.0) == pytest.approx(18.418651851244416, rel=1e-9)

    @pytest.mark.parametrize("lstar", [0.0, 5.0, 8.0, 25.0, 50.0, 75.0, 100.0])
    def test_lstar_y_round_trip(self, lstar):
        assert lstar_from_y(y_from_lstar(lstar)) == pytest.approx(lstar, abs=1e-9)

    def test_gray_endpoints(self):
        assert argb_from_lstar(0.0) == 0xFF000000
        assert argb_from_lstar(100.0) == 0xFFFFFFFF

    @pytest.mark.parametrize("lstar", [10.0, 30.0, 50.0, 70.0, 90.0])
    def test_gray_has_requested_lstar(self, lstar):
        argb = argb_from_lstar(lstar)
        assert red_from_argb(argb) == green_from_argb(argb) == blue_from_argb(argb)
        assert lstar_from_argb(argb) == pytest.approx(lstar, abs=0.5)
