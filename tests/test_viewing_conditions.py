"""Tests for ViewingConditions — derived scalars and input validation."""

import dataclasses
import math

import numpy as np
import pytest

from appearance_models.viewing_conditions import (
    CAM16RGB_TO_XYZ,
    XYZ_TO_CAM16RGB,
    ViewingConditions,
)
from tonal_colorutils import WHITE_POINT_D65, y_from_lstar


class TestDefault:
    def test_background_ratio(self):
        vc = ViewingConditions.DEFAULT
        assert vc.n == pytest.approx(y_from_lstar(50.0) / 100.0, rel=1e-9)
        assert vc.n == pytest.approx(0.1842, abs=1e-4)

    def test_nonlinearity_factors(self):
        vc = ViewingConditions.DEFAULT
        assert vc.z == pytest.approx(1.909, abs=1e-3)
        assert vc.nbb == pytest.approx(1.0169, abs=1e-3)
        assert vc.ncb == vc.nbb
        assert vc.c == pytest.approx(0.69)
        assert vc.nc == pytest.approx(1.0)

    def test_luminance_adaptation(self):
        vc = ViewingConditions.DEFAULT
        assert vc.fl == pytest.approx(0.3884, abs=1e-3)
        assert vc.fl_root == pytest.approx(math.pow(vc.fl, 0.25))

    def test_white_achromatic_response(self):
        assert ViewingConditions.DEFAULT.aw == pytest.approx(29.98, abs=0.05)

    def test_default_equals_make(self):
        assert ViewingConditions.make() == ViewingConditions.DEFAULT

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ViewingConditions.DEFAULT.fl = 1.0


class TestMake:
    def test_discounting_illuminant_gives_full_adaptation(self):
        vc = ViewingConditions.make(discounting_illuminant=True)
        rgb_w = XYZ_TO_CAM16RGB @ WHITE_POINT_D65
        np.testing.assert_allclose(vc.rgb_d, 100.0 / rgb_w, rtol=1e-12)

    def test_dark_surround(self):
        vc = ViewingConditions.make(surround=0.0)
        assert vc.c == pytest.approx(0.525)
        assert vc.nc == pytest.approx(0.8)

    def test_dim_surround(self):
        vc = ViewingConditions.make(surround=1.0)
        assert vc.c == pytest.approx(0.59)
        assert vc.nc == pytest.approx(0.9)

    def test_surround_out_of_range_warns(self):
        with pytest.warns(RuntimeWarning):
            ViewingConditions.make(surround=3.0)

    def test_bad_white_point_raises(self):
        with pytest.raises(ValueError):
            ViewingConditions.make(white_point=(95.047, 100.0))

    def test_black_background_is_floored(self):
        vc = ViewingConditions.make(background_lstar=0.0)
        assert vc.n > 0.0
        assert vc.n == pytest.approx(ViewingConditions.make(background_lstar=0.1).n)
        assert math.isfinite(vc.nbb)

    def test_brighter_field_adapts_more(self):
        dim = ViewingConditions.make(adapting_luminance=10.0)
        bright = ViewingConditions.make(adapting_luminance=1000.0)
        assert bright.fl > dim.fl
        assert abs(bright.rgb_d[0] - 1.0) >= abs(dim.rgb_d[0] - 1.0)

    def test_cat16_inverse(self):
        np.testing.assert_allclose(XYZ_TO_CAM16RGB @ CAM16RGB_TO_XYZ, np.eye(3), atol=1e-12)
