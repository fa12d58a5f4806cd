# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: viewing_conditions.py — Environment model for CAM16.

CAM16 correlates depend on where a color is seen: the white point of the
illuminant, how bright the surroundings are, the lightness of the background
and whether the observer discounts the illuminant.  ``ViewingConditions``
precomputes every scalar the forward and inverse CAM16 transforms need from
those physical parameters.

Instances are immutable.  ``ViewingConditions.DEFAULT`` approximates sRGB
viewing: D65 white, ~200 lux adapting field, mid-gray background, average
surround.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import ClassVar, Final, Optional, Sequence, Tuple

import numpy as np

from tonal_colorutils import WHITE_POINT_D65, y_from_lstar
from tonal_mathutils import ArrayFloat, clamp_double, lerp

__all__ = [
    "XYZ_TO_CAM16RGB",
    "CAM16RGB_TO_XYZ",
    "ViewingConditions",
]

# CAT16 chromatic adaptation matrix: XYZ -> sharpened cone responses.
XYZ_TO_CAM16RGB: Final[ArrayFloat] = np.array([
    [ 0.401288,  0.650173, -0.051461],
    [-0.250268,  1.204414,  0.045854],
    [-0.002079,  0.048952,  0.953127]
], dtype=np.float64)
XYZ_TO_CAM16RGB.setflags(write=False)

CAM16RGB_TO_XYZ: Final[ArrayFloat] = np.linalg.inv(XYZ_TO_CAM16RGB)
CAM16RGB_TO_XYZ.setflags(write=False)


@dataclass(slots=True, frozen=True)
class ViewingConditions:
    """
    Precomputed CAM16 viewing environment.

    Attributes:
        n: Background luminance relative to white (Yb / Yw).
        aw: Achromatic response of the white point.
        nbb: Background induction factor.
        ncb: Chromatic induction factor (equal to ``nbb``).
        c: Exponential nonlinearity, driven by the surround.
        nc: Chromatic surround factor.
        rgb_d: Per-channel degree-of-adaptation gains.
        fl: Luminance-level adaptation factor F_L.
        fl_root: ``fl ** 0.25``.
        z: Base exponential nonlinearity.
    """
    n:       float
    aw:      float
    nbb:     float
    ncb:     float
    c:       float
    nc:      float
    rgb_d:   Tuple[float, float, float]
    fl:      float
    fl_root: float
    z:       float

    DEFAULT: ClassVar[ViewingConditions]

    @staticmethod
    def make(
        white_point: Optional[Sequence[float]] = None,
        adapting_luminance: Optional[float] = None,
        background_lstar: float = 50.0,
        surround: float = 2.0,
        discounting_illuminant: bool = False,
    ) -> ViewingConditions:
        """
        Build viewing conditions from physical parameters.

        Args:
            white_point: XYZ of the illuminant white.  Defaults to D65.
            adapting_luminance: Luminance of the adapting field in cd/m².
                Defaults to the luminance of a mid-gray under ~200 lux
                (``200/π · Y(L*=50) / 100``).
            background_lstar: L* of the background.  Floored at 0.1 so the
                background ratio ``n`` never reaches zero.
            surround: 0.0 (dark, e.g. cinema) … 1.0 (dim) … 2.0 (average).
            discounting_illuminant: Whether the observer fully adapts to the
                illuminant color (e.g. reflective surfaces vs displays).

        Raises:
            ValueError: If *white_point* does not have three components.
        """
        if white_point is None:
            white_point = WHITE_POINT_D65
        xyz = np.asarray(white_point, dtype=np.float64).ravel()
        if xyz.shape[0] != 3:
            raise ValueError(f"White point must be an XYZ triple, got {xyz.shape[0]} values")

        if adapting_luminance is None:
            adapting_luminance = (200.0 / math.pi) * y_from_lstar(50.0) / 100.0
        if not 0.0 <= surround <= 2.0:
            warnings.warn(
                f"Surround {surround} is outside the modelled range [0, 2]; "
                "the CAM16 nonlinearity will be extrapolated.",
                RuntimeWarning,
                stacklevel=2,
            )
        background_lstar = max(0.1, background_lstar)

        # Cone response of the white
        rgb_w = np.dot(XYZ_TO_CAM16RGB, xyz)

        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = clamp_double(0.0, 1.0, d)
        nc = f

        rgb_d = tuple(float(d * (100.0 / w) + 1.0 - d) for w in rgb_w)

        # Luminance-level adaptation
        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k * k * k * k
        k4f = 1.0 - k4
        fl = k4 * adapting_luminance + 0.1 * k4f * k4f * np.cbrt(5.0 * adapting_luminance)

        n = y_from_lstar(background_lstar) / xyz[1]
        z = 1.48 + math.sqrt(n)
        nbb = 0.725 / math.pow(n, 0.2)
        ncb = nbb

        # Achromatic response of the white through the forward pipeline
        rgb_a = []
        for gain, white in zip(rgb_d, rgb_w):
            factor = math.pow(fl * gain * white / 100.0, 0.42)
            rgb_a.append(400.0 * factor / (factor + 27.13))
        aw = (2.0 * rgb_a[0] + rgb_a[1] + 0.05 * rgb_a[2]) * nbb

        return ViewingConditions(
            n=float(n),
            aw=float(aw),
            nbb=float(nbb),
            ncb=float(ncb),
            c=float(c),
            nc=float(nc),
            rgb_d=rgb_d,
            fl=float(fl),
            fl_root=float(math.pow(fl, 0.25)),
            z=float(z),
        )


ViewingConditions.DEFAULT = ViewingConditions.make()
