# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: cam16.py — CAM16 color appearance model.

A color is described not only by its stimulus (ARGB / XYZ) but also by the
viewing conditions it is observed in.  CAM16 maps a stimulus plus a
``ViewingConditions`` to perceptual correlates:

    hue     h   hue angle in degrees, [0, 360)
    chroma  C   colorfulness relative to a similarly lit white
    J           lightness
    Q           brightness
    M           colorfulness
    s           saturation

plus the CAM16-UCS coordinates (J*, a*, b*) in which Euclidean distance is
perceptually uniform.  Use ``Cam16.distance`` to compare colors.

Example: white under a D65 white point is measured as a slightly chromatic
blue (hue ~209, chroma ~3, J 100).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numba import njit

from tonal_colorutils import argb_from_xyz, xyz_from_argb
from tonal_mathutils import ArrayFloat, sanitize_degrees_double

from .viewing_conditions import CAM16RGB_TO_XYZ, XYZ_TO_CAM16RGB, ViewingConditions

__all__ = [
    "Cam16",
    "compress_response",
    "expand_response",
]


# =============================================================================
# Post-adaptation nonlinearity (Numba Optimized)
# =============================================================================

@njit(cache=True)
def compress_response(scaled: float) -> float:
    """
    Post-adaptation cone compression.

    *scaled* is the adapted cone response already multiplied by ``F_L / 100``.
    The sign is preserved: ``sign(x) · 400 · |x|^0.42 / (|x|^0.42 + 27.13)``.
    """
    af = abs(scaled) ** 0.42
    if scaled < 0.0:
        return -400.0 * af / (af + 27.13)
    return 400.0 * af / (af + 27.13)


@njit(cache=True, error_model="numpy")
def expand_response(adapted: float) -> float:
    """
    Inverse of ``compress_response``.

    Responses at or beyond the 400 asymptote have no finite preimage; the
    base is clamped at 0 from below and an exact hit yields ``inf``.
    """
    adapted_abs = abs(adapted)
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
    if adapted < 0.0:
        return -(base ** (1.0 / 0.42))
    return base ** (1.0 / 0.42)


def _ucs_from_jmh(j: float, m: float, hue_radians: float) -> tuple[float, float, float]:
    jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
    mstar = math.log1p(0.0228 * m) / 0.0228
    return jstar, mstar * math.cos(hue_radians), mstar * math.sin(hue_radians)


# =============================================================================
# Cam16
# =============================================================================

@dataclass(slots=True, frozen=True)
class Cam16:
    """
    CAM16 correlates of one color.

    Any three of the dimensions determine the rest: {J or Q} with
    {C, M or s} and hue, or (J*, a*, b*).  Prefer the ``from_*``
    constructors over calling this directly.
    """
    hue:    float
    chroma: float
    j:      float
    q:      float
    m:      float
    s:      float
    jstar:  float
    astar:  float
    bstar:  float

    # --- forward ---------------------------------------------------------

    @staticmethod
    def from_int(argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> Cam16:
        """CAM16 correlates of an ARGB color."""
        x, y, z = xyz_from_argb(argb)
        return Cam16.from_xyz_in_viewing_conditions(x, y, z, viewing_conditions)

    @staticmethod
    def from_xyz_in_viewing_conditions(
        x: float,
        y: float,
        z: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> Cam16:
        """CAM16 correlates of an XYZ stimulus (Y in [0, 100])."""
        vc = viewing_conditions or ViewingConditions.DEFAULT

        # XYZ -> cone responses, then von Kries style adaptation
        r_c, g_c, b_c = np.dot(XYZ_TO_CAM16RGB, (x, y, z))
        r_a = compress_response(vc.fl * vc.rgb_d[0] * r_c / 100.0)
        g_a = compress_response(vc.fl * vc.rgb_d[1] * g_c / 100.0)
        b_a = compress_response(vc.fl * vc.rgb_d[2] * b_c / 100.0)

        # Opponent channels
        a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
        b = (r_a + g_a - 2.0 * b_a) / 9.0
        u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
        p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

        hue = sanitize_degrees_double(math.degrees(math.atan2(b, a)))
        hue_radians = math.radians(hue)

        ac = p2 * vc.nbb
        j = 100.0 * math.pow(max(ac / vc.aw, 0.0), vc.c * vc.z)
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root

        hue_prime = hue + 360.0 if hue < 20.14 else hue
        e_hue = 0.25 * (math.cos(math.radians(hue_prime) + 2.0) + 3.8)
        p1 = 50000.0 / 13.0 * e_hue * vc.nc * vc.ncb
        t = p1 * math.hypot(a, b) / (u + 0.305)
        alpha = math.pow(t, 0.9) * math.pow(1.64 - math.pow(0.29, vc.n), 0.73)

        chroma = alpha * math.sqrt(j / 100.0)
        m = chroma * vc.fl_root
        s = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))

        jstar, astar, bstar = _ucs_from_jmh(j, m, hue_radians)
        return Cam16(float(hue), float(chroma), float(j), float(q), float(m),
                     float(s), float(jstar), float(astar), float(bstar))

    @staticmethod
    def from_jch(
        j: float,
        c: float,
        h: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> Cam16:
        """
        Build from lightness, chroma and hue.

        Args:
            j: CAM16 lightness.
            c: CAM16 chroma.
            h: CAM16 hue in degrees (wrapped into [0, 360)).
        """
        vc = viewing_conditions or ViewingConditions.DEFAULT
        hue = sanitize_degrees_double(h)
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root
        m = c * vc.fl_root
        alpha = 0.0 if j == 0.0 else c / math.sqrt(j / 100.0)
        s = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))
        jstar, astar, bstar = _ucs_from_jmh(j, m, math.radians(hue))
        return Cam16(float(hue), float(c), float(j), float(q), float(m),
                     float(s), float(jstar), float(astar), float(bstar))

    @staticmethod
    def from_ucs(
        jstar: float,
        astar: float,
        bstar: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> Cam16:
        """Build from CAM16-UCS coordinates."""
        vc = viewing_conditions or ViewingConditions.DEFAULT
        mstar = math.hypot(astar, bstar)
        m = math.expm1(mstar * 0.0228) / 0.0228
        c = m / vc.fl_root
        h = math.degrees(math.atan2(bstar, astar))
        j = jstar / (1.0 - (jstar - 100.0) * 0.007)
        return Cam16.from_jch(j, c, h, vc)

    # --- inverse ---------------------------------------------------------

    def xyz_in_viewing_conditions(
        self, viewing_conditions: Optional[ViewingConditions] = None
    ) -> ArrayFloat:
        """XYZ stimulus that produces these correlates under *viewing_conditions*."""
        vc = viewing_conditions or ViewingConditions.DEFAULT

        if self.chroma == 0.0 or self.j == 0.0:
            alpha = 0.0
        else:
            alpha = self.chroma / math.sqrt(self.j / 100.0)
        t = math.pow(alpha / math.pow(1.64 - math.pow(0.29, vc.n), 0.73), 1.0 / 0.9)
        h_rad = math.radians(self.hue)

        e_hue = 0.25 * (math.cos(h_rad + 2.0) + 3.8)
        ac = vc.aw * math.pow(self.j / 100.0, 1.0 / vc.c / vc.z)
        p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
        p2 = ac / vc.nbb

        h_sin = math.sin(h_rad)
        h_cos = math.cos(h_rad)
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin

        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        scale = 100.0 / vc.fl
        r_f = scale * expand_response(r_a) / vc.rgb_d[0]
        g_f = scale * expand_response(g_a) / vc.rgb_d[1]
        b_f = scale * expand_response(b_a) / vc.rgb_d[2]
        return np.dot(CAM16RGB_TO_XYZ, (r_f, g_f, b_f))

    def viewed(self, viewing_conditions: Optional[ViewingConditions] = None) -> int:
        """ARGB of the color that has these correlates under *viewing_conditions*."""
        x, y, z = self.xyz_in_viewing_conditions(viewing_conditions)
        return argb_from_xyz(x, y, z)

    def to_int(self) -> int:
        """ARGB of this color under the default viewing conditions."""
        return self.viewed(ViewingConditions.DEFAULT)

    def __int__(self) -> int:
        return self.to_int()

    # --- metrics ---------------------------------------------------------

    def distance(self, other: Cam16) -> float:
        """
        Perceptual color difference in CAM16-UCS.

        ``ΔE' = 1.41 · sqrt(ΔJ*² + Δa*² + Δb*²) ^ 0.63``
        """
        d_j = self.jstar - other.jstar
        d_a = self.astar - other.astar
        d_b = self.bstar - other.bstar
        d_e_prime = math.sqrt(d_j * d_j + d_a * d_a + d_b * d_b)
        return 1.41 * math.pow(d_e_prime, 0.63)
