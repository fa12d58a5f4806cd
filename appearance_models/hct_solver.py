# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: hct_solver.py — Inverse of the HCT color space.

Finds the ARGB color with a requested CAM16 hue and chroma and a requested
L* (tone), always under the default viewing conditions.

Two phases:

1. Newton iteration on CAM16 lightness J.  For a fixed (hue, chroma) the
   CAM16 equations are inverted in closed form for a candidate J, giving a
   linear RGB point whose luminance is compared against the target Y.  This
   converges in a handful of rounds when the target is inside the sRGB
   gamut.  A negative or overflowing channel means the target lies outside
   the gamut and the phase reports ``Unreachable``.

2. Gamut boundary search.  The plane of constant Y cuts the linear RGB cube
   in a polygon.  Its vertices are bracketed by hue until the polygon edge
   crossing the target hue is found; that edge is then bisected along each
   axis over the *critical planes*, the linear values at which the rounded
   8-bit output changes.  The result is the boundary color of maximal
   chroma for the requested hue and tone.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Final, Optional, Tuple, TypeAlias, Union

import numpy as np

from tonal_colorutils import (
    SRGB_TO_XYZ,
    argb_from_linrgb,
    argb_from_lstar,
    true_delinearized,
    y_from_lstar,
)
from tonal_mathutils import (
    ArrayFloat,
    are_in_cyclic_order,
    sanitize_degrees_double,
)

from .cam16 import Cam16, compress_response, expand_response
from .viewing_conditions import XYZ_TO_CAM16RGB, ViewingConditions

__all__ = [
    "CRITICAL_PLANES",
    "SCALED_DISCOUNT_FROM_LINRGB",
    "LINRGB_FROM_SCALED_DISCOUNT",
    "Y_FROM_LINRGB",
    "Solved",
    "Unreachable",
    "SolveResult",
    "solve_to_int",
    "solve_to_cam",
]

logger = logging.getLogger(__name__)

Point: TypeAlias = Tuple[float, float, float]


# --- Constants & Pre-Computed Matrices ---

# Linear RGB -> cone responses, with the default rgb_D gains and F_L/100
# already applied, so that ``compress_response`` can be fed directly.
_DEFAULT_VC = ViewingConditions.DEFAULT
SCALED_DISCOUNT_FROM_LINRGB: Final[ArrayFloat] = (
    np.diag(np.asarray(_DEFAULT_VC.rgb_d) * _DEFAULT_VC.fl / 100.0)
    @ XYZ_TO_CAM16RGB
    @ SRGB_TO_XYZ
)
SCALED_DISCOUNT_FROM_LINRGB.setflags(write=False)

LINRGB_FROM_SCALED_DISCOUNT: Final[ArrayFloat] = np.linalg.inv(SCALED_DISCOUNT_FROM_LINRGB)
LINRGB_FROM_SCALED_DISCOUNT.setflags(write=False)

Y_FROM_LINRGB: Final[ArrayFloat] = SRGB_TO_XYZ[1].copy()
Y_FROM_LINRGB.setflags(write=False)

# Linear value of the boundary between 8-bit codes i and i + 1, i in [0, 254].
_PLANE_CODES = (np.arange(255, dtype=np.float64) + 0.5) / 255.0
CRITICAL_PLANES: Final[ArrayFloat] = 100.0 * np.where(
    _PLANE_CODES <= 0.040449936,
    _PLANE_CODES / 12.92,
    ((_PLANE_CODES + 0.055) / 1.055) ** 2.4,
)
CRITICAL_PLANES.setflags(write=False)

_CHROMA_EPSILON: Final[float] = 0.0001
_MAX_NEWTON_ROUNDS: Final[int] = 5
_Y_TOLERANCE: Final[float] = 0.002
_OVERFLOW_LIMIT: Final[float] = 100.01
_MAX_BISECTION_ROUNDS: Final[int] = 8


# =============================================================================
# 1. PHASE RESULT
# =============================================================================

@dataclass(slots=True, frozen=True)
class Solved:
    """Newton iteration converged inside the gamut."""
    argb: int


@dataclass(slots=True, frozen=True)
class Unreachable:
    """The requested color lies outside the gamut; search the boundary."""


SolveResult = Union[Solved, Unreachable]

_UNREACHABLE: Final[Unreachable] = Unreachable()


# =============================================================================
# 2. NEWTON ITERATION ON J
# =============================================================================

def _find_result_by_j(hue_radians: float, chroma: float, y: float) -> SolveResult:
    """
    Solve for the in-gamut color with the given hue, chroma and luminance.

    Args:
        hue_radians: Target hue in [0, 2π).
        chroma: Target CAM16 chroma.
        y: Target relative luminance in [0, 100].
    """
    vc = ViewingConditions.DEFAULT

    # Initial estimate of J
    j = math.sqrt(y) * 11.0

    t_inner_coeff = 1.0 / math.pow(1.64 - math.pow(0.29, vc.n), 0.73)
    e_hue = 0.25 * (math.cos(hue_radians + 2.0) + 3.8)
    p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
    h_sin = math.sin(hue_radians)
    h_cos = math.cos(hue_radians)

    for iteration_round in range(_MAX_NEWTON_ROUNDS):
        # Closed-form CAM16 inverse for (J, C, h)
        j_normalized = j / 100.0
        alpha = 0.0 if chroma == 0.0 or j == 0.0 else chroma / math.sqrt(j_normalized)
        t = math.pow(alpha * t_inner_coeff, 1.0 / 0.9)
        ac = vc.aw * math.pow(j_normalized, 1.0 / vc.c / vc.z)
        p2 = ac / vc.nbb
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        linrgb = np.dot(
            LINRGB_FROM_SCALED_DISCOUNT,
            (expand_response(r_a), expand_response(g_a), expand_response(b_a)),
        )
        if not np.all(np.isfinite(linrgb)) or np.any(linrgb < 0.0):
            return _UNREACHABLE

        fn_j = float(np.dot(Y_FROM_LINRGB, linrgb))
        if fn_j <= 0.0:
            return _UNREACHABLE

        if iteration_round == _MAX_NEWTON_ROUNDS - 1 or abs(fn_j - y) < _Y_TOLERANCE:
            if np.any(linrgb > _OVERFLOW_LIMIT):
                return _UNREACHABLE
            return Solved(argb_from_linrgb(linrgb))

        # Newton step using 2 f(J) / J as the derivative estimate
        j = j - (fn_j - y) * j / (2.0 * fn_j)

    return _UNREACHABLE


# =============================================================================
# 3. GAMUT BOUNDARY SEARCH
# =============================================================================

def _hue_of(linrgb: Point) -> float:
    """CAM16 hue, in radians, of a linear RGB point under default conditions."""
    scaled = np.dot(SCALED_DISCOUNT_FROM_LINRGB, linrgb)
    r_a = compress_response(scaled[0])
    g_a = compress_response(scaled[1])
    b_a = compress_response(scaled[2])
    a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    return math.atan2(b, a)


def _is_bounded(x: float) -> bool:
    return 0.0 <= x <= 100.0


def _nth_vertex(y: float, n: int) -> Optional[Point]:
    """
    The n-th possible vertex of the polygon where the plane of luminance *y*
    intersects the RGB cube.

    Two channels are pinned to 0 or 100 and the third is solved from *y*.

    Returns:
        The vertex, or None if the solved channel leaves [0, 100].
    """
    k_r, k_g, k_b = Y_FROM_LINRGB
    coord_a = 0.0 if n % 4 <= 1 else 100.0
    coord_b = 0.0 if n % 2 == 0 else 100.0
    if n < 4:
        g, b = coord_a, coord_b
        r = (y - g * k_g - b * k_b) / k_r
        return (r, g, b) if _is_bounded(r) else None
    elif n < 8:
        b, r = coord_a, coord_b
        g = (y - r * k_r - b * k_b) / k_g
        return (r, g, b) if _is_bounded(g) else None
    else:
        r, g = coord_a, coord_b
        b = (y - r * k_r - g * k_g) / k_b
        return (r, g, b) if _is_bounded(b) else None


def _bisect_to_segment(y: float, target_hue: float) -> Tuple[Point, Point]:
    """
    Find the polygon edge whose endpoints bracket *target_hue* (radians).

    Returns:
        The two endpoints; going forward in hue from the first reaches the
        target before the second.
    """
    left: Optional[Point] = None
    right: Optional[Point] = None
    left_hue = 0.0
    right_hue = 0.0
    uncut = True
    for n in range(12):
        mid = _nth_vertex(y, n)
        if mid is None:
            continue
        mid_hue = _hue_of(mid)
        if left is None:
            left, right = mid, mid
            left_hue, right_hue = mid_hue, mid_hue
            continue
        if uncut or are_in_cyclic_order(left_hue, mid_hue, right_hue):
            uncut = False
            if are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right, right_hue = mid, mid_hue
            else:
                left, left_hue = mid, mid_hue

    # 0 < y < 100 always yields at least three vertices
    if left is None or right is None:
        raise RuntimeError(f"No gamut vertex found for luminance {y}")
    return left, right


def _midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0, (a[2] + b[2]) / 2.0)


def _set_coordinate(source: Point, coordinate: float, target: Point, axis: int) -> Point:
    """Point on segment source→target whose *axis* channel equals *coordinate*."""
    t = (coordinate - source[axis]) / (target[axis] - source[axis])
    return (
        source[0] + (target[0] - source[0]) * t,
        source[1] + (target[1] - source[1]) * t,
        source[2] + (target[2] - source[2]) * t,
    )


def _critical_plane_below(x: float) -> int:
    return math.floor(x - 0.5)


def _critical_plane_above(x: float) -> int:
    return math.ceil(x - 0.5)


def _bisect_to_limit(y: float, target_hue: float) -> Point:
    """
    Linear RGB of the gamut boundary color with luminance *y* and hue
    *target_hue* (radians).
    """
    left, right = _bisect_to_segment(y, target_hue)
    left_hue = _hue_of(left)
    for axis in range(3):
        if left[axis] == right[axis]:
            continue
        if left[axis] < right[axis]:
            l_plane = _critical_plane_below(true_delinearized(left[axis]))
            r_plane = _critical_plane_above(true_delinearized(right[axis]))
        else:
            l_plane = _critical_plane_above(true_delinearized(left[axis]))
            r_plane = _critical_plane_below(true_delinearized(right[axis]))
        for _ in range(_MAX_BISECTION_ROUNDS):
            if abs(r_plane - l_plane) <= 1:
                break
            m_plane = (l_plane + r_plane) // 2
            mid = _set_coordinate(left, float(CRITICAL_PLANES[m_plane]), right, axis)
            mid_hue = _hue_of(mid)
            if are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right = mid
                r_plane = m_plane
            else:
                left = mid
                left_hue = mid_hue
                l_plane = m_plane
    return _midpoint(left, right)


# =============================================================================
# 4. PUBLIC API
# =============================================================================

def solve_to_int(hue_degrees: float, chroma: float, lstar: float) -> int:
    """
    ARGB color with the given HCT coordinates.

    Args:
        hue_degrees: CAM16 hue in degrees; any real value, wrapped into [0, 360).
        chroma: Requested CAM16 chroma.  If the sRGB gamut cannot reach it,
            the color of maximal chroma at this hue and tone is returned.
        lstar: Requested L*, 0 to 100.

    Returns:
        An opaque ARGB color.  The hue may differ slightly from the request
        because of 8-bit quantization; chroma and tone are as close as the
        gamut allows.
    """
    if chroma < _CHROMA_EPSILON or lstar < _CHROMA_EPSILON or lstar > 100.0 - _CHROMA_EPSILON:
        logger.debug("Achromatic request (chroma=%.6f, tone=%.6f); returning gray", chroma, lstar)
        return argb_from_lstar(lstar)

    hue_degrees = sanitize_degrees_double(hue_degrees)
    hue_radians = math.radians(hue_degrees)
    y = y_from_lstar(lstar)

    result = _find_result_by_j(hue_radians, chroma, y)
    if isinstance(result, Solved):
        return result.argb

    logger.debug(
        "HCT(%.3f, %.3f, %.3f) is outside the gamut; searching the boundary",
        hue_degrees, chroma, lstar,
    )
    return argb_from_linrgb(_bisect_to_limit(y, hue_radians))


def solve_to_cam(hue_degrees: float, chroma: float, lstar: float) -> Cam16:
    """CAM16 correlates of ``solve_to_int(hue_degrees, chroma, lstar)``."""
    return Cam16.from_int(solve_to_int(hue_degrees, chroma, lstar))
