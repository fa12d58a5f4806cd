# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Utilities
===============
Conversions between packed ARGB integers, linear RGB, CIE XYZ and CIE L*a*b*
that sit underneath the CAM16 appearance model.

Conventions:
    - Packed colors are Python ints laid out as ``0xAARRGGBB``.  Every color
      produced by this module is fully opaque (alpha = 0xFF).
    - Linear RGB channels live in [0, 100], as does XYZ Y.
    - L* lives in [0, 100].

The sRGB transfer functions are JIT-compiled by Numba.  Two variants of each
kernel exist (``fastmath=True`` and strict IEEE 754); ``set_strict_ieee``
selects between them at runtime.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
"""

import math
import re

import numpy as np
from numba import njit
from typing import Final, Tuple

from tonal_mathutils import ArrayFloat, Vec3, clamp_int, matrix_multiply

__all__ = [
    # --- Constants ---
    "SRGB_TO_XYZ",
    "XYZ_TO_SRGB",
    "WHITE_POINT_D65",
    "LAB_EPSILON",
    "LAB_KAPPA",

    # --- Configuration ---
    "set_strict_ieee",

    # --- ARGB packing ---
    "argb_from_rgb",
    "alpha_from_argb",
    "red_from_argb",
    "green_from_argb",
    "blue_from_argb",
    "is_opaque",
    "argb_from_hex",
    "hex_from_argb",

    # --- Transfer functions ---
    "linearized",
    "delinearized",
    "true_delinearized",

    # --- Conversions ---
    "argb_from_linrgb",
    "argb_from_xyz",
    "xyz_from_argb",
    "argb_from_lab",
    "lab_from_argb",
    "argb_from_lstar",
    "lstar_from_argb",
    "y_from_lstar",
    "lstar_from_y",
]


def _readonly(matrix: ArrayFloat) -> ArrayFloat:
    matrix.setflags(write=False)
    return matrix


# --- Constants & Matrices ---

# sRGB primaries with a D65 white, scaled so that Y of white is 1.0.
SRGB_TO_XYZ: Final[ArrayFloat] = _readonly(np.array([
    [0.41233895, 0.35762064, 0.18051042],
    [0.2126,     0.7152,     0.0722    ],
    [0.01932141, 0.11916382, 0.95034478]
], dtype=np.float64))
XYZ_TO_SRGB: Final[ArrayFloat] = _readonly(np.linalg.inv(SRGB_TO_XYZ))

# D65 reference white, Y = 100.
WHITE_POINT_D65: Final[ArrayFloat] = _readonly(
    np.array([95.047, 100.0, 108.883], dtype=np.float64)
)

# CIE 1976 rational constants (delta = 6/29).
_LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = _LAB_DELTA * _LAB_DELTA * _LAB_DELTA  # 216/24389
LAB_KAPPA: Final[float] = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0)  # 24389/27

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


# --- Runtime Configuration ---
# When True, the transfer-function kernels use fastmath=False variants that
# keep strict IEEE 754 semantics.
#
#     import tonal_colorutils
#     tonal_colorutils.set_strict_ieee(True)
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    Args:
        enabled: If True, use strict mode for the sRGB transfer functions.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. TRANSFER FUNCTION KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=True)
def _fast_linearized(normalized: float) -> float:
    """
    sRGB EOTF.  Maps a [0, 1] encoded channel to [0, 100] linear light.

    The breakpoint 0.040449936 is the exact crossing of the linear and power
    segments, slightly below the rounded 0.04045 of IEC 61966-2-1.
    """
    if normalized <= 0.040449936:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0

@njit(cache=True, fastmath=True)
def _fast_true_delinearized(component: float) -> float:
    """sRGB OETF.  Maps [0, 100] linear light to an unrounded [0, 255] value."""
    normalized = component / 100.0
    if normalized <= 0.0031308:
        delinearized = normalized * 12.92
    else:
        delinearized = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return delinearized * 255.0


@njit(cache=True, fastmath=False)
def _fast_linearized_strict(normalized: float) -> float:
    """sRGB EOTF — strict IEEE 754 variant."""
    if normalized <= 0.040449936:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0

@njit(cache=True, fastmath=False)
def _fast_true_delinearized_strict(component: float) -> float:
    """sRGB OETF — strict IEEE 754 variant."""
    normalized = component / 100.0
    if normalized <= 0.0031308:
        delinearized = normalized * 12.92
    else:
        delinearized = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return delinearized * 255.0


def _linearize(normalized: float) -> float:
    if _STRICT_IEEE:
        return _fast_linearized_strict(normalized)
    return _fast_linearized(normalized)

def _true_delinearize(component: float) -> float:
    if _STRICT_IEEE:
        return _fast_true_delinearized_strict(component)
    return _fast_true_delinearized(component)

def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return math.pow(t, 1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0

def _lab_invf(ft: float) -> float:
    ft3 = ft * ft * ft
    if ft3 > LAB_EPSILON:
        return ft3
    return (116.0 * ft - 16.0) / LAB_KAPPA


# =============================================================================
# 2. ARGB PACKING
# =============================================================================

def argb_from_rgb(red: int, green: int, blue: int) -> int:
    """Packs 8-bit channels into an opaque ARGB int."""
    return (255 << 24) | ((red & 255) << 16) | ((green & 255) << 8) | (blue & 255)

def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 255

def red_from_argb(argb: int) -> int:
    return (argb >> 16) & 255

def green_from_argb(argb: int) -> int:
    return (argb >> 8) & 255

def blue_from_argb(argb: int) -> int:
    return argb & 255

def is_opaque(argb: int) -> bool:
    return alpha_from_argb(argb) >= 255


def argb_from_hex(hex_text: str) -> int:
    """
    Parses ``#rgb``, ``#rrggbb`` or ``#aarrggbb`` (leading ``#`` optional).

    The alpha digits of the 8-digit form are accepted but the returned color
    is always opaque.

    Raises:
        ValueError: If the text is not 3, 6 or 8 hexadecimal digits.
    """
    digits = hex_text.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if len(digits) not in (3, 6, 8) or not _HEX_DIGITS.fullmatch(digits):
        raise ValueError(f"Invalid hex color: {hex_text!r}")

    if len(digits) == 3:
        r, g, b = (int(ch * 2, 16) for ch in digits)
    else:
        offset = len(digits) - 6
        r = int(digits[offset:offset + 2], 16)
        g = int(digits[offset + 2:offset + 4], 16)
        b = int(digits[offset + 4:offset + 6], 16)
    return argb_from_rgb(r, g, b)

def hex_from_argb(argb: int) -> str:
    """Formats the RGB part of *argb* as ``#rrggbb``."""
    return "#{:02x}{:02x}{:02x}".format(
        red_from_argb(argb), green_from_argb(argb), blue_from_argb(argb)
    )


# =============================================================================
# 3. TRANSFER FUNCTIONS
# =============================================================================

def linearized(rgb_component: int) -> float:
    """
    Linearizes an 8-bit channel.

    Args:
        rgb_component: 0 <= rgb_component <= 255.

    Returns:
        Linear channel value in [0, 100].
    """
    return _linearize(rgb_component / 255.0)

def true_delinearized(rgb_component: float) -> float:
    """
    Delinearizes a linear channel without rounding.

    Args:
        rgb_component: Linear channel value in [0, 100].

    Returns:
        Encoded channel value in [0, 255] (may be fractional).
    """
    return _true_delinearize(float(rgb_component))

def delinearized(rgb_component: float) -> int:
    """Delinearizes a [0, 100] linear channel to a rounded, clamped 8-bit value."""
    return clamp_int(0, 255, int(math.floor(true_delinearized(rgb_component) + 0.5)))


# =============================================================================
# 4. CONVERSIONS
# =============================================================================

def argb_from_linrgb(linrgb: Vec3) -> int:
    """Converts [0, 100] linear RGB to ARGB, clamping out-of-range channels."""
    return argb_from_rgb(
        delinearized(linrgb[0]), delinearized(linrgb[1]), delinearized(linrgb[2])
    )

def argb_from_xyz(x: float, y: float, z: float) -> int:
    """Converts D65 XYZ (Y in [0, 100]) to ARGB."""
    return argb_from_linrgb(matrix_multiply((x, y, z), XYZ_TO_SRGB))

def xyz_from_argb(argb: int) -> ArrayFloat:
    """Converts ARGB to D65 XYZ (Y in [0, 100])."""
    r = linearized(red_from_argb(argb))
    g = linearized(green_from_argb(argb))
    b = linearized(blue_from_argb(argb))
    return matrix_multiply((r, g, b), SRGB_TO_XYZ)

def argb_from_lab(l: float, a: float, b: float) -> int:
    """Converts CIE L*a*b* (D65) to ARGB."""
    fy = (l + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    x = _lab_invf(fx) * WHITE_POINT_D65[0]
    y = _lab_invf(fy) * WHITE_POINT_D65[1]
    z = _lab_invf(fz) * WHITE_POINT_D65[2]
    return argb_from_xyz(x, y, z)

def lab_from_argb(argb: int) -> Tuple[float, float, float]:
    """Converts ARGB to CIE L*a*b* (D65)."""
    xyz = xyz_from_argb(argb)
    fx = _lab_f(xyz[0] / WHITE_POINT_D65[0])
    fy = _lab_f(xyz[1] / WHITE_POINT_D65[1])
    fz = _lab_f(xyz[2] / WHITE_POINT_D65[2])
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))

def argb_from_lstar(lstar: float) -> int:
    """Neutral gray whose L* matches *lstar*."""
    component = delinearized(y_from_lstar(lstar))
    return argb_from_rgb(component, component, component)

def lstar_from_argb(argb: int) -> float:
    """L* of a color, computed from the Y channel of its XYZ."""
    return lstar_from_y(xyz_from_argb(argb)[1])

def y_from_lstar(lstar: float) -> float:
    """
    Converts L* to relative luminance Y.

    L* is perceptually linear in lightness while Y is linear in light
    energy; both describe luminance.

    Returns:
        Y in [0, 100].
    """
    return 100.0 * _lab_invf((lstar + 16.0) / 116.0)

def lstar_from_y(y: float) -> float:
    """Converts relative luminance Y in [0, 100] to L*."""
    return _lab_f(y / 100.0) * 116.0 - 16.0
