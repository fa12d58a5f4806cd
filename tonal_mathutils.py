# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Scalar Math Kernels
===================
Small numeric helpers shared by the color utilities, the CAM16 model and the
HCT solver.

All hue arithmetic goes through this module.  ``sanitize_degrees_double``
normalizes forward CAM16 hues and ``are_in_cyclic_order`` (built on
``sanitize_radians``) orders hues during the gamut boundary search, so the
whole library agrees on a single definition of "going forward" around the
hue circle.

The kernels are Numba-compiled so they can be called both from Python and
from other ``@njit`` kernels.
"""

import math

import numpy as np
from numba import njit
from typing import Final, Sequence, TypeAlias, Union

__all__ = [
    "ArrayFloat",
    "Vec3",
    "TWO_PI",
    "lerp",
    "clamp_int",
    "clamp_double",
    "sanitize_degrees_int",
    "sanitize_degrees_double",
    "sanitize_radians",
    "are_in_cyclic_order",
    "difference_degrees",
    "matrix_multiply",
]

ArrayFloat: TypeAlias = np.typing.NDArray[np.floating]
Vec3: TypeAlias = Union[ArrayFloat, Sequence[float]]

TWO_PI: Final[float] = 2.0 * math.pi


@njit(cache=True)
def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation; ``amount=0`` gives *start*, ``1`` gives *stop*."""
    return (1.0 - amount) * start + amount * stop


@njit(cache=True)
def clamp_int(min_value: int, max_value: int, value: int) -> int:
    if value < min_value:
        return min_value
    elif value > max_value:
        return max_value
    return value


@njit(cache=True)
def clamp_double(min_value: float, max_value: float, value: float) -> float:
    if value < min_value:
        return min_value
    elif value > max_value:
        return max_value
    return value


@njit(cache=True)
def sanitize_degrees_int(degrees: int) -> int:
    """Wraps integer degrees into [0, 360)."""
    degrees = degrees % 360
    if degrees < 0:
        degrees = degrees + 360
    return degrees


@njit(cache=True)
def sanitize_degrees_double(degrees: float) -> float:
    """
    Wraps degrees into [0, 360).

    Float modulo can round ``-tiny % 360`` up to exactly 360.0, so the upper
    bound is enforced explicitly.
    """
    degrees = degrees % 360.0
    if degrees < 0.0:
        degrees = degrees + 360.0
    if degrees >= 360.0:
        degrees = degrees - 360.0
    return degrees


@njit(cache=True)
def sanitize_radians(angle: float) -> float:
    """Wraps an angle in radians into [0, 2π)."""
    return (angle + math.pi * 8.0) % (math.pi * 2.0)


@njit(cache=True)
def are_in_cyclic_order(a: float, b: float, c: float) -> bool:
    """
    Cyclic order test on the hue circle (radians).

    Returns True when travelling forward (counter-clockwise) from *a*, the
    angle *b* is met strictly before *c*.
    """
    delta_a_b = sanitize_radians(b - a)
    delta_a_c = sanitize_radians(c - a)
    return delta_a_b < delta_a_c


@njit(cache=True)
def difference_degrees(a: float, b: float) -> float:
    """Shortest distance between two hues, in [0, 180]."""
    return 180.0 - abs(abs(a - b) - 180.0)


def matrix_multiply(row: Vec3, matrix: ArrayFloat) -> ArrayFloat:
    """Multiplies a 3x3 *matrix* by the column vector *row*."""
    return np.dot(matrix, np.asarray(row, dtype=np.float64))
