# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

CAM16 appearance model and the HCT color space built on it.
"""

from .viewing_conditions import ViewingConditions
from .cam16 import Cam16
from .hct_solver import solve_to_cam, solve_to_int
from .hct import Hct

__all__ = [
    "ViewingConditions",
    "Cam16",
    "Hct",
    "solve_to_int",
    "solve_to_cam",
]
