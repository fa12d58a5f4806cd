# -*- coding: utf-8 -*-
"""
Tonal: Perceptual color appearance and tone for packed RGB
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: hct.py — Hue, Chroma, Tone color space.

HCT pairs CAM16 hue and chroma with CIE L* as tone.  L* is used instead of
CAM16 lightness J because it is tied linearly to relative luminance Y, which
keeps contrast-ratio arithmetic exact: two colors whose tones differ by a
known amount have a known contrast, whatever their hue and chroma.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tonal_colorutils import (
    argb_from_hex,
    argb_from_rgb,
    blue_from_argb,
    green_from_argb,
    hex_from_argb,
    lstar_from_argb,
    lstar_from_y,
    red_from_argb,
)

from .cam16 import Cam16
from .hct_solver import solve_to_int
from .viewing_conditions import ViewingConditions

__all__ = ["Hct"]


@dataclass(slots=True, frozen=True)
class Hct:
    """
    A color in HCT space.

    The stored ``argb`` is authoritative; ``hue``, ``chroma`` and ``tone``
    are its measured coordinates.  Requesting a chroma the gamut cannot
    reach yields the most chromatic color at that hue and tone, so
    ``Hct.from_hct(h, c, t).chroma`` may be lower than ``c``.

    Attributes:
        argb: Opaque packed color.
        hue: CAM16 hue in [0, 360).
        chroma: CAM16 chroma, >= 0.
        tone: L* in [0, 100].
    """
    argb:   int
    hue:    float
    chroma: float
    tone:   float

    @staticmethod
    def from_int(argb: int) -> Hct:
        """
        Measure an ARGB color under the default viewing conditions.

        The alpha byte of *argb* is ignored; the stored color is opaque.
        """
        argb = argb_from_rgb(red_from_argb(argb), green_from_argb(argb), blue_from_argb(argb))
        cam = Cam16.from_int(argb)
        return Hct(argb, cam.hue, cam.chroma, lstar_from_argb(argb))

    @staticmethod
    def from_hct(hue: float, chroma: float, tone: float) -> Hct:
        """
        Closest in-gamut color to the requested coordinates.

        Args:
            hue: Degrees; wrapped into [0, 360).
            chroma: Requested CAM16 chroma.
            tone: L*, 0 to 100.
        """
        return Hct.from_int(solve_to_int(hue, chroma, tone))

    @staticmethod
    def from_hex(hex_text: str) -> Hct:
        """
        Raises:
            ValueError: If *hex_text* is not a valid hex color.
        """
        return Hct.from_int(argb_from_hex(hex_text))

    def to_int(self) -> int:
        return self.argb

    def to_hex(self) -> str:
        return hex_from_argb(self.argb)

    def __int__(self) -> int:
        return self.argb

    def __str__(self) -> str:
        return (f"HCT({self.hue:.0f}, {self.chroma:.0f}, {self.tone:.0f}) "
                f"{self.to_hex()}")

    # --- derived colors --------------------------------------------------

    def with_hue(self, hue: float) -> Hct:
        """Same chroma and tone, new hue (chroma is re-fitted to the gamut)."""
        return Hct.from_hct(hue, self.chroma, self.tone)

    def with_chroma(self, chroma: float) -> Hct:
        return Hct.from_hct(self.hue, chroma, self.tone)

    def with_tone(self, tone: float) -> Hct:
        return Hct.from_hct(self.hue, self.chroma, tone)

    def in_viewing_conditions(self, viewing_conditions: Optional[ViewingConditions] = None) -> Hct:
        """
        The color that, seen under the default conditions, looks the way this
        color looks under *viewing_conditions*.

        Useful for matching colors across lighting environments, e.g. a dark
        room versus daylight.
        """
        vc = viewing_conditions or ViewingConditions.DEFAULT

        # 1. Appearance of this color, taken as seen in the default environment
        cam = Cam16.from_int(self.argb)
        # 2. Stimulus producing that appearance in the target environment
        x, y, z = cam.xyz_in_viewing_conditions(vc)
        # 3. Recast that stimulus as seen in the default environment
        recast = Cam16.from_xyz_in_viewing_conditions(x, y, z, ViewingConditions.DEFAULT)
        return Hct.from_hct(recast.hue, recast.chroma, lstar_from_y(y))
