# -*- coding: utf-8 -*-
# Tonal: Perceptual color appearance and tone for packed RGB.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for Tonal.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Tonal"
__description__: Final[str] = (
    "CAM16 color appearance and the HCT (hue, chroma, tone) color space, "
    "with a gamut-aware inverse solver for packed RGB colors."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
