#!/usr/bin/env python3
"""
Tailwind-scale shade generation (50-950) in the OKLCH color space.
"""

from dataclasses import dataclass

import numpy as np

from color_space import hex_to_oklch, oklch_to_rgb, rgb_to_hex


SHADE_LEVELS = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950)
BASE_LEVEL = 500

# How far each level moves toward its endpoint (0 = base, 1 = endpoint).
# Aligned with SHADE_LEVELS; the base level has no factor.
SHADE_T = (0.92, 0.80, 0.62, 0.42, 0.18, None, 0.18, 0.38, 0.56, 0.76, 0.92)

LIGHT_END = 0.98
DARK_END = 0.10

# Chroma loss per unit t. Lights fade toward white faster than darks.
LIGHT_CHROMA_FALLOFF = 0.95
DARK_CHROMA_FALLOFF = 0.65


@dataclass
class Shade:
    """One step of a shade ramp."""
    level: int
    hex: str


def shade_lch(base_lch: tuple, level: int) -> tuple:
    """Compute the OKLCH value of a non-base level from the base OKLCH."""
    base_L, base_C, base_H = base_lch
    t = SHADE_T[SHADE_LEVELS.index(level)]
    if t is None:
        return base_lch

    if level < BASE_LEVEL:
        L = base_L + (LIGHT_END - base_L) * t
        c_scale = 1 - t * LIGHT_CHROMA_FALLOFF
    else:
        L = base_L - (base_L - DARK_END) * t
        c_scale = 1 - t * DARK_CHROMA_FALLOFF

    return L, base_C * max(0.0, c_scale), base_H


def generate_shades(hex_color: str) -> list[Shade]:
    """
    Expand a base color into 11 shades, lightest (50) to darkest (950).

    Level 500 is `hex_color` itself, returned as given.
    """
    base_lch = hex_to_oklch(hex_color)

    others = [level for level in SHADE_LEVELS if level != BASE_LEVEL]
    lch = np.array([shade_lch(base_lch, level) for level in others])
    rgb = oklch_to_rgb(lch)
    computed = {level: rgb_to_hex(*rgb[i]) for i, level in enumerate(others)}

    return [
        Shade(level, hex_color if level == BASE_LEVEL else computed[level])
        for level in SHADE_LEVELS
    ]
