#!/usr/bin/env python3
"""
Color space conversions: hex, RGB, HSL, OKLAB and OKLCH.

Array functions take RGB/OKLAB/OKLCH arrays of shape (n, 3) and return
arrays of the same shape. Scalar wrappers at the bottom work on single
colors and hex strings.
"""

import math
import re

import numpy as np


HEX_PATTERN = re.compile(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# Linear sRGB -> LMS
M_RGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])

# Cube-rooted LMS -> OKLAB
M_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

# OKLAB -> cube-rooted LMS
M_OKLAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])

# LMS -> linear sRGB
M_LMS_TO_RGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])


class MalformedColorError(ValueError):
    """Raised when a string is not a #rgb or #rrggbb hex color."""


def _as_rows(values) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    return arr


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# =============================================================================
# Hex
# =============================================================================

def is_valid_hex(text: str) -> bool:
    """Check for #rgb or #rrggbb (case-insensitive)."""
    return bool(HEX_PATTERN.match(text))


def hex_to_rgb(hex_color: str) -> tuple:
    """Parse #rgb / #rrggbb (leading # optional) into an (r, g, b) tuple."""
    digits = hex_color[1:] if hex_color.startswith('#') else hex_color
    if not is_valid_hex('#' + digits):
        raise MalformedColorError(f"Invalid hex color {hex_color!r}. Use format #rgb or #rrggbb.")
    if len(digits) == 3:
        digits = ''.join(d * 2 for d in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Clamp and round each channel, then pack as lowercase #rrggbb."""
    channels = [max(0, min(255, _round_half_up(v))) for v in (r, g, b)]
    return '#' + ''.join(f"{c:02x}" for c in channels)


# =============================================================================
# sRGB transfer function
# =============================================================================

def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    """Convert gamma-encoded sRGB (0-255) to linear light (0-1)."""
    rgb_norm = _as_rows(rgb) / 255.0
    mask = rgb_norm > 0.04045
    return np.where(mask, ((rgb_norm + 0.055) / 1.055) ** 2.4, rgb_norm / 12.92)


def linear_to_srgb(rgb_linear: np.ndarray) -> np.ndarray:
    """Convert linear light to gamma-encoded sRGB on the 0-255 scale.

    Out-of-gamut values are left unclamped; rgb_to_hex does the final clamp.
    """
    rgb_linear = _as_rows(rgb_linear)
    mask = rgb_linear > 0.0031308
    rgb = np.where(mask, 1.055 * np.power(np.clip(rgb_linear, 0, None), 1/2.4) - 0.055, 12.92 * rgb_linear)
    return rgb * 255


# =============================================================================
# OKLAB / OKLCH
# =============================================================================

def linear_rgb_to_oklab(rgb_linear: np.ndarray) -> np.ndarray:
    """Linear sRGB -> OKLAB (L, a, b)."""
    lms = _as_rows(rgb_linear) @ M_RGB_TO_LMS.T
    return np.cbrt(lms) @ M_LMS_TO_OKLAB.T


def oklab_to_linear_rgb(lab: np.ndarray) -> np.ndarray:
    """OKLAB (L, a, b) -> linear sRGB. Not clamped."""
    lms_ = _as_rows(lab) @ M_OKLAB_TO_LMS.T
    return (lms_ ** 3) @ M_LMS_TO_RGB.T


def oklab_to_oklch(lab: np.ndarray) -> np.ndarray:
    """OKLAB -> OKLCH with hue in degrees [0, 360)."""
    lab = _as_rows(lab)
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]
    C = np.sqrt(a * a + b * b)
    H = np.mod(np.degrees(np.arctan2(b, a)), 360)
    # Tiny negative angles round up to exactly 360
    H = np.where(H >= 360, 0.0, H)
    return np.column_stack([L, C, H])


def oklch_to_oklab(lch: np.ndarray) -> np.ndarray:
    """OKLCH -> OKLAB."""
    lch = _as_rows(lch)
    L, C, H = lch[:, 0], lch[:, 1], lch[:, 2]
    h_rad = np.radians(H)
    return np.column_stack([L, C * np.cos(h_rad), C * np.sin(h_rad)])


def rgb_to_oklch(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB array (0-255) to OKLCH."""
    return oklab_to_oklch(linear_rgb_to_oklab(srgb_to_linear(rgb)))


def oklch_to_rgb(lch: np.ndarray) -> np.ndarray:
    """Convert OKLCH array to unrounded, unclamped RGB (0-255 scale)."""
    return linear_to_srgb(oklab_to_linear_rgb(oklch_to_oklab(lch)))


# =============================================================================
# HSL
# =============================================================================

def rgb_to_hsl(r: float, g: float, b: float) -> tuple:
    """Convert RGB (0-255) to (hue degrees, saturation 0-1, lightness 0-1)."""
    r, g, b = r / 255, g / 255, b / 255
    high = max(r, g, b)
    low = min(r, g, b)
    l = (high + low) / 2

    # Achromatic
    if high == low:
        return 0.0, 0.0, l

    d = high - low
    s = d / (2 - high - low) if l > 0.5 else d / (high + low)

    if high == r:
        h = ((g - b) / d + (6 if g < b else 0)) / 6
    elif high == g:
        h = ((b - r) / d + 2) / 6
    else:
        h = ((r - g) / d + 4) / 6

    return h * 360, s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1/6:
        return p + (q - p) * 6 * t
    if t < 1/2:
        return q
    if t < 2/3:
        return p + (q - p) * (2/3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple:
    """Convert HSL to integer RGB (0-255). Hue is ignored when s == 0."""
    h = h / 360
    if s == 0:
        v = _round_half_up(l * 255)
        return v, v, v

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return (
        _round_half_up(_hue_to_channel(p, q, h + 1/3) * 255),
        _round_half_up(_hue_to_channel(p, q, h) * 255),
        _round_half_up(_hue_to_channel(p, q, h - 1/3) * 255),
    )


# =============================================================================
# Hex wrappers
# =============================================================================

def hex_to_hsl(hex_color: str) -> tuple:
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_oklch(hex_color: str) -> tuple:
    """Convert a hex string to an (L, C, H) tuple of floats."""
    lch = rgb_to_oklch(hex_to_rgb(hex_color))[0]
    return float(lch[0]), float(lch[1]), float(lch[2])


def oklch_to_hex(L: float, C: float, H: float) -> str:
    rgb = oklch_to_rgb([L, C, H])[0]
    return rgb_to_hex(*rgb)
