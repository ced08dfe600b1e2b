#!/usr/bin/env python3
"""
Color wheel strategies for generating harmonious hue sets.

All angles are in degrees and normalized into [0, 360).
"""

from enum import Enum
from typing import Optional


class Strategy(str, Enum):
    EVENLY_SPACED = 'evenly-spaced'
    ANALOGOUS = 'analogous'
    COMPLEMENTARY = 'complementary'
    SPLIT_COMPLEMENTARY = 'split-complementary'
    TRIADIC = 'triadic'
    TETRADIC = 'tetradic'


STRATEGY_NAMES = [s.value for s in Strategy]

ANALOGOUS_STEP = 30  # Degrees between analogous neighbours

# Offsets from the anchor for the fixed-harmony strategies
KEY_ANGLES = {
    Strategy.COMPLEMENTARY: (0, 180),
    Strategy.SPLIT_COMPLEMENTARY: (0, 150, 210),
    Strategy.TRIADIC: (0, 120, 240),
    Strategy.TETRADIC: (0, 90, 180, 270),
}


class InvalidCountError(ValueError):
    """Raised when a hue count is not usable (zero, negative)."""


class UnknownStrategyError(ValueError):
    """Raised by callers that refuse to fall back on an unknown strategy name."""


def normalize_hue(hue: float) -> float:
    """Wrap an angle into [0, 360) using floor-modulo."""
    hue = hue % 360
    # -1e-14 % 360 rounds to 360.0
    return 0.0 if hue >= 360 else hue


def parse_strategy(name: str) -> Optional[Strategy]:
    """Return the Strategy for a name, or None if the name is unknown."""
    try:
        return Strategy(name)
    except ValueError:
        return None


def _evenly_spaced(anchor: float, count: int) -> list[float]:
    step = 360 / count
    return [normalize_hue(anchor + i * step) for i in range(count)]


def _analogous(anchor: float, count: int) -> list[float]:
    hues = [normalize_hue(anchor)]
    i = 1
    while len(hues) < count:
        hues.append(normalize_hue(anchor + i * ANALOGOUS_STEP))
        if len(hues) < count:
            hues.append(normalize_hue(anchor - i * ANALOGOUS_STEP))
        i += 1
    return hues


def _from_key_angles(anchor: float, count: int, key_angles: tuple) -> list[float]:
    hues = [normalize_hue(anchor + a) for a in key_angles[:count]]
    # Over-requested harmonies continue on the even grid, not between the keys
    step = 360 / count
    for i in range(len(hues), count):
        hues.append(normalize_hue(anchor + i * step))
    return hues


def generate_hues(anchor_hue: float, count: int, strategy) -> list[float]:
    """
    Generate `count` hues around `anchor_hue` using a named strategy.

    Args:
        anchor_hue: Hue of the anchor color in degrees (any range)
        count: Number of hues to return, must be >= 1
        strategy: Strategy member or its name; unknown names fall back
            to evenly-spaced

    Returns:
        List of `count` hues in [0, 360), anchor first.
    """
    if count <= 0:
        raise InvalidCountError(f"Hue count must be at least 1, got {count}")

    if not isinstance(strategy, Strategy):
        strategy = parse_strategy(strategy)

    if strategy is Strategy.ANALOGOUS:
        return _analogous(anchor_hue, count)
    elif strategy in KEY_ANGLES:
        return _from_key_angles(anchor_hue, count, KEY_ANGLES[strategy])
    else:
        return _evenly_spaced(anchor_hue, count)


def fill_largest_gaps(existing_hues: list[float], needed: int) -> list[float]:
    """
    Place `needed` new hues, each at the midpoint of the widest gap.

    Hues are inserted one at a time so each placement sees the previous
    ones. On equal gaps the first one found (ascending hue order, the
    wrap-around gap last) wins.

    Returns:
        Only the new hues, in insertion order.
    """
    if needed < 0:
        raise InvalidCountError(f"Cannot fill a negative number of hues ({needed})")
    if not existing_hues:
        raise ValueError("Gap filling needs at least one existing hue")

    hues = list(existing_hues)
    result = []
    for _ in range(needed):
        ordered = sorted(hues)
        max_gap = 0.0
        best_mid = 0.0
        for i, hue in enumerate(ordered):
            if i + 1 < len(ordered):
                gap = ordered[i + 1] - hue
            else:
                gap = 360 - hue + ordered[0]
            if gap > max_gap:
                max_gap = gap
                best_mid = normalize_hue(hue + gap / 2)
        result.append(best_mid)
        hues.append(best_mid)
    return result
