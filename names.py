#!/usr/bin/env python3
"""Semantic names for palette positions."""

BASE_NAMES = ['primary', 'secondary', 'tertiary', 'accent', 'neutral']

# Small palettes skip roles that would be redundant
NAME_MAPS = {
    1: ['primary'],
    2: ['primary', 'secondary'],
    3: ['primary', 'secondary', 'accent'],
    4: ['primary', 'secondary', 'accent', 'neutral'],
    5: BASE_NAMES,
}


def assign_names(count: int) -> list[str]:
    """Return `count` role names, extending with accent-2, accent-3, ..."""
    if count <= 0:
        return []
    if count in NAME_MAPS:
        return list(NAME_MAPS[count])

    names = list(BASE_NAMES)
    for i in range(len(BASE_NAMES), count):
        names.append(f"accent-{i - 3}")
    return names
