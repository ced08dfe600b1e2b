"""Tests for shade ramp generation."""

import pytest

from color_space import hex_to_oklch
from shades import SHADE_LEVELS, BASE_LEVEL, Shade, generate_shades, shade_lch


BASE_COLORS = ['#aa5420', '#9b2010', '#808080', '#10b981', '#6366f1', '#3b82f6']


def test_levels_in_order() -> None:
    shades = generate_shades('#aa5420')
    assert [s.level for s in shades] == list(SHADE_LEVELS)
    assert len(shades) == 11
    assert all(isinstance(s, Shade) for s in shades)


@pytest.mark.parametrize('base', BASE_COLORS + ['#AA5420', '#abc', '#000000', '#ffffff'])
def test_base_level_is_input_unchanged(base: str) -> None:
    shades = {s.level: s.hex for s in generate_shades(base)}
    assert shades[BASE_LEVEL] == base


def test_generated_shades_are_lowercase_hex() -> None:
    for shade in generate_shades('#AA5420'):
        if shade.level != BASE_LEVEL:
            assert shade.hex == shade.hex.lower()
            assert len(shade.hex) == 7


@pytest.mark.parametrize('base', BASE_COLORS)
def test_lightness_strictly_decreasing(base: str) -> None:
    lightness = [hex_to_oklch(s.hex)[0] for s in generate_shades(base)]
    assert all(a > b for a, b in zip(lightness, lightness[1:]))


@pytest.mark.parametrize('base', BASE_COLORS)
def test_chroma_never_amplified(base: str) -> None:
    base_lch = hex_to_oklch(base)
    chroma = [shade_lch(base_lch, level)[1] for level in SHADE_LEVELS]
    mid = SHADE_LEVELS.index(BASE_LEVEL)

    lighter = chroma[:mid + 1]
    darker = chroma[mid:]
    assert all(a <= b for a, b in zip(lighter, lighter[1:]))
    assert all(a >= b for a, b in zip(darker, darker[1:]))
    assert min(chroma) >= 0


def test_hue_held_constant() -> None:
    base_lch = hex_to_oklch('#aa5420')
    for level in SHADE_LEVELS:
        assert shade_lch(base_lch, level)[2] == base_lch[2]


def test_shade_lch_formula() -> None:
    base = (0.5, 0.1, 40.0)
    L, C, H = shade_lch(base, 50)
    assert L == pytest.approx(0.5 + (0.98 - 0.5) * 0.92)
    assert C == pytest.approx(0.1 * (1 - 0.92 * 0.95))

    L, C, H = shade_lch(base, 950)
    assert L == pytest.approx(0.5 - (0.5 - 0.10) * 0.92)
    assert C == pytest.approx(0.1 * (1 - 0.92 * 0.65))

    assert shade_lch(base, 500) == base
