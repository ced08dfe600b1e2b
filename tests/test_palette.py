"""Tests for the palette pipeline, renderers and CLI."""

import io

import numpy as np
import pytest
from PIL import Image

from color_space import MalformedColorError, hex_to_hsl, hsl_to_hex, hex_to_oklch, oklch_to_hex
from palette import (
    INPUT_MARKER, MOODS, build_palette, render, render_html, should_use_color,
    visualize_palette, plot_ramps, main,
)
from shades import BASE_LEVEL
from strategies import InvalidCountError, Strategy, UnknownStrategyError, generate_hues


def base_hexes(palette) -> list:
    return [c.hex for c in palette.colors]


# =============================================================================
# Pipeline
# =============================================================================

def test_triadic_end_to_end() -> None:
    palette = build_palette(['#aa5420'], count=3, strategy='triadic')

    assert palette.strategy is Strategy.TRIADIC
    assert len(palette.colors) == 3
    assert palette.shade_count == 33
    assert all(len(c.shades) == 11 for c in palette.colors)

    first = {s.level: s.hex for s in palette.colors[0].shades}
    assert first[BASE_LEVEL] == '#aa5420'
    assert [c.name for c in palette.colors] == ['primary', 'secondary', 'accent']
    assert [c.is_input for c in palette.colors] == [True, False, False]


def test_triadic_raw_uses_anchor_hsl() -> None:
    h, s, l = hex_to_hsl('#aa5420')
    hues = generate_hues(h, 3, 'triadic')
    assert hues == pytest.approx([h, (h + 120) % 360, (h + 240) % 360])

    palette = build_palette(['#aa5420'], count=3, strategy='triadic', raw=True)
    assert base_hexes(palette) == ['#aa5420'] + [hsl_to_hex(hue, s, l) for hue in hues[1:]]


def test_normalization_matches_anchor_lightness_and_chroma() -> None:
    palette = build_palette(['#aa5420'], count=4, strategy='tetradic')
    anchor_L, anchor_C, _ = hex_to_oklch('#aa5420')

    assert palette.colors[0].hex == '#aa5420'
    for color in palette.colors[1:]:
        L, C, _ = hex_to_oklch(color.hex)
        assert L == pytest.approx(anchor_L, abs=0.02)
        assert C == pytest.approx(anchor_C, abs=0.02)


def test_mood_retargets_anchor_too() -> None:
    palette = build_palette(['#aa5420'], mood='vibrant')
    target = MOODS['vibrant']
    _, _, h = hex_to_oklch('#aa5420')

    assert palette.colors[0].hex == oklch_to_hex(target['L'], target['C'], h)
    assert palette.colors[0].hex != '#aa5420'
    assert palette.mood == 'vibrant'


def test_raw_keeps_inputs_exactly() -> None:
    palette = build_palette(['#AA5420', '#3366ff'], raw=True)
    assert base_hexes(palette)[:2] == ['#AA5420', '#3366ff']
    assert palette.colors[0].shades[5].hex == '#AA5420'


def test_multiple_inputs_fill_largest_gaps() -> None:
    palette = build_palette(['#ff0000', '#00ffff'], count=3, raw=True)
    # Hues 0 and 180 -> fill at 90, with red's saturation and lightness
    assert base_hexes(palette) == ['#ff0000', '#00ffff', '#80ff00']
    assert [c.is_input for c in palette.colors] == [True, True, False]


def test_multiple_inputs_ignore_strategy() -> None:
    a = build_palette(['#ff0000', '#00ffff'], count=4, strategy='analogous')
    b = build_palette(['#ff0000', '#00ffff'], count=4, strategy='tetradic')
    assert base_hexes(a) == base_hexes(b)


def test_count_defaults_and_floor() -> None:
    assert len(build_palette(['#aa5420']).colors) == 3

    inputs = ['#ff0000', '#00ff00', '#0000ff', '#ffff00']
    palette = build_palette(inputs, count=2)
    assert len(palette.colors) == 4
    assert all(c.is_input for c in palette.colors)
    assert palette.colors[3].name == 'neutral'


def test_single_input_count_one() -> None:
    palette = build_palette(['#aa5420'], count=1)
    assert base_hexes(palette) == ['#aa5420']


def test_random_anchor_is_reproducible() -> None:
    a = build_palette([], rng=np.random.default_rng(7))
    b = build_palette([], rng=np.random.default_rng(7))
    assert base_hexes(a) == base_hexes(b)
    assert len(a.colors) == 3


def test_random_anchor_uses_mood() -> None:
    palette = build_palette([], mood='pastel', rng=np.random.default_rng(3))
    L, _, _ = hex_to_oklch(palette.colors[0].hex)
    assert L == pytest.approx(MOODS['pastel']['L'], abs=0.02)


def test_invalid_inputs() -> None:
    with pytest.raises(MalformedColorError):
        build_palette(['aa5420'])
    with pytest.raises(MalformedColorError):
        build_palette(['#aa5420', '#12345'])
    with pytest.raises(UnknownStrategyError):
        build_palette(['#aa5420'], strategy='rainbow')
    with pytest.raises(InvalidCountError):
        build_palette(['#aa5420'], count=0)
    with pytest.raises(ValueError):
        build_palette(['#aa5420'], mood='neon')


# =============================================================================
# Render
# =============================================================================

def test_render_plain_text() -> None:
    palette = build_palette(['#aa5420'], strategy='triadic')
    lines = render(palette).split('\n')

    assert len(lines) == 35
    assert lines[11] == '' and lines[23] == ''
    assert lines[0].startswith(' primary-50: #')
    assert lines[5].startswith(' primary-500: #aa5420')
    assert lines[5].endswith(INPUT_MARKER)
    assert sum(INPUT_MARKER in line for line in lines) == 1

    # Padded to len('secondary-950: #000000') + 2
    assert len(lines[0]) == 1 + 24
    assert '\x1b[' not in lines[0]


def test_render_ansi() -> None:
    palette = build_palette(['#aa5420'], raw=True)
    out = render(palette, use_color=True)
    assert '48;2;170;84;32m' in out
    assert out.count('\x1b[0m') == 33


def test_should_use_color(monkeypatch) -> None:
    class Terminal(io.StringIO):
        def isatty(self):
            return True

    monkeypatch.delenv('NO_COLOR', raising=False)
    assert should_use_color(Terminal())
    assert not should_use_color(io.StringIO())

    monkeypatch.setenv('NO_COLOR', '1')
    assert not should_use_color(Terminal())


def test_render_html() -> None:
    palette = build_palette(['#aa5420'], strategy='complementary')
    html = render_html(palette)

    assert html.startswith('<!DOCTYPE html>')
    assert 'Strategy: complementary' in html
    assert html.count('class="swatch input"') == 1
    for color in palette.colors:
        assert f'<h2>{color.name}</h2>' in html
        for shade in color.shades:
            assert shade.hex in html


def test_visualize_palette(tmp_path, capsys) -> None:
    palette = build_palette(['#aa5420'])
    output = tmp_path / 'swatch.png'
    visualize_palette(palette, str(output))

    with Image.open(output) as img:
        assert img.size[0] > img.size[1] > 0
    assert 'Saved visualization' in capsys.readouterr().out


def test_plot_ramps(tmp_path) -> None:
    palette = build_palette(['#aa5420', '#3366ff'])
    output = tmp_path / 'ramps.png'
    plot_ramps(palette, str(output))
    assert output.stat().st_size > 0


# =============================================================================
# CLI
# =============================================================================

def test_cli_prints_palette(capsys) -> None:
    main(['#aa5420', '--strategy', 'triadic'])
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len(lines) == 35
    assert '#aa5420' in lines[5]


def test_cli_accepts_bare_hex_and_count(capsys) -> None:
    main(['aa5420', '-c', '5'])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5 * 11 + 4
    assert lines[5].startswith(' primary-500: #aa5420')


def test_cli_ignores_non_colors(capsys) -> None:
    main(['hello', '#aa5420', '--raw'])
    captured = capsys.readouterr()
    assert "Ignoring argument 'hello'" in captured.err
    assert ' primary-500: #aa5420' in captured.out


@pytest.mark.parametrize('argv, message', [
    (['#zzz'], 'Invalid hex color "#zzz"'),
    (['#aa5420', '--strategy', 'rainbow'], 'Unknown strategy "rainbow"'),
    (['#aa5420', '--count', '0'], 'Count must be at least 1'),
])
def test_cli_errors(argv, message, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 1
    assert message in capsys.readouterr().err


def test_cli_moods_are_exclusive(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(['#aa5420', '--vibrant', '--pastel'])
    assert exc.value.code == 2


def test_cli_writes_outputs(tmp_path, capsys) -> None:
    html_path = tmp_path / 'report.html'
    swatch_path = tmp_path / 'swatch.png'
    main(['#aa5420', '--pastel', '--swatch', str(swatch_path), '--output', str(html_path)])

    out = capsys.readouterr().out
    assert f"Wrote: {html_path}" in out
    assert 'Mood: pastel' in html_path.read_text()
    assert swatch_path.exists()
