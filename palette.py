#!/usr/bin/env python3
"""
Palette generation pipeline.

Builds a cohesive color palette from zero or more anchor colors and
renders it as terminal text, an HTML report, a PNG swatch sheet or a
lightness/chroma plot.
Four stages: Hue Assignment → Base Colors → Normalization → Shades
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from PIL import Image

from color_space import (
    MalformedColorError, is_valid_hex, hex_to_hsl, hsl_to_hex,
    hex_to_oklch, hex_to_rgb, oklch_to_hex,
)
from names import assign_names
from shades import SHADE_LEVELS, BASE_LEVEL, generate_shades
from strategies import (
    STRATEGY_NAMES, InvalidCountError, UnknownStrategyError, Strategy,
    generate_hues, fill_largest_gaps, parse_strategy,
)


# =============================================================================
# Constants
# =============================================================================

MIN_DEFAULT_COUNT = 3

# OKLCH targets applied to every color (anchor included) under a mood
MOODS = {
    'vibrant': {'L': 0.55, 'C': 0.22},
    'pastel': {'L': 0.82, 'C': 0.07},
}

# Lightness/chroma for a random anchor when no mood is set
RANDOM_ANCHOR = {'L': 0.55, 'C': 0.15}

# OKLCH lightness above which text on a swatch is drawn dark
LIGHT_BACKGROUND_L = 0.6

INPUT_MARKER = '  ← input'


# =============================================================================
# Data
# =============================================================================

@dataclass
class PaletteColor:
    """A base color with its name and shade ramp."""
    name: str
    hex: str
    is_input: bool
    shades: list = field(default_factory=list)  # List of Shade


@dataclass
class Palette:
    """Output of the pipeline."""
    colors: list  # List of PaletteColor, inputs first
    strategy: Strategy
    mood: Optional[str] = None
    raw: bool = False

    @property
    def shade_count(self) -> int:
        return sum(len(c.shades) for c in self.colors)


# =============================================================================
# Pipeline
# =============================================================================

def random_anchor(mood: Optional[str] = None, rng: Optional[np.random.Generator] = None) -> str:
    """Pick a random hue at the mood's (or a medium) lightness and chroma."""
    rng = rng if rng is not None else np.random.default_rng()
    target = MOODS[mood] if mood else RANDOM_ANCHOR
    return oklch_to_hex(target['L'], target['C'], float(rng.uniform(0, 360)))


def assign_hues(colors: list[str], count: int, strategy: Strategy) -> list[float]:
    """Return hues for the generated (non-input) colors.

    Several inputs fill the gaps between their own hues; a single input
    seeds the strategy and its leading hues are dropped.
    """
    if len(colors) >= 2 and count > len(colors):
        input_hues = [hex_to_hsl(c)[0] for c in colors]
        return fill_largest_gaps(input_hues, count - len(colors))

    anchor_h = hex_to_hsl(colors[0])[0]
    return generate_hues(anchor_h, count, strategy)[len(colors):]


def normalize_colors(base_colors: list[str], mood: Optional[str] = None) -> list[str]:
    """Re-target OKLCH lightness/chroma while keeping each color's hue.

    Without a mood every color after the first takes the first color's
    L and C. A mood overrides L and C for all colors, anchor included.
    """
    if mood:
        target_L, target_C = MOODS[mood]['L'], MOODS[mood]['C']
        start = 0
    else:
        target_L, target_C, _ = hex_to_oklch(base_colors[0])
        start = 1

    normalized = list(base_colors)
    for i in range(start, len(normalized)):
        _, _, h = hex_to_oklch(normalized[i])
        normalized[i] = oklch_to_hex(target_L, target_C, h)
    return normalized


def build_palette(colors: list[str], count: Optional[int] = None,
                  strategy='evenly-spaced', raw: bool = False,
                  mood: Optional[str] = None,
                  rng: Optional[np.random.Generator] = None) -> Palette:
    """
    Run the full pipeline.

    Args:
        colors: Hex colors (#rgb or #rrggbb). May be empty for a random anchor.
        count: Total number of base colors (default: max(len(colors), 3))
        strategy: Strategy member or name, used when fewer than two colors are given
        raw: Skip normalization and keep input colors exactly as given
        mood: 'vibrant' or 'pastel' to override target lightness/chroma
        rng: numpy Generator for the random anchor

    Returns:
        Palette with one PaletteColor per base color.
    """
    if mood is not None and mood not in MOODS:
        raise ValueError(f"Unknown mood {mood!r}. Valid moods: {', '.join(MOODS)}")

    resolved = strategy if isinstance(strategy, Strategy) else parse_strategy(strategy)
    if resolved is None:
        raise UnknownStrategyError(
            f'Unknown strategy "{strategy}".\nValid strategies: {", ".join(STRATEGY_NAMES)}'
        )

    if count is not None and count < 1:
        raise InvalidCountError(f"Count must be at least 1, got {count}")

    colors = list(colors)
    for c in colors:
        if not is_valid_hex(c):
            raise MalformedColorError(f'Invalid hex color "{c}". Use format #rgb or #rrggbb.')

    if count is None:
        count = max(len(colors), MIN_DEFAULT_COUNT)

    if not colors:
        colors.append(random_anchor(mood, rng))

    count = max(count, len(colors))

    # Stage 1: Hue Assignment
    fill_hues = assign_hues(colors, count, resolved)

    # Stage 2: Base Colors (generated fills borrow the anchor's HSL s/l)
    _, anchor_s, anchor_l = hex_to_hsl(colors[0])
    base_colors = colors + [hsl_to_hex(h, anchor_s, anchor_l) for h in fill_hues]

    # Stage 3: Normalization
    if not raw:
        base_colors = normalize_colors(base_colors, mood)

    # Stage 4: Shades
    names = assign_names(count)
    palette_colors = [
        PaletteColor(
            name=names[i],
            hex=hex_color,
            is_input=i < len(colors),
            shades=generate_shades(hex_color),
        )
        for i, hex_color in enumerate(base_colors)
    ]

    return Palette(colors=palette_colors, strategy=resolved, mood=mood, raw=raw)


# =============================================================================
# Render
# =============================================================================

def is_light(hex_color: str) -> bool:
    return hex_to_oklch(hex_color)[0] > LIGHT_BACKGROUND_L


def text_color_for_background(hex_color: str) -> str:
    """Return black or white text color based on background lightness."""
    return "#000" if is_light(hex_color) else "#fff"


def colorize(text: str, hex_color: str) -> str:
    """Wrap text in a 24-bit ANSI background with a readable foreground."""
    r, g, b = hex_to_rgb(hex_color)
    fg = '30' if is_light(hex_color) else '97'  # black or bright white
    return f"\x1b[{fg};48;2;{r};{g};{b}m{text}\x1b[0m"


def should_use_color(stream=None) -> bool:
    """ANSI output only for terminals, and never when NO_COLOR is set."""
    stream = stream if stream is not None else sys.stdout
    return stream.isatty() and not os.environ.get('NO_COLOR')


def render(palette: Palette, use_color: bool = False) -> str:
    """Render the palette as one `name-level: hex` line per shade."""
    lines = []

    # Pad every label to the widest possible one
    width = max(len(f"{c.name}-950: #000000") for c in palette.colors) + 2

    for i, color in enumerate(palette.colors):
        for shade in color.shades:
            label = f"{color.name}-{shade.level}: {shade.hex}"
            label = f" {label:<{width}}"
            if use_color:
                label = colorize(label, shade.hex)
            marker = INPUT_MARKER if color.is_input and shade.level == BASE_LEVEL else ''
            lines.append(label + marker)
        if i < len(palette.colors) - 1:
            lines.append("")

    return "\n".join(lines)


def render_html(palette: Palette) -> str:
    """Render the palette as a standalone HTML page."""
    from html import escape

    css = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: system-ui, -apple-system, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.5;
            padding: 2rem;
            max-width: 1100px;
            margin: 0 auto;
        }
        h1 { font-size: 1.5rem; margin-bottom: 0.5rem; }
        h2 { font-size: 1.1rem; margin: 1.5rem 0 0.75rem; text-transform: capitalize; }
        .meta { color: #666; font-size: 0.9rem; margin-bottom: 1rem; }
        .palette-strip {
            display: flex;
            height: 80px;
            border-radius: 8px;
            overflow: hidden;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
            margin: 1.5rem 0;
        }
        .palette-strip .swatch {
            flex: 1;
            display: flex;
            align-items: flex-end;
            justify-content: center;
            padding: 0.5rem;
            font-size: 0.7rem;
            font-weight: 500;
        }
        .ramp {
            display: grid;
            grid-template-columns: repeat(11, 1fr);
            border-radius: 8px;
            overflow: hidden;
            box-shadow: 0 1px 3px rgba(0,0,0,0.08);
        }
        .ramp .swatch {
            height: 72px;
            display: flex;
            flex-direction: column;
            justify-content: flex-end;
            padding: 0.35rem;
            font-family: monospace;
            font-size: 0.65rem;
        }
        .ramp .swatch.input { outline: 3px solid #333; outline-offset: -3px; }
        .ramp .level { font-weight: 600; }
    """

    strategy = palette.strategy.value
    details = [f"Strategy: {strategy}"]
    if palette.mood:
        details.append(f"Mood: {palette.mood}")
    if palette.raw:
        details.append("Raw (not normalized)")
    details.append(f"{len(palette.colors)} colors, {palette.shade_count} shades")

    lines = [
        '<!DOCTYPE html>',
        '<html lang="en">',
        '<head>',
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f'  <title>Palette: {escape(palette.colors[0].hex)}</title>',
        f'  <style>{css}</style>',
        '</head>',
        '<body>',
        '<h1>Palette</h1>',
        f'<p class="meta">{escape(" · ".join(details))}</p>',
    ]

    # Base color strip
    lines.append('<div class="palette-strip">')
    for color in palette.colors:
        text_color = text_color_for_background(color.hex)
        lines.append(f'  <div class="swatch" style="background:{color.hex}; color:{text_color}">{color.hex}</div>')
    lines.append('</div>')

    # One ramp per color
    for color in palette.colors:
        lines.append(f'<h2>{escape(color.name)}</h2>')
        lines.append('<div class="ramp">')
        for shade in color.shades:
            text_color = text_color_for_background(shade.hex)
            classes = "swatch input" if color.is_input and shade.level == BASE_LEVEL else "swatch"
            lines.append(f'  <div class="{classes}" style="background:{shade.hex}; color:{text_color}">'
                         f'<span class="level">{shade.level}</span>{shade.hex}</div>')
        lines.append('</div>')

    lines.append('</body>')
    lines.append('</html>')

    return '\n'.join(lines)


def visualize_palette(palette: Palette, output_path: str) -> None:
    """
    Save a PNG swatch sheet: one row per base color, one swatch per shade.
    """
    from PIL import ImageDraw

    swatch_size = 60
    padding = 10
    text_height = 20
    label_width = 100

    cols = len(SHADE_LEVELS)
    img_width = label_width + cols * (swatch_size + padding) + padding
    img_height = len(palette.colors) * (swatch_size + text_height + padding) + padding

    img = Image.new('RGB', (img_width, img_height), (240, 240, 240))
    draw = ImageDraw.Draw(img)

    for row, color in enumerate(palette.colors):
        y = padding + row * (swatch_size + text_height + padding)

        # Color name
        draw.text((padding, y + swatch_size // 2 - 5), color.name, fill=(0, 0, 0))

        for col, shade in enumerate(color.shades):
            x = label_width + col * (swatch_size + padding)
            draw.rectangle([x, y, x + swatch_size, y + swatch_size], fill=hex_to_rgb(shade.hex))

            if color.is_input and shade.level == BASE_LEVEL:
                draw.rectangle([x, y, x + swatch_size, y + swatch_size], outline=(0, 0, 0), width=2)

            # Level label centered under swatch
            text = str(shade.level)
            bbox = draw.textbbox((0, 0), text)
            text_x = x + (swatch_size - (bbox[2] - bbox[0])) // 2
            draw.text((text_x, y + swatch_size + 4), text, fill=(100, 100, 100))

    img.save(output_path)
    print(f"Saved visualization to {output_path}")


def plot_ramps(palette: Palette, output_path: str) -> None:
    """Plot OKLCH lightness and chroma against shade level for every color."""
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    positions = np.arange(len(SHADE_LEVELS))

    for color in palette.colors:
        lch = np.array([hex_to_oklch(s.hex) for s in color.shades])
        axes[0].plot(positions, lch[:, 0], marker='o', color=color.hex, label=color.name)
        axes[1].plot(positions, lch[:, 1], marker='o', color=color.hex, label=color.name)

    for ax, title, ylabel in [(axes[0], 'Lightness by Shade', 'OKLCH L'),
                              (axes[1], 'Chroma by Shade', 'OKLCH C')]:
        ax.set_xticks(positions)
        ax.set_xticklabels([str(level) for level in SHADE_LEVELS])
        ax.set_xlabel('Shade')
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.grid(alpha=0.3)
    axes[0].legend(fontsize=8)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)
    print(f"Saved ramp plot to {output_path}")


# =============================================================================
# CLI
# =============================================================================

EPILOG = """\
Strategies:
  analogous             Adjacent colors on the wheel (±30°)
  complementary         Opposite colors (180°)
  split-complementary   Split complement (150° and 210°)
  triadic               Three-way split (120°)
  tetradic              Four-way split (90°)
  evenly-spaced         Equal spacing (360°/count)

Each base color produces 11 Tailwind-scale shades (50-950) in the OKLCH
color space. Shade 500 is the base color.

By default all colors are normalized to the first input color's OKLCH
lightness and chroma so the palette looks cohesive. Use --raw to keep
input colors exactly as given, or --vibrant / --pastel to override the
target lightness and chroma.

ANSI color output is used when printing to a terminal. Set NO_COLOR=1
to disable.

Examples:
  palette                                       Random 3-color palette
  palette #aa5420 --count 5 --strategy triadic  5 triadic colors
  palette #aa5420 #9b2010 --count 5             2 inputs + 3 generated
  palette #aa5420 --pastel -o                   Pastel mood, HTML report
"""


def parse_color_args(values: list[str]) -> list[str]:
    """Keep #-prefixed values, prefix bare 3/6-digit hex, skip the rest."""
    colors = []
    for value in values:
        if value.startswith('#'):
            colors.append(value)
        elif is_valid_hex('#' + value):
            colors.append('#' + value)
        else:
            print(f"Warning: Ignoring argument {value!r}", file=sys.stderr)
    return colors


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog='palette',
        description='Generate a color palette with Tailwind-style shades from anchor colors.',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'colors',
        nargs='*',
        help='One or more hex colors (e.g. #aa5420 9b2010). Random if omitted.'
    )
    parser.add_argument(
        '--count', '-c',
        type=int,
        default=None,
        help='Total number of base colors (default: max(inputs, 3))'
    )
    parser.add_argument(
        '--strategy', '-s',
        default=Strategy.EVENLY_SPACED.value,
        help='Color strategy (default: evenly-spaced)'
    )
    parser.add_argument(
        '--raw', '-r',
        action='store_true',
        help='Skip normalization, use input colors exactly as given'
    )
    mood = parser.add_mutually_exclusive_group()
    mood.add_argument(
        '--vibrant',
        dest='mood',
        action='store_const',
        const='vibrant',
        help='High saturation, punchy colors'
    )
    mood.add_argument(
        '--pastel',
        dest='mood',
        action='store_const',
        const='pastel',
        help='Soft, light, desaturated colors'
    )
    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=True,
        default=None,
        help='Write HTML report. Optionally specify path, otherwise writes palette.html.'
    )
    parser.add_argument(
        '--swatch',
        default=None,
        help='Write a PNG swatch sheet to this path'
    )
    parser.add_argument(
        '--plot',
        default=None,
        help='Write a lightness/chroma plot of the ramps to this path'
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    from pathlib import Path

    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    colors = parse_color_args(args.colors)

    try:
        palette = build_palette(colors, count=args.count, strategy=args.strategy,
                                raw=args.raw, mood=args.mood)
    except (MalformedColorError, UnknownStrategyError, InvalidCountError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(render(palette, use_color=should_use_color()))

    if args.output:
        output_path = Path('palette.html') if args.output is True else Path(args.output)
        try:
            output_path.write_text(render_html(palette), encoding='utf-8')
            print(f"\nWrote: {output_path}")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        if args.swatch:
            visualize_palette(palette, args.swatch)
        if args.plot:
            plot_ramps(palette, args.plot)
    except (OSError, ValueError) as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
