"""Render a progress snapshot as a single terminal line.

Everything here is a pure function of its arguments: the session passes in
the count, the total (None when unknown), the elapsed seconds and the
terminal width, and gets back the text to draw after a carriage return.

Two bar bodies exist. With a known total the bar fills from the left in
proportion to the count. Without one, a segment slides across the bar
following the style's slide law, wrapping around the right edge in
WRAPPING mode. Both paint their cells by cycling through the style's
glyphs, shifted over time by the rotation speed.
"""

import math
from typing import Optional

from waiting.progress.styles import BarStyle, ProgressStyle, SessionConfig, SlideStyle
from waiting.progress.timefmt import format_elapsed
from waiting.shared.terminal import char_width, text_width


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def title_suffix(text_style: ProgressStyle, progress: int, total: Optional[int]) -> str:
    """Numeric text shown after the title."""
    if text_style is ProgressStyle.BARE:
        return ""
    if total is None:
        return f"{progress}"
    if text_style is ProgressStyle.PERCENT:
        return f"{progress / max(total, 1) * 100:.2f}% "
    return f"{progress}/{total} "


def title_line(config: SessionConfig, progress: int, total: Optional[int], elapsed: float) -> str:
    """Title, numeric suffix and optional elapsed time, with a trailing space."""
    time = f" | {format_elapsed(elapsed)}" if config.show_elapsed else ""
    separator = " " if config.title else ""
    suffix = title_suffix(config.text_style, progress, total)
    return f"{config.title}{separator}{suffix}{time} "


def bar_width(columns: int, title: str, style: BarStyle, max_width: Optional[int] = None) -> int:
    """Columns left for the bar body once the title and ends are placed."""
    used = text_width(title) + text_width(style.left_end) + text_width(style.right_end)
    width = max(columns - used, 0)
    if max_width is not None:
        width = min(width, max_width)
    return width


def average_glyph_width(glyphs: str) -> float:
    widths = [char_width(c) for c in glyphs]
    average = sum(1 if w is None else w for w in widths) / len(glyphs)
    return average if average > 0 else 1.0


def paint(glyphs: str, columns: int, start: int) -> str:
    """Fill ``columns`` cells with glyphs, beginning at glyph index ``start``."""
    if columns <= 0:
        return ""
    count = round_half_away(columns / average_glyph_width(glyphs))
    painted = "".join(glyphs[(start + i) % len(glyphs)] for i in range(count))
    # Wide glyphs can round past the budget
    while painted and text_width(painted) > columns:
        painted = painted[:-1]
    return painted


def pad(text: str, columns: int) -> str:
    return text + " " * max(columns - text_width(text), 0)


def determinate_body(progress: int, total: int, width: int, style: BarStyle, rotation: int = 0) -> str:
    """Bar filled in proportion to ``progress / total``."""
    scaled = round_half_away(progress / max(total, 1) * width)
    scaled = max(0, min(scaled, width))
    return pad(paint(style.glyphs, scaled, rotation), width)


def segment_width(width: int, style: BarStyle) -> int:
    """Width of the sliding segment, at least one column."""
    ratio = min(style.slide_ratio, 1.0)
    return max(round_half_away(width * ratio), 1)


def slide_position(style: BarStyle, elapsed: float) -> float:
    """Raw position of the sliding segment for the style's slide law."""
    ratio = min(style.slide_ratio, 1.0)
    speed = style.slide_speed
    if style.slide is SlideStyle.SMOOTH:
        return -math.cos(elapsed * speed) * 0.5 + 0.5
    if style.slide is SlideStyle.LINEAR:
        phase = elapsed * speed / math.pi
        return 2.0 * abs(phase - math.floor(phase + 0.5))
    # WRAPPING: sawtooth over the whole width, period shrinks with the segment
    if speed == 0 or ratio >= 1.0:
        return 0.0
    period = math.pi / speed * (1.0 - ratio)
    return (elapsed % period) / period / (1.0 - ratio)


def slide_offset(style: BarStyle, elapsed: float, width: int) -> int:
    """Column where the sliding segment starts.

    LINEAR and SMOOTH stay within ``[0, width - segment]``. WRAPPING may start
    anywhere before the right edge; the overflow is drawn at the left.
    """
    ratio = min(style.slide_ratio, 1.0)
    offset = int(slide_position(style, elapsed) * width * (1.0 - ratio))
    if style.slide is SlideStyle.WRAPPING:
        limit = width - 1
    else:
        limit = width - segment_width(width, style)
    return max(0, min(offset, limit))


def indeterminate_body(width: int, style: BarStyle, elapsed: float, rotation: int = 0) -> str:
    """Bar with a segment sliding across it."""
    if width <= 0:
        return ""
    segment = segment_width(width, style)
    offset = slide_offset(style, elapsed, width)
    visible = min(segment, width - offset)
    wrapped = segment - visible

    head = paint(style.glyphs, wrapped, rotation)
    gap = " " * max(offset - text_width(head), 0)
    tail = paint(style.glyphs, visible, rotation + offset)
    return pad(head + gap + tail, width)


def render_line(
    config: SessionConfig,
    progress: int,
    total: Optional[int],
    elapsed: float,
    columns: int,
) -> str:
    """Build the full progress line for one frame.

    Only the bar body is fitted to ``columns``: it shrinks to zero when the
    title and bar ends take the whole width. The title itself is never
    truncated, so a title wider than the terminal makes the line longer
    than ``columns`` and the terminal wraps it.
    """
    style = config.bar_style
    title = title_line(config, progress, total, elapsed)
    width = bar_width(columns, title, style, config.max_width)
    rotation = round_half_away(elapsed * style.rotation_speed)

    if total is not None:
        body = determinate_body(progress, total, width, style, rotation)
    else:
        body = indeterminate_body(width, style, elapsed, rotation)
    return f"{title}{style.left_end}{body}{style.right_end}"
