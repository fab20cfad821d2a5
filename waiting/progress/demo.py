#!/usr/bin/env python3
"""Show each progress style in turn.

Usage:
    python -m waiting.progress                  # Run every demo
    python -m waiting.progress --only wave      # Just the wave texture
    python -m waiting.progress --delay 0.05     # Slower frames
"""

import argparse
import itertools
import logging
import time
from dataclasses import replace

from waiting.progress.session import Progress
from waiting.progress.styles import ProgressStyle, SlideStyle, load_session_config
from waiting.shared.config import load_config
from waiting.shared.logging_config import setup_logging

logger = logging.getLogger(__name__)

WAVE_GLYPHS = "▁▁▂▂▃▄▅▆▇▇███▇▇▆▅▄▃▂▂▁"


def _drain(bar, delay, limit=None):
    """Pull items from ``bar``, stopping after ``limit`` when given."""
    with bar:
        for i, _ in enumerate(bar, start=1):
            time.sleep(delay)
            if limit is not None and i >= limit:
                break


def demo_fraction(base, args):
    bar = Progress(range(args.items), config=base)
    bar.title("Fraction").text_style(ProgressStyle.FRACTION)
    _drain(bar, args.delay)


def demo_percent(base, args):
    style = replace(base.bar_style, glyphs="--==##==", left_end="[", right_end="]")
    bar = Progress(range(args.items), config=base)
    bar.title("Percent with Custom Bar").text_style(ProgressStyle.PERCENT).bar_style(style)
    _drain(bar, args.delay)


def demo_unknown(base, args):
    bar = Progress(itertools.count(), config=base).title("Unknown Size").with_elapsed()
    _drain(bar, args.delay, args.steps)


def demo_smooth(base, args):
    style = replace(base.bar_style, slide=SlideStyle.SMOOTH)
    bar = Progress(itertools.count(), config=base)
    bar.title("Unknown Size Smooth").bar_style(style).with_elapsed()
    _drain(bar, args.delay, args.steps)


def demo_wave(base, args):
    style = replace(base.bar_style, glyphs=WAVE_GLYPHS, rotation_speed=-30.0, slide_ratio=1.0)
    bar = Progress(itertools.count(), config=base)
    bar.title("Unknown Size with WAVE").with_elapsed().bar_style(style)
    _drain(bar, args.delay, args.steps)


DEMOS = {
    'fraction': demo_fraction,
    'percent': demo_percent,
    'unknown': demo_unknown,
    'smooth': demo_smooth,
    'wave': demo_wave,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="waiting-demo",
        description="Render every progress style against a dummy workload.",
    )
    parser.add_argument('--items', type=int, default=150,
                        help='Items in the known-length demos (default: 150)')
    parser.add_argument('--steps', type=int, default=300,
                        help='Items pulled in the unknown-length demos (default: 300)')
    parser.add_argument('--delay', type=float, default=0.01,
                        help='Seconds to sleep per item (default: 0.01)')
    parser.add_argument('--only', action='append', choices=sorted(DEMOS),
                        help='Run only the named demo (repeatable)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    parser.add_argument('-q', '--quiet', action='store_true', help='Show only warnings and errors')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(fallback={})
    setup_logging("waiting", verbose=args.verbose, quiet=args.quiet, config=config)

    try:
        base = load_session_config(config)
    except (TypeError, ValueError) as e:
        logger.error("Invalid progress config: %s", e)
        return 1

    names = args.only or list(DEMOS)
    for name in names:
        logger.debug("Running demo: %s", name)
        DEMOS[name](base, args)

    logger.info("Ran %d demo(s)", len(names))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
