"""
demo.py - Render a sketchy path or pie chart to an image file.

Usage:
    python -m sketchpath.demo --path "M 10 10 L 90 10 A 40 40 0 0 1 10 10 Z"
    python -m sketchpath.demo --pie --seed 7 --output pie.png
"""

import sys
import logging
import argparse
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.pyplot as plt

from .config import DistortionConfig, DEFAULT_JITTER, DEFAULT_REPEATS
from .distort import DraftyPath
from .logging_utils import configure_logging
from .mpl_renderer import MPLPathDrawer
from .pie_chart import draw_pie_chart
from .rng import RNG

DEMO_PATH = "M 20 20 L 180 20 A 40 40 0 0 1 180 100 Q 100 180 20 100 Z"
DEMO_PIE = [("first", 10), ("second", 20), ("third", 30), ("fourth", 20), ("fifth", 30)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sketchpath",
        description="Render SVG path data with a hand-drawn look.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--path", default=None, help="SVG path data to render.")
    source.add_argument("--pie", action="store_true", help="Render the demo pie chart.")
    parser.add_argument("--jitter", type=float, default=DEFAULT_JITTER)
    parser.add_argument("--repeats", type=int, default=DEFAULT_REPEATS)
    parser.add_argument("--segments-per-curve", type=int, default=1)
    parser.add_argument("--fill", default=None, help="Fill color of the base layer.")
    parser.add_argument("--stroke", default=None, help="Stroke color of the outlines.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=Path("sketch.png"))
    parser.add_argument("--dpi", type=int, default=100)
    parser.add_argument("--log-dir", type=Path, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_dir=args.log_dir,
        name="sketchpath",
        run_prefix="demo",
    )
    logger = logging.getLogger("sketchpath.demo")

    try:
        config = DistortionConfig(
            jitter=args.jitter,
            repeats=args.repeats,
            segments_per_curve=args.segments_per_curve,
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    logger.info(f"DistortionConfig: {asdict(config)}")

    rng = RNG(seed=args.seed)
    fig, ax = plt.subplots(figsize=(4, 4))
    try:
        if args.pie:
            slices = draw_pie_chart(ax, DEMO_PIE, config=config, rng=rng)
            logger.info(f"Drew {len(slices)} pie slices.")
        else:
            attrs = {}
            if args.fill:
                attrs["fill"] = args.fill
            if args.stroke:
                attrs["stroke"] = args.stroke
            sketch = DraftyPath(MPLPathDrawer(ax, flip_y=True), config, rng=rng)
            passes = sketch(args.path or DEMO_PATH, attrs)
            ax.set_aspect("equal")
            logger.info(f"Drew {len(passes)} passes.")
        ax.axis("off")

        args.output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(args.output, dpi=args.dpi, bbox_inches="tight")
        logger.info(f"Image written: {args.output}")
    finally:
        plt.close(fig)
    return 0


if __name__ == "__main__":
    sys.exit(main())
