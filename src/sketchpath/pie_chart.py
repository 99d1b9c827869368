"""
pie_chart.py
------------

Sketchy pie chart built from ``(name, value)`` records.

Each slice is a closed path ``M center L edge A r r 0 large 1 edge Z`` whose
angles are proportional to the slice value, starting at the positive X axis
and running in the direction of increasing angle (clockwise on a Y-down
canvas, as in SVG). Slices are drawn through ``DraftyPath``, so every wedge
gets a jittered fill and jittered outlines. Labels sit on the slice bisector
at ``LABEL_RADIUS_FACTOR`` of the radius.
"""

from __future__ import annotations

__all__ = [
    "PieSlice", "PIE_COLORS", "LABEL_RADIUS_FACTOR",
    "slice_color", "pie_slices", "draw_pie_chart",
]

import math
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from matplotlib.axes import Axes

from .config import DistortionConfig
from .distort import DraftyPath
from .geometry import Point, numeric
from .mpl_renderer import MPLPathDrawer
from .path_commands import format_number
from .rng import RNGBackend

PIE_COLORS = ("#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF")
LABEL_RADIUS_FACTOR = 0.6

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PieSlice:
    """Geometry and style of one wedge."""
    name: str
    value: float
    path_data: str
    color: str
    start_angle: float
    end_angle: float
    label_position: Point


def slice_color(index: int) -> str:
    return PIE_COLORS[index % len(PIE_COLORS)]


def _records(data: Union[dict, Iterable]) -> list[tuple[str, float]]:
    items = data.items() if isinstance(data, dict) else data
    records = []
    for item in items:
        if isinstance(item, dict):
            name, value = item["name"], item["value"]
        else:
            name, value = item
        records.append((str(name), float(value)))
    return records


def pie_slices(data: Union[dict, Iterable], radius: numeric = 100) -> list[PieSlice]:
    """Compute slice paths for a pie of ``radius`` centered at ``(radius, radius)``.

    Args:
        data: Mapping ``name -> value``, iterable of ``(name, value)`` pairs,
            or iterable of ``{"name": ..., "value": ...}`` dicts.
        radius: Pie radius in canvas units.

    Returns:
        list of PieSlice, in input order. Empty if the values do not sum to a
        positive total.

    Raises:
        ValueError: If ``radius`` is not positive.
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")

    records = _records(data)
    total = sum(value for _, value in records)
    if not total > 0:
        logger.debug(f"Pie total {total} is not positive; nothing to draw.")
        return []

    cx = cy = float(radius)
    r = format_number(radius)
    slices: list[PieSlice] = []
    cumulative = 0.0
    for index, (name, value) in enumerate(records):
        start = cumulative / total * 2 * math.pi
        cumulative += value
        end = cumulative / total * 2 * math.pi

        x1, y1 = cx + radius * math.cos(start), cy + radius * math.sin(start)
        x2, y2 = cx + radius * math.cos(end), cy + radius * math.sin(end)
        large_arc = 1 if end - start > math.pi else 0

        path_data = " ".join([
            f"M {format_number(cx)} {format_number(cy)}",
            f"L {format_number(x1)} {format_number(y1)}",
            f"A {r} {r} 0 {large_arc} 1 {format_number(x2)} {format_number(y2)}",
            "Z",
        ])

        mid = (start + end) / 2
        label_r = radius * LABEL_RADIUS_FACTOR
        slices.append(PieSlice(
            name=name,
            value=value,
            path_data=path_data,
            color=slice_color(index),
            start_angle=start,
            end_angle=end,
            label_position=Point(cx + label_r * math.cos(mid), cy + label_r * math.sin(mid)),
        ))
    return slices


def draw_pie_chart(
        ax     : Axes,
        data   : Union[dict, Iterable],
        radius : numeric                    = 100,
        config : Optional[DistortionConfig] = None,
        rng    : Optional[RNGBackend]       = None,
    ) -> list[PieSlice]:
    """Draw a sketchy pie chart with labels onto ``ax``.

    The axes get an SVG-like frame: Y grows downward, equal aspect, and
    limits of ``[0, 2 * radius]`` on both axes.

    Returns:
        The slices that were drawn.
    """
    drawer = MPLPathDrawer(ax, flip_y=False, autoscale=False)
    sketch = DraftyPath(drawer, config, rng=rng)

    slices = pie_slices(data, radius)
    for pie_slice in slices:
        sketch(pie_slice.path_data, {"fill": pie_slice.color})
        ax.text(
            pie_slice.label_position.x,
            pie_slice.label_position.y,
            pie_slice.name,
            color="#000",
            fontfamily="sans-serif",
            fontsize=12,
            ha="center",
            va="center",
        )

    ax.set_xlim(0, 2 * radius)
    ax.set_ylim(2 * radius, 0)
    ax.set_aspect("equal")
    return slices
