"""
mpl_renderer.py
---------------

Matplotlib implementation of the drawing collaborator.

``MPLPathDrawer(ax)`` is a callable ``draw(path_data, attributes)`` that turns
SVG path data into a ``matplotlib.path.Path`` and adds it to ``ax`` as a
``PathPatch`` styled from SVG presentation attributes:

    fill, stroke, stroke-width, opacity, fill-opacity, stroke-opacity,
    stroke-linecap, stroke-linejoin, stroke-dasharray

Unknown attributes are ignored (logged at DEBUG level).
"""

from __future__ import annotations

__all__ = ["svg_path_to_mpl", "patch_kwargs", "MPLPathDrawer", "DEFAULT_ATTRIBUTES"]

import logging
from typing import Any, Optional

import numpy as np
from matplotlib import colors as mcolors
from matplotlib.axes import Axes
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath

from .geometry import Point
from .path_commands import tokenize, fold_commands

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTES = {"fill": "none", "stroke": "black"}

_CAPSTYLES = {"butt": "butt", "round": "round", "square": "projecting"}
_JOINSTYLES = {"miter": "miter", "round": "round", "bevel": "bevel"}


# ---------------------------------------------------------------------------
# Path conversion
# ---------------------------------------------------------------------------
def svg_path_to_mpl(d: str) -> mplPath:
    """Convert SVG path data into a Matplotlib Path.

    Any valid path data is accepted; it is normalized to M/C/Z first, so the
    result only holds MOVETO, CURVE4 and CLOSEPOLY codes. Unknown commands
    are skipped with a warning.

    Args:
        d: SVG path data.

    Returns:
        matplotlib.path.Path (empty if ``d`` draws nothing).
    """
    _, segments = fold_commands(tokenize(d))

    verts: list[Point] = []
    codes: list[int] = []
    subpath_start: Optional[Point] = None
    pen_down = False

    for seg in segments:
        if seg.op == "M":
            (point,) = seg.points
            verts.append(point)
            codes.append(mplPath.MOVETO)
            subpath_start, pen_down = point, True
        elif seg.op == "C":
            if not pen_down:
                verts.append(seg.start)
                codes.append(mplPath.MOVETO)
                subpath_start, pen_down = seg.start, True
            verts.extend(seg.points)
            codes.extend([mplPath.CURVE4] * 3)
        elif seg.op == "Z":
            if pen_down:
                verts.append(subpath_start)
                codes.append(mplPath.CLOSEPOLY)
            pen_down = False
        else:
            logger.warning(f"Skipping unsupported path command {seg.text!r}.")

    if not verts:
        return mplPath(np.empty((0, 2), dtype=float))
    return mplPath(np.asarray(verts, dtype=float), np.asarray(codes, dtype=mplPath.code_type))


# ---------------------------------------------------------------------------
# Attribute mapping
# ---------------------------------------------------------------------------
def _opacity(value: Any, name: str) -> Optional[float]:
    try:
        return max(0.0, min(float(value), 1.0))
    except (TypeError, ValueError):
        logger.debug(f"Ignoring invalid {name}={value!r}.")
        return None


def _color(value: Any, opacity: Optional[float]) -> Any:
    if value is None or str(value).strip().lower() == "none":
        return "none"
    if opacity is None:
        return value
    return mcolors.to_rgba(value, opacity)


def _dash_pattern(value: Any) -> Any:
    text = str(value).strip().lower()
    if not text or text == "none":
        return "solid"
    try:
        dashes = tuple(float(v) for v in text.replace(",", " ").split())
    except ValueError:
        logger.debug(f"Ignoring invalid stroke-dasharray={value!r}.")
        return "solid"
    if not dashes or not any(dashes):
        return "solid"
    if len(dashes) % 2:
        dashes = dashes * 2
    return (0, dashes)


def patch_kwargs(attrs: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Translate SVG presentation attributes into ``PathPatch`` keyword arguments.

    Defaults (``fill="none"``, ``stroke="black"``) apply before ``attrs``.
    """
    merged = {**DEFAULT_ATTRIBUTES, **(attrs or {})}

    fill_opacity = _opacity(merged["fill-opacity"], "fill-opacity") if "fill-opacity" in merged else None
    stroke_opacity = _opacity(merged["stroke-opacity"], "stroke-opacity") if "stroke-opacity" in merged else None

    kwargs: dict[str, Any] = {
        "facecolor": _color(merged["fill"], fill_opacity),
        "edgecolor": _color(merged["stroke"], stroke_opacity),
    }

    for key, value in merged.items():
        if key in ("fill", "stroke", "fill-opacity", "stroke-opacity"):
            continue
        if key == "stroke-width":
            try:
                kwargs["linewidth"] = float(value)
            except (TypeError, ValueError):
                logger.debug(f"Ignoring invalid stroke-width={value!r}.")
        elif key == "opacity":
            alpha = _opacity(value, "opacity")
            if alpha is not None:
                kwargs["alpha"] = alpha
        elif key == "stroke-linecap":
            kwargs["capstyle"] = _CAPSTYLES.get(str(value).lower(), "butt")
        elif key == "stroke-linejoin":
            kwargs["joinstyle"] = _JOINSTYLES.get(str(value).lower(), "miter")
        elif key == "stroke-dasharray":
            kwargs["linestyle"] = _dash_pattern(value)
        else:
            logger.debug(f"Ignoring unsupported attribute {key}={value!r}.")

    return kwargs


# =============================================================================
# Drawer
# =============================================================================
class MPLPathDrawer:
    """Drawing callable that adds SVG paths to a Matplotlib Axes.

    Args:
        ax: Target axes.
        flip_y: Invert the Y axis so that it grows downward, as in SVG.
        autoscale: Rescale the view to the data after every patch.
    """

    def __init__(self, ax: Axes, flip_y: bool = False, autoscale: bool = True) -> None:
        if not isinstance(ax, Axes):
            raise TypeError(f"ax must be a Matplotlib Axes, not {type(ax).__name__}")
        self.ax = ax
        self.autoscale = autoscale
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")
        if flip_y and not ax.yaxis_inverted():
            ax.invert_yaxis()

    def __call__(self, d: str, attrs: Optional[dict[str, Any]] = None) -> PathPatch:
        path = svg_path_to_mpl(d)
        patch = PathPatch(path, **patch_kwargs(attrs))
        self.ax.add_patch(patch)
        if self.autoscale and len(path.vertices):
            self.ax.autoscale_view()
        self.logger.debug(f"Added patch with {len(path.vertices)} vertices.")
        return patch
