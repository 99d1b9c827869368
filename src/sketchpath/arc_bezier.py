"""
arc_bezier.py
-------------

Elliptical arc (SVG ``A`` command) to cubic Bezier conversion.

The arc is given in endpoint form: two end points, two radii, the rotation of
the ellipse X axis, and the large-arc / sweep flags. It is converted to center
form (center, start angle, signed sweep) following the SVG implementation
notes, then cut into pieces of at most ``MAX_SEGMENT_SWEEP`` radians. Each
piece is approximated by one cubic using the handle length

    t = 4/3 * tan(dtheta / 4)

which keeps tangent continuity between pieces. With 15deg pieces the radial
error stays below 1e-6 of the radius.

Degenerate input:
    - start == end: no segments (the arc is omitted);
    - rx == 0 or ry == 0 (or a radius whose square underflows to 0): a single
      straight cubic from start to end;
    - no finite center (chord square underflows, or the radii overflow):
      a single straight cubic as well;
    - negative radii: absolute values are used;
    - radii too small to span the chord: scaled up uniformly.
"""

from __future__ import annotations

__all__ = [
    "ArcDescriptor", "MAX_SEGMENT_SWEEP",
    "corrected_radii", "arc_center", "arc_to_cubic_beziers",
]

import math
import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .geometry import Point, CubicSegment, line_to_bezier

MAX_SEGMENT_SWEEP = math.pi / 12

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArcDescriptor:
    """One elliptical arc in SVG endpoint parameterization."""
    start: Point
    end: Point
    rx: float
    ry: float
    x_axis_rotation_deg: float = 0.0
    large_arc: bool = False
    sweep: bool = False

    def __post_init__(self):
        object.__setattr__(self, "start", Point(*self.start))
        object.__setattr__(self, "end", Point(*self.end))
        object.__setattr__(self, "large_arc", bool(self.large_arc))
        object.__setattr__(self, "sweep", bool(self.sweep))

    @property
    def is_degenerate(self) -> bool:
        """True if the arc is drawn as a line or not drawn at all."""
        return self.start == self.end or _vanishes(self.rx) or _vanishes(self.ry)


def _vanishes(radius: float) -> bool:
    """True if ``radius`` squared is zero in floating point."""
    return radius * radius == 0


class _CenterForm(NamedTuple):
    cx: float
    cy: float
    rx: float
    ry: float
    cos_phi: float
    sin_phi: float
    theta: float
    delta: float


def _half_chord(arc: ArcDescriptor) -> tuple[float, float, float, float]:
    """Half chord in the frame rotated by ``-x_axis_rotation``.

    Returns:
        (x1p, y1p, cos_phi, sin_phi)
    """
    phi = math.radians(arc.x_axis_rotation_deg)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    dx = (arc.start.x - arc.end.x) / 2
    dy = (arc.start.y - arc.end.y) / 2

    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy
    return x1p, y1p, cos_phi, sin_phi


def corrected_radii(arc: ArcDescriptor) -> tuple[float, float]:
    """Return the radii actually used to draw ``arc``.

    Radii are made non-negative and, if the ellipse cannot reach both end
    points (``lambda = x1p^2/rx^2 + y1p^2/ry^2 > 1``), scaled by
    ``sqrt(lambda)`` so that the chord becomes a diameter-like span.

    Raises:
        ValueError: If either radius is zero or its square underflows to zero.
    """
    rx, ry = abs(arc.rx), abs(arc.ry)
    if _vanishes(rx) or _vanishes(ry):
        raise ValueError("Zero radius arcs have no ellipse; draw them as lines.")

    x1p, y1p, _, _ = _half_chord(arc)
    # sqrt(lambda) as a hypot of ratios; squaring tiny radii would underflow
    factor = math.hypot(x1p / rx, y1p / ry)
    if factor > 1:
        rx, ry = rx * factor, ry * factor
    return rx, ry


def _center_form(arc: ArcDescriptor) -> Optional[_CenterForm]:
    """Center form of ``arc``, or None if no finite center exists (the chord
    is negligible next to the radii, or the magnitudes overflow)."""
    x1p, y1p, cos_phi, sin_phi = _half_chord(arc)
    rx, ry = corrected_radii(arc)

    # Half chord in radius units; keeps squares clear of rx^2 * ry^2 overflow
    u, v = x1p / rx, y1p / ry
    den = u * u + v * v
    if den == 0:
        return None

    # Center in the rotated frame; clamp guards round-off below zero
    sign = 1.0 if arc.large_arc != arc.sweep else -1.0
    coef = sign * math.sqrt(max(0.0, (1 - den) / den))

    cxp = rx * (coef * v)
    cyp = -ry * (coef * u)

    cx = cos_phi * cxp - sin_phi * cyp + (arc.start.x + arc.end.x) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (arc.start.y + arc.end.y) / 2

    theta = math.atan2(v + coef * u, u - coef * v)
    delta = math.atan2(-v + coef * u, -u - coef * v) - theta

    if not arc.sweep and delta > 0:
        delta -= 2 * math.pi
    elif arc.sweep and delta < 0:
        delta += 2 * math.pi

    if not all(math.isfinite(val) for val in (cx, cy, theta, delta)):
        return None
    return _CenterForm(cx, cy, rx, ry, cos_phi, sin_phi, theta, delta)


def arc_center(arc: ArcDescriptor) -> tuple[Point, float, float]:
    """Center-form view of a non-degenerate arc.

    Returns:
        (center, start_angle, delta_angle), angles in radians of the
        ellipse's parametric angle.

    Raises:
        ValueError: If the arc has no ellipse or its end points are too
            close to place a center.
    """
    form = _center_form(arc)
    if form is None:
        raise ValueError(f"Arc from {arc.start} to {arc.end} has no center.")
    return Point(form.cx, form.cy), form.theta, form.delta


def _ellipse_point(form: _CenterForm, theta: float) -> Point:
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return Point(
        form.cx + form.rx * cos_t * form.cos_phi - form.ry * sin_t * form.sin_phi,
        form.cy + form.rx * cos_t * form.sin_phi + form.ry * sin_t * form.cos_phi,
    )


def _ellipse_tangent(form: _CenterForm, theta: float) -> Point:
    """Derivative of the ellipse point with respect to ``theta``."""
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return Point(
        -form.rx * sin_t * form.cos_phi - form.ry * cos_t * form.sin_phi,
        -form.rx * sin_t * form.sin_phi + form.ry * cos_t * form.cos_phi,
    )


def arc_to_cubic_beziers(
        arc               : ArcDescriptor,
        max_segment_sweep : float = MAX_SEGMENT_SWEEP,
    ) -> list[CubicSegment]:
    """Convert one elliptical arc into a chain of cubic Bezier segments.

    Args:
        arc: Arc in endpoint parameterization.
        max_segment_sweep: Largest angular span (radians) of a single cubic.

    Returns:
        list of ``(p0, p1, p2, p3)`` tuples. Consecutive segments share their
        joining anchor; the first p0 is ``arc.start`` and the last p3 is
        ``arc.end``. Empty if start and end coincide.
    """
    if max_segment_sweep <= 0:
        raise ValueError(f"max_segment_sweep must be positive, got {max_segment_sweep}")

    if arc.start == arc.end:
        logger.debug(f"Arc with coincident end points {arc.start} omitted.")
        return []
    if _vanishes(arc.rx) or _vanishes(arc.ry):
        logger.debug("Zero radius arc drawn as a straight segment.")
        return [line_to_bezier(arc.start, arc.end)]

    form = _center_form(arc)
    if form is None:
        logger.debug(f"Arc chord {arc.start} -> {arc.end} has no finite center; drawn as a line.")
        return [line_to_bezier(arc.start, arc.end)]
    segments = max(1, math.ceil(abs(form.delta) / max_segment_sweep))
    step = form.delta / segments
    t = 4.0 / 3.0 * math.tan(step / 4)

    beziers: list[CubicSegment] = []
    theta1 = form.theta
    p0 = arc.start
    d0 = _ellipse_tangent(form, theta1)
    for i in range(segments):
        theta2 = form.theta + (i + 1) * step
        p3 = arc.end if i == segments - 1 else _ellipse_point(form, theta2)
        d3 = _ellipse_tangent(form, theta2)

        p1 = Point(p0.x + t * d0.x, p0.y + t * d0.y)
        p2 = Point(p3.x - t * d3.x, p3.y - t * d3.y)
        beziers.append((p0, p1, p2, p3))

        p0, d0 = p3, d3

    return beziers
