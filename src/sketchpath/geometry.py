"""
geometry.py
-----------

Point type and the scalar cubic Bezier primitives every other module builds on.

All curve math in the package goes through ``evaluate_cubic`` (three levels of
linear interpolation), so sampled points agree bit-for-bit wherever the same
curve is evaluated twice.
"""

from __future__ import annotations

__all__ = [
    "Point", "CubicSegment", "numeric",
    "lerp", "lerp_point", "evaluate_cubic", "line_to_bezier", "reflect",
]

from typing import NamedTuple, TypeAlias, Union

numeric: TypeAlias = Union[int, float]


class Point(NamedTuple):
    """Immutable 2D point."""
    x: float
    y: float


CubicSegment: TypeAlias = tuple[Point, Point, Point, Point]  # anchor, control, control, anchor


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation ``a + (b - a) * t``."""
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def evaluate_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier at parameter ``t`` (De Casteljau).

    Args:
        p0, p3: Anchor points.
        p1, p2: Control points.
        t: Curve parameter, normally in [0, 1].

    Returns:
        Point on the curve.
    """
    p01 = lerp_point(p0, p1, t)
    p12 = lerp_point(p1, p2, t)
    p23 = lerp_point(p2, p3, t)

    p012 = lerp_point(p01, p12, t)
    p123 = lerp_point(p12, p23, t)

    return lerp_point(p012, p123, t)


def line_to_bezier(p0: Point, p1: Point) -> CubicSegment:
    """Convert a straight segment into an equivalent cubic Bezier.

    Control points sit at exactly one and two thirds of the segment, so the
    curve traces the line with zero error and uniform speed.

    Args:
        p0: Start point.
        p1: End point.

    Returns:
        ``(p0, cp1, cp2, p1)``.
    """
    p0, p1 = Point(*p0), Point(*p1)
    dx, dy = p1.x - p0.x, p1.y - p0.y
    cp1 = Point(p0.x + dx / 3, p0.y + dy / 3)
    cp2 = Point(p0.x + 2 * dx / 3, p0.y + 2 * dy / 3)
    return (p0, cp1, cp2, p1)


def reflect(point: Point, center: Point) -> Point:
    """Mirror ``point`` through ``center``."""
    return Point(2 * center.x - point.x, 2 * center.y - point.y)
