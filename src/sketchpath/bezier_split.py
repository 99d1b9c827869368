"""
bezier_split.py
---------------

Cut one cubic Bezier into ``N`` sub-curves of equal parameter length.

Two methods:

    "resample"  Anchors are the curve evaluated at ``i/N``; the two control
                points of each piece are the curve evaluated at the 1/3 and
                2/3 points of the piece's sub-interval. The pieces pass
                through the original curve at those sample points but are not
                an exact re-parameterization of it. Good enough for drawing.

    "casteljau" Exact split. Each piece is cut out of the control polygon by
                De Casteljau construction and coincides with the original
                curve restricted to its sub-interval.

Both methods produce identical anchors, so the pieces chain without gaps.
"""

from __future__ import annotations

__all__ = ["split_cubic_bezier", "split_cubic_at", "SPLIT_METHODS"]

from .geometry import Point, CubicSegment, evaluate_cubic, lerp_point

SPLIT_METHODS = ("resample", "casteljau")


def split_cubic_at(p0: Point, p1: Point, p2: Point, p3: Point,
                   t: float) -> tuple[CubicSegment, CubicSegment]:
    """Split a cubic at ``t`` into the exact ``[0, t]`` and ``[t, 1]`` pieces."""
    p01 = lerp_point(p0, p1, t)
    p12 = lerp_point(p1, p2, t)
    p23 = lerp_point(p2, p3, t)
    p012 = lerp_point(p01, p12, t)
    p123 = lerp_point(p12, p23, t)
    mid = lerp_point(p012, p123, t)
    return (Point(*p0), p01, p012, mid), (mid, p123, p23, Point(*p3))


def _split_resample(curve: CubicSegment, segments: int) -> list[CubicSegment]:
    result: list[CubicSegment] = []
    for i in range(segments):
        t0 = i / segments
        t1 = (i + 1) / segments
        result.append((
            evaluate_cubic(*curve, t0),
            evaluate_cubic(*curve, t0 + (t1 - t0) / 3),
            evaluate_cubic(*curve, t0 + 2 * (t1 - t0) / 3),
            evaluate_cubic(*curve, t1),
        ))
    return result


def _split_casteljau(curve: CubicSegment, segments: int) -> list[CubicSegment]:
    result: list[CubicSegment] = []
    rest = curve
    for i in range(segments - 1):
        # Remaining curve covers [i/N, 1]; the next cut sits 1/(N-i) into it
        head, rest = split_cubic_at(*rest, 1.0 / (segments - i))
        result.append(head)
    result.append(rest)

    # Anchors re-evaluated on the original curve so both methods chain identically
    anchored: list[CubicSegment] = []
    for i, (_, c1, c2, _) in enumerate(result):
        anchored.append((
            evaluate_cubic(*curve, i / segments),
            c1,
            c2,
            evaluate_cubic(*curve, (i + 1) / segments),
        ))
    return anchored


def split_cubic_bezier(
        p0       : Point,
        p1       : Point,
        p2       : Point,
        p3       : Point,
        segments : int,
        method   : str = "resample",
    ) -> list[CubicSegment]:
    """Split a cubic Bezier into ``segments`` consecutive sub-curves.

    Args:
        p0, p3: Anchor points of the original curve.
        p1, p2: Control points of the original curve.
        segments: Number of pieces, at least 1.
        method: "resample" (default) or "casteljau", see module docstring.

    Returns:
        list of ``segments`` cubics; piece ``i`` runs from B(i/N) to B((i+1)/N).

    Raises:
        TypeError: If ``segments`` is not an integer.
        ValueError: If ``segments < 1`` or ``method`` is unknown.
    """
    if isinstance(segments, bool) or not isinstance(segments, int):
        raise TypeError(f"segments must be an integer, got {type(segments).__name__}.")
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}.")
    if method not in SPLIT_METHODS:
        raise ValueError(f"Unknown split method {method!r}; expected one of {SPLIT_METHODS}.")

    curve = (Point(*p0), Point(*p1), Point(*p2), Point(*p3))
    split = _split_casteljau if method == "casteljau" else _split_resample
    pieces = split(curve, segments)

    # Outer anchors are the original ones, not B(0) and B(1) recomputed
    pieces[0] = (curve[0],) + pieces[0][1:]
    pieces[-1] = pieces[-1][:3] + (curve[3],)
    return pieces
