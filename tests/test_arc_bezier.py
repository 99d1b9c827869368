"""
test_arc_bezier.py
------------------
Unit tests for arc_bezier.py
"""

import math

import pytest

from sketchpath.arc_bezier import (
    ArcDescriptor, MAX_SEGMENT_SWEEP, arc_center, arc_to_cubic_beziers, corrected_radii,
)
from sketchpath.geometry import Point, evaluate_cubic, line_to_bezier

TOL = 1e-6


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def ellipse_residual(arc, point):
    """(x/rx)^2 + (y/ry)^2 - 1 of ``point`` in the arc's ellipse frame."""
    center, _, _ = arc_center(arc)
    rx, ry = corrected_radii(arc)
    phi = math.radians(arc.x_axis_rotation_deg)
    dx, dy = point.x - center.x, point.y - center.y
    xr = math.cos(phi) * dx + math.sin(phi) * dy
    yr = -math.sin(phi) * dx + math.cos(phi) * dy
    return (xr / rx) ** 2 + (yr / ry) ** 2 - 1


def close(p, q, tol=TOL):
    return math.hypot(p.x - q.x, p.y - q.y) <= tol


FLAG_COMBOS = [(False, False), (False, True), (True, False), (True, True)]


@pytest.fixture
def rotated_arc_factory():
    def make(large_arc, sweep):
        return ArcDescriptor(
            start=Point(10, 20), end=Point(80, 60),
            rx=60, ry=30, x_axis_rotation_deg=20,
            large_arc=large_arc, sweep=sweep,
        )
    return make


# ---------------------------------------------------------------------------
# Continuity and endpoint fidelity
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("large_arc, sweep", FLAG_COMBOS)
def test_arc_segments_are_continuous(rotated_arc_factory, large_arc, sweep):
    segments = arc_to_cubic_beziers(rotated_arc_factory(large_arc, sweep))
    assert len(segments) > 1
    for a, b in zip(segments, segments[1:]):
        assert close(a[3], b[0])


@pytest.mark.parametrize("large_arc, sweep", FLAG_COMBOS)
def test_arc_endpoint_fidelity(rotated_arc_factory, large_arc, sweep):
    arc = rotated_arc_factory(large_arc, sweep)
    segments = arc_to_cubic_beziers(arc)
    assert close(segments[0][0], arc.start)
    assert close(segments[-1][3], arc.end)


@pytest.mark.parametrize("large_arc, sweep", FLAG_COMBOS)
def test_arc_anchors_and_midpoints_lie_on_ellipse(rotated_arc_factory, large_arc, sweep):
    arc = rotated_arc_factory(large_arc, sweep)
    for seg in arc_to_cubic_beziers(arc):
        assert abs(ellipse_residual(arc, seg[0])) < TOL
        assert abs(ellipse_residual(arc, seg[3])) < TOL
        assert abs(ellipse_residual(arc, evaluate_cubic(*seg, 0.5))) < TOL


@pytest.mark.parametrize("large_arc, sweep", FLAG_COMBOS)
def test_sweep_sign_and_large_arc_span(rotated_arc_factory, large_arc, sweep):
    _, _, delta = arc_center(rotated_arc_factory(large_arc, sweep))
    assert (delta > 0) == sweep
    assert (abs(delta) > math.pi) == large_arc


def test_segment_count_respects_max_sweep(rotated_arc_factory):
    arc = rotated_arc_factory(True, True)
    _, _, delta = arc_center(arc)
    segments = arc_to_cubic_beziers(arc)
    assert len(segments) == math.ceil(abs(delta) / MAX_SEGMENT_SWEEP)


def test_half_circle_has_at_least_twelve_segments():
    arc = ArcDescriptor(start=Point(0, 50), end=Point(100, 50), rx=50, ry=50,
                        large_arc=False, sweep=True)
    segments = arc_to_cubic_beziers(arc)
    assert len(segments) >= math.ceil(math.pi / (math.pi / 12))
    center, _, delta = arc_center(arc)
    assert close(center, Point(50, 50))
    assert delta == pytest.approx(math.pi)
    for seg in segments:
        for p in (seg[0], seg[3]):
            assert math.hypot(p.x - 50, p.y - 50) == pytest.approx(50, abs=TOL)


def test_tangent_continuity_between_segments():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(40, 40), rx=40, ry=40, sweep=True)
    segments = arc_to_cubic_beziers(arc)
    for a, b in zip(segments, segments[1:]):
        in_dir = (a[3].x - a[2].x, a[3].y - a[2].y)
        out_dir = (b[1].x - b[0].x, b[1].y - b[0].y)
        cross = in_dir[0] * out_dir[1] - in_dir[1] * out_dir[0]
        assert abs(cross) < 1e-9
        assert in_dir[0] * out_dir[0] + in_dir[1] * out_dir[1] > 0


# ---------------------------------------------------------------------------
# Radii correction
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("rotation", [0.0, 30.0, -75.0])
def test_too_small_radii_are_scaled_to_reach(rotation):
    arc = ArcDescriptor(start=Point(0, 0), end=Point(10, 4), rx=1, ry=2,
                        x_axis_rotation_deg=rotation, sweep=True)
    rx, ry = corrected_radii(arc)
    phi = math.radians(rotation)
    dx, dy = (arc.start.x - arc.end.x) / 2, (arc.start.y - arc.end.y) / 2
    x1p = math.cos(phi) * dx + math.sin(phi) * dy
    y1p = -math.sin(phi) * dx + math.cos(phi) * dy
    assert x1p**2 / rx**2 + y1p**2 / ry**2 == pytest.approx(1.0)
    assert rx / ry == pytest.approx(0.5)

    segments = arc_to_cubic_beziers(arc)
    assert close(segments[-1][3], arc.end)
    assert abs(ellipse_residual(arc, segments[len(segments) // 2][0])) < TOL


def test_large_enough_radii_are_kept():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(10, 0), rx=20, ry=20)
    assert corrected_radii(arc) == (20, 20)


# ---------------------------------------------------------------------------
# Degenerate arcs
# ---------------------------------------------------------------------------
def test_coincident_endpoints_yield_no_segments():
    arc = ArcDescriptor(start=Point(5, 5), end=Point(5, 5), rx=10, ry=10)
    assert arc.is_degenerate
    assert arc_to_cubic_beziers(arc) == []


@pytest.mark.parametrize("rx, ry", [(0, 10), (10, 0), (0, 0)])
def test_zero_radius_is_a_straight_line(rx, ry):
    arc = ArcDescriptor(start=Point(0, 0), end=Point(9, 3), rx=rx, ry=ry)
    assert arc_to_cubic_beziers(arc) == [line_to_bezier(Point(0, 0), Point(9, 3))]
    with pytest.raises(ValueError):
        corrected_radii(arc)


def test_negative_radii_use_absolute_values():
    kwargs = dict(start=Point(0, 0), end=Point(30, 10), x_axis_rotation_deg=15, sweep=True)
    neg = arc_to_cubic_beziers(ArcDescriptor(rx=-25, ry=-40, **kwargs))
    pos = arc_to_cubic_beziers(ArcDescriptor(rx=25, ry=40, **kwargs))
    assert neg == pos


def test_descriptor_coerces_tuples_and_flags():
    arc = ArcDescriptor(start=(0, 0), end=(1, 1), rx=1, ry=1, large_arc=1, sweep=0)
    assert isinstance(arc.start, Point)
    assert arc.large_arc is True and arc.sweep is False


def test_invalid_max_sweep_raises():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(1, 0), rx=1, ry=1)
    with pytest.raises(ValueError):
        arc_to_cubic_beziers(arc, max_segment_sweep=0)


# ---------------------------------------------------------------------------
# Floating point extremes
# ---------------------------------------------------------------------------
def all_finite(segments):
    return all(math.isfinite(c) for seg in segments for p in seg for c in p)


@pytest.mark.parametrize("rx, ry", [(1e-170, 1e-170), (1e-170, 5.0), (5.0, -1e-170)])
def test_radius_with_vanishing_square_is_a_straight_line(rx, ry):
    arc = ArcDescriptor(start=Point(0, 0), end=Point(10, 10), rx=rx, ry=ry, sweep=True)
    assert arc.is_degenerate
    assert arc_to_cubic_beziers(arc) == [line_to_bezier(Point(0, 0), Point(10, 10))]
    with pytest.raises(ValueError):
        corrected_radii(arc)


def test_tiny_but_squarable_radii_are_scaled_up():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(10, 10), rx=1e-160, ry=1e-160, sweep=True)
    rx, ry = corrected_radii(arc)
    assert rx == pytest.approx(math.hypot(5, 5))
    assert ry == pytest.approx(rx)
    segments = arc_to_cubic_beziers(arc)
    assert len(segments) >= 12
    assert all_finite(segments)
    assert segments[-1][3] == arc.end


def test_chord_too_short_for_a_center_is_a_straight_line():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(1e-200, 0), rx=10, ry=10, sweep=True)
    assert arc_to_cubic_beziers(arc) == [line_to_bezier(arc.start, arc.end)]
    with pytest.raises(ValueError):
        arc_center(arc)


def test_huge_radii_stay_finite():
    arc = ArcDescriptor(start=Point(0, 0), end=Point(10, 0), rx=1e200, ry=1e200)
    segments = arc_to_cubic_beziers(arc)
    assert all_finite(segments)
    assert segments[0][0] == arc.start and segments[-1][3] == arc.end
