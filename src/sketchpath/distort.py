"""
distort.py
----------

Sketchy, hand-drawn rendering of SVG path data.

A path is normalized to M/C/Z form (``path_commands``) and every anchor and
control coordinate is then shifted by an independent random amount in
``[-jitter, jitter)``:

    distort(v) = v + (random() - 0.5) * jitter * 2

``DraftyPath`` repeats this ``repeats + 1`` times over the same input and hands
each result to a drawing callable, producing one filled base layer and
``repeats`` stroked outlines on top of it. Because every pass is jittered
independently, the outlines never quite agree, which gives the drafty look.

The drawing callable has the signature ``draw(path_data, attributes)``; see
``mpl_renderer.MPLPathDrawer`` for the Matplotlib implementation.
"""

from __future__ import annotations

__all__ = [
    "DrawFn", "distort_coord", "jitter_segments", "subdivide_segments",
    "distort_path", "layer_attributes", "DraftyPath", "make_drafty_path",
]

import logging
from typing import Any, Callable, Optional

from .config import DistortionConfig, DEFAULT_JITTER, DEFAULT_REPEATS
from .geometry import Point
from .bezier_split import split_cubic_bezier
from .path_commands import Segment, Token, tokenize, fold_commands, format_segments
from .rng import RNGBackend, resolve_rng

DrawFn = Callable[[str, dict[str, Any]], Any]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Jitter
# ---------------------------------------------------------------------------
def distort_coord(value: float, jitter: float, rng: RNGBackend) -> float:
    """Shift ``value`` uniformly within ``[-jitter, jitter)``."""
    return value + (rng.random() - 0.5) * jitter * 2


def jitter_segments(segments: list[Segment], jitter: float,
                    rng: RNGBackend) -> list[Segment]:
    """Return a copy of ``segments`` with every point jittered.

    Points are drawn in emission order, x before y. Close and passthrough
    segments are returned unchanged.
    """
    result: list[Segment] = []
    for seg in segments:
        if not seg.points:
            result.append(seg)
            continue
        points = tuple(
            Point(distort_coord(p.x, jitter, rng), distort_coord(p.y, jitter, rng))
            for p in seg.points
        )
        result.append(seg._replace(points=points))
    return result


def subdivide_segments(segments: list[Segment], pieces: int) -> list[Segment]:
    """Cut every cubic segment into ``pieces`` sub-curves."""
    if pieces == 1:
        return list(segments)
    result: list[Segment] = []
    for seg in segments:
        if seg.op != "C" or seg.start is None:
            result.append(seg)
            continue
        c1, c2, end = seg.points
        for p0, p1, p2, p3 in split_cubic_bezier(seg.start, c1, c2, end, pieces):
            result.append(Segment("C", (p1, p2, p3), p0))
    return result


def _distort_tokens(tokens: list[Token], jitter: float, rng: RNGBackend,
                    segments_per_curve: int = 1) -> str:
    # Each pass starts from a fresh parser state
    _, segments = fold_commands(tokens)
    segments = subdivide_segments(segments, segments_per_curve)
    return format_segments(jitter_segments(segments, jitter, rng))


def distort_path(
        d                  : str,
        jitter             : float      = DEFAULT_JITTER,
        rng                : RNGBackend = None,
        segments_per_curve : int        = 1,
    ) -> str:
    """Normalize path data to M/C/Z form and jitter every coordinate once.

    Args:
        d: SVG path data.
        jitter: Maximum absolute displacement per coordinate. 0 disables
            jitter and makes the output deterministic.
        rng: Random source with a ``random()`` method. Defaults to the
            thread-local RNG.
        segments_per_curve: Split each cubic into this many pieces first.

    Returns:
        Space separated absolute path data using only M, C and Z (plus any
        unknown commands copied verbatim).
    """
    rng = resolve_rng(rng)
    return _distort_tokens(tokenize(d), jitter, rng, segments_per_curve)


def layer_attributes(attrs: Optional[dict[str, Any]], index: int,
                     config: DistortionConfig) -> dict[str, Any]:
    """Attributes of pass ``index``.

    Pass 0 is the fill layer: the caller's fill (or the fallback) with no
    stroke. Later passes are outlines: no fill, the caller's stroke (or the
    fallback). Every other attribute is copied through. ``attrs`` itself is
    not modified.
    """
    layer = dict(attrs or {})
    if index == 0:
        layer.setdefault("fill", config.fill_fallback)
        layer["stroke"] = "none"
    else:
        layer["fill"] = "none"
        layer.setdefault("stroke", config.stroke_fallback)
    return layer


# =============================================================================
# Layered renderer
# =============================================================================
class DraftyPath:
    """Draws path data as a fill layer plus several jittered outline layers.

    Args:
        draw: Drawing callable ``draw(path_data, attributes)``.
        config: Distortion settings. Defaults to ``DistortionConfig()``.
        rng: Random source shared by all passes of all calls. Defaults to the
            thread-local RNG at call time.

    Example:
        >>> drawer = MPLPathDrawer(ax)
        >>> sketch = DraftyPath(drawer, DistortionConfig(jitter=2.0))
        >>> sketch("M 10 10 L 90 10 L 50 80 Z", {"fill": "gold"})
    """

    def __init__(self, draw: DrawFn, config: Optional[DistortionConfig] = None,
                 rng: Optional[RNGBackend] = None) -> None:
        if not callable(draw):
            raise TypeError(f"draw must be callable, got {type(draw).__name__}.")
        self.draw = draw
        self.config = config or DistortionConfig()
        self.rng = rng
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    def passes(self, d: str,
               attrs: Optional[dict[str, Any]] = None) -> list[tuple[str, dict[str, Any]]]:
        """Compute every pass without drawing.

        Returns:
            list of ``(path_data, attributes)``, fill layer first.
        """
        rng = resolve_rng(self.rng)
        tokens = tokenize(d)
        cfg = self.config
        return [
            (
                _distort_tokens(tokens, cfg.jitter, rng, cfg.segments_per_curve),
                layer_attributes(attrs, i, cfg),
            )
            for i in range(cfg.pass_count)
        ]

    def __call__(self, d: str, attrs: Optional[dict[str, Any]] = None) -> list[str]:
        """Draw all passes in order and return their path data."""
        layers = self.passes(d, attrs)
        self.logger.debug(f"Drawing {len(layers)} passes of {d[:40]!r}.")
        for path_data, layer_attrs in layers:
            self.draw(path_data, layer_attrs)
        return [path_data for path_data, _ in layers]

    def reseed(self, seed: Optional[int] = None) -> None:
        """Re-seed the attached RNG (for deterministic replay)."""
        if self.rng is None or not hasattr(self.rng, "seed"):
            raise TypeError("No seedable rng attached to this DraftyPath.")
        self.rng.seed(seed)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} config={self.config}>"


def make_drafty_path(draw: DrawFn, jitter: float = DEFAULT_JITTER,
                     repeats: int = DEFAULT_REPEATS,
                     rng: Optional[RNGBackend] = None) -> DraftyPath:
    """Wrap a drawing callable so that it draws sketchy, layered paths."""
    return DraftyPath(draw, DistortionConfig(jitter=jitter, repeats=repeats), rng=rng)
