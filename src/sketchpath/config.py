"""
config.py - Configuration dataclass for the sketch distortion engine.

Built once per engine and never mutated; every pass reads the same values.
"""

from dataclasses import dataclass
from numbers import Integral, Real

DEFAULT_JITTER = 1.2
DEFAULT_REPEATS = 3
FALLBACK_COLOR = "black"


@dataclass(frozen=True)
class DistortionConfig:
    """Immutable settings of one sketchy rendering.

    Attributes:
        jitter: Maximum absolute displacement of each coordinate.
        repeats: Number of stroke passes drawn over the fill pass.
        segments_per_curve: Sub-curves each normalized cubic is cut into
            before jitter; 1 keeps the curves whole.
        fill_fallback: Fill color of the fill pass when the caller gives none.
        stroke_fallback: Stroke color of outline passes when the caller gives none.
    """
    jitter: float = DEFAULT_JITTER
    repeats: int = DEFAULT_REPEATS
    segments_per_curve: int = 1
    fill_fallback: str = FALLBACK_COLOR
    stroke_fallback: str = FALLBACK_COLOR

    def __post_init__(self):
        if isinstance(self.jitter, bool) or not isinstance(self.jitter, Real):
            raise TypeError(f"jitter must be numeric, got {type(self.jitter).__name__}")
        if not self.jitter >= 0:
            raise ValueError(f"jitter must be >= 0, got {self.jitter}")
        for name in ("repeats", "segments_per_curve"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, Integral):
                raise TypeError(f"{name} must be an integer, got {type(val).__name__}")
        if self.repeats < 0:
            raise ValueError(f"repeats must be >= 0, got {self.repeats}")
        if self.segments_per_curve < 1:
            raise ValueError(f"segments_per_curve must be >= 1, got {self.segments_per_curve}")

    @property
    def pass_count(self) -> int:
        """Total number of passes: one fill pass plus ``repeats`` outlines."""
        return self.repeats + 1
