from .rng import RNGBackend, RNG, get_rng
from .config import DistortionConfig
from .geometry import Point, CubicSegment, lerp, evaluate_cubic, line_to_bezier
from .arc_bezier import ArcDescriptor, arc_to_cubic_beziers, corrected_radii
from .bezier_split import split_cubic_bezier
from .path_commands import (
    CommandKind, Command, ParserState, tokenize, fold_commands,
    normalize_path, format_segments,
)
from .distort import DraftyPath, distort_path, make_drafty_path
from .mpl_renderer import MPLPathDrawer, svg_path_to_mpl

__all__ = [
    "arc_bezier",
    "bezier_split",
    "config",
    "distort",
    "geometry",
    "logging_utils",
    "mpl_renderer",
    "path_commands",
    "pie_chart",
    "rng",
]
