"""
path_commands.py
----------------

SVG path data interpreter.

The interpreter reads the ``d`` mini-language (``M L H V C S Q T A Z`` and
their lower-case relative forms) and rewrites it using three commands only:

    M x y                       move
    C x1 y1 x2 y2 x y           cubic Bezier
    Z                           close

Every coordinate is absolute. Lines (``L H V``) become collinear cubics,
quadratics (``Q T``) are degree-elevated, smooth commands (``S T``) get their
reflected control point, and arcs (``A``) are approximated by cubic chains.

The work is split in three pure stages:

    tokenize(d)               -> list[Command | Passthrough]
    fold_commands(tokens)     -> (ParserState, list[Segment])
    format_segments(segments) -> str

Parsing is tolerant: tokens that are not finite numbers are dropped, a
trailing incomplete parameter group is dropped, and unknown command letters
are kept verbatim. Nothing here raises on malformed path data.
"""

from __future__ import annotations

__all__ = [
    "CommandKind", "Command", "Passthrough", "Token", "Segment", "ParserState",
    "parse_params", "tokenize", "step", "fold_commands", "normalize_path",
    "format_number", "format_segments",
]

import re
import math
import logging
from enum import Enum
from dataclasses import dataclass, replace
from typing import Callable, NamedTuple, Optional, Union

from .geometry import Point, line_to_bezier, reflect
from .arc_bezier import ArcDescriptor, arc_to_cubic_beziers

logger = logging.getLogger(__name__)

# A command letter followed by everything up to the next command letter.
# "e"/"E" only occur in number exponents and never start a command.
_COMMAND_RE = re.compile(r"([a-df-zA-DF-Z])([^a-df-zA-DF-Z]*)")
_SEPARATOR_RE = re.compile(r"[\s,]+")


# =============================================================================
# Commands
# =============================================================================
class CommandKind(Enum):
    """Path command kinds with their letter and parameter count."""
    MOVE_TO = ("M", 2)
    LINE_TO = ("L", 2)
    HORIZONTAL_LINE_TO = ("H", 1)
    VERTICAL_LINE_TO = ("V", 1)
    CUBIC_TO = ("C", 6)
    SMOOTH_CUBIC_TO = ("S", 4)
    QUADRATIC_TO = ("Q", 4)
    SMOOTH_QUADRATIC_TO = ("T", 2)
    ARC_TO = ("A", 7)
    CLOSE_PATH = ("Z", 0)

    def __init__(self, letter: str, arity: int):
        self.letter = letter
        self.arity = arity

    @classmethod
    def from_letter(cls, letter: str) -> Optional[CommandKind]:
        """Kind for a letter of either case, or None if unknown."""
        return _KINDS_BY_LETTER.get(letter.upper())


_KINDS_BY_LETTER = {kind.letter: kind for kind in CommandKind}


@dataclass(frozen=True)
class Command:
    """One path command with exactly ``kind.arity`` parameters."""
    kind: CommandKind
    relative: bool = False
    params: tuple[float, ...] = ()

    def __post_init__(self):
        params = tuple(float(p) for p in self.params)
        if len(params) != self.kind.arity:
            raise ValueError(
                f"{self.kind.name} takes {self.kind.arity} parameters, got {len(params)}."
            )
        object.__setattr__(self, "params", params)

    @property
    def letter(self) -> str:
        return self.kind.letter.lower() if self.relative else self.kind.letter


@dataclass(frozen=True)
class Passthrough:
    """Verbatim text of a command the interpreter does not know."""
    text: str


Token = Union[Command, Passthrough]


class Segment(NamedTuple):
    """One normalized output command.

    Attributes:
        op: "M", "C", "Z", or "" for passthrough text.
        points: (p,) for M, (c1, c2, p) for C, () otherwise.
        start: For C, the anchor the curve starts from.
        text: Passthrough text.
    """
    op: str
    points: tuple[Point, ...] = ()
    start: Optional[Point] = None
    text: str = ""


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class ParserState:
    """Interpreter state between two commands.

    Attributes:
        current_point: End point of the last drawn command.
        subpath_start: Point of the last move; target of close-path.
        last_cubic_control: Second control of the previous C/S command.
        last_quad_control: Control of the previous Q/T command.
    """
    current_point: Point = ORIGIN
    subpath_start: Point = ORIGIN
    last_cubic_control: Optional[Point] = None
    last_quad_control: Optional[Point] = None

    def advance(self, point: Point, cubic_control: Optional[Point] = None,
                quad_control: Optional[Point] = None) -> ParserState:
        """State after a drawing command ending at ``point``."""
        return replace(self, current_point=point,
                       last_cubic_control=cubic_control,
                       last_quad_control=quad_control)


# =============================================================================
# Tokenizer
# =============================================================================
def parse_params(text: str) -> list[float]:
    """Parse whitespace/comma separated numbers, dropping anything that is
    not a finite float."""
    values: list[float] = []
    for token in _SEPARATOR_RE.split(text.strip()):
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            logger.debug(f"Dropping non-numeric path token {token!r}.")
            continue
        if math.isfinite(value):
            values.append(value)
        else:
            logger.debug(f"Dropping non-finite path token {token!r}.")
    return values


def tokenize(d: str) -> list[Token]:
    """Split path data into arity-checked commands.

    Repeated parameter groups under one letter yield one command per group.
    Extra pairs after a move are implicit line-to commands of the same
    case, as in SVG. A trailing partial group is dropped.
    """
    if not isinstance(d, str):
        raise TypeError(f"Path data must be a string, got {type(d).__name__}.")

    tokens: list[Token] = []
    for match in _COMMAND_RE.finditer(d):
        letter, raw = match.group(1), match.group(2)
        kind = CommandKind.from_letter(letter)
        if kind is None:
            tokens.append(Passthrough((letter + raw).strip()))
            continue

        relative = letter != kind.letter
        params = parse_params(raw)

        if kind.arity == 0:
            if params:
                logger.debug(f"Ignoring {len(params)} parameters after {letter}.")
            tokens.append(Command(kind, relative))
            continue

        groups = len(params) // kind.arity
        if len(params) % kind.arity:
            logger.debug(
                f"Dropping incomplete {letter} group: "
                f"{params[groups * kind.arity:]} (needs {kind.arity} values)."
            )
        for i in range(groups):
            group = params[i * kind.arity:(i + 1) * kind.arity]
            group_kind = kind
            if kind is CommandKind.MOVE_TO and i > 0:
                group_kind = CommandKind.LINE_TO
            tokens.append(Command(group_kind, relative, group))

    return tokens


# =============================================================================
# Command handlers: (state, command) -> (new state, emitted segments)
# =============================================================================
Handler = Callable[[ParserState, Command], tuple[ParserState, list[Segment]]]


def _resolve(state: ParserState, cmd: Command, x: float, y: float) -> Point:
    if cmd.relative:
        return Point(x + state.current_point.x, y + state.current_point.y)
    return Point(x, y)


def _cubic(start: Point, c1: Point, c2: Point, end: Point) -> Segment:
    return Segment("C", (c1, c2, end), start)


def _line_segment(state: ParserState, end: Point) -> tuple[ParserState, list[Segment]]:
    p0, c1, c2, p3 = line_to_bezier(state.current_point, end)
    return state.advance(end), [_cubic(p0, c1, c2, p3)]


def _move_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    point = _resolve(state, cmd, *cmd.params)
    new_state = ParserState(current_point=point, subpath_start=point)
    return new_state, [Segment("M", (point,))]


def _line_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    return _line_segment(state, _resolve(state, cmd, *cmd.params))


def _horizontal_line_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    (x,) = cmd.params
    if cmd.relative:
        x += state.current_point.x
    return _line_segment(state, Point(x, state.current_point.y))


def _vertical_line_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    (y,) = cmd.params
    if cmd.relative:
        y += state.current_point.y
    return _line_segment(state, Point(state.current_point.x, y))


def _cubic_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    x1, y1, x2, y2, x, y = cmd.params
    c1 = _resolve(state, cmd, x1, y1)
    c2 = _resolve(state, cmd, x2, y2)
    end = _resolve(state, cmd, x, y)
    return state.advance(end, cubic_control=c2), [_cubic(state.current_point, c1, c2, end)]


def _smooth_cubic_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    x2, y2, x, y = cmd.params
    start = state.current_point
    c1 = start if state.last_cubic_control is None else reflect(state.last_cubic_control, start)
    c2 = _resolve(state, cmd, x2, y2)
    end = _resolve(state, cmd, x, y)
    return state.advance(end, cubic_control=c2), [_cubic(start, c1, c2, end)]


def _elevate_quadratic(start: Point, control: Point, end: Point) -> Segment:
    c1 = Point(start.x + 2 * (control.x - start.x) / 3, start.y + 2 * (control.y - start.y) / 3)
    c2 = Point(end.x + 2 * (control.x - end.x) / 3, end.y + 2 * (control.y - end.y) / 3)
    return _cubic(start, c1, c2, end)


def _quadratic_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    qx, qy, x, y = cmd.params
    control = _resolve(state, cmd, qx, qy)
    end = _resolve(state, cmd, x, y)
    segment = _elevate_quadratic(state.current_point, control, end)
    return state.advance(end, quad_control=control), [segment]


def _smooth_quadratic_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    start = state.current_point
    control = start if state.last_quad_control is None else reflect(state.last_quad_control, start)
    end = _resolve(state, cmd, *cmd.params)
    segment = _elevate_quadratic(start, control, end)
    return state.advance(end, quad_control=control), [segment]


def _arc_to(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    rx, ry, rotation, large_arc, sweep, x, y = cmd.params
    end = _resolve(state, cmd, x, y)
    arc = ArcDescriptor(
        start=state.current_point,
        end=end,
        rx=rx,
        ry=ry,
        x_axis_rotation_deg=rotation,
        large_arc=large_arc != 0,
        sweep=sweep != 0,
    )
    segments = [_cubic(p0, p1, p2, p3) for p0, p1, p2, p3 in arc_to_cubic_beziers(arc)]
    return state.advance(end), segments


def _close_path(state: ParserState, cmd: Command) -> tuple[ParserState, list[Segment]]:
    return ParserState(state.subpath_start, state.subpath_start), [Segment("Z")]


_HANDLERS: dict[CommandKind, Handler] = {
    CommandKind.MOVE_TO: _move_to,
    CommandKind.LINE_TO: _line_to,
    CommandKind.HORIZONTAL_LINE_TO: _horizontal_line_to,
    CommandKind.VERTICAL_LINE_TO: _vertical_line_to,
    CommandKind.CUBIC_TO: _cubic_to,
    CommandKind.SMOOTH_CUBIC_TO: _smooth_cubic_to,
    CommandKind.QUADRATIC_TO: _quadratic_to,
    CommandKind.SMOOTH_QUADRATIC_TO: _smooth_quadratic_to,
    CommandKind.ARC_TO: _arc_to,
    CommandKind.CLOSE_PATH: _close_path,
}

_unhandled = set(CommandKind) - set(_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler for command kinds: {sorted(k.name for k in _unhandled)}")


# =============================================================================
# Fold
# =============================================================================
def step(state: ParserState, token: Token) -> tuple[ParserState, list[Segment]]:
    """Apply one token to ``state``.

    Returns:
        (new_state, segments) - ``state`` itself is never modified.
    """
    if isinstance(token, Passthrough):
        return state, [Segment("", text=token.text)]
    return _HANDLERS[token.kind](state, token)


def fold_commands(tokens: list[Token],
                  state: Optional[ParserState] = None) -> tuple[ParserState, list[Segment]]:
    """Run ``tokens`` through the interpreter starting from ``state``
    (a fresh zeroed state by default)."""
    state = ParserState() if state is None else state
    segments: list[Segment] = []
    for token in tokens:
        state, emitted = step(state, token)
        segments.extend(emitted)
    return state, segments


def normalize_path(d: str) -> list[Segment]:
    """Tokenize and normalize path data into M/C/Z segments."""
    _, segments = fold_commands(tokenize(d))
    return segments


# =============================================================================
# Output
# =============================================================================
def format_number(value: float) -> str:
    """Shortest round-trip text for ``value``; integral values have no
    fractional part and ``-0`` prints as ``0``."""
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if sep:
        return f"{mantissa}e{int(exponent):+d}"
    return text


def format_segments(segments: list[Segment]) -> str:
    """Serialize segments as space separated absolute path data."""
    parts: list[str] = []
    for seg in segments:
        if not seg.op:
            if seg.text:
                parts.append(seg.text)
            continue
        parts.append(seg.op)
        for point in seg.points:
            parts.append(format_number(point.x))
            parts.append(format_number(point.y))
    return " ".join(parts)
