"""
Interpreter for the SVG path-drawing mini-language.

A path command string is a sequence of single-letter opcodes, each followed
by a list of numeric operands. Interpretation happens in three layers:

1. ``iter_path_tokens``   - lexer: opcodes and numbers, separators skipped
2. ``iter_path_commands`` - groups operands under the preceding opcode
3. ``iter_path_points``   - walks a cursor and yields visited points

Supported opcodes are ``M L H V C`` and their relative lower-case forms.
Curves contribute only their end point; control points are discarded.
Every other opcode (``Z S Q T A`` or anything unknown) is skipped along
with its operands. Malformed input never raises: unparsable characters are
dropped and an empty or missing string yields no points.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Tuple

from insights_plus.models import PixelPoint, PlotRectangle

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"(?P<opcode>[A-DF-Za-df-z])"
    r"|(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<separator>[\s,]+)"
    r"|(?P<junk>.)",
    re.DOTALL,
)


@dataclass(frozen=True)
class PathToken:
    kind: str  # "opcode" or "number"
    value: str


@dataclass(frozen=True)
class PathCommand:
    opcode: str
    operands: Tuple[float, ...]

    @property
    def relative(self) -> bool:
        return self.opcode.islower()


def iter_path_tokens(d: Optional[str]) -> Iterator[PathToken]:
    """Lex a path string into opcode and number tokens."""
    if not d:
        return
    for match in _TOKEN_RE.finditer(d):
        kind = match.lastgroup
        if kind == "opcode" or kind == "number":
            yield PathToken(kind, match.group(kind))
        elif kind == "junk":
            logger.debug(f"Skipping unexpected path character {match.group(kind)!r}")


def iter_path_commands(d: Optional[str]) -> Iterator[PathCommand]:
    """Group operands under their opcode.

    Numbers appearing before the first opcode have no command to belong to
    and are dropped.
    """
    opcode: Optional[str] = None
    operands: List[float] = []
    for token in iter_path_tokens(d):
        if token.kind == "opcode":
            if opcode is not None:
                yield PathCommand(opcode, tuple(operands))
            opcode, operands = token.value, []
        elif opcode is not None:
            operands.append(float(token.value))
    if opcode is not None:
        yield PathCommand(opcode, tuple(operands))


def path_opcodes(d: Optional[str]) -> FrozenSet[str]:
    """Set of opcodes used by a path (case preserved)."""
    return frozenset(command.opcode for command in iter_path_commands(d))


def iter_path_points(d: Optional[str]) -> Iterator[PixelPoint]:
    """Yield every point the path visits, in drawing order.

    The cursor starts at (0, 0). ``M``/``L`` consume operand pairs and emit
    one point per pair, ``H``/``V`` move along one axis, ``C`` consumes six
    operands per segment and emits the segment's end point. A trailing
    incomplete operand group is ignored.
    """
    x = 0.0
    y = 0.0
    for command in iter_path_commands(d):
        kind = command.opcode.upper()
        args = command.operands
        relative = command.relative

        if kind in ("M", "L"):
            for i in range(0, len(args) - 1, 2):
                if relative:
                    x += args[i]
                    y += args[i + 1]
                else:
                    x, y = args[i], args[i + 1]
                yield PixelPoint(x, y)
        elif kind == "H":
            for arg in args:
                x = x + arg if relative else arg
                yield PixelPoint(x, y)
        elif kind == "V":
            for arg in args:
                y = y + arg if relative else arg
                yield PixelPoint(x, y)
        elif kind == "C":
            for i in range(0, len(args) - 5, 6):
                if relative:
                    x += args[i + 4]
                    y += args[i + 5]
                else:
                    x, y = args[i + 4], args[i + 5]
                yield PixelPoint(x, y)


def interpret_path(
    d: Optional[str], plot: PlotRectangle, tolerance: float = 1.0
) -> List[PixelPoint]:
    """Points visited by the path that fall inside the plot rectangle."""
    points = [p for p in iter_path_points(d) if plot.contains(p.x, p.y, tolerance)]
    logger.debug(f"Path interpreted: {len(points)} points inside plot area")
    return points


def first_path_point(d: Optional[str]) -> Optional[PixelPoint]:
    """Starting point of a path that opens with a move-to.

    Only the first command is read; the rest of the string is not parsed.
    """
    first = next(iter_path_commands(d), None)
    if first is None or first.opcode not in ("M", "m") or len(first.operands) < 2:
        return None
    return PixelPoint(first.operands[0], first.operands[1])


def last_point_in_plot(
    d: Optional[str], plot: PlotRectangle, tolerance: float = 1.0
) -> Optional[PixelPoint]:
    """Last visited point lying inside the plot rectangle.

    Walks the path without materializing the point list.
    """
    last: Optional[PixelPoint] = None
    for point in iter_path_points(d):
        if plot.contains(point.x, point.y, tolerance):
            last = point
    return last
