"""Path data (``d`` attribute) → absolute ``PathCommand`` list.

Supported: M L H V C S Q T A Z, upper and lower case. Coordinates are
resolved to absolute user units; transforms are not applied here.

- A command letter repeats implicitly for following coordinate groups;
  extra pairs after ``M``/``m`` are line-tos.
- ``Q``/``T`` are degree-elevated to cubics:
  ``c1 = p0 + 2/3·(ctrl - p0)``, ``c2 = p3 + 2/3·(ctrl - p3)``.
- ``S``/``T`` take the current point as the reflected control point
  unless ``reflect_smooth`` is set, in which case the previous curve's
  last control point is mirrored about the current point.
- ``A`` degrades to a straight line to the arc's end point.
- An incomplete coordinate group drops that command and parsing resumes
  at the next command letter.
"""

from __future__ import annotations

import logging

from svgsketch.models.path_commands import ClosePath, CubicTo, LineTo, MoveTo, PathCommand, Point
from svgsketch.svg.numbers import skip_separators, scan_number

logger = logging.getLogger(__name__)

# Number of scalar arguments per command group
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}

_TWO_THIRDS = 2.0 / 3.0


def _elevate_quadratic(p0: Point, ctrl: Point, p3: Point) -> tuple[Point, Point]:
    c1 = (p0[0] + _TWO_THIRDS * (ctrl[0] - p0[0]), p0[1] + _TWO_THIRDS * (ctrl[1] - p0[1]))
    c2 = (p3[0] + _TWO_THIRDS * (ctrl[0] - p3[0]), p3[1] + _TWO_THIRDS * (ctrl[1] - p3[1]))
    return c1, c2


def _reflect(point: Point, about: Point) -> Point:
    return (2.0 * about[0] - point[0], 2.0 * about[1] - point[1])


class _Cursor:
    """Position in the path string plus number / flag readers."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        self.pos = skip_separators(self.text, self.pos)
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def read_number(self) -> float | None:
        result = scan_number(self.text, self.pos)
        if result is None:
            return None
        value, self.pos = result
        return value

    def read_flag(self) -> float | None:
        """Arc flags are a single 0/1 and may be written without separators."""
        self.pos = skip_separators(self.text, self.pos)
        ch = self.peek()
        if ch in ("0", "1"):
            self.pos += 1
            return float(ch)
        return None

    def read_args(self, command: str) -> list[float] | None:
        """Read one argument group, or None (cursor restored) if incomplete."""
        start = self.pos
        args: list[float] = []
        for i in range(_ARITY[command]):
            value = self.read_flag() if command == "A" and i in (3, 4) else self.read_number()
            if value is None:
                self.pos = start
                return None
            args.append(value)
        return args

    def skip_to_command(self) -> None:
        """Advance past junk to the next command letter."""
        self.pos += 1
        n = len(self.text)
        while self.pos < n and self.text[self.pos].upper() not in _ARITY:
            self.pos += 1


class _PathState:
    def __init__(self, reflect_smooth: bool) -> None:
        self.reflect_smooth = reflect_smooth
        self.commands: list[PathCommand] = []
        self.current: Point = (0.0, 0.0)
        self.subpath_start: Point = (0.0, 0.0)
        # Last cubic control point / last quadratic control point (for S / T)
        self.last_cubic_ctrl: Point | None = None
        self.last_quad_ctrl: Point | None = None

    def absolute(self, x: float, y: float, relative: bool) -> Point:
        if relative:
            return (self.current[0] + x, self.current[1] + y)
        return (x, y)

    def move(self, point: Point) -> None:
        self.commands.append(MoveTo(point))
        self.current = point
        self.subpath_start = point
        self.last_cubic_ctrl = self.last_quad_ctrl = None

    def line(self, point: Point) -> None:
        self.commands.append(LineTo(point))
        self.current = point
        self.last_cubic_ctrl = self.last_quad_ctrl = None

    def cubic(self, c1: Point, c2: Point, point: Point, quad_ctrl: Point | None = None) -> None:
        self.commands.append(CubicTo(c1, c2, point))
        self.current = point
        self.last_cubic_ctrl = c2
        self.last_quad_ctrl = quad_ctrl

    def close(self) -> None:
        self.commands.append(ClosePath())
        self.current = self.subpath_start
        self.last_cubic_ctrl = self.last_quad_ctrl = None

    def smooth_cubic_ctrl(self) -> Point:
        if self.reflect_smooth and self.last_cubic_ctrl is not None:
            return _reflect(self.last_cubic_ctrl, self.current)
        return self.current

    def smooth_quad_ctrl(self) -> Point:
        if self.reflect_smooth and self.last_quad_ctrl is not None:
            return _reflect(self.last_quad_ctrl, self.current)
        return self.current


def _apply(state: _PathState, command: str, relative: bool, args: list[float]) -> None:
    cur = state.current
    if command == "M":
        state.move(state.absolute(args[0], args[1], relative))
    elif command == "L":
        state.line(state.absolute(args[0], args[1], relative))
    elif command == "H":
        state.line((cur[0] + args[0] if relative else args[0], cur[1]))
    elif command == "V":
        state.line((cur[0], cur[1] + args[0] if relative else args[0]))
    elif command == "C":
        c1 = state.absolute(args[0], args[1], relative)
        c2 = state.absolute(args[2], args[3], relative)
        state.cubic(c1, c2, state.absolute(args[4], args[5], relative))
    elif command == "S":
        c1 = state.smooth_cubic_ctrl()
        c2 = state.absolute(args[0], args[1], relative)
        state.cubic(c1, c2, state.absolute(args[2], args[3], relative))
    elif command == "Q":
        ctrl = state.absolute(args[0], args[1], relative)
        end = state.absolute(args[2], args[3], relative)
        c1, c2 = _elevate_quadratic(cur, ctrl, end)
        state.cubic(c1, c2, end, quad_ctrl=ctrl)
    elif command == "T":
        ctrl = state.smooth_quad_ctrl()
        end = state.absolute(args[0], args[1], relative)
        c1, c2 = _elevate_quadratic(cur, ctrl, end)
        state.cubic(c1, c2, end, quad_ctrl=ctrl)
    elif command == "A":
        # rx ry rotation large-arc sweep x y: only the end point is kept
        state.line(state.absolute(args[5], args[6], relative))


def parse(d: str, reflect_smooth: bool = False) -> list[PathCommand]:
    """Parse path data into absolute commands."""
    if not d:
        return []

    cursor = _Cursor(d)
    state = _PathState(reflect_smooth)
    current: str | None = None

    while not cursor.at_end():
        ch = cursor.peek()
        if ch.upper() in _ARITY and ch.isalpha():
            cursor.pos += 1
            current = ch
            if ch.upper() == "Z":
                state.close()
                current = None
                continue
        elif current is None:
            logger.debug("Path data: skipping %r at offset %d (no command)", ch, cursor.pos)
            cursor.skip_to_command()
            continue

        command = current.upper()
        relative = current.islower()
        args = cursor.read_args(command)
        if args is None:
            logger.debug("Path data: incomplete %s group at offset %d", current, cursor.pos)
            cursor.skip_to_command()
            current = None
            continue

        _apply(state, command, relative, args)
        if command == "M":
            # Subsequent pairs after a move are line-tos
            current = "l" if relative else "L"

    return state.commands
