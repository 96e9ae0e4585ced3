"""2x3 affine transforms — SVG ``transform`` attribute parser and composer.

A matrix ``[a, b, c, d, e, f]`` maps a point as::

    x' = a*x + c*y + e
    y' = b*x + d*y + f

``compose(outer, inner)`` applies ``inner`` first, in the space ``outer``
maps from. Transform lists are composed left to right, so
``"translate(10,20) scale(2)"`` scales first, then translates.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from svgsketch.svg.numbers import is_separator, scan_numbers

logger = logging.getLogger(__name__)


class Matrix2x3(NamedTuple):
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    @property
    def translation(self) -> tuple[float, float]:
        return (self.e, self.f)

    @property
    def x_scale(self) -> float:
        """Length of the image of the x axis, ‖(a, b)‖."""
        return math.hypot(self.a, self.b)

    @property
    def y_scale(self) -> float:
        """Length of the image of the y axis, ‖(c, d)‖."""
        return math.hypot(self.c, self.d)

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY


IDENTITY = Matrix2x3()


def compose(outer: Matrix2x3, inner: Matrix2x3) -> Matrix2x3:
    """Matrix product ``outer · inner``."""
    a1, b1, c1, d1, e1, f1 = outer
    a2, b2, c2, d2, e2, f2 = inner
    return Matrix2x3(
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def translate(tx: float, ty: float = 0.0) -> Matrix2x3:
    return Matrix2x3(1.0, 0.0, 0.0, 1.0, tx, ty)


def scale(sx: float, sy: float | None = None) -> Matrix2x3:
    return Matrix2x3(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)


def rotate(angle_deg: float, cx: float = 0.0, cy: float = 0.0) -> Matrix2x3:
    """Rotation about ``(cx, cy)``.

    Closed form of ``translate(cx,cy) · rotate(angle) · translate(-cx,-cy)``.
    """
    rad = math.radians(angle_deg)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return Matrix2x3(
        cos_a,
        sin_a,
        -sin_a,
        cos_a,
        cx - cos_a * cx + sin_a * cy,
        cy - sin_a * cx - cos_a * cy,
    )


def skew_x(angle_deg: float) -> Matrix2x3:
    return Matrix2x3(1.0, 0.0, math.tan(math.radians(angle_deg)), 1.0, 0.0, 0.0)


def skew_y(angle_deg: float) -> Matrix2x3:
    return Matrix2x3(1.0, math.tan(math.radians(angle_deg)), 0.0, 1.0, 0.0, 0.0)


def _from_function(name: str, args: list[float]) -> Matrix2x3 | None:
    """Build the matrix for one transform function, or None if unusable."""
    if not args:
        return None
    if name == "matrix":
        if len(args) < 6:
            return None
        return Matrix2x3(*args[:6])
    if name == "translate":
        return translate(args[0], args[1] if len(args) >= 2 else 0.0)
    if name == "scale":
        return scale(args[0], args[1] if len(args) >= 2 else None)
    if name == "rotate":
        if len(args) >= 3:
            return rotate(args[0], args[1], args[2])
        return rotate(args[0])
    if name == "skewx":
        return skew_x(args[0])
    if name == "skewy":
        return skew_y(args[0])
    return None


def parse_transform(text: str) -> Matrix2x3:
    """Parse an SVG transform list into a single matrix.

    Unknown function names and malformed argument lists are skipped.
    """
    result = IDENTITY
    if not text:
        return result

    pos = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if is_separator(ch):
            pos += 1
            continue
        if not ch.isalpha():
            pos += 1
            continue

        name_end = pos
        while name_end < n and text[name_end].isalpha():
            name_end += 1
        name = text[pos:name_end].lower()

        open_paren = name_end
        while open_paren < n and text[open_paren] in " \t\r\n":
            open_paren += 1
        if open_paren >= n or text[open_paren] != "(":
            pos = name_end
            continue
        close_paren = text.find(")", open_paren + 1)
        if close_paren == -1:
            logger.debug("Unterminated transform function %r", name)
            break

        matrix = _from_function(name, scan_numbers(text[open_paren + 1 : close_paren]))
        if matrix is None:
            logger.debug("Skipping transform function %r", name)
        else:
            result = compose(result, matrix)
        pos = close_paren + 1

    return result
