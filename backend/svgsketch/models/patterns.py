"""Detected repetition patterns over ``<use>`` instances.

Positions, spacings and angles are in SVG user units (before scale and
Y flip).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from svgsketch.models.path_commands import Point


@dataclass(frozen=True)
class LinearPattern:
    kind: ClassVar[str] = "linear"

    group_key: str
    count: int
    spacing: float
    direction: Point
    start: Point

    def describe(self) -> str:
        return f"Linear: {self.count} instances, spacing {self.spacing:.2f}"


@dataclass(frozen=True)
class GridPattern:
    kind: ClassVar[str] = "grid"

    group_key: str
    rows: int
    cols: int
    row_spacing: float
    col_spacing: float
    start: Point

    @property
    def count(self) -> int:
        return self.rows * self.cols

    def describe(self) -> str:
        return (
            f"Grid: {self.rows}×{self.cols} ({self.count} total), "
            f"row spacing {self.row_spacing:.2f}, col spacing {self.col_spacing:.2f}"
        )


@dataclass(frozen=True)
class CircularPattern:
    kind: ClassVar[str] = "circular"

    group_key: str
    count: int
    radius: float
    center: Point
    start_angle: float

    def describe(self) -> str:
        return f"Circular: {self.count} instances, radius {self.radius:.2f}"


Pattern = LinearPattern | GridPattern | CircularPattern


def describe_pattern(pattern: Pattern) -> str:
    return pattern.describe()


def pattern_to_dict(pattern: Pattern) -> dict[str, Any]:
    """Plain-dict view used by the response model."""
    data: dict[str, Any] = {
        "type": pattern.kind,
        "group_key": pattern.group_key,
        "count": pattern.count,
        "description": pattern.describe(),
    }
    if isinstance(pattern, LinearPattern):
        data.update(spacing=pattern.spacing, direction=list(pattern.direction), start=list(pattern.start))
    elif isinstance(pattern, GridPattern):
        data.update(
            rows=pattern.rows,
            cols=pattern.cols,
            row_spacing=pattern.row_spacing,
            col_spacing=pattern.col_spacing,
            start=list(pattern.start),
        )
    else:
        data.update(radius=pattern.radius, center=list(pattern.center), start_angle=pattern.start_angle)
    return data
