"""Sketch entities — the codec's output, in target-sketch coordinates.

Coordinates here are already transformed, scaled and Y-flipped. A line is
stored the way the sketch schema stores it: midpoint + unit direction +
two trim parameters along that direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from svgsketch.models.path_commands import Point

BEZIER_KNOTS: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True, kw_only=True)
class SketchEntity:
    kind: ClassVar[str] = "entity"

    id: str
    # Provenance for use clones: which pattern group / which <use>
    group_key: str | None = None
    group_instance: int | None = None


@dataclass(frozen=True, kw_only=True)
class LineSegment(SketchEntity):
    kind: ClassVar[str] = "line"

    midpoint: Point
    direction: Point
    start_param: float
    end_param: float
    is_construction: bool = False

    @property
    def start(self) -> Point:
        return (
            self.midpoint[0] + self.direction[0] * self.start_param,
            self.midpoint[1] + self.direction[1] * self.start_param,
        )

    @property
    def end(self) -> Point:
        return (
            self.midpoint[0] + self.direction[0] * self.end_param,
            self.midpoint[1] + self.direction[1] * self.end_param,
        )

    @property
    def length(self) -> float:
        return self.end_param - self.start_param


@dataclass(frozen=True, kw_only=True)
class Circle(SketchEntity):
    kind: ClassVar[str] = "circle"

    center: Point
    radius: float
    is_construction: bool = False


@dataclass(frozen=True, kw_only=True)
class Ellipse(SketchEntity):
    kind: ClassVar[str] = "ellipse"

    center: Point
    major_radius: float
    minor_radius: float
    major_direction: Point = (1.0, 0.0)
    is_construction: bool = False


@dataclass(frozen=True, kw_only=True)
class Bezier(SketchEntity):
    kind: ClassVar[str] = "bezier"

    control_points: tuple[Point, Point, Point, Point]
    knots: tuple[float, ...] = BEZIER_KNOTS
    is_construction: bool = False


@dataclass(frozen=True, kw_only=True)
class Text(SketchEntity):
    kind: ClassVar[str] = "text"

    baseline_start: Point
    baseline_direction: Point = (1.0, 0.0)
    ascent: float
    content: str
    font: str
