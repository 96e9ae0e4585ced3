"""Absolute-coordinate path commands produced by the path parser."""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CubicTo:
    c1: Point
    c2: Point
    point: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = MoveTo | LineTo | CubicTo | ClosePath
