"""SketchEntity → Intermediate Format (IF), a line-based command listing.

    # Intermediate Format for SVG to Sketch
    # Scale: 0.001

    LINE x1 y1 x2 y2 [CONSTRUCTION]
    CIRCLE cx cy r [CONSTRUCTION]
    ELLIPSE cx cy rMajor rMinor [CONSTRUCTION]
    C x0 y0 x1 y1 x2 y2 x3 y3 [CONSTRUCTION]
    TEXT x y ascent "content"

    # Pattern: linear (3 instances)
    ARRAY_LINEAR count spacing dx dy
    BEGIN_PATTERN
    ...entities of the first instance...
    END_PATTERN

Entities belonging to a detected pattern are listed once, inside the
pattern block, for the first instance only. Numbers use 6 decimals.
"""

from __future__ import annotations

import logging

from svgsketch.models.entities import Bezier, Circle, Ellipse, LineSegment, SketchEntity, Text
from svgsketch.models.patterns import CircularPattern, GridPattern, LinearPattern, Pattern

logger = logging.getLogger(__name__)

HEADER = "# Intermediate Format for SVG to Sketch"


def _num(value: float) -> str:
    return f"{value:.6f}"


def _nums(*values: float) -> str:
    return " ".join(_num(v) for v in values)


def _flag(construction: bool) -> str:
    return " CONSTRUCTION" if construction else ""


def entity_line(entity: SketchEntity) -> str | None:
    if isinstance(entity, LineSegment):
        return f"LINE {_nums(*entity.start, *entity.end)}{_flag(entity.is_construction)}"
    if isinstance(entity, Circle):
        return f"CIRCLE {_nums(*entity.center, entity.radius)}{_flag(entity.is_construction)}"
    if isinstance(entity, Ellipse):
        return (
            f"ELLIPSE {_nums(*entity.center, entity.major_radius, entity.minor_radius)}"
            f"{_flag(entity.is_construction)}"
        )
    if isinstance(entity, Bezier):
        coords = [c for point in entity.control_points for c in point]
        return f"C {_nums(*coords)}{_flag(entity.is_construction)}"
    if isinstance(entity, Text):
        content = entity.content.replace('"', '\\"')
        return f'TEXT {_nums(*entity.baseline_start, entity.ascent)} "{content}"'
    logger.debug("No IF command for %s", type(entity).__name__)
    return None


def pattern_line(pattern: Pattern) -> str:
    if isinstance(pattern, LinearPattern):
        return f"ARRAY_LINEAR {pattern.count} {_nums(pattern.spacing, *pattern.direction)}"
    if isinstance(pattern, GridPattern):
        return (
            f"ARRAY_GRID {pattern.rows} {pattern.cols} "
            f"{_nums(pattern.row_spacing, pattern.col_spacing)}"
        )
    if isinstance(pattern, CircularPattern):
        return (
            f"ARRAY_CIRCULAR {pattern.count} "
            f"{_nums(pattern.radius, *pattern.center, pattern.start_angle)}"
        )
    raise TypeError(f"Unknown pattern type: {type(pattern).__name__}")


def encode(
    entities: list[SketchEntity],
    patterns: list[Pattern] | None = None,
    scale: float = 1.0,
) -> str:
    patterns = patterns or []
    pattern_keys = {p.group_key for p in patterns}
    lines = [HEADER, f"# Scale: {scale}", ""]

    for entity in entities:
        if entity.group_key in pattern_keys:
            continue
        line = entity_line(entity)
        if line:
            lines.append(line)

    for pattern in patterns:
        members = [e for e in entities if e.group_key == pattern.group_key]
        if not members:
            continue
        first = min((e.group_instance for e in members if e.group_instance is not None), default=None)
        lines.append("")
        lines.append(f"# Pattern: {pattern.kind} ({pattern.count} instances)")
        lines.append(pattern_line(pattern))
        lines.append("BEGIN_PATTERN")
        for entity in members:
            if entity.group_instance != first:
                continue
            line = entity_line(entity)
            if line:
                lines.append(line)
        lines.append("END_PATTERN")

    return "\n".join(lines)
