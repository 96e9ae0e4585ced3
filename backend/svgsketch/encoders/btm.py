"""SketchEntity → BTM JSON dicts (the CAD platform's sketch-entity schema).

Field names and ``btType`` tags are fixed by the consumer; do not rename.
Point ids are derived from the entity id: ``<id>.start``, ``<id>.end``,
``<id>.center``.
"""

from __future__ import annotations

from typing import Any

from svgsketch.models.entities import Bezier, Circle, Ellipse, LineSegment, SketchEntity, Text
from svgsketch.models.patterns import Pattern

# ── Schema type tags ──
BT_CURVE_SEGMENT = "BTMSketchCurveSegment-155"
BT_CURVE = "BTMSketchCurve-4"
BT_TEXT = "BTMSketchTextEntity-1761"
BT_LINE = "BTCurveGeometryLine-117"
BT_CIRCLE = "BTCurveGeometryCircle-115"
BT_ELLIPSE = "BTCurveGeometryEllipse-1189"
BT_SPLINE = "BTCurveGeometryControlPointSpline-2197"


def _line(entity: LineSegment) -> dict[str, Any]:
    return {
        "btType": BT_CURVE_SEGMENT,
        "entityId": entity.id,
        "startPointId": f"{entity.id}.start",
        "endPointId": f"{entity.id}.end",
        "isConstruction": entity.is_construction,
        "startParam": entity.start_param,
        "endParam": entity.end_param,
        "geometry": {
            "btType": BT_LINE,
            "pntX": entity.midpoint[0],
            "pntY": entity.midpoint[1],
            "dirX": entity.direction[0],
            "dirY": entity.direction[1],
        },
    }


def _circle(entity: Circle) -> dict[str, Any]:
    return {
        "btType": BT_CURVE,
        "entityId": entity.id,
        "centerId": f"{entity.id}.center",
        "isConstruction": entity.is_construction,
        "geometry": {
            "btType": BT_CIRCLE,
            "radius": entity.radius,
            "xCenter": entity.center[0],
            "yCenter": entity.center[1],
            "xDir": 1,
            "yDir": 0,
            "clockwise": False,
        },
    }


def _ellipse(entity: Ellipse) -> dict[str, Any]:
    return {
        "btType": BT_CURVE,
        "entityId": entity.id,
        "centerId": f"{entity.id}.center",
        "isConstruction": entity.is_construction,
        "geometry": {
            "btType": BT_ELLIPSE,
            "radius": entity.major_radius,
            "minorRadius": entity.minor_radius,
            "xCenter": entity.center[0],
            "yCenter": entity.center[1],
            "xDir": entity.major_direction[0],
            "yDir": entity.major_direction[1],
            "clockwise": False,
        },
    }


def _bezier(entity: Bezier) -> dict[str, Any]:
    flat = [coord for point in entity.control_points for coord in point]
    return {
        "btType": BT_CURVE_SEGMENT,
        "entityId": entity.id,
        "startPointId": f"{entity.id}.start",
        "endPointId": f"{entity.id}.end",
        "isConstruction": entity.is_construction,
        "startParam": 0.0,
        "endParam": 1.0,
        "geometry": {
            "btType": BT_SPLINE,
            "degree": 3,
            "isBezier": True,
            "controlPointCount": len(entity.control_points),
            "controlPoints": flat,
            "knots": list(entity.knots),
        },
    }


def _text(entity: Text) -> dict[str, Any]:
    return {
        "btType": BT_TEXT,
        "entityId": entity.id,
        "baselineStartX": entity.baseline_start[0],
        "baselineStartY": entity.baseline_start[1],
        "baselineDirectionX": entity.baseline_direction[0],
        "baselineDirectionY": entity.baseline_direction[1],
        "ascent": entity.ascent,
        "parameters": [
            {"parameterId": "text", "value": entity.content},
            {"parameterId": "fontName", "value": entity.font},
        ],
    }


_ENCODERS = {
    LineSegment: _line,
    Circle: _circle,
    Ellipse: _ellipse,
    Bezier: _bezier,
    Text: _text,
}


def encode_entity(entity: SketchEntity) -> dict[str, Any]:
    try:
        fn = _ENCODERS[type(entity)]
    except KeyError:
        raise TypeError(f"No BTM encoding for {type(entity).__name__}") from None
    return fn(entity)


def encode(
    entities: list[SketchEntity],
    patterns: list[Pattern] | None = None,
    scale: float = 1.0,
) -> list[dict[str, Any]]:
    """Encode every entity. Patterns and scale do not affect BTM output."""
    return [encode_entity(e) for e in entities]
