"""Tests for the BTM serializer."""

import pytest

from svgsketch.encoders import btm, get_encoder
from svgsketch.models.entities import Bezier, Circle, Ellipse, LineSegment, SketchEntity, Text


def test_line_shape():
    line = LineSegment(id="line_1", midpoint=(5.0, 0.0), direction=(1.0, 0.0), start_param=-5.0, end_param=5.0)
    assert btm.encode_entity(line) == {
        "btType": "BTMSketchCurveSegment-155",
        "entityId": "line_1",
        "startPointId": "line_1.start",
        "endPointId": "line_1.end",
        "isConstruction": False,
        "startParam": -5.0,
        "endParam": 5.0,
        "geometry": {
            "btType": "BTCurveGeometryLine-117",
            "pntX": 5.0,
            "pntY": 0.0,
            "dirX": 1.0,
            "dirY": 0.0,
        },
    }


def test_circle_shape():
    data = btm.encode_entity(Circle(id="circle_2", center=(1.0, -2.0), radius=3.0, is_construction=True))
    assert data["btType"] == "BTMSketchCurve-4"
    assert data["centerId"] == "circle_2.center"
    assert data["isConstruction"] is True
    assert data["geometry"] == {
        "btType": "BTCurveGeometryCircle-115",
        "radius": 3.0,
        "xCenter": 1.0,
        "yCenter": -2.0,
        "xDir": 1,
        "yDir": 0,
        "clockwise": False,
    }


def test_ellipse_shape():
    ellipse = Ellipse(id="ellipse_3", center=(0.0, 0.0), major_radius=4.0, minor_radius=2.0, major_direction=(0.0, -1.0))
    data = btm.encode_entity(ellipse)
    assert data["btType"] == "BTMSketchCurve-4"
    geometry = data["geometry"]
    assert geometry["btType"] == "BTCurveGeometryEllipse-1189"
    assert (geometry["radius"], geometry["minorRadius"]) == (4.0, 2.0)
    assert (geometry["xDir"], geometry["yDir"]) == (0.0, -1.0)


def test_bezier_shape():
    bezier = Bezier(id="bezier_4", control_points=((0.0, 0.0), (1.0, 2.0), (3.0, 4.0), (5.0, 6.0)))
    data = btm.encode_entity(bezier)
    assert data["btType"] == "BTMSketchCurveSegment-155"
    geometry = data["geometry"]
    assert geometry["btType"] == "BTCurveGeometryControlPointSpline-2197"
    assert geometry["degree"] == 3
    assert geometry["isBezier"] is True
    assert geometry["controlPointCount"] == 4
    assert geometry["controlPoints"] == [0.0, 0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert geometry["knots"] == [0, 0, 0, 0, 1, 1, 1, 1]


def test_text_shape():
    text = Text(id="text_5", baseline_start=(1.0, -2.0), ascent=0.012, content="Hi", font="Arial")
    assert btm.encode_entity(text) == {
        "btType": "BTMSketchTextEntity-1761",
        "entityId": "text_5",
        "baselineStartX": 1.0,
        "baselineStartY": -2.0,
        "baselineDirectionX": 1.0,
        "baselineDirectionY": 0.0,
        "ascent": 0.012,
        "parameters": [
            {"parameterId": "text", "value": "Hi"},
            {"parameterId": "fontName", "value": "Arial"},
        ],
    }


def test_unknown_entity_type():
    with pytest.raises(TypeError):
        btm.encode_entity(SketchEntity(id="x_1"))


def test_get_encoder():
    assert get_encoder("btm") is btm.encode
    with pytest.raises(ValueError, match="Unknown output format"):
        get_encoder("dxf")
