"""Tests for the pipeline orchestrator and the convert entry points."""

import pytest

from tests.conftest import LINE_SVG, LINEAR_USE_SVG, MISSING_USE_SVG, TEXT_SVG

from svgsketch.engine.context import ConversionContext
from svgsketch.engine.pipeline import Pipeline, convert, convert_document, create_pipeline
from svgsketch.engine.registry import Phase, StageRegistry, StageSpec
from svgsketch.models.entities import LineSegment, Text
from svgsketch.models.requests import ConvertOptions


def test_pipeline_runs_stages():
    reg = StageRegistry()
    results = []

    def s1(ctx: ConversionContext) -> None:
        results.append("s1")

    def s2(ctx: ConversionContext) -> None:
        results.append("s2")

    reg.register(StageSpec(id="S0.02", phase=Phase.SCANNING, fn=s2, dependencies=["S0.01"]))
    reg.register(StageSpec(id="S0.01", phase=Phase.SCANNING, fn=s1))

    ctx = Pipeline(registry=reg).run(ConversionContext())

    assert results == ["s1", "s2"]
    assert ctx.completed_stages == {"S0.01", "S0.02"}


def test_pipeline_isolates_errors():
    reg = StageRegistry()
    ran = []

    def fail(ctx: ConversionContext) -> None:
        raise ValueError("test error")

    reg.register(StageSpec(id="S0.01", phase=Phase.SCANNING, fn=fail))
    reg.register(StageSpec(id="S1.01", phase=Phase.EXPANSION, fn=lambda ctx: ran.append(1)))

    ctx = Pipeline(registry=reg).run(ConversionContext())

    assert "test error" in ctx.errors["S0.01"]
    assert ran == [1]
    assert ctx.completed_stages == {"S1.01"}


def test_pipeline_skips_disabled_stage():
    reg = StageRegistry()
    ran = []
    reg.register(StageSpec(id="S0.01", phase=Phase.SCANNING, fn=lambda ctx: ran.append("scan")))
    reg.register(
        StageSpec(
            id="S2.01",
            phase=Phase.ANALYSIS,
            fn=lambda ctx: ran.append("patterns"),
            dependencies=["S0.01"],
            enabled_by="detect_patterns",
        )
    )

    ctx = ConversionContext(options=ConvertOptions(detect_patterns=False))
    Pipeline(registry=reg).run(ctx)

    assert ran == ["scan"]
    assert ctx.completed_stages == {"S0.01"}


def test_registered_stages():
    pipeline = create_pipeline()
    ids = [s.id for s in pipeline.registry.resolve_order()]
    assert ids == ["S0.01", "S0.02", "S1.01", "S2.01", "S3.01"]


def test_gating_skips_text_and_patterns():
    pipeline = create_pipeline()
    options = ConvertOptions(text_as_sketch_text=False, detect_patterns=False)
    ctx = pipeline.run(ConversionContext(markup=TEXT_SVG, options=options))
    assert "S0.02" not in ctx.completed_stages
    assert "S2.01" not in ctx.completed_stages
    assert ctx.text_elements == []
    assert "S3.01" in ctx.completed_stages
    assert not any(isinstance(e, Text) for e in ctx.entities)


def test_convert_line():
    entities, count = convert(LINE_SVG)
    assert count == 1
    (line,) = entities
    assert isinstance(line, LineSegment)
    assert line.midpoint == pytest.approx((5.0, 0.0))
    assert line.direction == pytest.approx((1.0, 0.0))
    assert (line.start_param, line.end_param) == (-5.0, 5.0)


def test_convert_none_is_contract_violation():
    with pytest.raises(TypeError):
        convert(None)


def test_convert_tolerates_bad_input():
    assert convert("") == ([], 0)
    assert convert("<<<>>> garbage <path d='Q'/>") == ([], 0)
    assert convert(MISSING_USE_SVG) == ([], 0)


def test_convert_text_entities():
    entities, _ = convert(TEXT_SVG)
    texts = [e for e in entities if isinstance(e, Text)]
    assert [t.content for t in texts] == ["Hello & bye", "ab"]


def test_convert_document_btm():
    response = convert_document(LINEAR_USE_SVG, ConvertOptions(scale=0.001))
    assert response.format == "btm"
    assert response.count == 3
    assert response.intermediate is None
    assert response.errors == {}
    assert [e["btType"] for e in response.entities] == ["BTMSketchCurve-4"] * 3
    (pattern,) = response.patterns
    assert pattern["type"] == "linear"
    assert pattern["description"] == "Linear: 3 instances, spacing 10.00"


def test_convert_document_intermediate():
    response = convert_document(LINEAR_USE_SVG, ConvertOptions(output_format="intermediate"))
    assert response.format == "intermediate"
    assert response.intermediate.startswith("# Intermediate Format")
    assert "ARRAY_LINEAR 3 10.000000 1.000000 0.000000" in response.intermediate
    assert len(response.entities) == 3


def test_convert_document_drops_overflowing_numbers():
    response = convert_document('<svg><path d="M0 0 L1e999 0"/><circle r="1e999"/></svg>')
    assert response.count == 0
    assert response.entities == []
    assert response.errors == {}
