"""Tests for the command-line entry point."""

import json

import pytest
from pydantic import ValidationError

from tests.conftest import LINEAR_USE_SVG, RECT_SVG

from svgsketch.config import Settings
from svgsketch.main import build_parser, main


@pytest.fixture
def svg_file(tmp_path):
    path = tmp_path / "input.svg"
    path.write_text(RECT_SVG, encoding="utf-8")
    return path


def test_parser_defaults_from_settings():
    args = build_parser(Settings(default_scale=0.5)).parse_args(["in.svg"])
    assert args.scale == 0.5
    assert args.format == "btm"
    assert not args.no_text


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_SCALE", "0.25")
    monkeypatch.setenv("SVGSKETCH_LOG_LEVEL", "warning")
    settings = Settings()
    assert settings.default_scale == 0.25
    assert settings.svgsketch_log_level == "warning"


def test_settings_reject_unknown_output_format(monkeypatch):
    monkeypatch.setenv("DEFAULT_OUTPUT_FORMAT", "dxf")
    with pytest.raises(ValidationError):
        Settings()


def test_main_exits_on_invalid_settings(monkeypatch, svg_file, capsys):
    monkeypatch.setenv("DEFAULT_OUTPUT_FORMAT", "dxf")
    assert main([str(svg_file)]) == 2
    assert capsys.readouterr().out == ""


def test_main_prints_json(svg_file, capsys):
    assert main([str(svg_file), "--scale", "0.001"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["count"] == 4
    assert payload["format"] == "btm"
    assert {e["btType"] for e in payload["entities"]} == {"BTMSketchCurveSegment-155"}


def test_main_writes_output_file(svg_file, tmp_path):
    out = tmp_path / "out.json"
    assert main([str(svg_file), "-o", str(out), "--format", "intermediate"]) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["intermediate"].count("LINE ") == 4


def test_main_no_patterns(tmp_path, capsys):
    path = tmp_path / "uses.svg"
    path.write_text(LINEAR_USE_SVG, encoding="utf-8")
    assert main([str(path), "--no-patterns"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["patterns"] == []
    assert payload["count"] == 3


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.svg")]) == 1


def test_main_rejects_non_positive_scale(svg_file):
    assert main([str(svg_file), "--scale", "0"]) == 2
