"""Tests for the path command parser."""

import pytest

from svgsketch.models.path_commands import ClosePath, CubicTo, LineTo, MoveTo
from svgsketch.svg.path_parser import parse


def test_move_line_close():
    cmds = parse("M0 0 L10 0 L10 10 Z")
    assert cmds == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0)), LineTo((10.0, 10.0)), ClosePath()]


def test_relative_commands():
    cmds = parse("m5 5 l10 0 h-5 v5")
    assert [c.point for c in cmds] == [(5.0, 5.0), (15.0, 5.0), (10.0, 5.0), (10.0, 10.0)]


def test_implicit_repeat():
    cmds = parse("M0 0 L1 1 2 2 3 3")
    assert len(cmds) == 4
    assert cmds[-1] == LineTo((3.0, 3.0))


def test_extra_pairs_after_move_are_lines():
    cmds = parse("M0 0 10 0 10 10")
    assert cmds == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0)), LineTo((10.0, 10.0))]
    rel = parse("m1 1 2 0")
    assert rel[1] == LineTo((3.0, 1.0))


def test_quadratic_degree_elevation():
    cmds = parse("M0 0 Q5 10 10 0")
    cubic = cmds[1]
    assert isinstance(cubic, CubicTo)
    assert cubic.c1 == pytest.approx((10 / 3, 20 / 3), abs=1e-6)
    assert cubic.c2 == pytest.approx((20 / 3, 20 / 3), abs=1e-6)
    assert cubic.point == (10.0, 0.0)


def test_smooth_cubic_uses_current_point_by_default():
    cmds = parse("M0 0 C0 10 10 10 10 0 S20 -10 20 0")
    smooth = cmds[2]
    assert smooth.c1 == (10.0, 0.0)
    assert smooth.c2 == (20.0, -10.0)


def test_smooth_cubic_reflection_when_enabled():
    cmds = parse("M0 0 C0 10 10 10 10 0 S20 -10 20 0", reflect_smooth=True)
    assert cmds[2].c1 == (10.0, -10.0)


def test_smooth_quadratic():
    default = parse("M0 0 Q5 10 10 0 T20 0")[2]
    # Control point at the current point: both cubic controls lie on the chord
    assert default.c1 == pytest.approx((10.0, 0.0))
    assert default.c2 == pytest.approx((40 / 3, 0.0))

    reflected = parse("M0 0 Q5 10 10 0 T20 0", reflect_smooth=True)[2]
    # Reflected control (15, -10)
    assert reflected.c1 == pytest.approx((10 + 2 / 3 * 5, -20 / 3))


def test_arc_degrades_to_line():
    cmds = parse("M0 0 A5 5 0 0 1 10 0")
    assert cmds == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0))]


def test_arc_compact_flags():
    cmds = parse("M0 0 a5 5 0 1110 0")
    assert cmds[-1] == LineTo((10.0, 0.0))


def test_compact_numbers():
    cmds = parse("M0,0L10-5l.5.5")
    assert cmds[1] == LineTo((10.0, -5.0))
    assert cmds[2] == LineTo((10.5, -4.5))


def test_close_resets_current_point():
    cmds = parse("M5 5 L10 5 Z l1 0")
    assert cmds[-1] == LineTo((6.0, 5.0))


def test_incomplete_group_and_junk_are_skipped():
    assert parse("M0 0 L10") == [MoveTo((0.0, 0.0))]
    cmds = parse("junk M0 0 X L1 1")
    assert cmds == [MoveTo((0.0, 0.0)), LineTo((1.0, 1.0))]


def test_empty_path():
    assert parse("") == []
    assert parse("   ") == []
