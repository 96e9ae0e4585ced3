"""Shared test fixtures."""

from __future__ import annotations

import pytest

from svgsketch.models.requests import ConvertOptions


# Sample SVGs

LINE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 20 20">
  <line x1="0" y1="0" x2="10" y2="0"/>
</svg>'''

RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 20 20">
  <rect x="0" y="0" width="10" height="5"/>
</svg>'''

SHAPES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <!-- one of each drawable -->
  <rect x="10" y="10" width="80" height="80"/>
  <circle cx="50" cy="50" r="20"/>
  <ellipse cx="50" cy="50" rx="30" ry="10"/>
  <line x1="0" y1="100" x2="100" y2="100" stroke-dasharray="4 2"/>
  <path d="M10 10 C20 0 30 0 40 10"/>
  <polygon points="0,0 10,0 10,10"/>
</svg>'''

GROUPED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g transform="translate(10,20)">
    <g transform="scale(2)">
      <circle cx="1" cy="1" r="1"/>
    </g>
    <line x1="0" y1="0" x2="5" y2="0"/>
  </g>
  <line x1="0" y1="0" x2="5" y2="0"/>
</svg>'''

LINEAR_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
  <defs>
    <circle id="dot" cx="0" cy="0" r="1"/>
  </defs>
  <use href="#dot" x="0" y="0"/>
  <use href="#dot" x="10" y="0"/>
  <use xlink:href="#dot" x="20" y="0"/>
</svg>'''

GRID_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <defs><rect id="cell" width="2" height="2"/></defs>
  <use href="#cell" x="0" y="0"/>
  <use href="#cell" x="10" y="0"/>
  <use href="#cell" x="20" y="0"/>
  <use href="#cell" x="0" y="10"/>
  <use href="#cell" x="10" y="10"/>
  <use href="#cell" x="20" y="10"/>
</svg>'''

SYMBOL_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <symbol id="mark">
    <line x1="0" y1="0" x2="4" y2="0"/>
    <line x1="0" y1="0" x2="0" y2="4"/>
  </symbol>
  <use href="#mark" transform="translate(100,0)"/>
  <use href="#mark" transform="translate(200,0)"/>
</svg>'''

MISSING_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <use href="#missing"/>
</svg>'''

TEXT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <text x="10" y="20" font-size="10" font-family="'Arial'">Hello &amp; bye</text>
  <text x="50" y="20" style="font-size: 8px; text-anchor: middle">ab</text>
  <defs><text x="0" y="0">hidden</text></defs>
</svg>'''


@pytest.fixture
def line_svg() -> str:
    return LINE_SVG


@pytest.fixture
def rect_svg() -> str:
    return RECT_SVG


@pytest.fixture
def shapes_svg() -> str:
    return SHAPES_SVG


@pytest.fixture
def linear_use_svg() -> str:
    return LINEAR_USE_SVG


@pytest.fixture
def grid_use_svg() -> str:
    return GRID_USE_SVG


@pytest.fixture
def text_svg() -> str:
    return TEXT_SVG


@pytest.fixture
def options() -> ConvertOptions:
    return ConvertOptions()
