"""Scanned SVG elements — one dataclass per drawable tag.

Every element carries its fully composed transform (inherited group
transforms ∘ own transform). Geometry stays in user units; transforms are
applied once, in the geometry codec.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar

from svgsketch.svg.transform import IDENTITY, Matrix2x3


@dataclass(kw_only=True)
class Element:
    """Fields common to every drawable element."""

    kind: ClassVar[str] = "element"

    transform: Matrix2x3 = IDENTITY
    is_construction: bool = False
    id: str | None = None
    # True inside <defs> or <symbol>
    is_hidden: bool = False
    # Set on use clones: the href that produced this instance
    source_group_key: str | None = None
    # Scan-order index of the <use> that produced this clone
    source_use_index: int | None = None
    parent_symbol_id: str | None = None

    def clone_for_use(self, transform: Matrix2x3, group_key: str, use_index: int) -> Element:
        """Visible copy placed by a ``<use>``."""
        return replace(
            self,
            transform=transform,
            source_group_key=group_key,
            source_use_index=use_index,
            is_hidden=False,
            parent_symbol_id=None,
        )


@dataclass(kw_only=True)
class PathElement(Element):
    kind: ClassVar[str] = "path"

    d: str = ""
    # "polyline" / "polygon" when rewritten from a point list
    source_tag: str = "path"


@dataclass(kw_only=True)
class RectElement(Element):
    kind: ClassVar[str] = "rect"

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(kw_only=True)
class LineElement(Element):
    kind: ClassVar[str] = "line"

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0


@dataclass(kw_only=True)
class CircleElement(Element):
    kind: ClassVar[str] = "circle"

    cx: float = 0.0
    cy: float = 0.0
    r: float = 0.0


@dataclass(kw_only=True)
class EllipseElement(Element):
    kind: ClassVar[str] = "ellipse"

    cx: float = 0.0
    cy: float = 0.0
    rx: float = 0.0
    ry: float = 0.0


@dataclass(kw_only=True)
class UseElement(Element):
    kind: ClassVar[str] = "use"

    # Raw href, possibly with a leading '#'
    href: str = ""


@dataclass(kw_only=True)
class TextSpan:
    content: str = ""
    x: float | None = None
    y: float | None = None
    dx: float = 0.0
    dy: float = 0.0


@dataclass(kw_only=True)
class TextPathSpan:
    content: str = ""
    # Referenced path id, without '#'
    path_id: str = ""
    start_offset: float = 0.0


@dataclass(kw_only=True)
class TextElement:
    """A ``<text>`` element with its nested ``<tspan>`` / ``<textPath>`` items."""

    content: str = ""
    x: float = 0.0
    y: float = 0.0
    font_size: float = 12.0
    font_family: str = "sans-serif"
    text_anchor: str = "start"
    transform: Matrix2x3 = IDENTITY
    id: str | None = None
    is_hidden: bool = False
    tspans: list[TextSpan] = field(default_factory=list)
    text_paths: list[TextPathSpan] = field(default_factory=list)
