"""Tag scanner — single left-to-right pass over SVG markup, no DOM.

``iter_tags`` yields raw tags (comments, processing instructions and
CDATA skipped; ``>`` inside quoted attribute values does not end a tag).
``ScanState`` tracks the inherited transform stack, ``<defs>`` depth and
``<symbol>`` stack while tags stream past. ``scan`` turns drawable tags
into ``Element`` dataclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from svgsketch.models.elements import (
    CircleElement,
    Element,
    EllipseElement,
    LineElement,
    PathElement,
    RectElement,
    UseElement,
)
from svgsketch.svg.attributes import Attributes, split_tag_name
from svgsketch.svg.numbers import scan_numbers
from svgsketch.svg.transform import IDENTITY, Matrix2x3, compose, parse_transform, translate

logger = logging.getLogger(__name__)

DRAWABLE_TAGS = frozenset({"path", "rect", "line", "circle", "ellipse", "polyline", "polygon", "use"})


@dataclass
class Tag:
    name: str
    attributes: Attributes
    is_closing: bool = False
    is_self_closing: bool = False
    # Span of the whole tag in the markup, "<" .. ">" inclusive
    start: int = 0
    end: int = 0


def _find_tag_end(markup: str, pos: int) -> tuple[int, bool]:
    """Index of the tag's closing ``>`` and whether it was ``/>``; -1 if unterminated."""
    quote = ""
    n = len(markup)
    i = pos
    while i < n:
        ch = markup[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == ">":
            return i, i > pos and markup[i - 1] == "/"
        i += 1
    return -1, False


def _skip_special(markup: str, a: int) -> int | None:
    """End offset for comments / PIs / CDATA / doctype starting at ``a``, else None.

    Returns ``len(markup)`` when the construct is unterminated.
    """
    for opener, closer in (("<!--", "-->"), ("<?", "?>"), ("<![CDATA[", "]]>")):
        if markup.startswith(opener, a):
            end = markup.find(closer, a + len(opener))
            return len(markup) if end == -1 else end + len(closer)
    if markup.startswith("<!", a):
        end = markup.find(">", a + 2)
        return len(markup) if end == -1 else end + 1
    return None


def iter_tags(markup: str) -> Iterator[Tag]:
    pos = 0
    n = len(markup)
    while pos < n:
        a = markup.find("<", pos)
        if a == -1:
            return

        skipped = _skip_special(markup, a)
        if skipped is not None:
            pos = skipped
            continue

        tag_end, self_closing = _find_tag_end(markup, a + 1)
        if tag_end == -1:
            logger.debug("Unterminated tag at offset %d", a)
            return

        body = markup[a + 1 : tag_end - 1 if self_closing else tag_end]
        pos = tag_end + 1
        if not body.strip():
            continue

        if body.startswith("/"):
            name, _ = split_tag_name(body[1:])
            yield Tag(name=name, attributes=Attributes({}), is_closing=True, start=a, end=pos)
            continue

        name, attr_text = split_tag_name(body)
        if not name:
            continue
        yield Tag(
            name=name,
            attributes=Attributes.from_text(attr_text),
            is_self_closing=self_closing,
            start=a,
            end=pos,
        )


@dataclass
class ScanState:
    """Inherited context for the tag currently being scanned."""

    transform_stack: list[Matrix2x3] = field(default_factory=lambda: [IDENTITY])
    defs_depth: int = 0
    symbol_stack: list[str] = field(default_factory=list)

    @property
    def inherited(self) -> Matrix2x3:
        return self.transform_stack[-1]

    @property
    def is_hidden(self) -> bool:
        return self.defs_depth > 0 or bool(self.symbol_stack)

    @property
    def symbol_id(self) -> str | None:
        if self.symbol_stack and self.symbol_stack[-1]:
            return self.symbol_stack[-1]
        return None

    def element_transform(self, attrs: Attributes) -> Matrix2x3:
        own = attrs.get("transform")
        if not own:
            return self.inherited
        return compose(self.inherited, parse_transform(own))

    def update(self, tag: Tag) -> bool:
        """Apply a structural tag (g / defs / symbol). Returns True if consumed."""
        if tag.is_closing:
            if tag.name == "g" and len(self.transform_stack) > 1:
                self.transform_stack.pop()
            elif tag.name == "defs" and self.defs_depth > 0:
                self.defs_depth -= 1
            elif tag.name == "symbol" and self.symbol_stack:
                self.symbol_stack.pop()
            return True

        if tag.name == "g":
            if not tag.is_self_closing:
                self.transform_stack.append(self.element_transform(tag.attributes))
            return True
        if tag.name == "defs":
            if not tag.is_self_closing:
                self.defs_depth += 1
            return True
        if tag.name == "symbol":
            if not tag.is_self_closing:
                self.symbol_stack.append(tag.attributes.get("id"))
            return True
        return False


def points_to_path(points: str, close: bool) -> str:
    """Rewrite a polyline/polygon point list as path data (M, L..., optional Z)."""
    values = scan_numbers(points)
    parts: list[str] = []
    for i in range(0, len(values) - 1, 2):
        parts.append(f"{'M' if i == 0 else 'L'}{values[i]!r},{values[i + 1]!r}")
    if close and parts:
        parts.append("Z")
    return " ".join(parts)


def _build_element(tag: Tag, state: ScanState) -> Element | None:
    attrs = tag.attributes
    name = tag.name

    if name == "use":
        # x/y act as translate(x,y) applied before the use's own transform
        local = translate(attrs.number("x"), attrs.number("y"))
        own = attrs.get("transform")
        if own:
            local = compose(parse_transform(own), local)
        return UseElement(href=attrs.href(), transform=compose(state.inherited, local))

    if name == "path":
        d = attrs.get("d")
        if not d.strip():
            logger.debug("Skipping <path> without path data")
            return None
        return PathElement(d=d)
    if name in ("polyline", "polygon"):
        d = points_to_path(attrs.get("points"), close=name == "polygon")
        if not d:
            logger.debug("Skipping <%s> without points", name)
            return None
        return PathElement(d=d, source_tag=name)
    if name == "rect":
        return RectElement(
            x=attrs.number("x"),
            y=attrs.number("y"),
            width=attrs.number("width"),
            height=attrs.number("height"),
        )
    if name == "line":
        return LineElement(
            x1=attrs.number("x1"),
            y1=attrs.number("y1"),
            x2=attrs.number("x2"),
            y2=attrs.number("y2"),
        )
    if name == "circle":
        return CircleElement(cx=attrs.number("cx"), cy=attrs.number("cy"), r=attrs.number("r"))
    if name == "ellipse":
        return EllipseElement(
            cx=attrs.number("cx"),
            cy=attrs.number("cy"),
            rx=attrs.number("rx"),
            ry=attrs.number("ry"),
        )
    return None


def scan(markup: str) -> list[Element]:
    """Extract drawable elements in document order."""
    state = ScanState()
    elements: list[Element] = []

    for tag in iter_tags(markup):
        if state.update(tag) or tag.name not in DRAWABLE_TAGS:
            continue

        el = _build_element(tag, state)
        if el is None:
            continue

        attrs = tag.attributes
        el.id = attrs.get("id") or None
        el.is_construction = attrs.is_dashed
        el.is_hidden = state.is_hidden
        el.parent_symbol_id = state.symbol_id
        if not isinstance(el, UseElement):
            el.transform = state.element_transform(attrs)
        elements.append(el)

    logger.info("Scanned %d elements", len(elements))
    return elements
