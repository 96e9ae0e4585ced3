"""Text scanner — ``<text>`` elements with nested ``<tspan>`` / ``<textPath>``.

Walks the same tag stream as the element scanner so text inherits group
transforms and is hidden inside ``<defs>`` / ``<symbol>``.
"""

from __future__ import annotations

import html
import logging
import re

from svgsketch.models.elements import TextElement, TextPathSpan, TextSpan
from svgsketch.svg.attributes import Attributes
from svgsketch.svg.numbers import parse_float
from svgsketch.svg.scanner import ScanState, Tag, iter_tags
from svgsketch.svg.use_expander import normalize_href

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_FONT_SIZE_DEFAULT = 12.0


def _plain_text(fragment: str) -> str:
    """Strip markup, decode entities and collapse whitespace."""
    text = html.unescape(_TAG_RE.sub("", fragment))
    return _WS_RE.sub(" ", text).strip()


def _optional_number(attrs: Attributes, name: str) -> float | None:
    if name not in attrs or not attrs.get(name).strip():
        return None
    return attrs.number(name)


def _find_close(markup: str, name: str, start: int) -> int:
    """Offset of the ``</name>`` closing an element opened just before ``start``, or -1.

    Same-name elements opened in between are matched first.
    """
    depth = 0
    for tag in iter_tags(markup[start:]):
        if tag.name != name or tag.is_self_closing:
            continue
        if not tag.is_closing:
            depth += 1
        elif depth:
            depth -= 1
        else:
            return start + tag.start
    return -1


def _text_element(tag: Tag, inner: str, state: ScanState) -> TextElement:
    attrs = tag.attributes
    font_size = attrs.number("font-size", _FONT_SIZE_DEFAULT)
    style_size = attrs.style("font-size")
    if style_size:
        font_size = parse_float(style_size, font_size)

    element = TextElement(
        content=_plain_text(inner),
        x=attrs.number("x"),
        y=attrs.number("y"),
        font_size=font_size,
        font_family=attrs.presentation("font-family", "sans-serif").strip("'\" ") or "sans-serif",
        text_anchor=attrs.presentation("text-anchor", "start").strip() or "start",
        transform=state.element_transform(attrs),
        id=attrs.get("id") or None,
        is_hidden=state.is_hidden,
    )

    # Only top-level spans; text of nested ones stays with their parent
    child_end = 0
    for child in iter_tags(inner):
        if child.start < child_end:
            continue
        if child.is_closing or child.is_self_closing or child.name not in ("tspan", "textpath"):
            continue
        close = _find_close(inner, child.name, child.end)
        if close == -1:
            logger.debug("Unclosed <%s> inside <text>", child.name)
            continue
        child_end = close
        content = _plain_text(inner[child.end : close])
        if child.name == "tspan":
            element.tspans.append(
                TextSpan(
                    content=content,
                    x=_optional_number(child.attributes, "x"),
                    y=_optional_number(child.attributes, "y"),
                    dx=child.attributes.number("dx"),
                    dy=child.attributes.number("dy"),
                )
            )
        else:
            element.text_paths.append(
                TextPathSpan(
                    content=content,
                    path_id=normalize_href(child.attributes.href()),
                    start_offset=child.attributes.number("startoffset"),
                )
            )
    return element


def scan_text(markup: str) -> list[TextElement]:
    """Extract text elements in document order."""
    state = ScanState()
    texts: list[TextElement] = []
    skip_until = 0

    for tag in iter_tags(markup):
        if tag.start < skip_until:
            # Nested markup of a <text> already consumed
            continue
        if state.update(tag) or tag.name != "text" or tag.is_self_closing:
            continue

        close = _find_close(markup, "text", tag.end)
        if close == -1:
            logger.debug("Unclosed <text> at offset %d", tag.start)
            break
        element = _text_element(tag, markup[tag.end : close], state)
        skip_until = close
        if not element.content:
            continue
        texts.append(element)

    logger.info("Scanned %d text elements", len(texts))
    return texts
