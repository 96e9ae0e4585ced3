"""Attribute extraction grammar shared by every element handler.

    tag_body   := name (ws attribute)* ws? "/"?
    attribute  := attr_name ws? ("=" ws? value)?
    value      := '"' [^"]* '"' | "'" [^']* "'" | unquoted
    style      := declaration (";" declaration)*
    declaration:= prop ws? ":" ws? value

Attribute and style property names are matched case-insensitively
(``startOffset`` and ``startoffset`` are the same key).
"""

from __future__ import annotations

from svgsketch.svg.numbers import parse_float

_NAME_STOP = frozenset(" \t\r\n\f=/>\"'")
_WS = frozenset(" \t\r\n\f")


def _skip_ws(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos] in _WS:
        pos += 1
    return pos


def split_tag_name(body: str) -> tuple[str, str]:
    """Split a tag body into its lower-cased local name and the attribute text.

    Namespace prefixes are dropped (``svg:path`` -> ``path``).
    """
    body = body.lstrip()
    end = 0
    n = len(body)
    while end < n and body[end] not in _WS and body[end] not in "/>":
        end += 1
    name = body[:end].lower()
    if ":" in name:
        name = name.rsplit(":", 1)[1]
    return name, body[end:]


def parse_attributes(text: str) -> dict[str, str]:
    """Parse ``name="value"`` pairs from the attribute part of a tag.

    Later duplicates win. Attributes without a value map to ``""``.
    """
    attrs: dict[str, str] = {}
    pos = 0
    n = len(text)
    while pos < n:
        pos = _skip_ws(text, pos)
        if pos >= n:
            break
        if text[pos] in _NAME_STOP:
            pos += 1
            continue

        name_start = pos
        while pos < n and text[pos] not in _NAME_STOP and text[pos] not in _WS:
            pos += 1
        name = text[name_start:pos].lower()

        pos = _skip_ws(text, pos)
        if pos >= n or text[pos] != "=":
            attrs[name] = ""
            continue
        pos = _skip_ws(text, pos + 1)
        if pos >= n:
            attrs[name] = ""
            break

        quote = text[pos]
        if quote in "\"'":
            close = text.find(quote, pos + 1)
            if close == -1:
                # Unterminated quote: take the rest of the tag
                attrs[name] = text[pos + 1 :]
                break
            attrs[name] = text[pos + 1 : close]
            pos = close + 1
        else:
            value_start = pos
            while pos < n and text[pos] not in _WS and text[pos] != ">":
                pos += 1
            attrs[name] = text[value_start:pos]
    return attrs


def parse_style(style: str) -> dict[str, str]:
    """Parse an inline ``style`` declaration list."""
    props: dict[str, str] = {}
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        prop = prop.strip().lower()
        if prop:
            props[prop] = value.strip()
    return props


class Attributes:
    """Read-only view over one tag's attributes plus its inline style."""

    def __init__(self, attrs: dict[str, str]) -> None:
        self._attrs = attrs
        self._style = parse_style(attrs.get("style", ""))

    @classmethod
    def from_text(cls, text: str) -> Attributes:
        return cls(parse_attributes(text))

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._attrs

    def get(self, name: str, default: str = "") -> str:
        return self._attrs.get(name.lower(), default)

    def number(self, name: str, default: float = 0.0) -> float:
        return parse_float(self.get(name), default)

    def style(self, prop: str, default: str = "") -> str:
        return self._style.get(prop.lower(), default)

    def presentation(self, name: str, default: str = "") -> str:
        """Value from the style property if set, else from the attribute."""
        value = self.style(name)
        if value:
            return value
        return self.get(name, default)

    def href(self) -> str:
        """``href`` or ``xlink:href``, whichever is present."""
        return self.get("href") or self.get("xlink:href")

    @property
    def is_dashed(self) -> bool:
        dash = self.get("stroke-dasharray").strip() or self.style("stroke-dasharray").strip()
        return bool(dash) and dash.lower() != "none"
