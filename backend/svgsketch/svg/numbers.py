"""Numeric tokenizer shared by the transform, attribute and path grammars.

No engine imports. Numbers follow the SVG grammar: optional sign, digits
with at most one decimal point, optional exponent. Separators are
whitespace and commas.
"""

from __future__ import annotations

_SEPARATORS = frozenset(" \t\r\n\f,")
_DIGITS = frozenset("0123456789")


def is_separator(ch: str) -> bool:
    return ch in _SEPARATORS


def skip_separators(text: str, pos: int) -> int:
    """Advance past whitespace and commas."""
    n = len(text)
    while pos < n and text[pos] in _SEPARATORS:
        pos += 1
    return pos


def scan_number(text: str, pos: int) -> tuple[float, int] | None:
    """Read one number starting at ``pos`` (leading separators skipped).

    Returns ``(value, end)`` or ``None`` when no digit is found. A second
    decimal point or a sign ends the token, so ``"0.5.5"`` reads as 0.5
    then .5 and ``"10-5"`` reads as 10 then -5.
    """
    n = len(text)
    i = skip_separators(text, pos)
    start = i
    if i < n and text[i] in "+-":
        i += 1

    has_digit = False
    while i < n and text[i] in _DIGITS:
        i += 1
        has_digit = True
    if i < n and text[i] == ".":
        i += 1
        while i < n and text[i] in _DIGITS:
            i += 1
            has_digit = True
    if not has_digit:
        return None

    # Exponent only counts when digits follow it ("2em" is 2, not an error)
    if i < n and text[i] in "eE":
        j = i + 1
        if j < n and text[j] in "+-":
            j += 1
        if j < n and text[j] in _DIGITS:
            while j < n and text[j] in _DIGITS:
                j += 1
            i = j

    return float(text[start:i]), i


def scan_numbers(text: str) -> list[float]:
    """Read every number in ``text``, skipping characters that cannot start one."""
    values: list[float] = []
    pos = 0
    n = len(text)
    while pos < n:
        result = scan_number(text, pos)
        if result is None:
            pos = skip_separators(text, pos) + 1
            continue
        value, pos = result
        values.append(value)
    return values


def parse_float(text: str, default: float = 0.0) -> float:
    """Permissive conversion of an attribute value to float.

    Reads the leading number and ignores any trailing unit (``"12px"`` -> 12).
    Values with no leading number yield ``default``.
    """
    if not text:
        return default
    result = scan_number(text.strip(), 0)
    if result is None:
        return default
    return result[0]
