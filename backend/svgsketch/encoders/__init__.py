"""Output serializers. One codec, selected by name."""

from __future__ import annotations

from typing import Any, Callable

from svgsketch.encoders import btm, intermediate

Encoder = Callable[..., Any]

ENCODERS: dict[str, Encoder] = {
    "btm": btm.encode,
    "intermediate": intermediate.encode,
}


def get_encoder(name: str) -> Encoder:
    try:
        return ENCODERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown output format: {name!r} (expected one of {sorted(ENCODERS)})"
        ) from None
