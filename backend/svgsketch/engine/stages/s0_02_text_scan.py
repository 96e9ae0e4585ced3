"""S0.02 — Text Scan.

Skipped when text is not emitted as sketch text.
"""

from __future__ import annotations

from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import Phase, stage
from svgsketch.svg import text


@stage(
    id="S0.02",
    phase=Phase.SCANNING,
    enabled_by="text_as_sketch_text",
    description="Scan <text> elements with tspans and textPaths",
)
def text_scan(ctx: ConversionContext) -> None:
    ctx.text_elements = text.scan_text(ctx.markup)
