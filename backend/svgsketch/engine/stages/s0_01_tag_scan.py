"""S0.01 — Tag Scan.

Single pass over the markup producing drawable elements with their
composed transforms, hidden/symbol flags and construction flags.
"""

from __future__ import annotations

from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import Phase, stage
from svgsketch.svg import scanner


@stage(
    id="S0.01",
    phase=Phase.SCANNING,
    description="Scan drawable tags into elements",
)
def tag_scan(ctx: ConversionContext) -> None:
    ctx.elements = scanner.scan(ctx.markup)
