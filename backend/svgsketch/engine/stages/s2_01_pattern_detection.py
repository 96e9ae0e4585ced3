"""S2.01 — Pattern Detection.

Linear / grid / circular classification of repeated ``<use>`` instances.
Skipped when pattern detection is switched off.
"""

from __future__ import annotations

from svgsketch.engine import patterns
from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import Phase, stage


@stage(
    id="S2.01",
    phase=Phase.ANALYSIS,
    dependencies=["S1.01"],
    enabled_by="detect_patterns",
    description="Detect linear, grid and circular repeats",
)
def pattern_detection(ctx: ConversionContext) -> None:
    ctx.patterns = patterns.detect(ctx.elements, ctx.config)
