"""S1.01 — Use Expansion.

Appends a visible clone for every element a ``<use>`` references.
"""

from __future__ import annotations

from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import Phase, stage
from svgsketch.svg import use_expander


@stage(
    id="S1.01",
    phase=Phase.EXPANSION,
    dependencies=["S0.01"],
    description="Expand <use> references into clones",
)
def use_expansion(ctx: ConversionContext) -> None:
    ctx.elements = use_expander.expand(ctx.elements)
