"""S3.01 — Geometry Encoding.

Elements and text → sketch entities (transform, scale, Y flip).
"""

from __future__ import annotations

from svgsketch.engine import codec
from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import Phase, stage


@stage(
    id="S3.01",
    phase=Phase.ENCODING,
    dependencies=["S0.02", "S1.01"],
    description="Encode elements and text as sketch entities",
)
def geometry_encoding(ctx: ConversionContext) -> None:
    ctx.entities = codec.build(
        ctx.elements,
        ctx.text_elements,
        scale=ctx.options.scale,
        config=ctx.config,
        reflect_smooth=ctx.options.reflect_smooth_controls,
    )
