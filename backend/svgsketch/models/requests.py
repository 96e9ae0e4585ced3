"""Per-call conversion options."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

OutputFormat = Literal["btm", "intermediate"]


class ConvertOptions(BaseModel):
    scale: float = Field(default=1.0, gt=0, description="User units → sketch units multiplier")
    text_as_sketch_text: bool = Field(
        default=True,
        description="Emit <text> content as sketch text entities",
    )
    detect_patterns: bool = Field(
        default=True,
        description="Classify repeated <use> instances as linear/grid/circular patterns",
    )
    output_format: OutputFormat = Field(
        default="btm",
        description="Serializer used by convert_document (btm, intermediate)",
    )
    reflect_smooth_controls: bool = Field(
        default=False,
        description="Reflect the previous control point for S/T instead of reusing the current point",
    )

    model_config = {"frozen": True}
