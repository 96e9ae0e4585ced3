"""ConversionContext — the single mutable state object flowing through all stages.

One context per ``convert`` call; nothing in it outlives the call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from svgsketch.engine.config import PipelineConfig
from svgsketch.models.elements import Element, TextElement
from svgsketch.models.entities import SketchEntity
from svgsketch.models.patterns import Pattern
from svgsketch.models.requests import ConvertOptions


@dataclass
class ConversionContext:
    """Shared state flowing through the conversion pipeline."""

    # Raw SVG markup
    markup: str = ""
    options: ConvertOptions = field(default_factory=ConvertOptions)
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # Scanned drawable elements; use expansion appends clones
    elements: list[Element] = field(default_factory=list)
    text_elements: list[TextElement] = field(default_factory=list)

    patterns: list[Pattern] = field(default_factory=list)
    entities: list[SketchEntity] = field(default_factory=list)

    # Stage id → error message for stages that raised
    errors: dict[str, str] = field(default_factory=dict)
    completed_stages: set[str] = field(default_factory=set)
