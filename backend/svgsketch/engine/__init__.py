"""svgsketch conversion engine."""

from svgsketch.engine.registry import stage, Phase, get_registry
from svgsketch.engine.context import ConversionContext
from svgsketch.engine.pipeline import Pipeline, convert, convert_document, create_pipeline

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "ConversionContext",
    "Pipeline",
    "convert",
    "convert_document",
    "create_pipeline",
]
