"""svgsketch — SVG markup to CAD sketch entities."""

from svgsketch.engine.pipeline import convert, convert_document
from svgsketch.models.requests import ConvertOptions
from svgsketch.models.responses import ConvertResponse

__version__ = "0.1.0"

__all__ = ["convert", "convert_document", "ConvertOptions", "ConvertResponse", "__version__"]
