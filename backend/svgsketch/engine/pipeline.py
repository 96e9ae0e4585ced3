"""Pipeline orchestrator — runs stages in dependency order with option gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from svgsketch.encoders import btm, get_encoder
from svgsketch.engine.config import PipelineConfig
from svgsketch.engine.context import ConversionContext
from svgsketch.engine.registry import StageRegistry, get_registry
from svgsketch.models.entities import SketchEntity
from svgsketch.models.patterns import pattern_to_dict
from svgsketch.models.requests import ConvertOptions
from svgsketch.models.responses import ConvertResponse

logger = logging.getLogger(__name__)

STAGES_PACKAGE = "svgsketch.engine.stages"


class Pipeline:
    """Orchestrates the conversion stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: ConversionContext) -> ConversionContext:
        """Run every stage not gated off by the call's options."""
        start = time.perf_counter()

        ordered = self.registry.resolve_order(ctx.options)
        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s (%s) completed in %.1fms", spec.id, spec.description, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            total,
        )
        return ctx


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    package = importlib.import_module(STAGES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{STAGES_PACKAGE}.{module_name}")


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    _register_stages()
    return Pipeline(config=config)


def run_conversion(markup: str, options: ConvertOptions | None = None) -> ConversionContext:
    if markup is None:
        raise TypeError("markup must be a string, not None")
    if not isinstance(markup, str):
        raise TypeError(f"markup must be a string, not {type(markup).__name__}")

    pipeline = create_pipeline()
    ctx = ConversionContext(
        markup=markup,
        options=options or ConvertOptions(),
        config=pipeline.config,
    )
    return pipeline.run(ctx)


def convert(
    markup: str, options: ConvertOptions | None = None
) -> tuple[list[SketchEntity], int]:
    """Markup → (entities, count). Bad input yields fewer entities, never an error."""
    ctx = run_conversion(markup, options)
    return ctx.entities, len(ctx.entities)


def convert_document(markup: str, options: ConvertOptions | None = None) -> ConvertResponse:
    """Convert and serialize: BTM entity dicts, plus IF text when requested."""
    start = time.perf_counter()
    options = options or ConvertOptions()
    ctx = run_conversion(markup, options)

    intermediate: str | None = None
    if options.output_format != "btm":
        intermediate = get_encoder(options.output_format)(ctx.entities, ctx.patterns, options.scale)

    return ConvertResponse(
        format=options.output_format,
        entities=btm.encode(ctx.entities),
        intermediate=intermediate,
        count=len(ctx.entities),
        patterns=[pattern_to_dict(p) for p in ctx.patterns],
        errors=ctx.errors,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )
