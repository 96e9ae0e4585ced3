"""Stage registry — every conversion stage is a standalone function registered via decorator.

Usage:
    @stage(id="S1.01", phase=Phase.EXPANSION, dependencies=["S0.01"])
    def use_expansion(ctx: ConversionContext) -> None:
        ctx.elements = use_expander.expand(ctx.elements)

A stage may name a boolean ``ConvertOptions`` field in ``enabled_by``; when
that option is off for a call, the stage is left out of the run order.
Adding a stage = creating one module under ``engine/stages``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgsketch.engine.context import ConversionContext
    from svgsketch.models.requests import ConvertOptions

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    SCANNING = 0
    EXPANSION = 1
    ANALYSIS = 2
    ENCODING = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["ConversionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    enabled_by: str | None = None
    description: str = ""

    def is_enabled(self, options: ConvertOptions | None) -> bool:
        if self.enabled_by is None or options is None:
            return True
        return bool(getattr(options, self.enabled_by))


class StageRegistry:
    """Registry of conversion stages, keyed by id."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def resolve_order(self, options: ConvertOptions | None = None) -> list[StageSpec]:
        """Dependency order, ties broken by (phase, id); stages gated off by ``options`` are dropped.

        Gating happens after sorting: a disabled stage only removes its own
        work, and its dependents still run in their usual place.
        """
        pool = self._stages
        pending: dict[str, int] = {
            sid: sum(1 for dep in spec.dependencies if dep in pool) for sid, spec in pool.items()
        }

        def rank(sid: str) -> tuple[int, str]:
            return (pool[sid].phase, sid)

        ready = sorted((sid for sid, n in pending.items() if n == 0), key=rank)
        ordered: list[StageSpec] = []
        while ready:
            sid = ready.pop(0)
            ordered.append(pool[sid])
            for other in pool.values():
                if sid in other.dependencies:
                    pending[other.id] -= 1
                    if pending[other.id] == 0:
                        ready.append(other.id)
                        ready.sort(key=rank)

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(missing)}")

        return [s for s in ordered if s.is_enabled(options)]


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    enabled_by: str | None = None,
    description: str = "",
    registry: StageRegistry | None = None,
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["ConversionContext"], None]):
        spec = StageSpec(
            id=id,
            phase=phase,
            fn=fn,
            dependencies=dependencies or [],
            enabled_by=enabled_by,
            description=description,
        )
        (registry or _registry).register(spec)
        return fn

    return decorator
