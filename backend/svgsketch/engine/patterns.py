"""Pattern analyzer — classify repeated ``<use>`` instances.

Instances are grouped by ``source_group_key``; one representative
position (the translation part of its transform) is taken per originating
``<use>``. Each group of two or more instances is tried as Linear, then
Grid, then Circular. Groups matching none are left out; that is the
common case, not an error.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from svgsketch.engine.config import PipelineConfig
from svgsketch.models.elements import Element
from svgsketch.models.patterns import CircularPattern, GridPattern, LinearPattern, Pattern
from svgsketch.utils.geometry import centroid, norms, positions_array, relative_deviation, step_vectors

logger = logging.getLogger(__name__)


def group_instances(elements: list[Element]) -> dict[str, list[tuple[float, float]]]:
    """Representative translation per use instance, grouped by key, in document order."""
    groups: dict[str, list[tuple[float, float]]] = {}
    seen: set[tuple[str, int]] = set()
    for i, el in enumerate(elements):
        key = el.source_group_key
        if not key:
            continue
        instance = el.source_use_index if el.source_use_index is not None else -(i + 1)
        if (key, instance) in seen:
            continue
        seen.add((key, instance))
        position = el.transform.translation
        if not all(math.isfinite(v) for v in position):
            continue
        groups.setdefault(key, []).append(position)
    return groups


def detect_linear(
    key: str, pts: NDArray[np.float64], config: PipelineConfig
) -> LinearPattern | None:
    if len(pts) < 2:
        return None
    steps = step_vectors(pts)
    dists = norms(steps)
    first = float(dists[0])
    if first < config.min_spacing:
        return None
    if np.any(relative_deviation(dists, first) >= config.spacing_tolerance):
        return None

    cosines = (steps @ steps[0]) / (dists * first)
    if np.any(cosines <= config.direction_cosine):
        return None

    dx, dy = float(steps[0][0]), float(steps[0][1])
    return LinearPattern(
        group_key=key,
        count=len(pts),
        spacing=first,
        direction=(dx / first, dy / first),
        start=(float(pts[0][0]), float(pts[0][1])),
    )


def detect_grid(
    key: str, pts: NDArray[np.float64], config: PipelineConfig
) -> GridPattern | None:
    if len(pts) < 4:
        return None

    rows: dict[float, list[float]] = {}
    for x, y in pts:
        rows.setdefault(round(float(y), config.row_round_decimals), []).append(float(x))
    if len(rows) < 2:
        return None

    sizes = {len(xs) for xs in rows.values()}
    cols = len(next(iter(rows.values())))
    if len(sizes) != 1 or cols < 2:
        return None

    ys = np.array(sorted(rows))
    row_spacings = np.diff(ys)
    row_spacing = float(row_spacings[0])
    if row_spacing < config.min_spacing:
        return None
    if np.any(relative_deviation(row_spacings, row_spacing) >= config.spacing_tolerance):
        return None

    first_row = np.sort(np.array(rows[float(ys[0])]))
    col_spacing = float(first_row[1] - first_row[0])
    if col_spacing < config.min_spacing:
        return None
    for y in ys:
        col_spacings = np.diff(np.sort(np.array(rows[float(y)])))
        if np.any(relative_deviation(col_spacings, col_spacing) >= config.spacing_tolerance):
            return None

    return GridPattern(
        group_key=key,
        rows=len(rows),
        cols=cols,
        row_spacing=row_spacing,
        col_spacing=col_spacing,
        start=(float(first_row[0]), float(ys[0])),
    )


def detect_circular(
    key: str, pts: NDArray[np.float64], config: PipelineConfig
) -> CircularPattern | None:
    n = len(pts)
    if n < 3:
        return None

    cx, cy = centroid(pts)
    offsets = pts - np.array([cx, cy])
    dists = norms(offsets)
    radius = float(dists[0])
    if radius < config.min_spacing:
        return None
    if np.any(relative_deviation(dists, radius) >= config.spacing_tolerance):
        return None

    angles = np.sort(np.arctan2(offsets[:, 1], offsets[:, 0]))
    deltas = np.append(np.diff(angles), angles[0] + 2 * math.pi - angles[-1])
    expected = 2 * math.pi / n
    if np.any(np.abs(deltas - expected) >= config.angle_tolerance):
        return None

    return CircularPattern(
        group_key=key,
        count=n,
        radius=radius,
        center=(cx, cy),
        start_angle=float(angles[0]),
    )


def detect(elements: list[Element], config: PipelineConfig | None = None) -> list[Pattern]:
    """Classify every group of repeated instances; unmatched groups are omitted."""
    config = config or PipelineConfig()
    patterns: list[Pattern] = []

    for key, positions in group_instances(elements).items():
        if len(positions) < 2:
            continue
        pts = positions_array(positions)
        pattern = (
            detect_linear(key, pts, config)
            or detect_grid(key, pts, config)
            or detect_circular(key, pts, config)
        )
        if pattern is None:
            logger.debug("Group '#%s' (%d instances): no pattern", key, len(positions))
            continue
        logger.debug("Group '#%s': %s", key, pattern.describe())
        patterns.append(pattern)

    logger.info("Pattern detection: %d pattern(s)", len(patterns))
    return patterns
