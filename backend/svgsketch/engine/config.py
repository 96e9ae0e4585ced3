"""Pipeline tolerances — fixed numeric thresholds for one conversion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    """Thresholds used by pattern classification and geometry encoding."""

    # Pattern spacing uniformity: |spacing / first - 1| < tol
    spacing_tolerance: float = 0.01
    # Linear pattern: consecutive steps must be near-parallel
    direction_cosine: float = 0.99
    # Consecutive instances closer than this cannot form a pattern
    min_spacing: float = 1e-3
    # Grid rows are bucketed by Y rounded to this many decimals
    row_round_decimals: int = 2
    # Circular pattern: |angle step - 2π/n| < tol (radians)
    angle_tolerance: float = 0.1

    # Lines / closing segments shorter than this (after scale) are dropped
    degenerate_length: float = 1e-9
    # Estimated glyph advance as a fraction of font size
    char_width_ratio: float = 0.6
