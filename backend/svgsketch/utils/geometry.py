"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def positions_array(points: list[tuple[float, float]]) -> NDArray[np.float64]:
    """Nx2 float array from a list of (x, y) tuples."""
    if not points:
        return np.empty((0, 2))
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


def step_vectors(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Consecutive differences p[i] - p[i-1]."""
    return np.diff(points, axis=0)


def norms(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.sqrt(np.sum(vectors**2, axis=1))


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def relative_deviation(values: NDArray[np.float64], reference: float) -> NDArray[np.float64]:
    """|v / reference - 1| for each value. Reference must be non-zero."""
    return np.abs(values / reference - 1.0)


def unit_vector(dx: float, dy: float, eps: float = 1e-9) -> tuple[tuple[float, float], float]:
    """(unit direction, length). Falls back to (1, 0) for near-zero vectors."""
    length = float(np.hypot(dx, dy))
    if length < eps:
        return (1.0, 0.0), length
    return (dx / length, dy / length), length
