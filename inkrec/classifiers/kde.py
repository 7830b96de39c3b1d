"""Univariate Gaussian kernel density estimate."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.stats import norm

from inkrec.errors import InvalidArgumentError

DEFAULT_GRID_SPACING = 0.25
DEFAULT_GRID_PADDING = 0.10


@dataclass(frozen=True)
class KDEResult:
    """Density evaluated on a grid.

    ``grid_generated`` is True when the grid was built from the samples rather
    than supplied by the caller.
    """

    grid: NDArray[np.float64]
    density: NDArray[np.float64]
    grid_generated: bool

    def __len__(self) -> int:
        return len(self.grid)


def default_grid(
    samples: NDArray[np.float64],
    spacing: float = DEFAULT_GRID_SPACING,
    padding: float = DEFAULT_GRID_PADDING,
) -> NDArray[np.float64]:
    """Evenly spaced grid covering the samples plus ``padding`` of their range on each side."""
    lo = float(np.min(samples))
    hi = float(np.max(samples))
    spread = hi - lo
    start = lo - padding * spread
    end = hi + padding * spread
    steps = max(0, math.ceil((end - start) / spacing))
    return start + spacing * np.arange(steps + 1, dtype=np.float64)


def univariate_kde(
    samples: Sequence[float] | NDArray[np.float64],
    bandwidth: float,
    grid: Sequence[float] | NDArray[np.float64] | None = None,
    spacing: float = DEFAULT_GRID_SPACING,
    padding: float = DEFAULT_GRID_PADDING,
) -> KDEResult:
    """Gaussian-kernel density of ``samples`` at each grid value.

    p(y) = 1 / (n * h) * sum_i K((y - x_i) / h), K the standard normal pdf.
    An empty or missing ``grid`` is generated from the samples.
    """
    xs = np.asarray(samples, dtype=np.float64).ravel()
    if xs.size == 0:
        raise InvalidArgumentError("KDE needs at least one sample")
    if not bandwidth > 0:
        raise InvalidArgumentError(f"KDE bandwidth must be positive, got {bandwidth}")
    if spacing <= 0:
        raise InvalidArgumentError(f"KDE grid spacing must be positive, got {spacing}")

    generated = grid is None or len(grid) == 0
    if generated:
        ys = default_grid(xs, spacing, padding)
    else:
        ys = np.asarray(grid, dtype=np.float64).ravel()

    scaled = np.subtract.outer(ys, xs) / bandwidth
    density = norm.pdf(scaled).sum(axis=1) / (xs.size * bandwidth)
    return KDEResult(grid=ys, density=density, grid_generated=generated)


def local_maxima(result: KDEResult) -> list[float]:
    """Grid values where the density peaks.

    A plateau counts once, at its first grid value. The grid ends count when
    the density falls away from them.
    """
    p = result.density
    n = len(p)
    if n == 0:
        return []
    if n == 1:
        return [float(result.grid[0])]

    peaks: list[float] = []
    i = 0
    while i < n:
        j = i
        while j + 1 < n and p[j + 1] == p[i]:
            j += 1
        left_lower = i == 0 or p[i - 1] < p[i]
        right_lower = j == n - 1 or p[j + 1] < p[i]
        if left_lower and right_lower:
            peaks.append(float(result.grid[i]))
        i = j + 1
    return peaks
