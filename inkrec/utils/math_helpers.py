"""Matrix helpers: regularization used by the Gaussian model. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def add_to_diagonal(matrix: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    """Copy of a square matrix with ``value`` added to every diagonal entry."""
    reg = np.array(matrix, dtype=np.float64, copy=True)
    idx = np.arange(reg.shape[0])
    reg[idx, idx] += value
    return reg


def ridge_regularize(matrix: NDArray[np.float64], ridge: float) -> NDArray[np.float64]:
    """Ridge regularization: Σ + λI."""
    return add_to_diagonal(matrix, ridge)


def structural_regularize(matrix: NDArray[np.float64], scale: float) -> NDArray[np.float64]:
    """Drop all covariances and keep a strictly positive diagonal.

    Negative or non-finite variances are zeroed, then every variance is lifted
    by ``scale`` times the mean variance (or by ``scale`` when the diagonal is
    all zero). The result is diagonal and positive definite.
    """
    diag = np.diag(np.asarray(matrix, dtype=np.float64)).copy()
    diag[~np.isfinite(diag)] = 0.0
    diag = np.maximum(diag, 0.0)
    mean_var = float(np.mean(diag)) if len(diag) else 0.0
    lift = scale * mean_var if mean_var > 0 else scale
    return np.diag(diag + lift)


def is_usable_inverse(inverse: NDArray[np.float64]) -> bool:
    return bool(np.all(np.isfinite(inverse)))
