"""Multivariate Gaussian likelihood with a covariance regularization ladder.

The inverse covariance and log-determinant are cached. Replacing the
covariance recomputes them by walking the inversion ladder until a strategy
produces a finite inverse with a positive determinant and a peak density
that fits in a float:

  direct      invert Σ as given
  ridge       invert Σ + λI
  structural  invert a positive diagonal built from Σ's variances
  pinv        Moore-Penrose pseudo-inverse with the pseudo-determinant

A singular covariance therefore never surfaces to the caller.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray
from scipy.special import logsumexp

from inkrec.engine.config import GaussianConfig
from inkrec.errors import InkrecError, InvalidArgumentError, InvalidParametersError
from inkrec.models.segmentation import FeatureVector
from inkrec.utils.math_helpers import is_usable_inverse, ridge_regularize, structural_regularize

logger = logging.getLogger(__name__)

_LOG_2PI = math.log(2 * math.pi)
# Largest log density whose exp is still a finite float
_MAX_LOG_DENSITY = math.log(np.finfo(np.float64).max)

# (inverse, determinant sign, log |determinant|)
Inversion = tuple[NDArray[np.float64], float, float]


def _invert(matrix: NDArray[np.float64]) -> Inversion:
    inverse = scipy.linalg.inv(matrix)
    sign, logdet = np.linalg.slogdet(matrix)
    return inverse, float(sign), float(logdet)


def _direct(cov: NDArray[np.float64], config: GaussianConfig) -> Inversion:
    return _invert(cov)


def _ridge(cov: NDArray[np.float64], config: GaussianConfig) -> Inversion:
    return _invert(ridge_regularize(cov, config.ridge))


def _structural(cov: NDArray[np.float64], config: GaussianConfig) -> Inversion:
    return _invert(structural_regularize(cov, config.structural_scale))


def _pseudo_inverse(cov: NDArray[np.float64], config: GaussianConfig) -> Inversion:
    inverse = np.linalg.pinv(cov)
    singular = np.linalg.svd(cov, compute_uv=False)
    tol = singular.max(initial=0.0) * max(cov.shape) * np.finfo(np.float64).eps
    positive = singular[singular > tol]
    return inverse, 1.0, float(np.sum(np.log(positive)))


INVERSION_LADDER: list[tuple[str, Callable[[NDArray[np.float64], GaussianConfig], Inversion]]] = [
    ("direct", _direct),
    ("ridge", _ridge),
    ("structural", _structural),
    ("pinv", _pseudo_inverse),
]


class Gaussian:
    """Multivariate normal N(mean, covariance)."""

    def __init__(
        self,
        mean: ArrayLike,
        covariance: ArrayLike,
        config: GaussianConfig | None = None,
    ) -> None:
        self.config = config or GaussianConfig()
        self._mean = np.asarray(mean, dtype=np.float64).ravel()
        self.covariance = covariance

    @classmethod
    def fit(cls, samples: ArrayLike, config: GaussianConfig | None = None) -> Gaussian:
        """Maximum-likelihood mean and sample covariance of an (n, D) array."""
        data = np.atleast_2d(np.asarray(samples, dtype=np.float64))
        if data.size == 0:
            raise InvalidArgumentError("Cannot fit a Gaussian to zero samples")
        ddof = 1 if data.shape[0] > 1 else 0
        cov = np.atleast_2d(np.cov(data, rowvar=False, ddof=ddof))
        return cls(data.mean(axis=0), cov, config)

    @property
    def dimension(self) -> int:
        return len(self._mean)

    @property
    def mean(self) -> NDArray[np.float64]:
        return self._mean

    @mean.setter
    def mean(self, value: ArrayLike) -> None:
        mean = np.asarray(value, dtype=np.float64).ravel()
        if len(mean) != self._covariance.shape[0]:
            raise InvalidArgumentError(
                f"Mean of length {len(mean)} does not match a {self._covariance.shape[0]}-d covariance"
            )
        self._mean = mean

    @property
    def covariance(self) -> NDArray[np.float64]:
        return self._covariance

    @covariance.setter
    def covariance(self, value: ArrayLike) -> None:
        cov = np.atleast_2d(np.asarray(value, dtype=np.float64))
        d = len(self._mean)
        if cov.shape != (d, d):
            raise InvalidArgumentError(f"Covariance shape {cov.shape} does not match mean of length {d}")
        if not np.all(np.isfinite(cov)):
            raise InvalidArgumentError("Covariance contains non-finite entries")
        self._covariance = cov
        self._compute_inverse()

    @property
    def inverse_covariance(self) -> NDArray[np.float64]:
        return self._inverse

    @property
    def log_determinant(self) -> float:
        return self._logdet

    @property
    def inversion_strategy(self) -> str:
        """Name of the ladder rung that produced the cached inverse."""
        return self._strategy

    def _compute_inverse(self) -> None:
        for name, strategy in INVERSION_LADDER:
            try:
                inverse, sign, logdet = strategy(self._covariance, self.config)
            except (np.linalg.LinAlgError, ValueError) as e:
                logger.debug("Covariance inversion '%s' failed: %s", name, e)
                continue
            if sign > 0 and self._density_is_finite(logdet) and is_usable_inverse(inverse):
                if name != "direct":
                    logger.debug("Covariance regularized with '%s' strategy", name)
                self._inverse = inverse
                self._logdet = logdet
                self._strategy = name
                return
            logger.debug("Covariance inversion '%s' gave an unusable inverse", name)
        raise InkrecError("No inversion strategy produced a usable inverse covariance")

    def _density_is_finite(self, logdet: float) -> bool:
        """The density peaks at the mean; a tiny |Σ| in high dimension can overflow it."""
        if not math.isfinite(logdet):
            return False
        return -0.5 * (self.dimension * _LOG_2PI + logdet) < _MAX_LOG_DENSITY

    def mahalanobis_sq(self, x: ArrayLike) -> float:
        diff = np.asarray(x, dtype=np.float64).ravel() - self._mean
        if len(diff) != self.dimension:
            raise InvalidArgumentError(f"Expected a {self.dimension}-d vector, got {len(diff)}")
        return float(diff @ self._inverse @ diff)

    def log_likelihood(self, x: ArrayLike) -> float:
        return -0.5 * (self.dimension * _LOG_2PI + self._logdet + self.mahalanobis_sq(x))

    def likelihood(self, x: ArrayLike) -> float:
        """(2π)^(-D/2) · |Σ|^(-1/2) · exp(-½ (x-μ)ᵀ Σ⁻¹ (x-μ))"""
        return math.exp(self.log_likelihood(x))


@dataclass(frozen=True)
class ClassificationResult:
    label: int
    confidence: float
    log_likelihood: float


class GaussianClassifier:
    """One Gaussian per class label; posteriors use the training class frequencies as priors."""

    def __init__(self, config: GaussianConfig | None = None) -> None:
        self.config = config or GaussianConfig()
        self.models: dict[int, Gaussian] = {}
        self.log_priors: dict[int, float] = {}
        self.num_features: int | None = None

    @property
    def labels(self) -> list[int]:
        return sorted(self.models)

    @property
    def is_trained(self) -> bool:
        return bool(self.models)

    def train(self, vectors: Sequence[FeatureVector]) -> GaussianClassifier:
        if not vectors:
            raise InvalidArgumentError("Cannot train on zero feature vectors")
        sizes = {len(v) for v in vectors}
        if len(sizes) != 1:
            raise InvalidArgumentError(f"Feature vectors have mixed lengths: {sorted(sizes)}")
        if any(v.label is None for v in vectors):
            raise InvalidArgumentError("Every training vector needs a label")

        by_label: dict[int, list[NDArray[np.float64]]] = {}
        for v in vectors:
            by_label.setdefault(v.label, []).append(v.as_array())

        self.num_features = sizes.pop()
        self.models = {
            label: Gaussian.fit(np.vstack(rows), self.config) for label, rows in by_label.items()
        }
        self.log_priors = {
            label: math.log(len(rows) / len(vectors)) for label, rows in by_label.items()
        }
        logger.info(
            "Trained Gaussian classifier: %d classes, %d features, %d examples",
            len(self.models),
            self.num_features,
            len(vectors),
        )
        return self

    def classify(self, vector: FeatureVector | ArrayLike) -> list[ClassificationResult]:
        """Every class with its normalized posterior, most confident first."""
        if not self.is_trained:
            raise InvalidParametersError("Classifier has not been trained")
        x = vector.as_array() if isinstance(vector, FeatureVector) else np.asarray(vector, dtype=np.float64)
        if len(x) != self.num_features:
            raise InvalidArgumentError(f"Expected {self.num_features} features, got {len(x)}")

        labels = self.labels
        log_lik = np.array([self.models[label].log_likelihood(x) for label in labels])
        log_post = log_lik + np.array([self.log_priors[label] for label in labels])
        posterior = np.exp(log_post - logsumexp(log_post))

        results = [
            ClassificationResult(label=label, confidence=float(p), log_likelihood=float(ll))
            for label, p, ll in zip(labels, posterior, log_lik)
        ]
        return sorted(results, key=lambda r: r.confidence, reverse=True)

    def predict(self, vector: FeatureVector | ArrayLike) -> int:
        return self.classify(vector)[0].label
