"""Statistical classifiers, confidence ordering and cross-validation."""

from inkrec.classifiers.confidence import compare_confidence, confidence_key, rank_by_confidence
from inkrec.classifiers.crossval import Fold, cross_validate, kfold
from inkrec.classifiers.gaussian import ClassificationResult, Gaussian, GaussianClassifier
from inkrec.classifiers.kde import KDEResult, local_maxima, univariate_kde

__all__ = [
    "ClassificationResult",
    "Fold",
    "Gaussian",
    "GaussianClassifier",
    "KDEResult",
    "compare_confidence",
    "confidence_key",
    "cross_validate",
    "kfold",
    "local_maxima",
    "rank_by_confidence",
    "univariate_kde",
]
