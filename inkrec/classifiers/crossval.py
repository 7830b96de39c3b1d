"""k-fold partitioning and cross-validated evaluation of a classifier."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

import numpy as np
from numpy.typing import NDArray
from sklearn.metrics import accuracy_score, confusion_matrix

from inkrec.errors import InvalidArgumentError
from inkrec.models.segmentation import FeatureVector

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Fold(Generic[T]):
    training: list[T]
    testing: list[T]


def kfold(
    examples: Sequence[T],
    k: int,
    shuffle: bool = False,
    seed: int | None = None,
) -> list[Fold[T]]:
    """Split ``examples`` into ``k`` train/test folds.

    Each testing slice holds ``len(examples) // k`` consecutive examples and the
    last one also takes the remainder. Training is everything else, in input
    order. With ``shuffle`` the examples are permuted first.
    """
    n = len(examples)
    if k < 1:
        raise InvalidArgumentError(f"Need at least one fold, got k={k}")
    if k > n:
        raise InvalidArgumentError(f"Cannot make {k} folds from {n} examples")

    items = list(examples)
    if shuffle:
        order = np.random.default_rng(seed).permutation(n)
        items = [items[i] for i in order]

    size = n // k
    folds: list[Fold[T]] = []
    for i in range(k):
        start = i * size
        end = n if i == k - 1 else start + size
        folds.append(Fold(training=items[:start] + items[end:], testing=items[start:end]))
    return folds


class Classifier(Protocol):
    def train(self, vectors: Sequence[FeatureVector]) -> object: ...

    def predict(self, vector: FeatureVector) -> int: ...


@dataclass
class CrossValidationReport:
    fold_accuracies: list[float] = field(default_factory=list)
    labels: list[int] = field(default_factory=list)
    confusion: NDArray[np.int64] = field(default_factory=lambda: np.zeros((0, 0), dtype=np.int64))

    @property
    def mean_accuracy(self) -> float:
        if not self.fold_accuracies:
            return 0.0
        return float(np.mean(self.fold_accuracies))


def cross_validate(
    classifier_factory: Callable[[], Classifier],
    vectors: Sequence[FeatureVector],
    k: int,
    shuffle: bool = True,
    seed: int | None = None,
) -> CrossValidationReport:
    """Train a fresh classifier on each fold's training slice and score its testing slice."""
    labels = sorted({v.label for v in vectors if v.label is not None})
    report = CrossValidationReport(labels=labels)
    y_true: list[int] = []
    y_pred: list[int] = []

    for i, fold in enumerate(kfold(vectors, k, shuffle=shuffle, seed=seed)):
        classifier = classifier_factory()
        classifier.train(fold.training)
        truth = [v.label for v in fold.testing]
        predicted = [classifier.predict(v) for v in fold.testing]
        accuracy = float(accuracy_score(truth, predicted))
        report.fold_accuracies.append(accuracy)
        y_true.extend(truth)
        y_pred.extend(predicted)
        logger.debug("Fold %d/%d: accuracy %.3f on %d examples", i + 1, k, accuracy, len(truth))

    report.confusion = confusion_matrix(y_true, y_pred, labels=labels)
    logger.info("Cross-validation over %d folds: mean accuracy %.3f", k, report.mean_accuracy)
    return report
