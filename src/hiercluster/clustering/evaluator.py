"""
Classification accuracy of a ClassifierModel on a labeled test set.

Reports overall accuracy (hits over all test points, weighted by class
frequency) and the unweighted mean of per-label accuracies. A label that
never occurs in the test set has undefined accuracy (0/0), reported as
None.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import math

import numpy as np
from sklearn import metrics

from hiercluster.clustering.model import ClassifierModel
from hiercluster.config import UNDEFINED_LABEL_POLICIES
from hiercluster.errors import (
    DegenerateLabelStatistics,
    DimensionMismatch,
    EmptyCollection,
)
from hiercluster.ingest.loader import LabeledDataset
from hiercluster.points import PointLike

logger = logging.getLogger(__name__)


@dataclass
class LabelStats:
    """Hit/miss counts for one true label."""
    label: int
    hits: int = 0
    misses: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def accuracy(self) -> Optional[float]:
        """hits / total, or None when the label never occurred."""
        if self.total == 0:
            return None
        return self.hits / self.total

    def to_dict(self) -> Dict:
        return {
            "label": self.label,
            "hits": self.hits,
            "misses": self.misses,
            "accuracy": self.accuracy,
        }


@dataclass
class EvaluationReport:
    """
    Result of testing a model.

    ``average_label_accuracy`` depends on the undefined-label policy used:
    the mean over defined labels ("exclude"), NaN when any label is
    undefined ("propagate"), or None if no label is defined.
    """
    n_clusters: int
    hits: int
    misses: int
    label_stats: List[LabelStats] = field(default_factory=list)
    average_label_accuracy: Optional[float] = None
    policy: str = "exclude"

    # Per test point, in test set order
    y_true: np.ndarray = field(default=None, repr=False)
    y_pred: np.ndarray = field(default=None, repr=False)

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def accuracy(self) -> float:
        """Overall accuracy, total_hits / total_count."""
        return self.hits / self.total

    @property
    def undefined_labels(self) -> List[int]:
        return [s.label for s in self.label_stats if s.accuracy is None]

    def label_accuracy(self, label: int) -> Optional[float]:
        return self.label_stats[label].accuracy

    def confusion_matrix(self) -> np.ndarray:
        """
        Counts of (true label, predicted label) pairs.

        Rows are true labels, columns predicted labels, both over
        [0, len(label_stats)).
        """
        return metrics.confusion_matrix(
            self.y_true, self.y_pred, labels=list(range(len(self.label_stats)))
        )

    def summary(self) -> Dict:
        """Summary of the evaluation."""
        return {
            "n_clusters": self.n_clusters,
            "total": self.total,
            "hits": self.hits,
            "misses": self.misses,
            "accuracy": self.accuracy,
            "average_label_accuracy": self.average_label_accuracy,
            "undefined_labels": self.undefined_labels,
            "labels": [s.to_dict() for s in self.label_stats],
        }


def evaluate(model: ClassifierModel, point: PointLike) -> int:
    """Predicted label for a single point."""
    return model.predict(point)


def average_label_accuracy(
    label_stats: List[LabelStats],
    policy: str = "exclude",
) -> Optional[float]:
    """
    Unweighted mean of per-label accuracies.

    Args:
        label_stats: Per-label counts
        policy: How to treat labels without test occurrences:
            "exclude" drops them from the mean, "propagate" makes the mean
            NaN, "raise" raises DegenerateLabelStatistics

    Returns:
        Mean accuracy, or None if no label has a defined accuracy
    """
    if policy not in UNDEFINED_LABEL_POLICIES:
        raise ValueError(f"Unknown undefined-label policy {policy!r}")

    undefined = [s.label for s in label_stats if s.accuracy is None]
    if undefined:
        if policy == "raise":
            raise DegenerateLabelStatistics(undefined)
        if policy == "propagate":
            return math.nan

    defined = [s.accuracy for s in label_stats if s.accuracy is not None]
    if not defined:
        return None
    return sum(defined) / len(defined)


def test(
    model: ClassifierModel,
    test_set: LabeledDataset,
    undefined_policy: str = "exclude",
) -> EvaluationReport:
    """
    Score a model against a labeled test set.

    Per-label counts are indexed by the true label, for every label in
    [0, max(model labels, test labels)).

    Args:
        model: ClassifierModel to score
        test_set: Labeled test points
        undefined_policy: See average_label_accuracy()

    Returns:
        EvaluationReport

    Raises:
        EmptyCollection: If the test set is empty
        DimensionMismatch: If the test set dimension differs from the model's
    """
    if test_set.size == 0:
        raise EmptyCollection("test", 1, 0)
    if test_set.dimension != model.dimension:
        raise DimensionMismatch(model.dimension, test_set.dimension)

    number_of_labels = max(model.number_of_labels, test_set.number_of_labels)
    hits = np.zeros(number_of_labels, dtype=np.int64)
    misses = np.zeros(number_of_labels, dtype=np.int64)

    y_pred = np.empty(test_set.size, dtype=np.int64)
    for index, (point, label) in enumerate(test_set):
        y_pred[index] = evaluate(model, point)
        if y_pred[index] == label:
            hits[label] += 1
        else:
            misses[label] += 1

    label_stats = [
        LabelStats(label=label, hits=int(hits[label]), misses=int(misses[label]))
        for label in range(number_of_labels)
    ]
    for stats in label_stats:
        if stats.accuracy is None:
            logger.debug(
                f"Label {stats.label} has no test points; its accuracy is undefined"
            )

    report = EvaluationReport(
        n_clusters=model.n_clusters,
        hits=int(hits.sum()),
        misses=int(misses.sum()),
        label_stats=label_stats,
        average_label_accuracy=average_label_accuracy(label_stats, undefined_policy),
        policy=undefined_policy,
        y_true=test_set.labels.copy(),
        y_pred=y_pred,
    )
    logger.debug(
        f"{model.n_clusters} clusters: accuracy {report.accuracy:.4f} "
        f"({report.hits}/{report.total})"
    )
    return report


# Not a pytest test function
test.__test__ = False
