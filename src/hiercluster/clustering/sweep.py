"""
Cluster-count sweep.

Reduces one live ClusterSet through decreasing cluster counts and, at each
count, builds and tests a model. Results are yielded for a driver to
report; nothing is printed here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import logging

import numpy as np

from hiercluster.clustering.cluster_set import (
    ClusterSet,
    build_from_dataset,
    check_same_dimension,
)
from hiercluster.clustering.engine import reduce_to
from hiercluster.clustering.evaluator import EvaluationReport, test
from hiercluster.clustering.model import ClassifierModel, build_model
from hiercluster.config import HierClusterConfig
from hiercluster.errors import EmptyCollection
from hiercluster.ingest.loader import LabeledDataset

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Model and evaluation for one cluster count."""
    n_clusters: int
    model: ClassifierModel
    report: EvaluationReport
    is_new_best: bool

    @property
    def accuracy(self) -> float:
        return self.report.accuracy

    def summary(self) -> dict:
        return {
            "n_clusters": self.n_clusters,
            "accuracy": self.accuracy,
            "average_label_accuracy": self.report.average_label_accuracy,
            "is_new_best": self.is_new_best,
        }


def sweep(
    train: LabeledDataset,
    test_set: LabeledDataset,
    start: Optional[int] = None,
    stop: int = 1,
    config: Optional[HierClusterConfig] = None,
) -> Iterator[SweepResult]:
    """
    Evaluate every cluster count from ``start`` down to ``stop``.

    Arguments are checked when sweep() is called, before any clustering.

    Args:
        train: Training set; clustered and used for label voting
        test_set: Held-out set used for scoring
        start: First cluster count, default (and at most) len(train)
        stop: Last cluster count, at least 1
        config: Supplies the undefined-label policy

    Returns:
        Iterator of SweepResult per cluster count, in decreasing count order.
        ``is_new_best`` is set when accuracy strictly beats every earlier count.

    Raises:
        ValueError: If stop < 1 or start < stop
        EmptyCollection: If the test set is empty
        DimensionMismatch: If the datasets differ in dimension
    """
    config = config or HierClusterConfig()
    if stop < 1:
        raise ValueError(f"stop must be >= 1, got {stop}")

    start = train.size if start is None else min(start, train.size)
    if start < stop:
        raise ValueError(f"Cannot sweep from {start} down to {stop} clusters")

    if test_set.size == 0:
        raise EmptyCollection("sweep", 1, 0)

    clusters = build_from_dataset(train)
    check_same_dimension(clusters, test_set)

    # Absent labels are the same at every cluster count
    number_of_labels = max(train.number_of_labels, test_set.number_of_labels)
    test_counts = np.bincount(test_set.labels, minlength=number_of_labels)
    undefined = [label for label in range(number_of_labels) if test_counts[label] == 0]
    if undefined:
        logger.warning(
            f"Labels {undefined} have no test points; their accuracy is undefined"
        )

    logger.info(f"Sweeping cluster counts {start} to {stop} over {train}")
    return _sweep_counts(train, test_set, clusters, start, stop, config)


def _sweep_counts(
    train: LabeledDataset,
    test_set: LabeledDataset,
    clusters: ClusterSet,
    start: int,
    stop: int,
    config: HierClusterConfig,
) -> Iterator[SweepResult]:
    best_accuracy = -1.0
    for n_clusters in range(start, stop - 1, -1):
        reduce_to(clusters, n_clusters)
        model = build_model(clusters, train)
        report = test(model, test_set, undefined_policy=config.undefined_label_policy)

        is_new_best = report.accuracy > best_accuracy
        if is_new_best:
            best_accuracy = report.accuracy
            logger.info(f"New best: {n_clusters} clusters, accuracy {report.accuracy:.4f}")

        yield SweepResult(
            n_clusters=n_clusters,
            model=model,
            report=report,
            is_new_best=is_new_best,
        )


def best_result(results: Iterable[SweepResult]) -> Optional[SweepResult]:
    """First result with the highest accuracy, or None if there are none."""
    best = None
    for result in results:
        if best is None or result.accuracy > best.accuracy:
            best = result
    return best
