"""
Nearest-centroid classifier built from a reduced ClusterSet.

Each cluster is translated to the majority label of the training points
nearest to it.
"""

from __future__ import annotations

from typing import Dict, List, Union
import logging

import numpy as np

from hiercluster.clustering.cluster_set import ClusterSet, check_same_dimension
from hiercluster.errors import EmptyCollection
from hiercluster.ingest.loader import LabeledDataset
from hiercluster.points import PointLike, as_point, squared_distances_to

logger = logging.getLogger(__name__)


class ClassifierModel:
    """
    Frozen snapshot of a ClusterSet with a cluster -> label translation table.

    The model owns a deep copy of the clusters, so later reduction of the
    ClusterSet it was built from does not change it.

    Attributes:
        clusters: Private copy of the ClusterSet
        translation: Label per cluster index
        label_counts: Training label frequencies per cluster, shape
            (n_clusters, number_of_labels)
    """

    def __init__(
        self,
        clusters: ClusterSet,
        translation: np.ndarray,
        label_counts: np.ndarray,
    ):
        self._clusters = clusters.copy()
        self._translation = np.array(translation, dtype=np.int64)
        self._label_counts = np.array(label_counts, dtype=np.int64)
        if len(self._translation) != self._clusters.size:
            raise ValueError(
                f"Expected {self._clusters.size} translations, got {len(self._translation)}"
            )
        self._translation.flags.writeable = False
        self._label_counts.flags.writeable = False

    @property
    def clusters(self) -> ClusterSet:
        """Copy of the model's clusters."""
        return self._clusters.copy()

    @property
    def centroids(self) -> np.ndarray:
        return self._clusters.centroids

    @property
    def weights(self) -> np.ndarray:
        return self._clusters.weights

    @property
    def translation(self) -> np.ndarray:
        return self._translation

    @property
    def label_counts(self) -> np.ndarray:
        return self._label_counts

    @property
    def n_clusters(self) -> int:
        return self._clusters.size

    @property
    def dimension(self) -> int:
        return self._clusters.dimension

    @property
    def number_of_labels(self) -> int:
        """Labels known from training."""
        return self._label_counts.shape[1]

    def translate(self, cluster_index: int) -> int:
        return int(self._translation[cluster_index])

    def predict(self, point: PointLike) -> int:
        """Label of the cluster nearest to ``point``."""
        return self.translate(nearest_cluster(self, point))

    def summary(self) -> Dict:
        """Summary of the model."""
        return {
            "n_clusters": self.n_clusters,
            "dimension": self.dimension,
            "number_of_labels": self.number_of_labels,
            "translation": [int(t) for t in self._translation],
            "empty_clusters": int(np.sum(self._label_counts.sum(axis=1) == 0)),
        }

    def __repr__(self) -> str:
        return f"ClassifierModel(n_clusters={self.n_clusters}, dimension={self.dimension})"


def nearest_cluster(
    clusters: Union[ClusterSet, ClassifierModel],
    point: PointLike,
) -> int:
    """
    Index of the centroid nearest to ``point``.

    Linear scan by squared distance; ties go to the lowest index.

    Raises:
        EmptyCollection: If there are no clusters
        DimensionMismatch: If the point has the wrong dimension
    """
    centroids = clusters.centroids
    if len(centroids) == 0:
        raise EmptyCollection("nearest_cluster", 1, 0)
    distances = squared_distances_to(as_point(point), centroids)
    return int(np.argmin(distances))


def majority_label(counts: np.ndarray) -> int:
    """
    First label with the strictly greatest count.

    All-zero counts give label 0.
    """
    best_label = 0
    for label in range(1, len(counts)):
        if counts[label] > counts[best_label]:
            best_label = label
    return best_label


def build_model(clusters: ClusterSet, train: LabeledDataset) -> ClassifierModel:
    """
    Build a ClassifierModel by majority vote of the training labels.

    Every training point votes its label for its nearest cluster. A cluster
    that receives no votes translates to label 0.

    Args:
        clusters: Current ClusterSet (copied, not modified)
        train: Labeled training set

    Returns:
        ClassifierModel

    Raises:
        EmptyCollection: If ``clusters`` is empty and ``train`` is not
        DimensionMismatch: If the dimensions disagree
    """
    check_same_dimension(clusters, train)
    snapshot = clusters.copy()

    counts = np.zeros((snapshot.size, train.number_of_labels), dtype=np.int64)
    for point, label in train:
        counts[nearest_cluster(snapshot, point), label] += 1

    translation: List[int] = [majority_label(row) for row in counts]

    empty = int(np.sum(counts.sum(axis=1) == 0))
    if empty:
        logger.debug(f"{empty} clusters received no training points, translated to label 0")

    model = ClassifierModel(snapshot, np.array(translation, dtype=np.int64), counts)
    logger.debug(f"Built {model} from {train}")
    return model
