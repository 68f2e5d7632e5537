"""
ClusterSet - working state of the agglomerative reduction.

Holds weighted centroids in preallocated numpy buffers. Only the first
``size`` rows are live; merges shrink ``size`` and never grow it.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple
import logging

import numpy as np

from hiercluster.errors import DimensionMismatch
from hiercluster.ingest.loader import LabeledDataset
from hiercluster.points import check_dimension

logger = logging.getLogger(__name__)


class ClusterSet:
    """
    Mutable collection of (centroid, weight) entries.

    The weight of an entry is the number of original points absorbed into
    its centroid, so the weights always sum to the original point count.

    Example:
        >>> cs = ClusterSet.from_dataset(train)
        >>> cs.size == len(train)
        True
    """

    def __init__(
        self,
        centroids: np.ndarray,
        weights: Optional[np.ndarray] = None,
    ):
        """
        Initialize from centroid rows.

        Args:
            centroids: Array of shape (size, dimension); copied
            weights: Positive integer weights, default 1 per centroid
        """
        self._centroids = np.array(centroids, dtype=np.float64)
        if self._centroids.ndim != 2:
            raise ValueError(f"centroids must be 2-D, got shape {self._centroids.shape}")

        if weights is None:
            self._weights = np.ones(len(self._centroids), dtype=np.int64)
        else:
            self._weights = np.array(weights, dtype=np.int64)
            if self._weights.shape != (len(self._centroids),):
                raise ValueError(
                    f"Expected {len(self._centroids)} weights, got shape {self._weights.shape}"
                )
            if len(self._weights) and self._weights.min() < 1:
                raise ValueError("Cluster weights must be positive")

        self._size = len(self._centroids)

    @classmethod
    def from_dataset(cls, dataset: LabeledDataset) -> "ClusterSet":
        """One weight-1 centroid per dataset point, in dataset order."""
        return cls(dataset.points)

    @property
    def size(self) -> int:
        return self._size

    @property
    def dimension(self) -> int:
        return self._centroids.shape[1]

    @property
    def centroids(self) -> np.ndarray:
        """Read-only view of the live centroids."""
        view = self._centroids[:self._size]
        view.flags.writeable = False
        return view

    @property
    def weights(self) -> np.ndarray:
        """Read-only view of the live weights."""
        view = self._weights[:self._size]
        view.flags.writeable = False
        return view

    def centroid(self, index: int) -> np.ndarray:
        """Copy of the centroid at ``index``."""
        self._check_index(index)
        return self._centroids[index].copy()

    def weight(self, index: int) -> int:
        self._check_index(index)
        return int(self._weights[index])

    def total_weight(self) -> int:
        return int(self._weights[:self._size].sum())

    def copy(self) -> "ClusterSet":
        """Deep copy of the live entries."""
        return ClusterSet(
            self._centroids[:self._size].copy(),
            self._weights[:self._size].copy(),
        )

    def set_entry(self, index: int, centroid: np.ndarray, weight: int) -> None:
        """Overwrite the entry at ``index``."""
        self._check_index(index)
        check_dimension(np.asarray(centroid), self.dimension)
        if weight < 1:
            raise ValueError(f"Cluster weight must be positive, got {weight}")
        self._centroids[index] = centroid
        self._weights[index] = weight

    def swap_remove(self, index: int) -> None:
        """
        Remove ``index`` by moving the last live entry into its slot.

        O(1); does not preserve the order of the remaining entries.
        """
        self._check_index(index)
        last = self._size - 1
        if index != last:
            self._centroids[index] = self._centroids[last]
            self._weights[index] = self._weights[last]
        self._size = last

    def shift_remove(self, index: int) -> None:
        """Remove ``index`` by shifting later entries down. O(size), order kept."""
        self._check_index(index)
        last = self._size - 1
        self._centroids[index:last] = self._centroids[index + 1:self._size]
        self._weights[index:last] = self._weights[index + 1:self._size]
        self._size = last

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"Cluster index {index} out of range for size {self._size}")

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Tuple[np.ndarray, int]]:
        for i in range(self._size):
            yield self._centroids[i].copy(), int(self._weights[i])

    def summary(self) -> Dict:
        """Summary statistics."""
        weights = self._weights[:self._size]
        return {
            "size": self._size,
            "dimension": self.dimension,
            "total_weight": int(weights.sum()),
            "max_weight": int(weights.max()) if self._size else 0,
        }

    def __repr__(self) -> str:
        return f"ClusterSet(size={self._size}, dimension={self.dimension})"


def build_from_dataset(dataset: LabeledDataset) -> ClusterSet:
    """
    Create the initial ClusterSet for a dataset.

    Args:
        dataset: Training points

    Returns:
        ClusterSet with one weight-1 centroid per point
    """
    cluster_set = ClusterSet.from_dataset(dataset)
    logger.debug(f"Built {cluster_set} from {dataset}")
    return cluster_set


def check_same_dimension(cluster_set: ClusterSet, dataset: LabeledDataset) -> None:
    """Raise DimensionMismatch if a non-empty dataset differs in dimension."""
    if dataset.size and dataset.dimension != cluster_set.dimension:
        raise DimensionMismatch(cluster_set.dimension, dataset.dimension)
