"""
Agglomerative reduction of a ClusterSet.

Repeatedly merges the two closest centroids (squared Euclidean distance)
into their weight-averaged centroid. Each step scans all pairs, so one
step is O(size^2) and reducing n points to k clusters is O(n^3) worst case.
"""

from __future__ import annotations

from typing import List, Tuple
import logging

import numpy as np

from hiercluster.clustering.cluster_set import ClusterSet
from hiercluster.errors import EmptyCollection
from hiercluster.points import squared_distances_to

logger = logging.getLogger(__name__)


def find_closest_pair(cluster_set: ClusterSet) -> Tuple[int, int]:
    """
    Find the pair of live centroids with the smallest squared distance.

    Ties go to the first pair in increasing (i, then j) scan order.

    Args:
        cluster_set: ClusterSet with at least two entries

    Returns:
        (i, j) with i < j

    Raises:
        EmptyCollection: If fewer than two clusters are live
    """
    size = cluster_set.size
    if size < 2:
        raise EmptyCollection("find_closest_pair", 2, size)

    centroids = cluster_set.centroids
    best_pair = (0, 1)
    best_distance = np.inf

    for i in range(size - 1):
        distances = squared_distances_to(centroids[i], centroids[i + 1:])
        # argmin returns the first minimum in the row
        offset = int(np.argmin(distances))
        if distances[offset] < best_distance:
            best_distance = distances[offset]
            best_pair = (i, i + 1 + offset)

    return best_pair


def _merged_entry(cluster_set: ClusterSet, i: int, j: int) -> Tuple[np.ndarray, int]:
    if i == j:
        raise IndexError(f"Cannot merge cluster {i} with itself")
    w_i = cluster_set.weight(i)
    w_j = cluster_set.weight(j)
    weight = w_i + w_j
    centroid = (w_i * cluster_set.centroid(i) + w_j * cluster_set.centroid(j)) / weight
    return centroid, weight


def merge(cluster_set: ClusterSet, i: int, j: int) -> None:
    """
    Merge cluster ``j`` into cluster ``i``.

    The weighted centroid and summed weight are stored at ``i``; ``j`` is
    then removed by moving the last entry into its slot, so the order of the
    surviving entries is not preserved.

    Args:
        cluster_set: ClusterSet to mutate
        i: Index receiving the merged cluster
        j: Index removed
    """
    centroid, weight = _merged_entry(cluster_set, i, j)
    cluster_set.set_entry(i, centroid, weight)
    cluster_set.swap_remove(j)


def merge_stable(cluster_set: ClusterSet, i: int, j: int) -> None:
    """
    Same as merge() but keeps the order of the surviving entries.

    Removal shifts every later entry down, so each call is O(size).
    Indices after ``j`` move down by one.
    """
    centroid, weight = _merged_entry(cluster_set, i, j)
    cluster_set.set_entry(i, centroid, weight)
    cluster_set.shift_remove(j)


def reduce_one_step(cluster_set: ClusterSet) -> Tuple[int, int]:
    """
    Merge the two closest clusters; size decreases by exactly one.

    Returns:
        The (i, j) pair that was merged
    """
    i, j = find_closest_pair(cluster_set)
    logger.debug(
        f"Merging clusters {i} (weight {cluster_set.weight(i)}) and "
        f"{j} (weight {cluster_set.weight(j)})"
    )
    merge(cluster_set, i, j)
    return i, j


def reduce_to(cluster_set: ClusterSet, target_size: int) -> List[Tuple[int, int]]:
    """
    Merge closest pairs until at most ``target_size`` clusters remain.

    No-op if the set is already at or below the target.

    Args:
        cluster_set: ClusterSet to reduce in place
        target_size: Desired cluster count, at least 1

    Returns:
        The merged pairs, in merge order

    Raises:
        ValueError: If target_size < 1
    """
    if target_size < 1:
        raise ValueError(f"target_size must be >= 1, got {target_size}")

    merges = []
    start = cluster_set.size
    while cluster_set.size > target_size:
        merges.append(reduce_one_step(cluster_set))

    if merges:
        logger.debug(f"Reduced clusters from {start} to {cluster_set.size}")
    return merges
