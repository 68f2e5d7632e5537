"""
Point primitives.

A point is a one-dimensional float64 numpy array. Only squared Euclidean
distance is used: every caller compares distances, so the square root is
never taken.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from hiercluster.errors import DimensionMismatch

PointLike = Union[np.ndarray, Sequence[float]]


def as_point(values: PointLike) -> np.ndarray:
    """Return a fresh float64 vector for the given coordinates."""
    point = np.array(values, dtype=np.float64)
    if point.ndim != 1:
        raise ValueError(f"A point must be one-dimensional, got shape {point.shape}")
    return point


def check_dimension(point: np.ndarray, dimension: int) -> None:
    """Raise DimensionMismatch unless ``point`` has ``dimension`` coordinates."""
    if point.shape[-1] != dimension:
        raise DimensionMismatch(dimension, point.shape[-1])


def squared_euclidean_distance(a: PointLike, b: PointLike) -> float:
    """
    Compute the squared Euclidean distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Sum of squared coordinate differences

    Raises:
        DimensionMismatch: If the points differ in dimension
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    check_dimension(b, a.shape[-1])
    return float(squared_distances_to(a, b[None, :])[0])


def squared_distances_to(point: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Squared distances from ``point`` to every row of ``centroids``.

    Coordinates are accumulated one column at a time, so a row's distance
    does not depend on the other rows and matches squared_euclidean_distance
    bit for bit.
    """
    check_dimension(point, centroids.shape[1])
    diff = centroids - point
    distances = np.zeros(len(centroids), dtype=np.float64)
    for k in range(diff.shape[1]):
        distances += diff[:, k] * diff[:, k]
    return distances
