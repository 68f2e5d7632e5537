"""
Unit tests for hiercluster point primitives.
"""

import numpy as np
import pytest

from hiercluster.errors import DimensionMismatch
from hiercluster.points import as_point, squared_distances_to, squared_euclidean_distance


class TestSquaredEuclideanDistance:
    """Tests for the distance primitive."""

    def test_no_square_root(self):
        """A 3-4-5 triangle gives 25, not 5."""
        assert squared_euclidean_distance([0.0, 0.0], [3.0, 4.0]) == 25.0

    def test_symmetric(self):
        a = [1.0, -2.0, 0.5]
        b = [4.0, 2.0, -1.5]
        assert squared_euclidean_distance(a, b) == squared_euclidean_distance(b, a)

    def test_zero_for_same_point(self):
        assert squared_euclidean_distance([7.0, 7.0], [7.0, 7.0]) == 0.0

    def test_dimension_mismatch(self):
        """Points of different dimension are rejected."""
        with pytest.raises(DimensionMismatch) as exc:
            squared_euclidean_distance([0.0, 0.0], [0.0, 0.0, 0.0])
        assert exc.value.expected == 2
        assert exc.value.actual == 3

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            squared_euclidean_distance([1.0], [1.0, 2.0])


class TestHelpers:
    """Tests for point helpers."""

    def test_as_point_copies(self):
        source = np.array([1.0, 2.0])
        point = as_point(source)
        source[0] = 99.0
        assert point[0] == 1.0
        assert point.dtype == np.float64

    def test_as_point_rejects_matrix(self):
        with pytest.raises(ValueError):
            as_point([[1.0, 2.0]])

    def test_distances_to_rows(self):
        centroids = np.array([[0.0, 0.0], [1.0, 1.0], [3.0, 0.0]])
        distances = squared_distances_to(np.array([0.0, 0.0]), centroids)
        assert distances.tolist() == [0.0, 2.0, 9.0]

    def test_distances_to_rows_mismatch(self):
        with pytest.raises(DimensionMismatch):
            squared_distances_to(np.array([0.0]), np.zeros((2, 2)))

    def test_rows_match_single_pair_distance(self):
        """Row-wise and single-pair distances agree bit for bit."""
        rng = np.random.default_rng(3)
        centroids = rng.normal(size=(50, 24))
        for point in centroids[:10]:
            rows = squared_distances_to(point, centroids)
            singles = [squared_euclidean_distance(point, c) for c in centroids]
            assert rows.tolist() == singles
