"""
hiercluster - Nearest-centroid classification by agglomerative clustering

Clusters a training set bottom-up, labels each cluster by majority vote of
the training labels, and scores the resulting classifier on a test set.

Modules:
- points: Squared Euclidean distance primitives
- ingest: Labeled dataset loading
- clustering: Reduction engine, classifier model, evaluation and sweep
- cli: Console driver for the cluster-count sweep
"""

__version__ = "0.1.0"

from hiercluster.errors import (
    HierClusterError,
    DimensionMismatch,
    EmptyCollection,
    DegenerateLabelStatistics,
    DatasetFormatError,
)
from hiercluster.points import squared_euclidean_distance
from hiercluster.ingest import DataLoader, LabeledDataset, load_dataset
from hiercluster.clustering import (
    ClusterSet,
    build_from_dataset,
    find_closest_pair,
    merge,
    merge_stable,
    reduce_one_step,
    reduce_to,
    ClassifierModel,
    build_model,
    nearest_cluster,
    EvaluationReport,
    LabelStats,
    evaluate,
    SweepResult,
    sweep,
    best_result,
)
from hiercluster.clustering.evaluator import test

__all__ = [
    # Version
    "__version__",
    # Errors
    "HierClusterError",
    "DimensionMismatch",
    "EmptyCollection",
    "DegenerateLabelStatistics",
    "DatasetFormatError",
    # Points
    "squared_euclidean_distance",
    # Ingest
    "DataLoader",
    "LabeledDataset",
    "load_dataset",
    # Clustering
    "ClusterSet",
    "build_from_dataset",
    "find_closest_pair",
    "merge",
    "merge_stable",
    "reduce_one_step",
    "reduce_to",
    "ClassifierModel",
    "build_model",
    "nearest_cluster",
    "EvaluationReport",
    "LabelStats",
    "evaluate",
    "test",
    "SweepResult",
    "sweep",
    "best_result",
]
