"""
hiercluster Clustering Module

Agglomerative reduction and the nearest-centroid classifier built on it.

Key components:
- ClusterSet: Weighted centroids being reduced
- find_closest_pair / merge / reduce_to: Nearest-pair merge loop
- ClassifierModel / build_model: Cluster -> label translation by majority vote
- test: Overall and per-label accuracy against a test set
- sweep: Models and scores for a range of cluster counts
"""

from hiercluster.clustering.cluster_set import ClusterSet, build_from_dataset
from hiercluster.clustering.engine import (
    find_closest_pair,
    merge,
    merge_stable,
    reduce_one_step,
    reduce_to,
)
from hiercluster.clustering.model import (
    ClassifierModel,
    build_model,
    majority_label,
    nearest_cluster,
)
from hiercluster.clustering.evaluator import (
    EvaluationReport,
    LabelStats,
    average_label_accuracy,
    evaluate,
)
from hiercluster.clustering.sweep import SweepResult, sweep, best_result

__all__ = [
    "ClusterSet",
    "build_from_dataset",
    "find_closest_pair",
    "merge",
    "merge_stable",
    "reduce_one_step",
    "reduce_to",
    "ClassifierModel",
    "build_model",
    "majority_label",
    "nearest_cluster",
    "EvaluationReport",
    "LabelStats",
    "average_label_accuracy",
    "evaluate",
    "SweepResult",
    "sweep",
    "best_result",
]
