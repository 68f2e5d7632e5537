"""
hiercluster Configuration Management

Centralized defaults for the cluster-count sweep, evaluation and logging.
"""

from dataclasses import dataclass
from typing import Optional
import os


UNDEFINED_LABEL_POLICIES = ("exclude", "propagate", "raise")


@dataclass
class HierClusterConfig:
    """Main configuration for hiercluster."""

    # Sweep settings
    min_clusters: int = 1                 # Smallest cluster count tried
    max_clusters: Optional[int] = None    # None = start from the training set size

    # Evaluation settings
    undefined_label_policy: str = "exclude"  # exclude | propagate | raise

    # Input settings
    delimiter: str = ","

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        if self.undefined_label_policy not in UNDEFINED_LABEL_POLICIES:
            raise ValueError(
                f"Unknown undefined_label_policy {self.undefined_label_policy!r}, "
                f"expected one of {UNDEFINED_LABEL_POLICIES}"
            )
        if self.min_clusters < 1:
            raise ValueError(f"min_clusters must be >= 1, got {self.min_clusters}")

    @classmethod
    def from_env(cls) -> "HierClusterConfig":
        """Create config from environment variables."""
        config = cls()

        if min_clusters := os.environ.get("HIERCLUSTER_MIN_CLUSTERS"):
            config.min_clusters = int(min_clusters)
        if max_clusters := os.environ.get("HIERCLUSTER_MAX_CLUSTERS"):
            config.max_clusters = int(max_clusters)
        if policy := os.environ.get("HIERCLUSTER_UNDEFINED_LABEL_POLICY"):
            config.undefined_label_policy = policy
        if delimiter := os.environ.get("HIERCLUSTER_DELIMITER"):
            config.delimiter = delimiter
        if log_level := os.environ.get("HIERCLUSTER_LOG_LEVEL"):
            config.log_level = log_level

        # Re-validate after overrides
        config.__post_init__()
        return config


# Default config instance
config = HierClusterConfig()
