"""
hiercluster Ingest Module

Loading labeled numeric datasets.

Key components:
- DataLoader: Load delimited files with pandas
- LabeledDataset: Parallel point and label arrays
"""

from hiercluster.ingest.loader import (
    DataLoader,
    LabeledDataset,
    load_dataset,
)

__all__ = [
    "DataLoader",
    "LabeledDataset",
    "load_dataset",
]
