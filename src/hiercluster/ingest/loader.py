"""
Data Loader for labeled numeric datasets.

Reads delimited rows (N coordinate columns followed by one integer label
column, no header) into a LabeledDataset. Parsing and row validation happen
here; the clustering core assumes a rectangular, fully parsed dataset.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple
import logging

import numpy as np
import pandas as pd

from hiercluster.errors import DatasetFormatError

logger = logging.getLogger(__name__)


@dataclass
class LabeledDataset:
    """
    Parallel arrays of points and their integer labels.

    Attributes:
        points: Float array of shape (n, dimension)
        labels: Integer array of shape (n,), non-negative

    Labels are assumed to densely populate [0, number_of_labels); this is
    not verified.
    """
    points: np.ndarray
    labels: np.ndarray

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64)
        self.labels = np.asarray(self.labels, dtype=np.int64)
        if self.points.size == 0 and self.points.ndim < 2:
            self.points = self.points.reshape(0, 0)
        if self.points.ndim != 2:
            raise ValueError(f"points must be 2-D, got shape {self.points.shape}")
        if self.labels.ndim != 1 or len(self.labels) != len(self.points):
            raise ValueError(
                f"Expected {len(self.points)} labels, got shape {self.labels.shape}"
            )
        if len(self.labels) and self.labels.min() < 0:
            raise ValueError("Labels must be non-negative integers")

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> "LabeledDataset":
        """
        Build a dataset from in-memory rows.

        Each row holds the coordinates followed by the label.
        """
        rows = [list(row) for row in rows]
        if not rows:
            return cls(points=np.empty((0, 0)), labels=np.empty(0, dtype=np.int64))
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise DatasetFormatError(f"Rows have differing column counts: {sorted(widths)}")
        if widths.pop() < 2:
            raise DatasetFormatError("Rows need at least one coordinate and a label")
        try:
            table = np.array(rows, dtype=np.float64)
        except ValueError as e:
            raise DatasetFormatError(f"Rows must be numeric: {e}") from e
        return cls(points=table[:, :-1], labels=_labels_from_column(table[:, -1]))

    @property
    def size(self) -> int:
        return len(self.labels)

    @property
    def dimension(self) -> int:
        return self.points.shape[1]

    @property
    def number_of_labels(self) -> int:
        """One more than the largest observed label (0 when empty)."""
        if self.size == 0:
            return 0
        return int(self.labels.max()) + 1

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Tuple[np.ndarray, int]]:
        for point, label in zip(self.points, self.labels):
            yield point, int(label)

    def label_counts(self) -> Dict[int, int]:
        """Number of points per label, for every label in [0, number_of_labels)."""
        counts = np.bincount(self.labels, minlength=self.number_of_labels)
        return {label: int(count) for label, count in enumerate(counts)}

    def summary(self) -> Dict:
        """Summary statistics."""
        return {
            "size": self.size,
            "dimension": self.dimension,
            "number_of_labels": self.number_of_labels,
            "label_counts": self.label_counts(),
        }

    def to_frame(self) -> pd.DataFrame:
        """Return the dataset as a DataFrame with columns x0..x{d-1}, label."""
        frame = pd.DataFrame(
            self.points, columns=[f"x{k}" for k in range(self.dimension)]
        )
        frame["label"] = self.labels
        return frame

    def __repr__(self) -> str:
        return (
            f"LabeledDataset({self.size:,} points, dimension={self.dimension}, "
            f"labels={self.number_of_labels})"
        )


def _labels_from_column(column: np.ndarray) -> np.ndarray:
    """Validate and convert a float label column to integers."""
    labels = column.astype(np.int64)
    if not np.array_equal(labels, column):
        raise DatasetFormatError("Label column must hold integers")
    if len(labels) and labels.min() < 0:
        raise DatasetFormatError("Labels must be non-negative")
    return labels


class DataLoader:
    """
    Loader for labeled CSV datasets.

    Example:
        >>> loader = DataLoader()
        >>> train = loader.load_csv("data/training.csv")
        >>> print(train.summary())
    """

    def __init__(self, base_path: Optional[Path] = None, delimiter: str = ","):
        """
        Initialize the data loader.

        Args:
            base_path: Optional base path for relative file paths.
                      If not provided, uses current working directory.
            delimiter: Column delimiter
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.delimiter = delimiter

    def load_csv(self, path: str | Path) -> LabeledDataset:
        """
        Load a labeled dataset from a delimited file.

        Args:
            path: File with rows of coordinates followed by a label

        Returns:
            LabeledDataset in file order

        Raises:
            FileNotFoundError: If the file does not exist
            DatasetFormatError: If a row is malformed
        """
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = self.base_path / file_path

        logger.info(f"Loading dataset from {file_path}")
        try:
            frame = pd.read_csv(
                file_path,
                header=None,
                sep=self.delimiter,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"{file_path} is empty")
            return LabeledDataset.from_rows([])
        except pd.errors.ParserError as e:
            raise DatasetFormatError(f"Could not parse {file_path}: {e}") from e

        dataset = self.from_frame(frame, source=str(file_path))
        logger.info(f"Loaded {dataset}")
        return dataset

    def from_frame(self, frame: pd.DataFrame, source: str = "<frame>") -> LabeledDataset:
        """Convert a raw DataFrame (coordinates then label column) to a dataset."""
        if frame.shape[1] < 2:
            raise DatasetFormatError(
                f"{source}: expected at least one coordinate column and a label column"
            )

        numeric = frame.apply(pd.to_numeric, errors="coerce")
        bad_rows = numeric.isna().any(axis=1)
        if bad_rows.any():
            first_bad = int(np.flatnonzero(bad_rows.to_numpy())[0])
            raise DatasetFormatError(
                f"{source}: row {first_bad + 1} is missing values or is not numeric"
            )

        table = numeric.to_numpy(dtype=np.float64)
        return LabeledDataset(
            points=table[:, :-1],
            labels=_labels_from_column(table[:, -1]),
        )


def load_dataset(path: str | Path, delimiter: str = ",") -> LabeledDataset:
    """
    Convenience function to load a labeled dataset.

    Args:
        path: Path to the delimited file
        delimiter: Column delimiter

    Returns:
        LabeledDataset
    """
    return DataLoader(delimiter=delimiter).load_csv(path)
