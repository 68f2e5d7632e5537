"""
Unit tests for hiercluster ingest module.
"""

from pathlib import Path

import numpy as np
import pytest

from hiercluster.errors import DatasetFormatError
from hiercluster.ingest import DataLoader, LabeledDataset, load_dataset


def write_csv(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


class TestLabeledDataset:
    """Tests for the dataset container."""

    def test_from_rows(self):
        dataset = LabeledDataset.from_rows([
            (0.0, 0.0, 0),
            (0.0, 1.0, 0),
            (10.0, 10.0, 1),
        ])
        assert dataset.size == 3
        assert len(dataset) == 3
        assert dataset.dimension == 2
        assert dataset.number_of_labels == 2
        assert dataset.labels.tolist() == [0, 0, 1]

    def test_number_of_labels_is_max_plus_one(self):
        """Labels are not required to be dense."""
        dataset = LabeledDataset.from_rows([(1.0, 0), (2.0, 2)])
        assert dataset.number_of_labels == 3
        assert dataset.label_counts() == {0: 1, 1: 0, 2: 1}

    def test_empty(self):
        dataset = LabeledDataset.from_rows([])
        assert dataset.size == 0
        assert dataset.number_of_labels == 0
        assert dataset.label_counts() == {}

    def test_iteration(self):
        dataset = LabeledDataset.from_rows([(1.0, 2.0, 1), (3.0, 4.0, 0)])
        items = list(dataset)
        assert items[0][0].tolist() == [1.0, 2.0]
        assert items[0][1] == 1
        assert items[1][1] == 0

    def test_ragged_rows(self):
        with pytest.raises(DatasetFormatError):
            LabeledDataset.from_rows([(1.0, 2.0, 0), (1.0, 0)])

    def test_rows_without_coordinates(self):
        with pytest.raises(DatasetFormatError):
            LabeledDataset.from_rows([(0,), (1,)])

    def test_non_integer_label(self):
        with pytest.raises(DatasetFormatError):
            LabeledDataset.from_rows([(1.0, 0.5)])

    def test_negative_label(self):
        with pytest.raises(ValueError):
            LabeledDataset(points=np.zeros((1, 2)), labels=np.array([-1]))

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            LabeledDataset(points=np.zeros((2, 2)), labels=np.array([0]))

    def test_summary(self):
        dataset = LabeledDataset.from_rows([(0.0, 0), (1.0, 1), (2.0, 1)])
        summary = dataset.summary()
        assert summary["size"] == 3
        assert summary["dimension"] == 1
        assert summary["number_of_labels"] == 2
        assert summary["label_counts"] == {0: 1, 1: 2}

    def test_to_frame(self):
        dataset = LabeledDataset.from_rows([(0.5, 1.5, 1)])
        frame = dataset.to_frame()
        assert list(frame.columns) == ["x0", "x1", "label"]
        assert frame.iloc[0]["x1"] == 1.5
        assert frame.iloc[0]["label"] == 1


class TestDataLoader:
    """Tests for CSV loading."""

    def test_load_csv(self, tmp_path):
        path = write_csv(tmp_path / "train.csv", "0,0,0\n0,1,0\n10,10,1\n10,11,1\n")
        dataset = DataLoader().load_csv(path)

        assert dataset.size == 4
        assert dataset.dimension == 2
        assert dataset.number_of_labels == 2
        assert dataset.points[3].tolist() == [10.0, 11.0]
        assert dataset.labels.tolist() == [0, 0, 1, 1]

    def test_load_dataset_helper(self, tmp_path):
        path = write_csv(tmp_path / "train.csv", "1.5, 2.5, 3\n")
        dataset = load_dataset(path)
        assert dataset.points[0].tolist() == [1.5, 2.5]
        assert dataset.labels.tolist() == [3]

    def test_relative_path(self, tmp_path):
        write_csv(tmp_path / "data.csv", "1,2,0\n")
        dataset = DataLoader(base_path=tmp_path).load_csv("data.csv")
        assert dataset.size == 1

    def test_custom_delimiter(self, tmp_path):
        path = write_csv(tmp_path / "data.csv", "1;2;0\n3;4;1\n")
        dataset = DataLoader(delimiter=";").load_csv(path)
        assert dataset.dimension == 2
        assert dataset.labels.tolist() == [0, 1]

    def test_empty_file(self, tmp_path):
        path = write_csv(tmp_path / "empty.csv", "")
        dataset = DataLoader().load_csv(path)
        assert dataset.size == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLoader().load_csv(tmp_path / "missing.csv")

    def test_non_numeric_value(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1,2,0\n1,a,0\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)

    def test_short_row(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1,2,0\n3,4\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)

    def test_long_row(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1,2,0\n3,4,5,1\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)

    def test_fractional_label(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1,2,0.5\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)

    def test_negative_label(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1,2,-1\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)

    def test_label_only(self, tmp_path):
        path = write_csv(tmp_path / "bad.csv", "1\n2\n")
        with pytest.raises(DatasetFormatError):
            DataLoader().load_csv(path)
