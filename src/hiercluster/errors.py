"""
Exceptions raised by the hiercluster core.

All core errors are local preconditions on sizes and dimensions. They are
raised to the caller instead of producing partial output.
"""


class HierClusterError(Exception):
    """Base exception for hiercluster errors."""
    pass


class DimensionMismatch(HierClusterError, ValueError):
    """Raised when points of different dimension are compared or merged."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")


class EmptyCollection(HierClusterError, ValueError):
    """Raised when an operation needs more entries than are available."""

    def __init__(self, operation: str, required: int, available: int):
        self.operation = operation
        self.required = required
        self.available = available
        super().__init__(
            f"{operation} requires at least {required} entries, got {available}"
        )


class DegenerateLabelStatistics(HierClusterError):
    """Raised when a label has no test occurrences and its accuracy is 0/0."""

    def __init__(self, labels):
        self.labels = list(labels)
        super().__init__(
            f"Labels with no test occurrences: {self.labels}"
        )


class DatasetFormatError(HierClusterError, ValueError):
    """Raised when a dataset source holds malformed rows."""
    pass
