"""
Custom exceptions for Vector-Lens.
"""


class VectorLensError(Exception):
    """Base exception for all Vector-Lens errors."""
    pass


class DimensionMismatchError(VectorLensError, ValueError):
    """
    Vectors in one projection call do not share a dimension.

    Raised when:
    - A row in the batch differs in length from the first row
    - The query vector differs in length from the batch
    """

    def __init__(self, message: str, expected: int = None, actual: int = None, index: int = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.index = index


class LoaderError(VectorLensError):
    """
    Error reading a vector dataset from disk.

    Raised when:
    - The file cannot be parsed as JSON / JSONL / CSV
    - A record has no usable vector
    """

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path
