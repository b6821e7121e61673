"""
Small vector primitives shared by the projector and the view layer.
All functions take and return 1-D numpy arrays.
"""

import numpy as np

import config


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two vectors."""
    return float(np.dot(a, b))


def norm(v: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def scale(v: np.ndarray, factor: float) -> np.ndarray:
    """Multiply every component by ``factor``."""
    return v * factor


def normalize(v: np.ndarray, eps: float = config.NORM_EPSILON) -> tuple[np.ndarray, bool]:
    """
    Scale a vector to unit length.

    Args:
        v: Vector to normalize
        eps: Norms below this are treated as zero

    Returns:
        Tuple of (vector, ok). When the norm underflows, ``v`` is returned
        unchanged and ``ok`` is False.
    """
    length = norm(v)
    if length < eps:
        return v, False
    return scale(v, 1.0 / length), True


def remove_component(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Gram-Schmidt step: subtract the projection of ``v`` onto unit ``axis``."""
    return v - dot(v, axis) * axis
