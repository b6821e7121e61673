"""
Power-iteration projection for dimensionality reduction.
Maps a batch of embeddings (and an optional query) to 2D for display.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from vector_lens.core import linalg
from vector_lens.core.exceptions import DimensionMismatchError
import config

logger = logging.getLogger(__name__)


@dataclass
class ProjectionResult:
    """Output of one projection call."""
    points: np.ndarray                     # (n, 2), input order, query excluded
    query_point: Optional[np.ndarray] = None  # (2,) when a query was supplied
    axes: Optional[np.ndarray] = None      # (2, dim) unit rows
    mean: Optional[np.ndarray] = None      # (dim,) centre of the working set
    axes_valid: tuple[bool, bool] = field(default=(False, False))

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0


class PowerIterationProjector:
    """
    Approximate two-component PCA for embedding visualization.

    Features:
    - Centers the batch (query included) on its mean
    - Finds the top variance direction by power iteration
    - Finds a second direction deflated against the first
    - Projects the query with the same basis as the batch

    Axis sign depends on the random start, so only relative geometry is
    stable between runs unless a seed is given.
    """

    def __init__(
        self,
        n_iterations: int = config.POWER_ITERATIONS,
        eps: float = config.NORM_EPSILON,
        seed: Optional[int] = config.PROJECTION_SEED,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the projector.

        Args:
            n_iterations: Power-iteration steps per axis (default: 50)
            eps: Norm below which an iterate is not renormalized
            seed: Seed for the starting directions (None for fresh randomness)
            rng: Explicit generator, takes precedence over seed
        """
        self.n_iterations = n_iterations
        self.eps = eps
        self.seed = seed
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def project(
        self,
        vectors: Sequence[Sequence[float]],
        query: Optional[Sequence[float]] = None
    ) -> ProjectionResult:
        """
        Project vectors (and an optional query) onto two principal axes.

        Args:
            vectors: Batch of equal-length vectors
            query: Optional vector of the same length, used in the basis

        Returns:
            ProjectionResult with one (x, y) row per input vector

        Raises:
            DimensionMismatchError: If the rows or the query differ in length
        """
        if len(vectors) == 0:
            return ProjectionResult(points=np.empty((0, 2)))

        working = self._build_working_set(vectors, query)
        n_rows, dim = working.shape
        logger.debug(f"Projecting {n_rows} vectors of dimension {dim}")

        mean = working.mean(axis=0)
        centered = working - mean

        axis1, ok1 = self._first_axis(centered)
        axis2, ok2 = self._second_axis(centered, axis1)
        if not (ok1 and ok2):
            logger.debug("Power iteration underflowed; data has little or no variance")

        axes = np.vstack([axis1, axis2])
        coords = centered @ axes.T

        query_point = None
        if query is not None:
            query_point = coords[-1]
            coords = coords[:-1]

        return ProjectionResult(
            points=coords,
            query_point=query_point,
            axes=axes,
            mean=mean,
            axes_valid=(ok1, ok2),
        )

    def _build_working_set(
        self,
        vectors: Sequence[Sequence[float]],
        query: Optional[Sequence[float]]
    ) -> np.ndarray:
        """Stack the batch, appending the query last, checking dimensions."""
        rows = [np.asarray(v, dtype=np.float64) for v in vectors]
        if query is not None:
            rows.append(np.asarray(query, dtype=np.float64))

        dim = len(rows[0])
        for i, row in enumerate(rows):
            if row.ndim != 1 or len(row) != dim:
                what = "Query vector" if query is not None and i == len(rows) - 1 else f"Vector {i}"
                raise DimensionMismatchError(
                    f"{what} has dimension {row.size}, expected {dim}",
                    expected=dim,
                    actual=row.size,
                    index=i,
                )
        return np.vstack(rows)

    def _random_unit(self, dim: int) -> np.ndarray:
        v = self._rng.uniform(config.INIT_LOW, config.INIT_HIGH, size=dim)
        unit, ok = linalg.normalize(v, self.eps)
        # A zero draw is practically impossible; fall back to a basis vector
        if not ok:
            unit = np.zeros(dim)
            unit[0] = 1.0
        return unit

    def _apply_covariance(self, centered: np.ndarray, v: np.ndarray) -> np.ndarray:
        # Sum over rows of row * (row . v), without forming the dim x dim matrix
        return centered.T @ (centered @ v)

    def _first_axis(self, centered: np.ndarray) -> tuple[np.ndarray, bool]:
        """Dominant direction of the centred data."""
        v = self._random_unit(centered.shape[1])
        any_ok = False

        for _ in range(self.n_iterations):
            result = self._apply_covariance(centered, v)
            v, ok = self._renormalize(result, v)
            any_ok = any_ok or ok

        return v, any_ok

    def _second_axis(
        self,
        centered: np.ndarray,
        axis1: np.ndarray
    ) -> tuple[np.ndarray, bool]:
        """Dominant direction orthogonal to ``axis1``."""
        start = linalg.remove_component(self._random_unit(centered.shape[1]), axis1)
        v, ok = linalg.normalize(start, self.eps)
        if not ok:
            # One-dimensional data has no orthogonal complement
            v = np.zeros_like(start)
        any_ok = False

        for _ in range(self.n_iterations):
            result = self._apply_covariance(centered, v)
            result = linalg.remove_component(result, axis1)
            v, ok = self._renormalize(result, v)
            any_ok = any_ok or ok

        return v, any_ok

    def _renormalize(self, result: np.ndarray, previous: np.ndarray) -> tuple[np.ndarray, bool]:
        unit, ok = linalg.normalize(result, self.eps)
        return (unit, True) if ok else (previous, False)


def project(
    vectors: Sequence[Sequence[float]],
    query: Optional[Sequence[float]] = None,
    rng: Optional[np.random.Generator] = None
) -> ProjectionResult:
    """
    Project a batch to 2D with default settings.

    Args:
        vectors: Batch of equal-length vectors
        query: Optional query vector
        rng: Optional generator for the starting directions

    Returns:
        ProjectionResult
    """
    return PowerIterationProjector(rng=rng).project(vectors, query)
