"""
Data-space to device-space mapping.
Fits the projected points into a padded viewport, then applies zoom and pan.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from vector_lens.core.types import ViewState
import config


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned extent of the projected data."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def range_x(self) -> float:
        # Zero span falls back to 1 to avoid dividing by zero
        return (self.max_x - self.min_x) or 1.0

    @property
    def range_y(self) -> float:
        return (self.max_y - self.min_y) or 1.0

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


@dataclass(frozen=True)
class Viewport:
    """Size of the drawing surface in device units."""
    width: float
    height: float
    padding: float = config.VIEW_PADDING

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)


def compute_bounds(
    points: Iterable[Sequence[float]],
    query_point: Optional[Sequence[float]] = None
) -> Bounds:
    """
    Bounding box of the points, widened to include the query point.

    Args:
        points: (x, y) pairs; ProjectedPoint-like objects with x/y also work
        query_point: Optional (x, y) pair

    Returns:
        Bounds of all coordinates (unit box at the origin when empty)
    """
    coords = [_xy(p) for p in points]
    if query_point is not None:
        coords.append((float(query_point[0]), float(query_point[1])))
    if not coords:
        return Bounds(0.0, 1.0, 0.0, 1.0)

    xs = [c[0] for c in coords]
    ys = [c[1] for c in coords]
    return Bounds(min(xs), max(xs), min(ys), max(ys))


def to_device(
    point: Sequence[float],
    bounds: Bounds,
    viewport: Viewport,
    view_state: ViewState
) -> tuple[float, float]:
    """
    Map one data-space point to device coordinates.

    The y axis is inverted so larger data y renders higher. Zoom scales
    about the viewport centre and pan is added afterwards.
    """
    x, y = _xy(point)
    p = viewport.padding
    tx = ((x - bounds.min_x) / bounds.range_x) * (viewport.width - 2 * p) + p
    ty = viewport.height - (((y - bounds.min_y) / bounds.range_y) * (viewport.height - 2 * p) + p)

    cx, cy = viewport.center
    zoom = view_state.zoom
    pan_x, pan_y = view_state.pan
    return ((tx - cx) * zoom + cx + pan_x, (ty - cy) * zoom + cy + pan_y)


class ViewTransform:
    """
    Bundles bounds, viewport and view state for repeated mapping.

    Built once per frame and shared by hit-testing and rendering, so both
    agree on where each point is.
    """

    def __init__(self, bounds: Bounds, viewport: Viewport, view_state: ViewState):
        self.bounds = bounds
        self.viewport = viewport
        self.view_state = view_state

    @classmethod
    def fit(
        cls,
        points: Iterable[Sequence[float]],
        viewport: Viewport,
        view_state: ViewState,
        query_point: Optional[Sequence[float]] = None
    ) -> "ViewTransform":
        """Create a transform whose bounds cover ``points`` and the query."""
        return cls(compute_bounds(points, query_point), viewport, view_state)

    @property
    def zoom(self) -> float:
        return self.view_state.zoom

    def to_device(self, point: Sequence[float]) -> tuple[float, float]:
        return to_device(point, self.bounds, self.viewport, self.view_state)

    def points_to_device(self, xy: np.ndarray) -> np.ndarray:
        """
        Vectorised form of ``to_device``.

        Args:
            xy: Array of shape (n, 2) in data space

        Returns:
            Array of shape (n, 2) in device space
        """
        xy = np.asarray(xy, dtype=np.float64).reshape(-1, 2)
        b, vp, vs = self.bounds, self.viewport, self.view_state
        p = vp.padding
        tx = ((xy[:, 0] - b.min_x) / b.range_x) * (vp.width - 2 * p) + p
        ty = vp.height - (((xy[:, 1] - b.min_y) / b.range_y) * (vp.height - 2 * p) + p)
        cx, cy = vp.center
        out = np.empty_like(xy)
        out[:, 0] = (tx - cx) * vs.zoom + cx + vs.pan[0]
        out[:, 1] = (ty - cy) * vs.zoom + cy + vs.pan[1]
        return out


def grid_lines(
    viewport: Viewport,
    divisions: int = config.GRID_DIVISIONS
) -> Iterator[tuple[float, float, float, float]]:
    """
    Reference grid segments as (x0, y0, x1, y1).

    Lines are spaced evenly across the padded box and span the full
    viewport. They ignore zoom and pan.
    """
    p = viewport.padding
    for i in range(divisions + 1):
        x = p + (i / divisions) * (viewport.width - 2 * p)
        yield (x, 0.0, x, viewport.height)
        y = p + (i / divisions) * (viewport.height - 2 * p)
        yield (0.0, y, viewport.width, y)


def _xy(point) -> tuple[float, float]:
    if hasattr(point, "x") and hasattr(point, "y"):
        return (float(point.x), float(point.y))
    return (float(point[0]), float(point[1]))
