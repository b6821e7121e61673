"""
Core components for Vector-Lens.
"""

from .types import VectorRecord, SearchResult, ProjectedPoint, ViewState
from .projector import PowerIterationProjector, ProjectionResult, project
from .view_transform import Bounds, Viewport, ViewTransform, compute_bounds, to_device
from .interaction import InteractionController, InteractionMode, hit_test
from .selection import SelectionStore
from .explorer import ExplorerSession

__all__ = [
    "VectorRecord",
    "SearchResult",
    "ProjectedPoint",
    "ViewState",
    "PowerIterationProjector",
    "ProjectionResult",
    "project",
    "Bounds",
    "Viewport",
    "ViewTransform",
    "compute_bounds",
    "to_device",
    "InteractionController",
    "InteractionMode",
    "hit_test",
    "SelectionStore",
    "ExplorerSession",
]
