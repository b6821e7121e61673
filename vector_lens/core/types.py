"""
Data model for Vector-Lens.
Records come from the collection, projected points are derived from them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

import config


@dataclass(frozen=True)
class VectorRecord:
    """One stored vector as delivered by the collection."""
    id: int
    vector: Sequence[float]
    metadata: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @property
    def dimension(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class SearchResult:
    """One hit from a similarity search."""
    id: int
    score: float
    vector: Sequence[float] = field(default_factory=tuple)
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class ProjectedPoint:
    """A record placed in 2D data space."""
    x: float
    y: float
    id: int
    metadata: Optional[dict[str, Any]]
    is_search_result: bool
    score: Optional[float]
    original_vector: Sequence[float]

    @property
    def dimension(self) -> int:
        return len(self.original_vector)


def clamp_zoom(zoom: float) -> float:
    """Clamp a zoom factor to the allowed range."""
    return max(config.ZOOM_MIN, min(config.ZOOM_MAX, zoom))


@dataclass(frozen=True)
class ViewState:
    """Zoom and pan applied on top of the fitted data-to-device mapping."""
    zoom: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        object.__setattr__(self, "zoom", clamp_zoom(self.zoom))
        object.__setattr__(self, "pan", (float(self.pan[0]), float(self.pan[1])))

    @property
    def is_default(self) -> bool:
        return self.zoom == 1.0 and self.pan == (0.0, 0.0)
