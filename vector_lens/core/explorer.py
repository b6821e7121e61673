"""
ExplorerSession: ties the projector, interaction and selection together.
Recomputes the projection only when the batch, results or query change.
"""

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from vector_lens.core.interaction import InteractionController
from vector_lens.core.projector import PowerIterationProjector, ProjectionResult
from vector_lens.core.selection import SelectionStore
from vector_lens.core.types import ProjectedPoint, SearchResult, VectorRecord
from vector_lens.core.view_transform import ViewTransform, Viewport

logger = logging.getLogger(__name__)


class ExplorerSession:
    """
    State for one visualized collection.

    Responsibilities:
    - Hold the record batch, search results and query vector
    - Keep projected points in sync through an explicit dirty flag
    - Own the InteractionController (zoom, pan, hover)
    - Report activated points as records through the SelectionStore

    Pan, zoom and hover never trigger a projection.
    """

    def __init__(
        self,
        records: Optional[Sequence[VectorRecord]] = None,
        dimension: Optional[int] = None,
        projector: Optional[PowerIterationProjector] = None,
        selection: Optional[SelectionStore] = None
    ):
        """
        Initialize the session.

        Args:
            records: Initial record batch
            dimension: Declared collection dimension (display only)
            projector: Projection backend (defaults to PowerIterationProjector)
            selection: Shared selection store (a new one if omitted)
        """
        self.projector = projector or PowerIterationProjector()
        self.interaction = InteractionController()
        self.selection = selection or SelectionStore()

        self._records: list[VectorRecord] = list(records or [])
        self._dimension = dimension
        self._results: list[SearchResult] = []
        self._query: Optional[np.ndarray] = None

        self._points: list[ProjectedPoint] = []
        self._query_point: Optional[np.ndarray] = None
        self._last_result: Optional[ProjectionResult] = None
        self._dirty = True
        self._projection_count = 0

        self._id_to_idx: dict[int, int] = {}
        self._build_id_index()

        self._activation_callbacks: list[Callable[[VectorRecord], None]] = []
        self.interaction.on_activate(lambda point: self.activate(point.id))

    # -------------------------------------------------------------------------
    # Inputs (the only projection triggers)
    # -------------------------------------------------------------------------

    def set_records(self, records: Sequence[VectorRecord], dimension: Optional[int] = None) -> None:
        """Replace the batch being visualized."""
        self._records = list(records)
        if dimension is not None:
            self._dimension = dimension
        self._build_id_index()
        if self.selection.selected_id not in self._id_to_idx:
            self.selection.clear()
        self.interaction.set_hover(None)
        self._mark_dirty("records")

    def set_search(
        self,
        results: Sequence[SearchResult],
        query: Optional[Sequence[float]] = None
    ) -> None:
        """Highlight a search result set and place its query vector."""
        self._results = list(results)
        self._query = None if query is None else np.asarray(query, dtype=np.float64)
        self._mark_dirty("search")

    def clear_search(self) -> None:
        """Drop the result highlights and the query marker."""
        if not self._results and self._query is None:
            return
        self._results = []
        self._query = None
        self._mark_dirty("search cleared")

    def _mark_dirty(self, reason: str) -> None:
        logger.debug(f"Projection invalidated ({reason})")
        self._dirty = True

    # -------------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------------

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def projection_count(self) -> int:
        """How many times the projector has run."""
        return self._projection_count

    def ensure_projection(self) -> bool:
        """
        Recompute projected points if an input changed.

        Returns:
            True if a projection ran
        """
        if not self._dirty:
            return False
        self.recompute()
        return True

    def recompute(self) -> None:
        """Project the current batch and rebuild every ProjectedPoint."""
        self._dirty = False
        self.interaction.set_hover(None)

        if not self._records:
            self._points = []
            self._query_point = None
            self._last_result = None
            return

        try:
            result = self.projector.project([r.vector for r in self._records], self._query)
        except ValueError:
            # Stay dirty with no points so stale highlights are never shown
            self._dirty = True
            self._points = []
            self._query_point = None
            self._last_result = None
            raise
        self._projection_count += 1
        self._last_result = result

        scores = {r.id: r.score for r in self._results}
        self._points = [
            ProjectedPoint(
                x=float(xy[0]),
                y=float(xy[1]),
                id=record.id,
                metadata=record.metadata,
                is_search_result=record.id in scores,
                score=scores.get(record.id),
                original_vector=record.vector,
            )
            for record, xy in zip(self._records, result.points)
        ]
        self._query_point = result.query_point
        logger.info(
            f"Projected {len(self._points)} vectors "
            f"({sum(p.is_search_result for p in self._points)} matches)"
        )

    @property
    def points(self) -> list[ProjectedPoint]:
        self.ensure_projection()
        return list(self._points)

    @property
    def query_point(self) -> Optional[np.ndarray]:
        self.ensure_projection()
        return self._query_point

    @property
    def projection(self) -> Optional[ProjectionResult]:
        """Raw result of the last projection (axes, mean)."""
        self.ensure_projection()
        return self._last_result

    # -------------------------------------------------------------------------
    # Viewing and pointer input
    # -------------------------------------------------------------------------

    def transform(self, viewport: Viewport) -> ViewTransform:
        """Transform for the current points, query and view state."""
        return ViewTransform.fit(
            self.points, viewport, self.interaction.view_state, self.query_point
        )

    def pointer_move(self, pos: tuple[float, float], viewport: Viewport) -> Optional[ProjectedPoint]:
        """Forward a pointer move; returns the hover target afterwards."""
        self.interaction.pointer_move(pos, self.points, self.transform(viewport))
        return self.interaction.hover

    def click(self) -> Optional[VectorRecord]:
        """Activate the hovered point, if any."""
        point = self.interaction.click()
        return self.get_record(point.id) if point is not None else None

    # -------------------------------------------------------------------------
    # Activation and lookup
    # -------------------------------------------------------------------------

    def on_point_activated(self, callback: Callable[[VectorRecord], None]) -> None:
        """Register a callback receiving the record of an activated point."""
        self._activation_callbacks.append(callback)

    def activate(self, record_id: int) -> VectorRecord:
        """
        Select a record by id and notify activation callbacks.

        Raises:
            ValueError: If the id is not in the current batch
        """
        record = self.get_record(record_id)
        self.selection.select(record_id)
        for callback in list(self._activation_callbacks):
            callback(record)
        return record

    def get_record(self, record_id: int) -> VectorRecord:
        if record_id not in self._id_to_idx:
            raise ValueError(f"Record not found: {record_id}")
        return self._records[self._id_to_idx[record_id]]

    def get_point(self, record_id: int) -> Optional[ProjectedPoint]:
        for point in self.points:
            if point.id == record_id:
                return point
        return None

    def _build_id_index(self) -> None:
        self._id_to_idx = {record.id: idx for idx, record in enumerate(self._records)}

    # -------------------------------------------------------------------------
    # Utility
    # -------------------------------------------------------------------------

    @property
    def records(self) -> list[VectorRecord]:
        return list(self._records)

    @property
    def search_results(self) -> list[SearchResult]:
        return list(self._results)

    @property
    def has_search(self) -> bool:
        return bool(self._results) or self._query is not None

    @property
    def n_records(self) -> int:
        return len(self._records)

    @property
    def dimension(self) -> Optional[int]:
        """Declared dimension, or the first record's length."""
        if self._dimension is not None:
            return self._dimension
        return self._records[0].dimension if self._records else None
