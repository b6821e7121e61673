"""
Pointer and zoom interaction for the projection surface.
Owns the ViewState and hover target; transforms and hit-tests are pure.
"""

import logging
import math
from enum import Enum
from typing import Callable, Optional, Sequence

from vector_lens.core.types import ProjectedPoint, ViewState, clamp_zoom
from vector_lens.core.view_transform import ViewTransform
import config

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def hit_test(
    pointer: tuple[float, float],
    points: Sequence[ProjectedPoint],
    transform: ViewTransform,
    radius: float = config.HIT_RADIUS
) -> Optional[ProjectedPoint]:
    """
    Find the point nearest to the pointer in device space.

    Args:
        pointer: Pointer position in device units
        points: Candidate points in data space
        transform: Mapping used for drawing the current frame
        radius: Base hit distance, multiplied by the current zoom

    Returns:
        Closest point strictly within ``radius * zoom``, or None. On equal
        distances the earlier point in ``points`` wins.
    """
    if not points:
        return None

    device = transform.points_to_device([(p.x, p.y) for p in points])
    px, py = pointer

    closest = None
    closest_dist = radius * transform.zoom
    for point, (dx, dy) in zip(points, device):
        dist = math.hypot(px - dx, py - dy)
        if dist < closest_dist:
            closest_dist = dist
            closest = point
    return closest


class InteractionController:
    """
    Drag/zoom/hover state machine.

    States:
    - IDLE: pointer moves update the hover target
    - DRAGGING: pointer moves update the pan offset

    Zoom is always clamped to [ZOOM_MIN, ZOOM_MAX].
    """

    def __init__(self, view_state: Optional[ViewState] = None):
        self._view = view_state or ViewState()
        self._mode = InteractionMode.IDLE
        self._anchor: tuple[float, float] = (0.0, 0.0)
        self._hover: Optional[ProjectedPoint] = None
        self._listeners: list[Callable[[ProjectedPoint], None]] = []

    @property
    def view_state(self) -> ViewState:
        return self._view

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def is_dragging(self) -> bool:
        return self._mode is InteractionMode.DRAGGING

    @property
    def hover(self) -> Optional[ProjectedPoint]:
        """Point currently under the pointer, if any."""
        return self._hover

    @property
    def zoom(self) -> float:
        return self._view.zoom

    @property
    def pan(self) -> tuple[float, float]:
        return self._view.pan

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def pointer_down(self, pos: tuple[float, float]) -> None:
        """Start dragging; the anchor keeps the grab point under the pointer."""
        pan_x, pan_y = self._view.pan
        self._anchor = (pos[0] - pan_x, pos[1] - pan_y)
        self._mode = InteractionMode.DRAGGING

    def pointer_move(
        self,
        pos: tuple[float, float],
        points: Sequence[ProjectedPoint] = (),
        transform: Optional[ViewTransform] = None
    ) -> None:
        """
        Pan while dragging, otherwise refresh the hover target.

        Args:
            pos: Pointer position in device units
            points: Current projected points (only used when idle)
            transform: Transform of the current frame (only used when idle)
        """
        if self.is_dragging:
            self._view = ViewState(self._view.zoom, (pos[0] - self._anchor[0], pos[1] - self._anchor[1]))
            return

        if transform is None:
            self._hover = None
            return
        self._hover = hit_test(pos, points, transform)

    def pointer_up(self) -> None:
        self._mode = InteractionMode.IDLE

    def pointer_leave(self) -> None:
        self._mode = InteractionMode.IDLE

    def click(self) -> Optional[ProjectedPoint]:
        """
        Activate the hovered point.

        Returns:
            The activated point, or None when nothing is hovered
        """
        point = self._hover
        if point is None:
            return None
        for listener in list(self._listeners):
            listener(point)
        return point

    def on_activate(self, listener: Callable[[ProjectedPoint], None]) -> Callable[[], None]:
        """
        Subscribe to point activation.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_hover(self, point: Optional[ProjectedPoint]) -> None:
        """Set the hover target directly (click-only frontends)."""
        self._hover = point

    # -------------------------------------------------------------------------
    # Zoom and pan controls
    # -------------------------------------------------------------------------

    def wheel(self, delta_y: float) -> float:
        """Wheel down zooms out, wheel up zooms in. Returns the new zoom."""
        factor = config.WHEEL_ZOOM_OUT if delta_y > 0 else config.WHEEL_ZOOM_IN
        return self._set_zoom(self._view.zoom * factor)

    def zoom_in(self) -> float:
        return self._set_zoom(self._view.zoom * config.BUTTON_ZOOM_STEP)

    def zoom_out(self) -> float:
        return self._set_zoom(self._view.zoom / config.BUTTON_ZOOM_STEP)

    def pan_by(self, dx: float, dy: float) -> tuple[float, float]:
        """Shift the pan offset by a device-space delta."""
        pan_x, pan_y = self._view.pan
        self._view = ViewState(self._view.zoom, (pan_x + dx, pan_y + dy))
        return self._view.pan

    def reset(self) -> None:
        """Back to zoom 1 and no pan."""
        self._view = ViewState()
        logger.debug("View reset")

    def _set_zoom(self, zoom: float) -> float:
        self._view = ViewState(clamp_zoom(zoom), self._view.pan)
        return self._view.zoom
