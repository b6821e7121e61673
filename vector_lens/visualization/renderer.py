"""
Layered renderer for the projection surface.
Paints background, grid, points, matches, query, hover and legend in order.
"""

import json
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from vector_lens.core.types import ProjectedPoint
from vector_lens.core.view_transform import ViewTransform, grid_lines
from vector_lens.visualization.surface import DrawingSurface
import config

Device = tuple[float, float]


@dataclass
class RenderFrame:
    """
    Everything one redraw needs, already in device space.

    Layers read from the frame and never from each other.
    """
    transform: ViewTransform
    ordinary: list[tuple[ProjectedPoint, Device]] = field(default_factory=list)
    matches: list[tuple[ProjectedPoint, Device]] = field(default_factory=list)
    query: Optional[Device] = None
    hover: Optional[tuple[ProjectedPoint, Device]] = None

    @classmethod
    def build(
        cls,
        points: Sequence[ProjectedPoint],
        transform: ViewTransform,
        query_point: Optional[Sequence[float]] = None,
        hover: Optional[ProjectedPoint] = None
    ) -> "RenderFrame":
        """
        Map points into device space and split them by layer.

        Args:
            points: Projected points in data space
            transform: Transform for this frame
            query_point: Optional query position in data space
            hover: Optional hovered point

        Returns:
            RenderFrame ready for LayeredRenderer
        """
        frame = cls(transform=transform)
        if points:
            device = transform.points_to_device(np.array([(p.x, p.y) for p in points]))
            for point, xy in zip(points, device):
                entry = (point, (float(xy[0]), float(xy[1])))
                if point.is_search_result:
                    frame.matches.append(entry)
                else:
                    frame.ordinary.append(entry)
        if query_point is not None:
            frame.query = transform.to_device(query_point)
        if hover is not None:
            frame.hover = (hover, transform.to_device((hover.x, hover.y)))
        return frame

    @property
    def zoom(self) -> float:
        return self.transform.zoom

    @property
    def width(self) -> float:
        return self.transform.viewport.width

    @property
    def height(self) -> float:
        return self.transform.viewport.height

    @property
    def is_empty(self) -> bool:
        return not self.ordinary and not self.matches

    def all_points(self) -> list[tuple[ProjectedPoint, Device]]:
        return self.ordinary + self.matches


class LayeredRenderer:
    """
    Paints a RenderFrame onto a DrawingSurface.

    Layer order (later covers earlier):
    1. background
    2. reference grid
    3. ordinary points
    4. search matches with halo and score
    5. query diamond
    6. hover ring and info panel
    7. legend
    """

    LAYERS = (
        "background",
        "grid",
        "points",
        "matches",
        "query",
        "hover",
        "legend",
    )

    def __init__(self, colors: Optional[dict[str, str]] = None):
        self.colors = {**config.COLORS, **(colors or {})}

    def render(self, surface: DrawingSurface, frame: RenderFrame) -> DrawingSurface:
        """
        Draw every layer in order.

        An empty frame gets the background and a "no data" message only.

        Returns:
            The same surface, for chaining
        """
        self.draw_background(surface, frame)
        if frame.is_empty:
            self.draw_empty_message(surface, frame)
            return surface

        self.draw_grid(surface, frame)
        self.draw_points(surface, frame)
        self.draw_matches(surface, frame)
        self.draw_query(surface, frame)
        self.draw_hover(surface, frame)
        self.draw_legend(surface, frame)

        entries = frame.all_points()
        surface.targets(
            [p.id for p, _ in entries],
            [xy for _, xy in entries],
            [_target_label(p) for p, _ in entries],
        )
        return surface

    def draw_background(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        surface.fill_rect(0, 0, frame.width, frame.height, self.colors["background"])

    def draw_empty_message(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        surface.text(
            frame.width / 2, frame.height / 2,
            "No vectors to display",
            self.colors["empty_text"], 12, align="center",
        )

    def draw_grid(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        # Fixed to the viewport, not to the data
        surface.lines(grid_lines(frame.transform.viewport), self.colors["grid"], 1)

    def draw_points(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        if not frame.ordinary:
            return
        surface.circles(
            [xy for _, xy in frame.ordinary],
            config.POINT_RADIUS * frame.zoom,
            fill=self.colors["vector"],
        )

    def draw_matches(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        if not frame.matches:
            return
        zoom = frame.zoom
        centers = [xy for _, xy in frame.matches]
        surface.circles(centers, config.MATCH_HALO_RADIUS * zoom, fill=self.colors["match_halo"])
        surface.circles(centers, config.MATCH_RADIUS * zoom, fill=self.colors["match"])

        for point, (x, y) in frame.matches:
            if point.score is None:
                continue
            surface.text(
                x + 8 * zoom, y + 3 * zoom,
                f"{point.score:.3f}",
                self.colors["label"], 10 * zoom,
            )

    def draw_query(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        if frame.query is None:
            return
        x, y = frame.query
        zoom = frame.zoom
        size = config.QUERY_SIZE * zoom
        surface.polygon(
            [(x, y - size), (x + size, y), (x, y + size), (x - size, y)],
            fill=self.colors["query"],
            stroke=self.colors["outline"],
            stroke_width=2,
        )
        surface.text(x + 12 * zoom, y + 4 * zoom, "Query", self.colors["label"], 11 * zoom)

    def draw_hover(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        if frame.hover is None:
            return
        point, (x, y) = frame.hover
        surface.circles(
            [(x, y)],
            config.HOVER_RING_RADIUS * frame.zoom,
            stroke=self.colors["outline"],
            stroke_width=2,
        )

        # Keep the panel inside the viewport
        info_x, info_y = info_panel_origin((x, y), frame.width, frame.height)
        surface.fill_rect(
            info_x, info_y,
            config.INFO_PANEL_WIDTH, config.INFO_PANEL_HEIGHT,
            self.colors["panel"],
        )
        for offset, line in zip((18, 34, 50), info_panel_lines(point)):
            surface.text(info_x + 8, info_y + offset, line, self.colors["label"], 12)

    def draw_legend(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        y = frame.height - 30
        text_color = self.colors["legend_text"]

        surface.circles([(20, y)], 4, fill=self.colors["vector"])
        surface.text(30, y + 4, "Vector", text_color, 11)

        surface.circles([(100, y)], 4, fill=self.colors["match"])
        surface.text(110, y + 4, "Match", text_color, 11)

        surface.polygon(
            [(180, y - 5), (185, y), (180, y + 5), (175, y)],
            fill=self.colors["query"],
        )
        surface.text(195, y + 4, "Query", text_color, 11)


def info_panel_origin(anchor: Device, viewport_width: float, viewport_height: float) -> Device:
    """Top-left corner of the hover panel next to ``anchor``, kept inside the viewport."""
    x, y = anchor
    x = min(x + 15, viewport_width - config.INFO_PANEL_WIDTH - 10)
    y = max(y - 60, 10)
    return (max(x, 0.0), min(y, viewport_height - config.INFO_PANEL_HEIGHT))


def info_panel_lines(point: ProjectedPoint) -> list[str]:
    """Id, dimension count and a short metadata preview."""
    lines = [f"ID: {point.id}", f"Dims: {point.dimension}"]
    if point.metadata:
        preview = json.dumps(point.metadata, separators=(",", ":"), default=str)
        lines.append(preview[:config.METADATA_PREVIEW_CHARS] + "...")
    return lines


def _target_label(point: ProjectedPoint) -> str:
    label = f"<b>#{point.id}</b>"
    if point.score is not None:
        label += f"<br>score {point.score:.3f}"
    return label
