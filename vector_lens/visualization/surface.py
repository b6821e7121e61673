"""
Drawing surfaces for the layered renderer.
Coordinates are device units with the origin at the top left.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

import plotly.graph_objects as go

import config

Point = tuple[float, float]
Segment = tuple[float, float, float, float]


class DrawingSurface(ABC):
    """
    Abstract 2D drawing target.

    Calls are painted in the order they are made, so later calls cover
    earlier ones.
    """

    width: float
    height: float

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        """Fill an axis-aligned rectangle whose top-left corner is (x, y)."""
        pass

    @abstractmethod
    def lines(self, segments: Iterable[Segment], color: str, width: float = 1.0) -> None:
        """Stroke straight segments given as (x0, y0, x1, y1)."""
        pass

    @abstractmethod
    def circles(
        self,
        centers: Sequence[Point],
        radius: float,
        fill: Optional[str] = None,
        stroke: Optional[str] = None,
        stroke_width: float = 0.0
    ) -> None:
        """Draw circles of one radius, filled and/or outlined."""
        pass

    @abstractmethod
    def polygon(
        self,
        vertices: Sequence[Point],
        fill: str,
        stroke: Optional[str] = None,
        stroke_width: float = 0.0
    ) -> None:
        """Fill a closed polygon."""
        pass

    @abstractmethod
    def text(
        self,
        x: float,
        y: float,
        text: str,
        color: str,
        size: float,
        align: str = "left"
    ) -> None:
        """Draw a single line of text anchored at (x, y)."""
        pass

    def targets(self, ids: Sequence[int], centers: Sequence[Point], labels: Sequence[str]) -> None:
        """Register clickable point positions. Surfaces without input ignore this."""
        return None


class PlotlySurface(DrawingSurface):
    """
    Surface that builds a Plotly figure in device pixel space.

    Every call becomes one trace, so the paint order is the trace order.
    The y axis is reversed to match device coordinates.
    """

    def __init__(
        self,
        width: float = config.PLOT_WIDTH,
        height: float = config.PLOT_HEIGHT
    ):
        """
        Initialize the surface.

        Args:
            width: Figure width in pixels
            height: Figure height in pixels
        """
        self.width = width
        self.height = height
        self._traces: list[go.Scatter] = []

    def fill_rect(self, x, y, width, height, color):
        self._traces.append(go.Scatter(
            x=[x, x + width, x + width, x, x],
            y=[y, y, y + height, y + height, y],
            mode="lines",
            fill="toself",
            fillcolor=color,
            line=dict(width=0, color=color),
            hoverinfo="skip",
            showlegend=False,
        ))

    def lines(self, segments, color, width=1.0):
        xs: list[Optional[float]] = []
        ys: list[Optional[float]] = []
        for x0, y0, x1, y1 in segments:
            # None breaks the polyline between segments
            xs.extend([x0, x1, None])
            ys.extend([y0, y1, None])
        self._traces.append(go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line=dict(color=color, width=width),
            hoverinfo="skip",
            showlegend=False,
        ))

    def circles(self, centers, radius, fill=None, stroke=None, stroke_width=0.0):
        if len(centers) == 0:
            return
        self._traces.append(go.Scatter(
            x=[c[0] for c in centers],
            y=[c[1] for c in centers],
            mode="markers",
            marker=dict(
                symbol="circle" if fill else "circle-open",
                size=2 * radius,
                color=fill or stroke,
                line=dict(color=stroke or fill, width=stroke_width),
            ),
            hoverinfo="skip",
            showlegend=False,
        ))

    def polygon(self, vertices, fill, stroke=None, stroke_width=0.0):
        closed = list(vertices) + [vertices[0]]
        self._traces.append(go.Scatter(
            x=[v[0] for v in closed],
            y=[v[1] for v in closed],
            mode="lines",
            fill="toself",
            fillcolor=fill,
            line=dict(color=stroke or fill, width=stroke_width),
            hoverinfo="skip",
            showlegend=False,
        ))

    def text(self, x, y, text, color, size, align="left"):
        position = {"left": "middle right", "center": "middle center", "right": "middle left"}[align]
        self._traces.append(go.Scatter(
            x=[x],
            y=[y],
            mode="text",
            text=[text],
            textposition=position,
            textfont=dict(color=color, size=size),
            hoverinfo="skip",
            showlegend=False,
        ))

    def targets(self, ids, centers, labels):
        if len(ids) == 0:
            return
        self._traces.append(go.Scatter(
            x=[c[0] for c in centers],
            y=[c[1] for c in centers],
            mode="markers",
            marker=dict(size=config.HIT_RADIUS, color="rgba(0,0,0,0)"),
            customdata=list(ids),
            text=list(labels),
            hovertemplate="%{text}<extra></extra>",
            showlegend=False,
            name="points",
        ))

    @property
    def n_traces(self) -> int:
        return len(self._traces)

    def to_figure(self) -> go.Figure:
        """Assemble the accumulated traces into a figure."""
        fig = go.Figure(data=self._traces)
        fig.update_layout(
            width=self.width,
            height=self.height,
            template="plotly_dark",
            paper_bgcolor=config.COLORS["background"],
            plot_bgcolor=config.COLORS["background"],
            showlegend=False,
            margin=dict(l=0, r=0, t=0, b=0),
            xaxis=dict(
                range=[0, self.width],
                showgrid=False,
                showticklabels=False,
                zeroline=False,
                fixedrange=True,
                title="",
            ),
            yaxis=dict(
                range=[self.height, 0],
                showgrid=False,
                showticklabels=False,
                zeroline=False,
                fixedrange=True,
                title="",
            ),
            hovermode="closest",
            dragmode=False,
        )
        return fig
