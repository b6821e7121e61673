"""Tests for the layered renderer and the Plotly surface."""

import pytest

import config
from vector_lens.core.types import ProjectedPoint, ViewState
from vector_lens.core.view_transform import ViewTransform, Viewport
from vector_lens.visualization.renderer import (
    LayeredRenderer,
    RenderFrame,
    info_panel_lines,
    info_panel_origin,
)
from vector_lens.visualization.surface import PlotlySurface


def _point(x, y, pid, match=False, score=None, metadata=None):
    return ProjectedPoint(x, y, pid, metadata, match, score, (0.1, 0.2, 0.3))


@pytest.fixture
def points():
    return [
        _point(0.0, 0.0, 1),
        _point(1.0, 1.0, 2, match=True, score=0.91234),
        _point(2.0, 0.5, 3),
        _point(0.5, 2.0, 4, match=True, score=0.5),
    ]


def _frame(points, zoom=1.0, query=None, hover=None):
    viewport = Viewport(800, 500)
    transform = ViewTransform.fit(points, viewport, ViewState(zoom=zoom), query_point=query)
    return RenderFrame.build(points, transform, query_point=query, hover=hover)


def _first_index(calls, predicate):
    return next(i for i, call in enumerate(calls) if predicate(*call))


class TestRenderFrame:

    def test_splits_matches_from_ordinary(self, points):
        frame = _frame(points)
        assert [p.id for p, _ in frame.ordinary] == [1, 3]
        assert [p.id for p, _ in frame.matches] == [2, 4]
        assert frame.query is None
        assert frame.hover is None

    def test_positions_follow_transform(self, points):
        frame = _frame(points, zoom=2.0)
        point, xy = frame.ordinary[0]
        assert xy == pytest.approx(frame.transform.to_device((point.x, point.y)))

    def test_empty(self):
        assert _frame([]).is_empty


class TestLayeredRenderer:

    def test_empty_frame_draws_message_only(self, recording_surface):
        LayeredRenderer().render(recording_surface, _frame([]))
        names = [name for name, _ in recording_surface.calls]
        assert names == ["fill_rect", "text"]
        assert recording_surface.texts() == ["No vectors to display"]

    def test_layer_order(self, points, recording_surface):
        colors = config.COLORS
        frame = _frame(points, query=(1.5, 1.5), hover=points[0])
        LayeredRenderer().render(recording_surface, frame)
        calls = recording_surface.calls

        background = _first_index(calls, lambda n, kw: n == "fill_rect" and kw["color"] == colors["background"])
        grid = _first_index(calls, lambda n, kw: n == "lines")
        ordinary = _first_index(calls, lambda n, kw: n == "circles" and kw["fill"] == colors["vector"])
        halo = _first_index(calls, lambda n, kw: n == "circles" and kw["fill"] == colors["match_halo"])
        match = _first_index(calls, lambda n, kw: n == "circles" and kw["fill"] == colors["match"])
        query = _first_index(calls, lambda n, kw: n == "polygon" and kw["fill"] == colors["query"])
        ring = _first_index(calls, lambda n, kw: n == "circles" and kw["fill"] is None)
        panel = _first_index(calls, lambda n, kw: n == "fill_rect" and kw["color"] == colors["panel"])
        legend = _first_index(calls, lambda n, kw: n == "text" and kw["text"] == "Vector")

        assert background < grid < ordinary < halo < match < query < ring < panel < legend
        assert calls[-1][0] == "targets"

    def test_targets_carry_ids(self, points, recording_surface):
        LayeredRenderer().render(recording_surface, _frame(points))
        name, kw = recording_surface.calls[-1]
        assert name == "targets"
        assert sorted(kw["ids"]) == [1, 2, 3, 4]

    def test_score_labels(self, points, recording_surface):
        LayeredRenderer().render(recording_surface, _frame(points))
        texts = recording_surface.texts()
        assert "0.912" in texts
        assert "0.500" in texts

    def test_match_without_score_has_no_label(self, recording_surface):
        pts = [_point(0, 0, 1), _point(1, 1, 2, match=True)]
        LayeredRenderer().render(recording_surface, _frame(pts))
        assert recording_surface.texts() == ["Vector", "Match", "Query"]

    def test_marker_sizes_scale_with_zoom(self, points, recording_surface):
        LayeredRenderer().render(recording_surface, _frame(points, zoom=2.0))
        radii = [kw["radius"] for name, kw in recording_surface.calls
                 if name == "circles" and kw["fill"] == config.COLORS["vector"]]
        assert radii[0] == config.POINT_RADIUS * 2.0

    def test_no_query_layer_without_query(self, points, recording_surface):
        LayeredRenderer().render(recording_surface, _frame(points))
        assert "Query" in recording_surface.texts()  # legend entry only
        polygons = [kw for name, kw in recording_surface.calls if name == "polygon"]
        assert len(polygons) == 1

    def test_query_label(self, points, recording_surface):
        LayeredRenderer().render(recording_surface, _frame(points, query=(1.0, 0.0)))
        assert recording_surface.texts().count("Query") == 2

    def test_hover_panel_text(self, recording_surface):
        pts = [_point(0, 0, 7, metadata={"text_preview": "hello world"}), _point(1, 1, 8)]
        LayeredRenderer().render(recording_surface, _frame(pts, hover=pts[0]))
        texts = recording_surface.texts()
        assert "ID: 7" in texts
        assert "Dims: 3" in texts

    def test_color_override(self, points, recording_surface):
        LayeredRenderer(colors={"vector": "#ff0000"}).render(recording_surface, _frame(points))
        fills = [kw["fill"] for name, kw in recording_surface.calls if name == "circles"]
        assert "#ff0000" in fills


class TestInfoPanel:

    def test_origin_beside_anchor(self):
        assert info_panel_origin((100, 200), 800, 500) == (115, 140)

    def test_origin_clamped_to_right_edge(self):
        assert info_panel_origin((790, 200), 800, 500) == (620, 140)

    def test_origin_clamped_to_top(self):
        assert info_panel_origin((100, 20), 800, 500) == (115, 10)

    def test_origin_clamped_to_left_and_bottom(self):
        x, y = info_panel_origin((-60.0, 540.0), 800, 500)
        assert x == 0.0
        assert y + config.INFO_PANEL_HEIGHT <= 500

    def test_lines_truncate_metadata(self):
        point = _point(0, 0, 5, metadata={"text_preview": "hello world"})
        lines = info_panel_lines(point)
        assert lines[0] == "ID: 5"
        assert lines[1] == "Dims: 3"
        assert lines[2] == '{"text_preview":"hel...'

    def test_lines_without_metadata(self):
        assert info_panel_lines(_point(0, 0, 5)) == ["ID: 5", "Dims: 3"]


class TestPlotlySurface:

    def test_one_trace_per_call_in_order(self, points):
        surface = PlotlySurface(800, 500)
        LayeredRenderer().render(surface, _frame(points))
        fig = surface.to_figure()
        assert len(fig.data) == surface.n_traces
        # Background first, click targets last
        assert fig.data[0].fill == "toself"
        assert list(fig.data[-1].customdata) == [1, 3, 2, 4]

    def test_device_axes(self):
        surface = PlotlySurface(640, 480)
        surface.fill_rect(0, 0, 640, 480, "#000000")
        fig = surface.to_figure()
        assert list(fig.layout.xaxis.range) == [0, 640]
        assert list(fig.layout.yaxis.range) == [480, 0]

    def test_empty_circles_skipped(self):
        surface = PlotlySurface()
        surface.circles([], 4, fill="#fff")
        surface.targets([], [], [])
        assert surface.n_traces == 0

    def test_text_alignment(self):
        surface = PlotlySurface()
        surface.text(10, 10, "a", "#fff", 12)
        surface.text(10, 10, "b", "#fff", 12, align="center")
        fig = surface.to_figure()
        assert fig.data[0].textposition == "middle right"
        assert fig.data[1].textposition == "middle center"
