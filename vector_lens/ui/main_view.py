"""Main view UI components (search, view controls, projection surface)."""

import json
import logging
import streamlit as st
from typing import TYPE_CHECKING, Optional

from vector_lens.core.view_transform import Viewport
from vector_lens.visualization.renderer import LayeredRenderer, RenderFrame
from vector_lens.visualization.surface import PlotlySurface
from vector_lens.ui.state import AppState
import config

if TYPE_CHECKING:
    from vector_lens.core.explorer import ExplorerSession
    from vector_lens.core.vector_store import VectorStore

logger = logging.getLogger(__name__)

SEARCH_MODES = ("Text", "Vector JSON", "Random")


def render_search_bar(vs: "VectorStore") -> None:
    """Render search input and handle search action."""
    mode = st.radio(
        "Search mode",
        SEARCH_MODES,
        horizontal=True,
        key="search_mode",
        label_visibility="collapsed",
    )

    col1, col2 = st.columns([4, 1])

    with col1:
        if mode == "Text":
            query = st.text_input(
                "Search text",
                placeholder="Words are hashed into a vector of the collection's dimension...",
                key="search_text",
                label_visibility="collapsed",
            )
        elif mode == "Vector JSON":
            query = st.text_input(
                "Search vector",
                placeholder=f"[0.1, -0.2, ...] ({vs.dimension} values)",
                key="search_vector",
                label_visibility="collapsed",
            )
        else:
            query = ""
            st.caption(f"Uniform random {vs.dimension}-D query vector")

    with col2:
        search_clicked = st.button("Search", type="primary", use_container_width=True)

    if search_clicked:
        _perform_search(vs, mode, query.strip())


def _perform_search(vs: "VectorStore", mode: str, query: str) -> None:
    """Execute search and update state."""
    k = st.session_state.search_k

    try:
        if mode == "Text":
            if not query:
                st.warning("Please enter search text")
                return
            results, query_vector = vs.search_text(query, k=k)
            label = f'"{query}"'
        elif mode == "Vector JSON":
            query_vector = _parse_vector_json(query)
            if query_vector is None:
                st.warning("Search vector must be a JSON array of numbers")
                return
            results = vs.search(query_vector, k=k)
            label = f"vector ({len(query_vector)}D)"
        else:
            query_vector = vs.random_query()
            results = vs.search(query_vector, k=k)
            label = "random vector"

        AppState.set_search(results, query_vector, label)
        AppState.clear_error()
    except ValueError as e:
        st.error(str(e))
    except Exception as e:
        logger.exception("Search failed")
        st.error(f"Search failed: {e}")


def _parse_vector_json(text: str) -> Optional[list[float]]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(value, list) or not all(
        isinstance(x, (int, float)) and not isinstance(x, bool) for x in value
    ):
        return None
    return [float(x) for x in value]


def render_search_banner(session: "ExplorerSession") -> None:
    """Show the active search and a clear button."""
    if not session.has_search:
        return

    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(
            f'<div class="vl-search-banner">{len(session.search_results)} results for '
            f'{st.session_state.search_label} (green = matches)</div>',
            unsafe_allow_html=True,
        )
    with col2:
        if st.button("Clear", use_container_width=True):
            AppState.clear_search()
            st.rerun()


def render_view_controls(session: "ExplorerSession") -> None:
    """Render zoom and pan buttons."""
    interaction = session.interaction
    step = config.PAN_STEP

    cols = st.columns(9)
    actions = [
        ("＋", "Zoom in", interaction.zoom_in),
        ("－", "Zoom out", interaction.zoom_out),
        ("⤢", "Wheel up", lambda: interaction.wheel(-1)),
        ("⤡", "Wheel down", lambda: interaction.wheel(1)),
        ("←", "Pan left", lambda: interaction.pan_by(-step, 0)),
        ("→", "Pan right", lambda: interaction.pan_by(step, 0)),
        ("↑", "Pan up", lambda: interaction.pan_by(0, -step)),
        ("↓", "Pan down", lambda: interaction.pan_by(0, step)),
        ("⟲", "Reset view", interaction.reset),
    ]
    for col, (label, help_text, action) in zip(cols, actions):
        with col:
            if st.button(label, help=help_text, key=f"view_{help_text}", use_container_width=True):
                action()
                st.rerun()


def render_visualization(session: "ExplorerSession") -> None:
    """Render the projection surface."""
    viewport = Viewport(config.PLOT_WIDTH, config.PLOT_HEIGHT)

    points = session.points
    transform = session.transform(viewport)
    frame = RenderFrame.build(
        points,
        transform,
        query_point=session.query_point,
        hover=session.interaction.hover,
    )

    surface = PlotlySurface(viewport.width, viewport.height)
    LayeredRenderer().render(surface, frame)

    view = session.interaction.view_state
    st.markdown(
        f'<span class="vl-status">PCA 2D • {session.n_records} vecs • '
        f'{session.dimension or "?"}D • zoom {view.zoom:.2f}</span>',
        unsafe_allow_html=True,
    )

    selection = st.plotly_chart(
        surface.to_figure(),
        use_container_width=False,
        key="projection_plot",
        on_select="rerun",
        selection_mode="points",
    )
    _handle_point_selection(session, selection)


def _handle_point_selection(session: "ExplorerSession", selection) -> None:
    """Activate the clicked point, making it the hover target."""
    if not selection or "selection" not in selection:
        return
    points = selection["selection"].get("points", [])
    ids = []
    for point in points:
        customdata = point.get("customdata")
        if customdata is None:
            continue
        if isinstance(customdata, (list, tuple)):
            customdata = customdata[0]
        try:
            ids.append(int(customdata))
        except (ValueError, TypeError):
            pass

    if not ids:
        st.session_state.last_plot_click = None
        return
    # Plotly keeps the selection across reruns; only react to a new click
    if ids[0] == st.session_state.last_plot_click:
        return
    st.session_state.last_plot_click = ids[0]

    try:
        session.activate(ids[0])
    except ValueError:
        logger.debug(f"Clicked point {ids[0]} is no longer in the batch")
        return
    session.interaction.set_hover(session.get_point(ids[0]))
    st.rerun()


def render_empty_state() -> None:
    """Render the no-data message."""
    st.info("No vectors to display. Pick another dataset or add data to the data/ folder.")
