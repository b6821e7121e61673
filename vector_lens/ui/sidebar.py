"""Sidebar UI components for Vector-Lens."""

import json
import logging
import streamlit as st
from typing import TYPE_CHECKING, Any, Optional

from vector_lens.ui.state import AppState
import config

if TYPE_CHECKING:
    from vector_lens.core.explorer import ExplorerSession
    from vector_lens.core.vector_store import VectorStore

logger = logging.getLogger(__name__)

MAX_BROWSE_ITEMS = 500


def render_sidebar(vs: "VectorStore", session: "ExplorerSession") -> None:
    """Render the complete sidebar."""
    with st.sidebar:
        render_dataset_switcher()
        st.markdown("---")
        render_sample_limit()
        st.markdown("---")
        render_dataset_info(vs, session)
        st.markdown("---")
        render_search_settings()
        st.markdown("---")
        render_browse_records(session)
        st.markdown("---")
        render_insert_vector(vs, session)


def render_dataset_switcher() -> None:
    """Render dataset selector radio buttons."""
    st.markdown("### Dataset")

    available = []
    for key, cfg in config.AVAILABLE_DATASETS.items():
        try:
            if cfg["data_check"]():
                available.append((key, cfg["label"], cfg.get("description", "")))
        except OSError as e:
            logger.debug(f"Dataset {key} check failed: {e}")

    if not available:
        st.warning("No datasets found. Add data to the data/ folder.")
        return

    current = st.session_state.current_dataset
    valid_keys = [k for k, _, _ in available]

    if current not in valid_keys:
        current = available[0][0]
        st.session_state.current_dataset = current

    labels = {k: l for k, l, _ in available}
    selected = st.radio(
        "Select dataset:",
        valid_keys,
        format_func=lambda x: labels[x],
        index=valid_keys.index(current),
        key="dataset_radio",
        help="Switch between vector collections",
    )

    if selected != current:
        st.session_state.current_dataset = selected
        AppState.reset_for_dataset_change()
        st.rerun()


def render_sample_limit() -> None:
    """Render control for how many vectors are projected."""
    st.markdown("### Sample Size")

    current = st.session_state.sample_limit
    load_all = st.checkbox(
        "Show all vectors",
        value=current is None,
        help="Project every vector (slower for large collections)",
    )

    new_limit = None
    if not load_all:
        new_limit = st.slider(
            "Max vectors to show:",
            min_value=10,
            max_value=2000,
            value=current or config.DEFAULT_SAMPLE_LIMIT,
            step=10,
        )

    if new_limit != current:
        st.session_state.sample_limit = new_limit
        # Keeps the search; only the batch changes
        st.session_state.explorer_key = None
        st.rerun()


def render_dataset_info(vs: "VectorStore", session: "ExplorerSession") -> None:
    """Render dataset info section."""
    st.markdown("### Collection")
    st.markdown(f"**Vectors:** {vs.n_records:,}")
    st.markdown(f"**Shown:** {session.n_records:,}")
    st.markdown(f"**Dimensions:** {vs.dimension}")
    st.markdown(f"**Metric:** {vs.metric}")
    st.markdown(f"**Projections run:** {session.projection_count}")


def render_search_settings() -> None:
    """Render number-of-results control."""
    st.markdown("### Search")
    st.session_state.search_k = st.number_input(
        "Results (k):",
        min_value=1,
        max_value=100,
        value=st.session_state.search_k,
        step=1,
    )


def render_browse_records(session: "ExplorerSession") -> None:
    """Render record browser dropdown."""
    st.markdown("### Browse Vectors")

    records = session.records
    if len(records) > MAX_BROWSE_ITEMS:
        st.caption(f"Showing first {MAX_BROWSE_ITEMS} of {len(records):,} vectors")
    browse = records[:MAX_BROWSE_ITEMS]

    options = [None] + [r.id for r in browse]
    current = session.selection.selected_id
    selected = st.selectbox(
        "Select vector:",
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda x: "-- Select a vector --" if x is None else _format_record_label(session, x),
    )

    if selected is not None and selected != current:
        session.activate(selected)
        session.interaction.set_hover(session.get_point(selected))
        st.rerun()


def _format_record_label(session: "ExplorerSession", record_id: int) -> str:
    """Format a single record for the dropdown."""
    metadata = session.get_record(record_id).metadata or {}
    preview = metadata.get("text_preview") or metadata.get("source")
    if preview:
        preview = str(preview)[:40]
        return f"#{record_id} ({preview})"
    return f"#{record_id}"


def render_insert_vector(vs: "VectorStore", session: "ExplorerSession") -> None:
    """Render the form that adds a vector to the collection."""
    st.markdown("### Insert Vector")

    with st.form("insert_vector", clear_on_submit=True):
        text = st.text_area(
            "Vector JSON",
            placeholder='{"vector": [0.1, 0.2], "metadata": {"text_preview": "note"}}',
            height=100,
        )
        submitted = st.form_submit_button("Insert", use_container_width=True)

    if not submitted:
        return

    parsed = _parse_insert_json(text)
    if parsed is None:
        st.error("Expected a JSON array of numbers or an object with a 'vector' array")
        return

    vector, metadata = parsed
    try:
        record = vs.insert_record(vector, metadata)
    except ValueError as e:
        st.error(str(e))
        return

    session.set_records(vs.get_sample(st.session_state.sample_limit), dimension=vs.dimension)
    st.toast(f"Inserted vector #{record.id}")
    st.rerun()


def _parse_insert_json(text: str) -> Optional[tuple[list[float], Optional[dict[str, Any]]]]:
    """
    Read an insert payload: a bare numeric array, or an object with
    ``vector`` and optional ``metadata``.
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return None

    metadata = None
    if isinstance(value, dict):
        metadata = value.get("metadata")
        value = value.get("vector")
        if metadata is not None and not isinstance(metadata, dict):
            return None

    if not isinstance(value, list) or not value or not all(
        isinstance(x, (int, float)) and not isinstance(x, bool) for x in value
    ):
        return None
    return [float(x) for x in value], metadata
