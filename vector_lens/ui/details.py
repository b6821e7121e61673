"""Record details and search result panel components."""

import json
import logging
import streamlit as st
from typing import TYPE_CHECKING

from vector_lens.core.types import VectorRecord
from vector_lens.ui.state import AppState

if TYPE_CHECKING:
    from vector_lens.core.explorer import ExplorerSession
    from vector_lens.core.vector_store import VectorStore

logger = logging.getLogger(__name__)

VECTOR_PREVIEW_VALUES = 10


def render_record_details(vs: "VectorStore", session: "ExplorerSession") -> None:
    """Render the selected record, search results, or a getting-started note."""
    if AppState.has_selection():
        record = session.get_record(session.selection.selected_id)
        render_record_card(vs, session, record)

    if AppState.has_search_results():
        render_search_results(session)
    elif not AppState.has_selection():
        render_getting_started()


def render_record_card(vs: "VectorStore", session: "ExplorerSession", record: VectorRecord) -> None:
    """Render one record with a delete action."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown("### Details")
    with col2:
        if st.button("✕", key="close_details", help="Close"):
            session.selection.clear()
            session.interaction.set_hover(None)
            st.rerun()

    st.markdown(f"**ID:** `{record.id}`")
    if record.created_at is not None:
        st.markdown(f"**Created:** {record.created_at:%Y-%m-%d %H:%M:%S}")

    metadata = record.metadata or {}
    if metadata.get("text_preview"):
        st.markdown("**Text:**")
        st.markdown(f'<div class="vl-card">{_escape_html(str(metadata["text_preview"]))}</div>',
                    unsafe_allow_html=True)
    if metadata:
        st.markdown("**Metadata:**")
        st.code(json.dumps(metadata, indent=2, default=str), language="json")

    st.markdown(f"**Vector ({record.dimension}D):**")
    st.code(format_vector_preview(record.vector), language="text")

    if st.button("Delete", type="primary", key=f"delete_{record.id}", use_container_width=True):
        _delete_record(vs, session, record.id)


def _delete_record(vs: "VectorStore", session: "ExplorerSession", record_id: int) -> None:
    try:
        vs.delete_record(record_id)
    except ValueError as e:
        st.error(str(e))
        return
    session.set_records(vs.get_sample(st.session_state.sample_limit), dimension=vs.dimension)
    session.selection.clear()
    st.rerun()


def render_search_results(session: "ExplorerSession") -> None:
    """Render search results list."""
    st.markdown("### Search Results")
    st.markdown(f"*Query: {st.session_state.search_label}*")

    in_batch = {r.id for r in session.records}
    for result in session.search_results:
        col1, col2 = st.columns([4, 1])
        with col1:
            label = f"#{result.id}"
            preview = (result.metadata or {}).get("text_preview")
            if preview:
                label += f"  {str(preview)[:40]}"
            if result.id not in in_batch:
                st.markdown(f"{label} *(not shown)*")
            elif st.button(label, key=f"result_{result.id}", use_container_width=True):
                session.activate(result.id)
                session.interaction.set_hover(session.get_point(result.id))
                st.rerun()
        with col2:
            st.markdown(
                f"<span class='vl-badge'>{result.score:.3f}</span>",
                unsafe_allow_html=True,
            )


def render_getting_started() -> None:
    """Render getting started guide."""
    st.markdown("""
    ### Getting Started

    **Explore:** Blue dots are vectors projected to 2D with power-iteration PCA

    **Search:** Search by text, by a JSON vector, or with a random vector;
    green dots are matches and the orange diamond is the query

    **Inspect:** Click a point to see its id, metadata and vector values

    **Navigate:** Use the zoom and pan buttons above the plot; reset returns to the fitted view
    """)


def format_vector_preview(vector, n_values: int = VECTOR_PREVIEW_VALUES) -> str:
    """First values of a vector to four decimals."""
    head = ", ".join(f"{x:.4f}" for x in list(vector)[:n_values])
    tail = ", ..." if len(vector) > n_values else ""
    return f"[{head}{tail}]"


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
