"""
Vector-Lens: Embedding Projection Explorer
Main Streamlit application.

Run with: streamlit run app.py
"""

import logging

import streamlit as st

from vector_lens.core.exceptions import LoaderError
from vector_lens.core.explorer import ExplorerSession
from vector_lens.core.projector import PowerIterationProjector
from vector_lens.core.vector_store import VectorStore
from vector_lens.loaders import get_loader
from vector_lens.ui import AppState, init_session_state, inject_styles, render_header
from vector_lens.ui import details, docs, main_view, sidebar
from vector_lens.ui.styles import render_error
import config

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Vector-Lens",
    page_icon="🔭",
    layout="wide",
    initial_sidebar_state="expanded"
)

inject_styles()
init_session_state()


# -----------------------------------------------------------------------------
# Data Loading - Cached to survive refreshes
# -----------------------------------------------------------------------------

@st.cache_resource(show_spinner=False)
def get_vector_store(dataset_key: str) -> VectorStore:
    """Create (once per dataset) the store for a registered dataset."""
    dataset_config = config.AVAILABLE_DATASETS[dataset_key]
    loader = get_loader(dataset_config["loader"])
    return VectorStore(loader)


def get_or_create_explorer(vs: VectorStore) -> ExplorerSession:
    """
    Keep one ExplorerSession per dataset in session state.

    A changed sample size swaps the batch on the existing session, so zoom,
    pan and the active search survive.
    """
    key = f"{st.session_state.current_dataset}:{st.session_state.sample_limit}"
    session = st.session_state.explorer
    sample = vs.get_sample(st.session_state.sample_limit)

    if session is None:
        session = ExplorerSession(
            sample,
            dimension=vs.dimension,
            projector=PowerIterationProjector(),
        )
        session.on_point_activated(
            lambda record: logger.info(f"Activated vector {record.id}")
        )
        st.session_state.explorer = session
    elif st.session_state.explorer_key != key:
        session.set_records(sample, dimension=vs.dimension)

    st.session_state.explorer_key = key
    return session


# -----------------------------------------------------------------------------
# Main Application
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    render_header()

    tab_explore, tab_methodology = st.tabs(["🔍 Explore", "📚 Methodology"])

    with tab_explore:
        vs = get_vector_store(st.session_state.current_dataset)

        if not vs.is_initialized:
            try:
                with st.spinner("Loading vectors..."):
                    vs.initialize()
            except (LoaderError, ValueError) as e:
                logger.exception("Loading failed")
                render_error(f"Could not load dataset: {e}")
                st.cache_resource.clear()
                st.stop()

        session = get_or_create_explorer(vs)

        sidebar.render_sidebar(vs, session)

        if AppState.has_error():
            render_error(st.session_state.last_error)

        main_view.render_search_bar(vs)
        main_view.render_search_banner(session)

        col_viz, col_details = st.columns([3, 2])

        with col_viz:
            st.markdown("### Embedding Space")
            if session.n_records == 0:
                main_view.render_empty_state()
            else:
                main_view.render_view_controls(session)
                try:
                    main_view.render_visualization(session)
                except ValueError as e:
                    logger.exception("Projection failed")
                    render_error(f"Projection failed: {e}")

        with col_details:
            details.render_record_details(vs, session)

    with tab_methodology:
        docs.render_methodology_tab()


if __name__ == "__main__":
    main()
