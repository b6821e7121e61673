"""
Centralized session state management for Vector-Lens.
Provides typed accessors and clear state transition methods.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import streamlit as st

import config


@dataclass
class StateDefaults:
    """Default values for all session state variables."""
    current_dataset: str = config.DEFAULT_DATASET
    sample_limit: Optional[int] = config.DEFAULT_SAMPLE_LIMIT  # None means all vectors
    search_k: int = config.DEFAULT_K_NEIGHBORS
    search_label: str = ""
    explorer: Optional[Any] = None  # ExplorerSession for the current dataset
    explorer_key: Optional[str] = None
    last_plot_click: Optional[int] = None  # id from the last handled plot selection
    last_error: Optional[str] = None


class AppState:
    """
    Wrapper around Streamlit session state with type hints and defaults.
    Provides clear API for state transitions.
    """

    @classmethod
    def init(cls, default_dataset: str = config.DEFAULT_DATASET) -> None:
        """Initialize all session state with defaults."""
        defaults = StateDefaults(current_dataset=default_dataset)
        for field_name in defaults.__dataclass_fields__:
            if field_name not in st.session_state:
                st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def reset_for_dataset_change(cls) -> None:
        """Clear transient state when switching datasets."""
        st.session_state.explorer = None
        st.session_state.explorer_key = None
        st.session_state.last_plot_click = None
        st.session_state.search_label = ""
        st.session_state.last_error = None

    @classmethod
    def set_search(cls, results: list, query: np.ndarray, label: str) -> None:
        """Hand search results and the query vector to the explorer."""
        explorer = st.session_state.explorer
        if explorer is not None:
            explorer.set_search(results, query)
        st.session_state.search_label = label

    @classmethod
    def clear_search(cls) -> None:
        explorer = st.session_state.explorer
        if explorer is not None:
            explorer.clear_search()
        st.session_state.search_label = ""

    @classmethod
    def set_error(cls, message: str) -> None:
        """Record an error for display."""
        st.session_state.last_error = message

    @classmethod
    def clear_error(cls) -> None:
        """Clear any recorded error."""
        st.session_state.last_error = None

    # Property-style accessors for common checks
    @staticmethod
    def has_selection() -> bool:
        """Check if a point is selected."""
        explorer = st.session_state.get("explorer")
        return explorer is not None and explorer.selection.has_selection

    @staticmethod
    def has_search_results() -> bool:
        """Check if search results exist."""
        explorer = st.session_state.get("explorer")
        return explorer is not None and explorer.has_search

    @staticmethod
    def has_error() -> bool:
        """Check if there's an error to display."""
        return st.session_state.get("last_error") is not None


def init_session_state(default_dataset: str = config.DEFAULT_DATASET) -> None:
    """Convenience function to initialize session state."""
    AppState.init(default_dataset)
