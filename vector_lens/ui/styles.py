"""
Theme constants and CSS injection for Vector-Lens.
Centralizes all styling in one place for easy customization.
"""

import streamlit as st
from dataclasses import dataclass

import config


@dataclass(frozen=True)
class Theme:
    """Central theme configuration - all colors in one place."""
    # Primary palette (gradient)
    primary_start: str = "#60a5fa"
    primary_end: str = "#a78bfa"

    # Backgrounds
    bg_dark: str = "#111827"
    bg_medium: str = config.COLORS["background"]
    bg_card: str = "rgba(31, 41, 55, 0.8)"

    # Text
    text_primary: str = "#e5e7eb"
    text_secondary: str = config.COLORS["legend_text"]

    # Accents
    accent_match: str = config.COLORS["match"]
    accent_query: str = config.COLORS["query"]
    accent_danger: str = "#dc2626"

    # Borders
    border_subtle: str = "rgba(96, 165, 250, 0.3)"


THEME = Theme()


def get_css() -> str:
    """Generate CSS using theme constants."""
    return f"""
<style>
    [data-testid="stAppViewContainer"] {{
        background: linear-gradient(135deg, {THEME.bg_dark} 0%, {THEME.bg_medium} 100%);
    }}

    .vl-header {{
        font-family: 'JetBrains Mono', 'Fira Code', 'SF Mono', monospace;
        background: linear-gradient(90deg, {THEME.primary_start} 0%, {THEME.primary_end} 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        background-clip: text;
        font-size: 2.2rem;
        font-weight: 700;
        margin-bottom: 0;
    }}

    .vl-subheader {{
        color: {THEME.text_secondary};
        font-size: 1rem;
        margin-top: 0.25rem;
    }}

    .vl-card {{
        background: {THEME.bg_card};
        border: 1px solid {THEME.border_subtle};
        border-radius: 10px;
        padding: 1rem;
        margin: 0.5rem 0;
    }}

    .vl-badge {{
        background: {THEME.accent_match};
        color: white;
        padding: 0.15rem 0.6rem;
        border-radius: 20px;
        font-size: 0.8rem;
        font-weight: 600;
    }}

    .vl-status {{
        color: {THEME.text_secondary};
        font-family: 'JetBrains Mono', monospace;
        font-size: 0.8rem;
    }}

    .vl-search-banner {{
        background: rgba(34, 197, 94, 0.15);
        border: 1px solid {THEME.accent_match};
        border-radius: 6px;
        padding: 0.4rem 0.8rem;
        color: {THEME.text_primary};
        font-size: 0.85rem;
    }}

    .vl-error {{
        background: rgba(220, 38, 38, 0.15);
        border: 1px solid {THEME.accent_danger};
        border-radius: 6px;
        padding: 0.5rem 0.8rem;
        color: {THEME.text_primary};
    }}
</style>
"""


def inject_styles() -> None:
    """Inject CSS styles into the Streamlit app."""
    st.markdown(get_css(), unsafe_allow_html=True)


def render_header() -> None:
    """Render the styled application header."""
    st.markdown('<h1 class="vl-header">Vector-Lens</h1>', unsafe_allow_html=True)
    st.markdown('<p class="vl-subheader">Embedding projection explorer</p>', unsafe_allow_html=True)


def render_error(message: str) -> None:
    """Render a styled error message."""
    st.markdown(f'<div class="vl-error">{message}</div>', unsafe_allow_html=True)
