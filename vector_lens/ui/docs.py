"""Documentation tab content (Methodology)."""

import streamlit as st

import config


def render_methodology_tab() -> None:
    """Render the Methodology explanation tab."""
    st.markdown(f"""
## How Vector-Lens Works

### Projection: Power-Iteration PCA

Vectors in a collection typically have hundreds of dimensions. To draw them we
find the two directions along which the vectors vary the most and project every
vector onto them.

1. **Center** the batch (and the query vector, if any) on its mean
2. **First axis**: start from a random unit vector and repeat
   `v ← Σ row·(row·v)` then normalize, {config.POWER_ITERATIONS} times
3. **Second axis**: same, but the first axis is subtracted after every step
   so the two stay orthogonal
4. **Project**: each vector's coordinates are its dot products with the two axes

This is an approximation of principal component analysis. The sign of each axis
depends on the random start, so the picture may be mirrored between runs; the
distances between points are what matter.

### The View

The projected points are fitted into the plot with a {config.VIEW_PADDING:.0f}px
margin. Zoom scales about the plot centre (from {config.ZOOM_MIN}× to
{config.ZOOM_MAX}×) and pan shifts everything by a fixed offset, so panning and
zooming never re-run the projection.

### Search

Search scores every vector against the query with **cosine similarity**. The
best matches turn green with their score beside them, and the query itself
appears as an orange diamond, projected with the same axes as the collection.

Text search hashes each word of the query into one of the collection's
dimensions, so it works without an embedding model but only matches vectors
built the same way.

### Reading the Plot

- Points close together are similar **along the two strongest directions only**
- Two points far apart in the plot are far apart in the full space
- Two points close in the plot may still differ along directions the plot hides
""")
