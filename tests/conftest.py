"""Shared fixtures for Vector-Lens tests."""

import numpy as np
import pytest

from vector_lens.core.types import VectorRecord
from vector_lens.visualization.surface import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Surface that records every call instead of drawing."""

    def __init__(self, width=800, height=500):
        self.width = width
        self.height = height
        self.calls = []

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", dict(x=x, y=y, width=width, height=height, color=color)))

    def lines(self, segments, color, width=1.0):
        self.calls.append(("lines", dict(segments=list(segments), color=color, width=width)))

    def circles(self, centers, radius, fill=None, stroke=None, stroke_width=0.0):
        self.calls.append(("circles", dict(
            centers=list(centers), radius=radius, fill=fill, stroke=stroke, stroke_width=stroke_width,
        )))

    def polygon(self, vertices, fill, stroke=None, stroke_width=0.0):
        self.calls.append(("polygon", dict(vertices=list(vertices), fill=fill, stroke=stroke)))

    def text(self, x, y, text, color, size, align="left"):
        self.calls.append(("text", dict(x=x, y=y, text=text, color=color, size=size, align=align)))

    def targets(self, ids, centers, labels):
        self.calls.append(("targets", dict(ids=list(ids), centers=list(centers), labels=list(labels))))

    def texts(self):
        return [kw["text"] for name, kw in self.calls if name == "text"]


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def anisotropic_data(rng):
    """Gaussian data with clearly separated variances per dimension."""
    scales = np.array([5.0, 3.0, 1.0, 0.5, 0.3, 0.2, 0.1, 0.05])
    return rng.normal(size=(60, len(scales))) * scales


@pytest.fixture
def sample_records():
    """Five 3-D records with metadata."""
    vectors = [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 1.0, 0.0],
        [0.5, 0.2, 0.9],
    ]
    return [
        VectorRecord(id=i + 1, vector=tuple(v), metadata={"text_preview": f"item {i + 1}"})
        for i, v in enumerate(vectors)
    ]
