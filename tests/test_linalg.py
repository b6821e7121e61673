"""Tests for vector primitives."""

import numpy as np
import pytest

from vector_lens.core import linalg


def test_dot_and_norm():
    a = np.array([3.0, 4.0])
    b = np.array([1.0, 2.0])
    assert linalg.dot(a, b) == pytest.approx(11.0)
    assert linalg.norm(a) == pytest.approx(5.0)


def test_scale():
    np.testing.assert_allclose(linalg.scale(np.array([1.0, -2.0]), 3.0), [3.0, -6.0])


def test_normalize_returns_unit_vector():
    unit, ok = linalg.normalize(np.array([0.0, 3.0, 4.0]))
    assert ok
    np.testing.assert_allclose(unit, [0.0, 0.6, 0.8])


def test_normalize_underflow_keeps_input():
    """Norms below the epsilon are not divided by."""
    tiny = np.array([1e-12, 0.0])
    out, ok = linalg.normalize(tiny)
    assert not ok
    assert out is tiny
    assert np.all(np.isfinite(out))


def test_remove_component_makes_orthogonal():
    axis = np.array([1.0, 0.0, 0.0])
    v = np.array([2.0, 3.0, -1.0])
    residual = linalg.remove_component(v, axis)
    assert linalg.dot(residual, axis) == pytest.approx(0.0)
    np.testing.assert_allclose(residual, [0.0, 3.0, -1.0])
