"""Tests for the power-iteration projector."""

import numpy as np
import pytest

from vector_lens.core.exceptions import DimensionMismatchError
from vector_lens.core.projector import PowerIterationProjector, project


def _top_eigenvectors(data):
    centered = data - data.mean(axis=0)
    values, vectors = np.linalg.eigh(centered.T @ centered)
    order = np.argsort(values)[::-1]
    return vectors[:, order[0]], vectors[:, order[1]]


class TestProjectorBasics:
    """Shape, centring and axis properties."""

    def test_one_point_per_input_in_order(self, anisotropic_data):
        result = PowerIterationProjector(seed=0).project(anisotropic_data)
        assert result.points.shape == (len(anisotropic_data), 2)
        assert result.query_point is None

    def test_centering_reconstructs_mean(self, anisotropic_data):
        result = PowerIterationProjector(seed=0).project(anisotropic_data)
        np.testing.assert_allclose(result.points.mean(axis=0), [0.0, 0.0], atol=1e-9)
        reconstructed = result.points.mean(axis=0) @ result.axes + result.mean
        np.testing.assert_allclose(reconstructed, anisotropic_data.mean(axis=0), atol=1e-9)

    def test_axes_are_unit_and_orthogonal(self, anisotropic_data):
        result = PowerIterationProjector(seed=3).project(anisotropic_data)
        axis1, axis2 = result.axes
        assert np.linalg.norm(axis1) == pytest.approx(1.0, abs=1e-9)
        assert np.linalg.norm(axis2) == pytest.approx(1.0, abs=1e-9)
        assert abs(axis1 @ axis2) < 1e-4
        assert result.axes_valid == (True, True)

    def test_axes_match_principal_components(self, anisotropic_data):
        result = PowerIterationProjector(seed=5).project(anisotropic_data)
        top1, top2 = _top_eigenvectors(anisotropic_data)
        assert abs(result.axes[0] @ top1) == pytest.approx(1.0, abs=1e-3)
        assert abs(result.axes[1] @ top2) == pytest.approx(1.0, abs=1e-3)

    def test_fixed_iteration_count(self, anisotropic_data, monkeypatch):
        projector = PowerIterationProjector(n_iterations=50, seed=0)
        calls = []
        original = projector._apply_covariance

        def counting(centered, v):
            calls.append(1)
            return original(centered, v)

        monkeypatch.setattr(projector, "_apply_covariance", counting)
        projector.project(anisotropic_data)
        assert len(calls) == 100


class TestProjectorDeterminism:
    """Seeds and random starts."""

    def test_same_seed_same_output(self, anisotropic_data):
        a = PowerIterationProjector(seed=11).project(anisotropic_data)
        b = PowerIterationProjector(seed=11).project(anisotropic_data)
        np.testing.assert_array_equal(a.points, b.points)

    def test_explicit_generator(self, anisotropic_data):
        a = project(anisotropic_data, rng=np.random.default_rng(7))
        b = project(anisotropic_data, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(a.points, b.points)

    def test_relative_geometry_independent_of_start(self, anisotropic_data):
        """Axis signs may flip between starts, distances do not."""
        a = PowerIterationProjector(seed=1).project(anisotropic_data).points
        b = PowerIterationProjector(seed=2).project(anisotropic_data).points
        dist_a = np.linalg.norm(a[:, None, :] - a[None, :, :], axis=-1)
        dist_b = np.linalg.norm(b[:, None, :] - b[None, :, :], axis=-1)
        np.testing.assert_allclose(dist_a, dist_b, atol=1e-4)


class TestProjectorQuery:
    """Query handling."""

    def test_query_uses_same_basis(self, anisotropic_data):
        batch, query = anisotropic_data[:-1], anisotropic_data[-1]
        result = PowerIterationProjector(seed=4).project(batch, query=query)
        expected = (query - result.mean) @ result.axes.T
        np.testing.assert_allclose(result.query_point, expected)
        assert result.points.shape == (len(batch), 2)

    def test_query_matches_projecting_as_last_row(self, anisotropic_data):
        batch, query = anisotropic_data[:-1], anisotropic_data[-1]
        with_query = PowerIterationProjector(seed=9).project(batch, query=query)
        as_row = PowerIterationProjector(seed=9).project(anisotropic_data)
        np.testing.assert_allclose(with_query.query_point, as_row.points[-1])
        np.testing.assert_allclose(with_query.points, as_row.points[:-1])

    def test_query_included_in_mean(self):
        vectors = [[0.0, 0.0], [2.0, 0.0]]
        result = PowerIterationProjector(seed=0).project(vectors, query=[4.0, 3.0])
        np.testing.assert_allclose(result.mean, [2.0, 1.0])


class TestProjectorEdgeCases:
    """Empty, degenerate and malformed input."""

    def test_empty_input(self):
        result = PowerIterationProjector(seed=0).project([])
        assert result.is_empty
        assert result.points.shape == (0, 2)
        assert result.query_point is None

    def test_single_vector_projects_to_origin(self):
        result = PowerIterationProjector(seed=0).project([[0.3, -1.2, 4.0]])
        np.testing.assert_allclose(result.points, [[0.0, 0.0]], atol=1e-12)
        assert np.all(np.isfinite(result.axes))

    def test_identical_vectors_project_to_origin(self):
        vectors = [[0.1, 0.2, 0.3]] * 4
        result = PowerIterationProjector(seed=0).project(vectors)
        np.testing.assert_allclose(result.points, np.zeros((4, 2)), atol=1e-12)
        assert np.all(np.isfinite(result.points))
        assert result.axes_valid == (False, False)

    def test_one_dimensional_data_has_flat_second_axis(self):
        vectors = [[1.0], [2.0], [4.0]]
        result = PowerIterationProjector(seed=0).project(vectors)
        assert np.all(np.isfinite(result.points))
        np.testing.assert_allclose(result.points[:, 1], 0.0)
        spread = result.points[:, 0] - result.points[0, 0]
        np.testing.assert_allclose(np.abs(spread), [0.0, 1.0, 3.0])

    def test_mixed_dimensions_raise(self):
        with pytest.raises(DimensionMismatchError) as info:
            PowerIterationProjector(seed=0).project([[1.0, 2.0], [1.0, 2.0, 3.0]])
        assert info.value.expected == 2
        assert info.value.actual == 3
        assert info.value.index == 1

    def test_query_dimension_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError, match="Query vector"):
            PowerIterationProjector(seed=0).project([[1.0, 2.0], [0.0, 1.0]], query=[1.0])

    def test_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            PowerIterationProjector(seed=0).project([[1.0], [1.0, 2.0]])
