"""
Tests for eigen decomposition and projection.
"""

import numpy as np
import pytest

from vector_topics.algorithms.dimensionality_reduction import (
    EigenPair,
    eigen_decompose,
    reduce,
)
from vector_topics.config import AnalysisConfig, config
from vector_topics.exceptions import InvalidParameterError, ShapeMismatchError


# ------------------------------------------------------------------
# eigen_decompose
# ------------------------------------------------------------------


def test_eigen_decompose_unit_and_orthogonal(anisotropic_data):
    """Eigenvectors are unit length and mutually orthogonal."""
    pairs = eigen_decompose(anisotropic_data)

    assert len(pairs) == 5
    V = np.stack([p.eigenvector for p in pairs])
    np.testing.assert_allclose(np.linalg.norm(V, axis=1), 1.0, atol=1e-9)
    gram = V @ V.T
    off_diag = gram - np.diag(np.diag(gram))
    np.testing.assert_allclose(off_diag, 0.0, atol=1e-9)


def test_eigen_decompose_sorted_descending(anisotropic_data):
    """Eigenvalues come out largest first."""
    values = [p.eigenvalue for p in eigen_decompose(anisotropic_data)]
    assert values == sorted(values, reverse=True)
    assert all(v > 0 for v in values)


def test_eigen_decompose_matches_dense_solver(anisotropic_data):
    """Eigenpairs agree with numpy's dense symmetric solver."""
    pairs = eigen_decompose(anisotropic_data)

    cov = np.cov(anisotropic_data, rowvar=False)
    w, v = np.linalg.eigh(cov)
    order = np.argsort(w)[::-1]
    w, v = w[order], v[:, order]

    np.testing.assert_allclose([p.eigenvalue for p in pairs], w, rtol=1e-6)
    for j, p in enumerate(pairs):
        assert abs(p.eigenvector @ v[:, j]) == pytest.approx(1.0, abs=1e-6)


def test_eigen_decompose_sign_convention(anisotropic_data):
    """Largest-magnitude component of every eigenvector is positive."""
    for p in eigen_decompose(anisotropic_data):
        assert p.eigenvector[np.argmax(np.abs(p.eigenvector))] > 0


def test_eigen_decompose_n_components(anisotropic_data):
    """n_components caps the number of pairs."""
    pairs = eigen_decompose(anisotropic_data, 2)
    assert len(pairs) == 2
    assert all(isinstance(p, EigenPair) for p in pairs)


def test_eigen_decompose_rank_limited_by_samples(rng):
    """With n <= d there are at most n - 1 pairs."""
    X = rng.standard_normal((4, 10))
    pairs = eigen_decompose(X)
    assert len(pairs) == 3


def test_eigen_decompose_collinear_data():
    """Points on a line give exactly one eigenpair."""
    t = np.linspace(-3.0, 3.0, 10)
    direction = np.array([1.0, 2.0, 0.0, -1.0, 0.5])
    X = t[:, None] * direction + np.array([1.0, 1.0, 1.0, 1.0, 1.0])

    pairs = eigen_decompose(X)

    assert len(pairs) == 1
    expected = direction / np.linalg.norm(direction)
    assert abs(pairs[0].eigenvector @ expected) == pytest.approx(1.0, abs=1e-9)


def test_eigen_decompose_identical_points():
    """No variance means no eigenpairs."""
    X = np.ones((6, 4))
    assert eigen_decompose(X) == []


def test_eigen_decompose_identical_points_with_rounding_noise(rng):
    """Identical rows whose mean is inexact still give no eigenpairs."""
    X = np.tile(rng.standard_normal(8), (7, 1))
    assert eigen_decompose(X) == []


def test_eigen_decompose_invalid_n_components(anisotropic_data):
    """n_components must be positive."""
    with pytest.raises(InvalidParameterError, match="n_components"):
        eigen_decompose(anisotropic_data, 0)


# ------------------------------------------------------------------
# reduce
# ------------------------------------------------------------------


def test_reduce_shape(rng):
    """Enough points: one row per vector, target_dim columns."""
    X = rng.standard_normal((20, 10))
    Z = reduce(X, 3)
    assert Z.shape == (20, 3)


def test_reduce_projects_raw_vectors(anisotropic_data):
    """Each output column is the dot product with an eigenvector."""
    Z = reduce(anisotropic_data, 3)
    V = np.stack([p.eigenvector for p in eigen_decompose(anisotropic_data, 3)])
    np.testing.assert_allclose(Z, anisotropic_data @ V.T)


def test_reduce_fallback_slices_first_components():
    """Too few points: first target_dim components, no decomposition."""
    X = [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]]
    Z = reduce(X, 3)
    np.testing.assert_array_equal(Z, [[1.0, 2.0, 3.0], [5.0, 6.0, 7.0]])


def test_reduce_fallback_zero_pads():
    """Fallback pads with zeros when d < target_dim."""
    X = [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    Z = reduce(X, 3)
    assert Z.shape == (3, 3)
    np.testing.assert_array_equal(Z[:, 2], 0.0)
    np.testing.assert_array_equal(Z[:, :2], X)


def test_reduce_fallback_boundary(rng):
    """n == target_dim still falls back; n == target_dim + 1 decomposes."""
    X = rng.standard_normal((4, 6))
    np.testing.assert_array_equal(reduce(X[:3], 3), X[:3, :3])
    assert reduce(X, 3).shape == (4, 3)


def test_reduce_rank_deficient_is_narrower():
    """Rank-deficient input yields fewer columns, not zero padding."""
    t = np.linspace(0.0, 1.0, 12)
    X = np.stack([t, 2 * t, -t, np.zeros_like(t)], axis=1)
    Z = reduce(X, 3)
    assert Z.shape == (12, 1)


def test_reduce_identical_points_have_no_components():
    """Zero variance gives an (n, 0) result."""
    Z = reduce(np.full((5, 3), 2.0), 3)
    assert Z.shape == (5, 0)


def test_reduce_identical_random_rows_have_no_components(rng):
    """Rounding noise around a repeated row is not projected onto."""
    X = np.tile(rng.standard_normal(8), (7, 1))
    assert reduce(X, 3).shape == (7, 0)


def test_reduce_deterministic(rng):
    """Repeated calls on the same input agree."""
    X = rng.standard_normal((50, 16))
    np.testing.assert_allclose(reduce(X, 3), reduce(X, 3), rtol=1e-9)


def test_reduce_does_not_mutate_input(rng):
    """The caller's array is left untouched."""
    X = rng.standard_normal((10, 5))
    before = X.copy()
    reduce(X, 3)
    np.testing.assert_array_equal(X, before)


def test_reduce_invalid_target_dim(rng):
    """target_dim must be at least 1."""
    with pytest.raises(InvalidParameterError, match="target_dim"):
        reduce(rng.standard_normal((5, 3)), 0)


def test_reduce_ragged_input():
    """Vectors of different lengths are rejected."""
    with pytest.raises(ShapeMismatchError) as excinfo:
        reduce([[1.0, 2.0], [1.0, 2.0, 3.0], [0.0, 0.0]], 2)
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 3


def test_reduce_flat_list_rejected():
    """A flat list of numbers is not a batch of vectors."""
    with pytest.raises(ShapeMismatchError, match="2-D") as excinfo:
        reduce([1.0, 2.0, 3.0], 2)
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 1


def test_reduce_empty_input():
    """An empty batch gives an empty result of the requested width."""
    assert reduce([], 3).shape == (0, 3)


def test_reduce_default_width_from_config(monkeypatch, rng):
    """Without target_dim the configured width is used."""
    monkeypatch.setattr(config, "analysis", AnalysisConfig(target_dim=2))
    assert reduce(rng.standard_normal((10, 6))).shape == (10, 2)
