"""
Tests for the PCA projection in scent_mapper/analytics/projector.py.

Degenerate inputs (one row, one column, identical rows) must come back as
finite coordinates rather than raising.

Run: pytest tests/test_projector.py -v
"""

import numpy as np

from scent_mapper.analytics.projector import project_pca

# ── project_pca() ───────────────────────────────────────────────────────────


class TestProjectPca:
    """Shape, ordering and separation of groups."""

    def test_shape(self):
        X = np.eye(5, dtype="float32")
        assert project_pca(X).shape == (5, 2)

    def test_groups_separated_on_first_axis(self):
        X = np.array([
            [1, 1, 0, 0],
            [1, 1, 0, 0],
            [0, 0, 1, 1],
            [0, 0, 1, 1],
        ], dtype="float32")
        coords = project_pca(X)
        assert coords[0, 0] == coords[1, 0]
        assert coords[2, 0] == coords[3, 0]
        assert np.sign(coords[0, 0]) != np.sign(coords[2, 0])

    def test_centered_output(self):
        rng = np.random.default_rng(0)
        X = (rng.random((20, 6)) > 0.5).astype("float32")
        coords = project_pca(X)
        np.testing.assert_allclose(coords.mean(axis=0), [0.0, 0.0], atol=1e-6)

    def test_deterministic(self):
        rng = np.random.default_rng(1)
        X = (rng.random((15, 5)) > 0.5).astype("float32")
        np.testing.assert_array_equal(project_pca(X), project_pca(X))


class TestDegenerateInputs:
    """No variance or too few dimensions collapse to zeros."""

    def test_identical_rows(self):
        X = np.ones((4, 1), dtype="float32")
        coords = project_pca(X)
        np.testing.assert_array_equal(coords, np.zeros((4, 2)))

    def test_single_row(self):
        coords = project_pca(np.array([[1, 0, 1]], dtype="float32"))
        np.testing.assert_array_equal(coords, np.zeros((1, 2)))

    def test_single_column_second_axis_zero(self):
        X = np.array([[1], [0], [1], [0]], dtype="float32")
        coords = project_pca(X)
        assert coords.shape == (4, 2)
        np.testing.assert_array_equal(coords[:, 1], np.zeros(4))
        assert np.abs(coords[:, 0]).sum() > 0

    def test_empty(self):
        coords = project_pca(np.zeros((0, 0), dtype="float32"))
        assert coords.shape == (0, 2)

    def test_always_finite(self):
        X = np.array([[1, 0], [1, 0], [1, 1]], dtype="float32")
        assert np.all(np.isfinite(project_pca(X)))
