"""
Test effective matrix preparation and random GL+ generation.
"""

import math

import pytest
import numpy as np
import sys
from pathlib import Path
from numpy.testing import assert_allclose

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mtv_path.linalg.kernel import determinant
from mtv_path.paths.validation import validate_exp_log_matrix
from mtv_path.preparation import prepare_matrix, sanitize_exponent, sanitize_scalar
from mtv_path.core.config import RandomMatrixConfig
from mtv_path.random_matrix import (
    flip_column_sign, generate_random_gl_plus_matrix, random_matrix_from_config,
)


class TestPrepareMatrix:
    """Test (scalar * A) ** exponent and normalization."""

    def test_identity_preparation(self):
        A = [[1.0, 2.0], [3.0, 4.0]]
        prepared = prepare_matrix(A)
        assert prepared.ok
        assert_allclose(prepared.matrix, A)
        assert prepared.determinant_before == pytest.approx(-2.0)
        assert not prepared.normalization_applied

    def test_scalar_and_exponent(self):
        A = np.array([[1.0, 1.0], [0.0, 1.0]])
        prepared = prepare_matrix(A, scalar=2.0, exponent=3)
        assert_allclose(prepared.matrix, np.linalg.matrix_power(2.0 * A, 3))
        assert prepared.scalar == 2.0
        assert prepared.exponent == 3

    def test_sanitizing(self):
        assert sanitize_scalar(math.nan) == 1.0
        assert sanitize_scalar("abc") == 1.0
        assert sanitize_exponent(2.6) == 3
        assert sanitize_exponent(0) == 1
        assert sanitize_exponent(-4) == 1
        assert sanitize_exponent(math.inf) == 1

    def test_normalize_2d(self):
        prepared = prepare_matrix([[2.0, 0.0], [0.0, 8.0]], normalize=True)
        assert prepared.normalization_applied
        assert prepared.determinant_before == pytest.approx(16.0)
        assert prepared.determinant_after == pytest.approx(1.0)
        assert_allclose(prepared.matrix, [[0.5, 0.0], [0.0, 2.0]])
        assert_allclose(prepared.adjusted_matrix, [[2.0, 0.0], [0.0, 8.0]])

    def test_normalize_3d_uses_cube_root(self):
        prepared = prepare_matrix(np.diag([2.0, 2.0, 2.0]), normalize=True)
        assert_allclose(prepared.matrix, np.eye(3), atol=1e-12)
        assert abs(prepared.determinant_after) == pytest.approx(1.0)

    def test_normalize_negative_determinant_keeps_sign(self):
        prepared = prepare_matrix([[-4.0, 0.0], [0.0, 1.0]], normalize=True)
        assert prepared.determinant_after == pytest.approx(-1.0)

    def test_normalize_singular_fails(self):
        A = [[1.0, 2.0], [2.0, 4.0]]
        prepared = prepare_matrix(A, normalize=True)
        assert prepared.normalization_failed
        assert not prepared.normalization_applied
        assert_allclose(prepared.matrix, A)

    def test_overflow_reports_error(self):
        prepared = prepare_matrix([[1.0, 0.0], [0.0, 1.0]], scalar=1e200, exponent=3)
        assert prepared.matrix is None
        assert not prepared.ok
        assert "Check scalar or exponent" in prepared.error


class TestRandomMatrix:
    """Test random GL+ generation."""

    @pytest.mark.parametrize("dimension", [2, 3])
    def test_positive_determinant(self, dimension):
        rng = np.random.default_rng(7)
        for _ in range(50):
            M = generate_random_gl_plus_matrix(dimension, rng=rng)
            assert M.shape == (dimension, dimension)
            assert determinant(M) > 0

    def test_entries_rounded_and_bounded(self):
        rng = np.random.default_rng(11)
        M = generate_random_gl_plus_matrix(3, rng=rng, entry_range=2.0, decimals=2)
        assert_allclose(M * 100, np.round(M * 100), atol=1e-9)
        assert np.all(np.abs(M) <= 2.0)

    def test_reproducible_with_seed(self):
        a = generate_random_gl_plus_matrix(3, rng=np.random.default_rng(3))
        b = generate_random_gl_plus_matrix(3, rng=np.random.default_rng(3))
        assert_allclose(a, b)

    @pytest.mark.parametrize("dimension", [2, 3])
    def test_require_positive_eigenvalues(self, dimension):
        rng = np.random.default_rng(5)
        for _ in range(20):
            M = generate_random_gl_plus_matrix(
                dimension, rng=rng, require_positive_eigenvalues=True
            )
            assert determinant(M) > 0
            assert validate_exp_log_matrix(M).valid

    def test_fallback_after_attempts(self):
        rng = np.random.default_rng(1)
        M = generate_random_gl_plus_matrix(
            2, rng=rng, max_attempts=0, require_positive_eigenvalues=True
        )
        assert determinant(M) > 0
        assert validate_exp_log_matrix(M).valid

    def test_flip_column_sign(self):
        M = np.array([[1.0, 2.0], [3.0, 4.0]])
        flipped = flip_column_sign(M)
        assert_allclose(flipped, [[-1.0, 2.0], [-3.0, 4.0]])
        assert determinant(flipped) == pytest.approx(-determinant(M))

    def test_from_config(self):
        config = RandomMatrixConfig(dimension=2, seed=42, require_positive_eigenvalues=True)
        a = random_matrix_from_config(config)
        b = random_matrix_from_config(config)
        assert a.shape == (2, 2)
        assert_allclose(a, b)
        assert validate_exp_log_matrix(a).valid
