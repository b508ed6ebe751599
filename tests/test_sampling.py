"""
Tests for activations, the sampling grid and multi-backend path sampling.
"""

import math

import pytest
import numpy as np
import sys
from pathlib import Path
from numpy.testing import assert_allclose

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mtv_path.activation import ACTIVATION_FUNCTIONS, parse_custom_activation, resolve_activation
from mtv_path.paths.explog import DOMAIN_REASON
from mtv_path.sampling import build_sample_times, compute_backend_paths


class TestActivations:
    """Tests for named and custom activations."""

    def test_named_values(self):
        x = np.array([-2.0, 0.0, 3.0])
        assert_allclose(ACTIVATION_FUNCTIONS["identity"](x), x)
        assert_allclose(ACTIVATION_FUNCTIONS["relu"](x), [0.0, 0.0, 3.0])
        assert_allclose(ACTIVATION_FUNCTIONS["leakyRelu"](x), [-0.2, 0.0, 3.0])
        assert_allclose(ACTIVATION_FUNCTIONS["elu"](x), [math.exp(-2.0) - 1.0, 0.0, 3.0])
        assert_allclose(ACTIVATION_FUNCTIONS["sigmoid"](np.array([0.0])), [0.5])
        assert_allclose(ACTIVATION_FUNCTIONS["tanh"](x), np.tanh(x))

    def test_resolve_named(self):
        result = resolve_activation("relu")
        assert result.error is None
        assert_allclose(result.fn(np.array([-1.0, 1.0])), [0.0, 1.0])

    def test_resolve_unknown(self):
        result = resolve_activation("swish")
        assert result.fn is None
        assert "Unknown activation" in result.error

    def test_custom_expression(self):
        result = resolve_activation("custom", "x**2 + 1")
        assert result.error is None
        assert_allclose(result.fn(np.array([[1.0, 2.0], [-3.0, 0.0]])), [[2.0, 5.0], [10.0, 1.0]])

    def test_custom_constant_broadcasts(self):
        result = parse_custom_activation("3")
        assert_allclose(result.fn(np.array([1.0, 2.0])), [3.0, 3.0])

    def test_custom_empty_is_identity(self):
        result = parse_custom_activation("   ")
        assert_allclose(result.fn(np.array([1.5, -2.0])), [1.5, -2.0])

    def test_custom_non_finite_is_nan(self):
        result = parse_custom_activation("sqrt(x)")
        assert result.error is None
        out = result.fn(np.array([4.0, -1.0]))
        assert out[0] == pytest.approx(2.0)
        assert math.isnan(out[1])

    @pytest.mark.parametrize("expression", ["x**", "y + 1", "log(x - 1)"])
    def test_custom_errors(self, expression):
        result = parse_custom_activation(expression)
        assert result.fn is None
        assert result.error


class TestSampleTimes:
    """Tests for the time grid."""

    def test_unit_interval(self):
        times = build_sample_times(0.0, 1.0)
        assert len(times) == 101
        assert times[0] == 0.0
        assert times[-1] == pytest.approx(1.0)

    def test_coarse_precision_capped_by_resolution(self):
        assert len(build_sample_times(0.0, 1.0, t_precision=0.05)) == 101

    def test_fine_precision(self):
        times = build_sample_times(-1.0, 1.0, t_precision=1.0 / 1024)
        assert len(times) == 2049
        assert times[0] == -1.0

    def test_invalid_precision_defaults(self):
        assert len(build_sample_times(0.0, 1.0, t_precision=math.nan)) == 101
        assert len(build_sample_times(0.0, 1.0, t_precision=-1.0)) == 101

    def test_empty_range(self):
        assert build_sample_times(1.0, 1.0).size == 0
        assert build_sample_times(2.0, 1.0).size == 0


class TestBackendPaths:
    """Tests for compute_backend_paths."""

    @pytest.fixture
    def times(self):
        return build_sample_times(0.0, 1.0, t_precision=0.1, path_resolution=10)

    def test_single_backend(self, times):
        A = np.array([[0.0, -1.0], [1.0, 0.0]])
        result = compute_backend_paths(A, [[2.0, 0.0]], times)
        assert result.error is None
        assert len(result.paths) == 1
        path = result.paths[0].transformations[0]
        assert path.points.shape == (len(times), 2)
        assert_allclose(path.initial, [2.0, 0.0], atol=1e-12)
        assert_allclose(path.final, [0.0, 2.0], atol=1e-12)

    def test_compare_backends(self, times):
        A = np.array([[2.0, 1.0], [0.5, 1.0]])
        result = compute_backend_paths(A, {7: [1.0, 1.0]}, times, backends=["kan", "exp-log"])
        assert [entry.backend for entry in result.paths] == ["kan", "exp-log"]
        assert result.for_backend("exp-log").label == "exp(t ln A) Path"
        for entry in result.paths:
            assert_allclose(entry.transformations[7].final, A @ [1.0, 1.0], atol=1e-9)

    def test_unavailable_backend_skipped(self, times):
        """A negative spectrum still runs on KAN, exp-log reports why it was skipped."""
        A = np.array([[-1.0, 0.0], [0.0, -2.0]])
        result = compute_backend_paths(A, [[1.0, 1.0]], times, backends=["kan", "exp-log"])
        assert [entry.backend for entry in result.paths] == ["kan"]
        assert result.error == DOMAIN_REASON

    def test_no_backend_available(self, times):
        result = compute_backend_paths([[1.0, 0.0], [0.0, -1.0]], [[1.0, 0.0]], times)
        assert result.paths == []
        assert "det(A) > 0" in result.error

    def test_activation_applied(self, times):
        A = np.array([[0.0, -1.0], [1.0, 0.0]])
        relu = resolve_activation("relu").fn
        result = compute_backend_paths(A, [[1.0, 0.0]], times, activation=relu)
        assert np.all(result.paths[0].transformations[0].points >= 0.0)

    def test_empty_times(self):
        result = compute_backend_paths(np.eye(2), [[1.0, 0.0]], [])
        assert result.error == "No sampling points available."

    def test_dataframe_export(self, times):
        A = np.eye(3) * 1.5
        result = compute_backend_paths(A, [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], times,
                                       backends=["kan", "exp-log"])
        df = result.to_dataframe()
        assert len(df) == 2 * 2 * len(times)
        assert set(["backend", "vector_id", "step", "t", "x0", "x1", "x2"]).issubset(df.columns)
        assert set(df["backend"]) == {"kan", "exp-log"}
