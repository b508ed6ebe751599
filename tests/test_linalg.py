"""
Test linear algebra primitives, rotation generators and tagged eigenvalues.
"""

import math

import pytest
import numpy as np
import sys
from pathlib import Path
from numpy.testing import assert_allclose

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mtv_path.linalg.kernel import (
    EPSILON, add, as_matrix, as_vector, determinant, diag, multiply, scale, skew, subtract,
    transpose, axis_from_skew, norm, normalize,
)
from mtv_path.linalg.rotation import (
    extract_rotation_generator, rotation_at, rotation_matrix_2d, rotation_from_axis_angle,
)
from mtv_path.linalg.eigen import (
    RealEigenvalue, ComplexEigenvalue, classify_eigenvalue, compute_eigenvalues,
)


class TestKernel:
    """Test dense primitives."""

    def test_determinant_2x2_and_3x3(self):
        """Closed-form determinants match numpy."""
        a = np.array([[2.0, 1.0], [0.5, 3.0]])
        b = np.array([[2.0, 1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 3.0]])
        assert determinant(a) == pytest.approx(np.linalg.det(a))
        assert determinant(b) == pytest.approx(7.0)

    def test_skew_is_cross_product(self):
        """skew(a) @ v == a x v and axis_from_skew inverts skew."""
        a = np.array([0.3, -1.2, 2.0])
        v = np.array([1.0, 0.5, -0.7])
        assert_allclose(skew(a) @ v, np.cross(a, v))
        assert_allclose(axis_from_skew(skew(a)), a)

    def test_normalize(self):
        """Unit length for regular input, first basis vector below EPSILON."""
        assert norm(normalize(np.array([3.0, 4.0]))) == pytest.approx(1.0)
        assert_allclose(normalize(np.array([EPSILON / 10, 0.0, 0.0])), [1.0, 0.0, 0.0])
        assert_allclose(normalize(np.zeros(2)), [1.0, 0.0])

    def test_diag(self):
        assert_allclose(diag([1.0, 2.0, 3.0]), np.diag([1.0, 2.0, 3.0]))

    def test_elementary_ops(self):
        a = np.array([[1.0, 2.0], [3.0, 4.0]])
        b = np.array([[0.0, 1.0], [1.0, 0.0]])
        assert_allclose(multiply(a, b), [[2.0, 1.0], [4.0, 3.0]])
        assert_allclose(add(a, b), [[1.0, 3.0], [4.0, 4.0]])
        assert_allclose(subtract(a, b), [[1.0, 1.0], [2.0, 4.0]])
        assert_allclose(scale(a, 0.5), [[0.5, 1.0], [1.5, 2.0]])
        t = transpose(a)
        assert_allclose(t, [[1.0, 3.0], [2.0, 4.0]])
        t[0, 0] = 9.0
        assert a[0, 0] == 1.0

    def test_as_matrix_rejects_bad_shapes(self):
        """Non-square and unsupported sizes raise ValueError."""
        with pytest.raises(ValueError):
            as_matrix([[1, 2, 3], [4, 5, 6]])
        with pytest.raises(ValueError):
            as_matrix(np.eye(4))
        with pytest.raises(ValueError):
            as_matrix([1.0, 2.0])

    def test_as_vector_length(self):
        assert_allclose(as_vector([1, 2], 2), [1.0, 2.0])
        with pytest.raises(ValueError):
            as_vector([1, 2, 3], 2)


class TestRotation:
    """Test rotation generators and closed-form exponentials."""

    def test_2d_angle_round_trip(self):
        """atan2 recovers the angle of a planar rotation."""
        for angle in [-3.0, -0.4, 0.0, 1.0, 2.0, 3.1]:
            generator = extract_rotation_generator(rotation_matrix_2d(angle))
            assert generator.angle == pytest.approx(angle, abs=1e-12)
            assert generator.axis is None

    def test_2d_fractional_rotation(self):
        """Q(t) of a 2 rad rotation at t = 0.5 is a 1 rad rotation."""
        generator = extract_rotation_generator(rotation_matrix_2d(2.0))
        assert_allclose(rotation_at(generator, 0.5), rotation_matrix_2d(1.0), atol=1e-12)

    def test_3d_generic_axis(self):
        """Axis and angle are recovered for a generic rotation."""
        axis = np.array([1.0, 2.0, 2.0]) / 3.0
        Q = rotation_from_axis_angle(axis, 1.2)
        generator = extract_rotation_generator(Q)
        assert generator.angle == pytest.approx(1.2, abs=1e-12)
        assert_allclose(generator.axis, axis, atol=1e-12)
        assert_allclose(rotation_at(generator, 1.0), Q, atol=1e-12)

    def test_3d_near_pi(self):
        """The near-pi branch reconstructs a half turn."""
        axis = np.array([1.0, 2.0, 2.0]) / 3.0
        Q = rotation_from_axis_angle(axis, math.pi)
        generator = extract_rotation_generator(Q)
        assert generator.angle == pytest.approx(math.pi, abs=1e-6)
        assert abs(abs(np.dot(generator.axis, axis)) - 1.0) < 1e-6
        assert_allclose(rotation_at(generator, 1.0), Q, atol=1e-6)

    @pytest.mark.parametrize("delta", [1e-5, 5e-5, 9e-5])
    @pytest.mark.parametrize("direction", [[1.0, -2.0, 0.5], [0.3, 0.4, 0.86], [-0.2, 0.1, -1.0]])
    def test_3d_just_below_pi(self, direction, delta):
        """Axis, sign and angle survive the near-pi branch for pi - delta."""
        axis = normalize(np.array(direction))
        Q = rotation_from_axis_angle(axis, math.pi - delta)
        generator = extract_rotation_generator(Q)
        assert generator.angle == pytest.approx(math.pi - delta, abs=1e-10)
        assert_allclose(generator.axis, axis, atol=1e-9)
        assert_allclose(rotation_at(generator, 1.0), Q, atol=1e-12)
        half = rotation_from_axis_angle(axis, (math.pi - delta) / 2)
        assert_allclose(rotation_at(generator, 0.5), half, atol=1e-9)

    def test_3d_near_zero(self):
        """The small-angle branch reads the axis off the skew part."""
        Q = rotation_from_axis_angle(np.array([0.0, 0.0, 1.0]), 1e-8)
        generator = extract_rotation_generator(Q)
        assert_allclose(generator.axis, [0.0, 0.0, 1.0], atol=1e-6)
        assert_allclose(rotation_at(generator, 1.0), Q, atol=1e-7)

    def test_identity_rotation(self):
        """The identity has a zero generator and stays fixed for every t."""
        generator = extract_rotation_generator(np.eye(3))
        assert generator.angle == pytest.approx(0.0)
        for t in [-2.0, 0.5, 3.0]:
            assert_allclose(rotation_at(generator, t), np.eye(3), atol=1e-12)


class TestEigenvalues:
    """Test the real/complex tagged union."""

    def test_classification(self):
        assert isinstance(classify_eigenvalue(2.0 + 1e-14j), RealEigenvalue)
        assert isinstance(classify_eigenvalue(0.5 + 0.3j), ComplexEigenvalue)

    def test_admissibility(self):
        """Positive reals and genuine complex values are admissible."""
        assert RealEigenvalue(0.5).is_admissible()
        assert not RealEigenvalue(-0.5).is_admissible()
        assert not RealEigenvalue(0.0).is_admissible()
        assert ComplexEigenvalue(-1.0, 0.5).is_admissible()

    def test_logs(self):
        assert RealEigenvalue(math.e).log() == pytest.approx(1.0)
        z = ComplexEigenvalue(math.cos(2.0), math.sin(2.0)).log()
        assert z.real == pytest.approx(0.0, abs=1e-12)
        assert z.imag == pytest.approx(2.0)

    def test_compute_eigenvalues_rotation(self):
        """A planar rotation has a conjugate pair on the unit circle."""
        values = compute_eigenvalues(rotation_matrix_2d(2.0))
        assert len(values) == 2
        assert all(isinstance(v, ComplexEigenvalue) for v in values)
        assert sorted(v.im for v in values) == pytest.approx([-math.sin(2.0), math.sin(2.0)])
        assert values[0].to_dict()["re"] == pytest.approx(math.cos(2.0))
