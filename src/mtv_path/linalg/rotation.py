"""
Rotation generators and closed-form rotation exponentials.

A proper rotation Q in 2D or 3D is summarised by an angle (and, in 3D, a
unit axis). The generator log(Q) is angle * J in 2D, with J the quarter-turn
matrix, and angle * [axis]_x in 3D.

The antisymmetric extraction (Q - Q^T) / (2 sin angle) is singular at
angle = 0 and angle = pi, so both ends have their own recovery:
- near 0 the axis is read directly off the skew part of Q
- near pi the axis comes from the dominant column of the symmetric part
  (Q + Q^T)/2 - cos(angle) I, oriented by the skew part
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .kernel import (
    EPSILON, SMALL_ANGLE, add, axis_from_skew, norm, normalize, scale, skew, subtract, transpose,
)

NEAR_PI_TOLERANCE = 1e-4

QUARTER_TURN = np.array([[0.0, -1.0], [1.0, 0.0]])


@dataclass(frozen=True)
class RotationGenerator:
    """Angle/axis form of a rotation together with its skew generator."""
    angle: float
    log_q: NDArray
    axis: Optional[NDArray] = None

    @property
    def dimension(self) -> int:
        return self.log_q.shape[0]


def _series_exponential(generator: NDArray) -> NDArray:
    """I + S + S^2/2, used when the rotation angle is too small for sin/cos."""
    n = generator.shape[0]
    return np.eye(n) + generator + 0.5 * (generator @ generator)


def rotation_matrix_2d(angle: float) -> NDArray:
    """Counter-clockwise planar rotation by angle."""
    if abs(angle) < SMALL_ANGLE:
        return _series_exponential(QUARTER_TURN * angle)
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s], [s, c]])


def rotation_from_axis_angle(axis: NDArray, angle: float) -> NDArray:
    """Rodrigues' formula for a rotation by angle about axis."""
    if abs(angle) < SMALL_ANGLE:
        return _series_exponential(skew(axis) * angle)

    ux, uy, uz = normalize(axis)
    c = math.cos(angle)
    s = math.sin(angle)
    one_minus_c = 1.0 - c

    return np.array([
        [
            c + ux * ux * one_minus_c,
            ux * uy * one_minus_c - uz * s,
            ux * uz * one_minus_c + uy * s,
        ],
        [
            uy * ux * one_minus_c + uz * s,
            c + uy * uy * one_minus_c,
            uy * uz * one_minus_c - ux * s,
        ],
        [
            uz * ux * one_minus_c - uy * s,
            uz * uy * one_minus_c + ux * s,
            c + uz * uz * one_minus_c,
        ],
    ])


def _extract_2d(Q: NDArray) -> RotationGenerator:
    angle = math.atan2(Q[1, 0], Q[0, 0])
    return RotationGenerator(angle=angle, log_q=QUARTER_TURN * angle)


def _extract_3d(Q: NDArray) -> RotationGenerator:
    trace = Q[0, 0] + Q[1, 1] + Q[2, 2]
    cos_theta = min(1.0, max(-1.0, (trace - 1.0) / 2.0))
    theta = math.acos(cos_theta)

    if theta < SMALL_ANGLE:
        skew_part = scale(subtract(Q, transpose(Q)), 0.5)
        candidate = axis_from_skew(skew_part)
        length = norm(candidate)
        axis = candidate / length if length > EPSILON else np.array([1.0, 0.0, 0.0])
        theta = max(theta, length)
    elif abs(math.pi - theta) < NEAR_PI_TOLERANCE:
        # (Q + Q^T)/2 - cos(theta) I = (1 - cos(theta)) a a^T, so its dominant
        # column is parallel to the axis; the skew part fixes the sign
        symmetric = scale(add(Q, transpose(Q)), 0.5) - cos_theta * np.eye(3)
        index = int(np.argmax(np.diag(symmetric)))
        axis = normalize(symmetric[:, index])
        skew_axis = axis_from_skew(subtract(Q, transpose(Q)))
        if float(np.dot(axis, skew_axis)) < 0:
            axis = -axis
        theta = math.atan2(0.5 * norm(skew_axis), cos_theta)
    else:
        denom = 2.0 * math.sin(theta)
        axis = normalize(np.array([
            (Q[2, 1] - Q[1, 2]) / denom,
            (Q[0, 2] - Q[2, 0]) / denom,
            (Q[1, 0] - Q[0, 1]) / denom,
        ]))

    return RotationGenerator(angle=theta, log_q=skew(axis) * theta, axis=axis)


def extract_rotation_generator(Q: NDArray) -> RotationGenerator:
    """
    Recover the rotation generator of a proper rotation matrix.

    Args:
        Q: 2x2 or 3x3 orthogonal matrix with det(Q) = +1

    Returns:
        RotationGenerator with angle in (-pi, pi] for 2D and [0, pi] for 3D
    """
    if Q.shape[0] == 2:
        return _extract_2d(Q)
    return _extract_3d(Q)


def rotation_at(generator: RotationGenerator, t: float) -> NDArray:
    """Q(t) = exp(t * log Q) in closed form."""
    angle = generator.angle * t
    if generator.dimension == 2:
        return rotation_matrix_2d(angle)
    return rotation_from_axis_angle(generator.axis, angle)
