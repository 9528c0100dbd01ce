"""Scalar constants, quaternions and 3x3 rotation-matrix helpers."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

import numpy as np

INFINITY = sys.float_info.max
EPSILON = sys.float_info.epsilon
EPSILON10 = EPSILON * 10
DEFAULT_PRECISION = 1e-6
PI = math.pi


def _as_matrix(matrix) -> np.ndarray:
    m = np.asarray(matrix, dtype=float)
    if m.size != 9:
        raise ValueError("a 3x3 matrix needs exactly 9 entries")
    return m.reshape(3, 3)


def _as_vector(vector) -> np.ndarray:
    v = np.asarray(vector, dtype=float).reshape(-1)
    if v.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return v


def quaternion_to_matrix(q0, q1, q2, q3) -> np.ndarray:
    """Rotation matrix of the quaternion q0*i + q1*j + q2*k + q3 (need not be unit)."""
    d = q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3
    if d == 0.0:
        raise ValueError("cannot build a rotation from a zero quaternion")
    s = 2.0 / d
    xs, ys, zs = q0 * s, q1 * s, q2 * s
    wx, wy, wz = q3 * xs, q3 * ys, q3 * zs
    xx, xy, xz = q0 * xs, q0 * ys, q0 * zs
    yy, yz, zz = q1 * ys, q1 * zs, q2 * zs
    return np.array(
        [
            [1.0 - (yy + zz), xy - wz, xz + wy],
            [xy + wz, 1.0 - (xx + zz), yz - wx],
            [xz - wy, yz + wx, 1.0 - (xx + yy)],
        ]
    )


@dataclass(frozen=True)
class Quaternion:
    """Quaternion x*i + y*j + z*k + w."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_axis_angle(cls, axis, angle) -> "Quaternion":
        """Rotation of ``angle`` radians about ``axis`` (normalised here)."""
        a = _as_vector(axis)
        d = float(np.linalg.norm(a))
        if d == 0.0:
            raise ValueError("rotation axis must not be zero")
        s = math.sin(angle * 0.5) / d
        return cls(a[0] * s, a[1] * s, a[2] * s, math.cos(angle * 0.5))

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def __mul__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        x, y, z, w = self
        qx, qy, qz, qw = other
        return Quaternion(
            w * qx + x * qw + y * qz - z * qy,
            w * qy + y * qw + z * qx - x * qz,
            w * qz + z * qw + x * qy - y * qx,
            w * qw - x * qx - y * qy - z * qz,
        )

    def __add__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a - b for a, b in zip(self, other)))

    def to_matrix(self) -> np.ndarray:
        return quaternion_to_matrix(self.x, self.y, self.z, self.w)


def axis_angle_matrix(angle, axis) -> np.ndarray:
    """Rotation matrix for ``angle`` radians about ``axis``."""
    a = _as_vector(axis)
    sin_a, cos_a = math.sin(angle / 2), math.cos(angle / 2)
    return quaternion_to_matrix(a[0] * sin_a, a[1] * sin_a, a[2] * sin_a, cos_a)


def roll_pitch_yaw_matrix(roll, pitch, yaw) -> np.ndarray:
    """Euler rotation: roll about x, then pitch about y, then yaw about z."""
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cr, sr = math.cos(roll), math.sin(roll)
    sysp, cysp = sy * sp, cy * sp
    sysr, sycr = sy * sr, sy * cr
    return np.array(
        [
            [cy * cp, cysp * sr - sycr, cysp * cr + sysr],
            [sy * cp, sysp * sr + cy * cr, sysp * cr - cy * sr],
            [-sp, cp * sr, cp * cr],
        ]
    )


def yaw_pitch_roll_matrix(yaw, pitch, roll) -> np.ndarray:
    """Euler rotation built in the yaw/pitch/roll convention."""
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cr, sr = math.cos(roll), math.sin(roll)
    cc, cs = cy * cr, cy * sr
    sc, ss = sy * cr, sy * sr
    return np.array(
        [
            [cc + sp * ss, cs - sp * sc, -sy * cp],
            [-cp * sr, cp * cr, -sp],
            [sc - sp * cs, ss + sp * cc, cy * cp],
        ]
    )


def gl_rotation(axis, theta) -> np.ndarray:
    """Rotation matrix as built by glRotate, for a unit ``axis``."""
    x, y, z = _as_vector(axis)
    c, s = math.cos(theta), math.sin(theta)
    t = 1 - c
    return np.array(
        [
            [x * x * t + c, x * y * t - z * s, x * z * t + y * s],
            [y * x * t + z * s, y * y * t + c, y * z * t - x * s],
            [z * x * t - y * s, z * y * t + x * s, z * z * t + c],
        ]
    )


def determinant3(matrix) -> float:
    m = _as_matrix(matrix).reshape(-1)
    return float(
        m[0] * m[4] * m[8]
        + m[1] * m[5] * m[6]
        + m[2] * m[3] * m[7]
        - m[2] * m[4] * m[6]
        - m[0] * m[5] * m[7]
        - m[1] * m[3] * m[8]
    )


def inverse3(matrix) -> np.ndarray:
    """Inverse by the adjugate; raises ValueError for a singular matrix."""
    m = _as_matrix(matrix).reshape(-1)
    det = determinant3(m)
    if det == 0.0:
        raise ValueError("matrix is singular")
    inv = 1.0 / det
    return (
        np.array(
            [
                m[4] * m[8] - m[5] * m[7],
                m[2] * m[7] - m[1] * m[8],
                m[1] * m[5] - m[2] * m[4],
                m[5] * m[6] - m[3] * m[8],
                m[0] * m[8] - m[2] * m[6],
                m[2] * m[3] - m[0] * m[5],
                m[3] * m[7] - m[4] * m[6],
                m[1] * m[6] - m[0] * m[7],
                m[0] * m[4] - m[1] * m[3],
            ]
        )
        * inv
    ).reshape(3, 3)


def is_identity(matrix) -> bool:
    """Exact test for the identity matrix."""
    return bool(np.array_equal(_as_matrix(matrix), np.eye(3)))


def transform_point(matrix, point) -> np.ndarray:
    """Product of a 3x3 matrix with a 3D vector."""
    return _as_matrix(matrix) @ _as_vector(point)