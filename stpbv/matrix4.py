"""4x4 homogeneous matrix helpers."""

from __future__ import annotations

import numpy as np


def _as_matrix4(matrix) -> np.ndarray:
    m = np.asarray(matrix, dtype=float)
    if m.size != 16:
        raise ValueError("a 4x4 matrix needs exactly 16 entries")
    return m.reshape(4, 4)


def _as_vector3(vector) -> np.ndarray:
    v = np.asarray(vector, dtype=float).reshape(-1)
    if v.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return v


def identity4() -> np.ndarray:
    """The 4x4 identity matrix."""
    return np.eye(4)


def multiply4(a, b) -> np.ndarray:
    """Matrix product ``a @ b`` of two 4x4 matrices."""
    return _as_matrix4(a) @ _as_matrix4(b)


def determinant4(matrix) -> float:
    """Determinant by cofactor expansion."""
    m = _as_matrix4(matrix).reshape(-1)
    return float(
        m[3] * m[6] * m[9] * m[12] - m[2] * m[7] * m[9] * m[12]
        - m[3] * m[5] * m[10] * m[12] + m[1] * m[7] * m[10] * m[12]
        + m[2] * m[5] * m[11] * m[12] - m[1] * m[6] * m[11] * m[12]
        - m[3] * m[6] * m[8] * m[13] + m[2] * m[7] * m[8] * m[13]
        + m[3] * m[4] * m[10] * m[13] - m[0] * m[7] * m[10] * m[13]
        - m[2] * m[4] * m[11] * m[13] + m[0] * m[6] * m[11] * m[13]
        + m[3] * m[5] * m[8] * m[14] - m[1] * m[7] * m[8] * m[14]
        - m[3] * m[4] * m[9] * m[14] + m[0] * m[7] * m[9] * m[14]
        + m[1] * m[4] * m[11] * m[14] - m[0] * m[5] * m[11] * m[14]
        - m[2] * m[5] * m[8] * m[15] + m[1] * m[6] * m[8] * m[15]
        + m[2] * m[4] * m[9] * m[15] - m[0] * m[6] * m[9] * m[15]
        - m[1] * m[4] * m[10] * m[15] + m[0] * m[5] * m[10] * m[15]
    )


def inverse4(matrix) -> np.ndarray:
    """Inverse by the adjugate; raises ValueError for a singular matrix."""
    m = _as_matrix4(matrix).reshape(-1)
    det = determinant4(m)
    if det == 0.0:
        raise ValueError("matrix is singular")
    adj = np.array(
        [
            m[6] * m[11] * m[13] - m[7] * m[10] * m[13] + m[7] * m[9] * m[14]
            - m[5] * m[11] * m[14] - m[6] * m[9] * m[15] + m[5] * m[10] * m[15],
            m[3] * m[10] * m[13] - m[2] * m[11] * m[13] - m[3] * m[9] * m[14]
            + m[1] * m[11] * m[14] + m[2] * m[9] * m[15] - m[1] * m[10] * m[15],
            m[2] * m[7] * m[13] - m[3] * m[6] * m[13] + m[3] * m[5] * m[14]
            - m[1] * m[7] * m[14] - m[2] * m[5] * m[15] + m[1] * m[6] * m[15],
            m[3] * m[6] * m[9] - m[2] * m[7] * m[9] - m[3] * m[5] * m[10]
            + m[1] * m[7] * m[10] + m[2] * m[5] * m[11] - m[1] * m[6] * m[11],
            m[7] * m[10] * m[12] - m[6] * m[11] * m[12] - m[7] * m[8] * m[14]
            + m[4] * m[11] * m[14] + m[6] * m[8] * m[15] - m[4] * m[10] * m[15],
            m[2] * m[11] * m[12] - m[3] * m[10] * m[12] + m[3] * m[8] * m[14]
            - m[0] * m[11] * m[14] - m[2] * m[8] * m[15] + m[0] * m[10] * m[15],
            m[3] * m[6] * m[12] - m[2] * m[7] * m[12] - m[3] * m[4] * m[14]
            + m[0] * m[7] * m[14] + m[2] * m[4] * m[15] - m[0] * m[6] * m[15],
            m[2] * m[7] * m[8] - m[3] * m[6] * m[8] + m[3] * m[4] * m[10]
            - m[0] * m[7] * m[10] - m[2] * m[4] * m[11] + m[0] * m[6] * m[11],
            m[5] * m[11] * m[12] - m[7] * m[9] * m[12] + m[7] * m[8] * m[13]
            - m[4] * m[11] * m[13] - m[5] * m[8] * m[15] + m[4] * m[9] * m[15],
            m[3] * m[9] * m[12] - m[1] * m[11] * m[12] - m[3] * m[8] * m[13]
            + m[0] * m[11] * m[13] + m[1] * m[8] * m[15] - m[0] * m[9] * m[15],
            m[1] * m[7] * m[12] - m[3] * m[5] * m[12] + m[3] * m[4] * m[13]
            - m[0] * m[7] * m[13] - m[1] * m[4] * m[15] + m[0] * m[5] * m[15],
            m[3] * m[5] * m[8] - m[1] * m[7] * m[8] - m[3] * m[4] * m[9]
            + m[0] * m[7] * m[9] + m[1] * m[4] * m[11] - m[0] * m[5] * m[11],
            m[6] * m[9] * m[12] - m[5] * m[10] * m[12] - m[6] * m[8] * m[13]
            + m[4] * m[10] * m[13] + m[5] * m[8] * m[14] - m[4] * m[9] * m[14],
            m[1] * m[10] * m[12] - m[2] * m[9] * m[12] + m[2] * m[8] * m[13]
            - m[0] * m[10] * m[13] - m[1] * m[8] * m[14] + m[0] * m[9] * m[14],
            m[2] * m[5] * m[12] - m[1] * m[6] * m[12] - m[2] * m[4] * m[13]
            + m[0] * m[6] * m[13] + m[1] * m[4] * m[14] - m[0] * m[5] * m[14],
            m[1] * m[6] * m[8] - m[2] * m[5] * m[8] + m[2] * m[4] * m[9]
            - m[0] * m[6] * m[9] - m[1] * m[4] * m[10] + m[0] * m[5] * m[10],
        ]
    )
    return (adj / det).reshape(4, 4)


def trace4(matrix) -> float:
    """Sum of the diagonal entries."""
    m = _as_matrix4(matrix)
    return float(m[0, 0] + m[1, 1] + m[2, 2] + m[3, 3])


def transpose4(matrix) -> np.ndarray:
    return _as_matrix4(matrix).T.copy()


def transform_affine(matrix, point) -> np.ndarray:
    """Apply the rotation block and translation column of ``matrix`` to a 3D point."""
    m = _as_matrix4(matrix)
    return m[:3, :3] @ _as_vector3(point) + m[:3, 3]


def compose_transform(rotation, translation) -> np.ndarray:
    """Homogeneous 4x4 matrix from a 3x3 rotation and a translation vector."""
    r = np.asarray(rotation, dtype=float)
    if r.size != 9:
        raise ValueError("a 3x3 matrix needs exactly 9 entries")
    result = np.eye(4)
    result[:3, :3] = r.reshape(3, 3)
    result[:3, 3] = _as_vector3(translation)
    return result