"""Geometric helpers used to build the display data of a bounding volume."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from stpbv.matrix3 import gl_rotation


def _vector(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return arr


def _normalized(v: np.ndarray) -> np.ndarray:
    return v / float(np.linalg.norm(v))


def _safe_acos(x: float) -> float:
    return math.acos(max(-1.0, min(1.0, x)))


@dataclass
class Triangle:
    """Three vertices of a triangle."""

    vertex1: np.ndarray
    vertex2: np.ndarray
    vertex3: np.ndarray

    def __post_init__(self) -> None:
        self.vertex1 = _vector(self.vertex1).copy()
        self.vertex2 = _vector(self.vertex2).copy()
        self.vertex3 = _vector(self.vertex3).copy()

    def __iter__(self):
        return iter((self.vertex1, self.vertex2, self.vertex3))

    def subdivide(self) -> list["Triangle"]:
        """Split into four triangles through the edge midpoints."""
        a, b, c = self
        ab = (a + b) / 2.0
        bc = (b + c) / 2.0
        ca = (c + a) / 2.0
        return [
            Triangle(a, ab, ca),
            Triangle(ab, b, bc),
            Triangle(ab, bc, ca),
            Triangle(ca, bc, c),
        ]


class PointsComparator:
    """Orders point indices by the sign of their cross product along an axis."""

    def __init__(self, axis, points) -> None:
        self.axis = _vector(axis).copy()
        self.points = [_vector(p).copy() for p in points]

    def __call__(self, id1, id2) -> bool:
        count = len(self.points)
        if not (0 <= id1 < count and 0 <= id2 < count):
            return False
        return float(np.cross(self.points[id1], self.points[id2]) @ self.axis) > 0.0


def sphere_approximation(triangle, step, center, radius) -> list[np.ndarray]:
    """Tessellate a spherical triangle.

    The triangle is subdivided ``step // 2`` times; each resulting vertex is
    projected onto the sphere and returned relative to ``center``, three
    points per triangle.
    """
    center = _vector(center)
    radius = float(radius)
    depth = int(step) // 2
    result: list[np.ndarray] = []

    def visit(tri: Triangle, current: int) -> None:
        if current < depth:
            for child in tri.subdivide():
                visit(child, current + 1)
        else:
            result.extend(_normalized(v - center) * radius for v in tri)

    visit(triangle, 0)
    return result


def arc_points_between(p1, p2, center, step) -> list[np.ndarray]:
    """Points of the circular arc from ``p1`` to ``p2`` around ``center``.

    The arc has ``step`` segments; its radius is the mean distance of the two
    end points to the center.
    """
    p1 = _vector(p1)
    p2 = _vector(p2)
    center = _vector(center)
    v1 = p1 - center
    v2p = p2 - center
    k = (float(np.linalg.norm(v2p)) + float(np.linalg.norm(v2p))) / 2
    v1 = _normalized(v1)
    v2p = _normalized(v2p)
    angle = _safe_acos(float(v1 @ v2p)) / step
    v3 = _normalized(np.cross(v1, v2p))
    v2 = np.cross(v3, v1)
    basis = np.column_stack((v1, v2, v3))

    points = [p1.copy()]
    for i in range(1, step):
        a = angle * i
        local = np.array([math.cos(a), math.sin(a), 0.0])
        points.append(basis @ local * k + center)
    points.append(p2.copy())
    return points


def cone_points_between(p1, p2, axis, step) -> tuple[list[np.ndarray], np.ndarray]:
    """Points swept from ``p1`` toward ``p2`` by rotating about ``axis``.

    Returns the ``step + 1`` points and the rotation matrix of one step.
    """
    p1 = _vector(p1)
    p2 = _vector(p2)
    axis = _vector(axis)
    start = _normalized(p1 - axis * float(p1 @ axis))
    end = _normalized(p2 - axis * float(p2 @ axis))
    angle = _safe_acos(float(start @ end)) / step
    rotation = gl_rotation(axis, angle)

    points = [p1.copy()]
    for _ in range(step - 1):
        points.append(rotation @ points[-1])
    points.append(p2.copy())
    return points, rotation


def lines_common_point(l1p1, l1p2, l2p1, l2p2) -> np.ndarray:
    """Intersection of the line through l1p1, l1p2 with the line through l2p1, l2p2."""
    l1p1 = _vector(l1p1)
    l2p1 = _vector(l2p1)
    v1 = l1p1 - _vector(l1p2)
    v2 = l2p1 - _vector(l2p2)

    denom_xy = v2[0] * v1[1] - v1[0] * v2[1]
    denom_yz = v2[1] * v1[2] - v2[2] * v1[1]
    if abs(denom_xy) > 1e-8:
        t = (v2[0] * (l2p1[1] - l1p1[1]) + v2[1] * (l1p1[0] - l2p1[0])) / denom_xy
    elif abs(denom_yz) > 1e-8:
        t = (v2[1] * (l2p1[2] - l1p1[2]) + v2[2] * (l1p1[1] - l2p1[1])) / denom_yz
    else:
        denom_zx = v2[2] * v1[0] - v2[0] * v1[2]
        if denom_zx == 0.0:
            raise ValueError("the lines are parallel or degenerate")
        t = (v2[2] * (l2p1[0] - l1p1[0]) + v2[0] * (l1p1[2] - l2p1[2])) / denom_zx
    return l1p1 + t * v1


def compute_center(points) -> np.ndarray:
    """Mean of the given points."""
    pts = [_vector(p) for p in points]
    if not pts:
        raise ValueError("cannot compute the center of no points")
    return np.sum(pts, axis=0) / len(pts)