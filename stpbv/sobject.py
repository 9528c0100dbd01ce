"""Convex objects that answer support-point queries in world coordinates."""

from __future__ import annotations

import abc
import copy
import enum
from dataclasses import dataclass

import numpy as np

from stpbv.matrix3 import EPSILON

_ULONG_MASK = (1 << 64) - 1


def _vector(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return arr


class ObjectType(enum.IntEnum):
    """Kind of a convex object; not meant for casting."""

    TS_Object = 0
    TPolyhedron = 1
    TSTP_BV = 2
    TSphere = 3
    TBox = 4
    TSuperellipsoid = 5
    TSTP_BV_WithPolyhedron = 6
    TPoint = 7
    TCapsule = 8
    TCone = 9
    TCylinder = 10


@dataclass
class TimeStamp:
    """Four-word counter telling whether an object moved between two queries."""

    value1: int = 0
    value2: int = 0
    value3: int = 0
    value4: int = 0

    def increment(self) -> None:
        """Add one, carrying into the higher words on overflow."""
        self.value1 = (self.value1 + 1) & _ULONG_MASK
        if self.value1:
            return
        self.value2 = (self.value2 + 1) & _ULONG_MASK
        if self.value2:
            return
        self.value3 = (self.value3 + 1) & _ULONG_MASK
        if self.value3:
            return
        self.value4 = (self.value4 + 1) & _ULONG_MASK

    def decrement(self) -> None:
        """Subtract one, borrowing from the higher words on underflow."""
        self.value1 = (self.value1 - 1) & _ULONG_MASK
        if self.value1 != _ULONG_MASK:
            return
        self.value2 = (self.value2 - 1) & _ULONG_MASK
        if self.value2 != _ULONG_MASK:
            return
        self.value3 = (self.value3 - 1) & _ULONG_MASK
        if self.value3 != _ULONG_MASK:
            return
        self.value4 = (self.value4 - 1) & _ULONG_MASK

    def __eq__(self, other) -> bool:
        # Only the two low words take part in the comparison.
        if not isinstance(other, TimeStamp):
            return NotImplemented
        return self.value1 == other.value1 and self.value2 == other.value2

    __hash__ = None


class SObject(abc.ABC):
    """A convex object placed in the world by a rotation and a translation.

    Subclasses define ``l_support`` in local coordinates; ``support`` maps a
    world direction into the object frame and the answer back out.
    """

    def __init__(self) -> None:
        self.stamp = TimeStamp()
        self._rotation = np.eye(3)
        self._translation = np.zeros(3)

    @abc.abstractmethod
    def l_support(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        """Support point for a local direction; returns ``(point, feature)``."""

    @abc.abstractmethod
    def support(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        """Support point for a world direction; returns ``(point, feature)``."""

    @property
    def orientation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def position(self) -> np.ndarray:
        return self._translation.copy()

    def set_orientation(self, rotation) -> None:
        r = np.asarray(rotation, dtype=float)
        if r.size != 9:
            raise ValueError("a 3x3 matrix needs exactly 9 entries")
        self._rotation = r.reshape(3, 3).copy()
        self.stamp.increment()

    def set_position(self, position) -> None:
        self._translation = _vector(position).copy()
        self.stamp.increment()

    def add_translation(self, offset) -> None:
        self._translation = self._translation + _vector(offset)
        self.stamp.increment()

    def reset_transformation(self) -> None:
        self._rotation = np.eye(3)
        self._translation = np.zeros(3)
        self.stamp.increment()

    def transformation_matrix(self) -> np.ndarray:
        """The homogeneous transform as 16 values in column-major order."""
        m = np.eye(4)
        m[:3, :3] = self._rotation
        m[:3, 3] = self._translation
        return m.T.reshape(-1).copy()

    def object_type(self) -> ObjectType:
        return ObjectType.TS_Object

    def clone(self) -> "SObject":
        return copy.deepcopy(self)

    def _world_support(self, vp: np.ndarray, last_feature: int) -> tuple[np.ndarray, int]:
        point, feature = self.l_support(vp, last_feature)
        return self._rotation @ _vector(point) + self._translation, feature


class NormalizedObject(SObject):
    """Object whose local support function expects a unit direction."""

    def support(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        vp = _vector(v) @ self._rotation
        norm = float(np.linalg.norm(vp))
        if norm > EPSILON:
            vp = vp / norm
        else:
            vp = np.array([1.0, 0.0, 0.0])
        return self._world_support(vp, last_feature)


class NonNormalizedObject(SObject):
    """Object whose local support function takes the direction unscaled."""

    def support(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        vp = _vector(v) @ self._rotation
        if float(vp @ vp) == 0.0:
            vp = np.array([1.0, 0.0, 0.0])
        return self._world_support(vp, last_feature)