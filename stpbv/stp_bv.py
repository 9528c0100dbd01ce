"""Sphere-torus-patch bounding volume: a convex object made of surface patches."""

from __future__ import annotations

import logging

import numpy as np

from stpbv.sobject import NormalizedObject, ObjectType

_log = logging.getLogger(__name__)


def _vector(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return arr


class StpBV(NormalizedObject):
    """Bounding volume whose surface is a set of patches.

    Each patch owns a Voronoi region in the space of directions. A support
    query walks from patch to patch until it reaches the one whose region
    holds the direction. A patch provides ``support``, the ``is_here*``
    tests, ``next_bv``, the ``next_bv_prime`` attribute and ``clone``.
    """

    def __init__(self, patches=()) -> None:
        super().__init__()
        self._patches = list(patches)

    @property
    def patches(self) -> tuple:
        return tuple(self._patches)

    def add_patch(self, patch) -> None:
        self._patches.append(patch)

    def feature_count(self) -> int:
        return len(self._patches)

    def object_type(self) -> ObjectType:
        return ObjectType.TSTP_BV

    def clone(self) -> "StpBV":
        result = StpBV(patch.clone() for patch in self._patches)
        result.stamp = type(self.stamp)(
            self.stamp.value1, self.stamp.value2, self.stamp.value3, self.stamp.value4
        )
        result._rotation = self._rotation.copy()
        result._translation = self._translation.copy()
        return result

    def l_support(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        return self.support_hybrid(v, last_feature)

    def support_h(self, v) -> float:
        v = _vector(v)
        point, _ = self.l_support(v, -1)
        return float(v @ _vector(point))

    def ray_cast(self, source, target):
        """Ray casting is not supported by this volume: always a miss."""
        _vector(source)
        _vector(target)
        return None

    def _require_patches(self) -> None:
        if not self._patches:
            raise ValueError("the bounding volume has no patches")

    def _fallback(self, v) -> np.ndarray:
        if self._patches:
            return _vector(self._patches[0].support(v))
        return np.zeros(3)

    def _start(self, last_feature: int):
        self._require_patches()
        if last_feature != -1:
            return self._patches[last_feature]
        return self._patches[0]

    def support_naive(self, v) -> np.ndarray:
        """Scan every patch for the one whose region holds ``v``."""
        v = _vector(v)
        for patch in self._patches:
            if patch.is_here(v):
                return _vector(patch.support(v))
        _log.warning("no patch region holds the direction (naive search)")
        return self._fallback(v)

    def support_farthest_neighbour(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        v = _vector(v)
        current = self._start(last_feature)
        found = False
        for _ in range(len(self._patches)):
            found = current.is_here_farthest_neighbour(v)
            if found:
                break
            last_feature = current.next_bv(0)
            current = self._patches[last_feature]
        if not found:
            _log.warning("no patch region holds the direction (farthest search)")
            return self._fallback(v), last_feature
        return _vector(current.support(v)), last_feature

    def support_farthest_neighbour_prime(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        v = _vector(v)
        current = self._start(last_feature)
        found = False
        for _ in range(len(self._patches)):
            found = current.is_here_farthest_neighbour_prime(v)
            if found:
                break
            last_feature = current.next_bv_prime
            current = self._patches[last_feature]
        if not found:
            _log.warning("no patch region holds the direction (farthest prime search)")
            return self.support_naive(v), last_feature
        return _vector(current.support(v)), last_feature

    def support_first_neighbour(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        v = _vector(v)
        current = self._start(last_feature)
        found = False
        for _ in range(len(self._patches)):
            found = current.is_here_first_neighbour(v)
            if found:
                break
            last_feature = current.next_bv_prime
            current = self._patches[last_feature]
        if not found:
            _log.warning("no patch region holds the direction (first search)")
            return self._fallback(v), last_feature
        return _vector(current.support(v)), last_feature

    def _walk_with_origin(self, v, last_feature: int, test_name: str):
        v = _vector(v)
        self._require_patches()
        if last_feature == -1:
            last_feature = 0
        current = self._patches[last_feature]
        idp = -1  # patch we arrived from
        found = False
        for _ in range(len(self._patches)):
            found = getattr(current, test_name)(v, idp)
            if found:
                break
            idp = last_feature
            last_feature = current.next_bv_prime
            current = self._patches[last_feature]
        if not found:
            _log.warning("no patch region holds the direction (%s)", test_name)
            return self.support_farthest_neighbour_prime(v, last_feature)
        return _vector(current.support(v)), last_feature

    def support_first_neighbour_prime(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        return self._walk_with_origin(v, last_feature, "is_here_first_neighbour_prime")

    def support_hybrid(self, v, last_feature=-1) -> tuple[np.ndarray, int]:
        return self._walk_with_origin(v, last_feature, "is_here_hybrid")