"""Big-sphere patch of a sphere-torus-patch bounding volume."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

import numpy as np


def _vector(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.size != 3:
        raise ValueError("a 3D vector needs exactly 3 components")
    return arr


@dataclass(eq=False)
class VoronoiRegion:
    """One limit of a patch's Voronoi region in the space of directions.

    The limit is the cone ``axis . v >= cosangle`` (a plane when ``cosangle``
    is zero); ``outer_stp`` is the index of the patch on its other side.
    """

    axis: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cosangle: float = 0.0
    outer_stp: int = -1

    def __post_init__(self) -> None:
        self.axis = _vector(self.axis).copy()
        self.cosangle = float(self.cosangle)
        self.outer_stp = int(self.outer_stp)

    def is_inside_plane(self, v) -> float:
        """Signed side of the limit plane; negative means outside."""
        return float(self.axis @ _vector(v))

    def is_inside_prime(self, v) -> float:
        """Signed margin to the limit cone; negative means outside."""
        return float(self.axis @ _vector(v)) - self.cosangle

    def is_inside(self, v) -> bool:
        return self.is_inside_prime(v) >= 0.0

    def distance(self, v) -> float:
        """Margin to the limit; the most negative is the farthest outside."""
        return self.is_inside_prime(v)


class BigSphere:
    """Spherical patch with three Voronoi limits."""

    def __init__(self, radius, center, regions) -> None:
        regions = list(regions)
        if len(regions) != 3:
            raise ValueError("a big sphere needs exactly three Voronoi limits")
        self.radius = float(radius)
        self.center = _vector(center).copy()
        self.regions = [copy.deepcopy(r) for r in regions]
        self.next_bvs = [-1, -1, -1]
        self.next_bv_prime = -1

    def __str__(self) -> str:
        c = self.center
        return (
            "type : big sphere\n"
            f"center : {c[0]:g}, {c[1]:g}, {c[2]:g}\n"
            f"radius : {self.radius:g}\n"
        )

    def support(self, v) -> np.ndarray:
        return self.center + _vector(v) * self.radius

    def support_h(self, v) -> float:
        return self.radius * float(np.linalg.norm(_vector(v)))

    def ray_cast(self, source, target, param=1.0):
        """Intersect the segment with the sphere.

        Returns ``(param, normal)`` on a hit, where ``param`` is the entry
        parameter (zero when the source is inside), or ``None`` on a miss.
        """
        source = _vector(source)
        r = _vector(target) - source
        delta = -float(source @ r)
        r_length = float(np.linalg.norm(r))
        sigma = delta * delta - r_length * (float(source @ source) - self.radius * self.radius)
        if sigma < 0.0:
            return None
        sqrt_sigma = sigma ** 0.5
        if delta + sqrt_sigma < 0.0:
            return None
        lambda1 = (delta - sqrt_sigma) / r_length
        if lambda1 > param:
            return None
        if lambda1 > 0.0:
            return lambda1, (source + r * lambda1) / self.radius
        return 0.0, np.zeros(3)

    def is_here(self, v) -> bool:
        return all(region.is_inside(v) for region in self.regions)

    def is_here_farthest_neighbour(self, v) -> bool:
        """Test the direction; order the violated neighbours, farthest first."""
        outside = [
            (region.distance(v), region.outer_stp)
            for region in self.regions
            if not region.is_inside(v)
        ]
        outside.sort(key=lambda item: item[0])
        order = [outer for _, outer in outside]
        self.next_bvs = order + [-1] * (3 - len(order))
        return not outside

    def is_here_farthest_neighbour_prime(self, v) -> bool:
        tmp1, tmp2, tmp3 = (region.is_inside_prime(v) for region in self.regions)
        if tmp1 >= 0 and tmp2 >= 0 and tmp3 >= 0:
            return True
        if tmp1 < tmp2:
            chosen = 0 if tmp1 < tmp3 else 2
        else:
            chosen = 1 if tmp2 < tmp3 else 2
        self.next_bv_prime = self.regions[chosen].outer_stp
        return False

    def is_here_first_neighbour(self, v) -> bool:
        for region in self.regions:
            if region.is_inside_prime(v) < 0:
                self.next_bv_prime = region.outer_stp
                return False
        return True

    def is_here_first_neighbour_prime(self, v, idp) -> bool:
        """Plane test that skips the limit toward the patch we came from."""
        for region in self.regions:
            if region.outer_stp != idp and region.is_inside_plane(v) < 0:
                self.next_bv_prime = region.outer_stp
                return False
        return True

    def is_here_hybrid(self, v, idp) -> bool:
        return self.is_here_first_neighbour_prime(v, idp)

    def next_bv(self, index) -> int:
        if 0 <= index < 3:
            return self.next_bvs[index]
        return -1

    def clone(self) -> "BigSphere":
        return copy.deepcopy(self)