# stpbv

This package answers support-point queries for convex shapes built from
sphere-torus patches (STP-BV). It also contains the small linear-algebra
toolkit that those queries use.

A *support point* of a convex body in a direction `v` is a point of the body
that lies farthest along `v`. Distance and penetration algorithms of the GJK
family need no other query, so an object only has to supply this one.

## Installation

```
pip install stpbv
```

To run the test suite:

```
pip install "stpbv[test]"
pytest
```

## Modules

### `stpbv.matrix3`

This module covers 3x3 rotations and scalar constants (`INFINITY`, `EPSILON`,
`EPSILON10`, `DEFAULT_PRECISION`, `PI`).

- `Quaternion(x, y, z, w)` is a frozen dataclass. It provides:
  - `from_axis_angle(axis, angle)`, which normalises the axis;
  - `conjugate()`;
  - `*` for the Hamilton product, plus `+` and `-`;
  - `to_matrix()`.
- `quaternion_to_matrix(q0, q1, q2, q3)` accepts a quaternion that is not of
  unit length. It raises `ValueError` for the zero quaternion.
- `axis_angle_matrix(angle, axis)`, `roll_pitch_yaw_matrix(roll, pitch, yaw)`,
  `yaw_pitch_roll_matrix(yaw, pitch, roll)` and `gl_rotation(axis, theta)`
  build rotation matrices. `gl_rotation` uses the glRotate formula and expects
  a unit axis.
- `determinant3`, `inverse3`, `is_identity` and `transform_point` work on a
  3x3 matrix. `inverse3` raises `ValueError` when the matrix is singular.
  `is_identity` is an exact comparison.

### `stpbv.matrix4`

This module covers 4x4 homogeneous matrices: `identity4`, `multiply4`,
`determinant4`, `inverse4`, `trace4`, `transpose4`, `transform_affine` and
`compose_transform`.

- `inverse4` raises `ValueError` when the matrix is singular.
- `transform_affine` applies the rotation block and the translation column to
  a 3D point.
- `compose_transform(rotation, translation)` builds the 4x4 matrix from a
  rotation and a translation.

### `stpbv.sobject`

This module holds the base classes for convex objects placed in the world.

`SObject` is an abstract class. It holds:
- an orientation, set with `set_orientation` and read from `orientation`;
- a position, set with `set_position` or `add_translation` and read from
  `position`.

`reset_transformation()` returns the object to the identity transform.
`transformation_matrix()` returns the homogeneous transform as 16 values in
column-major order. Every change to the placement increments the object's
`stamp`.

`support(v, last_feature=-1)` maps a world direction into the object frame. It
calls the subclass's `l_support` and maps the resulting point back to world
coordinates. It returns a `(point, feature)` pair.

There are two kinds of subclass:
- `NormalizedObject` passes a unit direction to `l_support`.
- `NonNormalizedObject` passes the unscaled direction.

In both, a zero direction is replaced by `(1, 0, 0)`.

`TimeStamp` is a four-word counter with `increment()` and `decrement()`, which
carry and borrow across the words. Two stamps compare equal when their two
low words are equal.

`ObjectType` is an `IntEnum` that names each kind of object.

### `stpbv.big_sphere`

`VoronoiRegion(axis, cosangle, outer_stp)` is one limit of a patch's Voronoi
region. The limit is the cone `axis . v >= cosangle`; when `cosangle` is zero
it is a plane. `outer_stp` is the index of the patch on the other side of the
limit.

`BigSphere(radius, center, regions)` is a spherical patch with exactly three
limits. It provides:
- `support` and `support_h`;
- `ray_cast`, which returns `(param, normal)` on a hit and `None` on a miss;
- the containment tests used by the neighbour walks: `is_here`,
  `is_here_farthest_neighbour`, `is_here_farthest_neighbour_prime`,
  `is_here_first_neighbour`, `is_here_first_neighbour_prime` and
  `is_here_hybrid`.

When a test fails, it records the neighbour to visit next. That neighbour is
read with `next_bv(index)` or from the `next_bv_prime` attribute.

### `stpbv.geometry`

This module has helpers for building patch display data:
- `sphere_approximation(triangle, step, center, radius)` tessellates a
  spherical `Triangle`.
- `arc_points_between(p1, p2, center, step)` returns the points of a circular
  arc.
- `cone_points_between(p1, p2, axis, step)` returns the points and the
  rotation matrix of one step.
- `lines_common_point(l1p1, l1p2, l2p1, l2p2)` returns the point where two
  lines meet. It raises `ValueError` for parallel or degenerate lines.
- `compute_center(points)` returns the mean of the points.
- `PointsComparator(axis, points)` compares two point indices by the sign of
  their cross product along an axis.

### `stpbv.stp_bv`

`StpBV(patches)` is a `NormalizedObject` assembled from patches such as
`BigSphere`. Patches are added with `add_patch`, and `feature_count()` gives
their number.

Several support searches are available:
- `support_naive`;
- `support_farthest_neighbour`;
- `support_farthest_neighbour_prime`;
- `support_first_neighbour`;
- `support_first_neighbour_prime`;
- `support_hybrid`.

`l_support` uses the hybrid search. When a walk finds no patch, it falls back
to another search and logs a warning. A search on a volume without patches
raises `ValueError`.

`support_h(v)` returns the support height. `clone()` returns a deep copy of the
volume. `ray_cast` always reports a miss (`None`).

## Example

```python
import numpy as np

from stpbv.big_sphere import BigSphere, VoronoiRegion
from stpbv.stp_bv import StpBV

regions = [
    VoronoiRegion(axis=np.array([1.0, 0.0, 0.0]), cosangle=0.0, outer_stp=0),
    VoronoiRegion(axis=np.array([0.0, 1.0, 0.0]), cosangle=0.0, outer_stp=0),
    VoronoiRegion(axis=np.array([0.0, 0.0, 1.0]), cosangle=0.0, outer_stp=0),
]
patch = BigSphere(2.0, np.zeros(3), regions)
volume = StpBV([patch])

point, feature = volume.l_support(np.array([1.0, 0.0, 0.0]), -1)
# point == [2., 0., 0.], feature == 0

volume.set_position([1.0, 0.0, 0.0])
world_point, feature = volume.support([1.0, 0.0, 0.0], feature)
# world_point == [3., 0., 0.]
```

The returned feature is the index of the patch that supplied the point. Pass
it back on the next query. When the direction changes only a little between
calls, the walk then starts at the right patch and ends quickly.

## What this package does not do

- It does not read bounding-volume description files. It also provides no
  small-sphere or torus patches. A volume is assembled in code from patch
  objects.
- It has no saving or loading of volumes to or from disk.
- It has no polyhedra, boxes, capsules or other primitive shapes beyond the
  base classes.
- It has no scene, distance, witness-point or penetration-depth computation.
  It supplies the support queries that such algorithms use.
- It has no command-line tool and no rendering.