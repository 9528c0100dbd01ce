import numpy as np
import pytest

from stpbv.big_sphere import BigSphere, VoronoiRegion


def make_sphere(radius=2.0, center=(1.0, 0.0, 0.0)):
    regions = [
        VoronoiRegion([1.0, 0.0, 0.0], 0.0, 1),
        VoronoiRegion([0.0, 1.0, 0.0], 0.0, 2),
        VoronoiRegion([0.0, 0.0, 1.0], 0.0, 3),
    ]
    return BigSphere(radius, center, regions)


def test_requires_three_regions():
    with pytest.raises(ValueError):
        BigSphere(1.0, [0.0, 0.0, 0.0], [VoronoiRegion([1.0, 0.0, 0.0])])


def test_support_and_support_h():
    s = make_sphere()
    v = np.array([0.0, 0.6, 0.8])
    np.testing.assert_allclose(s.support(v), s.center + v * s.radius)
    assert s.support_h([0.0, 3.0, 4.0]) == pytest.approx(5.0 * s.radius)


def test_is_here_inside_and_outside():
    s = make_sphere()
    inside = np.ones(3) / np.sqrt(3)
    assert s.is_here(inside)
    assert not s.is_here([-1.0, 0.0, 0.0])


def test_farthest_neighbour_orders_by_violation():
    s = make_sphere()
    assert not s.is_here_farthest_neighbour([-0.8, -0.6, 0.0])
    assert [s.next_bv(i) for i in range(3)] == [1, 2, -1]
    assert not s.is_here_farthest_neighbour([-0.6, -0.8, 0.0])
    assert [s.next_bv(i) for i in range(3)] == [2, 1, -1]
    assert s.next_bv(5) == -1


def test_farthest_neighbour_inside_clears_list():
    s = make_sphere()
    assert s.is_here_farthest_neighbour([0.5, 0.5, 0.5])
    assert [s.next_bv(i) for i in range(3)] == [-1, -1, -1]


def test_farthest_neighbour_prime_picks_worst_limit():
    s = make_sphere()
    assert not s.is_here_farthest_neighbour_prime([-0.6, -0.8, 0.0])
    assert s.next_bv_prime == 2
    assert s.is_here_farthest_neighbour_prime([0.1, 0.2, 0.3])


def test_first_neighbour_picks_first_violated():
    s = make_sphere()
    assert not s.is_here_first_neighbour([0.5, -0.1, -0.9])
    assert s.next_bv_prime == 2


def test_first_neighbour_prime_skips_previous_patch():
    s = make_sphere()
    v = [-1.0, 0.0, 0.0]
    assert not s.is_here_first_neighbour_prime(v, -1)
    assert s.next_bv_prime == 1
    assert s.is_here_first_neighbour_prime(v, 1)
    assert s.is_here_hybrid(v, 1) == s.is_here_first_neighbour_prime(v, 1)
    assert not s.is_here_hybrid([0.0, -1.0, 0.0], 1)
    assert s.next_bv_prime == 2


def test_ray_cast_miss():
    s = BigSphere(1.0, [0.0, 0.0, 0.0], make_sphere().regions)
    assert s.ray_cast([-2.0, 5.0, 0.0], [-1.0, 5.0, 0.0], 1.0) is None


def test_ray_cast_from_inside():
    s = BigSphere(1.0, [0.0, 0.0, 0.0], make_sphere().regions)
    hit = s.ray_cast([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], 1.0)
    assert hit is not None
    param, normal = hit
    assert param == 0.0
    np.testing.assert_allclose(normal, np.zeros(3))


def test_ray_cast_hit_normal_is_unit():
    s = BigSphere(1.0, [0.0, 0.0, 0.0], make_sphere().regions)
    hit = s.ray_cast([-2.0, 0.0, 0.0], [-1.0, 0.0, 0.0], 1.0)
    assert hit is not None
    param, normal = hit
    assert 0.0 < param <= 1.0
    assert np.linalg.norm(normal) == pytest.approx(1.0)


def test_clone_is_independent():
    s = make_sphere()
    c = s.clone()
    c.regions[0].outer_stp = 42
    c.center[0] = 9.0
    assert s.regions[0].outer_stp == 1
    assert s.center[0] == 1.0
    np.testing.assert_allclose(c.support([0.0, 1.0, 0.0]), [9.0, 2.0, 0.0])


def test_str_mentions_radius():
    assert "radius : 2" in str(make_sphere())