import math

import numpy as np
import pytest

from stpbv.matrix3 import axis_angle_matrix
from stpbv.matrix4 import compose_transform
from stpbv.sobject import (
    NonNormalizedObject,
    NormalizedObject,
    ObjectType,
    SObject,
    TimeStamp,
)

MAX = (1 << 64) - 1


class UnitBall(NormalizedObject):
    def l_support(self, v, last_feature=-1):
        return np.asarray(v, dtype=float), last_feature + 1


class Echo(NonNormalizedObject):
    def l_support(self, v, last_feature=-1):
        return np.asarray(v, dtype=float), last_feature


def test_object_type_numbering_follows_declaration_order():
    assert ObjectType(0) is ObjectType.TS_Object
    assert ObjectType(8) is ObjectType.TCapsule
    assert ObjectType(10) is ObjectType.TCylinder


def test_timestamp_increment_carries():
    stamp = TimeStamp(value1=MAX)
    stamp.increment()
    assert (stamp.value1, stamp.value2, stamp.value3, stamp.value4) == (0, 1, 0, 0)


def test_timestamp_decrement_borrows_through_all_words():
    stamp = TimeStamp()
    stamp.decrement()
    assert (stamp.value1, stamp.value2, stamp.value3, stamp.value4) == (MAX, MAX, MAX, MAX)


def test_timestamp_increment_then_decrement_round_trip():
    stamp = TimeStamp(value1=MAX, value2=MAX)
    stamp.increment()
    stamp.decrement()
    assert (stamp.value1, stamp.value2, stamp.value3, stamp.value4) == (MAX, MAX, 0, 0)


def test_timestamp_equality_uses_low_words_only():
    assert TimeStamp(1, 2, 3, 4) == TimeStamp(1, 2, 9, 9)
    assert not TimeStamp(1, 2) == TimeStamp(1, 3)


def test_sobject_is_abstract():
    with pytest.raises(TypeError):
        SObject()


def test_default_object_type():
    assert SObject.object_type(UnitBall()) is ObjectType(0)


def test_normalized_support_is_rotation_invariant_for_ball():
    ball = UnitBall()
    ball.set_orientation(axis_angle_matrix(math.pi / 3, [0.0, 0.0, 1.0]))
    ball.set_position([1.0, 2.0, 3.0])
    point, feature = ball.support([0.0, 3.0, 4.0], 4)
    np.testing.assert_allclose(point, np.array([0.0, 0.6, 0.8]) + [1.0, 2.0, 3.0], atol=1e-12)
    assert feature == 5


def test_normalized_support_of_zero_direction_uses_x_axis():
    ball = UnitBall()
    rotation = axis_angle_matrix(math.pi / 2, [0.0, 0.0, 1.0])
    ball.set_orientation(rotation)
    point, _ = ball.support([0.0, 0.0, 0.0])
    np.testing.assert_allclose(point, rotation @ np.array([1.0, 0.0, 0.0]), atol=1e-12)


def test_non_normalized_support_keeps_length():
    echo = Echo()
    echo.set_orientation(axis_angle_matrix(0.7, [1.0, 1.0, 0.0] / np.sqrt(2)))
    echo.set_position([0.5, -1.0, 2.0])
    v = np.array([2.0, -3.0, 5.0])
    point, feature = echo.support(v, 11)
    np.testing.assert_allclose(point, v + [0.5, -1.0, 2.0], atol=1e-12)
    assert feature == 11


def test_non_normalized_zero_direction():
    echo = Echo()
    point, _ = NonNormalizedObject.support(echo, [0.0, 0.0, 0.0], -1)
    np.testing.assert_allclose(point, [1.0, 0.0, 0.0])


def test_transformation_matrix_is_column_major():
    obj = UnitBall()
    rotation = axis_angle_matrix(1.1, [0.0, 1.0, 0.0])
    obj.set_orientation(rotation)
    obj.set_position([4.0, 5.0, 6.0])
    expected = compose_transform(rotation, [4.0, 5.0, 6.0]).T.reshape(-1)
    np.testing.assert_allclose(obj.transformation_matrix(), expected)


def test_reset_transformation_restores_identity():
    obj = UnitBall()
    obj.set_orientation(axis_angle_matrix(0.4, [1.0, 0.0, 0.0]))
    obj.add_translation([1.0, 1.0, 1.0])
    obj.reset_transformation()
    np.testing.assert_allclose(obj.orientation, np.eye(3))
    np.testing.assert_allclose(obj.position, np.zeros(3))


def test_bad_position_rejected():
    with pytest.raises(ValueError):
        SObject.set_position(UnitBall(), [1.0, 2.0])