import math

import pytest

from turtlesweep.errors import NonFiniteInputError
from turtlesweep.path import Forward, Pitch, Roll, SetHeading, Yaw
from turtlesweep.pose import Pose, apply_rotations
from turtlesweep.vecmath import cross, dot, magnitude


def _close(a, b, tol=1e-9):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))


def test_default_pose():
    p = Pose()
    assert p.position == (0.0, 0.0, 0.0)
    assert p.heading == (1.0, 0.0, 0.0)
    assert p.up == (0.0, 0.0, 1.0)
    assert p.right == cross(p.heading, p.up)


def test_forward_and_back():
    p = Pose().forward(10)
    assert p.position == (10.0, 0.0, 0.0)
    assert p.back(4).position == (6.0, 0.0, 0.0)
    assert Pose().forward(-3).position == (-3.0, 0.0, 0.0)


def test_move_up_and_down():
    p = Pose().move_up(2).move_down(5)
    assert p.position == (0.0, 0.0, -3.0)


def test_yaw_left_turns_toward_y():
    p = Pose().yaw(90)
    assert _close(p.heading, (0, 1, 0))
    assert _close(p.up, (0, 0, 1))


def test_pitch_rotates_heading_and_up():
    p = Pose().pitch(90)
    assert _close(p.heading, (0, 0, 1))
    assert _close(p.up, (-1, 0, 0))


def test_roll_keeps_heading():
    p = Pose().roll(90)
    assert _close(p.heading, (1, 0, 0))
    assert _close(p.up, (0, -1, 0))


def test_frame_stays_orthonormal_after_many_turns():
    p = Pose()
    for _ in range(500):
        p = p.yaw(37.1).pitch(-11.3).roll(5.9)
    assert math.isclose(magnitude(p.heading), 1.0, abs_tol=1e-12)
    assert math.isclose(magnitude(p.up), 1.0, abs_tol=1e-12)
    assert abs(dot(p.heading, p.up)) < 1e-9


def test_set_heading_normalizes():
    p = Pose().set_heading((0, 3, 0), (0, 0, 2))
    assert p.heading == (0.0, 1.0, 0.0)
    assert p.up == (0.0, 0.0, 1.0)


def test_apply_dispatches_each_command():
    cmds = [Forward(10), Yaw(90), Forward(5), Pitch(0), Roll(0),
            SetHeading((1, 0, 0), (0, 0, 1))]
    p = Pose()
    for cmd in cmds:
        p = p.apply(cmd)
    assert _close(p.position, (10, 5, 0))
    assert p.heading == (1.0, 0.0, 0.0)


def test_apply_rotations_skips_forward():
    p = apply_rotations(Pose(), [Forward(100), Yaw(180)])
    assert p.position == (0.0, 0.0, 0.0)
    assert _close(p.heading, (-1, 0, 0))


def test_apply_unknown_command():
    with pytest.raises(TypeError):
        Pose().apply("f 10")


@pytest.mark.parametrize("move, command", [
    (lambda p: p.forward(math.nan), "f"),
    (lambda p: p.back(math.inf), "b"),
    (lambda p: p.yaw(math.nan), "th"),
    (lambda p: p.pitch(None), "tv"),
    (lambda p: p.roll("x"), "tr"),
    (lambda p: p.set_heading((math.nan, 0, 0), (0, 0, 1)), "set-heading"),
])
def test_movement_rejects_non_finite(move, command):
    with pytest.raises(NonFiniteInputError) as info:
        move(Pose())
    assert info.value.command == command
