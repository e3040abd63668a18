"""軌道の事前計算（サブフレーム展開・ピボット評価・範囲外参照）のテスト群。"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pytest

from tumbler.core.errors import IndexOutOfRangeError
from tumbler.core.face import Face
from tumbler.core.motion import MotionStep
from tumbler.core.pivots import fixed
from tumbler.core.polyhedron import cube
from tumbler.core.trajectory import Trajectory, precompute_trajectory
from tumbler.core.vector import Vector


def test_length_is_sum_of_sub_frames() -> None:
    script = [MotionStep(frames=3), MotionStep(frames=5), MotionStep()]
    traj = precompute_trajectory(cube(), script, frames_per_step=4)
    assert len(traj) == 12
    assert traj.last_index == 11


def test_quarter_turn_about_fixed_pivot() -> None:
    step = MotionStep(angle=90.0, pivot=fixed(Vector(1.0, 1.0, 1.0)))
    traj = precompute_trajectory(cube(), [step], frames_per_step=10)

    # face 0 (+Z) の vertices[3] は (1, -1, 1)。
    moved = traj[9][0].vertices[3]
    np.testing.assert_allclose(moved.as_tuple(), (3.0, 1.0, 1.0), rtol=0.0, atol=1e-9)

    # 法線も頂点と一緒に回る（+X 面は +Y を向く）。
    np.testing.assert_allclose(traj[9][2].normal.as_tuple(), (0.0, 1.0, 0.0), rtol=0.0, atol=1e-9)


def test_index_zero_is_already_advanced() -> None:
    step = MotionStep(translation=Vector(0.0, -6.0, 0.0), frames=3)
    traj = precompute_trajectory(cube(), [step], frames_per_step=30)

    np.testing.assert_allclose(traj[0][0].center.as_tuple(), (0.0, -2.0, 1.0), rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(traj[2][0].center.as_tuple(), (0.0, -6.0, 1.0), rtol=0.0, atol=1e-12)


def test_pivot_sees_previous_snapshot() -> None:
    seen: list[tuple[Face, ...]] = []

    def _recording_pivot(faces: Sequence[Face]) -> Vector:
        seen.append(tuple(faces))
        return Vector(1.0, -1.0, 0.0)

    initial = cube()
    step = MotionStep(angle=-90.0, pivot=_recording_pivot, translation=Vector(0.5, 0.0, 0.0))
    traj = precompute_trajectory(initial, [step], frames_per_step=3)

    assert len(seen) == 3
    assert seen[0] == tuple(initial)
    assert seen[1] == traj[0]
    assert seen[2] == traj[1]


def test_out_of_range_index_raises() -> None:
    traj = precompute_trajectory(cube(), [MotionStep(frames=2)], frames_per_step=1)

    with pytest.raises(IndexOutOfRangeError):
        traj[2]
    with pytest.raises(IndexOutOfRangeError):
        traj[-1]
    # IndexError としても捕捉できる。
    with pytest.raises(IndexError):
        traj[100]


def test_slice_is_rejected() -> None:
    traj = Trajectory([tuple(cube())])
    with pytest.raises(TypeError):
        traj[0:1]


def test_non_integer_index_is_rejected() -> None:
    traj = precompute_trajectory(cube(), [MotionStep(frames=4)], frames_per_step=1)

    with pytest.raises(TypeError):
        traj[2.9]  # type: ignore[index]
    with pytest.raises(TypeError):
        traj[True]
    # numpy の整数はそのまま使える。
    assert traj[np.int64(3)] is traj[3]


def test_empty_initial_raises() -> None:
    with pytest.raises(ValueError):
        precompute_trajectory([], [MotionStep()], frames_per_step=1)
