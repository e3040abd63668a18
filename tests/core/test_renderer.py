"""1 フレーム描画（収集 → 奥行きソート → シェーディング → 射影）のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from tumbler.core.camera import OrthographicCamera
from tumbler.core.errors import IndexOutOfRangeError
from tumbler.core.motion import MotionStep
from tumbler.core.polyhedron import cube
from tumbler.core.renderer import gather_faces, project_face, render_frame
from tumbler.core.shading import Palette
from tumbler.core.surface import DrawingSurface, RecordingSurface
from tumbler.core.trajectory import Trajectory, precompute_trajectory
from tumbler.core.transform import Transform
from tumbler.core.vector import Vector

_PALETTE = Palette(colors=tuple((i * 30, i * 30, i * 30) for i in range(8)), outline=(1, 2, 3))


def _static_trajectory(n: int = 2) -> Trajectory:
    return precompute_trajectory(cube(), [MotionStep(frames=n)], frames_per_step=n)


def _render(traj: Trajectory, times: list[int], surface: RecordingSurface):
    return render_frame(
        traj,
        times,
        camera=OrthographicCamera(width=100.0, height=100.0, zoom=10.0),
        view=Transform.identity(),
        light=Vector(0.0, 0.0, 10.0),
        depth_anchor=Vector(0.0, 0.0, 100.0),
        palette=_PALETTE,
        facing_range=(0.0, 1.0),
        surface=surface,
    )


def test_recording_surface_satisfies_protocol() -> None:
    assert isinstance(RecordingSurface(), DrawingSurface)


def test_gather_faces_concatenates_times() -> None:
    traj = _static_trajectory(3)
    assert len(gather_faces(traj, [0, 2])) == 12
    assert gather_faces(traj, []) == []


def test_project_face_uses_view_and_camera() -> None:
    face = cube()[0]
    cam = OrthographicCamera(width=100.0, height=100.0, zoom=10.0)
    pts = project_face(face, view=Transform.identity(), camera=cam)
    assert pts == ((60.0, 40.0), (40.0, 40.0), (40.0, 60.0), (60.0, 60.0))

    moved = project_face(face, view=Transform.identity().translate(1.0, 0.0, 0.0), camera=cam)
    assert moved[0] == (70.0, 40.0)


def test_render_frame_draws_back_to_front() -> None:
    traj = _static_trajectory()
    surface = RecordingSurface()
    drawn = _render(traj, [0, 1], surface)

    assert len(drawn) == 12
    assert len(surface.calls) == 12
    assert [c.points for c in surface.calls] == [d.points for d in drawn]

    # 最奥は -Z 面、最前面は +Z 面。
    np.testing.assert_allclose(drawn[0].face.normal.as_tuple(), (0.0, 0.0, -1.0), atol=1e-12)
    np.testing.assert_allclose(drawn[-1].face.normal.as_tuple(), (0.0, 0.0, 1.0), atol=1e-12)
    assert drawn[-1].points == ((60.0, 40.0), (40.0, 40.0), (40.0, 60.0), (60.0, 60.0))

    # 同一キー（2 時刻の同じ面）は時刻順に並ぶ。
    assert drawn[0].face is traj[0][1]
    assert drawn[1].face is traj[1][1]


def test_render_frame_shades_and_outlines() -> None:
    surface = RecordingSurface()
    drawn = _render(_static_trajectory(), [0], surface)

    assert all(d.outline == (1, 2, 3) for d in drawn)
    assert drawn[0].fill == _PALETTE.colors[0]
    assert drawn[-1].fill == _PALETTE.colors[-1]
    assert {c.fill for c in surface.calls} <= set(_PALETTE.colors)


def test_render_frame_rejects_out_of_range_time() -> None:
    traj = _static_trajectory()
    with pytest.raises(IndexOutOfRangeError):
        _render(traj, [0, len(traj)], RecordingSurface())


def test_render_frame_does_not_clear_surface() -> None:
    surface = RecordingSurface()
    traj = _static_trajectory()
    _render(traj, [0], surface)
    _render(traj, [0], surface)
    assert len(surface.calls) == 12
    assert surface.clear_count == 0
