from __future__ import annotations

import math

from tumbler.core.animation import Animation
from tumbler.core.camera import OrthographicCamera
from tumbler.core.motion import MotionStep
from tumbler.core.polyhedron import cube
from tumbler.core.renderer import render_frame
from tumbler.core.scene import Scene
from tumbler.core.shading import Palette
from tumbler.core.surface import RecordingSurface
from tumbler.core.trajectory import precompute_trajectory
from tumbler.core.transform import Transform
from tumbler.core.vector import Vector


def _scene(*, n_frames: int = 4, time_step: int = 1, times: tuple[int, ...] = (0, 2)) -> Scene:
    return Scene(
        trajectory=precompute_trajectory(cube(), [MotionStep(frames=n_frames)], frames_per_step=n_frames),
        camera=OrthographicCamera(width=64.0, height=48.0, zoom=8.0),
        base_view=Transform.identity(),
        light=Vector(0.0, 5.0, 20.0),
        depth_anchor=Vector(0.0, 0.0, 100.0),
        palette=Palette(colors=((0, 0, 0), (128, 128, 128), (255, 255, 255))),
        facing_range=(0.0, 1.0),
        background=(255, 255, 255),
        fps=30.0,
        time_step=time_step,
        spin_radians=math.radians(5.0),
        initial_times=times,
        script_length=1,
    )


def test_tick_clears_draws_and_advances() -> None:
    surface = RecordingSurface()
    anim = Animation(_scene(), surface)

    drawn = anim.tick()
    assert len(drawn) == 12
    assert len(surface.calls) == 12
    assert surface.clear_count == 1
    assert anim.ticks == 1
    assert anim.state.times == (1, 3)

    anim.tick()
    assert len(surface.calls) == 12
    assert surface.clear_count == 2
    assert anim.state.times == (2, 0)


def test_render_does_not_advance_state() -> None:
    anim = Animation(_scene(), RecordingSurface())
    anim.render()
    anim.render()
    assert anim.ticks == 0
    assert anim.state.times == (0, 2)


def test_view_spins_each_tick_without_touching_scene() -> None:
    scene = _scene()
    anim = Animation(scene, RecordingSurface())
    for _ in range(3):
        anim.tick()

    assert scene.base_view.is_close(Transform.identity())
    assert anim.state.view.is_close(Transform.identity().rotate_about_y(math.radians(15.0)))


def test_time_step_larger_than_one() -> None:
    anim = Animation(_scene(n_frames=5, time_step=3, times=(0,)), RecordingSurface())
    seen = []
    for _ in range(5):
        seen.append(anim.state.times[0])
        anim.tick()
    assert seen == [0, 3, 4, 0, 3]


def test_tick_spins_view_before_drawing() -> None:
    scene = _scene()
    drawn = Animation(scene, RecordingSurface()).tick()

    expected = render_frame(
        scene.trajectory,
        scene.initial_times,
        camera=scene.camera,
        view=scene.base_view.copy().rotate_about_y(scene.spin_radians),
        light=scene.light,
        depth_anchor=scene.depth_anchor,
        palette=scene.palette,
        facing_range=scene.facing_range,
        surface=RecordingSurface(),
    )
    assert [d.points for d in drawn] == [d.points for d in expected]
