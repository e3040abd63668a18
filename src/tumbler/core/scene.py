"""
どこで: `src/tumbler/core/scene.py`。
何を: RuntimeConfig から軌道・カメラ・ビュー・パレットを組み立てた `Scene` を作る。
なぜ: 設定の解釈を 1 箇所に寄せ、interactive と export が同じシーンを共有するため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tumbler.core.camera import OrthographicCamera
from tumbler.core.motion import script_from_config
from tumbler.core.polyhedron import cube
from tumbler.core.runtime_config import RuntimeConfig
from tumbler.core.shading import RGB, Palette, palette_from_config, parse_color
from tumbler.core.trajectory import Trajectory, precompute_trajectory
from tumbler.core.transform import Transform
from tumbler.core.vector import Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Scene:
    """描画に必要な不変データ一式。

    Notes
    -----
    `base_view` は初期ビュー変換。描画ループは `PlaybackState.start()` でコピーして使い、
    Scene 側の行列は変更しない。
    """

    trajectory: Trajectory
    camera: OrthographicCamera
    base_view: Transform
    light: Vector
    depth_anchor: Vector
    palette: Palette
    facing_range: tuple[float, float]
    background: RGB
    fps: float
    time_step: int
    spin_radians: float
    initial_times: tuple[int, ...]
    script_length: int

    @property
    def canvas_size(self) -> tuple[int, int]:
        return (int(self.camera.width), int(self.camera.height))


def build_view(tilt_x_deg: float, tilt_y_deg: float) -> Transform:
    """起動時の傾き（X → Y の順に合成）を持つビュー変換を作る。"""
    return (
        Transform.identity()
        .rotate_about_x(math.radians(float(tilt_x_deg)))
        .rotate_about_y(math.radians(float(tilt_y_deg)))
    )


def build_scene(cfg: RuntimeConfig) -> Scene:
    """設定から Scene を構築する（軌道はここで 1 回だけ事前計算する）。"""

    script = script_from_config(cfg.motion.script, drop=cfg.motion.drop)
    initial = cube(center=cfg.motion.start, scale=cfg.motion.scale)
    frames_per_step = cfg.animation.frames_per_step
    trajectory = precompute_trajectory(initial, script, frames_per_step=frames_per_step)

    initial_times: list[int] = []
    for s in cfg.animation.ghost_steps:
        t = int(s) * frames_per_step
        if t >= len(trajectory):
            raise ValueError(
                f"animation.ghost_steps が軌道長を超えています: step={s}, time={t}, length={len(trajectory)}"
            )
        initial_times.append(t)

    camera = OrthographicCamera(
        width=float(cfg.canvas.width),
        height=float(cfg.canvas.height),
        zoom=cfg.camera.zoom,
        position=Vector(*cfg.camera.position),
        direction=Vector(*cfg.camera.direction),
        up=Vector(*cfg.camera.up),
    )

    scene = Scene(
        trajectory=trajectory,
        camera=camera,
        base_view=build_view(cfg.view.tilt_x_deg, cfg.view.tilt_y_deg),
        light=Vector(*cfg.lighting.position),
        depth_anchor=Vector(*cfg.lighting.depth_anchor),
        palette=palette_from_config(cfg.palette.colors, cfg.palette.outline),
        facing_range=cfg.lighting.facing_range,
        background=parse_color(cfg.canvas.background, key="canvas.background"),
        fps=cfg.animation.fps,
        time_step=cfg.animation.time_step,
        spin_radians=math.radians(cfg.view.spin_y_deg_per_tick),
        initial_times=tuple(initial_times),
        script_length=len(script),
    )
    logger.info(
        "Scene built: %d frames, ghosts at %s, canvas %dx%d",
        len(trajectory),
        list(scene.initial_times),
        cfg.canvas.width,
        cfg.canvas.height,
    )
    return scene


__all__ = ["Scene", "build_scene", "build_view"]
