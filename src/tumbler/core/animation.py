# どこで: `src/tumbler/core/animation.py`。
# 何を: Scene と描画面を束ね、1 tick 分（clear → 描画 → 状態前進）を実行する。
# なぜ: pyglet のスケジューラと headless export が同じ tick 処理を共有するため。

from __future__ import annotations

from tumbler.core.playback import PlaybackState
from tumbler.core.renderer import DrawnPolygon, render_frame
from tumbler.core.scene import Scene
from tumbler.core.surface import DrawingSurface


class Animation:
    """描画ループの状態（時刻群 + ビュー）を保持して tick ごとに進める。"""

    def __init__(self, scene: Scene, surface: DrawingSurface) -> None:
        self._scene = scene
        self._surface = surface
        self._state = PlaybackState.start(scene.initial_times, scene.base_view)
        self._ticks = 0

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    def render(self) -> list[DrawnPolygon]:
        """現在の状態を描画する（状態は進めない）。"""
        scene = self._scene
        self._surface.clear()
        return render_frame(
            scene.trajectory,
            self._state.times,
            camera=scene.camera,
            view=self._state.view,
            light=scene.light,
            depth_anchor=scene.depth_anchor,
            palette=scene.palette,
            facing_range=scene.facing_range,
            surface=self._surface,
        )

    def tick(self) -> list[DrawnPolygon]:
        """ビューを回して描画し、時刻群を 1 tick 分進める。"""
        self._state = self._state.spin(self._scene.spin_radians)
        drawn = self.render()
        self._state = self._state.advance(
            length=len(self._scene.trajectory),
            step=self._scene.time_step,
        )
        self._ticks += 1
        return drawn


__all__ = ["Animation"]
