"""
どこで: `src/tumbler/interactive/window.py`。
何を: pyglet ウィンドウ上でアニメーションを再生する（描画面 + スケジューラ + fps 間引き）。
なぜ: 事前計算済みの軌道を、毎フレームの幾何計算なしで対話的に確認するため。

メインフロー
------------
1. `pyglet.clock.schedule()` で毎フレーム `_step()` を呼ばせる。
2. `_step()` は `FrameThrottle.ready()` が False なら何もしない（fps を超えて描かない）。
3. 描画する場合は `Animation.tick()` が PygletSurface に shapes を積み直す。
4. `on_draw` は背景を塗って Batch を描くだけ。
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from tumbler.core.animation import Animation
from tumbler.core.playback import FrameThrottle
from tumbler.core.scene import Scene
from tumbler.core.shading import RGB
from tumbler.core.surface import Point2D

logger = logging.getLogger(__name__)


def to_window_coords(points: Sequence[Point2D], *, height: float) -> list[tuple[float, float]]:
    """スクリーン座標（左上原点・y 下向き）を pyglet 座標（左下原点・y 上向き）へ変換する。"""
    h = float(height)
    return [(float(x), h - float(y)) for x, y in points]


class PygletSurface:
    """pyglet.shapes を 1 つの Batch に積む描画面。

    Notes
    -----
    描画順（画家のアルゴリズム）を保つため、多角形ごとに `Group(order=...)` を割り当てる。
    塗りは偶数 order、輪郭は直後の奇数 order に置く。
    """

    def __init__(self, *, height: int, line_width: float = 1.0) -> None:
        import pyglet

        self._pyglet = pyglet
        self._height = int(height)
        self._line_width = float(line_width)
        self.batch = pyglet.graphics.Batch()
        self._shapes: list[Any] = []
        self._n_polygons = 0

    def clear(self) -> None:
        for shape in self._shapes:
            shape.delete()
        self._shapes.clear()
        self._n_polygons = 0

    def draw_polygon(self, points: Sequence[Point2D], outline: RGB, fill: RGB) -> None:
        pyglet = self._pyglet
        coords = to_window_coords(points, height=self._height)
        order = 2 * self._n_polygons
        self._n_polygons += 1

        fill_group = pyglet.graphics.Group(order=order)
        line_group = pyglet.graphics.Group(order=order + 1)

        self._shapes.append(
            pyglet.shapes.Polygon(*coords, color=(*fill, 255), batch=self.batch, group=fill_group)
        )
        n = len(coords)
        for i in range(n):
            x0, y0 = coords[i]
            x1, y1 = coords[(i + 1) % n]
            self._shapes.append(
                pyglet.shapes.Line(
                    x0,
                    y0,
                    x1,
                    y1,
                    self._line_width,
                    color=(*outline, 255),
                    batch=self.batch,
                    group=line_group,
                )
            )


def run_window(scene: Scene, *, caption: str = "tumbler", line_width: float = 1.0) -> None:
    """ウィンドウを開いてアニメーションを再生する（ウィンドウを閉じるまで戻らない）。"""

    import pyglet

    width, height = scene.canvas_size
    window = pyglet.window.Window(width=width, height=height, caption=caption)
    surface = PygletSurface(height=height, line_width=line_width)
    animation = Animation(scene, surface)
    throttle = FrameThrottle(scene.fps)
    bg = tuple(c / 255.0 for c in scene.background)

    def _step(_dt: float) -> None:
        if not throttle.ready(time.monotonic()):
            return
        if throttle.dropped > 0:
            logger.warning("Render fell behind by %d frame(s)", throttle.dropped)
        animation.tick()

    @window.event
    def on_draw() -> None:
        pyglet.gl.glClearColor(bg[0], bg[1], bg[2], 1.0)
        window.clear()
        surface.batch.draw()

    pyglet.clock.schedule(_step)
    logger.info("Opened window %dx%d at %.1f fps", width, height, scene.fps)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(_step)
        surface.clear()
        logger.info("Window closed after %d ticks", animation.ticks)


__all__ = ["PygletSurface", "run_window", "to_window_coords"]
