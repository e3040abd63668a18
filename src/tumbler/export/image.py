"""
どこで: `src/tumbler/export/image.py`。
何を: Pillow の ImageDraw を描画面として使い、アニメーションを PNG 連番 / GIF に書き出す。
なぜ: ウィンドウを開かずに、同じ描画パイプラインの結果をファイルとして確認できるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, ImageDraw

from tumbler.core.animation import Animation
from tumbler.core.scene import Scene
from tumbler.core.shading import RGB
from tumbler.core.surface import Point2D

logger = logging.getLogger(__name__)


class PillowSurface:
    """RGB 画像 1 枚に多角形を塗る描画面。

    Parameters
    ----------
    size : tuple[int, int]
        画像サイズ (width, height)。
    background : RGB
        clear() で塗りつぶす背景色。
    line_width : int
        輪郭線の太さ [px]。
    """

    def __init__(self, size: tuple[int, int], *, background: RGB = (255, 255, 255), line_width: int = 1) -> None:
        w, h = int(size[0]), int(size[1])
        if w <= 0 or h <= 0:
            raise ValueError(f"画像サイズは正の値である必要がある: {w}x{h}")
        self._background = background
        self._line_width = int(line_width)
        self.image = Image.new("RGB", (w, h), background)
        self._draw = ImageDraw.Draw(self.image)

    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.image.width, self.image.height), fill=self._background)

    def draw_polygon(self, points: Sequence[Point2D], outline: RGB, fill: RGB) -> None:
        xy = [(float(x), float(y)) for x, y in points]
        self._draw.polygon(xy, fill=fill, outline=outline, width=self._line_width)

    def snapshot(self) -> Image.Image:
        """現在の画像のコピーを返す（以降の描画の影響を受けない）。"""
        return self.image.copy()


def render_frames(scene: Scene, n_frames: int, *, line_width: int = 1) -> list[Image.Image]:
    """先頭から `n_frames` tick 分を描画した画像列を返す。"""

    n = int(n_frames)
    if n <= 0:
        raise ValueError(f"n_frames は 1 以上である必要がある: got={n_frames!r}")

    surface = PillowSurface(scene.canvas_size, background=scene.background, line_width=line_width)
    animation = Animation(scene, surface)
    frames: list[Image.Image] = []
    for _ in range(n):
        animation.tick()
        frames.append(surface.snapshot())
    return frames


def export_png_frames(frames: Sequence[Image.Image], paths: Sequence[Path]) -> list[Path]:
    """画像列を PNG として保存する。"""

    if len(frames) != len(paths):
        raise ValueError(f"frames と paths の長さが一致しません: {len(frames)} != {len(paths)}")

    out: list[Path] = []
    for frame, path in zip(frames, paths, strict=True):
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        frame.save(p, format="PNG")
        out.append(p)
    logger.info("Saved %d PNG frames under %s", len(out), out[0].parent if out else "-")
    return out


def export_gif(frames: Sequence[Image.Image], path: str | Path, *, fps: float, loop: int = 0) -> Path:
    """画像列をループ GIF として保存する。"""

    if not frames:
        raise ValueError("GIF に書き出すフレームがありません")
    if float(fps) <= 0.0:
        raise ValueError(f"fps は正の値である必要がある: got={fps!r}")

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    duration_ms = max(1, int(round(1000.0 / float(fps))))
    frames[0].save(
        out,
        format="GIF",
        save_all=True,
        append_images=list(frames[1:]),
        duration=duration_ms,
        loop=int(loop),
    )
    logger.info("Saved GIF: %s (%d frames, %d ms/frame)", out, len(frames), duration_ms)
    return out


__all__ = ["PillowSurface", "export_gif", "export_png_frames", "render_frames"]
