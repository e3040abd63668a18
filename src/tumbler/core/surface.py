# どこで: `src/tumbler/core/surface.py`。
# 何を: レンダラが呼ぶ描画面（DrawingSurface）の最小契約と、呼び出しを記録する実装。
# なぜ: ラスタライザ（Pillow / SVG / pyglet）をコアから切り離し、テストで描画呼び出しを検証できるようにするため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from tumbler.core.shading import RGB

Point2D = tuple[float, float]


@runtime_checkable
class DrawingSurface(Protocol):
    """多角形を塗り + 輪郭で描ける 2D 描画面。"""

    def clear(self) -> None: ...

    def draw_polygon(self, points: Sequence[Point2D], outline: RGB, fill: RGB) -> None: ...


@dataclass(frozen=True, slots=True)
class PolygonCall:
    points: tuple[Point2D, ...]
    outline: RGB
    fill: RGB


@dataclass(slots=True)
class RecordingSurface:
    """描画呼び出しをメモリに積むだけの描画面。"""

    calls: list[PolygonCall] = field(default_factory=list)
    clear_count: int = 0

    def clear(self) -> None:
        self.calls.clear()
        self.clear_count += 1

    def draw_polygon(self, points: Sequence[Point2D], outline: RGB, fill: RGB) -> None:
        self.calls.append(
            PolygonCall(
                points=tuple((float(x), float(y)) for x, y in points),
                outline=outline,
                fill=fill,
            )
        )


__all__ = ["DrawingSurface", "Point2D", "PolygonCall", "RecordingSurface"]
