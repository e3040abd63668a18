# どこで: `src/tumbler/core/camera.py`。
# 何を: ビュー空間の 3D 点をスクリーン座標へ写す正射影カメラ。
# なぜ: 射影を副作用のない純関数として、描画ループ・export・テストで共有するため。

from __future__ import annotations

from dataclasses import dataclass, field

from tumbler.core.vector import Vector


@dataclass(frozen=True, slots=True)
class OrthographicCamera:
    """奥行き軸（z）を落として zoom 倍し、ビューポート中心へ寄せる正射影カメラ。

    Notes
    -----
    `position` / `direction` / `up` は将来の透視投影用に保持するだけで、
    現在の `project()` は参照しない。
    """

    width: float
    height: float
    zoom: float = 1.0
    position: Vector = field(default_factory=Vector.zeroes)
    direction: Vector = field(default_factory=Vector.zeroes)
    up: Vector = field(default_factory=lambda: Vector(0.0, 1.0, 0.0))

    def __post_init__(self) -> None:
        if float(self.width) <= 0.0 or float(self.height) <= 0.0:
            raise ValueError(
                f"camera の width/height は正の値である必要がある: {self.width}x{self.height}"
            )

    def project(self, point: Vector) -> tuple[float, float]:
        """点をスクリーン座標 (sx, sy) に写す。sy はスクリーン下向きが正。"""
        zoom = float(self.zoom)
        sx = zoom * point.x + float(self.width) / 2.0
        sy = -zoom * point.y + float(self.height) / 2.0
        return (sx, sy)


__all__ = ["OrthographicCamera"]
