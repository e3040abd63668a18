"""
どこで: `src/tumbler/core/face.py`。
何を: 平面多角形の面（頂点列 + 派生する中心/法線）を表す値型。
なぜ: 中心と法線を頂点から常に導出し、頂点だけ動いて法線が古いままになる状態を作らないため。
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from tumbler.core.vector import Vector


@dataclass(frozen=True, slots=True)
class Face:
    """巻き順を共有する頂点列からなる平面多角形。

    Parameters
    ----------
    vertices : tuple[Vector, ...]
        3 点以上の頂点列。巻き順から外向き法線が決まる。

    Notes
    -----
    `center` は対角線 `vertices[0]`–`vertices[2]` の中点（四角形で重心と一致）。
    `normal` は `(v1 - v0) × (v2 - v1)` を正規化したもの。
    どちらもコンストラクタで計算し、個別には設定できない。
    """

    vertices: tuple[Vector, ...]
    center: Vector = field(init=False)
    normal: Vector = field(init=False)

    def __post_init__(self) -> None:
        vertices = tuple(self.vertices)
        if len(vertices) < 3:
            raise ValueError(f"Face は 3 頂点以上である必要がある: got={len(vertices)}")
        v0, v1, v2 = vertices[0], vertices[1], vertices[2]

        center = v2.subtract(v0).divide(2.0).add(v0)
        normal = v1.subtract(v0).cross(v2.subtract(v1)).normalize()

        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "normal", normal)

    def map_vertices(self, fn: Callable[[Vector], Vector]) -> Face:
        """全頂点に `fn` を適用した新しい Face を返す（中心/法線は再計算される）。"""
        return Face(tuple(fn(v) for v in self.vertices))


def faces_from_table(
    vertices: Iterable[Vector],
    table: Iterable[Iterable[int]],
) -> tuple[Face, ...]:
    """頂点リストと面インデックス表から Face 列を作る。"""
    verts = tuple(vertices)
    out: list[Face] = []
    for face_index, indices in enumerate(table):
        idx = [int(i) for i in indices]
        for i in idx:
            if i < 0 or i >= len(verts):
                raise ValueError(
                    f"面インデックスが頂点数の範囲外: face={face_index}, index={i}, n_vertices={len(verts)}"
                )
        out.append(Face(tuple(verts[i] for i in idx)))
    return tuple(out)


__all__ = ["Face", "faces_from_table"]
