# どこで: `src/tumbler/core/depth_sort.py`。
# 何を: 画家のアルゴリズム用に、面を奥から手前へ安定ソートする。
# なぜ: 同一キーの面（共面/隣接）の描画順を入力順に固定し、実行ごとの見た目を決定的にするため。

from __future__ import annotations

from collections.abc import Iterable

from tumbler.core.face import Face
from tumbler.core.transform import Transform
from tumbler.core.vector import Vector


def depth_key(face: Face, *, anchor: Vector, view: Transform) -> tuple[float, float, float]:
    """面の並び替えキー（大きいほど奥）を返す。

    ビュー変換後の面中心からアンカー（カメラ位置）までの差分を取り、
    奥行き軸 z を第 1 キー、x, y を順にタイブレークに使う。
    """
    d = anchor.subtract(view.apply(face.center))
    return (d.z, d.x, d.y)


def depth_sorted(
    faces: Iterable[Face],
    *,
    anchor: Vector,
    view: Transform,
) -> list[Face]:
    """奥（キー大）から手前（キー小）の順に並べた新しいリストを返す。"""
    keyed = [(depth_key(f, anchor=anchor, view=view), f) for f in faces]
    # sorted は安定。reverse=True でも同一キーの相対順は保たれる。
    keyed_sorted = sorted(keyed, key=lambda item: item[0], reverse=True)
    return [f for _, f in keyed_sorted]


__all__ = ["depth_key", "depth_sorted"]
