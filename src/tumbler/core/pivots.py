"""
どこで: `src/tumbler/core/pivots.py`。
何を: 直前スナップショットの面集合から回転中心を返す純関数（ピボット）を組み立てる。
なぜ: 「今この瞬間の右下の辺で転がる」のような、過去の動きに依存する回転中心を
      共有可変状態なしで表現するため。
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from tumbler.core.face import Face
from tumbler.core.vector import Vector

PivotFn = Callable[[Sequence[Face]], Vector]
"""直前のスナップショットを受け取り、回転中心の点を返す関数。"""

# 「同じ高さ」とみなす y の許容差（数値誤差の吸収）。
_LEVEL_TOL = 1e-6


def fixed(point: Vector) -> PivotFn:
    """常に同じ点を返すピボット。"""

    def _pivot(_faces: Sequence[Face]) -> Vector:
        return point

    return _pivot


def origin() -> PivotFn:
    return fixed(Vector.zeroes())


def face_vertex(face_index: int, vertex_index: int) -> PivotFn:
    """`faces[face_index].vertices[vertex_index]` を現在の位置で返すピボット。"""
    fi = int(face_index)
    vi = int(vertex_index)

    def _pivot(faces: Sequence[Face]) -> Vector:
        try:
            return faces[fi].vertices[vi]
        except IndexError as exc:
            raise IndexError(
                f"pivot の参照先が存在しない: face={fi}, vertex={vi}, n_faces={len(faces)}"
            ) from exc

    return _pivot


def rolling_edge(direction: str) -> PivotFn:
    """物体が x 方向へ転がるときに軸となる最下段の先頭頂点を返すピボット。

    Parameters
    ----------
    direction : str
        `"+x"` なら最下段のうち x 最大、`"-x"` なら x 最小の頂点を選ぶ。

    Notes
    -----
    z 軸回りの回転にだけ意味があるため、z 座標は選択に使わない。
    """
    d = str(direction).strip().lower()
    if d not in {"+x", "-x"}:
        raise ValueError(f"rolling_edge の direction は '+x' か '-x': got={direction!r}")
    sign = 1.0 if d == "+x" else -1.0

    def _pivot(faces: Sequence[Face]) -> Vector:
        if not faces:
            raise ValueError("rolling_edge には 1 面以上が必要")
        vertices = [v for face in faces for v in face.vertices]
        lowest = min(v.y for v in vertices)
        level = [v for v in vertices if v.y <= lowest + _LEVEL_TOL]
        return max(level, key=lambda v: sign * v.x)

    return _pivot


def pivot_from_config(entry: Mapping[str, Any] | None) -> PivotFn:
    """設定値（mapping）からピボット関数を作る。

    受理する形:
    - `None` / `{kind: origin}`
    - `{kind: fixed, point: [x, y, z]}`
    - `{kind: face_vertex, face: i, vertex: j}`
    - `{kind: rolling_edge, direction: "+x" | "-x"}`
    """
    if entry is None:
        return origin()
    if not isinstance(entry, Mapping):
        raise RuntimeError(f"pivot は mapping である必要があります: got={entry!r}")

    kind = str(entry.get("kind", "origin")).strip()
    if kind == "origin":
        return origin()
    if kind == "fixed":
        point = entry.get("point")
        if point is None:
            raise RuntimeError("pivot kind=fixed には point が必要です")
        return fixed(Vector.from_sequence(point))
    if kind == "face_vertex":
        if "face" not in entry or "vertex" not in entry:
            raise RuntimeError(f"pivot kind=face_vertex には face と vertex が必要です: got={dict(entry)!r}")
        return face_vertex(int(entry["face"]), int(entry["vertex"]))
    if kind == "rolling_edge":
        return rolling_edge(str(entry.get("direction", "+x")))

    raise RuntimeError(f"未対応の pivot kind です: {kind!r}")


__all__ = [
    "PivotFn",
    "face_vertex",
    "fixed",
    "origin",
    "pivot_from_config",
    "rolling_edge",
]
