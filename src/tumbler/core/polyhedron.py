"""
どこで: `src/tumbler/core/polyhedron.py`。立方体の頂点表と面インデックス表。
何を: 固定の頂点座標と外向き巻き順の面表から、初期 Face 列を構築する。
なぜ: 形状の位相を定数データとして持ち、軌道計算の入力を決定的にするため。
"""

from __future__ import annotations

from tumbler.core.face import Face, faces_from_table
from tumbler.core.vector import Vector

# ±1 の全組み合わせ。インデックスは CUBE_FACES から参照する。
CUBE_VERTICES: tuple[Vector, ...] = (
    Vector(1.0, 1.0, 1.0),
    Vector(-1.0, 1.0, 1.0),
    Vector(1.0, -1.0, 1.0),
    Vector(-1.0, -1.0, 1.0),
    Vector(1.0, 1.0, -1.0),
    Vector(-1.0, 1.0, -1.0),
    Vector(1.0, -1.0, -1.0),
    Vector(-1.0, -1.0, -1.0),
)

# 各面は外側から見て反時計回り。v0 と v2 が対角になる順序で並べる。
CUBE_FACES: tuple[tuple[int, int, int, int], ...] = (
    (0, 1, 3, 2),  # +Z
    (4, 6, 7, 5),  # -Z
    (0, 2, 6, 4),  # +X
    (1, 5, 7, 3),  # -X
    (0, 4, 5, 1),  # +Y
    (2, 3, 7, 6),  # -Y
)


def cube(
    *,
    center: tuple[float, float, float] = (0.0, 0.0, 0.0),
    scale: float = 1.0,
) -> tuple[Face, ...]:
    """立方体の 6 面を返す。

    Parameters
    ----------
    center : tuple[float, float, float], optional
        平行移動ベクトル (cx, cy, cz)。
    scale : float, optional
        半辺長の倍率。1.0 で頂点が ±1 に乗る。

    Returns
    -------
    tuple[Face, ...]
        CUBE_FACES と同じ順序の面列。
    """
    try:
        cx, cy, cz = center
    except Exception as exc:
        raise ValueError("cube の center は長さ 3 のシーケンスである必要がある") from exc
    s_f = float(scale)
    if s_f <= 0.0:
        raise ValueError(f"cube の scale は正の値である必要がある: got={scale!r}")

    offset = Vector(float(cx), float(cy), float(cz))
    vertices = tuple(v.scale(s_f).add(offset) for v in CUBE_VERTICES)
    return faces_from_table(vertices, CUBE_FACES)


__all__ = ["CUBE_FACES", "CUBE_VERTICES", "cube"]
