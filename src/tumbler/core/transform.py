"""
どこで: `src/tumbler/core/transform.py`。
何を: 4x4 同次変換行列（要素回転の合成 + 平行移動）と、ベクトルへの適用を提供する。
なぜ: 起動時の傾き行列と、毎 tick 少しずつ回す持続的なビュー回転を同じ型で扱うため。

合成順序
--------
各メソッドは現在の行列に右から掛ける（`M <- M @ R`）。
`Transform.identity().rotate_about_x(a).rotate_about_y(b)` は `Rx(a) @ Ry(b)` になり、
列ベクトルへ適用すると「最後に呼んだ回転」が最初に効く。
"""

from __future__ import annotations

import math

import numpy as np

from tumbler.core.vector import Vector


def _rotation_x(radians: float) -> np.ndarray:
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def _rotation_y(radians: float) -> np.ndarray:
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def _rotation_z(radians: float) -> np.ndarray:
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


class Transform:
    """可変な 4x4 同次変換行列。

    回転メソッドは自身を更新して self を返すため、チェーンして組み立てられる。
    描画ループ間で共有したくない場合は `copy()` してから更新する。
    """

    __slots__ = ("_m",)

    def __init__(self, matrix: np.ndarray | None = None) -> None:
        if matrix is None:
            self._m = np.eye(4, dtype=np.float64)
            return
        m = np.array(matrix, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Transform は shape (4,4) の行列である必要がある: shape={m.shape}")
        self._m = m

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @property
    def matrix(self) -> np.ndarray:
        """現在の行列の読み取り専用ビュー。"""
        view = self._m.view()
        view.setflags(write=False)
        return view

    def copy(self) -> Transform:
        return Transform(self._m.copy())

    def _compose(self, rhs: np.ndarray) -> Transform:
        self._m = self._m @ rhs
        return self

    def rotate_about_x(self, radians: float) -> Transform:
        return self._compose(_rotation_x(float(radians)))

    def rotate_about_y(self, radians: float) -> Transform:
        return self._compose(_rotation_y(float(radians)))

    def rotate_about_z(self, radians: float) -> Transform:
        return self._compose(_rotation_z(float(radians)))

    def translate(self, dx: float, dy: float, dz: float) -> Transform:
        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = [float(dx), float(dy), float(dz)]
        return self._compose(t)

    def apply(self, vector: Vector) -> Vector:
        """ベクトルを点（w=1）として変換する。"""
        p = np.array([vector.x, vector.y, vector.z, 1.0], dtype=np.float64)
        out = self._m @ p
        # アフィン変換のみを扱うので w は常に 1。
        return Vector(float(out[0]), float(out[1]), float(out[2]))

    def is_close(self, other: Transform, *, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, rtol=0.0, atol=atol))

    def __repr__(self) -> str:
        return f"Transform({self._m.tolist()!r})"


__all__ = ["Transform"]
