"""
どこで: `src/tumbler/core/vector.py`。
何を: 3 成分ベクトルの値型と、任意軸・任意ピボット回りの回転を提供する。
なぜ: 立方体が重心ではなく自身の辺を軸に転がる動きを、1 つのプリミティブで表現するため。
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from tumbler.core.errors import DegenerateVectorError, DivisionError

if TYPE_CHECKING:
    from tumbler.core.transform import Transform


@dataclass(frozen=True, slots=True)
class Vector:
    """不変の 3 次元ベクトル。

    Notes
    -----
    全ての演算は新しい Vector を返し、既存インスタンスは変更しない。
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zeroes(cls) -> Vector:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Sequence[float] | np.ndarray) -> Vector:
        """長さ 3 のシーケンス（list / tuple / ndarray）から Vector を作る。"""
        try:
            x, y, z = values
        except Exception as exc:
            raise ValueError(
                f"Vector は長さ 3 のシーケンスから作る必要がある: got={values!r}"
            ) from exc
        return cls(float(x), float(y), float(z))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vector:
        f = float(factor)
        return Vector(self.x * f, self.y * f, self.z * f)

    def divide(self, divisor: float) -> Vector:
        d = float(divisor)
        if d == 0.0:
            raise DivisionError(f"ベクトルを 0 で割ることはできない: {self!r}")
        return Vector(self.x / d, self.y / d, self.z / d)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector:
        """単位ベクトルを返す。

        Raises
        ------
        DegenerateVectorError
            長さが 0 の場合（例: 共線な頂点から作った面法線）。
        """
        length = self.magnitude()
        if length == 0.0 or not math.isfinite(length):
            raise DegenerateVectorError(
                f"長さ 0 のベクトルは正規化できない: {self!r}"
            )
        return Vector(self.x / length, self.y / length, self.z / length)

    def transform(self, matrix: Transform) -> Vector:
        """同次変換を点として適用する（平行移動成分も加算される）。"""
        return matrix.apply(self)

    def rotate_around(self, pivot: Vector, axis: Vector, radians: float) -> Vector:
        """`pivot` を通り `axis` 方向の直線回りに `radians` だけ回転した点を返す。

        Parameters
        ----------
        pivot : Vector
            回転軸が通る点。
        axis : Vector
            回転軸の方向。長さは正規化される（0 ベクトルは不可）。
        radians : float
            回転角 [rad]。軸方向から見て反時計回りが正。

        Notes
        -----
        pivot を原点へ移し、Rodrigues の公式で回転してから元の位置へ戻す。
        """
        theta = float(radians)
        if theta == 0.0:
            return self

        k = axis.normalize()
        v = self.subtract(pivot)
        c = math.cos(theta)
        s = math.sin(theta)
        # v_rot = v cosθ + (k × v) sinθ + k (k·v)(1 − cosθ)
        rotated = (
            v.scale(c)
            .add(k.cross(v).scale(s))
            .add(k.scale(k.dot(v) * (1.0 - c)))
        )
        return rotated.add(pivot)

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.subtract(other)

    def __mul__(self, factor: float) -> Vector:
        return self.scale(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector:
        return self.divide(divisor)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)


X_AXIS = Vector(1.0, 0.0, 0.0)
Y_AXIS = Vector(0.0, 1.0, 0.0)
Z_AXIS = Vector(0.0, 0.0, 1.0)


__all__ = ["Vector", "X_AXIS", "Y_AXIS", "Z_AXIS"]
