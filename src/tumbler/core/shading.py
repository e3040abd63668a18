"""
どこで: `src/tumbler/core/shading.py`。
何を: 面の向き（法線・光線の内積）を離散パレットの色インデックスへ量子化する。
なぜ: 連続的な陰影ではなく少数の帯に落とす設計で、端点（off-by-one）の挙動をテストで固定するため。
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from tumbler.core.errors import PaletteIndexError
from tumbler.core.face import Face
from tumbler.core.vector import Vector

RGB = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class Palette:
    """順序付きの塗り色列と、輪郭線の色。"""

    colors: tuple[RGB, ...]
    outline: RGB = (0, 0, 0)

    def __len__(self) -> int:
        return len(self.colors)

    def color_at(self, index: int) -> RGB:
        i = int(index)
        if i < 0 or i >= len(self.colors):
            raise PaletteIndexError(
                f"パレットインデックスが範囲外: index={i}, size={len(self.colors)}"
            )
        return self.colors[i]


def remap(
    value: float,
    in_range: tuple[float, float],
    out_range: tuple[float, float],
) -> float:
    """`value` を `in_range` から `out_range` へ線形に写す（クランプしない）。"""
    in_lo, in_hi = float(in_range[0]), float(in_range[1])
    out_lo, out_hi = float(out_range[0]), float(out_range[1])
    span = in_hi - in_lo
    if span == 0.0:
        raise PaletteIndexError(f"remap の入力範囲が縮退している: {in_range!r}")
    return out_lo + (float(value) - in_lo) * (out_hi - out_lo) / span


def facing_ratio(face: Face, light: Vector) -> float:
    """面中心から光源への単位光線と、面法線の内積を返す（-1..1）。"""
    ray = light.subtract(face.center).normalize()
    return face.normal.dot(ray)


def shade_index(
    ratio: float,
    *,
    facing_range: tuple[float, float],
    palette_size: int,
) -> int:
    """向き比率をパレットインデックスへ量子化する。

    Parameters
    ----------
    ratio : float
        `facing_ratio()` の値。
    facing_range : tuple[float, float]
        入力側の範囲 (lo, hi)。lo は index 0、hi は末尾 index に対応する。
    palette_size : int
        パレットの色数。

    Returns
    -------
    int
        `floor(remap(ratio))` を `[0, palette_size - 1]` にクランプした値。

    Raises
    ------
    PaletteIndexError
        パレットが空、入力範囲が縮退、または ratio が有限でない場合。
        これ以外の入力はクランプにより必ず有効なインデックスになる。
    """
    size = int(palette_size)
    if size <= 0:
        raise PaletteIndexError("パレットが空です")
    r = float(ratio)
    if not math.isfinite(r):
        raise PaletteIndexError(f"向き比率が有限でない: {ratio!r}")

    mapped = remap(r, facing_range, (0.0, float(size - 1)))
    index = math.floor(mapped)
    return int(min(max(index, 0), size - 1))


def shade_face(
    face: Face,
    *,
    light: Vector,
    palette: Palette,
    facing_range: tuple[float, float],
) -> RGB:
    """面の塗り色をパレットから選ぶ。"""
    index = shade_index(
        facing_ratio(face, light),
        facing_range=facing_range,
        palette_size=len(palette),
    )
    return palette.color_at(index)


def palette_from_config(colors: Sequence[object], outline: object) -> Palette:
    """`#rrggbb` 文字列または [r, g, b]（0..255）の列から Palette を作る。"""
    return Palette(
        colors=tuple(parse_color(c, key=f"palette.colors[{i}]") for i, c in enumerate(colors)),
        outline=parse_color(outline, key="palette.outline"),
    )


def parse_color(value: object, *, key: str) -> RGB:
    if isinstance(value, str):
        s = value.strip().lstrip("#")
        if len(s) != 6:
            raise RuntimeError(f"{key} は #rrggbb 形式である必要があります: got={value!r}")
        try:
            return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        except ValueError as exc:
            raise RuntimeError(f"{key} は #rrggbb 形式である必要があります: got={value!r}") from exc
    try:
        seq = list(value)  # type: ignore[call-overload]
    except Exception as exc:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 3:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}")
    rgb = tuple(int(c) for c in seq)
    if any(c < 0 or c > 255 for c in rgb):
        raise ValueError(f"{key} の各成分は 0..255 である必要があります: got={value!r}")
    return (rgb[0], rgb[1], rgb[2])


__all__ = [
    "Palette",
    "RGB",
    "facing_ratio",
    "palette_from_config",
    "parse_color",
    "remap",
    "shade_face",
    "shade_index",
]
