"""向き比率 → パレットインデックス量子化（端点とクランプ）のテスト群。"""

from __future__ import annotations

import math

import pytest

from tumbler.core.errors import DegenerateVectorError, PaletteIndexError
from tumbler.core.face import Face
from tumbler.core.shading import (
    Palette,
    facing_ratio,
    palette_from_config,
    parse_color,
    remap,
    shade_face,
    shade_index,
)
from tumbler.core.vector import Vector

_COLORS = tuple((i, i, i) for i in range(8))


def _square(normal_sign: float) -> Face:
    verts = (
        Vector(-1.0, -1.0, 0.0),
        Vector(1.0, -1.0, 0.0),
        Vector(1.0, 1.0, 0.0),
        Vector(-1.0, 1.0, 0.0),
    )
    return Face(verts if normal_sign > 0 else tuple(reversed(verts)))


def test_remap_is_linear() -> None:
    assert remap(0.5, (0.0, 1.0), (0.0, 7.0)) == 3.5
    assert remap(-1.0, (-1.0, 1.0), (10.0, 20.0)) == 10.0
    with pytest.raises(PaletteIndexError):
        remap(0.0, (1.0, 1.0), (0.0, 7.0))


def test_facing_light_maps_to_last_index() -> None:
    face = _square(+1.0)
    ratio = facing_ratio(face, Vector(0.0, 0.0, 10.0))
    assert math.isclose(ratio, 1.0)
    assert shade_index(ratio, facing_range=(0.0, 1.0), palette_size=8) == 7


def test_facing_away_clamps_to_zero() -> None:
    face = _square(-1.0)
    ratio = facing_ratio(face, Vector(0.0, 0.0, 10.0))
    assert math.isclose(ratio, -1.0)
    assert shade_index(ratio, facing_range=(0.0, 1.0), palette_size=8) == 0


def test_shade_index_floors_and_clamps() -> None:
    assert shade_index(0.0, facing_range=(0.0, 1.0), palette_size=8) == 0
    assert shade_index(0.5, facing_range=(0.0, 1.0), palette_size=8) == 3
    assert shade_index(0.99, facing_range=(0.0, 1.0), palette_size=8) == 6
    assert shade_index(5.0, facing_range=(0.0, 1.0), palette_size=8) == 7
    # 狭い帯でも中央は中間色になる。
    assert shade_index(0.0, facing_range=(-0.003, 0.003), palette_size=8) == 3
    assert shade_index(0.2, facing_range=(0.0, 1.0), palette_size=1) == 0


def test_shade_index_extreme_ratios_stay_in_range() -> None:
    for ratio in (-1e300, -1.0, 1.0, 1e300):
        index = shade_index(ratio, facing_range=(-0.003, 0.003), palette_size=8)
        assert 0 <= index <= 7
    assert shade_index(-1.0, facing_range=(-0.003, 0.003), palette_size=8) == 0
    assert shade_index(1.0, facing_range=(-0.003, 0.003), palette_size=8) == 7


def test_shade_index_errors() -> None:
    with pytest.raises(PaletteIndexError):
        shade_index(0.5, facing_range=(0.0, 1.0), palette_size=0)
    with pytest.raises(PaletteIndexError):
        shade_index(float("nan"), facing_range=(0.0, 1.0), palette_size=8)
    with pytest.raises(PaletteIndexError):
        shade_index(0.5, facing_range=(0.2, 0.2), palette_size=8)


def test_light_at_face_center_is_degenerate() -> None:
    with pytest.raises(DegenerateVectorError):
        facing_ratio(_square(+1.0), Vector(0.0, 0.0, 0.0))


def test_shade_face_picks_palette_color() -> None:
    palette = Palette(colors=_COLORS)
    light = Vector(0.0, 0.0, 10.0)
    assert shade_face(_square(+1.0), light=light, palette=palette, facing_range=(0.0, 1.0)) == (7, 7, 7)
    assert shade_face(_square(-1.0), light=light, palette=palette, facing_range=(0.0, 1.0)) == (0, 0, 0)


def test_palette_color_at_bounds() -> None:
    palette = Palette(colors=_COLORS)
    assert len(palette) == 8
    assert palette.color_at(0) == (0, 0, 0)
    with pytest.raises(PaletteIndexError):
        palette.color_at(8)
    with pytest.raises(IndexError):
        palette.color_at(-1)


def test_parse_color_forms() -> None:
    assert parse_color("#ff8000", key="c") == (255, 128, 0)
    assert parse_color("00ff10", key="c") == (0, 255, 16)
    assert parse_color([1, 2, 3], key="c") == (1, 2, 3)

    with pytest.raises(RuntimeError):
        parse_color("#fff", key="c")
    with pytest.raises(RuntimeError):
        parse_color("#gggggg", key="c")
    with pytest.raises(RuntimeError):
        parse_color([1, 2], key="c")
    with pytest.raises(ValueError):
        parse_color([0, 0, 300], key="c")


def test_palette_from_config() -> None:
    palette = palette_from_config(["#000000", [255, 255, 255]], "#102030")
    assert palette.colors == ((0, 0, 0), (255, 255, 255))
    assert palette.outline == (16, 32, 48)
