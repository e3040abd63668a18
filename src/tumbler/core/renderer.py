"""
どこで: `src/tumbler/core/renderer.py`。
何を: 選んだ時刻群の面を集めて奥行きソート・シェーディング・射影し、描画面へ多角形を発行する。
なぜ: interactive（pyglet）と export（Pillow / SVG）で同じ描画パイプラインを共有するため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from tumbler.core.camera import OrthographicCamera
from tumbler.core.depth_sort import depth_sorted
from tumbler.core.face import Face
from tumbler.core.shading import RGB, Palette, shade_face
from tumbler.core.surface import DrawingSurface, Point2D
from tumbler.core.trajectory import Trajectory
from tumbler.core.transform import Transform
from tumbler.core.vector import Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DrawnPolygon:
    """描画面へ発行した 1 多角形分の記録。"""

    face: Face
    points: tuple[Point2D, ...]
    outline: RGB
    fill: RGB


def gather_faces(trajectory: Trajectory, times: Sequence[int]) -> list[Face]:
    """各時刻のスナップショットを連結して 1 つの作業集合にする。"""
    faces: list[Face] = []
    for t in times:
        faces.extend(trajectory[t])
    return faces


def project_face(
    face: Face,
    *,
    view: Transform,
    camera: OrthographicCamera,
) -> tuple[Point2D, ...]:
    return tuple(camera.project(view.apply(v)) for v in face.vertices)


def render_frame(
    trajectory: Trajectory,
    times: Sequence[int],
    *,
    camera: OrthographicCamera,
    view: Transform,
    light: Vector,
    depth_anchor: Vector,
    palette: Palette,
    facing_range: tuple[float, float],
    surface: DrawingSurface,
) -> list[DrawnPolygon]:
    """1 フレーム分を描画する。

    Parameters
    ----------
    trajectory : Trajectory
        事前計算済みの軌道。
    times : Sequence[int]
        同時に表示する時刻インデックス列（ゴースト）。
    camera : OrthographicCamera
        射影カメラ。
    view : Transform
        ビュー変換。奥行きソートと射影の両方に使う（変更しない）。
    light : Vector
        光源位置（ワールド座標）。
    depth_anchor : Vector
        奥行き比較の基準点（ビュー空間のカメラ位置）。
    palette : Palette
        塗り色列と輪郭色。
    facing_range : tuple[float, float]
        向き比率をパレットへ写す入力範囲。
    surface : DrawingSurface
        描画先。

    Returns
    -------
    list[DrawnPolygon]
        描画順（奥 → 手前）の記録。

    Notes
    -----
    描画面の clear と、時刻・ビューの前進は呼び出し側（`Animation`）が担当する。
    """
    faces = gather_faces(trajectory, times)
    ordered = depth_sorted(faces, anchor=depth_anchor, view=view)

    drawn: list[DrawnPolygon] = []
    for face in ordered:
        fill = shade_face(face, light=light, palette=palette, facing_range=facing_range)
        points = project_face(face, view=view, camera=camera)
        surface.draw_polygon(points, palette.outline, fill)
        drawn.append(DrawnPolygon(face=face, points=points, outline=palette.outline, fill=fill))

    logger.debug("Rendered %d polygons for times=%s", len(drawn), list(times))
    return drawn


__all__ = ["DrawnPolygon", "gather_faces", "project_face", "render_frame"]
