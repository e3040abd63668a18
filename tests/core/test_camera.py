from __future__ import annotations

import pytest

from tumbler.core.camera import OrthographicCamera
from tumbler.core.vector import Vector


def test_origin_projects_to_viewport_center() -> None:
    cam = OrthographicCamera(width=100.0, height=100.0, zoom=1.0)
    assert cam.project(Vector.zeroes()) == (50.0, 50.0)


def test_project_scales_by_zoom_and_flips_y() -> None:
    cam = OrthographicCamera(width=200.0, height=100.0, zoom=2.0)
    assert cam.project(Vector(1.0, 1.0, 0.0)) == (102.0, 48.0)
    # 奥行きは無視される。
    assert cam.project(Vector(1.0, 1.0, -40.0)) == (102.0, 48.0)


def test_project_is_pure() -> None:
    cam = OrthographicCamera(width=64.0, height=48.0, zoom=3.0)
    p = Vector(0.5, -0.25, 2.0)
    assert cam.project(p) == cam.project(p)
    assert p == Vector(0.5, -0.25, 2.0)


def test_invalid_viewport_raises() -> None:
    with pytest.raises(ValueError):
        OrthographicCamera(width=0.0, height=10.0)
    with pytest.raises(ValueError):
        OrthographicCamera(width=10.0, height=-1.0)
