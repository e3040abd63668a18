"""tumbler: 転がる立方体のゴースト表示アニメーション。

公開 API
--------
- `build_scene` / `runtime_config` / `set_config_path`: 設定からシーンを組み立てる
- `Animation`: tick ごとに描画して状態を進める
- `run`: pyglet ウィンドウで再生する
"""

from __future__ import annotations

from tumbler.core.animation import Animation
from tumbler.core.runtime_config import runtime_config, set_config_path
from tumbler.core.scene import Scene, build_scene


def run(scene: Scene | None = None) -> None:
    """シーン（省略時は設定から構築）を pyglet ウィンドウで再生する。"""
    from tumbler.interactive.window import run_window

    run_window(build_scene(runtime_config()) if scene is None else scene)


__all__ = ["Animation", "Scene", "build_scene", "run", "runtime_config", "set_config_path"]
