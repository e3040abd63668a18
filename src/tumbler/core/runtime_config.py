# どこで: `src/tumbler/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス・カメラ・パレット・モーションスクリプトをコード変更なしで差し替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

このモジュールは、以下を提供する:

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

入出力 / 副作用
----------------
- 入力: 同梱 `tumbler/resource/default_config.yaml`、任意でユーザーの `config.yaml`
- 出力: `RuntimeConfig`（不変データ）
- 副作用: ファイル読み取り、YAML パース、モジュールグローバルへのキャッシュ保存

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    """キャンバス設定（`canvas`）。"""

    width: int
    height: int
    background: Any


@dataclass(frozen=True, slots=True)
class CameraConfig:
    """正射影カメラ設定（`camera`）。"""

    zoom: float
    position: tuple[float, float, float]
    direction: tuple[float, float, float]
    up: tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """ビュー変換設定（`view`）。角度はすべて度。"""

    tilt_x_deg: float
    tilt_y_deg: float
    spin_y_deg_per_tick: float


@dataclass(frozen=True, slots=True)
class AnimationConfig:
    """再生設定（`animation`）。"""

    fps: float
    frames_per_step: int
    time_step: int
    ghost_steps: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class LightingConfig:
    """光源と奥行きソート基準点（`lighting`）。"""

    position: tuple[float, float, float]
    depth_anchor: tuple[float, float, float]
    facing_range: tuple[float, float]


@dataclass(frozen=True, slots=True)
class PaletteConfig:
    """パレット設定（`palette`）。色の解釈は `shading.palette_from_config()` が行う。"""

    colors: tuple[Any, ...]
    outline: Any


@dataclass(frozen=True, slots=True)
class MotionConfig:
    """モーション設定（`motion`）。script の各要素は生の mapping のまま保持する。"""

    start: tuple[float, float, float]
    scale: float
    drop: float
    script: tuple[dict[str, Any], ...]


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """tumbler の実行時設定。

    `runtime_config()` が `config.yaml` を解釈して構築する不変オブジェクト。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。
        ユーザー設定が無い場合は None（同梱デフォルトのみで動作）。
    output_dir:
        生成物（PNG / GIF / SVG）の出力先ディレクトリ。
    canvas, camera, view, animation, lighting, palette, motion:
        各セクションの設定。
    """

    config_path: Path | None
    output_dir: Path
    canvas: CanvasConfig
    camera: CameraConfig
    view: ViewConfig
    animation: AnimationConfig
    lighting: LightingConfig
    palette: PaletteConfig
    motion: MotionConfig


# `set_config_path()` で指定される「明示 config」のパス。
_EXPLICIT_CONFIG_PATH: Path | None = None
# `runtime_config()` のプロセス内キャッシュ。設定を切り替える場合は破棄する。
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    - `path` を None にすると明示指定を解除し、既定の探索に戻る。
    - 設定が変わるため、`runtime_config()` のキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す。

    探索順（先勝ち）:
    - `./.tumbler/config.yaml`
    - `~/.config/tumbler/config.yaml`
    """

    return (
        Path.cwd() / ".tumbler" / "config.yaml",
        Path.home() / ".config" / "tumbler" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    """任意値を「空なら None / それ以外は Path」へ変換する。"""

    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(_require(value, key=key))
    except RuntimeError:
        raise
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int:
    try:
        return int(_require(value, key=key))
    except RuntimeError:
        raise
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float_tuple(value: Any, *, key: str, n: int) -> tuple[float, ...]:
    """任意値を n 要素の float タプルとして解釈して返す。"""

    _require(value, key=key)
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は長さ {n} の配列である必要があります: got={value!r}") from exc
    if len(seq) != n:
        raise RuntimeError(f"{key} は長さ {n} の配列である必要があります: got={value!r}")
    try:
        return tuple(float(v) for v in seq)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値配列である必要があります: got={value!r}") from exc


def _as_vec3(value: Any, *, key: str) -> tuple[float, float, float]:
    x, y, z = _as_float_tuple(value, key=key, n=3)
    return (x, y, z)


def _as_int_list(value: Any, *, key: str) -> tuple[int, ...]:
    _require(value, key=key)
    try:
        return tuple(int(v) for v in value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数配列である必要があります: got={value!r}") from exc


def _as_list(value: Any, *, key: str) -> list[Any]:
    _require(value, key=key)
    if isinstance(value, (str, bytes, dict)):
        raise RuntimeError(f"{key} は配列である必要があります: got={value!r}")
    try:
        return list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は配列である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。"""

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    blob = (
        resources.files("tumbler")
        .joinpath("resource", "default_config.yaml")
        .read_text(encoding="utf-8")
    )
    return _load_yaml_text(blob, source="tumbler/resource/default_config.yaml")


def _parse_payload(payload: dict[str, Any], *, config_path: Path | None) -> RuntimeConfig:
    """マージ済み payload を検証し、RuntimeConfig を構築する。"""

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    width = _as_int(canvas.get("width"), key="canvas.width")
    height = _as_int(canvas.get("height"), key="canvas.height")
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas の width/height は正の値である必要があります: got={width}x{height}")
    canvas_cfg = CanvasConfig(
        width=width,
        height=height,
        background=_require(canvas.get("background"), key="canvas.background"),
    )

    camera = _as_mapping(payload.get("camera"), key="camera")
    zoom = _as_float(camera.get("zoom"), key="camera.zoom")
    if zoom <= 0.0:
        raise ValueError(f"camera.zoom は正の値である必要があります: got={zoom}")
    camera_cfg = CameraConfig(
        zoom=zoom,
        position=_as_vec3(camera.get("position"), key="camera.position"),
        direction=_as_vec3(camera.get("direction"), key="camera.direction"),
        up=_as_vec3(camera.get("up"), key="camera.up"),
    )

    view = _as_mapping(payload.get("view"), key="view")
    view_cfg = ViewConfig(
        tilt_x_deg=_as_float(view.get("tilt_x_deg"), key="view.tilt_x_deg"),
        tilt_y_deg=_as_float(view.get("tilt_y_deg"), key="view.tilt_y_deg"),
        spin_y_deg_per_tick=_as_float(view.get("spin_y_deg_per_tick"), key="view.spin_y_deg_per_tick"),
    )

    animation = _as_mapping(payload.get("animation"), key="animation")
    fps = _as_float(animation.get("fps"), key="animation.fps")
    if fps <= 0.0:
        raise ValueError(f"animation.fps は正の値である必要があります: got={fps}")
    frames_per_step = _as_int(animation.get("frames_per_step"), key="animation.frames_per_step")
    if frames_per_step <= 0:
        raise ValueError(
            f"animation.frames_per_step は 1 以上である必要があります: got={frames_per_step}"
        )
    time_step = _as_int(animation.get("time_step"), key="animation.time_step")
    if time_step <= 0:
        raise ValueError(f"animation.time_step は 1 以上である必要があります: got={time_step}")
    ghost_steps = _as_int_list(animation.get("ghost_steps"), key="animation.ghost_steps")
    if not ghost_steps:
        raise ValueError("animation.ghost_steps は 1 要素以上である必要があります")
    if any(s < 0 for s in ghost_steps):
        raise ValueError(f"animation.ghost_steps は 0 以上である必要があります: got={ghost_steps}")
    animation_cfg = AnimationConfig(
        fps=fps,
        frames_per_step=frames_per_step,
        time_step=time_step,
        ghost_steps=ghost_steps,
    )

    lighting = _as_mapping(payload.get("lighting"), key="lighting")
    lo, hi = _as_float_tuple(lighting.get("facing_range"), key="lighting.facing_range", n=2)
    if not lo < hi:
        raise ValueError(f"lighting.facing_range は lo < hi である必要があります: got={[lo, hi]}")
    lighting_cfg = LightingConfig(
        position=_as_vec3(lighting.get("position"), key="lighting.position"),
        depth_anchor=_as_vec3(lighting.get("depth_anchor"), key="lighting.depth_anchor"),
        facing_range=(lo, hi),
    )

    palette = _as_mapping(payload.get("palette"), key="palette")
    colors = _as_list(palette.get("colors"), key="palette.colors")
    if not colors:
        raise ValueError("palette.colors は 1 色以上である必要があります")
    palette_cfg = PaletteConfig(
        colors=tuple(colors),
        outline=_require(palette.get("outline"), key="palette.outline"),
    )

    motion = _as_mapping(payload.get("motion"), key="motion")
    script = _as_list(motion.get("script"), key="motion.script")
    if not script:
        raise ValueError("motion.script は 1 ステップ以上である必要があります")
    for i, entry in enumerate(script):
        if not isinstance(entry, dict):
            raise RuntimeError(f"motion.script[{i}] は mapping である必要があります: got={entry!r}")
    scale = _as_float(motion.get("scale", 1.0), key="motion.scale")
    if scale <= 0.0:
        raise ValueError(f"motion.scale は正の値である必要があります: got={scale}")
    motion_cfg = MotionConfig(
        start=_as_vec3(motion.get("start", (0.0, 0.0, 0.0)), key="motion.start"),
        scale=scale,
        drop=_as_float(motion.get("drop", 0.0), key="motion.drop"),
        script=tuple(dict(e) for e in script),
    )

    return RuntimeConfig(
        config_path=config_path,
        output_dir=output_dir,
        canvas=canvas_cfg,
        camera=camera_cfg,
        view=view_cfg,
        animation=animation_cfg,
        lighting=lighting_cfg,
        palette=palette_cfg,
        motion=motion_cfg,
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `tumbler/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    # 既定の探索は「CWD → HOME」の順。最初に見つかった 1 つのみを採用する。
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    cfg = _parse_payload(payload, config_path=explicit_path or discovered_path)
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return Path(runtime_config().output_dir)


__all__ = [
    "AnimationConfig",
    "CameraConfig",
    "CanvasConfig",
    "LightingConfig",
    "MotionConfig",
    "PaletteConfig",
    "RuntimeConfig",
    "ViewConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
