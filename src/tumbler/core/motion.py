"""
どこで: `src/tumbler/core/motion.py`。
何を: スクリプト化された動きの 1 ステップ（回転角・ピボット・平行移動）と、設定からの構築。
なぜ: 動きを宣言的なデータとして持ち、軌道の事前計算を純粋な展開処理にするため。
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tumbler.core.pivots import PivotFn, origin, pivot_from_config
from tumbler.core.vector import Z_AXIS, Vector


@dataclass(frozen=True, slots=True)
class MotionStep:
    """スクリプトの 1 ステップ。

    Parameters
    ----------
    angle : float
        このステップ全体での回転角 [deg]。サブフレーム数で等分して適用する。
    pivot : PivotFn
        直前スナップショットから回転中心を返す関数。
    translation : Vector
        このステップ全体での平行移動量。サブフレーム数で等分して適用する。
    axis : Vector
        回転軸の方向（既定 +Z）。
    frames : int | None
        サブフレーム数。None ならシーン既定（frames_per_step）を使う。
    """

    angle: float = 0.0
    pivot: PivotFn = field(default_factory=origin)
    translation: Vector = field(default_factory=Vector.zeroes)
    axis: Vector = Z_AXIS
    frames: int | None = None

    def sub_frames(self, default: int) -> int:
        n = int(default) if self.frames is None else int(self.frames)
        if n <= 0:
            raise ValueError(f"サブフレーム数は 1 以上である必要がある: got={n}")
        return n


def _as_vector(value: Any, *, key: str) -> Vector | None:
    if value is None:
        return None
    try:
        return Vector.from_sequence(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y, z] の数値配列である必要があります: got={value!r}") from exc


def script_from_config(
    entries: Sequence[Mapping[str, Any]],
    *,
    drop: float = 0.0,
) -> tuple[MotionStep, ...]:
    """設定の `motion.script` を MotionStep 列に変換する。

    Parameters
    ----------
    entries : Sequence[Mapping[str, Any]]
        各要素は `{rotate, pivot, translate?, axis?, frames?}`。
    drop : float
        `translate` を省略したステップ全体で下方向（-y）へ流す総量。
        1 ステップあたり `drop / len(entries)` ずつ下がる。

    Returns
    -------
    tuple[MotionStep, ...]
        設定順のステップ列。
    """
    items = list(entries)
    if not items:
        return tuple()

    drift = Vector(0.0, -float(drop) / float(len(items)), 0.0)

    out: list[MotionStep] = []
    for i, entry in enumerate(items):
        if not isinstance(entry, Mapping):
            raise RuntimeError(f"motion.script[{i}] は mapping である必要があります: got={entry!r}")
        key = f"motion.script[{i}]"

        try:
            angle = float(entry.get("rotate", 0.0))
        except Exception as exc:
            raise RuntimeError(f"{key}.rotate は数値である必要があります: got={entry.get('rotate')!r}") from exc

        translation = _as_vector(entry.get("translate"), key=f"{key}.translate")
        axis = _as_vector(entry.get("axis"), key=f"{key}.axis")

        frames_raw = entry.get("frames")
        frames = None if frames_raw is None else int(frames_raw)
        if frames is not None and frames <= 0:
            raise ValueError(f"{key}.frames は 1 以上である必要があります: got={frames}")

        out.append(
            MotionStep(
                angle=angle,
                pivot=pivot_from_config(entry.get("pivot")),
                translation=drift if translation is None else translation,
                axis=Z_AXIS if axis is None else axis,
                frames=frames,
            )
        )
    return tuple(out)


__all__ = ["MotionStep", "script_from_config"]
