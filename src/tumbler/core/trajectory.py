"""
どこで: `src/tumbler/core/trajectory.py`。
何を: 初期面集合とモーションスクリプトから、全サブフレームの姿勢履歴を事前計算する。
なぜ: 描画時に複数の時刻（ゴースト）を同時に、しかもループ再生で参照するため、
      幾何計算を描画ループから切り離して 1 回だけ行う。

アルゴリズム
------------
1. 各ステップをサブフレーム数 n に展開する。
2. サブフレーム t のピボットは「直前スナップショット（t=0 では初期面集合）」から評価する。
3. 全頂点を `angle/n` だけ (axis, pivot) 回りに回転し、`translation/n` を加える。
   中心と法線は Face が頂点から再計算する。
4. 結果はステップ順に連結した 1 本の時刻列になる（index 0 = 最初のサブフレーム適用後）。
"""

from __future__ import annotations

import logging
import math
import operator
from collections.abc import Iterator, Sequence

from tumbler.core.errors import IndexOutOfRangeError
from tumbler.core.face import Face
from tumbler.core.motion import MotionStep

logger = logging.getLogger(__name__)

Snapshot = tuple[Face, ...]


class Trajectory(Sequence[Snapshot]):
    """事前計算済みの姿勢履歴（不変）。

    Notes
    -----
    インデックス参照は `[0, len)` のみ受理する。負のインデックスによる末尾参照は
    描画側のラップ処理の誤りを隠すため許可しない。
    """

    __slots__ = ("_snapshots",)

    def __init__(self, snapshots: Sequence[Snapshot]) -> None:
        self._snapshots: tuple[Snapshot, ...] = tuple(tuple(s) for s in snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __getitem__(self, index: int) -> Snapshot:  # type: ignore[override]
        if isinstance(index, slice):
            raise TypeError("Trajectory はスライス参照に対応しない")
        if isinstance(index, bool):
            raise TypeError(f"時刻インデックスは整数である必要がある: got={index!r}")
        i = operator.index(index)
        if i < 0 or i >= len(self._snapshots):
            raise IndexOutOfRangeError(
                f"軌道の時刻インデックスが範囲外: index={i}, length={len(self._snapshots)}"
            )
        return self._snapshots[i]

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._snapshots)

    @property
    def last_index(self) -> int:
        return len(self._snapshots) - 1


def _advance(faces: Snapshot, step: MotionStep, n: int) -> Snapshot:
    """1 サブフレーム分だけ面集合を進める。"""
    pivot = step.pivot(faces)
    radians = math.radians(float(step.angle) / float(n))
    delta = step.translation.divide(float(n))
    axis = step.axis

    return tuple(
        face.map_vertices(lambda v: v.rotate_around(pivot, axis, radians).add(delta))
        for face in faces
    )


def precompute_trajectory(
    initial: Sequence[Face],
    script: Sequence[MotionStep],
    *,
    frames_per_step: int,
) -> Trajectory:
    """スクリプト全体を展開した軌道を返す。

    Parameters
    ----------
    initial : Sequence[Face]
        初期（未変形）の面集合。
    script : Sequence[MotionStep]
        ステップ列。
    frames_per_step : int
        ステップがサブフレーム数を持たない場合の既定値。

    Returns
    -------
    Trajectory
        長さは各ステップのサブフレーム数の総和に一致する。
    """
    current: Snapshot = tuple(initial)
    if not current:
        raise ValueError("初期面集合が空です")

    snapshots: list[Snapshot] = []
    for step in script:
        n = step.sub_frames(frames_per_step)
        for _ in range(n):
            current = _advance(current, step, n)
            snapshots.append(current)

    logger.info(
        "Precomputed trajectory: %d steps, %d frames, %d faces per frame",
        len(script),
        len(snapshots),
        len(current),
    )
    return Trajectory(snapshots)


__all__ = ["Snapshot", "Trajectory", "precompute_trajectory"]
