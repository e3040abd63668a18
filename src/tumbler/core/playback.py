"""
どこで: `src/tumbler/core/playback.py`。
何を: 表示中の時刻インデックス群とビュー変換（描画ループの状態）の前進、および fps による間引き。
なぜ: ループ状態をモジュールグローバルに置かず、明示的な値として描画呼び出しへ渡すため。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tumbler.core.transform import Transform


def advance_time(t: int, *, step: int, length: int) -> int:
    """時刻インデックスを `step` 進める。末尾に達していたら 0 へ戻す。

    末尾を越える前進は末尾で止め、末尾フレームを 1 回は表示してから 0 へ戻る。
    """
    n = int(length)
    if n <= 0:
        raise ValueError(f"軌道長は 1 以上である必要がある: got={n}")
    last = n - 1
    ti = int(t)
    if ti >= last:
        return 0
    return min(ti + int(step), last)


@dataclass(frozen=True, slots=True)
class PlaybackState:
    """描画ループが tick ごとに更新する状態。

    Attributes
    ----------
    times:
        同時表示する時刻インデックス列。
    view:
        持続的に回転させるビュー変換。`spin()` はコピーを回して新しい状態を返す。
    """

    times: tuple[int, ...]
    view: Transform

    @classmethod
    def start(cls, times: Sequence[int], view: Transform) -> PlaybackState:
        return cls(times=tuple(int(t) for t in times), view=view.copy())

    def spin(self, spin_radians: float) -> PlaybackState:
        """ビューを y 軸回りに回した新しい状態を返す（時刻は変えない）。"""
        view = self.view.copy().rotate_about_y(float(spin_radians))
        return PlaybackState(times=self.times, view=view)

    def advance(self, *, length: int, step: int) -> PlaybackState:
        """時刻インデックス群を 1 tick 分進めた新しい状態を返す（ビューは共有する）。"""
        times = tuple(advance_time(t, step=step, length=length) for t in self.times)
        return PlaybackState(times=times, view=self.view)


class FrameThrottle:
    """単調増加のフレームカウンタ `round(fps * now)` が進んだときだけ描画を許可する。"""

    __slots__ = ("_fps", "_prev_tick", "dropped")

    def __init__(self, fps: float) -> None:
        f = float(fps)
        if f <= 0.0:
            raise ValueError(f"fps は正の値である必要がある: got={fps!r}")
        self._fps = f
        self._prev_tick: int | None = None
        # 直近の ready() で飛ばしたフレーム数（描画が fps に追いつかない目安）。
        self.dropped = 0

    @property
    def fps(self) -> float:
        return self._fps

    def ready(self, now: float) -> bool:
        tick = round(self._fps * float(now))
        if tick == self._prev_tick:
            return False
        prev = self._prev_tick
        self.dropped = 0 if prev is None else max(0, tick - prev - 1)
        self._prev_tick = tick
        return True


__all__ = ["FrameThrottle", "PlaybackState", "advance_time"]
