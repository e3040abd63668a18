from __future__ import annotations

import math

import pytest

from tumbler.core.playback import FrameThrottle, PlaybackState, advance_time
from tumbler.core.transform import Transform


def test_advance_time_wraps_after_last_frame() -> None:
    assert advance_time(0, step=1, length=5) == 1
    assert advance_time(3, step=1, length=5) == 4
    assert advance_time(4, step=1, length=5) == 0


def test_advance_time_clamps_to_last_before_wrapping() -> None:
    seq = [0]
    for _ in range(4):
        seq.append(advance_time(seq[-1], step=3, length=5))
    assert seq == [0, 3, 4, 0, 3]


def test_advance_time_single_frame_trajectory() -> None:
    assert advance_time(0, step=1, length=1) == 0
    with pytest.raises(ValueError):
        advance_time(0, step=1, length=0)


def test_playback_state_advances_all_times() -> None:
    state = PlaybackState.start([0, 3, 4], Transform.identity())
    nxt = state.advance(length=5, step=1)
    assert nxt.times == (1, 4, 0)
    assert state.times == (0, 3, 4)
    assert nxt.view.is_close(state.view)


def test_playback_state_spins_a_copy_of_the_view() -> None:
    base = Transform.identity()
    state = PlaybackState.start([0], base)
    assert state.view is not base

    nxt = state.spin(math.radians(10.0))
    assert nxt.times == state.times
    assert state.view.is_close(Transform.identity())
    assert nxt.view.is_close(Transform.identity().rotate_about_y(math.radians(10.0)))

    nxt2 = nxt.spin(math.radians(10.0))
    assert nxt2.view.is_close(Transform.identity().rotate_about_y(math.radians(20.0)))


def test_frame_throttle_gates_by_tick() -> None:
    throttle = FrameThrottle(30.0)
    assert throttle.fps == 30.0
    assert throttle.ready(0.0) is True
    assert throttle.ready(0.01) is False
    assert throttle.ready(0.034) is True
    assert throttle.dropped == 0


def test_frame_throttle_counts_dropped_frames() -> None:
    throttle = FrameThrottle(10.0)
    assert throttle.ready(0.0)
    assert throttle.ready(0.5)
    assert throttle.dropped == 4


def test_frame_throttle_rejects_non_positive_fps() -> None:
    with pytest.raises(ValueError):
        FrameThrottle(0.0)
