from __future__ import annotations

import pytest

from block_blast.game import FrameTimer, PointerEvent


@pytest.mark.parametrize("data", [
    None,
    {},
    {"x": 1.0},
    {"y": 1.0},
    {"x": "left", "y": 2},
    {"x": None, "y": 2},
    {"x": float("inf"), "y": 2},
])
def test_from_mapping_rejects_missing_coordinates(data):
    assert PointerEvent.from_mapping(data) is None


def test_from_mapping_accepts_numbers():
    event = PointerEvent.from_mapping({"x": 10, "y": "20.5", "is_touch": 1})
    assert event == PointerEvent(10.0, 20.5, True)


class FakeClock:
    def __init__(self, *times: float) -> None:
        self.times = list(times)

    def __call__(self) -> float:
        return self.times.pop(0)


def test_frame_timer_clamps_long_frames():
    timer = FrameTimer(max_step=0.05, clock=FakeClock(10.0, 10.02, 11.0, 10.5))
    assert timer.tick() == 0.0
    assert timer.tick() == pytest.approx(0.02)
    assert timer.tick() == pytest.approx(0.05)
    # a clock going backwards never yields a negative delta
    assert timer.tick() == 0.0
    assert timer.game_time == pytest.approx(0.07)
