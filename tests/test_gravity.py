import pytest

from tetris_autopilot.utils import MIN_FRAMES_PER_ROW, drop_interval_frames


def test_drop_interval_never_increases_with_level():
    intervals = [drop_interval_frames(level) for level in range(0, 40)]
    assert all(a >= b for a, b in zip(intervals, intervals[1:]))
    assert min(intervals) >= MIN_FRAMES_PER_ROW


def test_nes_reference_levels():
    assert drop_interval_frames(0) == 48
    assert drop_interval_frames(9) == 6
    assert drop_interval_frames(18) == 3
    assert drop_interval_frames(19) == 2
    assert drop_interval_frames(29) == 1


def test_drop_interval_clamped_past_table():
    assert drop_interval_frames(255) == MIN_FRAMES_PER_ROW


def test_negative_level_rejected():
    with pytest.raises(ValueError):
        drop_interval_frames(-1)
