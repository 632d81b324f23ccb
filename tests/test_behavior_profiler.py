"""Tests for session behavior profiling."""

import pytest

from swipe_analytics.core.models import StyleLabel, SwipeDirection
from swipe_analytics.gestures.behavior_profiler import BehaviorProfiler


@pytest.fixture
def profiler():
    return BehaviorProfiler()


def _swipe(make_record, direction, start=0):
    dx, dy = {
        SwipeDirection.UP: (0, -200),
        SwipeDirection.DOWN: (0, 200),
        SwipeDirection.LEFT: (-200, 0),
        SwipeDirection.RIGHT: (200, 0),
    }[direction]
    return make_record([(500, 500, start), (500 + dx, 500 + dy, start + 100)])


def test_empty_profile(profiler):
    profile = profiler.profile([])
    
    assert profile.count == 0
    assert profile.gestures_per_minute == 0.0
    assert profile.dominant_direction is None
    assert profile.style_label == StyleLabel.UNKNOWN


def test_single_gesture(profiler, make_record):
    profile = profiler.profile([_swipe(make_record, SwipeDirection.LEFT)])
    
    assert profile.count == 1
    assert profile.gestures_per_minute == 0.0
    assert profile.dominant_direction == SwipeDirection.LEFT


def test_gestures_per_minute(profiler, make_record):
    records = [_swipe(make_record, SwipeDirection.UP, start) for start in (0, 30000, 60000)]
    
    assert profiler.profile(records).gestures_per_minute == pytest.approx(3.0)


def test_dominant_direction_majority(profiler, make_record):
    directions = [SwipeDirection.UP, SwipeDirection.LEFT, SwipeDirection.LEFT]
    records = [_swipe(make_record, d, i * 1000) for i, d in enumerate(directions)]
    
    assert profiler.profile(records).dominant_direction == SwipeDirection.LEFT


def test_dominant_direction_tie_goes_to_first_seen(profiler, make_record):
    directions = [SwipeDirection.LEFT, SwipeDirection.UP, SwipeDirection.UP, SwipeDirection.LEFT]
    records = [_swipe(make_record, d, i * 1000) for i, d in enumerate(directions)]
    
    assert profiler.profile(records).dominant_direction == SwipeDirection.LEFT


def test_identical_gestures_are_fully_consistent(profiler, make_record):
    records = [_swipe(make_record, SwipeDirection.UP, i * 1000) for i in range(4)]
    
    assert profiler.profile(records).consistency_score == pytest.approx(1.0)


def test_fast_straight_swipes_are_fast_and_precise(profiler, make_record):
    records = [make_record([(0, 0, 0), (0, -250, 100)])]  # 2500 px/s
    
    assert profiler.profile(records).style_label == StyleLabel.FAST_PRECISE


def test_fast_reversals_are_erratic(profiler, make_record):
    records = [make_record([(0, 0, 0), (100, 0, 10), (0, 0, 20)], direction=SwipeDirection.RIGHT)]
    
    assert profiler.profile(records).style_label == StyleLabel.FAST_ERRATIC


def test_slow_straight_swipes_are_careful(profiler, make_record):
    records = [make_record([(0, 0, 0), (0, -100, 500)])]  # 200 px/s
    
    assert profiler.profile(records).style_label == StyleLabel.CAREFUL_PRECISE


def test_slow_reversals_are_casual(profiler, make_record):
    records = [make_record([(0, 0, 0), (100, 0, 500), (0, 0, 1000)], direction=SwipeDirection.RIGHT)]
    
    assert profiler.profile(records).style_label == StyleLabel.CASUAL_BROWSER


@pytest.mark.parametrize("velocity, smoothness, expected", [
    (2000.0, 0.9, StyleLabel.CAREFUL_PRECISE),
    (2000.1, 0.9, StyleLabel.FAST_PRECISE),
    (2500.0, 0.8, StyleLabel.FAST_ERRATIC),
    (100.0, 0.2, StyleLabel.CASUAL_BROWSER),
])
def test_style_thresholds_are_strict(profiler, velocity, smoothness, expected):
    assert profiler.style_label(velocity, smoothness) == expected
