"""Tests for the shared record types."""

import dataclasses

import pytest

from swipe_analytics.core.models import BatchSummary, GestureRecord, SwipeDirection, TouchPoint


def test_record_is_immutable(make_record):
    record = make_record([(0, 0, 0), (0, -100, 50)])
    
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.duration_ms = 10


def test_empty_path_is_rejected():
    with pytest.raises(ValueError):
        GestureRecord(
            id="g", session_id="s", timestamp=0, subject_id="m",
            direction=SwipeDirection.UP, path=(),
            start_x=0, start_y=0, end_x=0, end_y=0, duration_ms=0,
            velocity_x=0, velocity_y=0, screen_width=1080, screen_height=1920
        )


def test_unordered_path_is_rejected(make_record):
    with pytest.raises(ValueError):
        make_record([(0, 0, 50), (0, -100, 10)], direction=SwipeDirection.UP)


def test_path_is_stored_as_tuple(make_record):
    record = make_record([(0, 0, 0), (30, 40, 10)])
    
    assert isinstance(record.path, tuple)
    assert record.distance == pytest.approx(50)


def test_direction_values_are_names():
    assert SwipeDirection.UP == "UP"
    assert SwipeDirection("LEFT") is SwipeDirection.LEFT


def test_point_distance():
    assert TouchPoint(0, 0, 0).distance_to(TouchPoint(3, 4, 10)) == pytest.approx(5)


def test_batch_summary_shares_are_read_only():
    shares = {SwipeDirection.UP: 1.0}
    summary = BatchSummary(count=1, direction_share=shares)
    shares[SwipeDirection.DOWN] = 0.5
    
    assert dict(summary.direction_share) == {SwipeDirection.UP: 1.0}
    with pytest.raises(TypeError):
        summary.direction_share[SwipeDirection.LEFT] = 0.1
