"""Tests for batch summaries."""

import dataclasses

import pytest

from swipe_analytics.core.models import SwipeDirection
from swipe_analytics.gestures.batch_aggregator import BatchAggregator
from swipe_analytics.gestures.swipe_analyzer import SwipeAnalyzer


@pytest.fixture
def aggregator():
    return BatchAggregator()


def test_empty_batch(aggregator):
    summary = aggregator.summarize([])
    
    assert summary.count == 0
    assert dict(summary.direction_share) == {}
    assert summary.avg_velocity == 0.0
    assert summary.avg_duration_ms == 0


def test_three_upward_swipes(aggregator, make_record):
    records = [
        make_record([(0, 0, 0), (0, -200, 200)], velocity_y=-1000),
        make_record([(0, 0, 1000), (0, -450, 1300)], velocity_y=-1500),
        make_record([(0, 0, 2000), (0, -480, 2400)], velocity_y=-1200),
    ]
    summary = aggregator.summarize(records)
    
    assert summary.count == 3
    assert dict(summary.direction_share) == {SwipeDirection.UP: 1.0}
    assert summary.avg_duration_ms == 300
    assert summary.avg_straightness == pytest.approx(1.0)
    assert summary.avg_velocity == pytest.approx((1000 + 1500 + 1200) / 3)


def test_direction_shares_sum_to_one(aggregator, make_record):
    records = [
        make_record([(0, 0, 0), (0, -200, 100)]),
        make_record([(0, 0, 0), (200, 0, 100)]),
        make_record([(0, 0, 0), (0, -200, 100)]),
        make_record([(0, 0, 0), (-200, 0, 100)]),
    ]
    shares = aggregator.summarize(records).direction_share
    
    assert dict(shares) == {
        SwipeDirection.UP: 0.5,
        SwipeDirection.RIGHT: 0.25,
        SwipeDirection.LEFT: 0.25,
    }
    assert list(shares) == [SwipeDirection.UP, SwipeDirection.RIGHT, SwipeDirection.LEFT]
    assert sum(shares.values()) == pytest.approx(1.0)


def test_precomputed_metrics_are_used(aggregator, make_record):
    record = make_record([(0, 0, 0), (0, -200, 100)])
    metrics = dataclasses.replace(SwipeAnalyzer().analyze(record), average_velocity=42.0)
    
    summary = aggregator.summarize([record], {record.id: metrics})
    assert summary.avg_velocity == 42.0


def test_duration_average_is_truncated(aggregator, make_record):
    records = [
        make_record([(0, 0, 0), (0, -200, 100)]),
        make_record([(0, 0, 0), (0, -200, 101)]),
    ]
    
    assert aggregator.summarize(records).avg_duration_ms == 100
