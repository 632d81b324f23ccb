"""Tests for JSON and CSV export."""

import json
import os
import threading

import pandas as pd
import pytest

from swipe_analytics.core.models import MediaItem, ViewInterval
from swipe_analytics.gestures.swipe_analyzer import SwipeAnalyzer
from swipe_analytics.tracking.exporter import SwipeDataExporter
from swipe_analytics.utils.units import PhysicalUnitsConverter


@pytest.fixture
def export_dir(tmp_path):
    return tmp_path / "exports"


@pytest.fixture
def exporter(export_dir):
    return SwipeDataExporter(output_dir=str(export_dir))


@pytest.fixture
def events(make_record):
    return [
        make_record([(500, 1500, 1000), (500, 1200, 1050), (500, 900, 1100)], velocity_y=-3000,
                    subject_id="a"),
        make_record([(200, 800, 6000), (700, 800, 6200)], velocity_x=2500, subject_id="b"),
    ]


@pytest.fixture
def views():
    return [
        ViewInterval("v1", "s", 0, "a", 1000, 0.25),
        ViewInterval("v2", "s", 1100, "b", 3000, 0.375),
    ]


@pytest.fixture
def metrics(events):
    return {e.id: SwipeAnalyzer().analyze(e) for e in events}


def test_json_export(exporter, events):
    path = exporter.export_swipe_events_json(events)
    
    with open(path) as f:
        data = json.load(f)
    assert [d['id'] for d in data] == [e.id for e in events]
    assert data[0]['direction'] == "UP"
    assert data[0]['normalizedDistanceY'] == pytest.approx(-600 / 1920)
    assert data[0]['durationSeconds'] == pytest.approx(0.1)
    assert len(data[0]['path']) == 3


def test_view_json_export(exporter, views):
    path = exporter.export_view_events_json(views)
    
    with open(path) as f:
        data = json.load(f)
    assert [d['mediaId'] for d in data] == ["a", "b"]
    assert data[1]['watchDurationMs'] == 3000
    assert data[1]['watchFraction'] == 0.375


def test_csv_export_writes_swipes_and_paths(exporter, events, export_dir):
    assert exporter.export_swipe_events_csv(events)
    
    swipes = pd.read_csv(next(export_dir.glob("swipe_events_*.csv")))
    paths = pd.read_csv(next(export_dir.glob("swipe_paths_*.csv")))
    
    assert list(swipes.columns[:2]) == ['id', 'sessionId']
    assert swipes['direction'].tolist() == ["UP", "RIGHT"]
    assert swipes['durationMs'].tolist() == [100, 200]
    
    assert len(paths) == 3 + 2
    assert paths.loc[0, 'swipeId'] == events[0].id
    assert paths['pointIndex'].tolist() == [0, 1, 2, 0, 1]


def test_csv_export_without_events(exporter, export_dir):
    assert exporter.export_swipe_events_csv([])
    
    swipes = pd.read_csv(next(export_dir.glob("swipe_events_*.csv")))
    assert swipes.empty
    assert 'velocityY' in swipes.columns


def test_export_failure_is_reported(tmp_path, events, views):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    exporter = SwipeDataExporter(output_dir=str(blocker))
    
    assert exporter.export_swipe_events_json(events) == ""
    assert exporter.export_view_events_json(views) == ""
    assert not exporter.export_swipe_events_csv(events)
    assert exporter.export_session_csv("P01", "food", [MediaItem("a", 4000)], views, events, {}) == ""


def test_session_rows_join_views_with_exit_swipes(exporter, events, views, metrics):
    media = [MediaItem("a", 4000, "Alpha"), MediaItem("b", 8000), MediaItem("c", 3000)]
    
    rows = exporter.session_rows("P01", "food", media, views, events, metrics)
    
    assert rows[0][:5] == ["P01", "food", 1, "Alpha", 4000]
    assert rows[0][5:9] == [1000, 0.25, '', "UP"]
    assert rows[0][9] == 3000
    assert rows[0][10] == int(metrics[events[0].id].acceleration)
    assert rows[0][11] == int(metrics[events[0].id].speed_consistency * 100)
    
    # View ended at 4100, the swipe on "b" started at 6000
    assert rows[1][3] == "b"
    assert rows[1][7:] == ['', '', 0, 0, 0]
    
    assert rows[2] == ["P01", "food", 3, "c", 3000, 0, 0.0, '', '', 0, 0, 0]


def test_session_rows_reference_pattern_images(exporter, events, views, metrics):
    patterns = {events[0].id: "patterns/swipe_UP.png"}
    
    rows = exporter.session_rows("P01", "food", [MediaItem("a", 4000)], views, events, metrics, patterns)
    assert rows[0][7] == "patterns/swipe_UP.png"


def test_session_rows_with_physical_units(tmp_path, events, views, metrics):
    exporter = SwipeDataExporter(output_dir=str(tmp_path), units=PhysicalUnitsConverter(254, 254))
    
    rows = exporter.session_rows("P01", "food", [MediaItem("a", 4000)], views, events, metrics)
    assert rows[0][-1] == pytest.approx(300.0)
    
    frame = exporter.session_frame("P01", "food", [MediaItem("a", 4000)], views, events, metrics)
    assert frame.columns[-1] == 'Swipe Velocity(mm/s)'


def test_session_csv_goes_to_participant_category_directory(exporter, events, export_dir):
    path = exporter.export_session_csv("P01", "food", [MediaItem("a", 4000)], [], events, {})
    
    assert os.path.dirname(path) == str(export_dir / "P01" / "food")
    frame = pd.read_csv(path)
    assert frame.columns[0] == 'Participant ID'
    assert 'Swipe Pattern Image' in frame.columns
    assert len(frame) == 1


def test_async_export_completes(exporter, events, views, export_dir):
    results = []
    
    assert exporter.export_async(events, views, on_complete=results.append)
    exporter.wait(timeout=5)
    
    assert results == [True]
    assert not exporter.is_exporting
    assert len(list(export_dir.glob("view_events_*.json"))) == 1
    assert len(list(export_dir.glob("detailed_swipe_events_*.json"))) == 1


def test_overlapping_export_is_rejected(exporter, events, monkeypatch):
    started = threading.Event()
    release = threading.Event()
    original = exporter.export_swipe_events_json
    
    def blocking_export(records):
        started.set()
        release.wait(timeout=5)
        return original(records)
    
    monkeypatch.setattr(exporter, "export_swipe_events_json", blocking_export)
    
    assert exporter.export_async(events)
    assert started.wait(timeout=5)
    assert exporter.is_exporting
    assert not exporter.export_async(events)
    
    release.set()
    exporter.wait(timeout=5)
    assert not exporter.is_exporting
    assert exporter.export_async(events)
    exporter.wait(timeout=5)
