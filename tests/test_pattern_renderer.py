"""Tests for swipe pattern images."""

import os

from swipe_analytics.core.models import SwipeDirection
from swipe_analytics.utils.pattern_renderer import SwipePatternRenderer


def test_render_writes_png(tmp_path, make_record):
    renderer = SwipePatternRenderer(str(tmp_path / "patterns"), dpi=20)
    record = make_record([(500, 1500, 0), (520, 1200, 50), (540, 900, 100)], screen_width=200,
                         screen_height=400)
    
    path = renderer.render(record)
    
    assert os.path.dirname(path) == str(tmp_path / "patterns")
    assert os.path.basename(path).startswith("swipe_UP_")
    with open(path, 'rb') as f:
        assert f.read(8) == b'\x89PNG\r\n\x1a\n'


def test_render_without_screen_size_uses_default(tmp_path, make_record):
    renderer = SwipePatternRenderer(str(tmp_path), dpi=10)
    record = make_record([(0, 0, 0), (0, 0, 100)], direction=SwipeDirection.DOWN,
                         screen_width=0, screen_height=0)
    
    assert renderer.render(record).endswith(".png")


def test_render_failure_returns_empty_path(tmp_path, make_record):
    blocker = tmp_path / "file"
    blocker.write_text("")
    renderer = SwipePatternRenderer(str(blocker / "patterns"), dpi=10)
    
    assert renderer.render(make_record([(0, 0, 0), (0, -200, 100)])) == ""
