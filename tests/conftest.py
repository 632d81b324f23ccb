"""Pytest configuration and shared record builders."""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from swipe_analytics.core.models import GestureRecord, SwipeDirection, TouchPoint, new_id


def build_record(points, direction=None, velocity_x=0.0, velocity_y=0.0,
                 timestamp=None, subject_id="video-1", session_id="session-1",
                 screen_width=1080, screen_height=1920):
    """Build a GestureRecord from (x, y, t) tuples."""
    path = tuple(TouchPoint(float(x), float(y), int(t)) for x, y, t in points)
    first, last = path[0], path[-1]
    if direction is None:
        direction = SwipeDirection.from_delta(last.x - first.x, last.y - first.y)
    return GestureRecord(
        id=new_id(),
        session_id=session_id,
        timestamp=first.t if timestamp is None else timestamp,
        subject_id=subject_id,
        direction=direction,
        path=path,
        start_x=first.x,
        start_y=first.y,
        end_x=last.x,
        end_y=last.y,
        duration_ms=last.t - first.t,
        velocity_x=velocity_x,
        velocity_y=velocity_y,
        screen_width=screen_width,
        screen_height=screen_height
    )


@pytest.fixture
def make_record():
    return build_record
