"""
Full-run log of swipes and media views for one participant.
"""

import dataclasses
import threading
from typing import List, Optional

from ..core.models import GestureRecord, SwipeDirection, TouchPoint, ViewInterval, new_id
from ..utils.logger import SwipeLogger


class UserBehaviorTracker:
    """Records every swipe and view of a run under one session id."""

    def __init__(self, session_id: Optional[str] = None, swipe_logger: Optional[SwipeLogger] = None):
        self.session_id = session_id or new_id()
        self.logger = swipe_logger or SwipeLogger(debug_file=None)
        self._swipes: List[GestureRecord] = []
        self._views: List[ViewInterval] = []
        self._lock = threading.Lock()

    def track_swipe(self, record: GestureRecord) -> GestureRecord:
        """Stamp the session id onto a finalized swipe and log it."""
        stamped = dataclasses.replace(record, session_id=self.session_id)
        with self._lock:
            self._swipes.append(stamped)
        self.logger.log_swipe(stamped)
        return stamped

    def track_basic_swipe(self, direction: SwipeDirection, media_id: str,
                          duration_ms: int, now_ms: int) -> GestureRecord:
        """Record a swipe known only by direction and duration."""
        record = GestureRecord(
            id=new_id(),
            session_id=self.session_id,
            timestamp=now_ms,
            subject_id=media_id,
            direction=direction,
            path=(TouchPoint(0.0, 0.0, now_ms), TouchPoint(0.0, 0.0, now_ms + duration_ms)),
            start_x=0.0,
            start_y=0.0,
            end_x=0.0,
            end_y=0.0,
            duration_ms=duration_ms,
            velocity_x=0.0,
            velocity_y=0.0,
            screen_width=0,
            screen_height=0
        )
        with self._lock:
            self._swipes.append(record)
        self.logger.log_swipe(record)
        return record

    def track_view(self, media_id: str, watch_duration_ms: int,
                   media_duration_ms: int, started_ms: int) -> ViewInterval:
        """Record how long a media item was watched, starting at started_ms."""
        if media_duration_ms > 0:
            fraction = max(0.0, min(1.0, watch_duration_ms / media_duration_ms))
        else:
            fraction = 0.0

        view = ViewInterval(
            id=new_id(),
            session_id=self.session_id,
            timestamp=started_ms,
            media_id=media_id,
            watch_duration_ms=watch_duration_ms,
            watch_fraction=fraction
        )
        with self._lock:
            self._views.append(view)
        self.logger.log_view(view)
        return view

    def swipe_events(self) -> List[GestureRecord]:
        with self._lock:
            return list(self._swipes)

    def view_events(self) -> List[ViewInterval]:
        with self._lock:
            return list(self._views)

    def clear(self):
        with self._lock:
            self._swipes.clear()
            self._views.clear()
