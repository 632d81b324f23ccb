"""
Session timing for a data collection run.
"""

import dataclasses
import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from ..config.settings import TrackingConfig
from ..core.models import GestureRecord, Session, new_id
from ..utils.pattern_renderer import SwipePatternRenderer

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class SessionClock:
    """
    Tracks session start/end and remaining time on a periodic tick.

    While scheduled, the clock re-arms a timer every tick; stopping or
    ending the session stops re-arming it.
    """

    def __init__(self, subject_id: str, clock: Callable[[], int] = monotonic_ms,
                 tick_ms: Optional[int] = None,
                 pattern_renderer: Optional[SwipePatternRenderer] = None):
        self.subject_id = subject_id
        self.clock = clock
        self.tick_ms = TrackingConfig.SESSION_TICK_MS if tick_ms is None else tick_ms
        self.pattern_renderer = pattern_renderer

        self.session: Optional[Session] = None
        self.auto_generate_artifacts = False
        self.video_counter = 0
        self.swipe_patterns: Dict[str, str] = {}

        self._timer: Optional[threading.Timer] = None
        self._scheduled = False
        self._lock = threading.Lock()
        self._tick_listeners: List[Callable[[int], None]] = []
        self._complete_listeners: List[Callable[[Session], None]] = []

    def on_tick(self, listener: Callable[[int], None]):
        """Register a callback receiving the remaining time on each tick."""
        self._tick_listeners.append(listener)

    def on_complete(self, listener: Callable[[Session], None]):
        """Register a callback receiving the ended session."""
        self._complete_listeners.append(listener)

    @property
    def is_active(self) -> bool:
        return self.session is not None and self.session.is_active

    def start(self, duration_minutes: Optional[float] = None, auto_generate_artifacts: bool = False,
              schedule: bool = True) -> bool:
        """Start a session. Returns False if one is already running."""
        with self._lock:
            if self.is_active:
                return False

            minutes = TrackingConfig.DEFAULT_SESSION_MINUTES if duration_minutes is None else duration_minutes
            self.session = Session(
                id=new_id(),
                subject_id=self.subject_id,
                start_time=self.clock(),
                duration_budget_ms=int(minutes * 60 * 1000),
                is_active=True
            )
            self.auto_generate_artifacts = auto_generate_artifacts
            self.video_counter = 0
            self.swipe_patterns = {}
            self._scheduled = schedule

        logger.info(f"Started session for participant {self.subject_id} ({minutes} minutes)")
        if schedule:
            self._schedule()
        return True

    def end(self) -> bool:
        """End the session. Idempotent: returns False if none is active."""
        with self._lock:
            if not self.is_active:
                return False
            self.session = dataclasses.replace(self.session, is_active=False, end_time=self.clock())
            ended = self.session
            self._cancel_timer()

        logger.info(f"Ended session for participant {self.subject_id}")
        for listener in self._complete_listeners:
            listener(ended)
        return True

    def stop(self):
        """Stop ticking without ending the session."""
        with self._lock:
            self._cancel_timer()

    def tick(self) -> int:
        """Publish the remaining time and end the session when it runs out."""
        if not self.is_active:
            return 0

        remaining = self.remaining_ms()
        for listener in self._tick_listeners:
            listener(remaining)

        if remaining <= 0:
            self.end()
        return remaining

    def elapsed_ms(self) -> int:
        if self.session is None:
            return 0
        end = self.session.end_time if self.session.end_time is not None else self.clock()
        return max(0, end - self.session.start_time)

    def remaining_ms(self) -> int:
        if not self.is_active:
            return 0
        return max(0, self.session.duration_budget_ms - self.elapsed_ms())

    def track_video_view(self) -> int:
        """Count a media item shown during the active session."""
        if self.is_active:
            self.video_counter += 1
        return self.video_counter

    def is_auto_generate_enabled(self) -> bool:
        return self.auto_generate_artifacts and self.is_active

    def generate_swipe_pattern(self, record: GestureRecord) -> str:
        """
        Render the swipe's path to an image when auto generation is on.

        Returns the image path, or '' when nothing was rendered.
        """
        if self.pattern_renderer is None or not self.is_auto_generate_enabled():
            return ""

        image_path = self.pattern_renderer.render(record)
        if image_path:
            self.swipe_patterns[record.id] = image_path
        return image_path

    def format_remaining(self) -> str:
        """Remaining time as mm:ss."""
        total_seconds = self.remaining_ms() // 1000
        return f"{total_seconds // 60:02d}:{total_seconds % 60:02d}"

    def _schedule(self):
        with self._lock:
            if not self._scheduled or not self.is_active:
                return
            self._timer = threading.Timer(self.tick_ms / 1000.0, self._run_tick)
            self._timer.daemon = True
            self._timer.start()

    def _run_tick(self):
        if self.tick() > 0:
            self._schedule()

    def _cancel_timer(self):
        """Stop re-arming and cancel the pending tick. Caller holds the lock."""
        self._scheduled = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
