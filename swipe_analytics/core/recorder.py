"""
Path capture for a single swipe gesture.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..config.settings import TrackingConfig
from .errors import EmptyGestureError, RecorderStateError
from .models import GestureRecord, SwipeDirection, TouchPoint, new_id

logger = logging.getLogger(__name__)


class GestureRecorder:
    """Buffers an in-progress drag and finalizes it into a GestureRecord."""

    def __init__(self, screen_width: Optional[int] = None, screen_height: Optional[int] = None,
                 min_distance: Optional[float] = None, sample_interval_ms: Optional[int] = None):
        self.config = TrackingConfig()
        self.screen_width = screen_width or self.config.DEFAULT_SCREEN_WIDTH
        self.screen_height = screen_height or self.config.DEFAULT_SCREEN_HEIGHT
        self.sample_interval_ms = (self.config.SAMPLE_INTERVAL_MS
                                   if sample_interval_ms is None else sample_interval_ms)

        if min_distance is None:
            self._calculate_pixel_values()
        else:
            self.SWIPE_DISTANCE = float(min_distance)

        self.subject_id = ""
        self.is_tracking = False
        self._points: List[TouchPoint] = []

    def _calculate_pixel_values(self):
        """Calculate the swipe threshold from the screen resolution."""
        screen_diagonal = math.sqrt(self.screen_width**2 + self.screen_height**2)
        self.SWIPE_DISTANCE = int(screen_diagonal * self.config.SWIPE_DISTANCE_PERCENT / 100)

    @property
    def path(self) -> Tuple[TouchPoint, ...]:
        return tuple(self._points)

    def set_subject(self, subject_id: str):
        """Set the media item that subsequent gestures refer to."""
        self.subject_id = subject_id

    def begin(self, x: float, y: float, t: int, pressure: Optional[float] = None):
        """Start a new gesture at touch-down, discarding any previous path."""
        self._points = [TouchPoint(float(x), float(y), int(t), pressure)]
        self.is_tracking = True

    def add_point(self, x: float, y: float, t: int, pressure: Optional[float] = None) -> bool:
        """Record a move sample, thinned to the sampling interval."""
        if not self.is_tracking:
            raise RecorderStateError("add_point() called before begin()")

        if self._points and t - self._points[-1].t < self.sample_interval_ms:
            return False

        self._points.append(TouchPoint(float(x), float(y), int(t), pressure))
        return True

    def finalize(self, x: Optional[float] = None, y: Optional[float] = None, t: Optional[int] = None,
                 velocity_x: float = 0.0, velocity_y: float = 0.0,
                 session_id: str = "", pressure: Optional[float] = None) -> Optional[GestureRecord]:
        """
        Complete the gesture at touch-up.

        The lift position, when given, is always appended. Returns None when
        the gesture is shorter than the swipe threshold (a tap).

        Raises:
            EmptyGestureError: If no points were recorded.
        """
        if x is not None and y is not None and t is not None and self.is_tracking:
            if not self._points or int(t) >= self._points[-1].t:
                self._points.append(TouchPoint(float(x), float(y), int(t), pressure))

        self.is_tracking = False
        points, self._points = self._points, []

        if not points:
            raise EmptyGestureError("Cannot finalize a gesture with no recorded points")

        first, last = points[0], points[-1]
        dx = last.x - first.x
        dy = last.y - first.y
        distance = math.sqrt(dx*dx + dy*dy)

        if distance < self.SWIPE_DISTANCE:
            logger.debug(f"Discarding tap: {distance:.1f}px < {self.SWIPE_DISTANCE}px")
            return None

        record = GestureRecord(
            id=new_id(),
            session_id=session_id,
            timestamp=first.t,
            subject_id=self.subject_id,
            direction=SwipeDirection.from_delta(dx, dy),
            path=tuple(points),
            start_x=first.x,
            start_y=first.y,
            end_x=last.x,
            end_y=last.y,
            duration_ms=last.t - first.t,
            velocity_x=float(velocity_x),
            velocity_y=float(velocity_y),
            screen_width=int(self.screen_width),
            screen_height=int(self.screen_height)
        )
        logger.debug(f"Finalized swipe {record.direction.value}: pts={len(points)} dist={distance:.1f}px")
        return record

    def reset(self):
        """Drop the in-progress gesture."""
        self._points = []
        self.is_tracking = False
