"""
Logging utilities for swipes, views and session transitions.
"""

import datetime
import logging
from typing import Optional

from ..core.models import BatchSummary, BehaviorProfile, GestureRecord, Session, SwipeMetrics, ViewInterval

logger = logging.getLogger(__name__)

DIRECTION_ICONS = {
    'UP': '⬆️',
    'DOWN': '⬇️',
    'LEFT': '⬅️',
    'RIGHT': '➡️'
}


class SwipeLogger:
    """Handles human-readable logging of tracked events."""

    def __init__(self, debug_file: Optional[str] = 'swipe_debug.log', echo: bool = True):
        self.echo = echo
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _emit(self, line: str):
        if self.echo:
            print(line)

    def _debug(self, payload):
        if not self.debug_file:
            return
        try:
            self.debug_file.write(f"[{self._timestamp()}] {payload}\n")
            self.debug_file.flush()
        except OSError as e:
            logger.warning(f"Could not write debug file: {e}")

    def log_swipe(self, record: GestureRecord, metrics: Optional[SwipeMetrics] = None):
        """Log a tracked swipe."""
        icon = DIRECTION_ICONS.get(record.direction.value, '👋')
        self._emit(f"[{self._timestamp()}] {icon} SWIPE {record.direction.value}: "
                   f"media {record.subject_id or '-'} | {record.duration_ms}ms | "
                   f"v=({int(record.velocity_x)}, {int(record.velocity_y)}) px/s | "
                   f"{int(record.distance)}px | {len(record.path)} pts")

        if metrics is not None:
            self._emit(f"   Straightness: {metrics.straightness:.2f}, "
                       f"Smoothness: {metrics.smoothness:.2f}, "
                       f"Peak: {metrics.peak_velocity:.0f}px/s, "
                       f"Consistency: {metrics.speed_consistency * 100:.0f}%")

        self._debug(record.to_dict())

    def log_view(self, view: ViewInterval):
        """Log a completed media view."""
        self._emit(f"[{self._timestamp()}] 🎬 VIEW: media {view.media_id} | "
                   f"watched {view.watch_duration_ms}ms ({view.watch_fraction * 100:.0f}%)")
        self._debug(view.to_dict())

    def log_session_start(self, session: Session):
        minutes = session.duration_budget_ms / 60000
        self._emit(f"[{self._timestamp()}] ▶️ SESSION START: participant {session.subject_id} "
                   f"({minutes:.1f} minutes)")
        self._debug(session)

    def log_session_end(self, session: Session):
        self._emit(f"[{self._timestamp()}] ⏹️ SESSION END: participant {session.subject_id}")
        self._debug(session)

    def log_summary(self, summary: BatchSummary, profile: BehaviorProfile):
        """Log the live batch summary and behavior profile."""
        shares = ", ".join(f"{d.value} {share * 100:.0f}%" for d, share in summary.direction_share.items())
        dominant = profile.dominant_direction.value if profile.dominant_direction else '-'
        self._emit(f"[{self._timestamp()}] 📊 {summary.count} swipes | "
                   f"avg {summary.avg_velocity:.0f}px/s, {summary.avg_duration_ms}ms | "
                   f"straightness {summary.avg_straightness:.2f}, smoothness {summary.avg_smoothness:.2f}")
        self._emit(f"   Directions: {shares or '-'}")
        self._emit(f"   {profile.gestures_per_minute:.1f}/min | dominant {dominant} | "
                   f"consistency {profile.consistency_score:.2f} | {profile.style_label.value}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
