"""
Position tracking over the ordered media feed.
"""

import logging
import random
from typing import List, Optional, Sequence

from ..core.models import GestureRecord, MediaItem, SwipeDirection, ViewInterval
from .behavior_tracker import UserBehaviorTracker
from .session_clock import SessionClock

logger = logging.getLogger(__name__)


class MediaFeed:
    """
    Walks the media list in response to vertical swipes.

    Swiping up moves to the next item and swiping down to the previous one.
    Reaching past the end reshuffles the feed and starts over. Each item
    that leaves the screen is reported as a ViewInterval.
    """

    def __init__(self, items: Sequence[MediaItem], tracker: UserBehaviorTracker,
                 session_clock: Optional[SessionClock] = None, rng: Optional[random.Random] = None):
        self.original_items: List[MediaItem] = list(items)
        self.items: List[MediaItem] = list(items)
        self.tracker = tracker
        self.session_clock = session_clock
        self.rng = rng or random.Random()

        self.current_index = 0
        self.view_start_ms: Optional[int] = None

    @property
    def current(self) -> Optional[MediaItem]:
        if not self.items:
            return None
        return self.items[self.current_index]

    def start(self, now_ms: int) -> bool:
        """Begin viewing the first item. False when there is nothing to show."""
        if not self.items:
            logger.warning("No media items found")
            return False
        self.current_index = 0
        self._start_view(now_ms)
        return True

    def handle_swipe(self, record: GestureRecord, now_ms: int) -> Optional[ViewInterval]:
        """Move through the feed for a vertical swipe; horizontal swipes are ignored."""
        if record.direction == SwipeDirection.UP:
            return self.swipe_up(now_ms)
        if record.direction == SwipeDirection.DOWN:
            return self.swipe_down(now_ms)
        return None

    def swipe_up(self, now_ms: int) -> Optional[ViewInterval]:
        if not self.items:
            return None

        view = self.end_view(now_ms)
        if self.current_index >= len(self.items) - 1:
            self._reshuffle()
            self.current_index = 0
        else:
            self.current_index += 1
        self._start_view(now_ms)
        return view

    def swipe_down(self, now_ms: int) -> Optional[ViewInterval]:
        if not self.items or self.current_index == 0:
            return None

        view = self.end_view(now_ms)
        self.current_index -= 1
        self._start_view(now_ms)
        return view

    def end_view(self, now_ms: int) -> Optional[ViewInterval]:
        """Close the current view, if any, and report it."""
        item = self.current
        if item is None or self.view_start_ms is None:
            return None

        started = self.view_start_ms
        self.view_start_ms = None
        return self.tracker.track_view(item.id, max(0, now_ms - started), item.duration_ms, started)

    def _start_view(self, now_ms: int):
        self.view_start_ms = now_ms
        if self.session_clock is not None:
            self.session_clock.track_video_view()

    def _reshuffle(self):
        """New random order that does not open with the item just shown."""
        last = self.items[-1]
        shuffled = list(self.original_items)
        self.rng.shuffle(shuffled)

        if len(shuffled) > 1 and shuffled[0].id == last.id:
            swap = self.rng.randrange(1, len(shuffled))
            shuffled[0], shuffled[swap] = shuffled[swap], shuffled[0]

        self.items = shuffled
        logger.debug(f"Reshuffled feed of {len(shuffled)} items")
