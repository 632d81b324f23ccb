"""
Bounded store of recent swipes with cached analytics.
"""

import logging
import queue
import threading
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..config.settings import TrackingConfig
from ..core.models import BatchSummary, BehaviorProfile, GestureRecord, SwipeMetrics
from ..gestures.batch_aggregator import BatchAggregator
from ..gestures.behavior_profiler import BehaviorProfiler
from ..gestures.swipe_analyzer import SwipeAnalyzer

logger = logging.getLogger(__name__)


class EventStore:
    """
    Keeps the most recent swipes and the analytics derived from them.

    The window is newest-first and never exceeds its capacity. Every
    insertion recomputes the batch summary and behavior profile over the
    whole window. Readers always get immutable snapshots.
    """

    def __init__(self, capacity: Optional[int] = None, analyzer: Optional[SwipeAnalyzer] = None):
        self.capacity = TrackingConfig.MAX_STORED_EVENTS if capacity is None else capacity
        self.analyzer = analyzer or SwipeAnalyzer()
        self.aggregator = BatchAggregator(self.analyzer)
        self.profiler = BehaviorProfiler(self.analyzer)

        self._events = deque()  # newest first
        self._metrics: Dict[str, SwipeMetrics] = {}
        # Events, summary and profile are swapped in together
        self._published: Tuple[Tuple[GestureRecord, ...], BatchSummary, BehaviorProfile] = (
            (), BatchSummary(), BehaviorProfile()
        )
        self.state_lock = threading.Lock()

    def add(self, record: GestureRecord) -> SwipeMetrics:
        """Insert a finalized swipe, evicting the oldest beyond capacity."""
        with self.state_lock:
            self._events.appendleft(record)
            while len(self._events) > self.capacity:
                evicted = self._events.pop()
                self._metrics.pop(evicted.id, None)

            metrics = self.analyzer.analyze(record)
            if self.capacity > 0:
                self._metrics[record.id] = metrics
            self._refresh()

        logger.debug(f"Stored swipe {record.id} ({len(self)}/{self.capacity})")
        return metrics

    def replace(self, records: Iterable[GestureRecord]):
        """Load a previously recorded session given in chronological order."""
        recent = list(records)[-self.capacity:] if self.capacity > 0 else []
        with self.state_lock:
            self._events = deque(reversed(recent))
            self._metrics = {r.id: self.analyzer.analyze(r) for r in recent}
            self._refresh()
        logger.info(f"Loaded {len(recent)} swipe events")

    def clear(self):
        """Drop all events and cached analytics."""
        with self.state_lock:
            self._events.clear()
            self._metrics.clear()
            self._refresh()

    def drain(self, source: "queue.Queue[GestureRecord]",
              transform: Optional[Callable[[GestureRecord], GestureRecord]] = None) -> List[GestureRecord]:
        """
        Ingest every record waiting on a queue without blocking.

        ``transform`` is applied to each record before it is stored, e.g. to
        stamp the session id. Returns the stored records in arrival order.
        """
        stored = []
        while True:
            try:
                record = source.get_nowait()
            except queue.Empty:
                return stored
            if transform is not None:
                record = transform(record)
            self.add(record)
            stored.append(record)

    def _refresh(self):
        """Publish a new snapshot and recompute aggregates. Caller holds the lock."""
        events = tuple(self._events)
        chronological = events[::-1]
        self._published = (
            events,
            self.aggregator.summarize(chronological, self._metrics),
            self.profiler.profile(chronological, self._metrics)
        )

    def current_state(self) -> Tuple[Tuple[GestureRecord, ...], BatchSummary, BehaviorProfile]:
        """Events (newest first), batch summary and behavior profile from the same insert."""
        return self._published

    def current_events(self) -> Tuple[GestureRecord, ...]:
        """Stored swipes, newest first."""
        return self._published[0]

    def current_batch_summary(self) -> BatchSummary:
        return self._published[1]

    def current_behavior_profile(self) -> BehaviorProfile:
        return self._published[2]

    def metrics_for(self, gesture: Union[GestureRecord, str]) -> SwipeMetrics:
        """
        Metrics for a gesture, computed and cached on a miss.

        Raises:
            KeyError: If given an id that is not in the current window.
        """
        with self.state_lock:
            if isinstance(gesture, GestureRecord):
                record = gesture
            else:
                cached = self._metrics.get(gesture)
                if cached is not None:
                    return cached
                record = next((r for r in self._events if r.id == gesture), None)
                if record is None:
                    raise KeyError(gesture)

            metrics = self._metrics.get(record.id)
            if metrics is None:
                metrics = self.analyzer.analyze(record)
                # Only cache what the window holds so the cache stays bounded
                if any(r.id == record.id for r in self._events):
                    self._metrics[record.id] = metrics
            return metrics

    def metrics_snapshot(self) -> Dict[str, SwipeMetrics]:
        """Copy of the cached metrics keyed by gesture id."""
        with self.state_lock:
            return dict(self._metrics)

    def __len__(self) -> int:
        return len(self._published[0])
