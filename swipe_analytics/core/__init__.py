"""
Core capture types: records, live velocity estimation and path recording.

The evdev-backed listener lives in ``core.listener`` and is imported
explicitly so the analytics work without an input device.
"""

from .errors import EmptyGestureError, RecorderStateError, SwipeAnalyticsError
from .models import (
    BatchSummary,
    BehaviorProfile,
    GestureRecord,
    MediaItem,
    Session,
    StyleLabel,
    SwipeDirection,
    SwipeMetrics,
    TouchPoint,
    ViewInterval
)
from .recorder import GestureRecorder
from .velocity import VelocityEstimator

__all__ = [
    'BatchSummary',
    'BehaviorProfile',
    'EmptyGestureError',
    'GestureRecord',
    'GestureRecorder',
    'MediaItem',
    'RecorderStateError',
    'Session',
    'StyleLabel',
    'SwipeAnalyticsError',
    'SwipeDirection',
    'SwipeMetrics',
    'TouchPoint',
    'VelocityEstimator',
    'ViewInterval'
]
