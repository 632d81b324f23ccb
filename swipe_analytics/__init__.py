"""
Swipe Analytics Package
Swipe capture and behavioral analytics for a short-video feed study.
"""

from .core import GestureRecorder, VelocityEstimator
from .gestures import BatchAggregator, BehaviorProfiler, SwipeAnalyzer
from .tracking import EventStore, SessionClock

__version__ = "1.0.0"
__all__ = [
    "VelocityEstimator",
    "GestureRecorder",
    "SwipeAnalyzer",
    "BatchAggregator",
    "BehaviorProfiler",
    "EventStore",
    "SessionClock"
]
