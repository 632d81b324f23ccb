"""
Event storage, session timing and export for tracked swipes.
"""

from .event_store import EventStore
from .session_clock import SessionClock
from .behavior_tracker import UserBehaviorTracker
from .media_feed import MediaFeed
from .exporter import SwipeDataExporter

__all__ = [
    'EventStore',
    'SessionClock',
    'UserBehaviorTracker',
    'MediaFeed',
    'SwipeDataExporter'
]
