#!/usr/bin/env python3
"""
Swipe Analytics - Main Entry Point
Runs a timed data collection session on the touchscreen and exports the
recorded swipes when it ends.

Usage:
    python main.py [participant_id] [minutes] [--patterns]

--patterns saves an image of every swipe's path during the session.
"""

import os
import sys
import time

from swipe_analytics.config import TrackingConfig
from swipe_analytics.core.listener import SwipeListener
from swipe_analytics.tracking import EventStore, SessionClock, SwipeDataExporter, UserBehaviorTracker
from swipe_analytics.utils import SwipePatternRenderer
from swipe_analytics.utils.logger import SwipeLogger


def main():
    """Main entry point for a collection session."""
    args = [a for a in sys.argv[1:] if a != "--patterns"]
    participant_id = args[0] if args else "anonymous"
    minutes = float(args[1]) if len(args) > 1 else None
    
    swipe_logger = SwipeLogger()
    listener = SwipeListener()
    store = EventStore()
    tracker = UserBehaviorTracker(swipe_logger=swipe_logger)
    renderer = SwipePatternRenderer(
        os.path.join(TrackingConfig.EXPORT_DIRECTORY, participant_id, "swipe_patterns")
    )
    clock = SessionClock(participant_id, pattern_renderer=renderer)
    clock.on_complete(swipe_logger.log_session_end)
    
    if not listener.start():
        print("❌ No touchscreen found")
        return
    
    clock.start(minutes, auto_generate_artifacts="--patterns" in sys.argv)
    swipe_logger.log_session_start(clock.session)
    
    try:
        while clock.is_active:
            stored = store.drain(listener.records, transform=tracker.track_swipe)
            for record in stored:
                clock.generate_swipe_pattern(record)
            if stored:
                _, summary, profile = store.current_state()
                swipe_logger.log_summary(summary, profile)
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()
        clock.end()
        
        exporter = SwipeDataExporter()
        events = tracker.swipe_events()
        exporter.export_swipe_events_json(events)
        exporter.export_swipe_events_csv(events)
        exporter.export_view_events_json(tracker.view_events())
        swipe_logger.close()


if __name__ == "__main__":
    main()
