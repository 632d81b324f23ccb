#!/usr/bin/env python3
"""
Real-time swipe analytics monitor.
Shows the live batch summary and behavior profile as you swipe.
"""

import time

from swipe_analytics.core.listener import SwipeListener
from swipe_analytics.tracking import EventStore
from swipe_analytics.utils.logger import SwipeLogger


class AnalyticsMonitor:
    def __init__(self):
        self.listener = SwipeListener()
        self.store = EventStore()
        self.swipe_logger = SwipeLogger(debug_file=None)
        self.running = False
    
    def start(self):
        """Start monitoring swipes."""
        if not self.listener.start():
            print("❌ No touchscreen found")
            return False
        
        self.running = True
        print("🎯 Swipe Analytics Monitor Started")
        print("=" * 50)
        print("📱 Swipe on your screen to see live analytics")
        print("🖱️  Press Ctrl+C to stop")
        print()
        
        try:
            self._monitor_loop()
        except KeyboardInterrupt:
            self.stop()
        
        return True
    
    def stop(self):
        """Stop monitoring."""
        self.running = False
        self.listener.stop()
        print("\n✅ Monitoring stopped")
    
    def _monitor_loop(self):
        """Main monitoring loop."""
        while self.running:
            for record in self.store.drain(self.listener.records):
                self.swipe_logger.log_swipe(record, self.store.metrics_for(record))
                _, summary, profile = self.store.current_state()
                self.swipe_logger.log_summary(summary, profile)
            
            time.sleep(0.1)  # Update every 100ms


def main():
    """Main entry point."""
    monitor = AnalyticsMonitor()
    monitor.start()

if __name__ == "__main__":
    main()
