"""
Configuration settings for swipe tracking and analytics.
"""

class TrackingConfig:
    """Configuration constants for swipe capture and analysis."""
    
    # Live velocity estimation
    VELOCITY_WINDOW_SIZE = 5
    VELOCITY_NOISE_FLOOR_MS = 5
    VELOCITY_CLAMP = 3000.0  # px/s
    
    # Path capture
    SAMPLE_INTERVAL_MS = 5  # Record a path point at most every 5ms
    
    # Distance configurations (as percentages of screen diagonal)
    SWIPE_DISTANCE_PERCENT = 3.0
    DEFAULT_SCREEN_WIDTH = 1080
    DEFAULT_SCREEN_HEIGHT = 1920
    
    # Event store
    MAX_STORED_EVENTS = 50
    
    # Behavior style thresholds
    FAST_VELOCITY_THRESHOLD = 2000.0  # px/s
    PRECISE_SMOOTHNESS_THRESHOLD = 0.8
    
    # Session timing (in milliseconds)
    SESSION_TICK_MS = 1000
    DEFAULT_SESSION_MINUTES = 10
    
    # Export
    VIEW_SWIPE_JOIN_TOLERANCE_MS = 1000
    EXPORT_DIRECTORY = "swipe_exports"
