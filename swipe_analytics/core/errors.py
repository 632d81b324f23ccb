"""
Exceptions raised by the swipe capture layer.
"""


class SwipeAnalyticsError(Exception):
    """Base class for swipe analytics errors."""


class EmptyGestureError(SwipeAnalyticsError):
    """Raised when a gesture is finalized without any recorded points."""


class RecorderStateError(SwipeAnalyticsError):
    """Raised when points are added to a recorder that has not begun a gesture."""
