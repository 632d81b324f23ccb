"""Configuration for swipe tracking and analytics."""

from .settings import TrackingConfig

__all__ = ['TrackingConfig']
