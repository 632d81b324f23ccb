"""
Utilities package for swipe processing.

This package provides shared geometry, statistics, unit conversion,
pattern rendering and logging helpers used across the capture and
analysis components.
"""

from .gesture_utils import (
    GeometryUtils,
    VelocityCalculator,
    StatsUtils
)
from .pattern_renderer import SwipePatternRenderer
from .units import PhysicalUnitsConverter

__all__ = [
    'GeometryUtils',
    'VelocityCalculator',
    'StatsUtils',
    'PhysicalUnitsConverter',
    'SwipePatternRenderer'
]
