"""
Swipe analysis system.

This module provides per-swipe metric extraction and the batch and
session-level aggregations built on top of it.
"""

from .swipe_analyzer import SwipeAnalyzer
from .batch_aggregator import BatchAggregator
from .behavior_profiler import BehaviorProfiler

__all__ = [
    'SwipeAnalyzer',
    'BatchAggregator',
    'BehaviorProfiler'
]
