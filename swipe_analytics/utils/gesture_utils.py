"""
Shared utilities for swipe path processing.

This module provides the geometry and statistics helpers used by the
analyzer, the batch aggregator and the behavior profiler.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from ..core.models import TouchPoint


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_distance(p1: TouchPoint, p2: TouchPoint) -> float:
        """Calculate Euclidean distance between two points."""
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    @staticmethod
    def segment_lengths(points: Sequence[TouchPoint]) -> np.ndarray:
        """Length of every segment between consecutive points."""
        if len(points) < 2:
            return np.zeros(0)
        x_coords = np.array([p.x for p in points], dtype=float)
        y_coords = np.array([p.y for p in points], dtype=float)
        return np.hypot(np.diff(x_coords), np.diff(y_coords))

    @staticmethod
    def calculate_path_length(points: Sequence[TouchPoint]) -> float:
        """Calculate total path length."""
        return float(GeometryUtils.segment_lengths(points).sum())

    @staticmethod
    def total_turning(points: Sequence[TouchPoint]) -> float:
        """Sum of turn angles between consecutive displacement vectors.

        Zero-length displacements contribute nothing.
        """
        total = 0.0
        for i in range(2, len(points)):
            prev_dx = points[i-1].x - points[i-2].x
            prev_dy = points[i-1].y - points[i-2].y
            dx = points[i].x - points[i-1].x
            dy = points[i].y - points[i-1].y

            mag1 = math.sqrt(prev_dx**2 + prev_dy**2)
            mag2 = math.sqrt(dx**2 + dy**2)
            if mag1 > 0 and mag2 > 0:
                cos_angle = (prev_dx * dx + prev_dy * dy) / (mag1 * mag2)
                cos_angle = max(-1.0, min(1.0, cos_angle))  # Clamp to [-1, 1]
                total += math.acos(cos_angle)
        return total


class VelocityCalculator:
    """Utility class for velocity calculations."""

    @staticmethod
    def segment_velocities(points: Sequence[TouchPoint]) -> Tuple[np.ndarray, np.ndarray]:
        """Per-segment speed in px/s and the segment durations in ms.

        Segments with a non-positive duration are skipped.
        """
        if len(points) < 2:
            return np.zeros(0), np.zeros(0)

        lengths = GeometryUtils.segment_lengths(points)
        times = np.array([p.t for p in points], dtype=float)
        dts = np.diff(times)

        valid = dts > 0
        return lengths[valid] / dts[valid] * 1000, dts[valid]

    @staticmethod
    def derivative(values: np.ndarray, dts: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Discrete time derivative of a sampled series.

        Each difference is divided by the duration of the later sample's
        segment; the returned durations line up with the output for chaining.
        """
        if len(values) < 2:
            return np.zeros(0), np.zeros(0)

        later_dts = dts[1:]
        valid = later_dts > 0
        rates = np.diff(values)[valid] / later_dts[valid] * 1000
        return rates, later_dts[valid]


class StatsUtils:
    """Utility class for summary statistics over metric series."""

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Arithmetic mean, 0 for an empty series."""
        if len(values) == 0:
            return 0.0
        return float(np.mean(values))

    @staticmethod
    def std(values: Sequence[float]) -> float:
        """Population standard deviation, 0 for an empty series."""
        if len(values) == 0:
            return 0.0
        return float(np.std(values))

    @staticmethod
    def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
        return max(low, min(high, value))

    @staticmethod
    def consistency(values: Sequence[float], empty: float = 0.0) -> float:
        """1 minus the clamped coefficient of variation.

        A zero mean counts as perfectly consistent.
        """
        if len(values) == 0:
            return empty
        mean = StatsUtils.mean(values)
        if mean == 0:
            return 1.0
        return 1.0 - StatsUtils.clamp(StatsUtils.std(values) / mean)
