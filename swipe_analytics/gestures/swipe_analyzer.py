"""
Per-swipe kinematic and quality metrics.

Metrics are a pure function of the GestureRecord: analyzing the same record
twice yields identical results. Degenerate paths (single-point taps,
zero-duration drags) map to documented fallback values instead of errors.

Units:
    velocity      px/s
    acceleration  px/s^2
    jerk          px/s^3
"""

import logging
import math
from typing import Iterable, List

import numpy as np

from ..core.models import GestureRecord, SwipeMetrics
from ..utils.gesture_utils import GeometryUtils, StatsUtils, VelocityCalculator

logger = logging.getLogger(__name__)


class SwipeAnalyzer:
    """
    Extracts straightness, smoothness, acceleration, jerk, peak/average
    velocity and speed consistency from a finalized swipe.
    """

    def analyze(self, record: GestureRecord) -> SwipeMetrics:
        """Compute the metrics for one gesture."""
        path = record.path
        logger.debug(f"analyze: id={record.id} points={len(path)} "
                     f"velocity_y={record.velocity_y} duration={record.duration_ms}ms")

        if len(path) < 2:
            # No segments: fall back to the velocity captured live
            fallback = abs(record.velocity_y)
            return SwipeMetrics(
                gesture_id=record.id,
                straightness=1.0,
                smoothness=1.0,
                acceleration=0.0,
                jerk=0.0,
                peak_velocity=fallback,
                average_velocity=fallback,
                speed_consistency=1.0,
                duration_ms=record.duration_ms
            )

        velocities, dts = VelocityCalculator.segment_velocities(path)
        accelerations, accel_dts = VelocityCalculator.derivative(velocities, dts)
        jerks, _ = VelocityCalculator.derivative(accelerations, accel_dts)

        avg_velocity = StatsUtils.mean(velocities)
        metrics = SwipeMetrics(
            gesture_id=record.id,
            straightness=self.straightness(record),
            smoothness=self.smoothness(record),
            acceleration=StatsUtils.mean(accelerations),
            jerk=StatsUtils.mean(jerks),
            peak_velocity=float(np.max(velocities)) if len(velocities) else 0.0,
            average_velocity=avg_velocity,
            speed_consistency=StatsUtils.consistency(velocities, empty=1.0),
            duration_ms=record.duration_ms
        )
        logger.debug(f"analyze result: {metrics}")
        return metrics

    def analyze_all(self, records: Iterable[GestureRecord]) -> List[SwipeMetrics]:
        return [self.analyze(record) for record in records]

    @staticmethod
    def straightness(record: GestureRecord) -> float:
        """Direct distance over travelled distance, 1.0 when nothing was travelled."""
        path = record.path
        if len(path) < 2:
            return 1.0

        path_length = GeometryUtils.calculate_path_length(path)
        if path_length <= 0:
            return 1.0

        direct = GeometryUtils.calculate_distance(path[0], path[-1])
        return StatsUtils.clamp(direct / path_length)

    @staticmethod
    def smoothness(record: GestureRecord) -> float:
        """1 minus the total turning normalized by the maximum possible turning."""
        path = record.path
        if len(path) < 3:
            return 1.0

        max_turning = (len(path) - 2) * math.pi
        return StatsUtils.clamp(1.0 - GeometryUtils.total_turning(path) / max_turning)

