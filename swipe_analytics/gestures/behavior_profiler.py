"""
Session-level behavior profiling from a chronological list of swipes.
"""

from typing import Dict, Optional, Sequence

from ..config.settings import TrackingConfig
from ..core.models import BehaviorProfile, GestureRecord, StyleLabel, SwipeDirection, SwipeMetrics
from ..utils.gesture_utils import StatsUtils
from .swipe_analyzer import SwipeAnalyzer


class BehaviorProfiler:
    """
    Describes how a participant swipes over a session.
    
    Produces the swipe rate, the dominant direction, a consistency score
    across straightness, smoothness and velocity, and a style label from
    average velocity and smoothness thresholds.
    """
    
    def __init__(self, analyzer: Optional[SwipeAnalyzer] = None,
                 fast_velocity: Optional[float] = None,
                 precise_smoothness: Optional[float] = None):
        config = TrackingConfig()
        self.analyzer = analyzer or SwipeAnalyzer()
        self.fast_velocity = config.FAST_VELOCITY_THRESHOLD if fast_velocity is None else fast_velocity
        self.precise_smoothness = (config.PRECISE_SMOOTHNESS_THRESHOLD
                                   if precise_smoothness is None else precise_smoothness)
    
    def profile(self, records: Sequence[GestureRecord],
                metrics: Optional[Dict[str, SwipeMetrics]] = None) -> BehaviorProfile:
        """Profile gestures given in chronological order."""
        if not records:
            return BehaviorProfile()
        
        metrics = metrics or {}
        analytics = [metrics.get(r.id) or self.analyzer.analyze(r) for r in records]
        
        straightness = [m.straightness for m in analytics]
        smoothness = [m.smoothness for m in analytics]
        velocities = [m.average_velocity for m in analytics]
        
        consistency_score = (
            StatsUtils.consistency(straightness) +
            StatsUtils.consistency(smoothness) +
            StatsUtils.consistency(velocities)
        ) / 3.0
        
        return BehaviorProfile(
            count=len(records),
            gestures_per_minute=self.gestures_per_minute(records),
            dominant_direction=self.dominant_direction(records),
            consistency_score=consistency_score,
            style_label=self.style_label(StatsUtils.mean(velocities), StatsUtils.mean(smoothness))
        )
    
    @staticmethod
    def gestures_per_minute(records: Sequence[GestureRecord]) -> float:
        """Swipe count over the covered time span, 0 for a zero span."""
        if not records:
            return 0.0
        timestamps = [r.timestamp for r in records]
        time_range = max(timestamps) - min(timestamps)
        if time_range <= 0:
            return 0.0
        return len(records) / (time_range / 60000.0)
    
    @staticmethod
    def dominant_direction(records: Sequence[GestureRecord]) -> Optional[SwipeDirection]:
        """Most frequent direction; on a tie the direction seen first wins."""
        counts: Dict[SwipeDirection, int] = {}
        for record in records:
            counts[record.direction] = counts.get(record.direction, 0) + 1
        
        dominant = None
        for direction, count in counts.items():
            if dominant is None or count > counts[dominant]:
                dominant = direction
        return dominant
    
    def style_label(self, avg_velocity: float, avg_smoothness: float) -> StyleLabel:
        fast = avg_velocity > self.fast_velocity
        precise = avg_smoothness > self.precise_smoothness
        
        if fast and precise:
            return StyleLabel.FAST_PRECISE
        if fast:
            return StyleLabel.FAST_ERRATIC
        if precise:
            return StyleLabel.CAREFUL_PRECISE
        return StyleLabel.CASUAL_BROWSER
