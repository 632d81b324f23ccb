"""
Batch-level summaries over a set of analyzed swipes.
"""

from typing import Dict, Optional, Sequence

from ..core.models import BatchSummary, GestureRecord, SwipeDirection, SwipeMetrics
from ..utils.gesture_utils import StatsUtils
from .swipe_analyzer import SwipeAnalyzer


class BatchAggregator:
    """Reduces per-swipe metrics into averages and a direction distribution."""
    
    def __init__(self, analyzer: Optional[SwipeAnalyzer] = None):
        self.analyzer = analyzer or SwipeAnalyzer()
    
    def summarize(self, records: Sequence[GestureRecord],
                  metrics: Optional[Dict[str, SwipeMetrics]] = None) -> BatchSummary:
        """
        Summarize a batch of gestures.
        
        Args:
            records: Gestures in the batch
            metrics: Already computed metrics keyed by gesture id; missing
                     entries are computed on the fly
        
        Returns:
            BatchSummary, all zeros for an empty batch
        """
        if not records:
            return BatchSummary()
        
        metrics = metrics or {}
        analytics = [metrics.get(r.id) or self.analyzer.analyze(r) for r in records]
        
        return BatchSummary(
            count=len(records),
            avg_straightness=StatsUtils.mean([m.straightness for m in analytics]),
            avg_smoothness=StatsUtils.mean([m.smoothness for m in analytics]),
            avg_velocity=StatsUtils.mean([m.average_velocity for m in analytics]),
            avg_acceleration=StatsUtils.mean([m.acceleration for m in analytics]),
            avg_duration_ms=int(StatsUtils.mean([m.duration_ms for m in analytics])),
            direction_share=self.direction_share(records)
        )
    
    @staticmethod
    def direction_share(records: Sequence[GestureRecord]) -> Dict[SwipeDirection, float]:
        """Fraction of gestures per direction, in first-seen order."""
        counts: Dict[SwipeDirection, int] = {}
        for record in records:
            counts[record.direction] = counts.get(record.direction, 0) + 1
        
        total = len(records)
        return {direction: count / total for direction, count in counts.items()} if total else {}
