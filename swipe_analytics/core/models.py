"""
Record types shared by the capture, analysis and export layers.

All records are immutable once created. Identifiers are UUID strings and
times are integer milliseconds.
"""

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


class SwipeDirection(str, Enum):
    """Cardinal direction of a completed swipe.

    Inherits from str so values compare equal to their exported names.
    """

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @classmethod
    def from_delta(cls, dx: float, dy: float) -> 'SwipeDirection':
        """Classify a displacement; the larger axis wins, ties go vertical.

        Screen coordinates grow downward, so a negative dy is UP.
        """
        if abs(dx) > abs(dy):
            return cls.RIGHT if dx > 0 else cls.LEFT
        return cls.DOWN if dy > 0 else cls.UP


class StyleLabel(str, Enum):
    """Categorical swiping style of a participant."""

    FAST_PRECISE = "Fast and precise"
    FAST_ERRATIC = "Fast but erratic"
    CAREFUL_PRECISE = "Careful and precise"
    CASUAL_BROWSER = "Casual browser"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class TouchPoint:
    """A single touch sample."""

    x: float
    y: float
    t: int
    pressure: Optional[float] = None

    def distance_to(self, other: 'TouchPoint') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'timestamp': self.t,
            'pressure': self.pressure if self.pressure is not None else 0.0,
        }


@dataclass(frozen=True)
class GestureRecord:
    """A finalized swipe gesture.

    ``subject_id`` identifies the media item that was on screen when the
    gesture was made.
    """

    id: str
    session_id: str
    timestamp: int
    subject_id: str
    direction: SwipeDirection
    path: Tuple[TouchPoint, ...]
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    duration_ms: int
    velocity_x: float
    velocity_y: float
    screen_width: int
    screen_height: int

    def __post_init__(self):
        if not self.path:
            raise ValueError("GestureRecord path cannot be empty")
        if self.path[0].t > self.path[-1].t:
            raise ValueError("GestureRecord path must be chronological")
        # Accept lists from callers but always store a tuple
        object.__setattr__(self, 'path', tuple(self.path))

    @property
    def distance(self) -> float:
        """Straight-line distance from start to end."""
        return math.hypot(self.end_x - self.start_x, self.end_y - self.start_y)

    @property
    def pressure(self) -> float:
        """Average touch pressure over the samples that reported one."""
        values = [p.pressure for p in self.path if p.pressure is not None]
        return sum(values) / len(values) if values else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sessionId': self.session_id,
            'timestamp': self.timestamp,
            'subjectId': self.subject_id,
            'direction': self.direction.value,
            'durationMs': self.duration_ms,
            'startX': self.start_x,
            'startY': self.start_y,
            'endX': self.end_x,
            'endY': self.end_y,
            'velocityX': self.velocity_x,
            'velocityY': self.velocity_y,
            'distance': self.distance,
            'pressure': self.pressure,
            'screenWidth': self.screen_width,
            'screenHeight': self.screen_height,
            'path': [p.to_dict() for p in self.path],
        }


@dataclass(frozen=True)
class SwipeMetrics:
    """Kinematic and quality metrics derived from one gesture."""

    gesture_id: str
    straightness: float
    smoothness: float
    acceleration: float
    jerk: float
    peak_velocity: float
    average_velocity: float
    speed_consistency: float
    duration_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gestureId': self.gesture_id,
            'straightness': self.straightness,
            'smoothness': self.smoothness,
            'acceleration': self.acceleration,
            'jerk': self.jerk,
            'peakVelocity': self.peak_velocity,
            'averageVelocity': self.average_velocity,
            'speedConsistency': self.speed_consistency,
            'durationMs': self.duration_ms,
        }


@dataclass(frozen=True)
class BatchSummary:
    """Averages over a set of gestures."""

    count: int = 0
    avg_straightness: float = 0.0
    avg_smoothness: float = 0.0
    avg_velocity: float = 0.0
    avg_acceleration: float = 0.0
    avg_duration_ms: int = 0
    direction_share: Mapping[SwipeDirection, float] = field(default_factory=dict)

    def __post_init__(self):
        # Published read-only
        object.__setattr__(self, 'direction_share', MappingProxyType(dict(self.direction_share)))


@dataclass(frozen=True)
class BehaviorProfile:
    """Session-level description of how a participant swipes."""

    count: int = 0
    gestures_per_minute: float = 0.0
    dominant_direction: Optional[SwipeDirection] = None
    consistency_score: float = 0.0
    style_label: StyleLabel = StyleLabel.UNKNOWN


@dataclass(frozen=True)
class ViewInterval:
    """How long one media item stayed on screen."""

    id: str
    session_id: str
    timestamp: int
    media_id: str
    watch_duration_ms: int
    watch_fraction: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sessionId': self.session_id,
            'timestamp': self.timestamp,
            'mediaId': self.media_id,
            'watchDurationMs': self.watch_duration_ms,
            'watchFraction': self.watch_fraction,
        }


@dataclass(frozen=True)
class Session:
    """A time-boxed data collection period for one participant."""

    id: str
    subject_id: str
    start_time: int
    duration_budget_ms: int
    is_active: bool
    end_time: Optional[int] = None


@dataclass(frozen=True)
class MediaItem:
    """A media descriptor supplied by the media enumerator."""

    id: str
    duration_ms: int
    title: str = ""
