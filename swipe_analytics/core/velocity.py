"""
Live velocity estimation for an in-progress drag.
"""

import math
from collections import deque
from typing import Optional

from ..config.settings import TrackingConfig


class VelocityEstimator:
    """
    Noise-resistant velocity estimate updated while the finger moves.
    
    Samples closer than the noise floor to the previous accepted sample are
    dropped. Exposed components are clamped to suppress teleport outliers,
    and a short FIFO window of speeds provides a smoothed scalar.
    """
    
    def __init__(self, window_size: Optional[int] = None,
                 noise_floor_ms: Optional[int] = None,
                 clamp: Optional[float] = None):
        config = TrackingConfig()
        self.window_size = config.VELOCITY_WINDOW_SIZE if window_size is None else window_size
        self.noise_floor_ms = config.VELOCITY_NOISE_FLOOR_MS if noise_floor_ms is None else noise_floor_ms
        self.clamp = config.VELOCITY_CLAMP if clamp is None else clamp
        
        self.last_x = 0.0
        self.last_y = 0.0
        self.last_t = 0
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self._speeds = deque(maxlen=self.window_size)
    
    def start(self, x: float, y: float, t: int):
        """Reset state at touch-down."""
        self.last_x = x
        self.last_y = y
        self.last_t = t
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self._speeds.clear()
    
    def update(self, x: float, y: float, t: int) -> bool:
        """Ingest a sample. Returns False when it was discarded as noise."""
        dt = max(t - self.last_t, 1)
        if dt < self.noise_floor_ms:
            return False
        
        instant_x = (x - self.last_x) / dt * 1000  # pixels per second
        instant_y = (y - self.last_y) / dt * 1000
        
        # deque(maxlen) evicts the oldest speed first
        self._speeds.append(math.hypot(instant_x, instant_y))
        
        self.velocity_x = max(-self.clamp, min(self.clamp, instant_x))
        self.velocity_y = max(-self.clamp, min(self.clamp, instant_y))
        
        self.last_x = x
        self.last_y = y
        self.last_t = t
        return True
    
    def get_smoothed_velocity(self) -> float:
        """Mean speed over the rolling window, 0 when empty."""
        if not self._speeds:
            return 0.0
        return sum(self._speeds) / len(self._speeds)
    
    @property
    def sample_count(self) -> int:
        return len(self._speeds)
