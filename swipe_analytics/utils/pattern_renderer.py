"""
Swipe pattern images: the drawn path of one swipe on a screen-sized canvas.
"""

import datetime
import logging
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..config.settings import TrackingConfig
from ..core.models import GestureRecord, SwipeDirection

logger = logging.getLogger(__name__)

DIRECTION_COLORS = {
    SwipeDirection.UP: 'magenta',
    SwipeDirection.DOWN: 'cyan',
    SwipeDirection.LEFT: 'yellow',
    SwipeDirection.RIGHT: 'green'
}


class SwipePatternRenderer:
    """Draws swipe paths in screen coordinates and saves them as PNG files."""
    
    def __init__(self, output_dir: str, dpi: int = 100):
        self.output_dir = output_dir
        self.dpi = dpi
    
    def render(self, record: GestureRecord) -> str:
        """Save the swipe's path as an image. Returns the file path or ''."""
        width = record.screen_width or TrackingConfig.DEFAULT_SCREEN_WIDTH
        height = record.screen_height or TrackingConfig.DEFAULT_SCREEN_HEIGHT
        
        fig = plt.figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        try:
            ax = fig.add_axes([0, 0, 1, 1])
            ax.set_facecolor('black')
            ax.set_xlim(0, width)
            ax.set_ylim(height, 0)  # screen y grows downward
            ax.axis('off')
            
            xs = [p.x for p in record.path]
            ys = [p.y for p in record.path]
            ax.plot(xs, ys, color=DIRECTION_COLORS[record.direction], linewidth=8, alpha=0.7,
                    solid_capstyle='round')
            ax.scatter([record.start_x], [record.start_y], color='green', s=150, zorder=3)
            ax.scatter([record.end_x], [record.end_y], color='red', s=150, zorder=3)
            
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
            file_name = f"swipe_{record.direction.value}_{timestamp}_{record.id[:8]}.png"
            os.makedirs(self.output_dir, exist_ok=True)
            path = os.path.join(self.output_dir, file_name)
            fig.savefig(path, facecolor='black')
        except OSError:
            logger.exception("Error generating swipe pattern image")
            return ""
        finally:
            plt.close(fig)
        
        logger.debug(f"Saved swipe pattern to {path}")
        return path
