"""
Device management for touchscreen discovery.
"""

import logging
from typing import Dict, Optional

import evdev
from evdev import InputDevice, ecodes

from ..config.settings import TrackingConfig

logger = logging.getLogger(__name__)


class DeviceManager:
    """Finds a multitouch input device and reads its coordinate range."""
    
    def __init__(self, device_path: Optional[str] = None):
        self.device_path = device_path
        self.device: Optional[InputDevice] = None
        self.screen_width = TrackingConfig.DEFAULT_SCREEN_WIDTH
        self.screen_height = TrackingConfig.DEFAULT_SCREEN_HEIGHT
    
    def find_device(self) -> Optional[InputDevice]:
        """Open the configured device, or the first one with multitouch slots."""
        paths = [self.device_path] if self.device_path else evdev.list_devices()
        
        for path in paths:
            try:
                device = InputDevice(path)
            except OSError as e:
                logger.error(f"Cannot open input device {path}: {e}")
                continue
            
            abs_info = dict(device.capabilities().get(ecodes.EV_ABS, []))
            if ecodes.ABS_MT_SLOT not in abs_info:
                device.close()
                continue
            
            if ecodes.ABS_MT_POSITION_X in abs_info:
                self.screen_width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
            if ecodes.ABS_MT_POSITION_Y in abs_info:
                self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1
            
            self.device = device
            logger.info(f"Found touchscreen: {device.name} ({self.screen_width}x{self.screen_height})")
            return device
        
        logger.error("No touchscreen device found")
        return None
    
    def get_device_info(self) -> Dict:
        """Get device and screen information."""
        return {
            'device': self.device,
            'name': self.device.name if self.device else None,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height
        }
    
    def close(self):
        if self.device is not None:
            self.device.close()
            self.device = None
