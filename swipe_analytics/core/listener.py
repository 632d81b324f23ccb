"""
Touchscreen listener that turns raw multitouch events into swipe records.
"""

import logging
import queue
import threading
from typing import Dict, Optional

from evdev import ecodes

from ..device.device_manager import DeviceManager
from .recorder import GestureRecorder
from .velocity import VelocityEstimator

logger = logging.getLogger(__name__)


class SwipeListener:
    """
    Reads the touchscreen on a background thread and captures swipes made
    with the first finger down.

    Finalized GestureRecords are pushed onto ``records``; the owner of the
    EventStore drains that queue on its own thread.
    """

    def __init__(self, device_manager: Optional[DeviceManager] = None,
                 records: Optional[queue.Queue] = None):
        self.device_manager = device_manager or DeviceManager()
        self.records = records if records is not None else queue.Queue()
        self.recorder: Optional[GestureRecorder] = None
        self.estimator = VelocityEstimator()
        self.subject_id = ""

        # State management
        self.running = False
        self.current_slot = 0
        self.tracked_slot: Optional[int] = None
        self.slot_data: Dict[int, Dict[str, float]] = {}
        self._frame = {'down': False, 'moved': False, 'lifted': False}
        self._last_position = {'x': 0.0, 'y': 0.0}

        # Thread management
        self.thread = None
        self.state_lock = threading.Lock()

    def configure(self, screen_width: int, screen_height: int):
        """Create the recorder for the given screen resolution."""
        self.recorder = GestureRecorder(screen_width, screen_height)
        self.recorder.set_subject(self.subject_id)

    def set_current_media(self, media_id: str):
        """Attribute subsequent swipes to a media item."""
        with self.state_lock:
            self.subject_id = media_id
            if self.recorder is not None:
                self.recorder.set_subject(media_id)

    def start(self) -> bool:
        """Start listening. Returns False when no touchscreen is available."""
        device = self.device_manager.find_device()
        if not device:
            return False

        info = self.device_manager.get_device_info()
        self.configure(info['screen_width'], info['screen_height'])
        logger.info(f"Swipe threshold: {self.recorder.SWIPE_DISTANCE}px")

        self.running = True
        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the listener."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)
        self.device_manager.close()

    def _event_loop(self):
        """Main event processing loop."""
        try:
            event_batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                event_batch.append(event)

                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    with self.state_lock:
                        self._process_event_batch(event_batch)
                    event_batch = []
        except OSError:
            logger.exception("Touchscreen event loop stopped")

    def _process_event_batch(self, event_batch):
        """Apply one SYN_REPORT frame of events."""
        if not event_batch:
            return

        self._frame = {'down': False, 'moved': False, 'lifted': False}
        for ev in event_batch:
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)

        t = int(event_batch[-1].timestamp() * 1000)
        self._apply_frame(t)

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        slot = self.current_slot
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            if ev.value == -1:
                self.slot_data.pop(slot, None)
                if slot == self.tracked_slot:
                    self._frame['lifted'] = True
            else:
                self.slot_data[slot] = {'x': 0.0, 'y': 0.0}
                if self.tracked_slot is None:
                    self.tracked_slot = slot
                    self._frame['down'] = True
        elif ev.code in (ecodes.ABS_MT_POSITION_X, ecodes.ABS_MT_POSITION_Y):
            key = 'x' if ev.code == ecodes.ABS_MT_POSITION_X else 'y'
            self.slot_data.setdefault(slot, {'x': 0.0, 'y': 0.0})[key] = float(ev.value)
            if slot == self.tracked_slot:
                self._frame['moved'] = True
                self._last_position = dict(self.slot_data[slot])

    def _apply_frame(self, t: int):
        """Feed the recorder and estimator after a complete frame."""
        if self.recorder is None:
            return

        if self._frame['down']:
            x, y = self._last_position['x'], self._last_position['y']
            self.recorder.begin(x, y, t)
            self.estimator.start(x, y, t)
        elif self._frame['moved'] and not self._frame['lifted'] and self.recorder.is_tracking:
            x, y = self._last_position['x'], self._last_position['y']
            self.recorder.add_point(x, y, t)
            self.estimator.update(x, y, t)

        if self._frame['lifted']:
            self.tracked_slot = None
            if not self.recorder.is_tracking:
                return
            if self._frame['moved'] and not self._frame['down']:
                x, y = self._last_position['x'], self._last_position['y']
                self.estimator.update(x, y, t)
                record = self.recorder.finalize(
                    x, y, t,
                    velocity_x=self.estimator.velocity_x,
                    velocity_y=self.estimator.velocity_y
                )
            else:
                record = self.recorder.finalize(
                    velocity_x=self.estimator.velocity_x,
                    velocity_y=self.estimator.velocity_y
                )
            if record is not None:
                self.records.put(record)