"""
Export of tracked swipes and views to JSON and CSV files.
"""

import datetime
import json
import logging
import os
import threading
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..config.settings import TrackingConfig
from ..core.models import GestureRecord, MediaItem, SwipeMetrics, ViewInterval
from ..utils.units import PhysicalUnitsConverter

logger = logging.getLogger(__name__)

SWIPE_CSV_HEADER = [
    'id', 'sessionId', 'timestamp', 'subjectId', 'direction', 'durationMs',
    'startX', 'startY', 'endX', 'endY', 'velocityX', 'velocityY',
    'distance', 'pressure', 'screenWidth', 'screenHeight'
]

PATH_CSV_HEADER = ['swipeId', 'pointIndex', 'x', 'y', 'timestamp', 'pressure']

SESSION_CSV_HEADER = [
    'Participant ID', 'Category', 'Video Number', 'Video Name', 'Video Duration(ms)',
    'Watch Duration(ms)', 'Watch Percentage', 'Swipe Pattern Image', 'Swipe Direction',
    'Swipe Velocity(px/s)', 'Swipe Acceleration(px/s^2)', 'Swipe Regularity(%)'
]


def _file_timestamp() -> str:
    return datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]


class SwipeDataExporter:
    """
    Writes tracked data below an output directory.

    Session tables go to ``<output_dir>/<participant>/<category>``. Failures
    are reported through the return value (an empty path or False) and
    logged; nothing is retried.
    """

    def __init__(self, output_dir: Optional[str] = None,
                 units: Optional[PhysicalUnitsConverter] = None):
        self.output_dir = output_dir or TrackingConfig.EXPORT_DIRECTORY
        self.units = units
        self.is_exporting = False
        self._export_lock = threading.Lock()
        self._export_thread: Optional[threading.Thread] = None

    def _output_path(self, file_name: str, *subdirs: str) -> str:
        directory = os.path.join(self.output_dir, *subdirs)
        os.makedirs(directory, exist_ok=True)
        return os.path.join(directory, file_name)

    @staticmethod
    def swipe_to_json(record: GestureRecord) -> Dict:
        """Full record plus screen-normalized distances."""
        data = record.to_dict()
        data['normalizedDistanceX'] = ((record.end_x - record.start_x) / record.screen_width
                                       if record.screen_width > 0 else 0.0)
        data['normalizedDistanceY'] = ((record.end_y - record.start_y) / record.screen_height
                                       if record.screen_height > 0 else 0.0)
        data['durationSeconds'] = record.duration_ms / 1000.0
        return data

    def _write_json(self, file_name: str, payload: List[Dict]) -> str:
        path = self._output_path(file_name)
        with open(path, 'w') as f:
            json.dump(payload, f, indent=4)
        return path

    def export_swipe_events_json(self, events: Sequence[GestureRecord]) -> str:
        """Export swipes as a JSON array. Returns the file path or ''."""
        try:
            path = self._write_json(f"detailed_swipe_events_{_file_timestamp()}.json",
                                    [self.swipe_to_json(e) for e in events])
        except OSError:
            logger.exception("Failed to export detailed swipe events")
            return ""

        logger.info(f"Exported {len(events)} swipe events to {path}")
        return path

    def export_view_events_json(self, views: Sequence[ViewInterval]) -> str:
        """Export media views as a JSON array. Returns the file path or ''."""
        try:
            path = self._write_json(f"view_events_{_file_timestamp()}.json",
                                    [v.to_dict() for v in views])
        except OSError:
            logger.exception("Failed to export view events")
            return ""

        logger.info(f"Exported {len(views)} view events to {path}")
        return path

    @staticmethod
    def swipes_frame(events: Sequence[GestureRecord]) -> pd.DataFrame:
        """One row per swipe."""
        rows = [[
            e.id, e.session_id, e.timestamp, e.subject_id, e.direction.value,
            e.duration_ms, e.start_x, e.start_y, e.end_x, e.end_y,
            e.velocity_x, e.velocity_y, e.distance, e.pressure,
            e.screen_width, e.screen_height
        ] for e in events]
        return pd.DataFrame(rows, columns=SWIPE_CSV_HEADER)

    @staticmethod
    def paths_frame(events: Sequence[GestureRecord]) -> pd.DataFrame:
        """One row per sampled point of every swipe."""
        rows = [
            [e.id, index, point.x, point.y, point.t,
             point.pressure if point.pressure is not None else 0.0]
            for e in events
            for index, point in enumerate(e.path)
        ]
        return pd.DataFrame(rows, columns=PATH_CSV_HEADER)

    def export_swipe_events_csv(self, events: Sequence[GestureRecord]) -> bool:
        """Export swipes and their paths as two CSV files."""
        timestamp = _file_timestamp()
        try:
            swipe_path = self._output_path(f"swipe_events_{timestamp}.csv")
            self.swipes_frame(events).to_csv(swipe_path, index=False)

            path_path = self._output_path(f"swipe_paths_{timestamp}.csv")
            self.paths_frame(events).to_csv(path_path, index=False)
        except OSError:
            logger.exception("Failed to export swipe events as CSV")
            return False

        logger.info(f"Exported swipe events to {swipe_path} and paths to {path_path}")
        return True

    def export_session_csv(self, participant_id: str, category: str,
                           media: Sequence[MediaItem], views: Sequence[ViewInterval],
                           events: Sequence[GestureRecord],
                           metrics: Mapping[str, SwipeMetrics],
                           patterns: Optional[Mapping[str, str]] = None) -> str:
        """
        Export one row per view joined with the swipe that ended it.

        Media that were never viewed still get a placeholder row.
        ``patterns`` maps swipe ids to rendered pattern images.
        Returns the file path or ''.
        """
        frame = self.session_frame(participant_id, category, media, views, events, metrics, patterns)
        try:
            path = self._output_path(f"session_data_{_file_timestamp()}.csv", participant_id, category)
            frame.to_csv(path, index=False)
        except OSError:
            logger.exception("Failed to export session data")
            return ""

        logger.info(f"Exported session data to {path}")
        return path

    def session_frame(self, participant_id: str, category: str,
                      media: Sequence[MediaItem], views: Sequence[ViewInterval],
                      events: Sequence[GestureRecord],
                      metrics: Mapping[str, SwipeMetrics],
                      patterns: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
        columns = list(SESSION_CSV_HEADER)
        if self.units is not None:
            columns.append('Swipe Velocity(mm/s)')
        rows = self.session_rows(participant_id, category, media, views, events, metrics, patterns)
        return pd.DataFrame(rows, columns=columns)

    def session_rows(self, participant_id: str, category: str,
                     media: Sequence[MediaItem], views: Sequence[ViewInterval],
                     events: Sequence[GestureRecord],
                     metrics: Mapping[str, SwipeMetrics],
                     patterns: Optional[Mapping[str, str]] = None) -> List[List]:
        """Build the rows of the session export."""
        tolerance = TrackingConfig.VIEW_SWIPE_JOIN_TOLERANCE_MS
        patterns = patterns or {}
        views_by_media: Dict[str, List[ViewInterval]] = {}
        for view in views:
            views_by_media.setdefault(view.media_id, []).append(view)

        rows = []
        for number, item in enumerate(media, start=1):
            prefix = [participant_id, category, number, item.title or item.id, item.duration_ms]
            item_views = views_by_media.get(item.id, [])

            if not item_views:
                rows.append(prefix + [0, 0.0, '', '', 0, 0, 0] + self._unit_columns(None))
                continue

            for view in item_views:
                view_end = view.timestamp + view.watch_duration_ms
                exit_swipe = next((e for e in events
                                   if e.subject_id == view.media_id
                                   and abs(e.timestamp - view_end) < tolerance), None)
                analytics = metrics.get(exit_swipe.id) if exit_swipe is not None else None

                row = prefix + [view.watch_duration_ms, view.watch_fraction]
                if exit_swipe is not None and analytics is not None:
                    row += [
                        patterns.get(exit_swipe.id, ''),
                        exit_swipe.direction.value,
                        int(abs(exit_swipe.velocity_y)),
                        int(analytics.acceleration),
                        int(analytics.speed_consistency * 100)
                    ]
                    row += self._unit_columns(exit_swipe)
                else:
                    row += ['', '', 0, 0, 0] + self._unit_columns(None)
                rows.append(row)
        return rows

    def _unit_columns(self, record: Optional[GestureRecord]) -> List:
        if self.units is None:
            return []
        if record is None:
            return [0.0]
        return [round(self.units.velocity_to_mm_per_second(abs(record.velocity_y)), 2)]

    def export_async(self, events: Sequence[GestureRecord],
                     views: Sequence[ViewInterval] = (),
                     on_complete: Optional[Callable[[bool], None]] = None) -> bool:
        """
        Export swipes (JSON and CSV) and views (JSON) on a background thread.

        Returns False without starting anything if an export is already
        running.
        """
        with self._export_lock:
            if self.is_exporting:
                logger.warning("Export already in progress, request rejected")
                return False
            self.is_exporting = True

        self._export_thread = threading.Thread(target=self._run_export,
                                               args=(tuple(events), tuple(views), on_complete))
        self._export_thread.daemon = True
        self._export_thread.start()
        return True

    def wait(self, timeout: Optional[float] = None):
        """Block until the running background export finishes."""
        if self._export_thread:
            self._export_thread.join(timeout=timeout)

    def _run_export(self, events: Sequence[GestureRecord], views: Sequence[ViewInterval],
                    on_complete: Optional[Callable[[bool], None]]):
        try:
            ok = bool(self.export_swipe_events_json(events))
            ok = self.export_swipe_events_csv(events) and ok
            ok = bool(self.export_view_events_json(views)) and ok
        finally:
            with self._export_lock:
                self.is_exporting = False
        if on_complete is not None:
            on_complete(ok)
