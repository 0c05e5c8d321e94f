"""
Interval Clipper — turns blocked intervals into drawable tracks.

Each blocked interval is clamped to the visible window independently and
both endpoints are mapped. Input order is preserved exactly: no sorting,
no merging of overlapping intervals. The track id is the input position,
so callers must keep the ordering stable between renders.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from timerange_kernel.geometry.mapper import TimeCoordinateMapper, TimeRangeError
from timerange_kernel.models.geometry import MappedInterval
from timerange_kernel.models.timeline import BlockedInterval, TimelineWindow, to_millis

logger = logging.getLogger(__name__)

BLOCKED_START_PREFIX = "blocked-start"
BLOCKED_END_PREFIX = "blocked-end"
BLOCKED_TRACK_PREFIX = "blocked-track"


class InvalidIntervalError(TimeRangeError):
    """Raised when a blocked interval ends before it starts."""
    pass


def check_blocked_intervals(blocked: Sequence[BlockedInterval]) -> None:
    """Reject blocked intervals whose end lies before their start."""
    for index, interval in enumerate(blocked):
        if interval.is_degenerate:
            raise InvalidIntervalError(
                f"Blocked interval {interval.id!r} at position {index} ends before it starts: "
                f"start={interval.start.isoformat()}, end={interval.end.isoformat()}"
            )


def _clamp(point: datetime, window: TimelineWindow) -> datetime:
    value = to_millis(point)
    if value < window.start_ms:
        return window.start
    if value > window.end_ms:
        return window.end
    return point


class IntervalClipper:
    """Clips blocked intervals to a timeline window and maps their endpoints."""

    def clip(
        self,
        window: TimelineWindow,
        blocked: Sequence[BlockedInterval],
    ) -> Optional[List[MappedInterval]]:
        """
        Clip and map every blocked interval.

        Returns None when no blocked intervals were supplied, which is distinct
        from a list of zero-width tracks. An interval lying fully outside the
        window collapses onto the nearest boundary (percent 0 or 100).
        """
        if not blocked:
            return None

        check_blocked_intervals(blocked)
        mapper = TimeCoordinateMapper(window)

        tracks = []
        for index, interval in enumerate(blocked):
            start = _clamp(interval.start, window)
            end = _clamp(interval.end, window)
            tracks.append(MappedInterval(
                id=f"{BLOCKED_TRACK_PREFIX}-{index}",
                source=mapper.map(start, BLOCKED_START_PREFIX),
                target=mapper.map(end, BLOCKED_END_PREFIX),
            ))

        logger.debug("Clipped %d blocked interval(s) to window %s", len(tracks), window.domain)
        return tracks
