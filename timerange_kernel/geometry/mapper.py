"""
Time Coordinate Mapper — the sole geometric primitive.

Converts an absolute point in time into a percent position along a timeline
window plus its numeric millisecond value. Every other piece of geometry
(blocked tracks, the now marker) is built on top of this mapping.

Behavioral Contract:
- percent = (point - window.start) / (window.end - window.start) * 100
- No clamping: points outside the window map outside [0, 100]
- id = "<prefix>-<value>"
- Pure: no side effects, no clock reads
"""

from datetime import datetime

from timerange_kernel.models.geometry import MappedPoint
from timerange_kernel.models.timeline import TimelineWindow, to_millis


class TimeRangeError(Exception):
    """Base class for configuration errors raised by the kernel."""
    pass


class DegenerateWindowError(TimeRangeError):
    """Raised when a timeline window does not end strictly after it starts."""
    pass


def ensure_window(window: TimelineWindow) -> int:
    """Return the window length in ms, or fail if it is not positive."""
    length = window.length_ms
    if length <= 0:
        raise DegenerateWindowError(
            f"Timeline window must end after it starts: "
            f"start={window.start.isoformat()}, end={window.end.isoformat()}"
        )
    return length


class TimeCoordinateMapper:
    """Maps timestamps into the percent space of a single timeline window."""

    def __init__(self, window: TimelineWindow):
        self.window = window
        self._length = ensure_window(window)
        self._start_ms = window.start_ms

    def map(self, point: datetime, id_prefix: str) -> MappedPoint:
        value = to_millis(point)
        percent = (value - self._start_ms) / self._length * 100
        return MappedPoint(id=f"{id_prefix}-{value}", percent=percent, value=value)


def map_point(window: TimelineWindow, point: datetime, id_prefix: str) -> MappedPoint:
    """One-shot mapping of a single point."""
    return TimeCoordinateMapper(window).map(point, id_prefix)
