"""Now Marker — a one-minute-wide synthetic interval at the current instant."""

from datetime import datetime, timedelta

from timerange_kernel.geometry.mapper import TimeCoordinateMapper
from timerange_kernel.models.geometry import MappedInterval
from timerange_kernel.models.timeline import TimelineWindow

NOW_TRACK_ID = "now-track"
NOW_START_PREFIX = "now-start"
NOW_END_PREFIX = "now-end"
NOW_MARKER_WIDTH = timedelta(minutes=1)


class NowMarkerBuilder:
    """
    Builds the now marker from a clock reading supplied by the caller.

    The marker is not clipped. When clock_now lies outside the window the
    percents fall outside [0, 100] and it is up to the presentation layer
    not to draw it.
    """

    def now(self, window: TimelineWindow, clock_now: datetime) -> MappedInterval:
        mapper = TimeCoordinateMapper(window)
        return MappedInterval(
            id=NOW_TRACK_ID,
            source=mapper.map(clock_now, NOW_START_PREFIX),
            target=mapper.map(clock_now + NOW_MARKER_WIDTH, NOW_END_PREFIX),
        )
