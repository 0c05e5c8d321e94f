"""Timeline primitives — the window being visualized and the intervals blocked inside it."""

import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def to_millis(ts: datetime) -> int:
    """
    Integer epoch milliseconds for a timestamp.

    Naive datetimes are read as host local time, the same way the host's
    date primitives read them. Sub-millisecond precision is floored.
    """
    if ts.tzinfo is None:
        ts = ts.astimezone()
    return (ts - _EPOCH) // _ONE_MS


# Representable epoch range, one day in from each end so local conversion stays valid
MIN_MILLIS = to_millis(datetime(1, 1, 2, tzinfo=timezone.utc))
MAX_MILLIS = to_millis(datetime(9999, 12, 30, tzinfo=timezone.utc))


def check_millis(ms: float) -> float:
    """Reject epoch values that are not finite or fall outside the datetime range."""
    if not math.isfinite(ms) or not MIN_MILLIS <= ms <= MAX_MILLIS:
        raise ValueError(f"Timestamp {ms!r} ms is outside the representable date range")
    return ms


def from_millis(ms: float, tz: Optional[tzinfo] = None) -> datetime:
    """Inverse of to_millis. Without a tz the result is a naive local datetime."""
    moment = _EPOCH + timedelta(milliseconds=ms)
    if tz is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(tz)


class TimelineWindow(BaseModel):
    """The absolute start/end instants the control visualizes."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @classmethod
    def from_pair(cls, pair: Sequence[datetime]) -> "TimelineWindow":
        start, end = pair
        return cls(start=start, end=end)

    @property
    def start_ms(self) -> int:
        return to_millis(self.start)

    @property
    def end_ms(self) -> int:
        return to_millis(self.end)

    @property
    def length_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def domain(self) -> List[int]:
        """Numeric slider domain: [start_ms, end_ms]."""
        return [self.start_ms, self.end_ms]

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        return self.start.tzinfo


class BlockedInterval(BaseModel):
    """A sub-range of the timeline the user may not select."""

    model_config = ConfigDict(frozen=True)

    id: str
    start: datetime
    end: datetime

    @property
    def is_degenerate(self) -> bool:
        """True when end lies before start."""
        return to_millis(self.end) < to_millis(self.start)
