"""Time range configuration — defaults applied once, at construction."""

from datetime import datetime, timedelta
from typing import Callable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from timerange_kernel.models.timeline import BlockedInterval, TimelineWindow, from_millis

THIRTY_MINUTES_MS = 30 * 60 * 1000


def _default_timeline_interval() -> Tuple[datetime, datetime]:
    """Start and end of the current calendar day (end is 23:59:59.999)."""
    today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    return (today, today + timedelta(days=1) - timedelta(milliseconds=1))


def _default_selected_interval() -> Tuple[datetime, datetime]:
    """Top of the current hour to top of the next hour."""
    top = datetime.now().replace(minute=0, second=0, microsecond=0)
    return (top, top + timedelta(hours=1))


def default_format_tick(ms: int) -> str:
    return from_millis(ms).strftime("%H:%M")


class TimeRangeConfig(BaseModel):
    """Configuration for one time range control."""

    model_config = ConfigDict(frozen=True)

    timeline_interval: Tuple[datetime, datetime] = Field(
        default_factory=_default_timeline_interval
    )
    selected_interval: Tuple[datetime, datetime] = Field(
        default_factory=_default_selected_interval
    )
    disabled_intervals: List[BlockedInterval] = []
    step: int = Field(gt=0, default=THIRTY_MINUTES_MS)      # Drag layer pass-through
    ticks_number: int = Field(ge=0, default=48)             # 30 minutes * 48 = 24 hours
    show_now: bool = True
    # 1 = handles may cross, 2 = no crossing, kept a step apart,
    # 3 = pushable handles, kept a step apart. Drag layer pass-through.
    mode: int = Field(ge=1, le=3, default=3)
    format_tick: Callable[[int], str] = default_format_tick

    @property
    def window(self) -> TimelineWindow:
        return TimelineWindow.from_pair(self.timeline_interval)
