"""
Tick Generator — calendar-aware tick positions for the timeline.

Picks the standard time interval whose duration is closest to
window length / count and emits every wall-clock-aligned boundary of that
interval inside [start, end], both ends inclusive.
"""

import bisect
import math
from datetime import MAXYEAR, datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from timerange_kernel.models.timeline import TimelineWindow, from_millis, to_millis

SECOND_MS = 1000
MINUTE_MS = SECOND_MS * 60
HOUR_MS = MINUTE_MS * 60
DAY_MS = HOUR_MS * 24
WEEK_MS = DAY_MS * 7
MONTH_MS = DAY_MS * 30
YEAR_MS = DAY_MS * 365

# (unit, step, approximate duration in ms), ordered by duration
TICK_INTERVALS: List[Tuple[str, int, int]] = [
    ("second", 1, SECOND_MS),
    ("second", 5, 5 * SECOND_MS),
    ("second", 15, 15 * SECOND_MS),
    ("second", 30, 30 * SECOND_MS),
    ("minute", 1, MINUTE_MS),
    ("minute", 5, 5 * MINUTE_MS),
    ("minute", 15, 15 * MINUTE_MS),
    ("minute", 30, 30 * MINUTE_MS),
    ("hour", 1, HOUR_MS),
    ("hour", 3, 3 * HOUR_MS),
    ("hour", 6, 6 * HOUR_MS),
    ("hour", 12, 12 * HOUR_MS),
    ("day", 1, DAY_MS),
    ("day", 2, 2 * DAY_MS),
    ("week", 1, WEEK_MS),
    ("month", 1, MONTH_MS),
    ("month", 3, 3 * MONTH_MS),
    ("year", 1, YEAR_MS),
]
_DURATIONS = [duration for _, _, duration in TICK_INTERVALS]

# Units stepped in absolute time; larger units follow the calendar
_FIXED_UNIT_MS = {"second": SECOND_MS, "minute": MINUTE_MS, "hour": HOUR_MS}


def tick_step(start: float, stop: float, count: int) -> float:
    """Nice linear step (1, 2 or 5 times a power of ten)."""
    raw = abs(stop - start) / max(0, count)
    power = 10 ** math.floor(math.log10(raw))
    error = raw / power
    if error >= math.sqrt(50):
        power *= 10
    elif error >= math.sqrt(10):
        power *= 5
    elif error >= math.sqrt(2):
        power *= 2
    return power


def _floor(moment: datetime, unit: str) -> datetime:
    if unit == "second":
        return moment.replace(microsecond=0)
    if unit == "minute":
        return moment.replace(second=0, microsecond=0)
    if unit == "hour":
        return moment.replace(minute=0, second=0, microsecond=0)
    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "day":
        return day
    if unit == "week":
        # Weeks start on Sunday
        return day - timedelta(days=(day.weekday() + 1) % 7)
    if unit == "month":
        return day.replace(day=1)
    return day.replace(month=1, day=1)


def _advance(moment: datetime, unit: str) -> Optional[datetime]:
    """Next calendar boundary, or None past the last representable date."""
    if unit in ("day", "week"):
        delta = timedelta(days=1) if unit == "day" else timedelta(weeks=1)
        if datetime.max - moment.replace(tzinfo=None) < delta:
            return None
        return moment + delta
    if unit == "month" and moment.month < 12:
        return moment.replace(month=moment.month + 1)
    if moment.year == MAXYEAR:
        return None
    if unit == "month":
        return moment.replace(year=moment.year + 1, month=1)
    return moment.replace(year=moment.year + 1)


def _aligned(moment: datetime, unit: str, step: int) -> bool:
    if unit == "second":
        return moment.second % step == 0
    if unit == "minute":
        return moment.minute % step == 0
    if unit == "hour":
        return moment.hour % step == 0
    if unit == "day":
        return (moment.day - 1) % step == 0
    if unit == "month":
        return (moment.month - 1) % step == 0
    if unit == "year":
        return moment.year % step == 0
    return True


class TickGenerator:
    """Generates tick values (epoch ms) for a timeline window."""

    def choose_interval(self, window: TimelineWindow, count: int) -> Tuple[str, float]:
        """
        Return (unit, step) for the given window and tick count.

        unit is "millisecond" when even one-second ticks would be too coarse.
        """
        if count < 1:
            raise ValueError(f"Tick count must be at least 1, got {count}")
        start, stop = window.start_ms, window.end_ms
        target = abs(stop - start) / count
        i = bisect.bisect_right(_DURATIONS, target)
        if i == len(TICK_INTERVALS):
            years = tick_step(start / YEAR_MS, stop / YEAR_MS, count)
            return "year", max(1, int(years))
        if i == 0:
            return "millisecond", max(tick_step(start, stop, count), 1)
        if target / _DURATIONS[i - 1] < _DURATIONS[i] / target:
            i -= 1
        unit, step, _ = TICK_INTERVALS[i]
        return unit, step

    def ticks(self, window: TimelineWindow, count: int) -> List[int]:
        if count <= 0 or window.length_ms <= 0:
            return []

        unit, step = self.choose_interval(window, count)
        start, stop = window.start_ms, window.end_ms

        if unit == "millisecond":
            first = math.ceil(start / step)
            last = math.floor(stop / step)
            return [int(k * step) for k in range(first, last + 1)]

        tz = window.tzinfo
        moment = _floor(from_millis(start, tz), unit)
        values = []

        if unit in _FIXED_UNIT_MS:
            # Absolute steps, so DST gaps and repeats never reorder ticks
            unit_ms = _FIXED_UNIT_MS[unit]
            value = to_millis(moment)
            if value < start:
                value += unit_ms
            while value <= stop:
                if _aligned(from_millis(value, tz), unit, int(step)):
                    values.append(value)
                value += unit_ms
            return values

        if to_millis(moment) < start:
            moment = _advance(moment, unit)
        while moment is not None:
            value = to_millis(moment)
            if value > stop:
                break
            if _aligned(moment, unit, int(step)):
                values.append(value)
            moment = _advance(moment, unit)
        return values


def format_tick_labels(
    ticks: Sequence[int],
    formatter: Optional[Callable[[int], str]] = None,
) -> List[str]:
    """Apply the external formatting collaborator to every tick."""
    if formatter is None:
        return [str(t) for t in ticks]
    return [formatter(t) for t in ticks]
