"""
Selection Controller — orchestrates the time range control.

Receives raw millisecond arrays from the drag-interaction layer on two events:

  change  — the user committed a selection; converted and passed on, no validation
  update  — live drag; blocked geometry is recomputed and the selection validated

Behavioral Contract:
- Holds configuration only. The selected interval is owned by the caller and
  passed in on every event.
- Degenerate windows and inverted blocked intervals fail at construction,
  never per event.
- Exactly one ValidationResult per update event, no debouncing.
- The clock is sampled once per render and threaded through.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from timerange_kernel.geometry.clipper import IntervalClipper, check_blocked_intervals
from timerange_kernel.geometry.mapper import ensure_window
from timerange_kernel.geometry.now import NowMarkerBuilder
from timerange_kernel.models.config import TimeRangeConfig
from timerange_kernel.models.geometry import MappedInterval
from timerange_kernel.models.selection import RenderContext, RenderModel, ValidationResult
from timerange_kernel.models.timeline import (
    BlockedInterval,
    TimelineWindow,
    check_millis,
    from_millis,
    to_millis,
)
from timerange_kernel.ticks.scale import TickGenerator, format_tick_labels
from timerange_kernel.validation.overlap import OverlapValidator

logger = logging.getLogger(__name__)


def _to_pair(raw: Sequence[float]) -> Tuple[float, float]:
    values = list(raw)
    if len(values) != 2:
        raise ValueError(f"Expected exactly two timestamps, got {len(values)}")
    return check_millis(values[0]), check_millis(values[1])


def validate_selection(
    window: TimelineWindow,
    blocked: Sequence[BlockedInterval],
    values: Sequence[float],
    clipper: Optional[IntervalClipper] = None,
    validator: Optional[OverlapValidator] = None,
) -> bool:
    """
    Stateless check: does the selection (epoch ms) hit any blocked interval?

    Returns False when there are no blocked intervals.
    """
    ensure_window(window)
    selection = _to_pair(values)
    tracks = (clipper or IntervalClipper()).clip(window, blocked)
    if not tracks:
        return False
    return (validator or OverlapValidator()).any_invalid(selection, tracks)


class SelectionController:
    """Re-derives geometry and validity for every event from fixed configuration."""

    def __init__(
        self,
        config: Optional[TimeRangeConfig] = None,
        on_change: Optional[Callable[[Tuple[datetime, datetime]], None]] = None,
        on_update: Optional[Callable[[ValidationResult], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or TimeRangeConfig()
        self.window = self.config.window
        ensure_window(self.window)
        check_blocked_intervals(self.config.disabled_intervals)

        self.on_change_callback = on_change
        self.on_update_callback = on_update
        self._clock = clock or (lambda: datetime.now(self.window.tzinfo))

        self._clipper = IntervalClipper()
        self._now_builder = NowMarkerBuilder()
        self._validator = OverlapValidator()
        self._tick_generator = TickGenerator()

    def context(self, clock_now: Optional[datetime] = None) -> RenderContext:
        """Snapshot of the inputs for one computation."""
        return RenderContext(
            window=self.window,
            blocked=list(self.config.disabled_intervals),
            show_now=self.config.show_now,
            clock_now=clock_now if clock_now is not None else self._clock(),
        )

    def blocked_tracks(self, context: RenderContext) -> Optional[List[MappedInterval]]:
        return self._clipper.clip(context.window, context.blocked)

    def now_track(self, context: RenderContext) -> Optional[MappedInterval]:
        if not context.show_now:
            return None
        return self._now_builder.now(context.window, context.clock_now)

    def ticks(self) -> List[int]:
        return self._tick_generator.ticks(self.window, self.config.ticks_number)

    def render(
        self,
        selected: Optional[Sequence[datetime]] = None,
        clock_now: Optional[datetime] = None,
    ) -> RenderModel:
        """Full presentation snapshot; selected defaults to the configured interval."""
        context = self.context(clock_now)
        selected = selected if selected is not None else self.config.selected_interval
        ticks = self.ticks()
        return RenderModel(
            domain=self.window.domain,
            values=[to_millis(t) for t in selected],
            step=self.config.step,
            mode=self.config.mode,
            blocked_tracks=self.blocked_tracks(context),
            now_track=self.now_track(context),
            ticks=ticks,
            tick_labels=format_tick_labels(ticks, self.config.format_tick),
        )

    def _convert(self, raw: Sequence[float]) -> List[datetime]:
        start, end = _to_pair(raw)
        tz = self.window.tzinfo
        return [from_millis(start, tz), from_millis(end, tz)]

    def on_change(self, raw: Sequence[float]) -> Tuple[datetime, datetime]:
        """Committed change: convert and hand to the change callback."""
        start, end = self._convert(raw)
        if self.on_change_callback:
            self.on_change_callback((start, end))
        return start, end

    def on_update(self, raw: Sequence[float]) -> ValidationResult:
        """Live update: validate against every blocked interval."""
        selection = _to_pair(raw)
        time = self._convert(raw)

        tracks = self._clipper.clip(self.window, self.config.disabled_intervals)
        if not tracks:
            result = ValidationResult(error=False, time=time)
        else:
            error = self._validator.any_invalid(selection, tracks)
            result = ValidationResult(error=error, time=time)

        logger.debug(
            "Update %s against %d blocked interval(s): error=%s",
            list(selection), len(tracks or []), result.error,
        )
        if self.on_update_callback:
            self.on_update_callback(result)
        return result
