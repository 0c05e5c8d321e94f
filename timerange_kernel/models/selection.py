"""Selection outcomes and render snapshots handed to the presentation layer."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from timerange_kernel.models.geometry import MappedInterval
from timerange_kernel.models.timeline import BlockedInterval, TimelineWindow


class ValidationResult(BaseModel):
    """Emitted once per live update event."""

    model_config = ConfigDict(frozen=True)

    error: bool                             # True when the selection hits a blocked interval
    time: List[datetime]                    # The selected pair, converted back to timestamps


class RenderContext(BaseModel):
    """
    Everything one geometry computation needs, sampled once.

    The clock reading is taken when the context is built and threaded through
    unchanged, so a single render never sees two different "now" values.
    """

    model_config = ConfigDict(frozen=True)

    window: TimelineWindow
    blocked: List[BlockedInterval] = []
    show_now: bool = True
    clock_now: datetime


class RenderModel(BaseModel):
    """Presentation-facing snapshot of the control."""

    model_config = ConfigDict(frozen=True)

    domain: List[int]
    values: List[int]
    step: int
    mode: int
    blocked_tracks: Optional[List[MappedInterval]] = None   # None when nothing is blocked
    now_track: Optional[MappedInterval] = None
    ticks: List[int] = []
    tick_labels: List[str] = []
