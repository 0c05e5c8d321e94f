"""Time range kernel data models."""

from timerange_kernel.models.config import TimeRangeConfig
from timerange_kernel.models.geometry import MappedInterval, MappedPoint
from timerange_kernel.models.selection import RenderContext, RenderModel, ValidationResult
from timerange_kernel.models.timeline import (
    BlockedInterval,
    TimelineWindow,
    from_millis,
    to_millis,
)

__all__ = [
    "BlockedInterval",
    "MappedInterval",
    "MappedPoint",
    "RenderContext",
    "RenderModel",
    "TimeRangeConfig",
    "TimelineWindow",
    "ValidationResult",
    "from_millis",
    "to_millis",
]
