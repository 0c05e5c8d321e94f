"""
Overlap Validator — decides whether a selection conflicts with blocked intervals.

The boundary rules mix strict and non-strict comparisons. They are kept
exactly as they are: changing any of them changes which selections touching
a blocked interval at an exact boundary are flagged.
"""

from typing import Iterable, Sequence

from timerange_kernel.models.geometry import MappedInterval, MappedPoint


class OverlapValidator:
    """Per-interval conflict check plus the OR-fold across all intervals."""

    def is_invalid(
        self,
        selection: Sequence[float],
        blocked_source: MappedPoint,
        blocked_target: MappedPoint,
    ) -> bool:
        """
        True if the selection conflicts with the blocked interval.

        selection is [start, end] in epoch ms with start <= end.
        """
        start, end = selection
        blocked_start = blocked_source.value
        blocked_end = blocked_target.value

        # Blocked interval sits inside the selection, strict on at least one side
        if (blocked_start > start and blocked_end <= end) or (
            blocked_start >= start and blocked_end < end
        ):
            return True

        # Selection inside (or equal to) the blocked interval
        if start >= blocked_start and end <= blocked_end:
            return True

        start_inside = start > blocked_start and start < blocked_end and end >= blocked_end
        end_inside = end < blocked_end and end > blocked_start and start <= blocked_start

        return start_inside or end_inside

    def any_invalid(
        self,
        selection: Sequence[float],
        intervals: Iterable[MappedInterval],
    ) -> bool:
        """Logical OR of is_invalid over every interval; order does not matter."""
        return any(
            self.is_invalid(selection, interval.source, interval.target)
            for interval in intervals
        )
