"""Tests for the coordinate mapper, interval clipper and now marker."""

from datetime import datetime, timedelta, timezone

import pytest

from timerange_kernel.geometry.clipper import (
    IntervalClipper,
    InvalidIntervalError,
    check_blocked_intervals,
)
from timerange_kernel.geometry.mapper import (
    DegenerateWindowError,
    TimeCoordinateMapper,
    TimeRangeError,
    map_point,
)
from timerange_kernel.geometry.now import (
    NOW_END_PREFIX,
    NOW_START_PREFIX,
    NOW_TRACK_ID,
    NowMarkerBuilder,
)
from timerange_kernel.models.timeline import BlockedInterval, TimelineWindow, to_millis

UTC = timezone.utc


def _at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 1, day, hour, minute, tzinfo=UTC)


def _make_window() -> TimelineWindow:
    """2024-01-01T00:00Z to 2024-01-02T00:00Z."""
    return TimelineWindow(start=_at(0), end=_at(0, day=2))


def _blocked(start: datetime, end: datetime, blocked_id: str = "b") -> BlockedInterval:
    return BlockedInterval(id=blocked_id, start=start, end=end)


class TestTimeCoordinateMapper:
    def test_window_start_and_end(self):
        mapper = TimeCoordinateMapper(_make_window())
        assert mapper.map(_at(0), "p").percent == 0
        assert mapper.map(_at(0, day=2), "p").percent == 100

    def test_midday(self):
        point = map_point(_make_window(), _at(12), "p")
        assert point.percent == pytest.approx(50.0)
        assert point.value == to_millis(_at(12))

    def test_id_is_prefix_and_value(self):
        point = map_point(_make_window(), _at(10), "blocked-start")
        assert point.id == f"blocked-start-{to_millis(_at(10))}"

    def test_no_clamping_outside_window(self):
        mapper = TimeCoordinateMapper(_make_window())
        assert mapper.map(_at(12, day=2), "p").percent == pytest.approx(150.0)
        assert mapper.map(datetime(2023, 12, 31, 12, tzinfo=UTC), "p").percent == pytest.approx(-50.0)

    def test_percent_is_monotonic(self):
        mapper = TimeCoordinateMapper(_make_window())
        points = [_at(0) + timedelta(minutes=7 * i) for i in range(0, 200)]
        percents = [mapper.map(p, "p").percent for p in points]
        assert all(a < b for a, b in zip(percents, percents[1:]))

    def test_degenerate_window_rejected(self):
        with pytest.raises(DegenerateWindowError):
            TimeCoordinateMapper(TimelineWindow(start=_at(10), end=_at(10)))

    def test_inverted_window_rejected(self):
        with pytest.raises(TimeRangeError):
            map_point(TimelineWindow(start=_at(11), end=_at(10)), _at(10), "p")


class TestIntervalClipper:
    def setup_method(self):
        self.clipper = IntervalClipper()
        self.window = _make_window()

    def test_empty_input_returns_none(self):
        assert self.clipper.clip(self.window, []) is None

    def test_interval_inside_window_unchanged(self):
        tracks = self.clipper.clip(self.window, [_blocked(_at(10), _at(11))])
        assert len(tracks) == 1
        assert tracks[0].source.value == to_millis(_at(10))
        assert tracks[0].target.value == to_millis(_at(11))

    def test_track_and_point_ids(self):
        tracks = self.clipper.clip(self.window, [_blocked(_at(10), _at(11))])
        track = tracks[0]
        assert track.id == "blocked-track-0"
        assert track.source.id == f"blocked-start-{to_millis(_at(10))}"
        assert track.target.id == f"blocked-end-{to_millis(_at(11))}"

    def test_start_before_window_is_clamped(self):
        blocked = _blocked(datetime(2023, 12, 31, 23, tzinfo=UTC), _at(10))
        track = self.clipper.clip(self.window, [blocked])[0]
        assert track.source.percent == 0
        assert track.source.value == to_millis(_at(0))
        assert track.target.percent == pytest.approx(41.6667, abs=1e-3)

    def test_end_after_window_is_clamped(self):
        blocked = _blocked(_at(18), _at(6, day=2))
        track = self.clipper.clip(self.window, [blocked])[0]
        assert track.source.percent == pytest.approx(75.0)
        assert track.target.percent == 100

    def test_fully_before_window_collapses_to_start(self):
        blocked = _blocked(datetime(2023, 12, 30, tzinfo=UTC), datetime(2023, 12, 31, tzinfo=UTC))
        track = self.clipper.clip(self.window, [blocked])[0]
        assert track.source.percent == 0
        assert track.target.percent == 0
        assert track.source.value == track.target.value

    def test_fully_after_window_collapses_to_end(self):
        blocked = _blocked(_at(3, day=3), _at(4, day=3))
        track = self.clipper.clip(self.window, [blocked])[0]
        assert track.source.percent == 100
        assert track.target.percent == 100

    def test_order_preserved_without_merging(self):
        blocked = [
            _blocked(_at(15), _at(16), "late"),
            _blocked(_at(9), _at(12), "early"),
            _blocked(_at(10), _at(11), "nested"),
        ]
        tracks = self.clipper.clip(self.window, blocked)
        assert [t.id for t in tracks] == ["blocked-track-0", "blocked-track-1", "blocked-track-2"]
        assert [t.source.value for t in tracks] == [
            to_millis(_at(15)), to_millis(_at(9)), to_millis(_at(10)),
        ]

    def test_clipped_percents_bounded(self):
        blocked = [
            _blocked(datetime(2023, 6, 1, tzinfo=UTC), datetime(2025, 6, 1, tzinfo=UTC)),
            _blocked(datetime(2023, 12, 31, 20, tzinfo=UTC), _at(2)),
            _blocked(_at(23), _at(1, day=2)),
            _blocked(_at(5), _at(5)),
            _blocked(_at(1, day=5), _at(2, day=5)),
        ]
        for track in self.clipper.clip(self.window, blocked):
            assert 0 <= track.source.percent <= 100
            assert 0 <= track.target.percent <= 100
            assert track.source.value <= track.target.value

    def test_inverted_interval_rejected(self):
        with pytest.raises(InvalidIntervalError):
            self.clipper.clip(self.window, [_blocked(_at(11), _at(10))])

    def test_check_reports_position(self):
        blocked = [_blocked(_at(1), _at(2), "ok"), _blocked(_at(11), _at(10), "bad")]
        with pytest.raises(InvalidIntervalError, match="'bad' at position 1"):
            check_blocked_intervals(blocked)

    def test_input_not_mutated(self):
        original = _blocked(datetime(2023, 12, 31, 23, tzinfo=UTC), _at(10))
        self.clipper.clip(self.window, [original])
        assert original.start == datetime(2023, 12, 31, 23, tzinfo=UTC)


class TestNowMarkerBuilder:
    def test_now_marker_at_noon(self):
        marker = NowMarkerBuilder().now(_make_window(), _at(12))
        assert marker.id == NOW_TRACK_ID == "now-track"
        assert marker.source.percent == pytest.approx(50.0)
        assert marker.target.percent == pytest.approx(50.07, abs=0.01)

    def test_now_marker_is_one_minute_wide(self):
        marker = NowMarkerBuilder().now(_make_window(), _at(12))
        assert marker.target.value - marker.source.value == 60_000
        assert marker.source.id.startswith("now-start-")
        assert marker.target.id.startswith("now-end-")

    def test_now_marker_not_clipped(self):
        marker = NowMarkerBuilder().now(_make_window(), _at(12, day=2))
        assert marker.source.percent > 100

    def test_degenerate_window(self):
        with pytest.raises(DegenerateWindowError):
            NowMarkerBuilder().now(TimelineWindow(start=_at(1), end=_at(0)), _at(0))

    def test_now_marker_point_ids(self):
        marker = NowMarkerBuilder().now(_make_window(), _at(12))
        assert marker.source.id == f"{NOW_START_PREFIX}-{to_millis(_at(12))}"
        assert marker.target.id == f"{NOW_END_PREFIX}-{to_millis(_at(12, 1))}"
        assert NOW_START_PREFIX != NOW_END_PREFIX
