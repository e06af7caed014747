"""Tests for availability resolution."""

from datetime import datetime, timedelta, timezone

import pytest

from src.services.availability import busy_blocks, resolve
from src.services.errors import ValidationError
from src.services.intervals import BusyInterval, FreeSlot, Interval, overlaps

HOUR = timedelta(hours=1)
HALF_HOUR = timedelta(minutes=30)
QUARTER = timedelta(minutes=15)
ZERO = timedelta(0)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2030, 1, 7, hour, minute, tzinfo=timezone.utc)


def busy(interval_id: int, start: datetime, end: datetime, source_id: int = 1) -> BusyInterval:
    return BusyInterval(interval_id, 1, source_id, start, end)


WORKDAY = Interval(at(9), at(17))


class TestScenarios:
    """Worked examples of the resolution policy."""

    def test_empty_calendar_yields_single_slot_at_window_start(self):
        """One slot per region per size: an empty day gives one 1h slot, not eight."""
        slots = resolve([], WORKDAY, ZERO, ZERO, [HOUR])
        assert slots == [FreeSlot(at(9), at(10))]

    def test_padding_shrinks_regions(self):
        """A padded meeting leaves a 45m lead region (too small) and a long trail region."""
        slots = resolve([busy(1, at(10), at(11))], WORKDAY, QUARTER, QUARTER, [HOUR])

        blocks = busy_blocks([busy(1, at(10), at(11))], WORKDAY, QUARTER, QUARTER)
        assert blocks == [Interval(at(9, 45), at(11, 15))]
        assert slots == [FreeSlot(at(11, 15), at(12, 15))]

    def test_overlapping_sources_merge_before_gap_computation(self):
        """Overlapping intervals from two sources form one busy block."""
        intervals = [busy(1, at(10), at(11), source_id=1), busy(2, at(10, 30), at(12), source_id=2)]

        assert busy_blocks(intervals, WORKDAY, ZERO, ZERO) == [Interval(at(10), at(12))]
        assert resolve(intervals, WORKDAY, ZERO, ZERO, [HOUR]) == [
            FreeSlot(at(9), at(10)),
            FreeSlot(at(12), at(13)),
        ]

    def test_empty_slot_sizes_rejected(self):
        with pytest.raises(ValidationError):
            resolve([], WORKDAY, ZERO, ZERO, [])


class TestSlotSizes:
    """Tests for multiple candidate slot sizes."""

    def test_region_offers_every_fitting_size(self):
        slots = resolve([busy(1, at(10), at(17))], WORKDAY, ZERO, ZERO, [HOUR, HALF_HOUR])
        assert slots == [FreeSlot(at(9), at(9, 30)), FreeSlot(at(9), at(10))]

    def test_sizes_that_do_not_fit_are_skipped(self):
        slots = resolve([busy(1, at(9, 45), at(17))], WORKDAY, ZERO, ZERO, [HOUR, HALF_HOUR])
        assert slots == [FreeSlot(at(9), at(9, 30))]

    def test_slot_larger_than_window_never_offered(self):
        slots = resolve([], WORKDAY, ZERO, ZERO, [timedelta(hours=9), HOUR])
        assert slots == [FreeSlot(at(9), at(10))]

    def test_duplicate_sizes_ignored(self):
        slots = resolve([], WORKDAY, ZERO, ZERO, [HOUR, HOUR])
        assert slots == [FreeSlot(at(9), at(10))]

    def test_exact_fit_region(self):
        slots = resolve([busy(1, at(10), at(17))], WORKDAY, ZERO, ZERO, [HOUR])
        assert slots == [FreeSlot(at(9), at(10))]

    def test_results_ordered_by_start_then_size(self):
        intervals = [busy(1, at(10), at(12)), busy(2, at(14), at(17))]
        slots = resolve(intervals, WORKDAY, ZERO, ZERO, [HOUR, HALF_HOUR])
        assert slots == [
            FreeSlot(at(9), at(9, 30)),
            FreeSlot(at(9), at(10)),
            FreeSlot(at(12), at(12, 30)),
            FreeSlot(at(12), at(13)),
        ]


class TestEdgeCases:
    """Tests for degenerate windows and busy time outside the window."""

    def test_degenerate_window_is_empty(self):
        assert resolve([], Interval(at(9), at(9)), ZERO, ZERO, [HOUR]) == []

    def test_busy_time_outside_window_ignored(self):
        intervals = [busy(1, at(6), at(7)), busy(2, at(18), at(19))]
        assert resolve(intervals, WORKDAY, ZERO, ZERO, [HOUR]) == [FreeSlot(at(9), at(10))]

    def test_padding_can_reach_into_window(self):
        slots = resolve([busy(1, at(8), at(8, 30))], WORKDAY, ZERO, HOUR, [HOUR])
        assert slots == [FreeSlot(at(9, 30), at(10, 30))]

    def test_fully_busy_window(self):
        assert resolve([busy(1, at(8), at(18))], WORKDAY, ZERO, ZERO, [HOUR]) == []

    def test_unsorted_input_accepted(self):
        intervals = [busy(2, at(14), at(17)), busy(1, at(9), at(13, 30))]
        assert resolve(intervals, WORKDAY, ZERO, ZERO, [HALF_HOUR]) == [
            FreeSlot(at(13, 30), at(14))
        ]


class TestValidation:
    """Malformed inputs fail before any computation."""

    @pytest.mark.parametrize("size", [ZERO, -HOUR])
    def test_non_positive_slot_size(self, size):
        with pytest.raises(ValidationError):
            resolve([], WORKDAY, ZERO, ZERO, [HOUR, size])

    def test_negative_padding_before(self):
        with pytest.raises(ValidationError):
            resolve([], WORKDAY, -QUARTER, ZERO, [HOUR])

    def test_negative_padding_after(self):
        with pytest.raises(ValidationError):
            resolve([], WORKDAY, ZERO, -QUARTER, [HOUR])

    def test_inverted_window(self):
        with pytest.raises(ValidationError):
            resolve([], Interval(at(17), at(9)), ZERO, ZERO, [HOUR])

    def test_validation_runs_before_reading_intervals(self):
        def exploding():
            raise AssertionError("intervals must not be read")
            yield

        with pytest.raises(ValidationError):
            resolve(exploding(), WORKDAY, ZERO, ZERO, [])


class TestProperties:
    """Properties that hold for any input."""

    INTERVALS = [
        busy(1, at(9, 20), at(10, 5)),
        busy(2, at(11), at(11, 45)),
        busy(3, at(11, 30), at(12, 15)),
        busy(4, at(15), at(15, 10)),
        busy(5, at(16, 40), at(18)),
    ]
    SIZES = [HALF_HOUR, HOUR, QUARTER]

    def test_idempotent(self):
        first = resolve(self.INTERVALS, WORKDAY, QUARTER, QUARTER, self.SIZES)
        second = resolve(self.INTERVALS, WORKDAY, QUARTER, QUARTER, self.SIZES)
        assert first == second

    @pytest.mark.parametrize("padding", [ZERO, timedelta(minutes=5), QUARTER, HOUR])
    def test_slots_avoid_padded_busy_time(self, padding):
        slots = resolve(self.INTERVALS, WORKDAY, padding, padding, self.SIZES)
        blocks = busy_blocks(self.INTERVALS, WORKDAY, padding, padding)
        for slot in slots:
            assert not any(overlaps(slot, block) for block in blocks)

    @pytest.mark.parametrize("padding", [ZERO, QUARTER, HOUR])
    def test_slots_within_window(self, padding):
        for slot in resolve(self.INTERVALS, WORKDAY, padding, padding, self.SIZES):
            assert WORKDAY.start <= slot.start < slot.end <= WORKDAY.end

    def test_same_size_slots_are_disjoint(self):
        slots = resolve(self.INTERVALS, WORKDAY, ZERO, ZERO, self.SIZES)
        for size in self.SIZES:
            sized = [s for s in slots if s.duration == size]
            for i, a in enumerate(sized):
                for b in sized[i + 1 :]:
                    assert not overlaps(a, b)

    def test_more_padding_never_adds_free_time(self):
        def free_time(padding: timedelta) -> timedelta:
            slots = resolve(self.INTERVALS, WORKDAY, padding, padding, self.SIZES)
            return sum((s.duration for s in slots), timedelta(0))

        paddings = [ZERO, timedelta(minutes=5), QUARTER, HALF_HOUR, HOUR]
        totals = [free_time(p) for p in paddings]
        assert totals == sorted(totals, reverse=True)
