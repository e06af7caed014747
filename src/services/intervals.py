"""Time interval primitives used by the availability engine.

Intervals are half-open, ``[start, end)``: two intervals that only touch at an
endpoint do not overlap. Intervals order by ``(start, end)``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Convert a datetime to aware UTC, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TimeSpan(Protocol):
    """Anything with a start and an end instant."""

    start: datetime
    end: datetime


@dataclass(frozen=True, order=True)
class Interval:
    """A span of time between two instants."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, order=True)
class FreeSlot(Interval):
    """A bookable span offered to an invite viewer."""


@dataclass(frozen=True)
class BusyInterval:
    """A busy span ingested from an agenda source."""

    id: int
    owner_user_id: int
    source_id: int
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"busy interval {self.id} must start before it ends")

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)


def overlaps(a: TimeSpan, b: TimeSpan) -> bool:
    """Return True if the half-open intervals share any instant."""
    return a.start < b.end and b.start < a.end


def _shift(instant: datetime, delta: timedelta) -> datetime:
    """Add ``delta`` to ``instant``, saturating at the representable range."""
    try:
        return instant + delta
    except OverflowError:
        bound = datetime.max if delta > timedelta(0) else datetime.min
        return bound.replace(tzinfo=instant.tzinfo)


def pad(interval: TimeSpan, before: timedelta, after: timedelta) -> Interval:
    """Widen an interval by ``before`` at its start and ``after`` at its end."""
    return Interval(_shift(interval.start, -before), _shift(interval.end, after))


def clip(interval: TimeSpan, window: TimeSpan) -> Interval | None:
    """Intersect an interval with a window, or None if they do not overlap."""
    start = max(interval.start, window.start)
    end = min(interval.end, window.end)
    if start >= end:
        return None
    return Interval(start, end)


def merge(intervals: Iterable[TimeSpan]) -> list[Interval]:
    """Merge overlapping or touching intervals into maximal blocks."""
    blocks: list[Interval] = []
    for current in sorted(Interval(i.start, i.end) for i in intervals):
        if blocks and current.start <= blocks[-1].end:
            last = blocks[-1]
            blocks[-1] = Interval(last.start, max(last.end, current.end))
        else:
            blocks.append(current)
    return blocks


def gaps(blocks: Iterable[TimeSpan], window: TimeSpan) -> list[Interval]:
    """Free regions of ``window`` not covered by the sorted, disjoint ``blocks``."""
    regions: list[Interval] = []
    cursor = window.start
    for block in blocks:
        if block.start > cursor:
            regions.append(Interval(cursor, block.start))
        cursor = max(cursor, block.end)
    if cursor < window.end:
        regions.append(Interval(cursor, window.end))
    return regions
