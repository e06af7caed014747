"""Availability resolution.

Turns a user's busy intervals into the free slots offered through an agenda
invite. Resolution is a pure function of its inputs: it performs no I/O and
keeps no state between calls.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta

from src.services.errors import ValidationError
from src.services.intervals import FreeSlot, Interval, TimeSpan, clip, gaps, merge, pad

logger = logging.getLogger(__name__)


def validate_resolution_inputs(
    window: TimeSpan,
    padding_before: timedelta,
    padding_after: timedelta,
    slot_sizes: Sequence[timedelta],
) -> None:
    """Reject malformed resolution inputs.

    Raises:
        ValidationError: If slot sizes are missing or not positive, a padding
            is negative, or the window ends before it starts.
    """
    if not slot_sizes:
        raise ValidationError("at least one slot size is required")
    for size in slot_sizes:
        if size <= timedelta(0):
            raise ValidationError(f"slot sizes must be positive, got {size}")
    if padding_before < timedelta(0):
        raise ValidationError("padding_before must not be negative")
    if padding_after < timedelta(0):
        raise ValidationError("padding_after must not be negative")
    if window.start > window.end:
        raise ValidationError("window must not end before it starts")


def busy_blocks(
    busy_intervals: Iterable[TimeSpan],
    window: TimeSpan,
    padding_before: timedelta,
    padding_after: timedelta,
) -> list[Interval]:
    """Pad, clip to ``window`` and merge busy intervals into disjoint blocks."""
    clipped = []
    for busy in busy_intervals:
        block = clip(pad(busy, padding_before, padding_after), window)
        if block is not None:
            clipped.append(block)
    return merge(clipped)


def resolve(
    busy_intervals: Iterable[TimeSpan],
    window: TimeSpan,
    padding_before: timedelta,
    padding_after: timedelta,
    slot_sizes: Sequence[timedelta],
) -> list[FreeSlot]:
    """Compute the free slots of ``window`` around the busy intervals.

    Each free region between padded busy blocks yields at most one slot per
    requested size, anchored at the start of the region. Slots of different
    sizes in the same region overlap each other: they are alternative options,
    not a partition of the region.

    Args:
        busy_intervals: Busy spans in any order
        window: Span to search, already clipped to the invite bounds
        padding_before: Buffer required before every busy interval
        padding_after: Buffer required after every busy interval
        slot_sizes: Candidate slot lengths, duplicates are ignored

    Returns:
        Free slots ordered by start, then by size

    Raises:
        ValidationError: On malformed inputs, before any computation.
    """
    validate_resolution_inputs(window, padding_before, padding_after, slot_sizes)

    if window.start == window.end:
        return []

    sizes = list(dict.fromkeys(slot_sizes))
    blocks = busy_blocks(busy_intervals, window, padding_before, padding_after)

    slots = []
    for region in gaps(blocks, window):
        for size in sizes:
            if region.duration >= size:
                slots.append(FreeSlot(region.start, region.start + size))

    slots.sort()
    logger.debug(f"Resolved {len(slots)} free slots from {len(blocks)} busy blocks")
    return slots
