"""Conversion between player ("actual") time and virtual-timeline time.

Virtual time only represents clip content: positions in the gaps between
clips are not addressable and snap forward to the next clip start.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from src.models.clip import Clip, ClipRange, total_virtual_duration
from src.models.playback_state import NO_CLIP


class SeekTarget(NamedTuple):
    actual_time: float
    clip_index: int


def actual_to_virtual(actual_time: float, ranges: Sequence[ClipRange]) -> float:
    """Convert a player position to a virtual-timeline position."""
    for r in ranges:
        if r.actual_start <= actual_time <= r.actual_end:
            return r.virtual_start + (actual_time - r.actual_start)
    # Before the first clip or inside a gap: snap to the next clip start
    for r in ranges:
        if actual_time < r.actual_start:
            return r.virtual_start
    return total_virtual_duration(ranges)


def virtual_to_actual(virtual_time: float, ranges: Sequence[ClipRange]) -> SeekTarget:
    """Convert a virtual-timeline position to a player position and clip index.

    Positions past the end clamp to the end of the last clip; negative
    positions clamp to the start of the first one.
    """
    if not ranges:
        return SeekTarget(0.0, NO_CLIP)
    if virtual_time < 0:
        virtual_time = 0.0
    for i, r in enumerate(ranges):
        if r.virtual_start <= virtual_time < r.virtual_end:
            return SeekTarget(r.actual_start + (virtual_time - r.virtual_start), i)
    last = len(ranges) - 1
    return SeekTarget(ranges[last].actual_end, last)


def find_clip_at_time(actual_time: float, clips: Sequence[Clip]) -> int:
    """Return the index of the first clip containing *actual_time*, or -1."""
    for i, clip in enumerate(clips):
        if clip.contains(actual_time):
            return i
    return NO_CLIP
