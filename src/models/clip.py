"""Clip data models and the virtual timeline derived from them (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Clip:
    """A time range of the source media, in seconds of the player's own timeline.

    Clips come from the user's notes and are not validated here: a clip with
    ``end_time <= start_time`` is carried as-is and becomes a zero-width
    range on the virtual timeline.
    """

    start_time: float
    end_time: float
    text: str = ""
    clip_id: str = ""

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def contains(self, seconds: float) -> bool:
        """Half-open containment: ``start_time <= seconds < end_time``."""
        return self.start_time <= seconds < self.end_time

    def to_dict(self) -> dict:
        d: dict = {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "text": self.text,
        }
        if self.clip_id:
            d["id"] = self.clip_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Clip:
        return cls(
            start_time=float(data["startTime"]),
            end_time=float(data["endTime"]),
            text=data.get("text", ""),
            clip_id=data.get("id", ""),
        )


@dataclass(frozen=True)
class ClipRange:
    """One clip placed on the virtual timeline.

    ``virtual_start``/``virtual_end`` are offsets on the gapless concatenation
    of all clips; ``actual_start``/``actual_end`` are the clip's own bounds on
    the player timeline.
    """

    clip: Clip
    virtual_start: float
    virtual_end: float
    actual_start: float
    actual_end: float
    duration: float

    @property
    def is_empty(self) -> bool:
        """True for zero-width ranges (malformed clips)."""
        return self.virtual_end <= self.virtual_start


def compute_ranges(clips: Iterable[Clip]) -> list[ClipRange]:
    """Lay *clips* end to end on the virtual timeline.

    Gaps between clips on the player timeline collapse to nothing, so the
    resulting ranges are contiguous: ``ranges[i].virtual_end ==
    ranges[i + 1].virtual_start``.  Negative durations are treated as zero.
    """
    ranges: list[ClipRange] = []
    offset = 0.0
    for clip in clips:
        duration = clip.end_time - clip.start_time
        width = max(duration, 0.0)
        ranges.append(ClipRange(
            clip=clip,
            virtual_start=offset,
            virtual_end=offset + width,
            actual_start=clip.start_time,
            actual_end=clip.end_time,
            duration=duration,
        ))
        offset += width
    return ranges


def total_virtual_duration(ranges: Sequence[ClipRange]) -> float:
    """Length of the virtual timeline (0.0 when there are no ranges)."""
    if not ranges:
        return 0.0
    return ranges[-1].virtual_end


def clip_boundaries(ranges: Sequence[ClipRange]) -> list[float]:
    """Return virtual-time positions of clip boundaries.

    Includes 0 and the total duration. Length = len(ranges) + 1, or ``[0.0]``
    when empty. Used to draw clip markers on the virtual timeline.
    """
    boundaries = [r.virtual_start for r in ranges]
    boundaries.append(total_virtual_duration(ranges))
    return boundaries
