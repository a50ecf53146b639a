"""Playback state of the clip sync engine (pure Python, no Qt dependency).

The engine is in exactly one phase at a time:

- ``IDLE``: free playback. ``clip_index`` follows the player position
  (``-1`` when it is outside every clip) and nothing auto-advances.
- ``PLAYING_CLIP``: clip-sequence ("virtual") mode. ``clip_index`` is the clip
  being played and reaching its end moves on to the next one.
- ``SEQUENCE_ENDED``: the last clip of a sequence finished. The index of that
  clip is kept so the UI can still highlight it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NO_CLIP = -1


class PlaybackPhase(Enum):
    IDLE = "idle"
    PLAYING_CLIP = "playing_clip"
    SEQUENCE_ENDED = "sequence_ended"


@dataclass(frozen=True)
class PlaybackState:
    phase: PlaybackPhase = PlaybackPhase.IDLE
    clip_index: int = NO_CLIP

    def __post_init__(self) -> None:
        if self.clip_index < NO_CLIP:
            raise ValueError(f"clip_index must be >= {NO_CLIP}, got {self.clip_index}")
        if self.phase is not PlaybackPhase.IDLE and self.clip_index == NO_CLIP:
            raise ValueError(f"{self.phase.value} requires a clip index")

    @property
    def is_virtual_mode(self) -> bool:
        """True while clips auto-advance (clip-sequence playback)."""
        return self.phase is PlaybackPhase.PLAYING_CLIP

    # ---- Transitions ----

    def with_index(self, clip_index: int) -> PlaybackState:
        """Move to *clip_index* keeping the phase.

        A finished sequence does not survive an index change: the result is
        ``IDLE`` at the new index.
        """
        if self.phase is PlaybackPhase.SEQUENCE_ENDED:
            return idle(clip_index)
        return PlaybackState(self.phase, clip_index)

    def exit_sequence(self) -> PlaybackState:
        """Leave clip-sequence mode, keeping the index."""
        if self.phase is PlaybackPhase.PLAYING_CLIP:
            return idle(self.clip_index)
        return self

    def finish_sequence(self) -> PlaybackState:
        return sequence_ended(self.clip_index)


def idle(clip_index: int = NO_CLIP) -> PlaybackState:
    return PlaybackState(PlaybackPhase.IDLE, clip_index)


def playing_clip(clip_index: int) -> PlaybackState:
    return PlaybackState(PlaybackPhase.PLAYING_CLIP, clip_index)


def sequence_ended(clip_index: int) -> PlaybackState:
    return PlaybackState(PlaybackPhase.SEQUENCE_ENDED, clip_index)
