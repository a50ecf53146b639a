"""SyncContext — clip sync 공유 상태.

ClipSyncEngine이 생성하여 SeekController / ProgressController에 주입한다.
Controller는 값을 캡처하지 않고 항상 self.ctx 를 통해 최신 상태를 읽는다.
"""

from __future__ import annotations

import time
from typing import Callable, Protocol, Sequence

from src.models.clip import Clip, ClipRange, compute_ranges, total_virtual_duration
from src.models.playback_state import PlaybackState, idle
from src.services.settings_manager import SyncConfig
from src.services.time_mapper import actual_to_virtual


class ExternalPlayer(Protocol):
    """Commands the engine sends to the media player. Fire-and-forget."""

    def seek_to(self, seconds: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class SyncContext:
    """Controller들이 공유하는 재생 상태 컨테이너."""

    def __init__(
        self,
        player: ExternalPlayer | None = None,
        config: SyncConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # ---- 외부 플레이어 (None이면 명령은 버려진다) ----
        self.player = player
        self.config = config or SyncConfig()
        self.clock = clock

        # ---- 클립 / 가상 타임라인 ----
        self.clips: tuple[Clip, ...] = ()
        self.ranges: list[ClipRange] = []

        # ---- 재생 공유 상태 ----
        self.state: PlaybackState = idle()
        self.current_actual_time: float = 0.0
        self.last_seek_stamp: float | None = None
        self.is_playing: bool = False

        # ---- 옵저버 콜백 (ClipSyncEngine이 시그널로 연결) ----
        self.notify_clip_index: Callable[[int], None] = lambda index: None
        self.notify_virtual_mode: Callable[[bool], None] = lambda enabled: None
        self.notify_sequence_finished: Callable[[], None] = lambda: None

    # ---- 클립 ----

    def replace_clips(self, clips: Sequence[Clip]) -> None:
        self.clips = tuple(clips)
        self.ranges = compute_ranges(self.clips)

    @property
    def total_virtual_duration(self) -> float:
        return total_virtual_duration(self.ranges)

    @property
    def current_virtual_time(self) -> float:
        if not self.clips:
            return 0.0
        return actual_to_virtual(self.current_actual_time, self.ranges)

    # ---- 상태 ----

    def set_state(self, state: PlaybackState, always_notify_index: bool = False) -> None:
        """Store *state* first, then notify observers of what changed."""
        previous = self.state
        self.state = state
        if state.is_virtual_mode != previous.is_virtual_mode:
            self.notify_virtual_mode(state.is_virtual_mode)
        if always_notify_index or state.clip_index != previous.clip_index:
            self.notify_clip_index(state.clip_index)

    def stamp_seek(self) -> None:
        self.last_seek_stamp = self.clock()

    def in_seek_grace(self) -> bool:
        """True while progress reports may still predate the last seek."""
        if self.last_seek_stamp is None:
            return False
        return self.clock() - self.last_seek_stamp < self.config.seek_grace_seconds
